import asyncio

import httpx
import pytest

from airalert.core.errors import GeocodeFailure
from airalert.services.geocoding import NominatimReverseGeocoder

GEOCODER_URL = "https://geocoder.test/reverse"


def _reverse(handler, language="en"):
    geocoder = NominatimReverseGeocoder(
        GEOCODER_URL,
        "airalert-tests/1.0",
        language=language,
        transport=httpx.MockTransport(handler),
    )
    return asyncio.run(geocoder.reverse_geocode(50.85, 4.35))


def test_display_name_is_returned():
    requests = []

    def handler(request):
        requests.append(request)
        return httpx.Response(200, json={"display_name": "Grand-Place, Brussels"})

    assert _reverse(handler, language="ru") == "Grand-Place, Brussels"

    request = requests[0]
    assert request.url.params["format"] == "jsonv2"
    assert request.url.params["lat"] == "50.85"
    assert request.url.params["lon"] == "4.35"
    assert request.headers["User-Agent"] == "airalert-tests/1.0"
    assert request.headers["Accept-Language"] == "ru"


def test_error_answer_fails():
    def handler(request):
        return httpx.Response(200, json={"error": "Unable to geocode"})

    with pytest.raises(GeocodeFailure, match="Unable to geocode"):
        _reverse(handler)


def test_http_error_fails():
    def handler(request):
        return httpx.Response(429)

    with pytest.raises(GeocodeFailure):
        _reverse(handler)

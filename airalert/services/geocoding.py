import logging
from typing import Optional

import httpx

from airalert.core.errors import GeocodeFailure

logger = logging.getLogger(__name__)


class NominatimReverseGeocoder:
    """Reverse geocoding against a Nominatim compatible endpoint"""

    def __init__(
        self,
        api_url: str,
        user_agent: str,
        language: str = "en",
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.api_url = api_url
        self.user_agent = user_agent
        self.language = language
        self.timeout = timeout
        self._transport = transport

    async def reverse_geocode(self, latitude: float, longitude: float) -> str:
        """
        Get a human readable label for a coordinate

        Args:
            latitude: Location latitude
            longitude: Location longitude

        Returns:
            Display name of the place

        Raises:
            GeocodeFailure: If no label could be obtained
        """
        headers = {
            "User-Agent": self.user_agent,
            "Accept-Language": self.language,
        }
        params = {
            "format": "jsonv2",
            "lat": latitude,
            "lon": longitude,
        }

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.get(self.api_url, params=params, headers=headers)
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPError as e:
            logger.error(f"HTTP error reverse geocoding ({latitude:.4f}, {longitude:.4f}): {e}")
            raise GeocodeFailure(str(e)) from e
        except ValueError as e:
            raise GeocodeFailure("Invalid JSON from geocoder") from e

        label = data.get("display_name") if isinstance(data, dict) else None
        if not label:
            error = data.get("error") if isinstance(data, dict) else None
            raise GeocodeFailure(error or "Geocoder returned no display name")

        return label

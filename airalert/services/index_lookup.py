import logging
from typing import Any, Dict, Optional

import httpx

from airalert.core.errors import LookupFailure, UnsupportedPollutant
from airalert.core.models import Pollutant, PollutantReading
from airalert.utils.air_quality import MAX_CATEGORY, classify_readings

logger = logging.getLogger(__name__)


class HttpIndexLookupClient:
    """Client for the remote air quality index service"""

    def __init__(
        self,
        api_url: str,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.api_url = api_url
        self.timeout = timeout
        self._transport = transport

    async def lookup_index(self, latitude: float, longitude: float) -> int:
        """
        Get the index category for a coordinate

        The service either answers with a ready category ({"index": 6})
        or with raw concentrations ({"pm25": 41.0, "o3": 90.0}), in which
        case the worst pollutant decides the category.

        Args:
            latitude: Location latitude
            longitude: Location longitude

        Returns:
            Index category (1-10)

        Raises:
            LookupFailure: If the service is unreachable or the answer is unusable
        """
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.get(
                    self.api_url,
                    params={"latitude": latitude, "longitude": longitude}
                )
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPError as e:
            logger.error(f"HTTP error fetching index for ({latitude:.4f}, {longitude:.4f}): {e}")
            raise LookupFailure(str(e)) from e
        except ValueError as e:
            logger.error(f"Invalid JSON from index service: {e}")
            raise LookupFailure("Invalid JSON from index service") from e

        category = self._parse_category(data)
        logger.debug(f"Index at ({latitude:.4f}, {longitude:.4f}): {category}")
        return category

    @staticmethod
    def _parse_category(data: Any) -> int:
        if not isinstance(data, dict):
            raise LookupFailure(f"Unexpected index response format: {type(data)}")

        index = data.get("index")
        if index is not None:
            try:
                category = int(index)
            except (TypeError, ValueError):
                raise LookupFailure(f"Non-numeric index: {index!r}") from None
            if not 1 <= category <= MAX_CATEGORY:
                raise LookupFailure(f"Index out of range: {category}")
            return category

        readings = _readings_from(data)
        if not readings:
            raise LookupFailure("Index response has neither index nor pollutant values")
        try:
            return classify_readings(readings)
        except UnsupportedPollutant as e:
            raise LookupFailure(str(e)) from e


def _readings_from(data: Dict[str, Any]) -> list[PollutantReading]:
    readings = []
    for pollutant in Pollutant:
        value = data.get(pollutant.value)
        if value is None:
            continue
        try:
            readings.append(PollutantReading(pollutant, float(value)))
        except (TypeError, ValueError):
            logger.warning(f"Skipping non-numeric {pollutant.value} value: {value!r}")
    return readings

"""One personal alert check cycle"""
import asyncio
import logging
from typing import Optional

from airalert.core.cancel_token import CancelToken
from airalert.core.errors import AlertError, EnumerationFailure, LocationError
from airalert.core.locales import get_text
from airalert.core.models import AlertSettings, PersonalAlert, SavedLocation
from airalert.core.ports import (
    AlertDispatcher,
    IndexLookupClient,
    PositionProvider,
    ReverseGeocodeClient,
    SavedLocationProvider,
)
from airalert.services.alert_settings import AlertSettingsStore

logger = logging.getLogger(__name__)


def _log_failure(what: str, error: BaseException):
    """Expected collaborator failures are warnings, anything else is a bug"""
    if isinstance(error, AlertError):
        logger.warning(f"{what} failed: {error}")
    else:
        logger.error(f"{what} failed unexpectedly: {error!r}", exc_info=error)


class AlertEvaluator:
    """
    Gathers index categories for the current and saved locations

    Both checks run concurrently; every lookup settles (result or failure)
    before the alerts are merged. Failures only remove that location's
    contribution, they never abort the cycle.
    """

    def __init__(
        self,
        settings: AlertSettingsStore,
        positions: PositionProvider,
        locations: SavedLocationProvider,
        index_client: IndexLookupClient,
        geocoder: ReverseGeocodeClient,
        dispatcher: AlertDispatcher,
        lang: str = "en"
    ):
        self._settings = settings
        self._positions = positions
        self._locations = locations
        self._index_client = index_client
        self._geocoder = geocoder
        self._dispatcher = dispatcher
        self.lang = lang

    async def run_cycle(self, cancel_token: Optional[CancelToken] = None) -> list[PersonalAlert]:
        """
        Run one check cycle and dispatch the result

        Args:
            cancel_token: Token cancelled when alerts get deactivated; a
                cancelled cycle discards its result instead of dispatching

        Returns:
            Alerts at or above the threshold, current location first
        """
        settings = await self._settings.snapshot()
        logger.info(f"Starting alert check (level {settings.threshold_level})")

        current, saved = await asyncio.gather(
            self.check_current_location(settings),
            self.check_saved_locations(settings),
        )

        alerts = []
        if current is not None and current.index_category >= settings.threshold_level:
            alerts.append(current)
        alerts.extend(saved)

        if cancel_token is not None and cancel_token.cancelled:
            logger.info(f"Alerts deactivated during check, discarding {len(alerts)} alert(s)")
            return alerts

        logger.info(f"Alert check completed: {len(alerts)} alert(s)")
        await self._dispatcher.dispatch(alerts)
        return alerts

    async def check_current_location(self, settings: AlertSettings) -> Optional[PersonalAlert]:
        """
        Build an alert for the device position

        The alert is built whatever its category; the threshold is applied
        when merging.

        Returns:
            Alert for the current location, or None if it can't be determined
        """
        try:
            position = await self._positions.current_position()
        except LocationError as e:
            logger.info(f"Skipping current location: {e}")
            return None
        except Exception as e:
            _log_failure("Position resolution", e)
            return None

        category, label = await asyncio.gather(
            self._index_client.lookup_index(position.latitude, position.longitude),
            self._geocoder.reverse_geocode(position.latitude, position.longitude),
            return_exceptions=True,
        )

        if isinstance(category, BaseException):
            _log_failure("Index lookup for current location", category)
            return None

        if isinstance(label, BaseException):
            _log_failure("Reverse geocoding", label)
            label = None

        return PersonalAlert(
            index_category=category,
            location_label=label or get_text(self.lang, "current_location"),
            sensitive_group=settings.sensitive_group,
        )

    async def check_saved_locations(self, settings: AlertSettings) -> list[PersonalAlert]:
        """
        Look up every saved location concurrently

        Returns:
            Alerts for locations at or above the threshold, in saved order
        """
        try:
            locations = await self._locations.saved_locations()
        except EnumerationFailure as e:
            logger.warning(f"Skipping saved locations: {e}")
            return []
        except Exception as e:
            _log_failure("Listing saved locations", e)
            return []

        if not locations:
            return []

        results = await asyncio.gather(
            *(self._lookup(location) for location in locations),
            return_exceptions=True,
        )

        alerts = []
        for location, category in zip(locations, results):
            if isinstance(category, BaseException):
                _log_failure(f"Index lookup for {location.label}", category)
                continue

            logger.debug(f"{location.label}: index {category}")
            if category >= settings.threshold_level:
                alerts.append(PersonalAlert(
                    index_category=category,
                    location_label=location.label,
                    sensitive_group=settings.sensitive_group,
                ))

        return alerts

    async def _lookup(self, location: SavedLocation) -> int:
        coordinates = location.coordinates
        return await self._index_client.lookup_index(coordinates.latitude, coordinates.longitude)

"""Persisted personal alert settings"""
import logging
from typing import Any

from airalert.core.models import AlertSettings
from airalert.core.ports import KeyValueStore

logger = logging.getLogger(__name__)

DEFAULT_ALERT_PERIOD_MINUTES = 60
DEFAULT_ALERT_LEVEL = 5
DEFAULT_ALERT_SENSITIVE = False

ALERT_ACTIVE_KEY = "personal.alert.active"
ALERT_PERIOD_KEY = "personal.alert.period"
ALERT_LEVEL_KEY = "personal.alert.level"
ALERT_SENSITIVE_KEY = "personal.alert.sensitive"


class AlertSettingsStore:
    """
    Active flag, check period, threshold level and sensitive-group flag

    Values are read straight from the key/value store on every call and
    fall back to the defaults when absent. Setters do not validate ranges.
    """

    def __init__(self, store: KeyValueStore):
        self._store = store

    async def _load(self, key: str, default: Any) -> Any:
        value = await self._store.load(key)
        return default if value is None else value

    async def is_active(self) -> bool:
        return bool(await self._load(ALERT_ACTIVE_KEY, False))

    async def set_active(self, active: bool):
        await self._store.save(ALERT_ACTIVE_KEY, bool(active))
        logger.info(f"Personal alerts {'activated' if active else 'deactivated'}")

    async def get_period(self) -> int:
        return int(await self._load(ALERT_PERIOD_KEY, DEFAULT_ALERT_PERIOD_MINUTES))

    async def set_period(self, minutes: int):
        await self._store.save(ALERT_PERIOD_KEY, minutes)

    async def get_threshold(self) -> int:
        return int(await self._load(ALERT_LEVEL_KEY, DEFAULT_ALERT_LEVEL))

    async def set_threshold(self, level: int):
        await self._store.save(ALERT_LEVEL_KEY, level)

    async def get_sensitive(self) -> bool:
        return bool(await self._load(ALERT_SENSITIVE_KEY, DEFAULT_ALERT_SENSITIVE))

    async def set_sensitive(self, sensitive: bool):
        await self._store.save(ALERT_SENSITIVE_KEY, bool(sensitive))

    async def snapshot(self) -> AlertSettings:
        """Read all settings at once for one check cycle"""
        return AlertSettings(
            active=await self.is_active(),
            period_minutes=await self.get_period(),
            threshold_level=await self.get_threshold(),
            sensitive_group=await self.get_sensitive(),
        )

import asyncio
import os

import pytest

# Settings are read lazily by the control API; give it a complete environment
os.environ.setdefault("BOT_TOKEN", "123456:TEST")
os.environ.setdefault("ALERT_CHAT_ID", "42")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("REDIS_URL", "redis://localhost:6379/0")
os.environ.setdefault("INDEX_API_URL", "https://index.test/v1/index")
os.environ.setdefault("ADMIN_USERNAME", "admin")
os.environ.setdefault("ADMIN_PASSWORD", "secret")

from airalert.core.models import Coordinates, SavedLocation  # noqa: E402
from airalert.services.alert_settings import AlertSettingsStore  # noqa: E402


async def settle(rounds: int = 10):
    """Let pending tasks run until they block again"""
    for _ in range(rounds):
        await asyncio.sleep(0)


class MemoryStore:
    def __init__(self, values=None):
        self.values = dict(values or {})

    async def load(self, key):
        return self.values.get(key)

    async def save(self, key, value, expire=None):
        self.values[key] = value


class FakeHost:
    def __init__(self, background=False):
        self.enabled = False
        self.background = background
        self.listeners = []
        self.defaults = None

    def enable(self):
        self.enabled = True

    def disable(self):
        self.enabled = False

    def is_active(self):
        return self.enabled and self.background

    def subscribe(self, listener):
        self.listeners.append(listener)

    def set_defaults(self, title, text):
        self.defaults = (title, text)


class FakePositions:
    def __init__(self, position=None, error=None):
        self.position = position
        self.error = error

    async def current_position(self):
        if self.error is not None:
            raise self.error
        return self.position


class FakeLocations:
    def __init__(self, locations=(), error=None):
        self.locations = list(locations)
        self.error = error

    async def saved_locations(self):
        if self.error is not None:
            raise self.error
        return list(self.locations)


class FakeIndexClient:
    """Answers per coordinate; values may be exceptions to raise"""

    def __init__(self, categories):
        self.categories = categories
        self.calls = []

    async def lookup_index(self, latitude, longitude):
        self.calls.append((latitude, longitude))
        result = self.categories[(latitude, longitude)]
        if isinstance(result, BaseException):
            raise result
        return result


class FakeGeocoder:
    def __init__(self, label="Grand-Place, Brussels", error=None):
        self.label = label
        self.error = error

    async def reverse_geocode(self, latitude, longitude):
        if self.error is not None:
            raise self.error
        return self.label


class RecordingDispatcher:
    def __init__(self):
        self.dispatched = []

    async def dispatch(self, alerts):
        self.dispatched.append(list(alerts))


class RecordingNotifications:
    def __init__(self):
        self.scheduled = []

    async def schedule(self, notification):
        self.scheduled.append(notification)


class RecordingPresenter:
    def __init__(self):
        self.presented = []

    async def present_alerts(self, alerts):
        self.presented.append(list(alerts))


class ManualClock:
    """Stand-in for asyncio.sleep that only wakes up on advance()"""

    def __init__(self):
        self.sleeps = []
        self._waiters = []

    @property
    def pending(self) -> int:
        return sum(1 for fut in self._waiters if not fut.done())

    async def sleep(self, seconds):
        self.sleeps.append(seconds)
        future = asyncio.get_running_loop().create_future()
        self._waiters.append(future)
        await future

    async def advance(self):
        await settle()
        waiters, self._waiters = self._waiters, []
        for future in waiters:
            if not future.done():
                future.set_result(None)
        await settle()


def saved(label, latitude, longitude, location_id=None):
    return SavedLocation(label=label, coordinates=Coordinates(latitude, longitude), id=location_id)


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def alert_settings(store):
    return AlertSettingsStore(store)

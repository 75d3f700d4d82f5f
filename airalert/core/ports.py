"""
Collaborator contracts for the alert engine

The evaluator, lifecycle controller and dispatcher only depend on these
protocols; Redis, SQLAlchemy, httpx and aiogram implementations live in
airalert.services and airalert.utils.
"""
from __future__ import annotations

from typing import Any, Callable, Optional, Protocol, runtime_checkable

from airalert.core.models import AlertNotification, Coordinates, PersonalAlert, SavedLocation
from airalert.core.state_machine import LifecycleEvent


@runtime_checkable
class KeyValueStore(Protocol):
    """Scalar persistence"""

    async def load(self, key: str) -> Optional[Any]:
        """Return the stored value or None when absent."""

    async def save(self, key: str, value: Any) -> None:
        """Store a JSON-serializable value."""


@runtime_checkable
class PositionProvider(Protocol):
    async def current_position(self) -> Coordinates:
        """Resolve the device position; raises a LocationError subclass."""


@runtime_checkable
class SavedLocationProvider(Protocol):
    async def saved_locations(self) -> list[SavedLocation]:
        """List saved locations; raises EnumerationFailure."""


@runtime_checkable
class IndexLookupClient(Protocol):
    async def lookup_index(self, latitude: float, longitude: float) -> int:
        """Return the index category 1..10; raises LookupFailure."""


@runtime_checkable
class ReverseGeocodeClient(Protocol):
    async def reverse_geocode(self, latitude: float, longitude: float) -> str:
        """Return a display label; raises GeocodeFailure."""


@runtime_checkable
class BackgroundHost(Protocol):
    """Host facility keeping the process alive while not foregrounded"""

    def enable(self) -> None:
        """Request background execution."""

    def disable(self) -> None:
        """Release background execution."""

    def is_active(self) -> bool:
        """True while the host runs in background mode."""

    def subscribe(self, listener: Callable[[LifecycleEvent], None]) -> None:
        """Register a listener for enter/exit/capability signals."""

    def set_defaults(self, title: str, text: str) -> None:
        """Set the persistent background notification text."""


@runtime_checkable
class NotificationFacility(Protocol):
    async def schedule(self, notification: AlertNotification) -> None:
        """Deliver a system notification."""


@runtime_checkable
class AlertPresenter(Protocol):
    async def present_alerts(self, alerts: list[PersonalAlert]) -> None:
        """Show alerts inside the app."""


@runtime_checkable
class AlertDispatcher(Protocol):
    async def dispatch(self, alerts: list[PersonalAlert]) -> None:
        """Route the alert set to a delivery channel."""

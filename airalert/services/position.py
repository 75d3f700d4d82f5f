"""Current position reported by the host device"""
import asyncio
import logging
import time
from typing import Callable, Optional

from airalert.core.errors import PermissionDenied, PositionTimeout, PositionUnavailable
from airalert.core.models import Coordinates

logger = logging.getLogger(__name__)


class ReportedPositionSource:
    """
    Single-shot position provider fed by location reports

    The device pushes fixes (Telegram live/static location, control API).
    current_position() answers with the latest fix while it is fresh and
    otherwise waits for the next report.
    """

    def __init__(
        self,
        enabled: bool = True,
        max_age_seconds: float = 900,
        timeout_seconds: float = 30.0,
        clock: Callable[[], float] = time.monotonic
    ):
        self.enabled = enabled
        self.max_age_seconds = max_age_seconds
        self.timeout_seconds = timeout_seconds
        self._clock = clock
        self._granted = True
        self._fix: Optional[Coordinates] = None
        self._fix_at: Optional[float] = None
        self._new_fix = asyncio.Event()

    @property
    def permission_granted(self) -> bool:
        return self._granted

    def grant(self):
        self._granted = True
        logger.info("Position permission granted")

    def revoke(self):
        """Revoke permission and forget the last fix"""
        self._granted = False
        self._fix = None
        self._fix_at = None
        logger.info("Position permission revoked")

    def report(self, latitude: float, longitude: float):
        """Record a new position fix"""
        if not self._granted:
            logger.debug("Ignoring position report without permission")
            return
        self._fix = Coordinates(latitude, longitude)
        self._fix_at = self._clock()
        # Wake up pending waiters and start over for the next report
        self._new_fix.set()
        self._new_fix = asyncio.Event()
        logger.debug(f"Position reported: ({latitude:.4f}, {longitude:.4f})")

    def _fresh_fix(self) -> Optional[Coordinates]:
        if self._fix is None or self._fix_at is None:
            return None
        if self._clock() - self._fix_at > self.max_age_seconds:
            return None
        return self._fix

    async def current_position(self) -> Coordinates:
        """
        Resolve the current position

        Returns:
            Latest fresh coordinates

        Raises:
            PositionUnavailable: If position tracking is disabled
            PermissionDenied: If the user revoked position access
            PositionTimeout: If no fresh fix arrives within the timeout
        """
        if not self.enabled:
            raise PositionUnavailable("Position tracking is disabled")
        if not self._granted:
            raise PermissionDenied("Position access was revoked")

        fix = self._fresh_fix()
        if fix is not None:
            return fix

        try:
            await asyncio.wait_for(self._new_fix.wait(), timeout=self.timeout_seconds)
        except asyncio.TimeoutError:
            raise PositionTimeout(
                f"No position fix within {self.timeout_seconds}s"
            ) from None

        if self._fix is None:
            raise PermissionDenied("Position access was revoked")
        return self._fix

"""Personal alert activation lifecycle and periodic timer"""
import asyncio
import logging
from typing import Awaitable, Callable, Optional

from airalert.core.cancel_token import CancelToken
from airalert.core.locales import get_text
from airalert.core.models import PersonalAlert
from airalert.core.ports import BackgroundHost
from airalert.core.state_machine import LifecycleEvent, LifecycleState, LifecycleStateMachine
from airalert.services.alert_settings import AlertSettingsStore
from airalert.services.evaluator import AlertEvaluator

logger = logging.getLogger(__name__)

# Shortest timer interval; stored periods below one minute are not honoured
MIN_TIMER_INTERVAL_SECONDS = 60


class AlertLifecycleController:
    """
    Gates the periodic alert timer

    The timer only runs in the RUNNING state, i.e. while alerts are active
    and the host is in background mode. Host signals arrive on a queue and
    are applied one at a time, together with activate/deactivate calls.
    """

    def __init__(
        self,
        settings: AlertSettingsStore,
        host: BackgroundHost,
        evaluator: AlertEvaluator,
        single_flight: bool = True,
        lang: str = "en",
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep
    ):
        self._settings = settings
        self._host = host
        self._evaluator = evaluator
        self.single_flight = single_flight
        self.lang = lang
        self._sleep = sleep

        self._machine = LifecycleStateMachine()
        self._events: asyncio.Queue = asyncio.Queue()
        self._lock = asyncio.Lock()
        self._subscribed = False
        self._cancel_token = CancelToken()
        self._timer: Optional[asyncio.Task] = None
        self._cycles: set[asyncio.Task] = set()
        self.period_minutes: Optional[int] = None

    @property
    def state(self) -> LifecycleState:
        return self._machine.state

    @property
    def timer_armed(self) -> bool:
        return self._timer is not None and not self._timer.done()

    @property
    def cycle_running(self) -> bool:
        return any(not task.done() for task in self._cycles)

    async def init(self):
        """Re-activate alerts persisted as active"""
        if await self._settings.is_active():
            logger.info("Personal alerts were active, re-activating")
            await self.activate()

    async def activate(self):
        """Persist the active flag and arm for background mode"""
        await self._settings.set_active(True)

        if not self._subscribed:
            self._host.subscribe(self._events.put_nowait)
            self._subscribed = True

        period = await self._settings.get_period()
        self._host.set_defaults(
            get_text(self.lang, "alerts_background_title"),
            get_text(self.lang, "alerts_background_text", period=period),
        )
        self._host.enable()

        await self.handle(LifecycleEvent.ACTIVATE)
        if self._host.is_active():
            await self.handle(LifecycleEvent.BACKGROUND_ENTER)

    async def deactivate(self):
        """
        Persist the inactive flag, stop the timer and release background mode

        The timer is stopped even when persisting the flag fails; the
        storage error is raised afterwards.
        """
        try:
            await self._settings.set_active(False)
        finally:
            await self.handle(LifecycleEvent.DEACTIVATE)
            self._host.disable()

    async def check_now(self) -> Optional[list[PersonalAlert]]:
        """
        Run one check cycle immediately

        The cycle is tracked like a timer cycle, so with single-flight
        enabled it never overlaps one.

        Returns:
            Dispatched alerts, or None if a cycle was already running
        """
        if self.single_flight and self.cycle_running:
            logger.warning("Alert check already running, manual check skipped")
            return None
        task = asyncio.create_task(self._evaluator.run_cycle())
        self._track(task)
        return await task

    async def run(self):
        """Apply host signals until cancelled"""
        while True:
            event = await self._events.get()
            try:
                await self.handle(event)
            except Exception as e:
                logger.error(f"Failed to apply lifecycle event {event.name}: {e}", exc_info=True)

    async def handle(self, event: LifecycleEvent) -> LifecycleState:
        """
        Apply one lifecycle event

        Args:
            event: Activation command or host signal

        Returns:
            State after the transition
        """
        async with self._lock:
            previous = self._machine.state
            current = self._machine.transition(event)

            if previous == LifecycleState.INACTIVE and current != LifecycleState.INACTIVE:
                self._cancel_token = CancelToken()

            if previous == LifecycleState.RUNNING and current != LifecycleState.RUNNING:
                self._cancel_timer()

            if current == LifecycleState.INACTIVE:
                self._cancel_token.cancel()

            if current == LifecycleState.RUNNING and previous != LifecycleState.RUNNING:
                await self._arm_timer()

            if previous != current:
                logger.info(f"Personal alerts {previous.name} -> {current.name} ({event.name})")
            return current

    async def shutdown(self):
        """Stop timer and in-flight cycle without changing persisted state"""
        self._cancel_timer()
        cycles = list(self._cycles)
        for task in cycles:
            task.cancel()
        if cycles:
            await asyncio.gather(*cycles, return_exceptions=True)
        self._cycles.clear()

    async def _arm_timer(self):
        self._cancel_timer()
        # Period is read once per arm; changes apply on the next arm
        self.period_minutes = await self._settings.get_period()
        self._timer = asyncio.create_task(self._run_timer(self.period_minutes, self._cancel_token))
        logger.info(f"Alert timer armed every {self.period_minutes} minute(s)")

    def _cancel_timer(self):
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
            logger.info("Alert timer cancelled")

    async def _run_timer(self, period_minutes: int, token: CancelToken):
        interval = period_minutes * 60
        if interval < MIN_TIMER_INTERVAL_SECONDS:
            logger.warning(
                f"Alert period of {period_minutes} minute(s) is too short, "
                f"checking every {MIN_TIMER_INTERVAL_SECONDS}s instead"
            )
            interval = MIN_TIMER_INTERVAL_SECONDS
        while True:
            await self._sleep(interval)
            self._on_tick(token)

    def _on_tick(self, token: CancelToken):
        if token.cancelled:
            return
        if self.single_flight and self.cycle_running:
            logger.warning("Previous alert check still running, skipping this tick")
            return
        self._track(asyncio.create_task(self._run_cycle(token)))

    def _track(self, task: asyncio.Task):
        self._cycles.add(task)
        task.add_done_callback(self._cycles.discard)

    async def _run_cycle(self, token: CancelToken):
        try:
            await self._evaluator.run_cycle(token)
        except Exception as e:
            logger.error(f"Alert check failed: {e}", exc_info=True)

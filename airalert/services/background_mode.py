"""In-process background execution host"""
import logging
from typing import Callable

from airalert.core.state_machine import LifecycleEvent

logger = logging.getLogger(__name__)


class BackgroundMode:
    """
    Background-mode facility driven by the device

    The device reports whether it is foregrounded and whether it may keep
    running in the background; signals are forwarded to subscribers only
    while background mode is enabled.
    """

    def __init__(self):
        self.enabled = False
        self.title = ""
        self.text = ""
        self._in_background = False
        self._capable = True
        self._listeners: list[Callable[[LifecycleEvent], None]] = []

    def enable(self):
        self.enabled = True

    def disable(self):
        self.enabled = False

    def is_active(self) -> bool:
        return self.enabled and self._capable and self._in_background

    def subscribe(self, listener: Callable[[LifecycleEvent], None]):
        self._listeners.append(listener)

    def set_defaults(self, title: str, text: str):
        self.title = title
        self.text = text

    def _emit(self, event: LifecycleEvent):
        if not self.enabled:
            logger.debug(f"Background mode disabled, dropping {event.name}")
            return
        for listener in self._listeners:
            listener(event)

    def enter_background(self):
        """Device moved the app to the background"""
        if self._in_background:
            return
        self._in_background = True
        logger.info("Host entered background mode")
        if self._capable:
            self._emit(LifecycleEvent.BACKGROUND_ENTER)

    def exit_background(self):
        """Device brought the app to the foreground"""
        if not self._in_background:
            return
        self._in_background = False
        logger.info("Host left background mode")
        if self._capable:
            self._emit(LifecycleEvent.BACKGROUND_EXIT)

    def set_capability(self, available: bool):
        """Device lost or regained background execution (sleep, battery saver)"""
        if available == self._capable:
            return
        self._capable = available
        if available:
            logger.info("Background execution capability regained")
            self._emit(LifecycleEvent.CAPABILITY_REGAINED)
            if self._in_background:
                self._emit(LifecycleEvent.BACKGROUND_ENTER)
        else:
            logger.warning("Background execution capability lost")
            self._emit(LifecycleEvent.CAPABILITY_LOST)

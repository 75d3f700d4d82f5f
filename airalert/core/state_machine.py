"""State machine gating the periodic alert timer"""
from __future__ import annotations

from enum import Enum, auto
import logging

logger = logging.getLogger(__name__)


class LifecycleState(Enum):
    INACTIVE = auto()
    ARMED = auto()
    RUNNING = auto()
    SUSPENDED = auto()


class LifecycleEvent(Enum):
    ACTIVATE = auto()
    DEACTIVATE = auto()
    BACKGROUND_ENTER = auto()
    BACKGROUND_EXIT = auto()
    CAPABILITY_LOST = auto()
    CAPABILITY_REGAINED = auto()


_TRANSITIONS = {
    LifecycleState.INACTIVE: {
        LifecycleEvent.ACTIVATE: LifecycleState.ARMED,
        LifecycleEvent.DEACTIVATE: LifecycleState.INACTIVE,
    },
    LifecycleState.ARMED: {
        LifecycleEvent.ACTIVATE: LifecycleState.ARMED,
        LifecycleEvent.BACKGROUND_ENTER: LifecycleState.RUNNING,
        LifecycleEvent.CAPABILITY_LOST: LifecycleState.SUSPENDED,
        LifecycleEvent.DEACTIVATE: LifecycleState.INACTIVE,
    },
    LifecycleState.RUNNING: {
        LifecycleEvent.ACTIVATE: LifecycleState.RUNNING,
        LifecycleEvent.BACKGROUND_EXIT: LifecycleState.ARMED,
        LifecycleEvent.CAPABILITY_LOST: LifecycleState.SUSPENDED,
        LifecycleEvent.DEACTIVATE: LifecycleState.INACTIVE,
    },
    LifecycleState.SUSPENDED: {
        LifecycleEvent.ACTIVATE: LifecycleState.SUSPENDED,
        LifecycleEvent.CAPABILITY_REGAINED: LifecycleState.ARMED,
        LifecycleEvent.DEACTIVATE: LifecycleState.INACTIVE,
    },
}


class LifecycleStateMachine:
    def __init__(self):
        self.state = LifecycleState.INACTIVE

    def transition(self, event: LifecycleEvent) -> LifecycleState:
        allowed = _TRANSITIONS.get(self.state, {})
        if event not in allowed:
            logger.warning("Ignoring lifecycle event %s in state %s", event.name, self.state.name)
            return self.state
        self.state = allowed[event]
        return self.state

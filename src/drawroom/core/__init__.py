"""Core framework components for DRAWROOM."""

from .state import SpinPhase, RotationState, SelectionState, PhaseMachine
from .events import EventBus, Event, EventType
from .errors import (
    WheelError,
    InvalidTarget,
    InvalidState,
    RoomServiceError,
    RoomConflictError,
)

__all__ = [
    "SpinPhase",
    "RotationState",
    "SelectionState",
    "PhaseMachine",
    "EventBus",
    "Event",
    "EventType",
    "WheelError",
    "InvalidTarget",
    "InvalidState",
    "RoomServiceError",
    "RoomConflictError",
]

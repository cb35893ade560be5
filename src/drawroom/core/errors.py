"""Error taxonomy for DRAWROOM.

Wheel errors are raised by the spin controller when a caller breaks its
contract. Room errors are raised by the Room Service client and are
turned into user-facing messages by the orchestrator.
"""

from typing import Any


class WheelError(Exception):
    """Base class for wheel core errors."""


class InvalidTarget(WheelError):
    """Requested winner id is not among the current wheel items."""

    def __init__(self, target_id: Any) -> None:
        self.target_id = target_id
        super().__init__(f"Unknown wheel target: {target_id!r}")


class InvalidState(WheelError):
    """Operation attempted in a phase that forbids it."""

    def __init__(self, phase: Any, operation: str) -> None:
        self.phase = phase
        self.operation = operation
        name = getattr(phase, "name", phase)
        super().__init__(f"Cannot {operation} while {name}")


class RoomServiceError(Exception):
    """Room Service request failed."""

    def __init__(self, message: str, status: int | None = None) -> None:
        self.message = message
        self.status = status
        super().__init__(message)


class RoomConflictError(RoomServiceError):
    """Room Service refused a mutation because the draw is finalized (HTTP 409)."""

    def __init__(self, message: str = "Draw already finalized") -> None:
        super().__init__(message, status=409)

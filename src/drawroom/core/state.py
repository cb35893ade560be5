"""
Spin phase state machine for the DRAWROOM wheel.

Phases:
    IDLE: Wheel at rest, nothing selected
    SPINNING: A spin is in flight toward a precomputed target
    SETTLED: Spin finished, winner slice under the pointer
"""

from enum import Enum, auto
from dataclasses import dataclass
from typing import Callable
import logging

logger = logging.getLogger(__name__)


class SpinPhase(Enum):
    """Wheel lifecycle phases."""
    IDLE = auto()
    SPINNING = auto()
    SETTLED = auto()


@dataclass
class RotationState:
    """Committed wheel orientation.

    Attributes:
        current_deg: Rotation in degrees, unbounded while spins chain
        phase: Current lifecycle phase
    """
    current_deg: float = 0.0
    phase: SpinPhase = SpinPhase.IDLE


@dataclass
class SelectionState:
    """Winner currently shown by the wheel."""
    selected_id: str | None = None


PhaseListener = Callable[[SpinPhase, SpinPhase], None]


class PhaseMachine:
    """
    Guards phase transitions for the spin controller.

    Reset is always allowed and is handled by reset() rather than the
    transition table.
    """

    # Valid phase transitions
    VALID_TRANSITIONS: list[tuple[SpinPhase, SpinPhase]] = [
        (SpinPhase.IDLE, SpinPhase.SPINNING),
        (SpinPhase.SETTLED, SpinPhase.SPINNING),  # Direct re-spin
        (SpinPhase.SPINNING, SpinPhase.SETTLED),
    ]

    def __init__(self, initial_phase: SpinPhase = SpinPhase.IDLE) -> None:
        self._phase = initial_phase
        self._listeners: list[PhaseListener] = []
        self._valid_transitions = set(self.VALID_TRANSITIONS)
        logger.debug(f"PhaseMachine initialized with phase: {initial_phase.name}")

    @property
    def phase(self) -> SpinPhase:
        """Get current phase."""
        return self._phase

    def can_transition(self, to_phase: SpinPhase) -> bool:
        """Check if transition to given phase is valid."""
        return (self._phase, to_phase) in self._valid_transitions

    def transition(self, to_phase: SpinPhase) -> bool:
        """
        Attempt to move to a new phase.

        Args:
            to_phase: Target phase

        Returns:
            True if transition happened, False if it is not allowed
        """
        if not self.can_transition(to_phase):
            logger.warning(
                f"Invalid transition: {self._phase.name} -> {to_phase.name}"
            )
            return False

        old_phase = self._phase
        self._phase = to_phase
        logger.debug(f"Phase transition: {old_phase.name} -> {to_phase.name}")
        self._notify(old_phase, to_phase)
        return True

    def reset(self) -> None:
        """Return to IDLE from any phase."""
        old_phase = self._phase
        self._phase = SpinPhase.IDLE
        if old_phase != SpinPhase.IDLE:
            self._notify(old_phase, SpinPhase.IDLE)

    def add_listener(self, callback: PhaseListener) -> None:
        """Add a phase change listener."""
        self._listeners.append(callback)

    def remove_listener(self, callback: PhaseListener) -> None:
        """Remove a phase change listener."""
        if callback in self._listeners:
            self._listeners.remove(callback)

    def _notify(self, old_phase: SpinPhase, new_phase: SpinPhase) -> None:
        for listener in list(self._listeners):
            try:
                listener(old_phase, new_phase)
            except Exception as e:
                logger.error(f"Error in phase listener: {e}")

"""Spin controller - owns wheel rotation, phase and the in-flight spin.

Flow:
    1. spin_to(request): compute forward delta, enter SPINNING, schedule
       a single completion on the running event loop
    2. completion: canonicalize rotation, enter SETTLED, record the winner,
       fire on_done exactly once
    3. reset(): drop any pending completion and return to IDLE

The completion timer is the only settle trigger. Every spin and every
reset bumps a generation token, and a completion whose token is stale is
ignored, so a reset always wins over a timer that already fired.
"""

import asyncio
import logging
from typing import Callable, Iterable, Optional, Protocol, Sequence

from drawroom.animation.easing import Easing, EasingFunc, get_easing
from drawroom.core.errors import InvalidState, InvalidTarget
from drawroom.core.events import Event, EventBus, EventType
from drawroom.core.state import (
    PhaseListener,
    PhaseMachine,
    RotationState,
    SelectionState,
    SpinPhase,
)
from drawroom.wheel.models import SpinPlan, SpinRequest, WheelItem
from drawroom.wheel.rotation import canonicalize, forward_delta, slice_midpoint

logger = logging.getLogger(__name__)


class WheelHandle(Protocol):
    """What the host page may do with a wheel."""

    def spin_to(self, request: SpinRequest) -> bool:
        ...

    def reset(self) -> None:
        ...


class SpinController:
    """Spin state machine for one wheel.

    Not thread-safe: all calls must come from the event loop thread.
    """

    def __init__(
        self,
        items: Iterable[WheelItem] = (),
        on_done: Optional[Callable[[str], None]] = None,
        event_bus: Optional[EventBus] = None,
        easing: Easing | str | EasingFunc = Easing.WHEEL_SPIN,
    ) -> None:
        self._items: tuple[WheelItem, ...] = tuple(items)
        self._on_done = on_done
        self._event_bus = event_bus
        self._ease = get_easing(easing)

        self._phases = PhaseMachine()
        self._current_deg: float = 0.0
        self._selected_id: Optional[str] = None

        self._token = 0
        self._plan: Optional[SpinPlan] = None
        self._handle: Optional[asyncio.TimerHandle] = None
        self._loop: Optional[asyncio.AbstractEventLoop] = None

    # State accessors
    @property
    def items(self) -> tuple[WheelItem, ...]:
        return self._items

    @property
    def phase(self) -> SpinPhase:
        return self._phases.phase

    @property
    def current_deg(self) -> float:
        """Committed rotation (unchanged while a spin is in flight)."""
        return self._current_deg

    @property
    def selected_id(self) -> Optional[str]:
        return self._selected_id

    @property
    def rotation_state(self) -> RotationState:
        return RotationState(current_deg=self._current_deg, phase=self._phases.phase)

    @property
    def selection_state(self) -> SelectionState:
        return SelectionState(selected_id=self._selected_id)

    @property
    def active_plan(self) -> Optional[SpinPlan]:
        return self._plan

    def set_on_done(self, callback: Optional[Callable[[str], None]]) -> None:
        """Set callback fired once per completed spin with the winner id."""
        self._on_done = callback

    def add_listener(self, callback: PhaseListener) -> None:
        """Add a phase change listener."""
        self._phases.add_listener(callback)

    def remove_listener(self, callback: PhaseListener) -> None:
        """Remove a phase change listener."""
        self._phases.remove_listener(callback)

    def set_items(self, items: Iterable[WheelItem]) -> None:
        """Replace the participant list.

        An in-flight spin keeps the target it resolved at spin time. Callers
        are expected to reset() when the participant set changes.
        """
        self._items = tuple(items)
        logger.debug(f"Wheel items set: {len(self._items)}")

    def index_of(self, item_id: str) -> Optional[int]:
        for i, item in enumerate(self._items):
            if item.id == item_id:
                return i
        return None

    # WheelHandle
    def spin_to(self, request: SpinRequest) -> bool:
        """Start a spin that lands on ``request.target_item_id``.

        Returns immediately; the result arrives through on_done.

        Returns:
            True if a spin started, False for an empty wheel

        Raises:
            InvalidState: A spin is already in flight
            InvalidTarget: Target id is not on the wheel
            RuntimeError: Called outside a running event loop
        """
        if not self._items:
            logger.debug("spin_to ignored: wheel has no items")
            return False

        if self._phases.phase == SpinPhase.SPINNING:
            raise InvalidState(self._phases.phase, "spin")

        index = self.index_of(request.target_item_id)
        if index is None:
            raise InvalidTarget(request.target_item_id)

        loop = asyncio.get_running_loop()

        mid = slice_midpoint(index, len(self._items))
        delta = forward_delta(self._current_deg, mid, request.spin_count)

        self._token += 1
        self._cancel_pending()

        plan = SpinPlan(
            request=request,
            target_index=index,
            start_deg=self._current_deg,
            delta_deg=delta,
            started_at=loop.time(),
            token=self._token,
        )
        self._plan = plan
        self._loop = loop
        self._selected_id = None
        self._phases.transition(SpinPhase.SPINNING)

        self._handle = loop.call_later(plan.duration_s, self._settle, plan.token)

        logger.info(
            f"Spin started: target={request.target_item_id} index={index} "
            f"delta={delta:.1f} duration={request.duration_ms}ms"
        )
        self._emit(EventType.SPIN_STARTED, {
            "target_id": request.target_item_id,
            "target_index": index,
            "start_deg": plan.start_deg,
            "target_deg": plan.target_deg,
            "duration_ms": request.duration_ms,
        })
        return True

    def reset(self) -> None:
        """Return to IDLE at 0 degrees, dropping any pending completion."""
        self._token += 1
        self._cancel_pending()
        self._plan = None
        self._selected_id = None
        self._current_deg = 0.0

        was_idle = self._phases.phase == SpinPhase.IDLE
        self._phases.reset()
        if not was_idle:
            logger.info("Wheel reset to IDLE")
        self._emit(EventType.WHEEL_RESET, {})

    # Animation projection
    def progress(self, now: Optional[float] = None) -> float:
        """Fraction of the current spin elapsed, 1.0 when not spinning."""
        plan = self._plan
        if plan is None:
            return 1.0
        if now is None:
            now = self._loop.time() if self._loop else plan.started_at
        elapsed = now - plan.started_at
        return max(0.0, min(1.0, elapsed / plan.duration_s))

    def displayed_deg(self, now: Optional[float] = None) -> float:
        """Angle to draw right now.

        While spinning this advances from the start angle to the target
        along the easing curve; otherwise it is the committed rotation.
        """
        plan = self._plan
        if plan is None:
            return self._current_deg
        eased = self._ease(self.progress(now))
        eased = max(0.0, min(1.0, eased))
        return plan.start_deg + plan.delta_deg * eased

    # Internals
    def _settle(self, token: int) -> None:
        plan = self._plan
        if plan is None or token != self._token or plan.token != token:
            logger.debug(f"Stale spin completion ignored (token={token}, current={self._token})")
            return

        self._handle = None
        self._plan = None
        self._current_deg = canonicalize(plan.target_deg)
        self._selected_id = plan.request.target_item_id
        self._phases.transition(SpinPhase.SETTLED)

        winner_id = plan.request.target_item_id
        logger.info(f"Spin settled on {winner_id} at {self._current_deg:.1f} deg")

        if self._on_done:
            try:
                self._on_done(winner_id)
            except Exception as e:
                logger.error(f"Error in spin completion callback: {e}")

        self._emit(EventType.SPIN_COMPLETED, {
            "target_id": winner_id,
            "rotation": self._current_deg,
        })

    def _cancel_pending(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _emit(self, event_type: EventType, data: dict) -> None:
        if self._event_bus:
            self._event_bus.emit(Event(event_type, data=data, source="wheel"))


def make_items(pairs: Sequence[tuple[str, str]]) -> list[WheelItem]:
    """Build wheel items from ``(id, label)`` pairs."""
    return [WheelItem(id=item_id, label=label) for item_id, label in pairs]

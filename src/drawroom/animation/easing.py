"""Easing curves for the spinning wheel.

All functions take a normalized time t (0.0 to 1.0) and return normalized
progress. Only non-decreasing curves live here: an overshooting curve
would make the wheel visibly turn backwards near the end of a spin.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Callable
import math


class Easing(Enum):
    """Available easing function types."""

    LINEAR = auto()

    EASE_OUT_QUAD = auto()
    EASE_OUT_CUBIC = auto()
    EASE_IN_OUT_CUBIC = auto()
    EASE_OUT_QUART = auto()
    EASE_OUT_QUINT = auto()
    EASE_OUT_SINE = auto()
    EASE_OUT_EXPO = auto()
    EASE_OUT_CIRC = auto()

    # Long glide used for wheel spins
    WHEEL_SPIN = auto()


# Type alias for easing functions
EasingFunc = Callable[[float], float]


def linear(t: float) -> float:
    """Linear interpolation (no easing)."""
    return t


def ease_out_quad(t: float) -> float:
    """Decelerate to zero velocity."""
    return 1 - (1 - t) * (1 - t)


def ease_out_cubic(t: float) -> float:
    """Decelerate to zero velocity (cubic)."""
    return 1 - pow(1 - t, 3)


def ease_in_out_cubic(t: float) -> float:
    """Accelerate then decelerate (cubic)."""
    if t < 0.5:
        return 4 * t * t * t
    return 1 - pow(-2 * t + 2, 3) / 2


def ease_out_quart(t: float) -> float:
    return 1 - pow(1 - t, 4)


def ease_out_quint(t: float) -> float:
    return 1 - pow(1 - t, 5)


def ease_out_sine(t: float) -> float:
    return math.sin((t * math.pi) / 2)


def ease_out_expo(t: float) -> float:
    """Exponential deceleration."""
    if t >= 1:
        return 1.0
    return 1 - pow(2, -10 * t)


def ease_out_circ(t: float) -> float:
    return math.sqrt(1 - pow(t - 1, 2))


@dataclass(frozen=True)
class CubicBezier:
    """CSS-style ``cubic-bezier(x1, y1, x2, y2)`` timing curve.

    The curve runs from (0, 0) to (1, 1). x1 and x2 must lie in [0, 1] so
    that time stays monotonic; y1 and y2 in [0, 1] keep progress monotonic.
    """

    x1: float
    y1: float
    x2: float
    y2: float

    def __post_init__(self) -> None:
        if not (0.0 <= self.x1 <= 1.0 and 0.0 <= self.x2 <= 1.0):
            raise ValueError("cubic-bezier x control points must be within [0, 1]")

    @staticmethod
    def _coord(s: float, p1: float, p2: float) -> float:
        # Bernstein form with P0=0 and P3=1
        inv = 1 - s
        return 3 * inv * inv * s * p1 + 3 * inv * s * s * p2 + s * s * s

    @staticmethod
    def _slope(s: float, p1: float, p2: float) -> float:
        inv = 1 - s
        return 3 * inv * inv * p1 + 6 * inv * s * (p2 - p1) + 3 * s * s * (1 - p2)

    def _solve_param(self, x: float) -> float:
        """Find curve parameter s with x(s) == x."""
        s = x
        for _ in range(8):
            err = self._coord(s, self.x1, self.x2) - x
            if abs(err) < 1e-7:
                return s
            slope = self._slope(s, self.x1, self.x2)
            if abs(slope) < 1e-6:
                break
            s -= err / slope
            if not 0.0 <= s <= 1.0:
                break

        # Newton stalled or left the curve, fall back to bisection
        lo, hi = 0.0, 1.0
        s = x
        while hi - lo > 1e-7:
            if self._coord(s, self.x1, self.x2) < x:
                lo = s
            else:
                hi = s
            s = (lo + hi) / 2
        return s

    def __call__(self, t: float) -> float:
        if t <= 0.0:
            return 0.0
        if t >= 1.0:
            return 1.0
        return self._coord(self._solve_param(t), self.y1, self.y2)


# Fast start, very long deceleration into the winning slice
wheel_spin = CubicBezier(0.12, 0.65, 0.0, 1.0)


# Mapping from enum to function
_EASING_FUNCTIONS: dict[Easing, EasingFunc] = {
    Easing.LINEAR: linear,
    Easing.EASE_OUT_QUAD: ease_out_quad,
    Easing.EASE_OUT_CUBIC: ease_out_cubic,
    Easing.EASE_IN_OUT_CUBIC: ease_in_out_cubic,
    Easing.EASE_OUT_QUART: ease_out_quart,
    Easing.EASE_OUT_QUINT: ease_out_quint,
    Easing.EASE_OUT_SINE: ease_out_sine,
    Easing.EASE_OUT_EXPO: ease_out_expo,
    Easing.EASE_OUT_CIRC: ease_out_circ,
    Easing.WHEEL_SPIN: wheel_spin,
}

# String name mapping for convenience
_EASING_BY_NAME: dict[str, Easing] = {e.name.lower(): e for e in Easing}


def get_easing(easing: Easing | str | EasingFunc) -> EasingFunc:
    """Get an easing function by enum, name or pass a callable through.

    Args:
        easing: Easing enum value, string name (e.g., "ease_out_cubic")
            or an easing callable

    Returns:
        The easing function

    Raises:
        ValueError: If easing name is not recognized
    """
    if callable(easing) and not isinstance(easing, Easing):
        return easing

    if isinstance(easing, str):
        easing_enum = _EASING_BY_NAME.get(easing.lower())
        if easing_enum is None:
            raise ValueError(f"Unknown easing function: {easing}")
        easing = easing_enum

    func = _EASING_FUNCTIONS.get(easing)
    if func is None:
        raise ValueError(f"No function registered for: {easing}")

    return func


def interpolate(start: float, end: float, t: float, easing: Easing | str | EasingFunc = Easing.LINEAR) -> float:
    """Interpolate between two values using an easing function.

    Args:
        start: Starting value
        end: Ending value
        t: Progress (0.0 to 1.0), clamped
        easing: Easing function to use

    Returns:
        Interpolated value
    """
    easing_func = get_easing(easing)
    eased_t = easing_func(max(0.0, min(1.0, t)))
    return start + (end - start) * eased_t

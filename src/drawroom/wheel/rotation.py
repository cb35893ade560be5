"""Rotation math for landing a wheel slice under a fixed pointer.

Angles are in degrees, measured clockwise from the wheel's own zero in
screen coordinates (y grows downward). The wheel is drawn rotated by
``rotation + RENDER_OFFSET_DEG`` and the pointer sits at ``POINTER_DEG``
(the top of the screen). A slice midpoint ``m`` is under the pointer when
``rotation ≡ POINTER_DEG - RENDER_OFFSET_DEG - m (mod 360)``.
"""

import math

FULL_TURN = 360.0

# Wheel zero is drawn a quarter turn back so slice 0 starts at the top
RENDER_OFFSET_DEG = -90.0

# Screen angle of the pointer (top)
POINTER_DEG = 270.0


def normalize_deg(deg: float) -> float:
    """Map any angle into [0, 360)."""
    result = deg % FULL_TURN
    # -1e-17 % 360 rounds to 360.0
    return 0.0 if result >= FULL_TURN else result


def slice_angle(count: int) -> float:
    """Angular width of one slice, 0 for an empty wheel."""
    if count <= 0:
        return 0.0
    return FULL_TURN / count


def slice_midpoint(index: int, count: int) -> float:
    """Midpoint angle of slice ``index`` on a wheel of ``count`` slices."""
    width = slice_angle(count)
    return index * width + width / 2


def forward_delta(current: float, winner_mid: float, spin_count: int) -> float:
    """Forward rotation that lands ``winner_mid`` under the pointer.

    Args:
        current: Current orientation (any value, reduced modulo 360)
        winner_mid: Target slice midpoint in wheel degrees
        spin_count: Full turns to add before the residual

    Returns:
        Delta >= spin_count * 360. With spin_count=0 this is the shortest
        forward snap, which may be 0 when already aligned.
    """
    if spin_count < 0:
        raise ValueError(f"spin_count must be >= 0, got {spin_count}")

    aligned = POINTER_DEG - RENDER_OFFSET_DEG - winner_mid
    residual = normalize_deg(aligned - normalize_deg(current))
    return spin_count * FULL_TURN + residual


def canonicalize(deg: float) -> float:
    """Same visible orientation, bounded to [0, 360)."""
    return normalize_deg(deg)


def index_under_pointer(rotation: float, count: int) -> int | None:
    """Index of the slice currently under the pointer, None for an empty wheel."""
    if count <= 0:
        return None
    wheel_deg = normalize_deg(POINTER_DEG - RENDER_OFFSET_DEG - rotation)
    index = math.floor(wheel_deg / slice_angle(count))
    return min(index, count - 1)

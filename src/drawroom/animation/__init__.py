"""Animation module for DRAWROOM."""

from drawroom.animation.easing import (
    Easing,
    EasingFunc,
    CubicBezier,
    wheel_spin,
    get_easing,
    interpolate,
)

__all__ = [
    "Easing",
    "EasingFunc",
    "CubicBezier",
    "wheel_spin",
    "get_easing",
    "interpolate",
]

"""Wheel of names: rotation math, spin controller and renderer."""

from drawroom.wheel.models import (
    WheelItem,
    SpinRequest,
    SpinPlan,
    DEFAULT_SPIN_COUNT,
    DEFAULT_DURATION_MS,
)
from drawroom.wheel.rotation import (
    POINTER_DEG,
    RENDER_OFFSET_DEG,
    normalize_deg,
    slice_angle,
    slice_midpoint,
    forward_delta,
    canonicalize,
    index_under_pointer,
)
from drawroom.wheel.controller import SpinController, WheelHandle, make_items
from drawroom.wheel.renderer import (
    WheelRenderer,
    WheelGeometry,
    SliceGeometry,
    LabelPlacement,
    PointerGeometry,
    slice_color,
    slice_rgb,
)

__all__ = [
    # Models
    "WheelItem",
    "SpinRequest",
    "SpinPlan",
    "DEFAULT_SPIN_COUNT",
    "DEFAULT_DURATION_MS",
    # Rotation math
    "POINTER_DEG",
    "RENDER_OFFSET_DEG",
    "normalize_deg",
    "slice_angle",
    "slice_midpoint",
    "forward_delta",
    "canonicalize",
    "index_under_pointer",
    # Controller
    "SpinController",
    "WheelHandle",
    "make_items",
    # Renderer
    "WheelRenderer",
    "WheelGeometry",
    "SliceGeometry",
    "LabelPlacement",
    "PointerGeometry",
    "slice_color",
    "slice_rgb",
]

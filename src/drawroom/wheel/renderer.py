"""Wheel renderer - projects wheel state into drawable geometry.

The renderer holds configuration only. ``project()`` is a pure function of
the item list, rotation and selection; it never reads or writes controller
state, so it can run every frame.

Geometry uses the same convention as ``drawroom.wheel.rotation``: slices
are laid out clockwise from the wheel zero, the whole wheel is rotated by
``rotation + RENDER_OFFSET_DEG`` and the pointer sits at the top.
"""

import colorsys
import logging
import math
from dataclasses import dataclass
from typing import Optional, Sequence

from drawroom.core.state import RotationState, SelectionState, SpinPhase
from drawroom.wheel.models import WheelItem
from drawroom.wheel.rotation import POINTER_DEG, RENDER_OFFSET_DEG, slice_angle

logger = logging.getLogger(__name__)

Color = tuple[int, int, int]

SLICE_SATURATION = 0.75
SLICE_LIGHTNESS = 0.70


def slice_hue(index: int, count: int) -> float:
    """Hue in degrees for slice ``index``; evenly spread around the wheel."""
    return (index * 360) / (count or 1)


def slice_color(index: int, count: int) -> str:
    """CSS color for a slice. Same index and count always give the same color."""
    hue = slice_hue(index, count)
    return f"hsl({hue:g}, {SLICE_SATURATION * 100:g}%, {SLICE_LIGHTNESS * 100:g}%)"


def slice_rgb(index: int, count: int) -> Color:
    """RGB triple matching slice_color()."""
    hue = slice_hue(index, count) / 360
    r, g, b = colorsys.hls_to_rgb(hue % 1.0, SLICE_LIGHTNESS, SLICE_SATURATION)
    return (round(r * 255), round(g * 255), round(b * 255))


def polar_to_cartesian(cx: float, cy: float, radius: float, angle_deg: float) -> tuple[float, float]:
    """Point at ``angle_deg`` (clockwise, screen coordinates) on a circle."""
    rad = math.radians(angle_deg)
    return (cx + radius * math.cos(rad), cy + radius * math.sin(rad))


def describe_arc(cx: float, cy: float, radius: float, start_deg: float, end_deg: float) -> str:
    """SVG path for a filled circular sector from start_deg to end_deg."""
    sx, sy = polar_to_cartesian(cx, cy, radius, end_deg)
    ex, ey = polar_to_cartesian(cx, cy, radius, start_deg)
    large_arc = "0" if end_deg - start_deg <= 180 else "1"
    parts = [
        "M", cx, cy,
        "L", sx, sy,
        "A", radius, radius, 0, large_arc, 0, ex, ey,
        "Z",
    ]
    return " ".join(_fmt(p) for p in parts)


def _fmt(value) -> str:
    if isinstance(value, float):
        return f"{value:.3f}".rstrip("0").rstrip(".")
    return str(value)


@dataclass(frozen=True)
class LabelPlacement:
    """Slice label anchored at mid-radius and rotated along the slice."""

    text: str
    x: float
    y: float
    rotation_deg: float
    font_size: float
    font_weight: int


@dataclass(frozen=True)
class SliceGeometry:
    """Drawable description of one slice, in unrotated wheel coordinates."""

    index: int
    item_id: str
    start_deg: float
    end_deg: float
    mid_deg: float
    path: str
    color: str
    rgb: Color
    label: LabelPlacement
    selected: bool


@dataclass(frozen=True)
class PointerGeometry:
    """Fixed pointer, drawn at POINTER_DEG just inside the rim."""

    tip_x: float
    tip_y: float
    angle_deg: float
    width: float
    height: float

    def triangle(self) -> tuple[tuple[float, float], tuple[float, float], tuple[float, float]]:
        """Triangle vertices (tip first) pointing toward the wheel center."""
        rad = math.radians(self.angle_deg)
        # Base sits further out along the pointer direction
        bx = self.tip_x + self.height * math.cos(rad)
        by = self.tip_y + self.height * math.sin(rad)
        px, py = -math.sin(rad), math.cos(rad)
        half = self.width / 2
        return (
            (self.tip_x, self.tip_y),
            (bx + px * half, by + py * half),
            (bx - px * half, by - py * half),
        )


@dataclass(frozen=True)
class WheelGeometry:
    """Everything needed to draw one frame of the wheel."""

    size: int
    cx: float
    cy: float
    radius: float
    hub_radius: float
    transform_deg: float
    slices: tuple[SliceGeometry, ...]
    pointer: PointerGeometry
    status: str

    @property
    def is_empty(self) -> bool:
        return not self.slices


class WheelRenderer:
    """Projects (items, rotation, selection) into WheelGeometry."""

    def __init__(
        self,
        size: int = 380,
        rim_margin: float = 6,
        label_radius_ratio: float = 0.62,
        hub_ratio: float = 0.08,
        pointer_width: float = 24,
        pointer_height: float = 20,
        spinning_text: str = "Spinning...",
        winner_text: str = "Winner: {label}!",
        idle_text: str = "Ready to spin!",
    ) -> None:
        if size <= 2 * rim_margin:
            raise ValueError(f"Wheel size {size} too small for rim margin {rim_margin}")
        self.size = size
        self.rim_margin = rim_margin
        self.label_radius_ratio = label_radius_ratio
        self.hub_ratio = hub_ratio
        self.pointer_width = pointer_width
        self.pointer_height = pointer_height
        self.spinning_text = spinning_text
        self.winner_text = winner_text
        self.idle_text = idle_text

    @property
    def center(self) -> tuple[float, float]:
        return (self.size / 2, self.size / 2)

    @property
    def radius(self) -> float:
        return self.size / 2 - self.rim_margin

    @property
    def font_size(self) -> float:
        return max(10, self.size / 22)

    def status_text(
        self,
        phase: SpinPhase,
        items: Sequence[WheelItem],
        selected_id: Optional[str],
    ) -> str:
        """Human readable status line under the wheel."""
        if phase == SpinPhase.SPINNING:
            return self.spinning_text
        if selected_id is not None:
            for item in items:
                if item.id == selected_id:
                    return self.winner_text.format(label=item.label)
        return self.idle_text

    def project(
        self,
        items: Sequence[WheelItem],
        rotation: RotationState,
        selection: SelectionState,
        displayed_deg: Optional[float] = None,
    ) -> WheelGeometry:
        """Build drawable geometry for the current frame.

        Args:
            items: Wheel items in slice order
            rotation: Committed rotation and phase
            selection: Current winner, if any
            displayed_deg: Animated angle while spinning; defaults to the
                committed rotation

        Returns:
            WheelGeometry for this frame
        """
        cx, cy = self.center
        radius = self.radius
        count = len(items)
        width = slice_angle(count)
        angle = rotation.current_deg if displayed_deg is None else displayed_deg

        slices = []
        for i, item in enumerate(items):
            start = i * width
            end = start + width
            mid = start + width / 2
            lx, ly = polar_to_cartesian(cx, cy, radius * self.label_radius_ratio, mid)
            selected = item.id == selection.selected_id
            slices.append(SliceGeometry(
                index=i,
                item_id=item.id,
                start_deg=start,
                end_deg=end,
                mid_deg=mid,
                path=describe_arc(cx, cy, radius, start, end),
                color=slice_color(i, count),
                rgb=slice_rgb(i, count),
                label=LabelPlacement(
                    text=item.label,
                    x=lx,
                    y=ly,
                    rotation_deg=mid,
                    font_size=self.font_size,
                    font_weight=800 if selected else 600,
                ),
                selected=selected,
            ))

        tip_x, tip_y = polar_to_cartesian(cx, cy, radius - self.pointer_height, POINTER_DEG)
        pointer = PointerGeometry(
            tip_x=tip_x,
            tip_y=tip_y,
            angle_deg=POINTER_DEG,
            width=self.pointer_width,
            height=self.pointer_height,
        )

        return WheelGeometry(
            size=self.size,
            cx=cx,
            cy=cy,
            radius=radius,
            hub_radius=self.size * self.hub_ratio,
            transform_deg=angle + RENDER_OFFSET_DEG,
            slices=tuple(slices),
            pointer=pointer,
            status=self.status_text(rotation.phase, items, selection.selected_id),
        )

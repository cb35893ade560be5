"""Raster drawing primitives for wheel frames.

Buffers are numpy arrays shaped (height, width, 3) of uint8 RGB.
"""

import math
from typing import Tuple

import numpy as np
from numpy.typing import NDArray

from drawroom.wheel.renderer import WheelGeometry

# Type aliases
Color = Tuple[int, int, int]
Point = Tuple[float, float]
Buffer = NDArray[np.uint8]

BACKGROUND = (15, 23, 42)
RIM_COLOR = (229, 231, 235)
DIVIDER_COLOR = (255, 255, 255)
HUB_COLOR = (17, 24, 39)
POINTER_COLOR = (255, 255, 255)


def new_buffer(size: int, color: Color = BACKGROUND) -> Buffer:
    """Create a square buffer filled with ``color``."""
    buffer = np.zeros((size, size, 3), dtype=np.uint8)
    buffer[:, :] = color
    return buffer


def draw_circle(
    buffer: Buffer,
    cx: float,
    cy: float,
    radius: float,
    color: Color,
    filled: bool = True,
    thickness: float = 1.0,
) -> None:
    """Draw a circle (distance based, so it handles fractional centers).

    Args:
        buffer: Target numpy array (height, width, 3)
        cx: Center x coordinate
        cy: Center y coordinate
        radius: Circle radius in pixels
        color: RGB color tuple
        filled: If True, fill circle; if False, draw a ring of ``thickness``
        thickness: Ring width when filled=False
    """
    h, w = buffer.shape[:2]
    y_indices, x_indices = np.ogrid[:h, :w]
    dist = np.sqrt((x_indices + 0.5 - cx) ** 2 + (y_indices + 0.5 - cy) ** 2)
    if filled:
        mask = dist <= radius
    else:
        mask = np.abs(dist - radius) <= thickness / 2
    buffer[mask] = color


def draw_line(
    buffer: Buffer,
    x1: int,
    y1: int,
    x2: int,
    y2: int,
    color: Color,
    thickness: int = 1,
) -> None:
    """Draw a line using Bresenham's algorithm.

    Args:
        buffer: Target numpy array (height, width, 3)
        x1, y1: Start point
        x2, y2: End point
        color: RGB color tuple
        thickness: Line thickness in pixels
    """
    h, w = buffer.shape[:2]

    dx = abs(x2 - x1)
    dy = abs(y2 - y1)
    sx = 1 if x1 < x2 else -1
    sy = 1 if y1 < y2 else -1
    err = dx - dy

    x, y = x1, y1

    while True:
        for tx in range(-thickness // 2, (thickness + 1) // 2):
            for ty in range(-thickness // 2, (thickness + 1) // 2):
                px, py = x + tx, y + ty
                if 0 <= px < w and 0 <= py < h:
                    buffer[py, px] = color

        if x == x2 and y == y2:
            break

        e2 = 2 * err
        if e2 > -dy:
            err -= dy
            x += sx
        if e2 < dx:
            err += dx
            y += sy


def draw_triangle(buffer: Buffer, a: Point, b: Point, c: Point, color: Color) -> None:
    """Fill a triangle using edge-function tests over the bounding box."""
    h, w = buffer.shape[:2]
    xs = (a[0], b[0], c[0])
    ys = (a[1], b[1], c[1])
    x0, x1 = max(0, int(math.floor(min(xs)))), min(w, int(math.ceil(max(xs))) + 1)
    y0, y1 = max(0, int(math.floor(min(ys)))), min(h, int(math.ceil(max(ys))) + 1)
    if x0 >= x1 or y0 >= y1:
        return

    py, px = np.mgrid[y0:y1, x0:x1]
    px = px + 0.5
    py = py + 0.5

    def edge(p: Point, q: Point) -> NDArray[np.float64]:
        return (q[0] - p[0]) * (py - p[1]) - (q[1] - p[1]) * (px - p[0])

    e0, e1, e2 = edge(a, b), edge(b, c), edge(c, a)
    inside = ((e0 >= 0) & (e1 >= 0) & (e2 >= 0)) | ((e0 <= 0) & (e1 <= 0) & (e2 <= 0))
    region = buffer[y0:y1, x0:x1]
    region[inside] = color


def slice_index_map(geometry: WheelGeometry) -> NDArray[np.int64]:
    """Per-pixel slice index for a frame, -1 outside the wheel.

    Screen angle minus the wheel transform gives the wheel angle, which maps
    straight onto slice i = floor(angle / width).
    """
    size = geometry.size
    count = len(geometry.slices)
    result = np.full((size, size), -1, dtype=np.int64)
    if count == 0:
        return result

    ys, xs = np.mgrid[:size, :size]
    dx = xs + 0.5 - geometry.cx
    dy = ys + 0.5 - geometry.cy
    inside = dx * dx + dy * dy <= geometry.radius ** 2

    screen_deg = np.degrees(np.arctan2(dy, dx))
    wheel_deg = np.mod(screen_deg - geometry.transform_deg, 360.0)
    index = np.floor(wheel_deg / (360.0 / count)).astype(np.int64)
    index = np.clip(index, 0, count - 1)
    result[inside] = index[inside]
    return result


def draw_wheel(buffer: Buffer, geometry: WheelGeometry) -> None:
    """Rasterize a projected wheel: slices, dividers, rim, hub and pointer."""
    draw_circle(buffer, geometry.cx, geometry.cy, geometry.radius, (255, 255, 255))

    if not geometry.is_empty:
        index_map = slice_index_map(geometry)
        palette = np.array([s.rgb for s in geometry.slices], dtype=np.uint8)
        inside = index_map >= 0
        buffer[inside] = palette[index_map[inside]]

        # Dividers at each slice start, in screen space
        for s in geometry.slices:
            angle = math.radians(s.start_deg + geometry.transform_deg)
            x2 = int(round(geometry.cx + geometry.radius * math.cos(angle)))
            y2 = int(round(geometry.cy + geometry.radius * math.sin(angle)))
            draw_line(buffer, int(geometry.cx), int(geometry.cy), x2, y2, DIVIDER_COLOR)

    draw_circle(buffer, geometry.cx, geometry.cy, geometry.radius, RIM_COLOR, filled=False, thickness=4)
    draw_circle(buffer, geometry.cx, geometry.cy, geometry.hub_radius, HUB_COLOR)
    draw_triangle(buffer, *geometry.pointer.triangle(), POINTER_COLOR)


def render_frame(geometry: WheelGeometry, background: Color = BACKGROUND) -> Buffer:
    """Render a complete frame into a fresh buffer."""
    buffer = new_buffer(geometry.size, background)
    draw_wheel(buffer, geometry)
    return buffer

"""Raster output for DRAWROOM wheels."""

from drawroom.graphics.primitives import (
    new_buffer,
    draw_circle,
    draw_line,
    draw_triangle,
    draw_wheel,
    render_frame,
    slice_index_map,
)
from drawroom.graphics.snapshot import buffer_to_image, save_frame, frame_png_bytes

__all__ = [
    "new_buffer",
    "draw_circle",
    "draw_line",
    "draw_triangle",
    "draw_wheel",
    "render_frame",
    "slice_index_map",
    "buffer_to_image",
    "save_frame",
    "frame_png_bytes",
]

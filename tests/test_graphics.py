import numpy as np
from PIL import Image

from drawroom.core.state import RotationState, SelectionState, SpinPhase
from drawroom.graphics.primitives import (
    BACKGROUND,
    draw_circle,
    draw_line,
    draw_triangle,
    new_buffer,
    render_frame,
    slice_index_map,
)
from drawroom.graphics.snapshot import frame_png_bytes, save_frame
from drawroom.wheel.renderer import WheelRenderer, slice_rgb
from drawroom.wheel.rotation import forward_delta, slice_midpoint


def _settled_geometry(items, target_index):
    delta = forward_delta(0.0, slice_midpoint(target_index, len(items)), 6)
    rotation = RotationState(current_deg=delta % 360, phase=SpinPhase.SETTLED)
    selection = SelectionState(selected_id=items[target_index].id)
    return WheelRenderer(size=200).project(items, rotation, selection)


def test_slice_under_pointer_is_winner(items):
    geometry = _settled_geometry(items, 2)
    index_map = slice_index_map(geometry)

    # Pixel halfway between hub and pointer, straight up
    x = int(geometry.cx)
    y = int(geometry.cy - geometry.radius / 2)
    assert index_map[y, x] == 2

    buffer = render_frame(geometry)
    assert tuple(buffer[y, x]) == slice_rgb(2, 4)


def test_index_map_outside_wheel(items):
    geometry = _settled_geometry(items, 0)
    index_map = slice_index_map(geometry)
    assert index_map[0, 0] == -1
    assert set(np.unique(index_map)) == {-1, 0, 1, 2, 3}


def test_empty_wheel_renders():
    geometry = WheelRenderer(size=120).project([], RotationState(), SelectionState())
    buffer = render_frame(geometry)
    assert buffer.shape == (120, 120, 3)
    assert tuple(buffer[0, 0]) == BACKGROUND


def test_primitives_draw_inside_bounds():
    buffer = new_buffer(20, (0, 0, 0))
    draw_circle(buffer, 10, 10, 3, (255, 0, 0))
    assert tuple(buffer[10, 10]) == (255, 0, 0)
    assert tuple(buffer[0, 0]) == (0, 0, 0)

    draw_line(buffer, -5, 2, 30, 2, (0, 255, 0))
    assert tuple(buffer[2, 0]) == (0, 255, 0)
    assert tuple(buffer[2, 19]) == (0, 255, 0)

    draw_triangle(buffer, (14, 14), (19, 19), (14, 19), (0, 0, 255))
    assert tuple(buffer[18, 15]) == (0, 0, 255)


def test_save_frame(tmp_path, items):
    buffer = render_frame(_settled_geometry(items, 1))
    path = save_frame(buffer, tmp_path / "nested" / "wheel.png")

    assert path.exists()
    with Image.open(path) as image:
        assert image.size == (200, 200)
        assert image.mode == "RGB"
        assert np.array_equal(np.asarray(image), buffer)


def test_png_bytes(items):
    data = frame_png_bytes(_settled_geometry(items, 3))
    assert data.startswith(b"\x89PNG")

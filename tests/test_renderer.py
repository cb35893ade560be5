import pytest

from drawroom.core.state import RotationState, SelectionState, SpinPhase
from drawroom.wheel.renderer import WheelRenderer, describe_arc, slice_color, slice_rgb
from drawroom.wheel.rotation import POINTER_DEG


def test_project_lays_out_slices(items):
    renderer = WheelRenderer(size=380)
    geometry = renderer.project(items, RotationState(), SelectionState())

    assert len(geometry.slices) == 4
    assert [s.start_deg for s in geometry.slices] == [0.0, 90.0, 180.0, 270.0]
    assert [s.mid_deg for s in geometry.slices] == [45.0, 135.0, 225.0, 315.0]
    assert geometry.cx == geometry.cy == 190.0
    assert geometry.radius == 184.0
    assert geometry.transform_deg == -90.0
    assert geometry.status == "Ready to spin!"


def test_labels_sit_at_mid_radius(items):
    renderer = WheelRenderer(size=380)
    geometry = renderer.project(items, RotationState(), SelectionState(selected_id="b"))

    label = geometry.slices[0].label
    dist = ((label.x - geometry.cx) ** 2 + (label.y - geometry.cy) ** 2) ** 0.5
    assert dist == pytest.approx(geometry.radius * 0.62)
    assert label.rotation_deg == 45.0
    assert label.font_size == pytest.approx(380 / 22)

    weights = [s.label.font_weight for s in geometry.slices]
    assert weights == [600, 800, 600, 600]
    assert [s.selected for s in geometry.slices] == [False, True, False, False]


def test_small_wheel_font_floor(items):
    geometry = WheelRenderer(size=100).project(items, RotationState(), SelectionState())
    assert geometry.slices[0].label.font_size == 10


def test_status_text(items):
    renderer = WheelRenderer()
    spinning = RotationState(phase=SpinPhase.SPINNING)
    settled = RotationState(current_deg=135.0, phase=SpinPhase.SETTLED)

    assert renderer.project(items, spinning, SelectionState()).status == "Spinning..."
    assert renderer.project(items, settled, SelectionState("c")).status == "Winner: Carol!"
    assert renderer.project(items, RotationState(), SelectionState("gone")).status == "Ready to spin!"


def test_projection_is_pure(items):
    renderer = WheelRenderer()
    rotation = RotationState(current_deg=42.0, phase=SpinPhase.SETTLED)
    selection = SelectionState(selected_id="a")

    first = renderer.project(items, rotation, selection)
    second = renderer.project(items, rotation, selection)

    assert first == second
    assert rotation == RotationState(current_deg=42.0, phase=SpinPhase.SETTLED)
    assert selection == SelectionState(selected_id="a")


def test_displayed_angle_overrides_committed(items):
    renderer = WheelRenderer()
    rotation = RotationState(current_deg=10.0, phase=SpinPhase.SPINNING)
    geometry = renderer.project(items, rotation, SelectionState(), displayed_deg=500.0)
    assert geometry.transform_deg == 410.0


def test_empty_wheel(items):
    geometry = WheelRenderer().project([], RotationState(), SelectionState())
    assert geometry.is_empty
    assert geometry.status == "Ready to spin!"


def test_colors_are_deterministic():
    assert slice_color(0, 4) == "hsl(0, 75%, 70%)"
    assert slice_color(1, 4) == "hsl(90, 75%, 70%)"
    assert slice_color(1, 3) == "hsl(120, 75%, 70%)"
    assert slice_color(2, 7) == slice_color(2, 7)

    assert slice_rgb(0, 4) == (236, 121, 121)
    assert slice_rgb(2, 4) == (121, 236, 236)


def test_arc_path():
    path = describe_arc(100.0, 100.0, 50.0, 0.0, 90.0)
    assert path == "M 100 100 L 100 150 A 50 50 0 0 0 150 100 Z"

    wide = describe_arc(100.0, 100.0, 50.0, 0.0, 270.0)
    assert " A 50 50 0 1 0 " in wide


def test_pointer_at_top(items):
    renderer = WheelRenderer(size=380, pointer_height=20)
    geometry = renderer.project(items, RotationState(), SelectionState())
    pointer = geometry.pointer

    assert pointer.angle_deg == POINTER_DEG
    assert pointer.tip_x == pytest.approx(190.0)
    assert pointer.tip_y == pytest.approx(190.0 - (184.0 - 20.0))
    tip, left, right = pointer.triangle()
    assert tip == (pointer.tip_x, pointer.tip_y)
    # Base sits above the tip, toward the rim
    assert left[1] == pytest.approx(right[1])
    assert left[1] < tip[1]


def test_rejects_tiny_size():
    with pytest.raises(ValueError):
        WheelRenderer(size=10, rim_margin=6)

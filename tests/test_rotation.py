import pytest

from drawroom.wheel.rotation import (
    canonicalize,
    forward_delta,
    index_under_pointer,
    normalize_deg,
    slice_angle,
    slice_midpoint,
)


def test_four_items_land_on_third_slice():
    # C is index 2 of 4: midpoint 225, lands at 135 after 6 full turns
    mid = slice_midpoint(2, 4)
    assert mid == 225.0

    delta = forward_delta(0.0, mid, 6)
    assert delta == pytest.approx(2295.0)
    assert canonicalize(delta) == pytest.approx(135.0)
    assert index_under_pointer(135.0, 4) == 2


@pytest.mark.parametrize("count", [1, 2, 3, 5, 7, 12])
@pytest.mark.parametrize("current", [0.0, 37.5, 359.9, 2295.0, -90.0])
def test_every_slice_lands_under_pointer(count, current):
    for index in range(count):
        delta = forward_delta(current, slice_midpoint(index, count), 4)
        assert delta >= 4 * 360
        assert delta < 5 * 360
        assert index_under_pointer(current + delta, count) == index


def test_zero_spins_is_shortest_forward_snap():
    mid = slice_midpoint(0, 4)  # 45
    assert forward_delta(0.0, mid, 0) == pytest.approx(315.0)

    # Already aligned: nothing to do
    assert forward_delta(315.0, mid, 0) == pytest.approx(0.0)


def test_negative_spin_count_rejected():
    with pytest.raises(ValueError):
        forward_delta(0.0, 45.0, -1)


def test_chained_spins_stay_aligned():
    current = 0.0
    for index in [2, 0, 3, 3, 1]:
        current = canonicalize(current + forward_delta(current, slice_midpoint(index, 4), 6))
        assert 0.0 <= current < 360.0
        assert index_under_pointer(current, 4) == index


def test_single_item_always_wins():
    assert slice_angle(1) == 360.0
    assert slice_midpoint(0, 1) == 180.0
    assert index_under_pointer(forward_delta(123.0, 180.0, 3) + 123.0, 1) == 0


def test_empty_wheel():
    assert slice_angle(0) == 0.0
    assert index_under_pointer(90.0, 0) is None


def test_normalize_bounds():
    assert normalize_deg(360.0) == 0.0
    assert normalize_deg(-1.0) == pytest.approx(359.0)
    assert normalize_deg(-1e-17) == 0.0
    assert normalize_deg(725.0) == pytest.approx(5.0)

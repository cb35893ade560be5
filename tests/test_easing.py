import pytest

from drawroom.animation.easing import (
    CubicBezier,
    Easing,
    get_easing,
    interpolate,
    wheel_spin,
)


@pytest.mark.parametrize("easing", list(Easing))
def test_curves_pin_endpoints_and_never_reverse(easing):
    func = get_easing(easing)
    assert func(0.0) == pytest.approx(0.0, abs=1e-6)
    assert func(1.0) == pytest.approx(1.0, abs=1e-6)

    samples = [func(i / 200) for i in range(201)]
    for earlier, later in zip(samples, samples[1:]):
        assert later >= earlier - 1e-9


def test_wheel_spin_front_loads_progress():
    # Most of the distance is covered early, then a long glide
    assert wheel_spin(0.25) > 0.6
    assert wheel_spin(0.5) > 0.85
    assert wheel_spin(0.9) < 1.0


def test_bezier_matches_linear_when_control_points_on_diagonal():
    curve = CubicBezier(0.25, 0.25, 0.75, 0.75)
    for t in (0.1, 0.33, 0.5, 0.8):
        assert curve(t) == pytest.approx(t, abs=1e-5)


def test_bezier_rejects_bad_x():
    with pytest.raises(ValueError):
        CubicBezier(1.2, 0.0, 0.5, 1.0)


def test_get_easing_by_name_and_callable():
    assert get_easing("wheel_spin") is wheel_spin
    assert get_easing("EASE_OUT_CUBIC")(0.5) == pytest.approx(0.875)

    def custom(t):
        return t * t

    assert get_easing(custom) is custom

    with pytest.raises(ValueError):
        get_easing("bounce_forever")


def test_interpolate_clamps():
    assert interpolate(0.0, 100.0, 0.5) == 50.0
    assert interpolate(0.0, 100.0, 2.0) == 100.0
    assert interpolate(10.0, 20.0, -1.0) == 10.0

import pytest

from skirmish.camera import (
    STARTING_ZOOM_LEVEL,
    WINDOW_HEIGHT,
    WINDOW_WIDTH,
    SmoothFollow,
    absolute_scale,
    zoom_scale,
)


def test_follow_with_zero_dt_stays_put():
    follow = SmoothFollow()
    assert follow.step((3.0, -4.0), (100.0, 50.0), 0.0) == (3.0, -4.0)


def test_follow_large_step_reaches_target():
    follow = SmoothFollow()
    assert follow.step((3.0, -4.0), (100.0, 50.0), 1.0) == (100.0, 50.0)


def test_follow_partial_step_moves_part_way():
    follow = SmoothFollow(rate=(1.0, 1.0))
    x, y = follow.step((0.0, 0.0), (10.0, 0.0), 0.5)
    assert x == pytest.approx(5.0)
    assert y == 0.0


def test_follow_axes_independent():
    follow = SmoothFollow(rate=(0.0, 100.0))
    assert follow.step((1.0, 1.0), (9.0, 9.0), 1.0) == (1.0, 9.0)


def test_zoom_scale_at_base_window_is_zoom_level():
    assert zoom_scale(WINDOW_WIDTH, WINDOW_HEIGHT) == STARTING_ZOOM_LEVEL


def test_zoom_scale_halves_for_double_window():
    base = zoom_scale(WINDOW_WIDTH, WINDOW_HEIGHT)
    assert zoom_scale(WINDOW_WIDTH * 2, WINDOW_HEIGHT * 2) == pytest.approx(base / 2)


def test_zoom_scale_uses_tighter_axis():
    narrow = zoom_scale(WINDOW_WIDTH / 2, WINDOW_HEIGHT)
    assert narrow == pytest.approx(zoom_scale(WINDOW_WIDTH / 2, WINDOW_HEIGHT / 2))


def test_zoom_scale_multiplies_zoom_level():
    base = zoom_scale(WINDOW_WIDTH, WINDOW_HEIGHT * 3, 1.0)
    assert zoom_scale(WINDOW_WIDTH, WINDOW_HEIGHT * 3, 2.5) == pytest.approx(base * 2.5)


def test_zoom_scale_rejects_empty_window():
    with pytest.raises(ValueError):
        zoom_scale(0.0, WINDOW_HEIGHT)


def test_absolute_scale_matches_pixels_one_to_one():
    assert absolute_scale(WINDOW_WIDTH, WINDOW_WIDTH) == (1.0, 1.0, 1.0)


def test_absolute_scale_scales_xy_not_z():
    sx, sy, sz = absolute_scale(WINDOW_WIDTH * 2, WINDOW_WIDTH, (3.0, 4.0, 5.0))
    assert sx == pytest.approx(6.0)
    assert sy == pytest.approx(8.0)
    assert sz == 5.0


def test_absolute_scale_rejects_empty_viewport():
    with pytest.raises(ValueError):
        absolute_scale(WINDOW_WIDTH, 0.0)
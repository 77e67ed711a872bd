import numpy as np
import pytest

from mandelcore.errors import InvalidZoom
from mandelcore.mapping import compute_bounds, map_linear


@pytest.mark.parametrize("in_low,in_high,out_low,out_high", [
    (0, 4, -2.0, 2.0),
    (0, 10, -1.5, 0.5),
    (0, 800, -2.5, 1.0),
    (0, 600, 1.0, -1.0),
    (0, 7, -2.1, 0.9),
    (0, 10, -0.3, 0.6),
    (-3, 5, 0.1, 0.7),
])
def test_map_linear_hits_endpoints(in_low, in_high, out_low, out_high):
    assert map_linear(in_low, in_low, in_high, out_low, out_high) == out_low
    assert map_linear(in_high, in_low, in_high, out_low, out_high) == out_high


def test_last_column_boundary_lands_on_max_x():
    width = 7
    min_x, _, max_x, _ = compute_bounds(complex(-0.75, 0.1), 3.0, width, 5)
    assert map_linear(0, 0, width, min_x, max_x) == min_x
    assert map_linear(width, 0, width, min_x, max_x) == max_x


def test_map_linear_is_monotonic_on_arrays():
    xs = np.arange(0, 101, dtype=np.float64)
    up = map_linear(xs, 0, 100, -2.0, 1.0)
    down = map_linear(xs, 0, 100, 1.0, -2.0)
    assert np.all(np.diff(up) > 0)
    assert np.all(np.diff(down) < 0)
    assert up[50] == pytest.approx(-0.5)


def test_map_linear_rejects_empty_range():
    with pytest.raises(ValueError):
        map_linear(1, 3, 3, 0.0, 1.0)


def test_bounds_square_view():
    assert compute_bounds(0j, 0.5, 4, 4) == (-2.0, -2.0, 2.0, 2.0)


def test_bounds_account_for_aspect_ratio():
    min_x, min_y, max_x, max_y = compute_bounds(complex(-0.5, 0.25), 1.0, 200, 100)
    assert (min_x, max_x) == (-1.5, 0.5)
    assert (min_y, max_y) == (-0.25, 0.75)


@pytest.mark.parametrize("zoom", [0, -1.0, float("nan")])
def test_bounds_reject_non_positive_zoom(zoom):
    with pytest.raises(InvalidZoom):
        compute_bounds(0j, zoom, 4, 4)

from __future__ import annotations

from typing import Tuple

from mandelcore.errors import check_zoom

Bounds = Tuple[float, float, float, float]


def _lerp(a: float, b: float, t):
    # exact at t == 0 and t == 1
    return (1 - t) * a + t * b


def map_linear(x, in_low, in_high, out_low, out_high):
    """Affine map of ``x`` from [in_low, in_high] onto [out_low, out_high].

    Works element-wise when ``x`` is a numpy array.
    """
    if in_high == in_low:
        raise ValueError("Input range must not be empty.")
    t = (x - in_low) / (in_high - in_low)
    return _lerp(out_low, out_high, t)


def compute_bounds(center: complex, zoom: float, width: int, height: int) -> Bounds:
    """Return (min_x, min_y, max_x, max_y) of the viewport around ``center``.

    The horizontal half-span is ``1/zoom``; the vertical one is scaled by
    ``height/width`` so pixels stay square.
    """
    zoom = check_zoom(zoom)
    offset = 1.0 / zoom
    stretch = float(height) / float(width)

    cx, cy = center.real, center.imag
    min_x = cx - offset
    max_x = cx + offset
    min_y = cy - offset * stretch
    max_y = cy + offset * stretch
    return min_x, min_y, max_x, max_y

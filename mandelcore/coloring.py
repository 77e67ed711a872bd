"""Histogram (cumulative distribution) coloring of an iteration buffer."""

import numpy as np


def cumulative_hues(histogram: np.ndarray) -> np.ndarray:
    """
    Prefix sums of the normalised histogram.

    Entry ``k`` is the share of escaped pixels whose count is below ``k``;
    the array has ``len(histogram) + 1`` entries so that a count equal to
    the iteration bound maps to the mass of the whole histogram.
    """
    histogram = np.asarray(histogram)
    prefix = np.zeros(histogram.shape[0] + 1, dtype=np.float64)
    total = int(histogram.sum())
    if total == 0:
        return prefix
    prefix[1:] = np.cumsum(histogram.astype(np.float64) / float(total))
    # rounding can carry the last sums a few ulps past 1.0
    np.minimum(prefix, 1.0, out=prefix)
    return prefix


def colorize(buffer: np.ndarray, histogram: np.ndarray) -> np.ndarray:
    """Map every iteration count in ``buffer`` to a hue in [0, 1]."""
    prefix = cumulative_hues(histogram)
    return prefix[np.asarray(buffer, dtype=np.intp)]

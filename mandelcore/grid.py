from __future__ import annotations

from concurrent.futures import ProcessPoolExecutor
from dataclasses import dataclass
from typing import List, Optional, Tuple

import numpy as np

from mandelcore.evaluator import evaluate
from mandelcore.mapping import Bounds, map_linear
from mandelcore.util.logging_setup import configure_worker_logging, forward_worker_logs, get_logger

DEFAULT_BAND_HEIGHT = 32

_G = {}


@dataclass(frozen=True)
class _BandParams:
    re_axis: Tuple[float, ...]
    im_axis: Tuple[float, ...]
    max_iterations: int


def _init_worker(params: _BandParams, log_queue, log_level: int) -> None:
    _G["params"] = params
    configure_worker_logging(log_queue, log_level)


def _evaluate_band(params: _BandParams, y0: int, y1: int) -> Tuple[int, np.ndarray, np.ndarray]:
    max_iter = params.max_iterations
    re_axis = params.re_axis
    counts = np.empty((len(re_axis), y1 - y0), dtype=np.uint32)

    for yi, y in enumerate(range(y0, y1)):
        im = params.im_axis[y]
        for x, re in enumerate(re_axis):
            counts[x, yi] = evaluate(complex(re, im), max_iter)

    escaped = counts[counts != max_iter]
    partial = np.bincount(escaped.astype(np.intp), minlength=max_iter).astype(np.uint64)
    return y0, counts, partial


def _pool_band(y0_y1: Tuple[int, int]):
    y0, y1 = y0_y1
    result = _evaluate_band(_G["params"], y0, y1)
    get_logger().debug("Band rows %s..%s done", y0, y1)
    return result


def partition_rows(height: int, band_height: int) -> List[Tuple[int, int]]:
    """Split ``range(height)`` into consecutive half-open row bands."""
    if band_height < 1:
        raise ValueError("band_height must be >= 1")
    bands: List[Tuple[int, int]] = []
    y = 0
    while y < height:
        y1 = min(height, y + band_height)
        bands.append((y, y1))
        y = y1
    return bands


def run_grid(
    *,
    width: int,
    height: int,
    bounds: Bounds,
    max_iterations: int,
    workers: Optional[int] = None,
    band_height: int = DEFAULT_BAND_HEIGHT,
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Evaluate every pixel of a ``width`` x ``height`` grid.

    Returns ``(buffer, histogram)`` where ``buffer[x, y]`` holds the escape
    count of pixel (x, y) and ``histogram[i]`` the number of pixels that
    escaped at iteration ``i``. Bands are evaluated independently, each with
    its own partial histogram; the partials are summed only once every band
    has finished.
    """
    if workers is not None and workers < 1:
        raise ValueError("workers must be >= 1")

    logger = get_logger()
    min_x, min_y, max_x, max_y = bounds
    params = _BandParams(
        re_axis=tuple(map_linear(np.arange(width, dtype=np.float64), 0, width, min_x, max_x).tolist()),
        im_axis=tuple(map_linear(np.arange(height, dtype=np.float64), 0, height, min_y, max_y).tolist()),
        max_iterations=max_iterations,
    )
    bands = partition_rows(height, band_height)

    if workers == 1:
        results = [_evaluate_band(params, y0, y1) for y0, y1 in bands]
    else:
        with forward_worker_logs() as log_queue, ProcessPoolExecutor(
            max_workers=workers,
            initializer=_init_worker,
            initargs=(params, log_queue, logger.getEffectiveLevel()),
        ) as pool:
            results = list(pool.map(_pool_band, bands))

    buffer = np.empty((width, height), dtype=np.uint32)
    histogram = np.zeros(max_iterations, dtype=np.uint64)
    for y0, counts, partial in results:
        buffer[:, y0:y0 + counts.shape[1]] = counts
        histogram += partial

    logger.debug("Grid %sx%s evaluated in %s bands (workers=%s)", width, height, len(bands), workers)
    return buffer, histogram

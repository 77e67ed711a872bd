from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Optional

import numpy as np

from mandelcore.coloring import colorize
from mandelcore.errors import check_dimension, check_iterations, check_zoom
from mandelcore.grid import DEFAULT_BAND_HEIGHT, run_grid
from mandelcore.mapping import Bounds, compute_bounds
from mandelcore.util.logging_setup import get_logger

DEFAULT_ZOOM_LEVEL = 0.5
DEFAULT_MAX_ITERATIONS = 1000


def _frozen(arr: np.ndarray) -> np.ndarray:
    arr.flags.writeable = False
    return arr


@dataclass(frozen=True)
class ViewSnapshot:
    """Configuration of a view captured at one instant."""

    width: int
    height: int
    center: complex
    zoom: float
    max_iterations: int
    bounds: Bounds


@dataclass(frozen=True)
class GenerationResult:
    snapshot: ViewSnapshot
    buffer: np.ndarray
    histogram: np.ndarray
    hue: np.ndarray

    @property
    def escaped(self) -> int:
        return int(self.histogram.sum())


class FractalView:
    """
    A fixed-size pixel grid over a pan/zoomable region of the complex plane.

    Setters may be called from any thread. ``generate`` works from a
    snapshot taken when it starts, so changes made while it runs only show
    up in the next generation.
    """

    def __init__(
        self,
        width: int,
        height: int,
        center: complex,
        *,
        zoom: float = DEFAULT_ZOOM_LEVEL,
        max_iterations: int = DEFAULT_MAX_ITERATIONS,
        workers: Optional[int] = None,
        band_height: int = DEFAULT_BAND_HEIGHT,
    ) -> None:
        self._width = check_dimension("width", width)
        self._height = check_dimension("height", height)
        if workers is not None and workers < 1:
            raise ValueError("workers must be >= 1")
        if band_height < 1:
            raise ValueError("band_height must be >= 1")
        self.workers = workers
        self.band_height = band_height

        self._lock = threading.Lock()
        self._center = complex(center)
        self._max_iterations = check_iterations(max_iterations)
        self._zoom = check_zoom(zoom)
        self._bounds = compute_bounds(self._center, self._zoom, self._width, self._height)

        self._buffer = _frozen(np.zeros((self._width, self._height), dtype=np.uint32))
        self._histogram = _frozen(np.zeros(self._max_iterations, dtype=np.uint64))
        self._hue = _frozen(np.zeros((self._width, self._height), dtype=np.float64))
        self._result: Optional[GenerationResult] = None

    def __repr__(self) -> str:
        return (f"FractalView({self._width}x{self._height}, center={self._center!r}, "
                f"zoom={self._zoom!r}, max_iterations={self._max_iterations})")

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def center(self) -> complex:
        return self._center

    @property
    def zoom(self) -> float:
        return self._zoom

    @property
    def max_iterations(self) -> int:
        return self._max_iterations

    @property
    def bounds(self) -> Bounds:
        return self._bounds

    @property
    def buffer(self) -> np.ndarray:
        return self._buffer

    @property
    def histogram(self) -> np.ndarray:
        return self._histogram

    @property
    def hue(self) -> np.ndarray:
        return self._hue

    @property
    def last_result(self) -> Optional[GenerationResult]:
        return self._result

    def set_center(self, center: complex) -> None:
        center = complex(center)
        with self._lock:
            bounds = compute_bounds(center, self._zoom, self._width, self._height)
            self._center, self._bounds = center, bounds
        get_logger().debug("Center set to %s bounds=%s", center, bounds)

    def set_zoom(self, zoom: float) -> None:
        zoom = check_zoom(zoom)
        with self._lock:
            bounds = compute_bounds(self._center, zoom, self._width, self._height)
            self._zoom, self._bounds = zoom, bounds
        get_logger().debug("Zoom set to %s bounds=%s", zoom, bounds)

    def scale_zoom(self, factor: float) -> None:
        with self._lock:
            zoom = check_zoom(self._zoom * factor)
            self._zoom = zoom
            self._bounds = compute_bounds(self._center, zoom, self._width, self._height)
        get_logger().debug("Zoom scaled by %s to %s", factor, zoom)

    def set_max_iterations(self, max_iterations: int) -> None:
        max_iterations = check_iterations(max_iterations)
        with self._lock:
            # counts from the old bound may exceed the new one
            self._max_iterations = max_iterations
            self._buffer = _frozen(np.zeros((self._width, self._height), dtype=np.uint32))
            self._histogram = _frozen(np.zeros(max_iterations, dtype=np.uint64))
            self._hue = _frozen(np.zeros((self._width, self._height), dtype=np.float64))
            self._result = None
        get_logger().debug("max_iterations set to %s", max_iterations)

    def snapshot(self) -> ViewSnapshot:
        with self._lock:
            return ViewSnapshot(
                width=self._width,
                height=self._height,
                center=self._center,
                zoom=self._zoom,
                max_iterations=self._max_iterations,
                bounds=self._bounds,
            )

    def generate(self) -> GenerationResult:
        """Recompute buffer, histogram and hue for the current configuration.

        Blocks until every pixel has been evaluated and colored.
        """
        logger = get_logger()
        snap = self.snapshot()
        logger.info("Generate start size=%sx%s bounds=%s iter=%s",
                    snap.width, snap.height, snap.bounds, snap.max_iterations)

        buffer, histogram = run_grid(
            width=snap.width,
            height=snap.height,
            bounds=snap.bounds,
            max_iterations=snap.max_iterations,
            workers=self.workers,
            band_height=self.band_height,
        )
        hue = colorize(buffer, histogram)

        result = GenerationResult(
            snapshot=snap,
            buffer=_frozen(buffer),
            histogram=_frozen(histogram),
            hue=_frozen(hue),
        )
        with self._lock:
            if self._max_iterations == snap.max_iterations:
                self._buffer, self._histogram, self._hue = result.buffer, result.histogram, result.hue
                self._result = result
            else:
                logger.debug("max_iterations changed during generate; result not stored")

        logger.info("Generate done escaped=%s/%s", result.escaped, snap.width * snap.height)
        return result


def create(width: int, height: int, center: complex, **options) -> FractalView:
    return FractalView(width, height, center, **options)

def set_center(view: FractalView, center: complex) -> None:
    view.set_center(center)

def get_center(view: FractalView) -> complex:
    return view.center

def set_zoom(view: FractalView, zoom: float) -> None:
    view.set_zoom(zoom)

def scale_zoom(view: FractalView, factor: float) -> None:
    view.scale_zoom(factor)

def get_zoom(view: FractalView) -> float:
    return view.zoom

def get_bounds(view: FractalView) -> Bounds:
    return view.bounds

def set_max_iterations(view: FractalView, max_iterations: int) -> None:
    view.set_max_iterations(max_iterations)

def get_max_iterations(view: FractalView) -> int:
    return view.max_iterations

def generate(view: FractalView) -> GenerationResult:
    return view.generate()

def get_buffer(view: FractalView) -> np.ndarray:
    return view.buffer

def get_histogram(view: FractalView) -> np.ndarray:
    return view.histogram

def get_hue(view: FractalView) -> np.ndarray:
    return view.hue

class MandelcoreError(ValueError):
    """Base class for configuration errors raised by the engine."""


class InvalidDimension(MandelcoreError):
    """Width or height is not a positive integer."""


class InvalidIterationBound(MandelcoreError):
    """max_iterations is not a positive integer."""


class InvalidZoom(MandelcoreError):
    """Zoom level is not a positive finite number."""


def _is_int(value) -> bool:
    # numpy integer scalars expose __index__ as well
    return not isinstance(value, bool) and hasattr(value, "__index__")


def check_dimension(name: str, value) -> int:
    if not _is_int(value) or int(value) <= 0:
        raise InvalidDimension(f"{name} must be a positive integer, got {value!r}")
    return int(value)


def check_iterations(value) -> int:
    if not _is_int(value) or int(value) <= 0:
        raise InvalidIterationBound(f"max_iterations must be a positive integer, got {value!r}")
    return int(value)


def check_zoom(value) -> float:
    try:
        zoom = float(value)
    except (TypeError, ValueError) as e:
        raise InvalidZoom(f"zoom must be a positive number, got {value!r}") from e
    if not zoom > 0 or zoom == float("inf"):
        raise InvalidZoom(f"zoom must be a positive number, got {value!r}")
    return zoom

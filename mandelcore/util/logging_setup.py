import contextlib
import logging
import logging.handlers
import multiprocessing as mp
from typing import Iterator, Optional

_LOGGER_NAME = "mandelcore"

def get_logger() -> logging.Logger:
    return logging.getLogger(_LOGGER_NAME)

def _build_formatter() -> logging.Formatter:
    return logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(processName)s %(levelname)s %(name)s - %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
    )

def _replace_handlers(logger: logging.Logger, *handlers: logging.Handler) -> None:
    for h in list(logger.handlers):
        logger.removeHandler(h)
        h.close()
    for h in handlers:
        logger.addHandler(h)

def configure_logging(
    *,
    level: int = logging.INFO,
    console: bool = True,
    log_file: Optional[str] = None,
    rotate_bytes: int = 5 * 1024 * 1024,
    rotate_count: int = 5,
) -> logging.Logger:
    """Give the engine logger its own console and rotating-file handlers.

    Records from pool workers are routed to these same handlers while a
    grid is being evaluated (see ``forward_worker_logs``).
    """
    logger = get_logger()
    logger.setLevel(level)
    logger.propagate = False
    fmt = _build_formatter()
    handlers = []
    if console:
        handlers.append(logging.StreamHandler())
    if log_file:
        handlers.append(logging.handlers.RotatingFileHandler(
            log_file, maxBytes=rotate_bytes, backupCount=rotate_count, encoding="utf-8"
        ))
    for h in handlers:
        h.setLevel(level)
        h.setFormatter(fmt)
    _replace_handlers(logger, *handlers)
    return logger

@contextlib.contextmanager
def forward_worker_logs() -> Iterator[Optional[mp.Queue]]:
    """Collect worker-process records on a queue drained into the engine handlers.

    Yields ``None`` when the engine logger has no handlers of its own, in
    which case workers keep whatever logging they inherited.
    """
    handlers = list(get_logger().handlers)
    if not handlers:
        yield None
        return
    queue = mp.Queue(-1)
    listener = logging.handlers.QueueListener(queue, *handlers, respect_handler_level=True)
    listener.start()
    try:
        yield queue
    finally:
        listener.stop()
        queue.close()

def configure_worker_logging(queue: Optional[mp.Queue], level: int) -> None:
    """Point a worker's engine logger at the parent's forwarding queue."""
    if queue is None:
        return
    logger = get_logger()
    logger.setLevel(level)
    logger.propagate = False
    qh = logging.handlers.QueueHandler(queue)
    qh.setLevel(level)
    _replace_handlers(logger, qh)

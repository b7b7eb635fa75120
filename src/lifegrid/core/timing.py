"""Scoped timing around universe operations."""

from typing import Any, Callable, Optional, TypeVar
import functools
import logging
import time

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


def log_report(name: str, elapsed: float) -> None:
    """Default report: log the elapsed time in milliseconds."""
    logger.debug("%s: %.3fms", name, elapsed * 1000.0)


class Timer:
    """Measure the time spent inside a ``with`` block.

    The report callback runs on every exit path, including when the block
    raises; the exception still propagates.

    Example:
        with Timer("Universe.tick"):
            universe.tick()
    """

    def __init__(self, name: str, report: Optional[Callable[[str, float], None]] = None) -> None:
        self.name = name
        self.report = report or log_report
        self.start_time: Optional[float] = None
        self.elapsed: Optional[float] = None

    def __enter__(self) -> "Timer":
        self.start_time = time.perf_counter()
        self.elapsed = None
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> bool:
        self.elapsed = time.perf_counter() - self.start_time
        self.report(self.name, self.elapsed)
        return False


def timed(name: Optional[str] = None, report: Optional[Callable[[str, float], None]] = None) -> Callable[[F], F]:
    """Decorator running each call of the wrapped function inside a Timer."""

    def decorator(func: F) -> F:
        label = name or func.__qualname__

        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            with Timer(label, report):
                return func(*args, **kwargs)

        return wrapper  # type: ignore[return-value]

    return decorator

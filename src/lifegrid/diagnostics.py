"""Logging setup and reporting of uncaught errors."""

from typing import Callable, Optional
import logging
import sys

logger = logging.getLogger("lifegrid")

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_previous_excepthook: Optional[Callable] = None


def configure_logging(verbose: bool = False) -> logging.Logger:
    """Attach a stream handler to the package logger.

    Args:
        verbose: Log at DEBUG instead of INFO

    Returns:
        The package logger
    """
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    return logger


def log_uncaught(exc_type, exc_value, exc_traceback) -> None:
    """Log an exception at CRITICAL; KeyboardInterrupt goes to the previous hook.

    Usable as ``sys.excepthook`` and as ``tk.Tk.report_callback_exception``.
    """
    if issubclass(exc_type, KeyboardInterrupt):
        previous = _previous_excepthook or sys.__excepthook__
        previous(exc_type, exc_value, exc_traceback)
        return
    logger.critical("Uncaught exception", exc_info=(exc_type, exc_value, exc_traceback))


def install_panic_hook() -> None:
    """Route uncaught exceptions to the package logger.

    Calling this more than once has no further effect.
    """
    global _previous_excepthook

    if _previous_excepthook is not None:
        return
    _previous_excepthook = sys.excepthook
    sys.excepthook = log_uncaught


def uninstall_panic_hook() -> None:
    """Restore the exception hook that was active before install_panic_hook()."""
    global _previous_excepthook

    if _previous_excepthook is None:
        return
    sys.excepthook = _previous_excepthook
    _previous_excepthook = None

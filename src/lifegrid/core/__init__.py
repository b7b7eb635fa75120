"""Core cellular automata logic."""

from .universe import Universe
from .patterns import Pattern, PatternLibrary, GLIDER, PULSAR, PULSAR_STUB
from .timing import Timer, timed
from .metrics import FrameRateMonitor

__all__ = [
    "Universe",
    "Pattern",
    "PatternLibrary",
    "GLIDER",
    "PULSAR",
    "PULSAR_STUB",
    "Timer",
    "timed",
    "FrameRateMonitor",
]

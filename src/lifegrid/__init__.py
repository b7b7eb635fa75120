"""Toroidal Conway's Game of Life universe with terminal and Tkinter frontends."""

__version__ = "0.1.0"

from .core.universe import Universe
from .core.patterns import Pattern, PatternLibrary
from .core.timing import Timer, timed

__all__ = ["Universe", "Pattern", "PatternLibrary", "Timer", "timed"]

"""User interface frontends for the Game of Life universe."""

from .cli import CLIUniverse

__all__ = ["CLIUniverse"]

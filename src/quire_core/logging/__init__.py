"""Quire Logging - Hierarchical colored logging for post rendering."""

from .logger import (
    CYAN,
    GREEN,
    LIGHT_BLUE,
    MAGENTA,
    ORANGE,
    RED,
    RESET,
    YELLOW,
    ElementLogger,
    LogConfig,
    PostLogger,
    QuireLogger,
)

__all__ = [
    # Logger classes
    "QuireLogger",
    "PostLogger",
    "ElementLogger",
    "LogConfig",
    # Colors
    "RESET",
    "GREEN",
    "RED",
    "YELLOW",
    "ORANGE",
    "LIGHT_BLUE",
    "CYAN",
    "MAGENTA",
]

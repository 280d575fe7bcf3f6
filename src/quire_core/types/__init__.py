"""Shared types for Quire."""

from .enums import ElementClass, FeedType, LogFormat, LogLevel, MachineDataKind
from .validation import ValidationIssue, ValidationResult

__all__ = [
    "ElementClass",
    "FeedType",
    "LogFormat",
    "LogLevel",
    "MachineDataKind",
    "ValidationIssue",
    "ValidationResult",
]

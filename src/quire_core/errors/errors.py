"""Quire error types."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field, replace
from datetime import UTC, datetime
from enum import Enum
from typing import Any, TextIO


class ErrorCategory(str, Enum):
    """Error source categories."""

    IO = "IO"
    PARSE = "PARSE"
    FILE = "FILE"
    CONFIG = "CONFIG"
    SYSTEM = "SYSTEM"


@dataclass
class QuireError(Exception):
    """Structured error with context. Base exception for all Quire errors."""

    # Identity
    code: str  # e.g., "PARSE_ERROR"
    category: ErrorCategory

    # Messages
    message: str  # Human-readable summary
    detail: str | None = None  # Extended explanation
    suggestion: str | None = None  # Actionable fix
    exit_code: int = 1

    # Context
    subject: str | None = None  # Logical field or element being processed
    op: str | None = None  # "write", "open", "read"
    position: int | None = None  # Byte offset into the template
    fragment: str | None = None  # Offending text
    path: str | None = None  # Display path of a backing file
    output_name: str | None = None  # Artifact being produced

    cause: "QuireError | None" = None

    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))

    def __post_init__(self) -> None:
        """Set Exception message."""
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Serialize for machine consumption.

        Returns:
            Dictionary representation of the error
        """
        return {
            "code": self.code,
            "category": self.category.value,
            "message": self.message,
            "detail": self.detail,
            "suggestion": self.suggestion,
            "exit_code": self.exit_code,
            "subject": self.subject,
            "op": self.op,
            "position": self.position,
            "fragment": self.fragment,
            "path": self.path,
            "output_name": self.output_name,
            "timestamp": self.timestamp.isoformat(),
            "cause": self.cause.to_dict() if self.cause else None,
        }

    def with_context(self, output_name: str | None = None) -> "QuireError":
        """Return copy tagged with the artifact being produced.

        Args:
            output_name: Name of the output (e.g. "post.html")

        Returns:
            New QuireError instance with updated context
        """
        return replace(self, output_name=output_name or self.output_name)

    def print_error(self, out: TextIO) -> None:
        """Write a one-line human-readable description to out."""
        line = self.message
        if self.detail:
            line += f": {self.detail}"
        if not line.endswith("."):
            line += "."
        print(line, file=out)


@dataclass
class ErrorTemplate:
    """Template for creating errors."""

    code: str
    category: ErrorCategory
    message_template: str  # "File {path} for {subject} not found"
    detail_template: str | None = None
    suggestion_template: str | None = None
    default_exit_code: int = 1


@dataclass
class MatchResult:
    """Result of matching an exception."""

    quire_code: str
    context: dict[str, Any]


class ErrorMatcher(ABC):
    """Base class for exception matchers."""

    @abstractmethod
    def matches(self, error: Exception) -> bool:
        """Check if this matcher handles the error.

        Args:
            error: Exception to check

        Returns:
            True if this matcher can handle the error
        """

    @abstractmethod
    def extract(self, error: Exception) -> MatchResult:
        """Extract Quire error info from the exception.

        Args:
            error: Exception to extract from

        Returns:
            MatchResult with error code and context
        """

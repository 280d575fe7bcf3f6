"""Shared enumerations for Quire."""

from enum import Enum


class LogLevel(str, Enum):
    """Log verbosity level."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARN = "WARN"
    ERROR = "ERROR"


class LogFormat(str, Enum):
    """Log output format."""

    COLORED = "colored"
    JSON = "json"


class ElementClass(str, Enum):
    """How a wrapped element's data is interpreted."""

    LINK = "link"
    LITERAL = "literal"
    FILE = "file"


class FeedType(str, Enum):
    """Syndication feed flavour."""

    RSS = "rss"

    @classmethod
    def parse(cls, value: str) -> "FeedType | None":
        """Case-insensitive lookup, None if unrecognised."""
        try:
            return cls(value.lower())
        except ValueError:
            return None

    @property
    def display_name(self) -> str:
        return "RSS"

    @property
    def extension(self) -> str:
        return "xml"


class MachineDataKind(str, Enum):
    """Machine-readable metadata record format."""

    JSON = "json"

    @classmethod
    def parse(cls, value: str) -> "MachineDataKind | None":
        """Case-insensitive lookup, None if unrecognised."""
        try:
            return cls(value.lower())
        except ValueError:
            return None

    @property
    def display_name(self) -> str:
        return "JSON"

    @property
    def extension(self) -> str:
        return "json"

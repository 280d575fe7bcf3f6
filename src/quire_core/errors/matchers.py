"""Error matchers for converting exceptions to QuireErrors."""

from typing import Any

from .errors import ErrorMatcher, MatchResult


class FileNotFoundMatcher(ErrorMatcher):
    """Matches missing backing files."""

    def matches(self, error: Exception) -> bool:
        """Check if error is a missing-file error."""
        return isinstance(error, FileNotFoundError)

    def extract(self, error: Exception) -> MatchResult:
        """Extract missing-file info.

        Returns:
            MatchResult with FILE_NOT_FOUND code
        """
        context: dict[str, Any] = {}
        filename = getattr(error, "filename", None)
        if filename is not None:
            context["path"] = str(filename)
        return MatchResult(quire_code="FILE_NOT_FOUND", context=context)


class UnicodeDecodeMatcher(ErrorMatcher):
    """Matches backing files that are not valid UTF-8."""

    def matches(self, error: Exception) -> bool:
        """Check if error is a decoding error."""
        return isinstance(error, UnicodeDecodeError)

    def extract(self, error: Exception) -> MatchResult:
        """Extract decoding error info.

        Returns:
            MatchResult with PARSE_ERROR code
        """
        return MatchResult(
            quire_code="PARSE_ERROR",
            context={"kind": "UTF-8 string", "reason": str(error)},
        )


class OSErrorMatcher(ErrorMatcher):
    """Matches any other I/O failure."""

    def matches(self, error: Exception) -> bool:
        """Check if error is an OS-level I/O error."""
        return isinstance(error, OSError)

    def extract(self, error: Exception) -> MatchResult:
        """Extract I/O error info.

        Returns:
            MatchResult with IO_ERROR code
        """
        return MatchResult(quire_code="IO_ERROR", context={"reason": str(error)})


class GenericErrorMatcher(ErrorMatcher):
    """Fallback matcher for any exception."""

    def matches(self, error: Exception) -> bool:
        """Always matches."""
        return True

    def extract(self, error: Exception) -> MatchResult:
        """Extract generic error info.

        Returns:
            MatchResult with INTERNAL_ERROR code
        """
        return MatchResult(
            quire_code="INTERNAL_ERROR",
            context={"detail": str(error), "error_type": type(error).__name__},
        )


class ErrorMatcherChain:
    """Ordered chain of matchers. First match wins."""

    def __init__(self) -> None:
        """Initialize matcher chain with built-in matchers."""
        self.matchers: list[ErrorMatcher] = []
        self._load_builtin_matchers()

    def match(self, error: Exception) -> MatchResult:
        """Find first matching matcher and extract result.

        Args:
            error: Exception to match

        Returns:
            MatchResult from first matching matcher
        """
        for matcher in self.matchers:
            if matcher.matches(error):
                return matcher.extract(error)

        # Unreachable while GenericErrorMatcher is last
        return MatchResult(
            quire_code="INTERNAL_ERROR",
            context={"detail": str(error), "error_type": type(error).__name__},
        )

    def _load_builtin_matchers(self) -> None:
        """Load built-in matchers in priority order."""
        # FileNotFoundError is an OSError, so it must come first
        self.matchers = [
            FileNotFoundMatcher(),
            UnicodeDecodeMatcher(),
            OSErrorMatcher(),
            GenericErrorMatcher(),  # Fallback - must be last
        ]

"""Error factory for creating QuireErrors from any exception type."""

from typing import Any

from .errors import QuireError
from .matchers import ErrorMatcherChain
from .registry import ErrorRegistry


class ErrorFactory:
    """Creates QuireErrors from any exception type."""

    def __init__(
        self,
        registry: ErrorRegistry | None = None,
        matcher_chain: ErrorMatcherChain | None = None,
    ):
        """Initialize error factory.

        Args:
            registry: Error registry (defaults to new ErrorRegistry())
            matcher_chain: Matcher chain (defaults to new ErrorMatcherChain())
        """
        self.registry = registry or ErrorRegistry()
        self.matcher_chain = matcher_chain or ErrorMatcherChain()

    def from_exception(self, error: Exception, **context: Any) -> QuireError:
        """Convert any exception to QuireError.

        Explicit context wins over what the matcher extracted, except that a
        matcher-supplied reason is kept when the caller gave none.

        Args:
            error: Exception to convert
            **context: Context variables (subject, op, path, ...)

        Returns:
            QuireError instance
        """
        if isinstance(error, QuireError):
            return error.with_context(output_name=context.get("output_name"))

        match_result = self.matcher_chain.match(error)

        merged = match_result.context.copy()
        merged.update({k: v for k, v in context.items() if v is not None})

        return self.registry.create(code=match_result.quire_code, context=merged)

    def create(
        self,
        code: str,
        context: dict[str, Any] | None = None,
        **kwargs: Any,
    ) -> QuireError:
        """Create QuireError directly from code.

        Args:
            code: Error code
            context: Context variables for template interpolation
            **kwargs: Additional context variables

        Returns:
            QuireError instance
        """
        merged_context = dict(context or {})
        merged_context.update(kwargs)

        return self.registry.create(code=code, context=merged_context)


# Convenience singleton
_default_factory: ErrorFactory | None = None


def get_error_factory() -> ErrorFactory:
    """Get default error factory singleton."""
    global _default_factory  # noqa: PLW0603
    if _default_factory is None:
        _default_factory = ErrorFactory()
    return _default_factory


def create_error(code: str, **context: Any) -> QuireError:
    """Convenience function to create error.

    Args:
        code: Error code
        **context: Context variables for template interpolation

    Returns:
        QuireError instance
    """
    return get_error_factory().create(code, context)


def wrap_error(error: Exception, **context: Any) -> QuireError:
    """Convenience function to convert a raw exception.

    Args:
        error: Exception raised by the standard library or a sink
        **context: Context variables (subject, op, path, ...)

    Returns:
        QuireError instance
    """
    return get_error_factory().from_exception(error, **context)

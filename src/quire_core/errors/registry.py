"""Error registry for creating errors from templates."""

from typing import Any

from .errors import ErrorCategory, ErrorTemplate, QuireError

# Context keys copied verbatim onto the created error
_CONTEXT_FIELDS = ("subject", "op", "position", "fragment", "path", "output_name")


def op_gerund(op: str) -> str:
    """Turn an operation verb into its capitalised continuous form.

    E.g. "write" -> "Writing", "open" -> "Opening".
    """
    stem = op[:-1] if op.endswith("e") else op
    return (stem + "ing")[:1].upper() + (stem + "ing")[1:]


class ErrorRegistry:
    """Registry of error templates. Creates errors from templates + context."""

    def __init__(self) -> None:
        """Initialize error registry with built-in templates."""
        self._templates: dict[str, ErrorTemplate] = {}
        self._load_builtin_templates()

    def get_template(self, code: str) -> ErrorTemplate | None:
        """Get template by error code.

        Args:
            code: Error code to look up

        Returns:
            ErrorTemplate if found, None otherwise
        """
        return self._templates.get(code)

    def list_codes(self) -> list[str]:
        """List all registered error codes."""
        return list(self._templates.keys())

    def create(
        self,
        code: str,
        context: dict[str, Any] | None = None,
        cause: QuireError | None = None,
    ) -> QuireError:
        """Create error instance from template + context.

        Args:
            code: Error code
            context: Context variables for template interpolation
            cause: Optional cause error

        Returns:
            QuireError instance

        Raises:
            ValueError: If error code not found
        """
        template = self.get_template(code)
        if not template:
            msg = f"Unknown error code: {code}"
            raise ValueError(msg)

        context = dict(context or {})
        if context.get("op"):
            context.setdefault("op_gerund", op_gerund(context["op"]))

        message = self._interpolate(template.message_template, context)
        detail = self._interpolate(template.detail_template, context)
        suggestion = self._interpolate(template.suggestion_template, context)

        if message is None:
            message = f"Error {code}"

        return QuireError(
            code=template.code,
            category=template.category,
            message=message,
            detail=detail,
            suggestion=suggestion,
            exit_code=template.default_exit_code,
            cause=cause,
            **{name: context.get(name) for name in _CONTEXT_FIELDS},
        )

    def _interpolate(
        self,
        template: str | None,
        context: dict[str, Any],
    ) -> str | None:
        """Safe string interpolation.

        Args:
            template: Template string with {var} placeholders
            context: Context variables

        Returns:
            Interpolated string or None if template is None
        """
        if template is None:
            return None

        try:
            return template.format(**context)
        except KeyError:
            # Missing context variable - return template as-is
            return template

    def _load_builtin_templates(self) -> None:
        """Load hardcoded built-in templates."""
        self._templates["IO_ERROR"] = ErrorTemplate(
            code="IO_ERROR",
            category=ErrorCategory.IO,
            message_template="{op_gerund} {subject} failed",
            detail_template="{reason}",
            suggestion_template="Check that the output sink is writable and the disk is not full",
            default_exit_code=1,
        )

        self._templates["PARSE_ERROR"] = ErrorTemplate(
            code="PARSE_ERROR",
            category=ErrorCategory.PARSE,
            message_template="Failed to parse {kind} for {subject}",
            detail_template="{reason}",
            suggestion_template="Check the template or element syntax",
            default_exit_code=2,
        )

        self._templates["FILE_NOT_FOUND"] = ErrorTemplate(
            code="FILE_NOT_FOUND",
            category=ErrorCategory.FILE,
            message_template="File {path} for {subject} not found",
            suggestion_template="Check that the path is relative to the post directory",
            default_exit_code=3,
        )

        self._templates["CONFIG_INVALID"] = ErrorTemplate(
            code="CONFIG_INVALID",
            category=ErrorCategory.CONFIG,
            message_template="Invalid configuration",
            detail_template="{detail}",
            suggestion_template="Check the configuration file against the documented keys",
            default_exit_code=5,
        )

        self._templates["INTERNAL_ERROR"] = ErrorTemplate(
            code="INTERNAL_ERROR",
            category=ErrorCategory.SYSTEM,
            message_template="Internal error ({error_type})",
            detail_template="{detail}",
            default_exit_code=6,
        )

"""Template parsing utilities."""

import re
from collections.abc import Callable
from datetime import datetime

from .dates import compile_strftime, format_rfc2822, format_rfc3339

DateFormatter = Callable[[datetime], str]

_RFC2822_NAMES = frozenset({"rfc2822", "rfc_2822", "RFC2822", "RFC_2822"})
_RFC3339_NAMES = frozenset({"rfc3339", "rfc_3339", "RFC3339", "RFC_3339"})

_BRACE = re.compile(r"[{}]")


def find_brace(text: str, start: int = 0) -> int:
    """Index of the next "{" or "}" at or after start, -1 if none."""
    match = _BRACE.search(text, start)
    return match.start() if match is not None else -1


def parse_function_notation(spec: str) -> tuple[str, list[str]] | None:
    """Split "name(arg1, arg2)" into its name and trimmed arguments.

    E.g. 'date("%Y %B %d", post)' -> ("date", ['"%Y %B %d"', "post"]).

    Args:
        spec: Placeholder body, already trimmed

    Returns:
        (name, args), or None if spec has no "(" or no name before it.
        A missing closing ")" yields no arguments.
    """
    paren = spec.find("(")
    if paren == -1:
        return None

    name = spec[:paren].strip()
    if not name:
        return None

    rest = spec[paren + 1 :]
    closing = rest.rfind(")")
    if closing == -1:
        return name, []

    inner = rest[:closing].strip()
    if not inner:
        return name, []
    return name, [arg.strip() for arg in inner.split(",")]


def parse_date_format_specifier(spec: str) -> DateFormatter | None:
    """Resolve a date format argument to a formatter.

    Accepts the RFC 2822 / RFC 3339 names in their plain, underscored and
    upper-case spellings, or a double-quoted strftime pattern whose
    directives are all known.

    Args:
        spec: Format argument as written in the template

    Returns:
        Callable formatting a datetime, or None if unrecognised
    """
    spec = spec.strip()
    if spec in _RFC2822_NAMES:
        return format_rfc2822
    if spec in _RFC3339_NAMES:
        return format_rfc3339
    if len(spec) >= 2 and spec.startswith('"') and spec.endswith('"'):
        return compile_strftime(spec[1:-1])
    return None


def byte_length(text: str) -> int:
    """Length of text once encoded as UTF-8."""
    return len(text.encode("utf-8"))

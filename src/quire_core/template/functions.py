"""Placeholder function implementations: {date(...)} and {tags(...)}."""

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from quire_core.errors import QuireError, create_error

from .dates import Clock, now_local, now_utc
from .parser import parse_date_format_specifier
from .types import RenderContext

if TYPE_CHECKING:
    from quire_core.output.assets import OutputAssets


@dataclass
class FunctionCall:
    """One {name(args)} occurrence being evaluated."""

    name: str
    args: list[str]
    position: int  # Byte offset of the opening brace
    context: RenderContext
    clock: Clock
    assets: "OutputAssets"
    output_name: str

    def error(self, reason: str, fragment: str | None = None) -> QuireError:
        return create_error(
            "PARSE_ERROR",
            kind="unformatted input",
            subject=self.output_name,
            position=self.position,
            fragment=fragment,
            reason=reason,
        )


def function_date(call: FunctionCall) -> str:
    """Format the post date or the current time.

    {date(post|now_utc|now_local, rfc2822|rfc3339|"<strftime>")}
    """
    if len(call.args) != 2:
        raise call.error(
            f"{len(call.args)} is an invalid amount of arguments to two-argument "
            f"`date(of_what, format)` function, around position {call.position}"
        )

    of_what, spec = call.args
    formatter = parse_date_format_specifier(spec)
    if formatter is None:
        raise call.error(f"invalid date format specifier {spec} around position {call.position}", spec)

    if of_what == "post":
        when = call.context.post_date
    elif of_what == "now_utc":
        when = now_utc(call.clock)
    elif of_what == "now_local":
        when = now_local(call.clock)
    else:
        raise call.error(
            f"{of_what} is an unrecognised date specifier (accepted: post, now_{{utc,local}}), "
            f"around position {call.position}",
            of_what,
        )

    try:
        return formatter(when)
    except ValueError as e:
        raise call.error(f"cannot format date with {spec}: {e}", spec) from e


def render_tags(tags: list[str], html_class: str, assets: "OutputAssets") -> str:
    """Wrap each tag, separated by single spaces."""
    return " ".join(
        f"{assets.tag_head}{html_class}{assets.tag_center}{tag}{assets.tag_foot}" for tag in tags
    )


def function_tags(call: FunctionCall) -> str:
    """Render the post's tags, optionally with a custom HTML class.

    {tags(class)}
    """
    if len(call.args) > 1:
        raise call.error(
            f"{len(call.args)} is an invalid amount of arguments to one-argument "
            f"`tags([html-class])` function, around position {call.position}"
        )
    html_class = call.args[0] if call.args else call.assets.tag_default_class
    return render_tags(call.context.tags, html_class, call.assets)


# Registry of available placeholder functions
FUNCTIONS: dict[str, Callable[[FunctionCall], str]] = {
    "date": function_date,
    "tags": function_tags,
}

"""Template Engine implementation."""

import io
from collections.abc import Callable

from quire_core.errors import QuireError, create_error
from quire_core.output.assets import OutputAssets
from quire_core.output.sink import Sink, write_all

from .dates import Clock, system_clock
from .functions import FUNCTIONS, FunctionCall, render_tags
from .parser import byte_length, find_brace, parse_function_notation
from .types import RenderContext, RenderResult

# Placeholders that substitute a plain context field
FIELDS: dict[str, Callable[[RenderContext], str]] = {
    "language": lambda ctx: ctx.language,
    "author": lambda ctx: ctx.author,
    "title": lambda ctx: ctx.title,
    "blog_name": lambda ctx: ctx.blog_name,
    "number": lambda ctx: str(ctx.number),
    "raw_post_name": lambda ctx: ctx.raw_post_name,
    "quire-version": lambda ctx: ctx.version,
}


class TemplateEngine:
    """Fill out {placeholder} templates, writing straight to a byte sink.

    Supports:
    - Fields: {language}, {author}, {title}, {blog_name}, {number},
      {raw_post_name}, {quire-version}
    - Overlay lookups: {data-desc} (post-local first, then blog-wide)
    - Element lists: {styles}, {scripts}
    - Tags: {tags}, {tags(class)}
    - Dates: {date(post, rfc2822)}, {date(now_utc, "%Y %B %d")}
    - Escapes: {{ → {, }} → }

    Does NOT support:
    - Nested braces (the first } closes a placeholder)
    - Silent empty substitution (every placeholder must resolve)
    """

    def __init__(self, assets: OutputAssets | None = None, clock: Clock = system_clock) -> None:
        """Initialize template engine.

        Args:
            assets: Wrapper templates (defaults to the bundled ones)
            clock: Source of the current instant for now_* dates
        """
        self._assets = assets or OutputAssets.load()
        self._clock = clock
        self._functions = FUNCTIONS

    def render(
        self,
        template: str,
        context: RenderContext,
        sink: Sink,
        output_name: str = "template",
    ) -> RenderResult:
        """Render a template into sink.

        Output written before a failure stays in the sink.

        Args:
            template: Template text
            context: Values for the placeholders
            sink: Binary destination
            output_name: Name of the artifact, used in error messages

        Returns:
            RenderResult with the byte count and placeholders rendered

        Raises:
            QuireError(PARSE_ERROR) on malformed or unresolvable placeholders
            QuireError(IO_ERROR) if the sink fails
        """
        result = RenderResult(output_name=output_name, bytes_written=0)

        def write(data: str, subject: str) -> None:
            encoded = data.encode("utf-8")
            write_all(sink, encoded, subject)
            result.bytes_written += len(encoded)

        pos = 0
        byte_pos = 0
        while (idx := find_brace(template, pos)) != -1:
            before = template[pos:idx]
            write(before, "unformatted output")
            byte_pos += byte_length(before)

            if template.startswith("{{", idx):
                write("{", "escaped opening curly brace")
                byte_pos += 2
                pos = idx + 2
            elif template.startswith("}}", idx):
                write("}", "escaped closing curly brace")
                byte_pos += 2
                pos = idx + 2
            elif template[idx] == "}":
                raise self._parse_error(f"stray closing brace at position {byte_pos}", byte_pos, output_name)
            else:
                close = template.find("}", idx)
                if close == -1:
                    raise self._parse_error(
                        f"unmatched open brace at position {byte_pos}", byte_pos, output_name
                    )

                raw = template[idx + 1 : close]
                spec = raw.strip()
                self._substitute(spec, byte_pos, context, write, output_name)
                result.placeholders_rendered.append(spec)

                byte_pos += byte_length(raw) + 2
                pos = close + 1

        write(template[pos:], "unformatted output")
        return result

    def render_to_string(
        self,
        template: str,
        context: RenderContext,
        output_name: str = "template",
    ) -> str:
        """Render a template and return the text instead of writing it."""
        buffer = io.BytesIO()
        self.render(template, context, buffer, output_name)
        return buffer.getvalue().decode("utf-8")

    def validate(self, template: str) -> list[str]:
        """Check brace structure without resolving anything.

        Returns list of errors (empty if valid). Does NOT check that
        placeholders resolve.
        """
        errors: list[str] = []
        pos = 0
        while (idx := find_brace(template, pos)) != -1:
            if template.startswith(("{{", "}}"), idx):
                pos = idx + 2
            elif template[idx] == "}":
                errors.append(f"stray closing brace at position {byte_length(template[:idx])}")
                pos = idx + 1
            else:
                close = template.find("}", idx)
                if close == -1:
                    errors.append(f"unmatched open brace at position {byte_length(template[:idx])}")
                    break
                if not template[idx + 1 : close].strip():
                    errors.append(f"empty placeholder at position {byte_length(template[:idx])}")
                pos = close + 1
        return errors

    def extract_references(self, template: str) -> list[str]:
        """List the trimmed placeholder bodies, in order.

        E.g. "Hi {author}, {{x}} {date(post, rfc3339)}" → ["author", "date(post, rfc3339)"]
        """
        references: list[str] = []
        pos = 0
        while (idx := find_brace(template, pos)) != -1:
            if template.startswith(("{{", "}}"), idx):
                pos = idx + 2
                continue
            if template[idx] == "}":
                pos = idx + 1
                continue
            close = template.find("}", idx)
            if close == -1:
                break
            references.append(template[idx + 1 : close].strip())
            pos = close + 1
        return references

    def _substitute(
        self,
        spec: str,
        position: int,
        context: RenderContext,
        write: Callable[[str, str], None],
        output_name: str,
    ) -> None:
        """Resolve one placeholder body and write its value."""
        field = FIELDS.get(spec)
        if field is not None:
            write(field(context), f"substituted {spec} tag")
            return

        if spec in ("styles", "scripts"):
            kind = spec[:-1]
            for element in getattr(context, spec):
                write(element.head, f"{kind} tag header")
                write(element.content, f"{kind} tag content")
                write(element.foot, f"{kind} tag footer")
            return

        if spec == "tags":
            write(render_tags(context.tags, self._assets.tag_default_class, self._assets), "tags")
            return

        if spec.startswith("data-"):
            key = spec[len("data-") :]
            value = context.lookup_data(key)
            if value is None:
                raise self._parse_error(f"missing value for data-{key}", position, output_name, key)
            write(value, f"substituted data-{key} tag with value {value}")
            return

        parsed = parse_function_notation(spec)
        if parsed is None:
            raise self._parse_error(
                f"unrecognised format specifier {spec} at position {position}", position, output_name, spec
            )

        name, args = parsed
        function = self._functions.get(name)
        if function is None:
            raise self._parse_error(
                f"unrecognised format function {name} with arguments {args} at position {position}",
                position,
                output_name,
                spec,
            )

        call = FunctionCall(
            name=name,
            args=args,
            position=position,
            context=context,
            clock=self._clock,
            assets=self._assets,
            output_name=output_name,
        )
        write(function(call), f"{name}({', '.join(args)})")

    def _parse_error(
        self,
        reason: str,
        position: int,
        output_name: str,
        fragment: str | None = None,
    ) -> QuireError:
        return create_error(
            "PARSE_ERROR",
            kind="unformatted input",
            subject=output_name,
            position=position,
            fragment=fragment,
            reason=reason,
        )

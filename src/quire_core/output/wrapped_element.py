"""Injectable script and style units.

A wrapped element renders as head + content + foot, so a renderer can
write each part straight to a sink. File elements are resolved against a
base directory into literals before rendering.
"""

import posixpath
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

from quire_core.errors import create_error, wrap_error
from quire_core.types import ElementClass

ELEMENT_FIELDS = ("class", "data")

# (display form used in error messages, filesystem path)
BaseDir = tuple[str, Path]


@dataclass(frozen=True)
class ElementWrappers:
    """Framing strings for one element kind."""

    kind: str  # "script" or "style"
    link_head: str
    link_foot: str
    literal_head: str
    literal_foot: str


SCRIPT_WRAPPERS = ElementWrappers(
    kind="script",
    link_head='<script type="text/javascript" src="',
    link_foot='"></script>\n',
    literal_head='<script type="text/javascript">\n\n',
    literal_foot="\n\n</script>\n",
)

STYLE_WRAPPERS = ElementWrappers(
    kind="style",
    link_head='<link href="',
    link_foot='" rel="stylesheet" />\n',
    literal_head='<style type="text/css">\n\n',
    literal_foot="\n\n</style>\n",
)

# Unresolved files render visibly rather than silently
FILE_HEAD = "&lt;"
FILE_FOOT = "&gt;\n"


def normalise_relative(path: str) -> str:
    """Collapse "." and ".." segments and redundant separators."""
    return posixpath.normpath(path.replace("\\", "/"))


def compose_display_path(display_base: str, relative: str) -> str:
    """Join a display base and a relative path, adding "/" only if needed."""
    if not display_base or not relative:
        return display_base + relative
    if display_base[-1] in "/\\" or relative[0] in "/\\":
        return display_base + relative
    return f"{display_base}/{relative}"


def read_file(display: str, path: Path, subject: str) -> str:
    """Read a UTF-8 text file.

    Args:
        display: Path as shown in error messages
        path: Filesystem path
        subject: What the file is for (e.g. "file style element")

    Raises:
        QuireError(FILE_NOT_FOUND) if missing
        QuireError(PARSE_ERROR) if not valid UTF-8
        QuireError(IO_ERROR) for any other read failure
    """
    try:
        return path.read_bytes().decode("utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise wrap_error(e, subject=subject, path=display, op="read") from e


@dataclass(frozen=True)
class WrappedElement:
    """One script or style unit: a link, inline literal, or unresolved file."""

    wrappers: ElementWrappers
    element_class: ElementClass
    data: str

    @property
    def head(self) -> str:
        if self.element_class is ElementClass.LINK:
            return self.wrappers.link_head
        if self.element_class is ElementClass.LITERAL:
            return self.wrappers.literal_head
        return FILE_HEAD

    @property
    def content(self) -> str:
        return self.data

    @property
    def foot(self) -> str:
        if self.element_class is ElementClass.LINK:
            return self.wrappers.link_foot
        if self.element_class is ElementClass.LITERAL:
            return self.wrappers.literal_foot
        return FILE_FOOT

    @property
    def kind(self) -> str:
        return self.wrappers.kind

    def render(self) -> str:
        """Concatenated head, content and foot."""
        return self.head + self.content + self.foot

    def load(self, base: BaseDir) -> "WrappedElement":
        """Resolve a File element into a Literal holding the file's contents.

        Links and literals are returned unchanged. On failure self is not
        modified and the error propagates.

        Args:
            base: (display, path) of the directory the file is relative to

        Returns:
            The resolved element
        """
        if self.element_class is not ElementClass.FILE:
            return self

        display = compose_display_path(base[0], self.data)
        path = Path(base[1]) / normalise_relative(self.data)
        contents = read_file(display, path, f"file {self.kind} element")
        return replace(self, element_class=ElementClass.LITERAL, data=contents)


def _class_from_str(value: Any, kind: str) -> ElementClass:
    if isinstance(value, str):
        try:
            return ElementClass(value)
        except ValueError:
            pass
    raise create_error(
        "PARSE_ERROR",
        kind=f"{kind} element class",
        subject=f"{kind} element",
        fragment=str(value),
        reason=f'invalid value "{value}", expected "literal", "link", or "file"',
    )


class _ElementFactory:
    """Constructors shared by ScriptElement and StyleElement."""

    wrappers: ElementWrappers

    @classmethod
    def from_link(cls, link: str) -> WrappedElement:
        return WrappedElement(cls.wrappers, ElementClass.LINK, link)

    @classmethod
    def from_literal(cls, literal: str) -> WrappedElement:
        return WrappedElement(cls.wrappers, ElementClass.LITERAL, literal)

    @classmethod
    def from_path(cls, path: str) -> WrappedElement:
        return WrappedElement(cls.wrappers, ElementClass.FILE, path)

    @classmethod
    def from_file(cls, display: str, path: Path) -> WrappedElement:
        """Read path right away into a Literal."""
        contents = read_file(display, Path(path), f"literal {cls.wrappers.kind} element from path")
        return cls.from_literal(contents)

    @classmethod
    def deserialize(cls, value: Any) -> WrappedElement:
        """Build an element from its configuration form.

        Accepts "class:data" (a missing or colon-free prefix means literal)
        or a {"class": ..., "data": ...} mapping.

        Raises:
            QuireError(PARSE_ERROR) on unknown class, unknown, duplicate
            or missing fields, or a value of the wrong type
        """
        kind = cls.wrappers.kind
        if isinstance(value, str):
            prefix, sep, rest = value.partition(":")
            if not sep:
                return cls.from_literal(value)
            return WrappedElement(cls.wrappers, _class_from_str(prefix, kind), rest)

        if isinstance(value, dict):
            unknown = [key for key in value if key not in ELEMENT_FIELDS]
            if unknown:
                raise create_error(
                    "PARSE_ERROR",
                    kind=f"{kind} element",
                    subject=f"{kind} element",
                    fragment=str(unknown[0]),
                    reason=f"unknown field `{unknown[0]}`, expected `class` or `data`",
                )
            for name in ELEMENT_FIELDS:
                if name not in value:
                    raise create_error(
                        "PARSE_ERROR",
                        kind=f"{kind} element",
                        subject=f"{kind} element",
                        reason=f"missing field `{name}`",
                    )
            if not isinstance(value["data"], str):
                raise create_error(
                    "PARSE_ERROR",
                    kind=f"{kind} element",
                    subject=f"{kind} element",
                    reason="field `data` must be a string",
                )
            return WrappedElement(cls.wrappers, _class_from_str(value["class"], kind), value["data"])

        raise create_error(
            "PARSE_ERROR",
            kind=f"{kind} element",
            subject=f"{kind} element",
            reason=f"expected a string or a mapping, got {type(value).__name__}",
        )


class ScriptElement(_ElementFactory):
    """Constructors for <script> elements."""

    wrappers = SCRIPT_WRAPPERS


class StyleElement(_ElementFactory):
    """Constructors for stylesheet elements."""

    wrappers = STYLE_WRAPPERS


def load_all(elements: list[WrappedElement], base: BaseDir) -> list[WrappedElement]:
    """Resolve every element in order, stopping at the first failure."""
    return [element.load(base) for element in elements]

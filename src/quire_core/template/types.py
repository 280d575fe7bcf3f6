"""Template Engine type definitions."""

from dataclasses import dataclass, field
from datetime import datetime

from quire_core import __version__
from quire_core.output.wrapped_element import WrappedElement

from .dates import normalise_datetime


@dataclass
class RenderContext:
    """Everything a template can refer to while rendering one post.

    Access patterns:
    - {title} → self.title
    - {data-desc} → self.local_data["desc"], else self.global_data["desc"]
    - {styles} → every element of self.styles, in order
    """

    blog_name: str
    language: str
    author: str
    title: str
    post_date: datetime  # Normalised to a fixed offset on construction
    global_data: dict[str, str] = field(default_factory=dict)
    local_data: dict[str, str] = field(default_factory=dict)
    styles: list[WrappedElement] = field(default_factory=list)
    scripts: list[WrappedElement] = field(default_factory=list)
    tags: list[str] = field(default_factory=list)
    raw_post_name: str = ""
    number: int = 0
    version: str = __version__

    def __post_init__(self) -> None:
        """Pin the post date to a fixed-offset zone."""
        self.post_date = normalise_datetime(self.post_date)

    def lookup_data(self, key: str) -> str | None:
        """Overlay value for key; the post-local overlay wins."""
        if key in self.local_data:
            return self.local_data[key]
        return self.global_data.get(key)

    def merged_data(self) -> dict[str, str]:
        """Both overlays merged, local keys first (sorted), then global-only keys (sorted)."""
        merged = {key: self.local_data[key] for key in sorted(self.local_data)}
        for key in sorted(self.global_data):
            merged.setdefault(key, self.global_data[key])
        return merged


@dataclass
class RenderResult:
    """Result of rendering one template."""

    output_name: str
    bytes_written: int
    placeholders_rendered: list[str] = field(default_factory=list)

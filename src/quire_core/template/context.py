"""Render context builder."""

from datetime import datetime

from quire_core.output.wrapped_element import WrappedElement

from .types import RenderContext


class ContextBuilder:
    """Build a RenderContext from blog-wide settings plus one post's data."""

    def __init__(
        self,
        blog_name: str,
        language: str,
        author: str,
        global_data: dict[str, str] | None = None,
    ):
        """Initialize context builder.

        Args:
            blog_name: Blog name
            language: BCP-47 language tag
            author: Default author
            global_data: Blog-wide overlay
        """
        self._blog_name = blog_name
        self._language = language
        self._author = author
        self._global_data = dict(global_data or {})
        self._styles: list[WrappedElement] = []
        self._scripts: list[WrappedElement] = []
        self._tags: list[str] = []

    def add_styles(self, *groups: list[WrappedElement]) -> "ContextBuilder":
        """Append style groups, keeping their order."""
        for group in groups:
            self._styles.extend(group)
        return self

    def add_scripts(self, *groups: list[WrappedElement]) -> "ContextBuilder":
        """Append script groups, keeping their order."""
        for group in groups:
            self._scripts.extend(group)
        return self

    def add_tags(self, *groups: list[str]) -> "ContextBuilder":
        """Append tag groups, keeping their order."""
        for group in groups:
            self._tags.extend(group)
        return self

    def build(
        self,
        title: str,
        post_date: datetime,
        raw_post_name: str = "",
        number: int = 0,
        local_data: dict[str, str] | None = None,
        author: str | None = None,
        language: str | None = None,
    ) -> RenderContext:
        """Create the context for one post.

        Args:
            title: Post title
            post_date: Post timestamp
            raw_post_name: Raw post directory name
            number: Numeric post index
            local_data: Post-local overlay
            author: Per-post author override
            language: Per-post language override

        Returns:
            New RenderContext; later builder changes do not affect it
        """
        return RenderContext(
            blog_name=self._blog_name,
            language=language or self._language,
            author=author or self._author,
            title=title,
            post_date=post_date,
            global_data=dict(self._global_data),
            local_data=dict(local_data or {}),
            styles=list(self._styles),
            scripts=list(self._scripts),
            tags=list(self._tags),
            raw_post_name=raw_post_name,
            number=number,
        )

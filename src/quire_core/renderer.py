"""Post renderer - produce every artifact for one post."""

import io
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field, replace
from datetime import datetime
from pathlib import Path

from quire_core.config.models import RenderConfig
from quire_core.errors import QuireError
from quire_core.logging import PostLogger, QuireLogger
from quire_core.output.assets import OutputAssets
from quire_core.output.feed import RssFeedWriter, get_feed_writer
from quire_core.output.machine_data import machine_output
from quire_core.output.paragraph_passer import ParagraphPasser
from quire_core.output.sink import Sink, write_all
from quire_core.output.wrapped_element import BaseDir, WrappedElement
from quire_core.template import ContextBuilder, RenderContext, TemplateEngine
from quire_core.template.dates import Clock, system_clock
from quire_core.types import ElementClass, FeedType, MachineDataKind


@dataclass
class Post:
    """One post as handed to the renderer.

    content is the already-converted HTML body; directory is the
    (display, path) pair relative file elements are resolved against.
    """

    number: int
    raw_post_name: str
    title: str
    post_date: datetime
    content: str
    directory: BaseDir
    author: str | None = None
    language: str | None = None
    link: str | None = None
    tags: list[str] = field(default_factory=list)
    data: dict[str, str] = field(default_factory=dict)
    styles: list[WrappedElement] = field(default_factory=list)
    scripts: list[WrappedElement] = field(default_factory=list)

    @classmethod
    def from_directory(cls, number: int, path: Path, title: str, post_date: datetime, content: str) -> "Post":
        """Post whose files live in path, displayed as "$ROOT/<name>"."""
        path = Path(path)
        return cls(
            number=number,
            raw_post_name=path.name,
            title=title,
            post_date=post_date,
            content=content,
            directory=(f"$ROOT/{path.name}", path),
        )


@dataclass
class RenderedPost:
    """Artifacts produced for one post."""

    context: RenderContext
    summary: bytes
    outputs: list[str] = field(default_factory=list)


class PostRenderer:
    """Render a post's HTML page, feed item and metadata records.

    Sinks are owned by the caller; a failure leaves whatever was written
    so far in them.
    """

    def __init__(
        self,
        config: RenderConfig,
        assets: OutputAssets | None = None,
        logger: QuireLogger | None = None,
        clock: Clock | None = None,
    ):
        """Initialize post renderer.

        Args:
            config: Blog-wide configuration
            assets: Wrapper templates (defaults to the bundled ones)
            logger: Optional logger
            clock: Source of the current instant (defaults to system time)
        """
        self._config = config
        self._assets = replace(assets or OutputAssets.load(), tag_default_class=config.tag_class)
        self._logger = logger
        self._clock = clock or system_clock
        self._engine = TemplateEngine(assets=self._assets, clock=self._clock)

    @property
    def engine(self) -> TemplateEngine:
        return self._engine

    def build_context(self, post: Post, post_logger: PostLogger | None = None) -> RenderContext:
        """Resolve the post's elements and assemble its render context.

        Blog-wide elements come before the post's own, both resolved
        against the post directory.

        Raises:
            QuireError(FILE_NOT_FOUND, IO_ERROR, PARSE_ERROR) from element files
        """
        styles = self._resolve(self._config.styles + post.styles, post.directory, post_logger)
        scripts = self._resolve(self._config.scripts + post.scripts, post.directory, post_logger)

        builder = ContextBuilder(
            blog_name=self._config.blog_name,
            language=self._config.language,
            author=self._config.author,
            global_data=self._config.data,
        )
        builder.add_styles(styles).add_scripts(scripts).add_tags(post.tags)
        return builder.build(
            title=post.title,
            post_date=post.post_date,
            raw_post_name=post.raw_post_name,
            number=post.number,
            local_data=post.data,
            author=post.author,
            language=post.language,
        )

    def render_html(
        self,
        post: Post,
        context: RenderContext,
        header: str,
        footer: str,
        sink: Sink,
    ) -> str:
        """Write header template, post body, footer template.

        Returns:
            Name of the written artifact
        """
        output_name = self.html_name(post)
        with self._tagged(output_name):
            self._engine.render(header, context, sink, output_name)
            write_all(sink, post.content, "post body")
            self._engine.render(footer, context, sink, output_name)
        return output_name

    def render_summary(self, post: Post) -> bytes:
        """First summary_paragraphs paragraphs of the post body."""
        buffer = io.BytesIO()
        with self._tagged(f"{post.raw_post_name} summary"):
            with ParagraphPasser(buffer, self._config.summary_paragraphs) as passer:
                passer.write(post.content.encode("utf-8"))
        return buffer.getvalue()

    def render_machine_data(self, post: Post, context: RenderContext, kind: MachineDataKind, sink: Sink) -> str:
        """Write the metadata record in the given format."""
        output_name = f"{post.raw_post_name}.{kind.extension}"
        with self._tagged(output_name):
            machine_output(kind)(context, sink, self._clock)
        return output_name

    def render_feed_header(self, kind: FeedType, sink: Sink) -> None:
        """Write a feed's channel preamble."""
        with self._tagged(self.feed_name(kind)):
            self._feed(kind).header(
                self._config.blog_name,
                self._config.language,
                self._config.author,
                self._config.link,
                sink,
            )

    def render_feed_footer(self, kind: FeedType, sink: Sink) -> None:
        """Write a feed's channel closing."""
        with self._tagged(self.feed_name(kind)):
            self._feed(kind).footer(sink)

    def render_feed_item(
        self,
        post: Post,
        context: RenderContext,
        kind: FeedType,
        summary: bytes,
        sink: Sink,
    ) -> str:
        """Write the post's feed item with its (escaped) summary."""
        output_name = self.feed_name(kind)
        writer = self._feed(kind)
        with self._tagged(output_name):
            writer.post_header(
                context.title,
                post.raw_post_name,
                context.author,
                self.post_link(post),
                context.post_date,
                sink,
            )
            write_all(writer.post_body(sink), summary, "feed item summary")
            writer.post_footer(sink)
        return output_name

    def render(
        self,
        post: Post,
        header: str,
        footer: str,
        html_sink: Sink,
        machine_sinks: dict[MachineDataKind, Sink] | None = None,
        feed_sinks: dict[FeedType, Sink] | None = None,
    ) -> RenderedPost:
        """Produce every configured artifact for post.

        Only kinds listed in the configuration and given a sink are written.

        Args:
            post: Post to render
            header: Template written before the post body
            footer: Template written after the post body
            html_sink: Destination of the HTML page
            machine_sinks: Destination per metadata format
            feed_sinks: Destination per feed type (for this post's item)

        Returns:
            RenderedPost with the context, summary and artifact names

        Raises:
            QuireError tagged with the failing artifact's name
        """
        machine_sinks = machine_sinks or {}
        feed_sinks = feed_sinks or {}
        post_logger = self._logger.post(post.raw_post_name, post.number) if self._logger else None

        if post_logger:
            post_logger.started()

        try:
            context = self.build_context(post, post_logger)
            summary = self.render_summary(post)
            rendered = RenderedPost(context=context, summary=summary)

            name = self.render_html(post, context, header, footer, html_sink)
            self._written(rendered, post_logger, name, "html")

            for kind in self._config.machine_data:
                if kind in machine_sinks:
                    name = self.render_machine_data(post, context, kind, machine_sinks[kind])
                    self._written(rendered, post_logger, name, kind.value)

            for kind in self._config.feeds:
                if kind in feed_sinks:
                    name = self.render_feed_item(post, context, kind, summary, feed_sinks[kind])
                    self._written(rendered, post_logger, name, kind.value)
        except QuireError as e:
            if post_logger:
                post_logger.failed(e)
            raise

        if post_logger:
            post_logger.completed(len(rendered.outputs))
        return rendered

    def html_name(self, post: Post) -> str:
        return f"{post.raw_post_name}/index.html"

    def feed_name(self, kind: FeedType) -> str:
        return f"feed.{kind.extension}"

    def post_link(self, post: Post) -> str:
        """Item URL: explicit link, else the blog link joined with the post name."""
        if post.link:
            return post.link
        if self._config.link:
            return f"{self._config.link.rstrip('/')}/{post.raw_post_name}/"
        return f"{post.raw_post_name}/"

    def _feed(self, kind: FeedType) -> RssFeedWriter:
        return get_feed_writer(kind, assets=self._assets, clock=self._clock)

    def _resolve(
        self,
        elements: list[WrappedElement],
        base: BaseDir,
        post_logger: PostLogger | None,
    ) -> list[WrappedElement]:
        element_logger = post_logger.element() if post_logger else None
        resolved = []
        for element in elements:
            if element.element_class is not ElementClass.FILE:
                resolved.append(element)
                continue

            if element_logger:
                element_logger.resolving(element.kind, element.data)
            try:
                loaded = element.load(base)
            except QuireError as e:
                if element_logger:
                    element_logger.failed(element.kind, element.data, e)
                raise
            if element_logger:
                element_logger.resolved(element.kind, element.data, len(loaded.data))
            resolved.append(loaded)
        return resolved

    def _written(self, rendered: RenderedPost, post_logger: PostLogger | None, name: str, kind: str) -> None:
        rendered.outputs.append(name)
        if post_logger:
            post_logger.artifact_written(name, kind)

    @contextmanager
    def _tagged(self, output_name: str) -> Iterator[None]:
        """Re-raise QuireErrors tagged with the artifact being produced."""
        try:
            yield
        except QuireError as e:
            if e.output_name is not None:
                raise
            raise e.with_context(output_name=output_name) from e

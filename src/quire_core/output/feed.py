"""RSS feed fragments: channel header/footer and per-post items."""

from datetime import datetime

from quire_core import __version__
from quire_core.template.dates import Clock, format_rfc2822, normalise_datetime, now_local, system_clock
from quire_core.types import FeedType

from .assets import OutputAssets
from .sink import Sink, write_all
from .xml_escape import XmlEscapeWriter, xml_escape

CHANNEL_INDENT = "    "
ITEM_INDENT = "      "


def _write_tag(name: str, value: str, sink: Sink, indent: str, what: str) -> None:
    write_all(
        sink,
        f"{indent}<{name}>{xml_escape(value)}</{name}>\n",
        f"{what} {name} tag",
    )


class RssFeedWriter:
    """Writes the pieces of an RSS 2.0 document.

    Header and footer are independent calls; nothing is remembered between
    them.
    """

    kind = FeedType.RSS

    def __init__(
        self,
        assets: OutputAssets | None = None,
        clock: Clock = system_clock,
        version: str = __version__,
    ) -> None:
        """Initialize RSS writer.

        Args:
            assets: Wrapper templates (defaults to the bundled ones)
            clock: Source of the current instant for pubDate/lastBuildDate
            version: Generator version advertised in <generator>
        """
        self._assets = assets or OutputAssets.load()
        self._clock = clock
        self._version = version

    def header(
        self,
        blog_name: str,
        language: str,
        author: str,
        link: str | None,
        sink: Sink,
    ) -> None:
        """Write the channel preamble.

        Args:
            blog_name: Used for both <title> and <description>
            language: Language tag
            author: Channel author
            link: Optional channel link; <link> is omitted when None
            sink: Destination

        Raises:
            QuireError(IO_ERROR) if the sink fails
        """
        what = "RSS feed output"
        write_all(sink, self._assets.rss_head, f"{what} header")

        _write_tag("title", blog_name, sink, CHANNEL_INDENT, what)
        if link is not None:
            _write_tag("link", link, sink, CHANNEL_INDENT, what)
        _write_tag("author", author, sink, CHANNEL_INDENT, what)
        _write_tag("description", blog_name, sink, CHANNEL_INDENT, what)
        _write_tag("language", language, sink, CHANNEL_INDENT, what)
        _write_tag("generator", f"quire {self._version}", sink, CHANNEL_INDENT, what)

        built = format_rfc2822(now_local(self._clock))
        _write_tag("pubDate", built, sink, CHANNEL_INDENT, what)
        _write_tag("lastBuildDate", built, sink, CHANNEL_INDENT, what)

    def footer(self, sink: Sink) -> None:
        """Write the channel closing."""
        write_all(sink, self._assets.rss_foot, "RSS feed output footer")

    def post_header(
        self,
        post_name: str,
        post_id_name: str,
        author: str,
        link: str,
        post_date: datetime,
        sink: Sink,
    ) -> None:
        """Open an <item> and its <description>.

        Args:
            post_name: Item title
            post_id_name: Stable identifier used as <guid>
            author: Item author
            link: Item URL
            post_date: Post timestamp, rendered as RFC 2822
            sink: Destination
        """
        what = "RSS feed post output"
        write_all(sink, "\n", f"{what} header separator")
        write_all(sink, f"{CHANNEL_INDENT}<item>\n", f"{what} header item tag")

        _write_tag("title", post_name, sink, ITEM_INDENT, what)
        _write_tag("author", author, sink, ITEM_INDENT, what)
        _write_tag("link", link, sink, ITEM_INDENT, what)
        _write_tag("pubDate", format_rfc2822(normalise_datetime(post_date)), sink, ITEM_INDENT, what)
        _write_tag("guid", post_id_name, sink, ITEM_INDENT, what)

        write_all(sink, f"{ITEM_INDENT}<description>\n", f"{what} header description tag")

    def post_body(self, sink: Sink) -> XmlEscapeWriter:
        """Sink for the item summary; markup written to it is escaped."""
        return XmlEscapeWriter(sink, "RSS feed post body")

    def post_footer(self, sink: Sink) -> None:
        """Close the <description> and <item>."""
        what = "RSS feed post output"
        write_all(sink, f"{ITEM_INDENT}</description>\n", f"{what} footer description tag")
        write_all(sink, f"{CHANNEL_INDENT}</item>\n", f"{what} footer item tag")


FEED_WRITERS: dict[FeedType, type[RssFeedWriter]] = {
    FeedType.RSS: RssFeedWriter,
}


def get_feed_writer(
    kind: FeedType,
    assets: OutputAssets | None = None,
    clock: Clock = system_clock,
) -> RssFeedWriter:
    """Feed writer for kind."""
    return FEED_WRITERS[kind](assets=assets, clock=clock)

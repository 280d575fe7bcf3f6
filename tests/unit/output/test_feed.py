"""Unit tests for the RSS writer and XML escaping."""

import io

import pytest

from quire_core import __version__
from quire_core.errors import QuireError
from quire_core.output import RssFeedWriter, XmlEscapeWriter, get_feed_writer, xml_escape
from quire_core.template.dates import format_rfc2822, now_local
from quire_core.types import FeedType


@pytest.fixture
def writer(assets, fixed_clock) -> RssFeedWriter:
    return RssFeedWriter(assets=assets, clock=fixed_clock)


class TestXmlEscape:
    """Tests for xml_escape() and XmlEscapeWriter."""

    def test_escape(self):
        assert xml_escape("a < b && c > d \"'") == "a &lt; b &amp;&amp; c &gt; d \"'"

    def test_writer(self, sink):
        escaper = XmlEscapeWriter(sink)
        assert escaper.write(b"hewwo > benlo") == len(b"hewwo > benlo")
        assert sink.getvalue() == b"hewwo &gt; benlo"

    def test_writer_failure(self, broken_sink):
        with pytest.raises(QuireError) as exc_info:
            XmlEscapeWriter(broken_sink, "RSS feed post body").write(b"<p>")
        assert exc_info.value.subject == "RSS feed post body"


class TestChannel:
    """Tests for the channel header and footer."""

    def test_header(self, writer, sink, fixed_clock):
        writer.header("Blogue & co", "en-GB", "nabijaczleweli", "https://blog.example.org", sink)

        built = format_rfc2822(now_local(fixed_clock))
        assert sink.getvalue().decode() == (
            '<?xml version="1.0" encoding="UTF-8"?>\n'
            '<rss version="2.0" xmlns:atom="http://www.w3.org/2005/Atom">\n'
            "  <channel>\n"
            "    <title>Blogue &amp; co</title>\n"
            "    <link>https://blog.example.org</link>\n"
            "    <author>nabijaczleweli</author>\n"
            "    <description>Blogue &amp; co</description>\n"
            "    <language>en-GB</language>\n"
            f"    <generator>quire {__version__}</generator>\n"
            f"    <pubDate>{built}</pubDate>\n"
            f"    <lastBuildDate>{built}</lastBuildDate>\n"
        )

    def test_header_without_link(self, writer, sink):
        writer.header("Blogue", "en-GB", "a", None, sink)
        assert b"<link>" not in sink.getvalue()

    def test_footer(self, writer, sink):
        writer.footer(sink)
        assert sink.getvalue() == b"  </channel>\n</rss>\n"

    def test_header_failure_names_tag(self, writer):
        class FailOnTitle:
            def write(self, data):
                if b"<title>" in bytes(data):
                    raise OSError("no space left")
                return len(data)

        with pytest.raises(QuireError) as exc_info:
            writer.header("Blogue", "en-GB", "a", None, FailOnTitle())
        assert exc_info.value.subject == "RSS feed output title tag"
        assert exc_info.value.message == "Writing RSS feed output title tag failed"


class TestItem:
    """Tests for per-post items."""

    def test_item(self, writer, sink, post_date):
        writer.post_header(
            "Hello <World>",
            "001. hello",
            "nabijaczleweli",
            "https://blog.example.org/001. hello/",
            post_date,
            sink,
        )
        writer.post_body(sink).write(b"<p>A & B</p>")
        writer.post_footer(sink)

        assert sink.getvalue().decode() == (
            "\n"
            "    <item>\n"
            "      <title>Hello &lt;World&gt;</title>\n"
            "      <author>nabijaczleweli</author>\n"
            "      <link>https://blog.example.org/001. hello/</link>\n"
            "      <pubDate>Thu,  6 Sep 2018 18:32:22 +0200</pubDate>\n"
            "      <guid>001. hello</guid>\n"
            "      <description>\n"
            "&lt;p&gt;A &amp; B&lt;/p&gt;"
            "      </description>\n"
            "    </item>\n"
        )


class TestDispatch:
    """Tests for get_feed_writer()."""

    def test_rss(self, assets):
        assert isinstance(get_feed_writer(FeedType.RSS, assets=assets), RssFeedWriter)

    def test_feed_type_parse(self):
        assert FeedType.parse("RSS") is FeedType.RSS
        assert FeedType.parse("atom") is None
        assert FeedType.RSS.extension == "xml"
        assert FeedType.RSS.display_name == "RSS"

    def test_standalone_calls(self, writer):
        """Footer needs nothing from a previous header."""
        sink = io.BytesIO()
        writer.footer(sink)
        writer.footer(sink)
        assert sink.getvalue().count(b"</rss>") == 2

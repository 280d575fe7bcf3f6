"""Unit tests for RenderContext and ContextBuilder."""

from datetime import datetime, timedelta

from quire_core import __version__
from quire_core.output import ScriptElement, StyleElement
from quire_core.template import ContextBuilder, RenderContext


class TestRenderContext:
    """Tests for RenderContext."""

    def test_lookup_precedence(self, context):
        assert context.lookup_data("desc") == "local description"
        assert context.lookup_data("site") == "example.org"
        assert context.lookup_data("nope") is None

    def test_merged_data_order(self, post_date):
        context = RenderContext(
            blog_name="",
            language="",
            author="",
            title="",
            post_date=post_date,
            global_data={"b": "global b", "a": "global a", "z": "global z"},
            local_data={"y": "local y", "b": "local b"},
        )
        merged = context.merged_data()

        assert list(merged) == ["b", "y", "a", "z"]
        assert merged["b"] == "local b"

    def test_naive_post_date_normalised(self):
        context = RenderContext(
            blog_name="", language="", author="", title="", post_date=datetime(2018, 9, 6, 18, 32, 22)
        )
        assert context.post_date.tzinfo is not None

    def test_version_default(self, context):
        assert context.version == __version__


class TestContextBuilder:
    """Tests for ContextBuilder."""

    def test_groups_kept_in_order(self, post_date):
        blog_style = StyleElement.from_link("/blog.css")
        post_style = StyleElement.from_literal("p { color: red; }")
        script = ScriptElement.from_link("/blog.js")

        context = (
            ContextBuilder("Blogue", "en-GB", "nabijaczleweli", {"desc": "global"})
            .add_styles([blog_style], [post_style])
            .add_scripts([script])
            .add_tags(["a"], ["b", "c"])
            .build("Title", post_date, raw_post_name="001. title", number=1, local_data={"desc": "local"})
        )

        assert context.styles == [blog_style, post_style]
        assert context.scripts == [script]
        assert context.tags == ["a", "b", "c"]
        assert context.lookup_data("desc") == "local"
        assert context.post_date.utcoffset() == timedelta(hours=2)

    def test_overrides(self, post_date):
        builder = ContextBuilder("Blogue", "en-GB", "default author")
        context = builder.build("T", post_date, author="guest", language="pl")

        assert context.author == "guest"
        assert context.language == "pl"
        assert builder.build("T", post_date).author == "default author"

    def test_contexts_independent(self, post_date):
        builder = ContextBuilder("Blogue", "en-GB", "a").add_tags(["one"])
        first = builder.build("T", post_date)
        builder.add_tags(["two"])

        assert first.tags == ["one"]
        assert builder.build("T", post_date).tags == ["one", "two"]

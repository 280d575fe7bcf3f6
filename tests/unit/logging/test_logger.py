"""Unit tests for QuireLogger."""

import io
import json

from quire_core.errors import create_error
from quire_core.logging import LogConfig, QuireLogger
from quire_core.types import LogFormat, LogLevel


def make_logger(**kwargs) -> tuple[QuireLogger, io.StringIO]:
    """Logger writing to a StringIO."""
    output = io.StringIO()
    return QuireLogger(LogConfig(output=output, **kwargs)), output


class TestLogConfig:
    """Tests for LogConfig defaults."""

    def test_default_components(self):
        config = LogConfig()
        assert config.components == {"post": True, "artifact": True, "element": True, "config": True}

    def test_explicit_components_kept(self):
        config = LogConfig(components={"post": False})
        assert config.components == {"post": False}


class TestQuireLogger:
    """Tests for level and component filtering."""

    def test_info_colored(self):
        logger, output = make_logger()
        logger.info("config", "Configuration loaded successfully")

        line = output.getvalue()
        assert "[CONFIG]" in line
        assert "Configuration loaded successfully" in line

    def test_level_filtering(self):
        logger, output = make_logger(level=LogLevel.WARN)
        logger.info("config", "hidden")
        logger.warn("config", "shown")

        assert "hidden" not in output.getvalue()
        assert "shown" in output.getvalue()

    def test_component_disabled(self):
        logger, output = make_logger(components={"config": False})
        logger.info("config", "hidden")
        assert output.getvalue() == ""

    def test_json_format(self):
        logger, output = make_logger(format=LogFormat.JSON)
        logger.warn("config", "Unknown configuration key: foo", path="foo")

        entry = json.loads(output.getvalue())
        assert entry["level"] == "WARN"
        assert entry["component"] == "config"
        assert entry["path"] == "foo"
        assert entry["timestamp"].endswith("Z")

    def test_context_truncated(self):
        logger, output = make_logger(truncate_at=10)
        logger.info("config", "msg", value="x" * 100)
        assert "..." in output.getvalue()

    def test_context_hidden_without_show_params(self):
        logger, output = make_logger(show_params=False)
        logger.info("config", "msg", value="secret-ish")
        assert "secret-ish" not in output.getvalue()

    def test_configure_replaces_config(self):
        logger, _ = make_logger()
        other = io.StringIO()
        logger.configure(LogConfig(output=other))
        logger.info("config", "moved")
        assert "moved" in other.getvalue()


class TestPostLogger:
    """Tests for post and element events."""

    def test_post_lifecycle(self):
        logger, output = make_logger(format=LogFormat.JSON, level=LogLevel.DEBUG)
        post = logger.post("001. hello", 1)

        post.started()
        post.artifact_written("001. hello/index.html", "html")
        post.completed(1)

        events = [json.loads(line)["event"] for line in output.getvalue().splitlines()]
        assert events == ["post_started", "artifact_written", "post_completed"]

    def test_artifact_written_is_debug(self):
        logger, output = make_logger()
        logger.post("p", 1).artifact_written("p/index.html", "html")
        assert output.getvalue() == ""

    def test_failed(self):
        logger, output = make_logger(format=LogFormat.JSON)
        error = create_error("IO_ERROR", op="write", subject="title tag", reason="disk full")
        logger.post("p", 3).failed(error)

        entry = json.loads(output.getvalue())
        assert entry["level"] == "ERROR"
        assert entry["number"] == 3
        assert entry["error_type"] == "QuireError"

    def test_element_events(self):
        logger, output = make_logger(format=LogFormat.JSON, level=LogLevel.DEBUG)
        element = logger.post("p", 1).element()

        element.resolving("style", "../common.css")
        element.resolved("style", "../common.css", 19)

        entries = [json.loads(line) for line in output.getvalue().splitlines()]
        assert [e["event"] for e in entries] == ["element_resolving", "element_resolved"]
        assert entries[1]["size"] == 19
        assert entries[1]["component"] == "element"

    def test_element_failed(self):
        logger, output = make_logger()
        logger.post("p", 1).element().failed("script", "gone.js", OSError("nope"))
        assert "gone.js" in output.getvalue()
        assert "[ELEMENT]" in output.getvalue()

"""
Pytest configuration and shared fixtures for Quire tests.
"""

import io
import sys
from datetime import UTC, datetime, timedelta, timezone
from pathlib import Path

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from quire_core.output import OutputAssets, ScriptElement, StyleElement  # noqa: E402
from quire_core.template import RenderContext  # noqa: E402

# 2018-09-06 16:32:22 UTC
FIXED_NOW = datetime(2018, 9, 6, 16, 32, 22, tzinfo=UTC)

# 2018-09-06 18:32:22 +02:00
POST_DATE = datetime(2018, 9, 6, 18, 32, 22, tzinfo=timezone(timedelta(hours=2)))


# =============================================================================
# Rendering Fixtures
# =============================================================================


@pytest.fixture
def fixed_now() -> datetime:
    return FIXED_NOW


@pytest.fixture
def post_date() -> datetime:
    return POST_DATE


@pytest.fixture
def fixed_clock():
    """Clock always returning FIXED_NOW."""
    return lambda: FIXED_NOW


@pytest.fixture(scope="session")
def assets() -> OutputAssets:
    """Bundled wrapper templates."""
    return OutputAssets.load()


@pytest.fixture
def sink() -> io.BytesIO:
    """Fresh in-memory byte sink."""
    return io.BytesIO()


@pytest.fixture
def context() -> RenderContext:
    """Context with every field populated."""
    return RenderContext(
        blog_name="Blogue",
        language="en-GB",
        author="nabijaczleweli",
        title="Hello, World!",
        post_date=POST_DATE,
        global_data={"desc": "global description", "site": "example.org"},
        local_data={"desc": "local description"},
        styles=[StyleElement.from_link("/kaschism/assets/column.css")],
        scripts=[ScriptElement.from_literal('alert("hi");')],
        tags=["vodka", "depression"],
        raw_post_name="001. 2018-09-06 18-32-22 Hello, World!",
        number=1,
    )


@pytest.fixture
def post_dir(tmp_path: Path) -> Path:
    """Post directory with a style and a script file next to it."""
    post = tmp_path / "posts" / "001. hello"
    post.mkdir(parents=True)
    (tmp_path / "posts" / "common.css").write_text("body { margin: 0; }")
    (post / "local.js").write_text("console.log(1);")
    return post


# =============================================================================
# Sink Fixtures
# =============================================================================


class BrokenSink:
    """Sink whose every write fails."""

    def write(self, data):
        raise OSError("disk full")


class LimitedSink:
    """Sink accepting at most `limit` bytes per write."""

    def __init__(self, limit: int = 3):
        self.limit = limit
        self.buffer = bytearray()

    def write(self, data):
        chunk = bytes(data[: self.limit])
        self.buffer.extend(chunk)
        return len(chunk)


@pytest.fixture
def broken_sink() -> BrokenSink:
    return BrokenSink()


@pytest.fixture
def limited_sink() -> LimitedSink:
    return LimitedSink()


# =============================================================================
# Pytest Configuration
# =============================================================================


def pytest_configure(config):
    """Configure custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "property: Property-based tests")

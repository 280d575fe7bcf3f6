"""Quire Core - Template and feed rendering engine for static blogs.

Fills out page templates, trims post bodies to feed summaries, and writes
RSS items and JSON metadata records to caller-owned byte sinks.
"""

# Set before the submodules below import it
__version__ = "0.4.0"

from quire_core.renderer import Post, PostRenderer, RenderedPost  # noqa: E402

__all__ = ["__version__", "Post", "PostRenderer", "RenderedPost"]

"""Template Engine for Quire post output."""

from .context import ContextBuilder
from .engine import TemplateEngine
from .types import RenderContext, RenderResult

__all__ = [
    "TemplateEngine",
    "RenderContext",
    "RenderResult",
    "ContextBuilder",
]

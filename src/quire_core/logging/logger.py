"""Quire Logger - Hierarchical colored logging for post rendering."""

import json
import sys
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any, TextIO

from quire_core.types import LogFormat, LogLevel

# ANSI 256-color palette
RESET = "\033[0m"
GREEN = "\033[38;5;82m"
RED = "\033[38;5;196m"
YELLOW = "\033[38;5;226m"
ORANGE = "\033[38;5;208m"
LIGHT_BLUE = "\033[38;5;153m"
CYAN = "\033[38;5;51m"
MAGENTA = "\033[38;5;201m"


@dataclass
class LogConfig:
    """Logger configuration."""

    level: LogLevel = LogLevel.INFO
    format: LogFormat = LogFormat.COLORED
    show_params: bool = True
    truncate_at: int = 200
    components: dict[str, bool] = field(default_factory=dict)
    output: TextIO = field(default=sys.stderr)

    def __post_init__(self) -> None:
        """Initialize default components if not provided."""
        if not self.components:
            self.components = {
                "post": True,
                "artifact": True,
                "element": True,
                "config": True,
            }


class QuireLogger:
    """Main logger facade. Creates component-specific loggers."""

    def __init__(self, config: LogConfig | None = None):
        """Initialize logger with configuration.

        Args:
            config: Logger configuration (defaults to LogConfig())
        """
        self.config = config or LogConfig()
        self._level_order = {
            LogLevel.DEBUG: 0,
            LogLevel.INFO: 1,
            LogLevel.WARN: 2,
            LogLevel.ERROR: 3,
        }

    def post(self, post_name: str, number: int) -> "PostLogger":
        """Get a logger scoped to rendering one post.

        Args:
            post_name: Raw post directory name
            number: Numeric post index

        Returns:
            PostLogger instance
        """
        return PostLogger(self, post_name, number)

    def configure(self, config: LogConfig) -> None:
        """Replace the active configuration."""
        self.config = config

    def info(self, component: str, message: str, **context: Any) -> None:
        """Log an info message outside of any post."""
        self._log(LogLevel.INFO, component, message, context or None)

    def warn(self, component: str, message: str, **context: Any) -> None:
        """Log a warning outside of any post."""
        self._log(LogLevel.WARN, component, message, context or None)

    def _should_log(self, level: LogLevel) -> bool:
        return self._level_order.get(level, 0) >= self._level_order.get(self.config.level, 1)

    def _log(
        self,
        level: LogLevel,
        component: str,
        message: str,
        context: dict[str, Any] | None = None,
    ) -> None:
        """Internal logging method.

        Args:
            level: Log level
            component: Component name (post, artifact, element, config)
            message: Log message
            context: Additional context data
        """
        if not self._should_log(level):
            return

        if not self.config.components.get(component, True):
            return

        if self.config.format == LogFormat.JSON:
            self._log_json(level, component, message, context)
        else:
            self._log_colored(level, component, message, context)

    def _log_json(
        self,
        level: LogLevel,
        component: str,
        message: str,
        context: dict[str, Any] | None = None,
    ) -> None:
        log_entry = {
            "timestamp": datetime.now(UTC).isoformat().replace("+00:00", "Z"),
            "level": level.value,
            "component": component,
            "message": message,
        }
        if context:
            log_entry.update(context)

        print(json.dumps(log_entry, ensure_ascii=False), file=self.config.output)

    def _log_colored(
        self,
        level: LogLevel,
        component: str,
        message: str,
        context: dict[str, Any] | None = None,
    ) -> None:
        level_colors = {
            LogLevel.DEBUG: LIGHT_BLUE,
            LogLevel.INFO: CYAN,
            LogLevel.WARN: YELLOW,
            LogLevel.ERROR: RED,
        }

        color = level_colors.get(level, RESET)
        component_color = {
            "post": MAGENTA,
            "artifact": GREEN,
            "element": ORANGE,
            "config": CYAN,
        }.get(component, RESET)

        # Format: [COMPONENT] message
        output = f"{component_color}[{component.upper()}]{RESET} {color}{message}{RESET}"

        if context and self.config.show_params:
            context_str = str(context)
            if len(context_str) > self.config.truncate_at:
                context_str = context_str[: self.config.truncate_at] + "..."
            output += f" {LIGHT_BLUE}{context_str}{RESET}"

        print(output, file=self.config.output)


class PostLogger:
    """Logger for post-level events."""

    def __init__(self, parent: QuireLogger, post_name: str, number: int):
        """Initialize post logger.

        Args:
            parent: Parent QuireLogger instance
            post_name: Raw post directory name
            number: Numeric post index
        """
        self.parent = parent
        self.post_name = post_name
        self.number = number

    def _context(self, event: str, **extra: Any) -> dict[str, Any]:
        context = {"post": self.post_name, "number": self.number, "event": event}
        context.update(extra)
        return context

    def started(self) -> None:
        """Log start of rendering."""
        message = f"Rendering post #{self.number} '{self.post_name}'"
        self.parent._log(LogLevel.INFO, "post", message, self._context("post_started"))

    def artifact_written(self, output_name: str, kind: str) -> None:
        """Log one finished artifact.

        Args:
            output_name: Name of the artifact
            kind: Artifact kind (html, summary, json, rss)
        """
        message = f"Wrote {kind} output '{output_name}' ✓"
        context = self._context("artifact_written", output_name=output_name, kind=kind)
        self.parent._log(LogLevel.DEBUG, "artifact", message, context)

    def completed(self, artifact_count: int) -> None:
        """Log completion with summary.

        Args:
            artifact_count: Number of artifacts produced
        """
        message = f"Post '{self.post_name}' rendered ({artifact_count} artifacts) ✓"
        context = self._context("post_completed", artifact_count=artifact_count)
        self.parent._log(LogLevel.INFO, "post", message, context)

    def failed(self, error: Exception) -> None:
        """Log post failure.

        Args:
            error: Exception that caused failure
        """
        context = self._context("post_failed", error=str(error), error_type=type(error).__name__)
        message = f"Post '{self.post_name}' failed: {error}"
        self.parent._log(LogLevel.ERROR, "post", message, context)

    def element(self) -> "ElementLogger":
        """Get a logger for element resolution within this post."""
        return ElementLogger(self)


class ElementLogger:
    """Logger for wrapped-element resolution events."""

    def __init__(self, parent: PostLogger):
        """Initialize element logger.

        Args:
            parent: Parent PostLogger instance
        """
        self.parent = parent

    def resolving(self, kind: str, path: str) -> None:
        """Log start of file resolution.

        Args:
            kind: "style" or "script"
            path: Relative path being resolved
        """
        context = self.parent._context("element_resolving", kind=kind, path=path)
        self.parent.parent._log(LogLevel.DEBUG, "element", f"Loading {kind} file '{path}'", context)

    def resolved(self, kind: str, path: str, size: int) -> None:
        """Log successful resolution.

        Args:
            kind: "style" or "script"
            path: Relative path that was resolved
            size: Length of the loaded content in characters
        """
        context = self.parent._context("element_resolved", kind=kind, path=path, size=size)
        message = f"Loaded {kind} file '{path}' ({size} chars) ✓"
        self.parent.parent._log(LogLevel.DEBUG, "element", message, context)

    def failed(self, kind: str, path: str, error: Exception) -> None:
        """Log failed resolution.

        Args:
            kind: "style" or "script"
            path: Relative path that failed
            error: Error raised
        """
        context = self.parent._context("element_failed", kind=kind, path=path, error=str(error))
        message = f"Loading {kind} file '{path}' failed: {error}"
        self.parent.parent._log(LogLevel.ERROR, "element", message, context)

"""Quire configuration data models."""

from dataclasses import dataclass, field

from quire_core.logging import LogConfig
from quire_core.output.wrapped_element import WrappedElement
from quire_core.types import FeedType, LogFormat, LogLevel, MachineDataKind


@dataclass
class LoggingComponentsConfig:
    """Logging components configuration."""

    post: bool = True
    artifact: bool = True
    element: bool = True
    config: bool = True


@dataclass
class LoggingOptionsConfig:
    """Logging options configuration."""

    show_params: bool = True
    truncate_at: int = 200


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: LogLevel = LogLevel.INFO
    format: LogFormat = LogFormat.COLORED
    components: LoggingComponentsConfig = field(default_factory=LoggingComponentsConfig)
    options: LoggingOptionsConfig = field(default_factory=LoggingOptionsConfig)

    def to_log_config(self) -> LogConfig:
        """Build the runtime logger configuration."""
        return LogConfig(
            level=self.level,
            format=self.format,
            show_params=self.options.show_params,
            truncate_at=self.options.truncate_at,
            components={
                "post": self.components.post,
                "artifact": self.components.artifact,
                "element": self.components.element,
                "config": self.components.config,
            },
        )


@dataclass
class RenderConfig:
    """Blog-wide rendering configuration."""

    blog_name: str = ""
    author: str = ""
    language: str = "en-GB"
    link: str | None = None  # Channel link for feeds, omitted when unset
    summary_paragraphs: int = 3
    feeds: list[FeedType] = field(default_factory=lambda: [FeedType.RSS])
    machine_data: list[MachineDataKind] = field(default_factory=lambda: [MachineDataKind.JSON])
    data: dict[str, str] = field(default_factory=dict)
    styles: list[WrappedElement] = field(default_factory=list)
    scripts: list[WrappedElement] = field(default_factory=list)
    tag_class: str = "tag"
    logging: LoggingConfig = field(default_factory=LoggingConfig)

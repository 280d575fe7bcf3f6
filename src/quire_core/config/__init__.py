"""Quire Configuration - Config loading and validation."""

from .loader import (
    ConfigLoader,
    deep_merge,
    get_config_loader,
    load_config,
    resolve_env_vars,
)
from .models import (
    LoggingComponentsConfig,
    LoggingConfig,
    LoggingOptionsConfig,
    RenderConfig,
)

__all__ = [
    # Config models
    "RenderConfig",
    "LoggingConfig",
    "LoggingComponentsConfig",
    "LoggingOptionsConfig",
    # Loader
    "ConfigLoader",
    "get_config_loader",
    "load_config",
    # Utilities
    "resolve_env_vars",
    "deep_merge",
]

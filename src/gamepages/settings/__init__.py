"""
Settings package for gamepages.

This package provides a modular, type-safe configuration management system
using Qt's QSettings for cross-platform storage.

Usage:
    from gamepages.settings import PipelineSettings

    settings = PipelineSettings()
    result = settings.validate()
"""

from .core import PipelineSettings
from .types import ConfigVersion, ConfigError, ValidationResult
from .paths import PathSettings
from .render import RenderSettings
from .logging import LoggingSettings

__all__ = [
    "PipelineSettings",
    "ConfigVersion",
    "ConfigError",
    "ValidationResult",
    "PathSettings",
    "RenderSettings",
    "LoggingSettings",
]

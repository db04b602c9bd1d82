"""
gamepages: page content pipeline for a narrative browser game

Parses page documents (YAML front matter + templated markdown body),
evaluates lock conditions and renders page bodies to HTML.
"""

__version__ = "0.1.0"
__author__ = "gamepages Contributors"

# Pipeline imports
from .pages import (
    Page,
    PageService,
    ContentRenderer,
    LockMode,
    is_locked,
    is_locked_any_subset,
    parse_used_objects,
)
from .utils.logging_config import setup_logging

# Main data models
from .pages.models import GameObject, PageMetadata, RenderContext, PageView

# Errors
from .errors import (
    PageError,
    MalformedDocument,
    UnterminatedFrontMatter,
    MetadataDecodeError,
    TemplateError,
    RenderError,
    NotParsed,
    ConfigError,
)

__all__ = [
    # Pipeline
    "Page",
    "PageService",
    "ContentRenderer",
    "LockMode",
    "is_locked",
    "is_locked_any_subset",
    "parse_used_objects",

    # Logging
    "setup_logging",

    # Data models
    "GameObject",
    "PageMetadata",
    "RenderContext",
    "PageView",

    # Errors
    "PageError",
    "MalformedDocument",
    "UnterminatedFrontMatter",
    "MetadataDecodeError",
    "TemplateError",
    "RenderError",
    "NotParsed",
    "ConfigError",
]

"""
Page content pipeline.

Splits page documents into front matter and body, decodes the metadata,
evaluates lock conditions and renders the body to HTML.
"""

from .models import GameObject, PageMetadata, RenderContext, PageView
from .frontmatter import FRONT_MATTER_DELIMITER, FrontMatterSplitter, split_front_matter
from .metadata import MetadataDecoder, decode_metadata, encode_metadata
from .locks import (
    LockMode,
    LockEvaluator,
    is_locked,
    is_locked_any_subset,
    parse_used_objects,
)
from .renderer import ContentRenderer, TemplateTranslator, DEFAULT_MARKDOWN_EXTENSIONS
from .page import Page
from .service import PageService

__all__ = [
    # Models
    "GameObject",
    "PageMetadata",
    "RenderContext",
    "PageView",
    # Pipeline stages
    "FRONT_MATTER_DELIMITER",
    "FrontMatterSplitter",
    "split_front_matter",
    "MetadataDecoder",
    "decode_metadata",
    "encode_metadata",
    "LockMode",
    "LockEvaluator",
    "is_locked",
    "is_locked_any_subset",
    "parse_used_objects",
    "ContentRenderer",
    "TemplateTranslator",
    "DEFAULT_MARKDOWN_EXTENSIONS",
    # Facade and service
    "Page",
    "PageService",
]

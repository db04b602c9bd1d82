"""
Page facade combining splitting, metadata decoding and content rendering.
"""

from typing import Optional

from ..errors import NotParsed
from .frontmatter import DocumentSource, split_front_matter
from .metadata import decode_metadata
from .models import PageMetadata, RenderContext
from .renderer import ContentRenderer

_default_renderer: Optional[ContentRenderer] = None


def _get_default_renderer() -> ContentRenderer:
    global _default_renderer
    if _default_renderer is None:
        _default_renderer = ContentRenderer()
    return _default_renderer


class Page:
    """A parsed game page.

    A page belongs to a single request: ``parse`` replaces its state, so one
    instance must not be shared between concurrent requests.
    """

    def __init__(self, renderer: Optional[ContentRenderer] = None):
        self.renderer = renderer or _get_default_renderer()
        self._front_matter: Optional[bytes] = None
        self._body: Optional[bytes] = None
        self._meta: Optional[PageMetadata] = None

    @classmethod
    def from_source(
        cls, source: DocumentSource, renderer: Optional[ContentRenderer] = None
    ) -> "Page":
        """Create a page and parse it in one step."""
        page = cls(renderer)
        page.parse(source)
        return page

    @property
    def is_parsed(self) -> bool:
        return self._front_matter is not None

    def parse(self, source: DocumentSource) -> None:
        """Split a document into front matter and body.

        On failure the previously parsed state, if any, is kept.

        Raises:
            MalformedDocument: If the opening delimiter is missing
            UnterminatedFrontMatter: If the closing delimiter is missing
        """
        front_matter, body = split_front_matter(source)

        self._front_matter = front_matter
        self._body = body
        self._meta = None

    def meta(self) -> PageMetadata:
        """Decode the page metadata.

        Raises:
            NotParsed: If called before a successful parse
            MetadataDecodeError: If the front matter is invalid
        """
        if self._front_matter is None:
            raise NotParsed("meta")

        # The front matter never changes after parse
        if self._meta is None:
            self._meta = decode_metadata(self._front_matter)
        return self._meta

    def content(self, name: str, locked: bool) -> str:
        """Render the page body to HTML for one player.

        Raises:
            NotParsed: If called before a successful parse
            TemplateError: If the body template is invalid
            RenderError: If the markdown transform fails
        """
        if self._body is None:
            raise NotParsed("content")

        return self.renderer.render(self._body, RenderContext(name, locked))

    def __repr__(self) -> str:
        state = "parsed" if self.is_parsed else "empty"
        return f"Page({state})"

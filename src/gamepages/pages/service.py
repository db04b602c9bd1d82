"""
Service for serving pages from a directory of page documents.

Provides the request-level flow around the pipeline: locate a page file,
parse it, decide its lock state for the player's used objects and render
everything a client needs into a PageView.
"""

import logging
from pathlib import Path
from typing import List, Optional, Sequence, TYPE_CHECKING

from .locks import LockEvaluator, LockMode
from .models import GameObject, PageView
from .page import Page
from .renderer import ContentRenderer

if TYPE_CHECKING:
    from ..settings import PipelineSettings

DEFAULT_PAGES_PATH = Path("pages")
DEFAULT_PAGE_EXTENSION = ".md"


class PageService:
    """Service for loading and rendering game pages.

    Page files are read fresh on every request, so edits to a page are
    picked up without restarting. Parsed pages are never shared between
    requests.
    """

    def __init__(
        self,
        pages_path: Optional[str | Path] = None,
        settings: Optional["PipelineSettings"] = None,
        renderer: Optional[ContentRenderer] = None,
    ):
        """Initialize the page service.

        Args:
            pages_path: Directory holding page documents. Falls back to the
                settings value, then to ``pages``.
            settings: Pipeline settings for extensions and lock rule.
            renderer: Content renderer to share between pages.
        """
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self.settings = settings

        if pages_path is None:
            pages_path = settings.pages_path if settings else DEFAULT_PAGES_PATH
        self.pages_path = Path(pages_path)
        self.page_extension = (
            settings.page_extension if settings else DEFAULT_PAGE_EXTENSION
        )

        if renderer is None:
            extensions = settings.markdown_extensions if settings else None
            renderer = ContentRenderer(extensions)
        self.renderer = renderer

        lock_mode = settings.lock_mode if settings else LockMode.FIRST_MATCH
        self.evaluator = LockEvaluator(lock_mode)

        self.logger.info(
            f"Initializing PageService with path: {self.pages_path} "
            f"(lock mode: {lock_mode.value})"
        )

    def page_path(self, page_name: str) -> Path:
        """Get the document path for a page name.

        Raises:
            ValueError: If the name is empty or points outside the pages directory
        """
        if not page_name or "/" in page_name or "\\" in page_name or page_name in (".", ".."):
            raise ValueError(f"Invalid page name: {page_name!r}")

        path = self.pages_path / f"{page_name}{self.page_extension}"
        if self.pages_path.resolve() not in path.resolve().parents:
            raise ValueError(f"Invalid page name: {page_name!r}")
        return path

    def list_pages(self) -> List[str]:
        """List available page names, sorted."""
        if not self.pages_path.is_dir():
            self.logger.warning(f"Pages directory not found: {self.pages_path}")
            return []

        return sorted(
            path.name[: -len(self.page_extension)]
            for path in self.pages_path.glob(f"*{self.page_extension}")
            if path.is_file()
        )

    def load_page(self, page_name: str) -> Page:
        """Open and parse a page document.

        Raises:
            FileNotFoundError: If the page doesn't exist
            ValueError: If the page name is invalid
            PageError: If the document cannot be parsed
        """
        path = self.page_path(page_name)
        if not path.is_file():
            raise FileNotFoundError(f"Page not found: {path}")

        self.logger.debug(f"Loading page from: {path}")
        page = Page(self.renderer)
        with path.open("rb") as f:
            page.parse(f)
        return page

    def render_page(
        self,
        page_name: str,
        player_name: str = "",
        used: Sequence[GameObject] = (),
    ) -> PageView:
        """Render a page for a player.

        The page is locked only if it declares required objects and the
        configured lock rule rejects ``used``. With the default rule the
        order of ``used`` matters, so pass it in the order the client sent it.

        Args:
            page_name: Name of the page (file name without extension)
            player_name: Name bound to ``{{.Name}}``
            used: Objects the player uses to unlock the page

        Returns:
            PageView with rendered text and discovered objects
        """
        page = self.load_page(page_name)
        meta = page.meta()

        locked = False
        if meta.required:
            locked = self.evaluator.is_locked(meta.required, used)

        text = page.content(player_name, locked)
        self.logger.info(
            f"Rendered page '{page_name}' for '{player_name}' "
            f"({'locked' if locked else 'unlocked'})"
        )

        return PageView(
            title=meta.title,
            icon=meta.icon,
            text=text,
            editor=meta.editor,
            objects=meta.discovered,
        )

"""
Path-related settings for gamepages.
"""

from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from PySide6.QtCore import QSettings

DEFAULT_PAGES_PATH = "pages"
DEFAULT_PAGE_EXTENSION = ".md"


class PathSettings:
    """Manages where page documents are looked up."""

    def __init__(self, settings: "QSettings"):
        self.settings = settings

    def _get_str(self, key: str, default: str = "") -> str:
        """Type-safe string retrieval from settings."""
        value = self.settings.value(key, default)
        return str(value) if value else default

    @property
    def pages_path(self) -> Path:
        """Get the directory holding page documents."""
        return Path(self._get_str("paths/pages", DEFAULT_PAGES_PATH))

    @pages_path.setter
    def pages_path(self, value: Path | str) -> None:
        self.settings.setValue("paths/pages", str(value))
        self.settings.sync()

    @property
    def page_extension(self) -> str:
        """Get the file extension of page documents (with leading dot)."""
        return self._get_str("paths/page_extension", DEFAULT_PAGE_EXTENSION)

    @page_extension.setter
    def page_extension(self, value: str) -> None:
        value = value.strip()
        if value and not value.startswith("."):
            value = f".{value}"
        self.settings.setValue("paths/page_extension", value or DEFAULT_PAGE_EXTENSION)
        self.settings.sync()

"""
Rendering-related settings for gamepages.
"""

import logging
from typing import TYPE_CHECKING, Any, List, Sequence

from ..pages.locks import LockMode
from ..pages.renderer import DEFAULT_MARKDOWN_EXTENSIONS

if TYPE_CHECKING:
    from PySide6.QtCore import QSettings

logger = logging.getLogger(__name__)


class RenderSettings:
    """Manages markdown conversion and lock evaluation settings."""

    def __init__(self, settings: "QSettings"):
        self.settings = settings

    def _get_list(self, key: str, default: Sequence[str]) -> List[str]:
        """Type-safe list retrieval (INI files return one-item lists as str)."""
        value: Any = self.settings.value(key, None)
        if value is None:
            return list(default)
        if isinstance(value, str):
            return [item.strip() for item in value.split(",") if item.strip()]
        return [str(item) for item in value]

    @property
    def markdown_extensions(self) -> List[str]:
        """Get Python-Markdown extensions applied to page bodies."""
        return self._get_list("render/markdown_extensions", DEFAULT_MARKDOWN_EXTENSIONS)

    @markdown_extensions.setter
    def markdown_extensions(self, value: Sequence[str]) -> None:
        # Stored comma-joined so empty and one-item lists survive INI storage
        self.settings.setValue("render/markdown_extensions", ",".join(value))
        self.settings.sync()

    @property
    def lock_mode(self) -> LockMode:
        """Get the lock evaluation rule."""
        value = str(self.settings.value("render/lock_mode", LockMode.FIRST_MATCH.value))
        try:
            return LockMode(value)
        except ValueError:
            logger.warning(f"Unknown lock mode '{value}', using {LockMode.FIRST_MATCH.value}")
            return LockMode.FIRST_MATCH

    @lock_mode.setter
    def lock_mode(self, value: LockMode | str) -> None:
        mode = LockMode(value)
        self.settings.setValue("render/lock_mode", mode.value)
        self.settings.sync()

"""
Settings validation system for gamepages.
"""

import logging
from typing import List, TYPE_CHECKING

from ..errors import ConfigError
from ..pages.renderer import ContentRenderer
from .logging import VALID_LEVELS
from .types import ValidationResult

if TYPE_CHECKING:
    from .core import PipelineSettings

logger = logging.getLogger(__name__)


class SettingsValidator:
    """Validates configuration settings."""

    def __init__(self, settings: "PipelineSettings"):
        self.settings = settings

    def validate(self) -> ValidationResult:
        """Validate current configuration."""
        errors: List[str] = []
        warnings: List[str] = []

        # Validate pages directory
        pages_path = self.settings.pages_path
        if not pages_path.exists():
            warnings.append(f"Pages directory does not exist: {pages_path}")
        elif not pages_path.is_dir():
            errors.append(f"Pages path is not a directory: {pages_path}")

        # Validate markdown extensions by building a renderer with them
        try:
            ContentRenderer(self.settings.markdown_extensions)
        except ConfigError as e:
            errors.append(str(e))

        # Validate log level
        level = self.settings.logging.console_log_level
        if level.upper() not in VALID_LEVELS:
            warnings.append(f"Unknown console log level: {level}")

        result = ValidationResult(
            is_valid=len(errors) == 0, errors=errors, warnings=warnings
        )
        logger.debug(
            f"Settings validated: {len(errors)} error(s), {len(warnings)} warning(s)"
        )
        return result

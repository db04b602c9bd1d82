"""
Core settings management for gamepages.
"""

import logging
from pathlib import Path
from typing import List, Optional, Union

from PySide6.QtCore import QSettings

from ..pages.locks import LockMode
from .types import ConfigVersion, ValidationResult
from .migration import SettingsMigrator
from .validation import SettingsValidator
from .paths import PathSettings
from .render import RenderSettings
from .logging import LoggingSettings

logger = logging.getLogger(__name__)


class PipelineSettings:
    """
    Configuration management using QSettings.

    Provides type-safe access to pipeline settings with cross-platform
    storage. Pass ``settings_file`` to use an INI file instead of the
    platform's native store.
    """

    def __init__(
        self, profile: str = "default", settings_file: Optional[Union[str, Path]] = None
    ):
        """Initialize settings for a profile.

        Args:
            profile: Settings profile name (default: "default")
            settings_file: Optional INI file to store settings in
        """
        if settings_file is not None:
            self.settings = QSettings(str(settings_file), QSettings.Format.IniFormat)
        else:
            self.settings = QSettings("gamepages", "gamepages")
        self.profile = profile

        # Use profile as a group: gamepages/<profile>/...
        self.settings.beginGroup(profile)

        # Initialize subsystems
        self._migrator = SettingsMigrator(self.settings)
        self._validator = SettingsValidator(self)
        self._paths = PathSettings(self.settings)
        self._render = RenderSettings(self.settings)
        self._logging = LoggingSettings(self.settings)

        # Ensure version is stamped
        self._migrator.ensure_version()

        logger.debug(
            f"Settings initialized for profile '{profile}', stored at: {self.settings.fileName()}"
        )

    # === SUBSYSTEM ACCESS ===

    @property
    def paths(self) -> PathSettings:
        """Access path settings subsystem."""
        return self._paths

    @property
    def render(self) -> RenderSettings:
        """Access render settings subsystem."""
        return self._render

    @property
    def logging(self) -> LoggingSettings:
        """Access logging settings subsystem."""
        return self._logging

    # === VERSION AND FIRST RUN ===

    @property
    def is_first_run(self) -> bool:
        """Check if this is the first run with this profile."""
        value = self.settings.value("app/first_run", True)
        if isinstance(value, str):
            return value.lower() in ("true", "1", "yes")
        return bool(value)

    def set_first_run_complete(self) -> None:
        """Mark first run as complete."""
        self.settings.setValue("app/first_run", False)
        self.settings.sync()

    @property
    def version(self) -> str:
        """Get configuration version."""
        value = self.settings.value("app/version", ConfigVersion.CURRENT.value)
        return str(value) if value is not None else ConfigVersion.CURRENT.value

    # === PATH SETTINGS (DELEGATED) ===

    @property
    def pages_path(self) -> Path:
        """Get the pages directory."""
        return self._paths.pages_path

    @pages_path.setter
    def pages_path(self, value: Union[str, Path]) -> None:
        self._paths.pages_path = value

    @property
    def page_extension(self) -> str:
        """Get the page document extension."""
        return self._paths.page_extension

    # === RENDER SETTINGS (DELEGATED) ===

    @property
    def markdown_extensions(self) -> List[str]:
        """Get markdown extensions used for page bodies."""
        return self._render.markdown_extensions

    @property
    def lock_mode(self) -> LockMode:
        """Get the lock evaluation rule."""
        return self._render.lock_mode

    # === LOGGING SETTINGS (DELEGATED) ===

    @property
    def console_logging(self) -> bool:
        return self._logging.console_logging

    @property
    def console_log_level(self) -> str:
        return self._logging.console_log_level

    @property
    def console_use_colors(self) -> bool:
        return self._logging.console_use_colors

    @property
    def file_logging(self) -> bool:
        return self._logging.file_logging

    @property
    def log_file_path(self) -> str:
        return self._logging.log_file_path

    # === VALIDATION AND UTILITIES ===

    def validate(self) -> ValidationResult:
        """Validate current configuration."""
        return self._validator.validate()

    def get_settings_file_path(self) -> str:
        """Get path to settings file."""
        return self.settings.fileName()

    def reset(self) -> None:
        """Reset this profile to defaults."""
        # remove("") clears only the current profile group
        self.settings.remove("")
        self.settings.sync()
        self._migrator.ensure_version()
        logger.info(f"Settings profile '{self.profile}' reset to defaults")

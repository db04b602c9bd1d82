"""
Settings version bookkeeping for gamepages.
"""

import logging
from typing import TYPE_CHECKING

from .types import ConfigVersion

if TYPE_CHECKING:
    from PySide6.QtCore import QSettings

logger = logging.getLogger(__name__)


class SettingsMigrator:
    """Keeps the stored configuration version in step with the package."""

    def __init__(self, settings: "QSettings"):
        self.settings = settings

    def ensure_version(self) -> None:
        """Ensure configuration version is set."""
        current_version = str(self.settings.value("app/version", "") or "")

        if not current_version:
            # First run - set current version
            self.settings.setValue("app/version", ConfigVersion.CURRENT.value)
            self.settings.setValue("app/first_run", True)
            self.settings.sync()
            logger.info("First run detected, initializing configuration")
        elif current_version != ConfigVersion.CURRENT.value:
            # No migration path exists for unknown versions; keep values as-is
            logger.warning(
                f"Unknown configuration version {current_version}, "
                f"re-stamping as {ConfigVersion.CURRENT.value}"
            )
            self.settings.setValue("app/version", ConfigVersion.CURRENT.value)
            self.settings.setValue("app/migrated_from", current_version)
            self.settings.sync()

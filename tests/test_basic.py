"""Basic unit tests for gamepages settings and logging."""

import logging
from pathlib import Path

from gamepages.pages import DEFAULT_MARKDOWN_EXTENSIONS, LockMode


class TestSettingsInitialization:
    """Test settings initialization and basic operations."""

    def test_pipeline_settings_init(self, settings) -> None:
        """Test PipelineSettings can be initialized with defaults."""
        assert settings.version == "1.0"
        assert settings.is_first_run is True
        assert settings.pages_path == Path("pages")
        assert settings.page_extension == ".md"
        assert settings.markdown_extensions == DEFAULT_MARKDOWN_EXTENSIONS
        assert settings.lock_mode is LockMode.FIRST_MATCH

    def test_settings_persist(self, settings, settings_file: Path) -> None:
        """Test values survive a new settings instance on the same file."""
        from gamepages.settings import PipelineSettings

        settings.pages_path = "story/pages"
        settings.render.markdown_extensions = ["tables"]
        settings.render.lock_mode = LockMode.SUBSET
        settings.set_first_run_complete()

        reloaded = PipelineSettings(settings_file=settings_file)
        assert reloaded.pages_path == Path("story/pages")
        assert reloaded.markdown_extensions == ["tables"]
        assert reloaded.lock_mode is LockMode.SUBSET
        assert reloaded.is_first_run is False

    def test_profiles_are_separate(self, settings, settings_file: Path) -> None:
        """Test profiles do not share values."""
        from gamepages.settings import PipelineSettings

        settings.pages_path = "a"
        other = PipelineSettings(profile="other", settings_file=settings_file)
        assert other.pages_path == Path("pages")

    def test_page_extension_gets_dot(self, settings) -> None:
        settings.paths.page_extension = "txt"
        assert settings.page_extension == ".txt"

    def test_empty_extension_list(self, settings) -> None:
        settings.render.markdown_extensions = []
        assert settings.markdown_extensions == []

    def test_unknown_lock_mode_falls_back(self, settings) -> None:
        settings.settings.setValue("render/lock_mode", "weird")
        assert settings.lock_mode is LockMode.FIRST_MATCH

    def test_invalid_log_level_ignored(self, settings) -> None:
        settings.logging.console_log_level = "LOUD"
        assert settings.console_log_level == "WARNING"

    def test_reset(self, settings) -> None:
        settings.pages_path = "elsewhere"
        settings.reset()
        assert settings.pages_path == Path("pages")
        assert settings.version == "1.0"

    def test_unknown_version_restamped(self, settings, settings_file: Path) -> None:
        from gamepages.settings import PipelineSettings

        settings.settings.setValue("app/version", "0.9")
        settings.settings.sync()

        reloaded = PipelineSettings(settings_file=settings_file)
        assert reloaded.version == "1.0"
        assert str(reloaded.settings.value("app/migrated_from")) == "0.9"


class TestSettingsValidation:
    """Test settings validation."""

    def test_missing_pages_dir_is_warning(self, settings, tmp_path: Path) -> None:
        settings.pages_path = tmp_path / "missing"
        validation = settings.validate()
        assert validation.is_valid is True
        assert any("does not exist" in w for w in validation.warnings)

    def test_valid_settings(self, settings, pages_dir: Path) -> None:
        settings.pages_path = pages_dir
        validation = settings.validate()
        assert validation.is_valid is True
        assert validation.errors == []
        assert validation.warnings == []

    def test_pages_path_must_be_directory(self, settings, pages_dir: Path) -> None:
        settings.pages_path = pages_dir / "vault.md"
        assert settings.validate().is_valid is False

    def test_bad_markdown_extension(self, settings, pages_dir: Path) -> None:
        settings.pages_path = pages_dir
        settings.render.markdown_extensions = ["no_such_markdown_extension"]
        validation = settings.validate()
        assert validation.is_valid is False
        assert len(validation.errors) == 1


class TestUtilsLogging:
    """Test logging configuration."""

    def test_logging_setup_with_settings(self, settings, restore_root_logging) -> None:
        """Test logging setup works with settings."""
        from gamepages.utils.logging_config import setup_logging

        setup_logging(settings=settings)

        logger = logging.getLogger("gamepages")
        assert logger.level == logging.DEBUG
        assert logging.getLogger("MARKDOWN").level == logging.WARNING

    def test_file_logging(self, settings, tmp_path: Path, restore_root_logging) -> None:
        """Test file logging writes CSV lines."""
        from gamepages.utils.logging_config import setup_logging

        log_file = tmp_path / "logs" / "gamepages.csv"
        settings.logging.console_logging = False
        settings.logging.file_logging = True
        settings.logging.log_file_path = str(log_file)

        setup_logging(settings)
        logging.getLogger("gamepages.test").info('said "hello"')
        for handler in logging.getLogger().handlers:
            handler.flush()

        content = log_file.read_text(encoding="utf-8")
        assert '"said ""hello"""' in content

    def test_colored_formatter(self) -> None:
        from gamepages.utils.logging_config import ColoredFormatter

        formatter = ColoredFormatter(fmt="%(levelname)s %(message)s")
        record = logging.LogRecord("x", logging.ERROR, __file__, 1, "bad", None, None)
        assert formatter.format(record) == "\033[31mERROR\033[0m bad"

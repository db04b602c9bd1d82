"""Shared fixtures for gamepages tests."""

import logging
import textwrap
from pathlib import Path
from typing import Iterator

import pytest

VAULT_PAGE = (
    "```\n"
    "icon: fa-key\n"
    "title: Vault\n"
    "required:\n"
    "  - name: key\n"
    "    value: gold\n"
    "```\n"
    "You see a vault. {{if .Locked}}It is locked.{{else}}It creaks open, {{.Name}}.{{end}}\n"
)

EXAMPLE_FRONT_MATTER = textwrap.dedent("""\
    icon: fa-question
    title: Example
    editor: false
    required:
      - name: key
        value: brass
    discovered:
      - name: note
        value: torn
    """)


@pytest.fixture
def vault_document() -> bytes:
    return VAULT_PAGE.encode("utf-8")


@pytest.fixture
def settings_file(tmp_path: Path) -> Path:
    return tmp_path / "gamepages.ini"


@pytest.fixture
def settings(settings_file: Path):
    """INI-backed settings so tests never touch the user's configuration."""
    from gamepages.settings import PipelineSettings

    return PipelineSettings(settings_file=settings_file)


@pytest.fixture
def pages_dir(tmp_path: Path) -> Path:
    """Directory with a few page documents."""
    pages = tmp_path / "pages"
    pages.mkdir()

    (pages / "vault.md").write_text(VAULT_PAGE, encoding="utf-8")
    (pages / "index.md").write_text(
        "```\n"
        "icon: fa-home\n"
        "title: Welcome\n"
        "editor: true\n"
        "discovered:\n"
        "  - name: note\n"
        "    value: torn\n"
        "```\n"
        "# Hello {{.Name}}\n\nThe door is *closed*.\n",
        encoding="utf-8",
    )
    (pages / "gate.md").write_text(
        "```\n"
        "title: Gate\n"
        "required:\n"
        "  - name: key\n"
        "    value: gold\n"
        "  - name: badge\n"
        "    value: silver\n"
        "```\n"
        "{{if .Locked}}The gate holds.{{else}}The gate swings wide.{{end}}\n",
        encoding="utf-8",
    )
    (pages / "broken.md").write_text("title: no delimiters\n", encoding="utf-8")
    (pages / "notes.txt").write_text("not a page", encoding="utf-8")
    return pages


@pytest.fixture
def restore_root_logging() -> Iterator[None]:
    """Drop handlers added by a test that reconfigures logging."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)


@pytest.fixture
def example_front_matter() -> bytes:
    return EXAMPLE_FRONT_MATTER.encode("utf-8")

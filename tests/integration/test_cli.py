from pathlib import Path

import orjson
import pytest

from gamepages.__main__ import main


@pytest.fixture
def cli_args(tmp_path: Path) -> list:
    return ["--settings-file", str(tmp_path / "cli.ini")]


def test_render_page_by_name(pages_dir: Path, cli_args, capsys, restore_root_logging):
    code = main(["vault", "--pages-dir", str(pages_dir), "--name", "Alex",
                 "--objects", "key=gold", *cli_args])

    assert code == 0
    assert "It creaks open, Alex." in capsys.readouterr().out


def test_render_page_file_as_json(pages_dir: Path, cli_args, capsys, restore_root_logging):
    code = main([str(pages_dir / "vault.md"), "--name", "Alex", "--json", *cli_args])

    assert code == 0
    payload = orjson.loads(capsys.readouterr().out)
    assert payload["title"] == "Vault"
    assert "It is locked." in payload["text"]


def test_broken_page_exit_code(pages_dir: Path, cli_args, capsys, restore_root_logging):
    code = main(["broken", "--pages-dir", str(pages_dir), *cli_args])

    assert code == 1
    assert "error:" in capsys.readouterr().err


def test_missing_page_exit_code(pages_dir: Path, cli_args, restore_root_logging):
    assert main(["attic", "--pages-dir", str(pages_dir), *cli_args]) == 1


def test_render_error_reported_once(pages_dir: Path, cli_args, capsys, restore_root_logging):
    code = main(["broken", "--pages-dir", str(pages_dir), *cli_args])

    err = capsys.readouterr().err
    assert code == 1
    assert err.count("error:") == 1
    assert "Could not render page" not in err

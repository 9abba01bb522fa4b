"""End-to-end tests of the `verkeep` command surface."""

import json
import logging

import pytest

from verkeep import __version__
from verkeep.cli import EXIT_FAILURE, EXIT_OK, EXIT_USAGE, main
from verkeep.semver import SemVer


@pytest.fixture(autouse=True)
def restore_root_logger():
    """setup_logging() reconfigures the root logger; undo it after each test."""
    root = logging.getLogger()
    level = root.level
    yield
    for handler in list(root.handlers):
        if type(handler) in (logging.StreamHandler, logging.FileHandler):
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)


def run_cli(root, *args):
    return main(["--root", str(root), *args])


def test_print_current_version(project, capsys):
    assert run_cli(project) == EXIT_OK
    assert capsys.readouterr().out == "1.3.2-rc.2+build.13\n"


def test_print_without_store(tmp_path, capsys):
    assert run_cli(tmp_path) == EXIT_FAILURE
    err = capsys.readouterr().err
    assert "Could not read resources/VERSION" in err
    assert "verkeep write" in err


def test_write_then_print(tmp_path, make_project, capsys):
    make_project(tmp_path, "0.0.0")
    assert run_cli(tmp_path, "write", "major=0", "minor=3", "patch=0", "pre-release=beta.1") == EXIT_OK
    assert run_cli(tmp_path) == EXIT_OK

    assert capsys.readouterr().out == "0.3.0-beta.1\n"
    assert '"0.3.0-beta.1"' in (tmp_path / "project.clj").read_text(encoding="utf-8")


def test_set_with_pair_spelling(project, capsys):
    assert run_cli(project, "set", ":minor", "5") == EXIT_OK
    assert run_cli(project) == EXIT_OK
    assert capsys.readouterr().out == "1.5.2-rc.2+build.13\n"


def test_set_unknown_component_is_a_usage_error(project, capsys):
    assert run_cli(project, "set", "epoch=1") == EXIT_USAGE
    assert "Unknown version component" in capsys.readouterr().err


def test_bump(project, capsys):
    assert run_cli(project, "bump", "major") == EXIT_OK
    assert run_cli(project) == EXIT_OK
    assert capsys.readouterr().out == "2.0.0\n"


def test_bump_invalid_component(project, capsys):
    assert run_cli(project, "bump", "huge") == EXIT_USAGE
    assert "Not a valid component to bump" in capsys.readouterr().err


def test_check_match_is_silent(project, capsys):
    assert run_cli(project, "check") == EXIT_OK
    captured = capsys.readouterr()
    assert captured.out == ""
    assert captured.err == ""


def test_check_mismatch(tmp_path, make_project, make_store, capsys):
    make_project(tmp_path, "1.0.1")
    make_store(tmp_path, SemVer(1, 0, 0))

    assert run_cli(tmp_path, "check") == EXIT_FAILURE
    err = capsys.readouterr().err
    assert "Versions differ between project.clj and resources/VERSION." in err
    assert "project.clj: 1.0.1" in err
    assert "resources/VERSION: 1.0.0" in err


def test_init(tmp_path, make_project, capsys):
    make_project(tmp_path, "4.1.0")
    assert run_cli(tmp_path, "init") == EXIT_OK
    assert "4.1.0" in capsys.readouterr().out
    assert run_cli(tmp_path, "check") == EXIT_OK


def test_settings_file_selects_descriptor(tmp_path, capsys):
    (tmp_path / ".verkeep.json").write_text(json.dumps({
        "descriptor_file": "pyproject.toml",
        "descriptor_format": "pyproject",
    }), encoding="utf-8")
    (tmp_path / "pyproject.toml").write_text('[project]\nname = "w"\nversion = "0.1.0"\n', encoding="utf-8")

    assert run_cli(tmp_path, "init") == EXIT_OK
    assert run_cli(tmp_path, "bump", "patch") == EXIT_OK
    assert 'version = "0.1.1"' in (tmp_path / "pyproject.toml").read_text(encoding="utf-8")


def test_log_level_flag_shows_info_records(project, capsys):
    assert run_cli(project, "--log-level", "info", "bump", "patch") == EXIT_OK
    assert "Wrote version 1.3.3" in capsys.readouterr().err


def test_log_file(project, tmp_path):
    log_file = tmp_path / "logs" / "verkeep.log"
    assert main(["--root", str(project), "--log-file", str(log_file), "bump", "minor"]) == EXIT_OK
    assert "Bumping minor" in log_file.read_text(encoding="utf-8")


def test_version_flag(capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(["--version"])
    assert excinfo.value.code == 0
    assert __version__ in capsys.readouterr().out


def test_unreadable_store_is_reported(project, capsys):
    (project / "resources" / "VERSION").write_bytes(b"{:major \xff}")

    assert run_cli(project, "bump", "patch") == EXIT_FAILURE
    assert "resources/VERSION is not valid UTF-8" in capsys.readouterr().err

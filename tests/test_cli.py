"""Tests for the blockconf command line utility."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

import blockconf.__main__ as main_module
from blockconf import __version__


CONFIG = """\
# Sample
name "John Smith"
server
  host localhost
  port 8080
"""


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    path = tmp_path / "app.conf"
    path.write_text(CONFIG)
    return path


@pytest.fixture(autouse=True)
def _no_logging_setup(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(main_module, "setup_logging", lambda *a, **k: None)


def test_prints_the_parsed_config(
    config_file: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    main_module.main([str(config_file)])

    out = capsys.readouterr().out
    assert out == 'name "John Smith"\nserver\n  host localhost\n  port 8080\n'


def test_indent_option(
    config_file: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    main_module.main([str(config_file), "--indent", "4"])

    assert "\n    host localhost\n" in capsys.readouterr().out


def test_json_output(
    config_file: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    main_module.main([str(config_file), "--json"])

    assert json.loads(capsys.readouterr().out) == {
        "name": ["John Smith"],
        "server": {"host": ["localhost"], "port": ["8080"]},
    }


def test_json_output_with_inferred_numbers(
    config_file: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    main_module.main([str(config_file), "--json", "0", "--infer"])

    data = json.loads(capsys.readouterr().out)
    assert data["server"]["port"] == [8080]


def test_get_a_single_value(
    config_file: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    main_module.main([str(config_file), "--get", "server.port"])

    assert capsys.readouterr().out == "port 8080\n"


def test_get_a_block(
    config_file: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    main_module.main([str(config_file), "-g", "server"])

    assert capsys.readouterr().out == "host localhost\nport 8080\n"


def test_get_a_missing_key_is_a_usage_error(
    config_file: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main_module.main([str(config_file), "--get", "server.user"])

    assert excinfo.value.code == 2
    err = capsys.readouterr().err
    assert "'user'" in err
    assert "'host' and 'port'" in err


def test_negative_indent_is_a_usage_error(
    config_file: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main_module.main([str(config_file), "--indent", "0"])

    assert excinfo.value.code == 2
    assert "--indent" in capsys.readouterr().err


def test_missing_file_exits_with_an_error(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main_module.main([str(tmp_path / "nope.conf")])

    assert excinfo.value.code == 1
    assert "nope.conf" in capsys.readouterr().err


def test_parse_errors_exit_with_the_message(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    path = tmp_path / "tabs.conf"
    path.write_text("key\tvalue\n")

    with pytest.raises(SystemExit) as excinfo:
        main_module.main([str(path)])

    assert excinfo.value.code == 1
    assert "Tabs are not allowed" in capsys.readouterr().err


def test_max_depth_option(
    config_file: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main_module.main([str(config_file), "--max-depth", "0"])

    assert excinfo.value.code == 1
    assert "nest deeper" in capsys.readouterr().err


def test_version(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main_module.main(["--version"])

    assert excinfo.value.code == 0
    assert __version__ in capsys.readouterr().out

# tests/test_cli.py

import logging

import pytest
from click.testing import CliRunner

from node_viewer.core.config_manager import load_settings
from node_viewer.main import main


@pytest.fixture
def runner():
    return CliRunner()


def test_inspect_xml_file(runner, tmp_path):
    xml_file = tmp_path / "catalog.xml"
    xml_file.write_bytes(b"<catalog><book/><book/></catalog>")

    result = runner.invoke(main, ["cli", "inspect", str(xml_file)])

    assert result.exit_code == 0
    assert "catalog.xml" in result.output
    assert "XML" in result.output
    assert result.output.count("  book") == 2
    assert "00000000" in result.output


def test_inspect_broken_xml_still_reports(runner, tmp_path):
    xml_file = tmp_path / "broken.xml"
    xml_file.write_bytes(b"<a><b>")

    result = runner.invoke(main, ["cli", "inspect", str(xml_file), "--no-hex"])

    assert result.exit_code == 0
    assert "Could not list elements" in result.output
    assert "00000000" not in result.output


def test_inspect_missing_file_fails(runner, tmp_path):
    result = runner.invoke(main, ["cli", "inspect", str(tmp_path / "nope.bin")])

    assert result.exit_code == 1
    assert "Error opening file" in result.output


def test_settings_set_and_show(runner, tmp_path):
    settings_path = tmp_path / "settings.json"

    result = runner.invoke(main, ["cli", "settings", "set", "--scale", "2.0", "--theme", "dark",
                                  "--picker", "async", "--timeout", "45", "--config", str(settings_path)])
    assert result.exit_code == 0

    saved = load_settings(settings_path)
    assert saved.ui_scale == 2.0
    assert saved.theme == "dark"
    assert saved.picker_mode == "async"
    assert saved.pending_timeout == 45.0

    result = runner.invoke(main, ["cli", "settings", "show", "--config", str(settings_path)])
    assert result.exit_code == 0
    assert "async" in result.output


def test_settings_rejects_unknown_theme(runner, tmp_path):
    result = runner.invoke(main, ["cli", "settings", "set", "--theme", "neon",
                                  "--config", str(tmp_path / "settings.json")])
    assert result.exit_code == 2


def test_inspect_missing_file_is_logged(runner, tmp_path, caplog):
    missing = tmp_path / "nope.bin"

    with caplog.at_level(logging.ERROR, logger="node_viewer.cli.main"):
        runner.invoke(main, ["cli", "inspect", str(missing)])

    assert any("nope.bin" in record.getMessage() for record in caplog.records)

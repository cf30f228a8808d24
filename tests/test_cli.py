"""Tests for the command line interface."""

import json
import logging
from pathlib import Path

import pytest
from typer.testing import CliRunner

from cellsketch.cli.app import create_app
from cellsketch.core.synth import GlyphSet

runner = CliRunner()

DIAGRAM = "┌──┐   ┌─┐\n│hi├──▶│ │\n└──┘   └─┘\n"


@pytest.fixture
def diagram(tmp_path: Path) -> Path:
    path = tmp_path / "diagram.txt"
    path.write_text(DIAGRAM, encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def detach_log_handlers():
    """Remove file handlers added by --log-file so tests stay independent."""
    logger = logging.getLogger("cellsketch")
    before = list(logger.handlers)
    level = logger.level
    yield
    for handler in logger.handlers:
        if handler not in before:
            handler.close()
    logger.handlers = before
    logger.setLevel(level)


class TestShow:
    """Tests for the show command."""

    def test_prints_diagram(self, diagram: Path):
        result = runner.invoke(create_app(), ["show", str(diagram)])
        assert result.exit_code == 0
        assert result.stdout == DIAGRAM

    def test_missing_file(self, tmp_path: Path):
        result = runner.invoke(create_app(), ["show", str(tmp_path / "nope.txt")])
        assert result.exit_code == 1
        assert "Cannot read" in result.stdout

    def test_ascii_option(self, tmp_path: Path):
        path = tmp_path / "ascii.txt"
        path.write_text("+--+\n|  |\n+--+\n", encoding="utf-8")
        result = runner.invoke(create_app(), ["show", "--ascii", str(path)])
        assert result.exit_code == 0
        assert result.stdout == "+--+\n|  |\n+--+\n"


class TestShapes:
    """Tests for listing reconstructed boxes."""

    def test_lists_boxes(self, diagram: Path):
        result = runner.invoke(create_app(), ["shapes", str(diagram)])
        assert result.exit_code == 0
        assert "2 boxes in diagram.txt" in result.stdout
        assert "box-2" in result.stdout

    def test_json(self, diagram: Path):
        result = runner.invoke(create_app(), ["shapes", "--json", str(diagram)])
        data = json.loads(result.stdout)
        assert data[0] == {"id": "box-1", "top": 0, "left": 0, "width": 3, "height": 2}
        assert data[1]["left"] == 7

    def test_no_boxes(self, tmp_path: Path):
        path = tmp_path / "line.txt"
        path.write_text("╶──╴\n", encoding="utf-8")
        result = runner.invoke(create_app(), ["shapes", str(path)])
        assert result.exit_code == 0
        assert "No boxes found" in result.stdout

    def test_ascii(self, tmp_path: Path):
        path = tmp_path / "ascii.txt"
        path.write_text("+--+\n|  |\n+--+\n", encoding="utf-8")
        result = runner.invoke(create_app(), ["shapes", "--ascii", "--json", str(path)])
        assert len(json.loads(result.stdout)) == 1


class TestEdit:
    """Tests for launching the editor."""

    @pytest.fixture
    def launched(self, monkeypatch: pytest.MonkeyPatch) -> list:
        calls = []
        monkeypatch.setattr(
            "cellsketch.cli.studio.editor.run_editor",
            lambda path, settings: calls.append((path, settings)),
        )
        return calls

    def test_options_reach_editor(self, launched: list, tmp_path: Path):
        path = tmp_path / "new.txt"
        result = runner.invoke(create_app(), ["edit", "--ascii", "--max-history", "5", str(path)])
        assert result.exit_code == 0
        [(opened, settings)] = launched
        assert opened == path
        assert settings.glyph_set == GlyphSet.ASCII
        assert settings.max_history == 5

    def test_scratch_buffer(self, launched: list):
        result = runner.invoke(create_app(), ["edit"])
        assert result.exit_code == 0
        assert launched[0][0] is None

    def test_rejects_zero_history(self, launched: list):
        result = runner.invoke(create_app(), ["edit", "--max-history", "0"])
        assert result.exit_code != 0
        assert launched == []

    def test_bad_settings_file(self, launched: list, isolated_settings: Path):
        isolated_settings.parent.mkdir(parents=True)
        isolated_settings.write_text('{"axis_lock_threshold": 0}', encoding="utf-8")
        result = runner.invoke(create_app(), ["edit"])
        assert result.exit_code == 1
        assert "Invalid settings" in result.stdout
        assert launched == []

    def test_wrongly_typed_settings_file(self, launched: list, isolated_settings: Path):
        isolated_settings.parent.mkdir(parents=True)
        isolated_settings.write_text('{"max_history": "5"}', encoding="utf-8")
        result = runner.invoke(create_app(), ["edit"])
        assert result.exit_code == 1
        assert "max_history" in result.stdout
        assert launched == []


def test_log_file(diagram: Path, tmp_path: Path):
    log = tmp_path / "cellsketch.log"
    result = runner.invoke(create_app(), ["--log-file", str(log), "show", str(diagram)])
    assert result.exit_code == 0
    logging.getLogger("cellsketch").handlers[-1].flush()
    assert "Loaded" in log.read_text(encoding="utf-8")

"""Tests for persisted editor settings."""

import json
from pathlib import Path

import pytest

from cellsketch.config import EditorSettings, Tool
from cellsketch.core.synth import GlyphSet
from cellsketch.errors import ConfigError


class TestEditorSettings:
    """Tests for EditorSettings values."""

    def test_defaults(self) -> None:
        settings = EditorSettings()
        assert settings.max_history is None
        assert settings.glyph_set == GlyphSet.UNICODE
        assert settings.default_tool == Tool.BOX

    @pytest.mark.parametrize(
        "values",
        [
            {"max_history": 0},
            {"axis_lock_threshold": 0},
            {"fill_char": ""},
            {"fill_char": "ab"},
        ],
    )
    def test_invalid_values(self, values: dict) -> None:
        with pytest.raises(ConfigError):
            EditorSettings(**values)

    def test_from_dict(self) -> None:
        settings = EditorSettings.from_dict(
            {"glyph_set": "ascii", "default_tool": "line", "max_history": 50, "colour": "red"}
        )
        assert settings.glyph_set == GlyphSet.ASCII
        assert settings.default_tool == Tool.LINE
        assert settings.max_history == 50

    def test_from_dict_bad_enum(self) -> None:
        with pytest.raises(ConfigError):
            EditorSettings.from_dict({"glyph_set": "braille"})

    @pytest.mark.parametrize(
        "data",
        [
            {"max_history": "5"},
            {"max_history": True},
            {"axis_lock_threshold": "2"},
            {"axis_lock_threshold": 1.5},
            {"fill_char": 5},
            {"reconstruct_shapes": "yes"},
            {"default_tool": ["box"]},
        ],
    )
    def test_from_dict_wrong_types(self, data: dict) -> None:
        with pytest.raises(ConfigError):
            EditorSettings.from_dict(data)


class TestSettingsFile:
    """Tests for the settings file."""

    def test_missing_file_gives_defaults(self, isolated_settings: Path) -> None:
        assert EditorSettings.load() == EditorSettings()

    def test_save_and_load(self, isolated_settings: Path) -> None:
        EditorSettings(glyph_set=GlyphSet.ASCII, fill_char=".").save()
        assert isolated_settings.exists()
        loaded = EditorSettings.load()
        assert loaded.glyph_set == GlyphSet.ASCII
        assert loaded.fill_char == "."

    def test_unreadable_file_gives_defaults(self, isolated_settings: Path) -> None:
        isolated_settings.parent.mkdir(parents=True)
        isolated_settings.write_text("{not json", encoding="utf-8")
        assert EditorSettings.load() == EditorSettings()

    def test_non_object_gives_defaults(self, isolated_settings: Path) -> None:
        isolated_settings.parent.mkdir(parents=True)
        isolated_settings.write_text("[1, 2]", encoding="utf-8")
        assert EditorSettings.load() == EditorSettings()

    def test_out_of_range_value_raises(self, isolated_settings: Path) -> None:
        isolated_settings.parent.mkdir(parents=True)
        isolated_settings.write_text(json.dumps({"max_history": -1}), encoding="utf-8")
        with pytest.raises(ConfigError):
            EditorSettings.load()

    def test_wrongly_typed_value_raises(self, isolated_settings: Path) -> None:
        isolated_settings.parent.mkdir(parents=True)
        isolated_settings.write_text(json.dumps({"fill_char": 5}), encoding="utf-8")
        with pytest.raises(ConfigError, match="fill_char"):
            EditorSettings.load()

    def test_explicit_path(self, tmp_path: Path) -> None:
        path = tmp_path / "custom.json"
        EditorSettings(max_history=10).save(path)
        assert EditorSettings.load(path).max_history == 10

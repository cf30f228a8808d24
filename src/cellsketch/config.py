"""Editor settings, persisted as JSON in the user's config directory."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, fields
from enum import Enum
from pathlib import Path
from typing import Any

from cellsketch.core.synth import GlyphSet
from cellsketch.errors import ConfigError

logger = logging.getLogger(__name__)

SETTINGS_PATH = Path.home() / ".config" / "cellsketch" / "settings.json"


class Tool(Enum):
    """Drawing tool selected by the user."""
    BOX = "box"
    LINE = "line"
    ARROW = "arrow"
    TEXT = "text"
    ERASE = "erase"
    SELECT = "select"


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass
class EditorSettings:
    """Settings that affect editing behaviour.

    Attributes:
        max_history: Undo capacity; None keeps every entry
        glyph_set: Alphabet used to draw edges
        axis_lock_threshold: Cells a line drag must cover before its axis locks
        fill_char: Character written for blank cells when saving
        reconstruct_shapes: Re-detect boxes when loading a file
        default_tool: Tool active when the editor starts
    """
    max_history: int | None = None
    glyph_set: GlyphSet = GlyphSet.UNICODE
    axis_lock_threshold: int = 1
    fill_char: str = " "
    reconstruct_shapes: bool = True
    default_tool: Tool = Tool.BOX

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        """Raise ConfigError if any value has the wrong type or is out of range."""
        if self.max_history is not None and not _is_int(self.max_history):
            raise ConfigError(f"max_history must be an integer or null, got {self.max_history!r}")
        if not _is_int(self.axis_lock_threshold):
            raise ConfigError(
                f"axis_lock_threshold must be an integer, got {self.axis_lock_threshold!r}"
            )
        if not isinstance(self.fill_char, str):
            raise ConfigError(f"fill_char must be a string, got {self.fill_char!r}")
        if not isinstance(self.reconstruct_shapes, bool):
            raise ConfigError(
                f"reconstruct_shapes must be true or false, got {self.reconstruct_shapes!r}"
            )
        if self.max_history is not None and self.max_history < 1:
            raise ConfigError(f"max_history must be positive or null, got {self.max_history}")
        if self.axis_lock_threshold < 1:
            raise ConfigError(
                f"axis_lock_threshold must be at least 1, got {self.axis_lock_threshold}"
            )
        if len(self.fill_char) != 1:
            raise ConfigError(f"fill_char must be a single character, got {self.fill_char!r}")
        if not isinstance(self.glyph_set, GlyphSet):
            raise ConfigError(f"Invalid glyph set: {self.glyph_set!r}")
        if not isinstance(self.default_tool, Tool):
            raise ConfigError(f"Invalid tool: {self.default_tool!r}")

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> EditorSettings:
        """Build settings from a JSON object, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        values = {k: v for k, v in data.items() if k in known}
        try:
            if "glyph_set" in values:
                values["glyph_set"] = GlyphSet(values["glyph_set"])
            if "default_tool" in values:
                values["default_tool"] = Tool(values["default_tool"])
        except (TypeError, ValueError) as e:
            raise ConfigError(str(e)) from e
        return cls(**values)

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["glyph_set"] = self.glyph_set.value
        data["default_tool"] = self.default_tool.value
        return data

    @classmethod
    def load(cls, path: Path | None = None) -> EditorSettings:
        """Load settings from disk, falling back to defaults.

        A missing or unreadable file yields defaults. Values that parse but
        are out of range raise ConfigError.
        """
        path = path or SETTINGS_PATH
        if not path.exists():
            return cls()
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("Ignoring unreadable settings file %s: %s", path, e)
            return cls()
        if not isinstance(data, dict):
            logger.warning("Ignoring settings file %s: expected a JSON object", path)
            return cls()
        return cls.from_dict(data)

    def save(self, path: Path | None = None) -> None:
        """Write settings to disk."""
        path = path or SETTINGS_PATH
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(self.to_dict(), f, indent=2)

"""Shared fixtures for cellsketch tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from cellsketch import config
from cellsketch.config import EditorSettings
from cellsketch.core.document import Document
from cellsketch.edit.history import CommandHistory
from cellsketch.edit.session import EditSession
from cellsketch.io.writer import dumps
from cellsketch.ports import MemoryClipboard, ViewportSource


class RecordingRenderer:
    """Renderer port that counts redraw requests."""

    def __init__(self) -> None:
        self.redraws = 0

    def redraw(self, source: ViewportSource) -> None:
        self.redraws += 1


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the settings file at a temporary location for every test."""
    path = tmp_path / "config" / "settings.json"
    monkeypatch.setattr(config, "SETTINGS_PATH", path)
    return path


@pytest.fixture
def document() -> Document:
    return Document()


@pytest.fixture
def history(document: Document) -> CommandHistory:
    return CommandHistory(document)


@pytest.fixture
def renderer() -> RecordingRenderer:
    return RecordingRenderer()


@pytest.fixture
def clipboard() -> MemoryClipboard:
    return MemoryClipboard()


@pytest.fixture
def session(renderer: RecordingRenderer, clipboard: MemoryClipboard) -> EditSession:
    return EditSession(EditorSettings(), renderer=renderer, clipboard=clipboard)


@pytest.fixture
def picture():
    """Render a document to its saved text form, for readable assertions."""
    def render(doc: Document) -> str:
        return dumps(doc)
    return render


def state_of(doc: Document) -> tuple[dict, tuple]:
    """Everything undo must restore: every cell and every shape."""
    return doc.grid.snapshot(), doc.shapes


@pytest.fixture
def snapshot():
    return state_of

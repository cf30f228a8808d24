"""Tests for EditSession: files, clipboard, viewport and status."""

from pathlib import Path

import pytest

from cellsketch.config import EditorSettings, Tool
from cellsketch.core.cell import BLANK, Text
from cellsketch.core.geometry import Region
from cellsketch.core.synth import GlyphSet
from cellsketch.edit.commands import DrawBox, DrawLine, InsertText
from cellsketch.edit.session import EditSession
from cellsketch.errors import ClipboardUnavailable, LoadFailure, SaveFailure
from cellsketch.interact import KeyEvent, PointerDown, PointerMove, PointerUp, Scroll
from cellsketch.ports import MemoryClipboard


def drag(session: EditSession, *points) -> None:
    session.handle(PointerDown(points[0]))
    for pos in points[1:]:
        session.handle(PointerMove(pos))
    session.handle(PointerUp(points[-1]))


class TestLifecycle:
    """Tests for EditSession state."""

    def test_fresh_session(self, session: EditSession) -> None:
        assert session.name == "*scratch*"
        assert not session.dirty
        assert session.active_tool == Tool.BOX
        assert session.document.is_empty

    def test_drawing_marks_dirty_and_redraws(self, session: EditSession, renderer) -> None:
        drag(session, (0, 0), (2, 4))
        assert session.dirty
        assert renderer.redraws > 0
        assert session.document.glyph_at((0, 0)) == "┌"

    def test_undo_redo(self, session: EditSession) -> None:
        session.execute(DrawLine((0, 0), (0, 3)))
        assert session.undo() is True
        assert session.document.is_empty
        assert session.undo() is False
        assert session.redo() is True
        assert session.redo() is False

    def test_undo_abandons_gesture(self, session: EditSession) -> None:
        session.execute(DrawLine((5, 0), (5, 3)))
        session.handle(PointerDown((0, 0)))
        session.handle(PointerMove((2, 2)))
        session.undo()
        assert session.machine.pending_command() is None
        session.handle(PointerUp((2, 2)))
        assert session.document.is_empty

    def test_new_clears_everything(self, session: EditSession, tmp_path: Path) -> None:
        session.execute(DrawLine((0, 0), (0, 3)))
        session.save(tmp_path / "a.txt")
        session.new()
        assert session.document.is_empty
        assert session.path is None
        assert not session.history.can_undo

    def test_max_history_from_settings(self, renderer, clipboard) -> None:
        session = EditSession(EditorSettings(max_history=1), renderer, clipboard)
        session.execute(DrawLine((0, 0), (0, 3)))
        session.execute(DrawLine((1, 0), (1, 3)))
        assert session.undo() is True
        assert session.undo() is False


class TestFiles:
    """Tests for opening and saving."""

    def test_save_without_name(self, session: EditSession) -> None:
        session.execute(DrawLine((0, 0), (0, 3)))
        with pytest.raises(SaveFailure):
            session.save()
        assert session.dirty

    def test_save_and_reopen(self, session: EditSession, tmp_path: Path) -> None:
        path = tmp_path / "diagram.txt"
        session.execute(DrawBox((0, 0), (2, 4)))
        assert session.save(path) == path
        assert not session.dirty
        assert session.name == str(path)
        assert path.read_text(encoding="utf-8") == "┌───┐\n│   │\n└───┘\n"

        session.new()
        session.open(path)
        assert session.path == path
        assert not session.dirty
        assert not session.history.can_undo
        assert session.document.shape("box-1") is not None

    def test_save_rejects_fill_char_text(self, renderer, tmp_path: Path) -> None:
        session = EditSession(EditorSettings(fill_char="."), renderer)
        session.execute(InsertText((0, 0), "a.b"))
        path = tmp_path / "dots.txt"
        with pytest.raises(SaveFailure, match="fill character"):
            session.save(path)
        assert not path.exists()
        assert session.dirty
        assert session.path is None

    def test_save_reuses_path(self, session: EditSession, tmp_path: Path) -> None:
        path = tmp_path / "diagram.txt"
        session.save(path)
        session.execute(DrawLine((0, 0), (0, 2)))
        session.save()
        assert path.read_text(encoding="utf-8") == "╶─╴\n"

    def test_save_commits_typed_text(self, session: EditSession, tmp_path: Path) -> None:
        session.set_tool(Tool.TEXT)
        session.handle(PointerDown((0, 0)))
        session.handle(KeyEvent(char="a", raw="a"))
        session.save(tmp_path / "t.txt")
        assert session.document.get((0, 0)) == Text("a")
        assert not session.dirty

    def test_failed_open_leaves_session(self, session: EditSession, tmp_path: Path) -> None:
        session.execute(DrawLine((0, 0), (0, 3)))
        document = session.document
        with pytest.raises(LoadFailure):
            session.open(tmp_path / "missing.txt")
        assert session.document is document
        assert session.dirty
        assert session.history.can_undo

    def test_open_uses_glyph_set(self, tmp_path: Path, renderer) -> None:
        path = tmp_path / "ascii.txt"
        path.write_text("+--+\n|  |\n+--+\n", encoding="utf-8")
        session = EditSession(EditorSettings(glyph_set=GlyphSet.ASCII), renderer)
        session.open(path)
        assert session.document.shapes[0].width == 3


class TestClipboard:
    """Tests for copy and paste."""

    def test_copy_region(self, session: EditSession, clipboard: MemoryClipboard) -> None:
        session.execute(DrawBox((0, 0), (2, 4)))
        text = session.copy_selection(Region(0, 0, 2, 4))
        assert text == "┌───┐\n│   │\n└───┘"
        assert clipboard.text == text

    def test_copy_selected_box(self, session: EditSession, clipboard: MemoryClipboard) -> None:
        session.execute(DrawBox((0, 0), (2, 4)))
        drag(session, (1, 2))
        assert session.machine.selected_shape == "box-1"
        session.copy_selection()
        assert clipboard.text.startswith("┌───┐")

    def test_copy_nothing_selected(self, session: EditSession) -> None:
        assert session.copy_selection() == ""

    def test_paste_is_transparent(self, session: EditSession, clipboard: MemoryClipboard) -> None:
        session.execute(DrawLine((6, 0), (6, 10)))
        clipboard.copy("ab\n c")
        session.paste(at=(5, 5))
        assert session.document.get((5, 5)) == Text("a")
        assert session.document.get((6, 6)) == Text("c")
        assert session.document.glyph_at((6, 5)) == "─"

    def test_pasted_line_glyphs_are_text(self, session: EditSession) -> None:
        session.paste(at=(0, 0), text="┼")
        assert session.document.get((0, 0)) == Text("┼")

    def test_paste_defaults_to_viewport_origin(
        self, session: EditSession, clipboard: MemoryClipboard
    ) -> None:
        clipboard.copy("x")
        session.scroll(3, 4)
        session.paste()
        assert session.document.get((3, 4)) == Text("x")

    def test_paste_without_clipboard(self, renderer) -> None:
        session = EditSession(renderer=renderer)
        with pytest.raises(ClipboardUnavailable):
            session.paste()

    def test_paste_is_undoable(self, session: EditSession) -> None:
        session.paste(at=(0, 0), text="hi")
        session.undo()
        assert session.document.get((0, 0)) is BLANK


class TestViewport:
    """Tests for the viewport."""

    def test_scroll_event(self, session: EditSession) -> None:
        assert session.handle(Scroll(rows=2, cols=-1)) is True
        assert session.viewport_origin == (2, -1)

    def test_styles(self, session: EditSession) -> None:
        session.execute(DrawLine((0, 0), (0, 2)))
        session.paste(at=(1, 0), text="x")
        cells = {c.pos: c for c in session.query_viewport((0, 0), (5, 5))}
        assert cells[(0, 1)].style == "edge"
        assert cells[(1, 0)].style == "text"
        assert len(cells) == 4

    def test_window_clips(self, session: EditSession) -> None:
        session.execute(DrawLine((0, 0), (0, 9)))
        cells = session.query_viewport((0, 5), (1, 3))
        assert [c.pos for c in cells] == [(0, 5), (0, 6), (0, 7)]

    def test_preview_during_drag(self, session: EditSession) -> None:
        session.handle(PointerDown((0, 0)))
        session.handle(PointerMove((2, 4)))
        cells = {c.pos: c for c in session.query_viewport((0, 0), (5, 10))}
        assert cells[(0, 0)].glyph == "┌"
        assert cells[(0, 0)].style == "preview"
        assert session.document.is_empty

    def test_text_cursor(self, session: EditSession) -> None:
        session.set_tool(Tool.TEXT)
        session.handle(PointerDown((1, 1)))
        session.handle(KeyEvent(char="a", raw="a"))
        cells = {c.pos: c for c in session.query_viewport((0, 0), (5, 5))}
        assert cells[(1, 1)].style == "preview"
        assert cells[(1, 2)].style == "cursor"

    def test_selection_overlay(self, session: EditSession) -> None:
        session.execute(DrawBox((0, 0), (2, 4)))
        drag(session, (1, 2))
        cells = session.query_viewport((0, 0), (5, 10))
        assert {c.style for c in cells} == {"selection"}


class TestStatus:
    """Tests for the status line."""

    def test_status_line(self, session: EditSession) -> None:
        assert session.status_line() == "*scratch* | BOX"
        session.execute(DrawLine((0, 0), (0, 3)))
        session.set_tool(Tool.LINE)
        assert session.status_line() == "*scratch* [+] | LINE"

    def test_notice_shown(self, session: EditSession) -> None:
        drag(session, (0, 0), (0, 5))
        assert session.status_line().startswith("*scratch* | BOX | ")

"""Tests for edit commands and the diffs they compute."""

import pytest

from cellsketch.core.cell import BLANK, Edge, Text
from cellsketch.core.direction import Direction
from cellsketch.core.document import Document
from cellsketch.core.shape import Shape
from cellsketch.edit.commands import (
    DeleteShape,
    DrawBox,
    DrawLine,
    EraseLine,
    EraseRegion,
    InsertText,
    Move,
    Resize,
)
from cellsketch.edit.history import CommandHistory
from cellsketch.errors import InvalidGeometry

E, W = Direction.EAST, Direction.WEST


class TestDrawLine:
    """Tests for DrawLine."""

    def test_horizontal_line_glyphs(self, document: Document, history: CommandHistory) -> None:
        history.execute(DrawLine((5, 2), (5, 8)))
        assert document.glyph_at((5, 2)) == "╶"
        assert document.glyph_at((5, 5)) == "─"
        assert document.glyph_at((5, 8)) == "╴"
        assert len(document.grid) == 7

    def test_crossing_lines_make_cross(self, document: Document, history: CommandHistory) -> None:
        history.execute(DrawLine((5, 2), (5, 8)))
        history.execute(DrawLine((2, 5), (8, 5)))
        assert document.glyph_at((5, 5)) == "┼"

    def test_erasing_vertical_leaves_horizontal(
        self, document: Document, history: CommandHistory
    ) -> None:
        history.execute(DrawLine((5, 2), (5, 8)))
        history.execute(DrawLine((2, 5), (8, 5)))
        history.execute(EraseLine((2, 5), (8, 5)))
        assert document.glyph_at((5, 5)) == "─"
        assert document.get((3, 5)) is BLANK

    def test_overlapping_lines_erase_independently(
        self, document: Document, history: CommandHistory
    ) -> None:
        history.execute(DrawLine((0, 0), (0, 6)))
        history.execute(DrawLine((0, 3), (0, 9)))
        history.execute(EraseLine((0, 0), (0, 6)))
        assert document.glyph_at((0, 3)) == "╶"
        assert document.glyph_at((0, 5)) == "─"
        assert document.get((0, 1)) is BLANK

    def test_arrow_head(self, document: Document, history: CommandHistory) -> None:
        history.execute(DrawLine((0, 0), (0, 4), arrow=True))
        assert document.get((0, 4)) == Text("▶")
        assert document.glyph_at((0, 3)) == "─"

    def test_diagonal_rejected(self, document: Document) -> None:
        with pytest.raises(InvalidGeometry):
            DrawLine((0, 0), (3, 3)).compute(document)

    def test_zero_length_rejected(self, document: Document) -> None:
        with pytest.raises(InvalidGeometry):
            DrawLine((1, 1), (1, 1)).compute(document)

    def test_line_joins_box_border(self, document: Document, history: CommandHistory) -> None:
        history.execute(DrawBox((0, 0), (2, 4)))
        history.execute(DrawLine((1, 4), (1, 8)))
        assert document.glyph_at((1, 4)) == "├"

    def test_drawing_over_text_replaces_it(
        self, document: Document, history: CommandHistory
    ) -> None:
        history.execute(InsertText((0, 2), "x"))
        history.execute(DrawLine((0, 0), (0, 4)))
        assert document.get((0, 2)) == Edge.from_mask(E | W)


class TestDrawBox:
    """Tests for DrawBox."""

    def test_box_border(self, document: Document, history: CommandHistory, picture) -> None:
        history.execute(DrawBox((1, 2), (4, 6)))
        assert picture(document) == (
            "       \n"
            "  ┌───┐\n"
            "  │   │\n"
            "  │   │\n"
            "  └───┘\n"
        )
        assert document.shapes == (Shape("box-1", 1, 2, 4, 3),)

    def test_corners_in_any_order(self, document: Document, history: CommandHistory) -> None:
        history.execute(DrawBox((4, 6), (1, 2)))
        assert document.glyph_at((1, 2)) == "┌"
        assert document.glyph_at((4, 6)) == "┘"

    def test_ids_increase(self, document: Document, history: CommandHistory) -> None:
        history.execute(DrawBox((0, 0), (2, 2)))
        history.execute(DrawBox((0, 5), (2, 7)))
        assert [s.shape_id for s in document.shapes] == ["box-1", "box-2"]

    def test_flat_box_rejected(self, document: Document, history: CommandHistory) -> None:
        with pytest.raises(InvalidGeometry):
            history.execute(DrawBox((1, 1), (1, 5)))
        assert document.is_empty
        assert not history.can_undo

    def test_shared_side(self, document: Document, history: CommandHistory, picture) -> None:
        history.execute(DrawBox((0, 0), (2, 4)))
        history.execute(DrawBox((0, 4), (2, 8)))
        assert picture(document) == (
            "┌───┬───┐\n"
            "│   │   │\n"
            "└───┴───┘\n"
        )


class TestMove:
    """Tests for moving boxes."""

    def test_move_redraws_border(self, document: Document, history: CommandHistory) -> None:
        history.execute(DrawBox((0, 0), (2, 4)))
        history.execute(Move("box-1", 5, 10))
        assert document.get((0, 0)) is BLANK
        assert document.glyph_at((5, 10)) == "┌"
        assert document.glyph_at((7, 14)) == "┘"
        assert document.shape("box-1") == Shape("box-1", 5, 10, 4, 2)

    def test_move_keeps_shared_side(
        self, document: Document, history: CommandHistory, picture
    ) -> None:
        history.execute(DrawBox((0, 0), (2, 4)))
        history.execute(DrawBox((0, 4), (2, 8)))
        history.execute(Move("box-2", 0, 10))
        assert picture(document) == (
            "┌───┐     ┌───┐\n"
            "│   │     │   │\n"
            "└───┘     └───┘\n"
        )

    def test_move_keeps_attached_line(self, document: Document, history: CommandHistory) -> None:
        history.execute(DrawBox((0, 0), (2, 4)))
        history.execute(DrawLine((1, 4), (1, 8)))
        history.execute(Move("box-1", 5, 0))
        assert document.glyph_at((1, 4)) == "╶"
        assert document.glyph_at((1, 6)) == "─"

    def test_move_onto_interior_rejected(
        self, document: Document, history: CommandHistory, snapshot
    ) -> None:
        history.execute(DrawBox((0, 0), (4, 6)))
        history.execute(DrawBox((10, 0), (12, 4)))
        before = snapshot(document)

        with pytest.raises(InvalidGeometry):
            history.execute(Move("box-2", 1, 1))

        assert snapshot(document) == before
        assert history.undo_depth == 2

    def test_move_onto_border_merges(self, document: Document, history: CommandHistory) -> None:
        history.execute(DrawBox((0, 0), (4, 6)))
        history.execute(DrawBox((10, 0), (12, 4)))
        history.execute(Move("box-2", 4, 0))
        assert document.glyph_at((4, 0)) == "├"
        assert document.glyph_at((4, 2)) == "─"
        assert document.glyph_at((4, 4)) == "┬"
        assert document.glyph_at((6, 4)) == "┘"

    def test_unknown_shape(self, document: Document) -> None:
        with pytest.raises(InvalidGeometry):
            Move("box-9", 0, 0).compute(document)


class TestResize:
    """Tests for resizing boxes."""

    def test_resize_wider(self, document: Document, history: CommandHistory) -> None:
        history.execute(DrawBox((0, 0), (2, 4)))
        history.execute(Resize("box-1", 0, 0, 6, 2))
        assert document.glyph_at((0, 6)) == "┐"
        assert document.glyph_at((0, 4)) == "─"
        assert document.get((1, 4)) is BLANK
        assert document.shape("box-1").width == 6

    @pytest.mark.parametrize("width,height", [(0, 2), (4, 0), (-1, 2)])
    def test_resize_to_nothing_rejected(
        self, document: Document, history: CommandHistory, snapshot, width: int, height: int
    ) -> None:
        history.execute(DrawBox((0, 0), (2, 4)))
        before = snapshot(document)
        with pytest.raises(InvalidGeometry):
            history.execute(Resize("box-1", 0, 0, width, height))
        assert snapshot(document) == before


class TestInsertText:
    """Tests for InsertText."""

    def test_characters_in_a_row(self, document: Document, history: CommandHistory) -> None:
        history.execute(InsertText((0, 0), "hi"))
        assert document.get((0, 0)) == Text("h")
        assert document.get((0, 1)) == Text("i")

    def test_newline_returns_to_start_column(
        self, document: Document, history: CommandHistory
    ) -> None:
        history.execute(InsertText((2, 3), "ab\ncd"))
        assert document.get((3, 3)) == Text("c")
        assert document.get((3, 4)) == Text("d")

    def test_text_replaces_edge_and_undo_restores_it(
        self, document: Document, history: CommandHistory
    ) -> None:
        history.execute(DrawLine((0, 0), (0, 4)))
        history.execute(InsertText((0, 2), "x"))
        assert document.get((0, 2)) == Text("x")
        history.undo()
        assert document.glyph_at((0, 2)) == "─"

    def test_space_writes_blank(self, document: Document, history: CommandHistory) -> None:
        history.execute(DrawLine((0, 0), (0, 4)))
        history.execute(InsertText((0, 0), "a b"))
        assert document.get((0, 1)) is BLANK

    def test_deleting_text_restores_blank_not_edge(
        self, document: Document, history: CommandHistory
    ) -> None:
        history.execute(DrawLine((0, 0), (0, 4)))
        history.execute(InsertText((0, 2), "x"))
        history.execute(InsertText((0, 2), " "))
        assert document.get((0, 2)) is BLANK

    def test_transparent_skips_spaces(self, document: Document, history: CommandHistory) -> None:
        history.execute(DrawLine((0, 0), (0, 4)))
        history.execute(InsertText((0, 0), "a b", transparent=True))
        assert document.glyph_at((0, 1)) == "─"
        assert document.get((0, 2)) == Text("b")

    def test_line_glyphs_stay_text(self, document: Document, history: CommandHistory) -> None:
        history.execute(InsertText((0, 0), "┌┐", transparent=True))
        assert document.get((0, 0)) == Text("┌")


class TestDelete:
    """Tests for shape deletion and erasing."""

    def test_delete_shape(self, document: Document, history: CommandHistory) -> None:
        history.execute(DrawBox((0, 0), (2, 4)))
        history.execute(DeleteShape("box-1"))
        assert document.is_empty

        history.undo()
        assert document.shape("box-1") is not None
        assert document.glyph_at((0, 0)) == "┌"

    def test_delete_shape_keeps_crossing_line(
        self, document: Document, history: CommandHistory
    ) -> None:
        history.execute(DrawBox((0, 0), (2, 4)))
        history.execute(DrawLine((1, 2), (1, 8)))
        history.execute(DeleteShape("box-1"))
        assert document.glyph_at((1, 4)) == "─"

    def test_erase_region(self, document: Document, history: CommandHistory) -> None:
        history.execute(DrawBox((0, 0), (2, 4)))
        history.execute(DrawBox((0, 10), (2, 14)))
        history.execute(InsertText((5, 5), "hello"))
        history.execute(EraseRegion((0, 0), (5, 6)))

        assert document.shape("box-1") is None
        assert document.shape("box-2") is not None
        assert document.get((5, 5)) is BLANK
        assert document.get((5, 7)) == Text("l")

    def test_erase_nothing_is_empty_change(self, document: Document) -> None:
        assert EraseLine((0, 0), (0, 5)).compute(document).is_empty


class TestChange:
    """Tests for Change diffs."""

    def test_compute_does_not_mutate(self, document: Document, history: CommandHistory, snapshot) -> None:
        history.execute(DrawBox((0, 0), (2, 4)))
        before = snapshot(document)
        Move("box-1", 3, 3).compute(document)
        assert snapshot(document) == before

    def test_inverted_twice_is_identity(self, document: Document) -> None:
        change = DrawBox((0, 0), (2, 4)).compute(document)
        assert change.inverted().inverted() == change

    def test_change_records_before_and_after(self, document: Document) -> None:
        change = DrawLine((0, 0), (0, 1)).compute(document)
        by_pos = {c.pos: c for c in change.cells}
        assert by_pos[(0, 0)].before is BLANK
        assert by_pos[(0, 0)].after == Edge.from_mask(E)
        assert by_pos[(0, 1)].after == Edge.from_mask(W)

    def test_region(self, document: Document) -> None:
        change = DrawBox((1, 2), (4, 6)).compute(document)
        region = change.region
        assert (region.top, region.left, region.bottom, region.right) == (1, 2, 4, 6)

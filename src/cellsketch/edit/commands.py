"""Commands - immutable records of completed edits.

A Command describes what the user did. ``compute()`` turns it into a Change:
the exact before/after value of every cell and shape it touches, measured
against the document it is about to be applied to. A Change can be applied
forward or inverted, which is all undo and redo need.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar

from cellsketch.core.cell import BLANK, Cell, Edge, Text, normalize
from cellsketch.core.direction import Direction, Pos
from cellsketch.core.document import Document
from cellsketch.core.geometry import Region, is_straight, strokes, travel_direction
from cellsketch.core.shape import Shape
from cellsketch.errors import InvalidGeometry


# -----------------------------------------------------------------------------
# Diffs
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class CellChange:
    """One cell's value before and after an edit."""
    pos: Pos
    before: Cell
    after: Cell

    def inverted(self) -> CellChange:
        return CellChange(self.pos, self.after, self.before)


@dataclass(frozen=True)
class ShapeChange:
    """One registry entry before and after an edit (None = absent)."""
    shape_id: str
    before: Shape | None
    after: Shape | None

    def inverted(self) -> ShapeChange:
        return ShapeChange(self.shape_id, self.after, self.before)


@dataclass(frozen=True)
class Change:
    """The full forward diff of one command."""
    cells: tuple[CellChange, ...] = ()
    shapes: tuple[ShapeChange, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.cells and not self.shapes

    def inverted(self) -> Change:
        return Change(
            cells=tuple(c.inverted() for c in self.cells),
            shapes=tuple(s.inverted() for s in self.shapes),
        )

    @property
    def region(self) -> Region | None:
        """Smallest region covering every changed cell."""
        result: Region | None = None
        for c in self.cells:
            here = Region(c.pos[0], c.pos[1], c.pos[0], c.pos[1])
            result = here if result is None else result.union(here)
        return result


class ChangeBuilder:
    """Stages cell and shape edits against a document without touching it."""

    def __init__(self, document: Document) -> None:
        self._document = document
        self._cells: dict[Pos, Cell] = {}
        self._shapes: dict[str, Shape | None] = {}

    def cell(self, pos: Pos) -> Cell:
        """Current value at `pos`, including staged edits."""
        if pos in self._cells:
            return self._cells[pos]
        return self._document.get(pos)

    def write(self, pos: Pos, cell: Cell) -> None:
        self._cells[pos] = normalize(cell)

    def add_strokes(self, pos: Pos, directions: Direction) -> None:
        """Draw through `pos`. Text there is replaced by the new edge."""
        current = self.cell(pos)
        base = current if isinstance(current, Edge) else Edge()
        self.write(pos, base.add(directions))

    def remove_strokes(self, pos: Pos, directions: Direction) -> None:
        """Erase one stroke per direction at `pos`; Text and Blank are left alone."""
        current = self.cell(pos)
        if isinstance(current, Edge):
            self.write(pos, current.remove(directions))

    def put_shape(self, shape: Shape) -> None:
        self._shapes[shape.shape_id] = shape

    def drop_shape(self, shape_id: str) -> None:
        self._shapes[shape_id] = None

    def build(self) -> Change:
        cells = []
        for pos, after in self._cells.items():
            before = self._document.get(pos)
            if before != after:
                cells.append(CellChange(pos, before, after))
        shapes = []
        for shape_id, after in self._shapes.items():
            before = self._document.shape(shape_id)
            if before != after:
                shapes.append(ShapeChange(shape_id, before, after))
        return Change(cells=tuple(cells), shapes=tuple(shapes))


# -----------------------------------------------------------------------------
# Commands
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class Command:
    """Base class for committed edits."""
    label: ClassVar[str] = "Edit"

    def validate(self, document: Document) -> None:
        """Raise InvalidGeometry if this command cannot apply to `document`."""

    def compute(self, document: Document) -> Change:
        """Validate, then compute the forward diff against `document`."""
        self.validate(document)
        builder = ChangeBuilder(document)
        self._build(builder, document)
        return builder.build()

    def _build(self, builder: ChangeBuilder, document: Document) -> None:
        raise NotImplementedError


def _require_straight(start: Pos, end: Pos) -> None:
    if not is_straight(start, end):
        raise InvalidGeometry(f"Line {start} -> {end} must be horizontal or vertical")
    if start == end:
        raise InvalidGeometry("Line has no length")


def _require_shape(document: Document, shape_id: str) -> Shape:
    shape = document.shape(shape_id)
    if shape is None:
        raise InvalidGeometry(f"No shape named {shape_id!r}")
    return shape


def _require_clear_of_others(document: Document, shape: Shape) -> None:
    """Reject geometry that would cover another shape's interior."""
    if not shape.is_valid:
        raise InvalidGeometry(
            f"Box must have positive width and height, got {shape.width}x{shape.height}"
        )
    blocked = document.interiors_overlapping(shape.footprint, ignore=shape.shape_id)
    if blocked:
        names = ", ".join(s.shape_id for s in blocked)
        raise InvalidGeometry(f"{shape.shape_id} would overlap the inside of {names}")


@dataclass(frozen=True)
class DrawLine(Command):
    """A straight line, optionally ending in an arrow head."""
    start: Pos
    end: Pos
    arrow: bool = False
    label: ClassVar[str] = "Draw line"

    def validate(self, document: Document) -> None:
        _require_straight(self.start, self.end)

    def _build(self, builder: ChangeBuilder, document: Document) -> None:
        for pos, directions in strokes(self.start, self.end).items():
            builder.add_strokes(pos, directions)
        if self.arrow:
            head = document.synthesizer.arrow(travel_direction(self.start, self.end))
            builder.write(self.end, Text(head))


@dataclass(frozen=True)
class DrawBox(Command):
    """A new box spanning two opposite corners."""
    top_left: Pos
    bottom_right: Pos
    label: ClassVar[str] = "Draw box"

    def shape_for(self, document: Document) -> Shape:
        return Shape.from_corners(document.next_shape_id(), self.top_left, self.bottom_right)

    def validate(self, document: Document) -> None:
        shape = self.shape_for(document)
        if not shape.is_valid:
            raise InvalidGeometry(
                f"Box must have positive width and height, got {shape.width}x{shape.height}"
            )

    def _build(self, builder: ChangeBuilder, document: Document) -> None:
        shape = self.shape_for(document)
        for pos, directions in shape.border().items():
            builder.add_strokes(pos, directions)
        builder.put_shape(shape)


def _redraw_shape(builder: ChangeBuilder, old: Shape, new: Shape) -> None:
    for pos, directions in old.border().items():
        builder.remove_strokes(pos, directions)
    for pos, directions in new.border().items():
        builder.add_strokes(pos, directions)
    builder.put_shape(new)


@dataclass(frozen=True)
class Move(Command):
    """Move a box so its top-left corner lands at (top, left)."""
    shape_id: str
    top: int
    left: int
    label: ClassVar[str] = "Move"

    def validate(self, document: Document) -> None:
        shape = _require_shape(document, self.shape_id)
        _require_clear_of_others(document, shape.moved_to(self.top, self.left))

    def _build(self, builder: ChangeBuilder, document: Document) -> None:
        old = _require_shape(document, self.shape_id)
        _redraw_shape(builder, old, old.moved_to(self.top, self.left))


@dataclass(frozen=True)
class Resize(Command):
    """Give a box new geometry."""
    shape_id: str
    top: int
    left: int
    width: int
    height: int
    label: ClassVar[str] = "Resize"

    def validate(self, document: Document) -> None:
        shape = _require_shape(document, self.shape_id)
        _require_clear_of_others(
            document, shape.resized(self.top, self.left, self.width, self.height)
        )

    def _build(self, builder: ChangeBuilder, document: Document) -> None:
        old = _require_shape(document, self.shape_id)
        _redraw_shape(builder, old, old.resized(self.top, self.left, self.width, self.height))


@dataclass(frozen=True)
class InsertText(Command):
    """Type or paste characters starting at `at`.

    A newline continues on the next row at the starting column. Spaces
    write Blank, except in transparent mode (used for pastes) where they
    leave the cell underneath untouched.
    """
    at: Pos
    text: str
    transparent: bool = False
    label: ClassVar[str] = "Insert text"

    def placements(self) -> list[tuple[Pos, str]]:
        """Position of every character, after newline handling."""
        row, col = self.at
        result: list[tuple[Pos, str]] = []
        for ch in self.text.replace('\r\n', '\n').replace('\r', '\n'):
            if ch == '\n':
                row += 1
                col = self.at[1]
                continue
            if ch == '\t':
                ch = ' '
            result.append(((row, col), ch))
            col += 1
        return result

    def _build(self, builder: ChangeBuilder, document: Document) -> None:
        for pos, ch in self.placements():
            if ch == ' ':
                if not self.transparent:
                    builder.write(pos, BLANK)
            elif ch.isprintable():
                builder.write(pos, Text(ch))


@dataclass(frozen=True)
class Delete(Command):
    """Base for commands that remove content."""
    label: ClassVar[str] = "Delete"


@dataclass(frozen=True)
class DeleteShape(Delete):
    """Erase a box's border strokes and forget the box."""
    shape_id: str
    label: ClassVar[str] = "Delete box"

    def validate(self, document: Document) -> None:
        _require_shape(document, self.shape_id)

    def _build(self, builder: ChangeBuilder, document: Document) -> None:
        shape = _require_shape(document, self.shape_id)
        for pos, directions in shape.border().items():
            builder.remove_strokes(pos, directions)
        builder.drop_shape(shape.shape_id)


@dataclass(frozen=True)
class EraseLine(Delete):
    """Remove one stroke along a straight segment."""
    start: Pos
    end: Pos
    label: ClassVar[str] = "Erase line"

    def validate(self, document: Document) -> None:
        _require_straight(self.start, self.end)

    def _build(self, builder: ChangeBuilder, document: Document) -> None:
        for pos, directions in strokes(self.start, self.end).items():
            builder.remove_strokes(pos, directions)


@dataclass(frozen=True)
class EraseRegion(Delete):
    """Blank every cell in a rectangle; boxes wholly inside it are forgotten."""
    top_left: Pos
    bottom_right: Pos
    label: ClassVar[str] = "Erase region"

    @property
    def region(self) -> Region:
        return Region.from_corners(self.top_left, self.bottom_right)

    def _build(self, builder: ChangeBuilder, document: Document) -> None:
        region = self.region
        for pos, _ in document.grid.cells_in(region):
            builder.write(pos, BLANK)
        for shape in document.shapes:
            if region.contains_region(shape.footprint):
                builder.drop_shape(shape.shape_id)

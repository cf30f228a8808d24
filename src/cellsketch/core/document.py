"""Document - grid plus the registry of shapes drawn on it.

A Document is the unit of persistence and undo. Its state only changes
through ``apply()``, which CommandHistory calls with a precomputed Change.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable, Iterator

from cellsketch.core.cell import Cell, Edge, Text
from cellsketch.core.direction import Direction, Pos
from cellsketch.core.geometry import Region
from cellsketch.core.grid import CellGrid
from cellsketch.core.shape import Shape
from cellsketch.core.synth import GlyphSet, ShapeSynthesizer

if TYPE_CHECKING:
    from cellsketch.edit.commands import Change

_SHAPE_ID = re.compile(r"^box-(\d+)$")


def _creation_order(shape: Shape) -> tuple[int, str]:
    match = _SHAPE_ID.match(shape.shape_id)
    return (int(match.group(1)) if match else 0, shape.shape_id)


@dataclass(frozen=True)
class ViewportCell:
    """One visible cell handed to a renderer."""
    pos: Pos
    glyph: str
    style: str  # "edge", "text", "preview" or "cursor"


@dataclass(frozen=True)
class HitResult:
    """A shape under the pointer and which border sides were hit."""
    shape: Shape
    edges: Direction

    @property
    def on_border(self) -> bool:
        return self.edges != Direction.NONE


class Document:
    """A diagram: one CellGrid and the shapes layered on it.

    Attributes:
        synthesizer: Glyph synthesizer for the document's glyph set
    """

    def __init__(self, glyph_set: GlyphSet = GlyphSet.UNICODE) -> None:
        self._grid = CellGrid()
        self._shapes: dict[str, Shape] = {}
        self.synthesizer = ShapeSynthesizer(glyph_set)

    @classmethod
    def from_cells(
        cls,
        cells: Iterable[tuple[Pos, Cell]],
        shapes: Iterable[Shape] = (),
        glyph_set: GlyphSet = GlyphSet.UNICODE,
    ) -> Document:
        """Build a document directly from cell content (used by loading)."""
        document = cls(glyph_set)
        for pos, cell in cells:
            document._grid[pos] = cell
        for shape in shapes:
            document._shapes[shape.shape_id] = shape
        return document

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def glyph_set(self) -> GlyphSet:
        return self.synthesizer.glyph_set

    @property
    def grid(self) -> CellGrid:
        """The underlying grid. Treat as read-only outside ``apply()``."""
        return self._grid

    @property
    def shapes(self) -> tuple[Shape, ...]:
        """Registered shapes, oldest first."""
        return tuple(sorted(self._shapes.values(), key=_creation_order))

    @property
    def bounds(self) -> Region | None:
        return self._grid.bounds

    @property
    def is_empty(self) -> bool:
        return len(self._grid) == 0 and not self._shapes

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def get(self, pos: Pos) -> Cell:
        return self._grid[pos]

    def glyph_at(self, pos: Pos) -> str:
        return self.synthesizer.cell_glyph(self._grid[pos])

    def shape(self, shape_id: str) -> Shape | None:
        return self._shapes.get(shape_id)

    def next_shape_id(self) -> str:
        """Smallest unused ``box-N`` identifier above every existing one."""
        highest = 0
        for shape_id in self._shapes:
            match = _SHAPE_ID.match(shape_id)
            if match:
                highest = max(highest, int(match.group(1)))
        return f"box-{highest + 1}"

    def hit_test(self, pos: Pos) -> HitResult | None:
        """Find the shape under `pos`.

        A border hit on the most recently drawn shape wins; otherwise the
        smallest shape whose interior contains `pos`.
        """
        for shape in reversed(self.shapes):
            edges = shape.edges_at(pos)
            if edges:
                return HitResult(shape, edges)

        inside = [s for s in self.shapes if s.interior_contains(pos)]
        if not inside:
            return None
        smallest = min(inside, key=lambda s: s.width * s.height)
        return HitResult(smallest, Direction.NONE)

    def interiors_overlapping(self, footprint: Region, ignore: str | None = None) -> list[Shape]:
        """Shapes (other than `ignore`) whose interior intersects `footprint`."""
        return [
            shape
            for shape in self.shapes
            if shape.shape_id != ignore and shape.interior.intersects(footprint)
        ]

    def query_viewport(self, top_left: Pos, size: tuple[int, int]) -> list[ViewportCell]:
        """Visible non-blank cells in the (rows, cols) window at `top_left`."""
        region = Region.from_size(top_left, size)
        result: list[ViewportCell] = []
        for pos, cell in self._grid.cells_in(region):
            style = "text" if isinstance(cell, Text) else "edge"
            result.append(ViewportCell(pos, self.synthesizer.cell_glyph(cell), style))
        return result

    def glyphs(self) -> dict[Pos, str]:
        """Glyph of every non-blank cell."""
        return {pos: self.synthesizer.cell_glyph(cell) for pos, cell in self._grid.cells()}

    def edges(self) -> Iterator[tuple[Pos, Edge]]:
        for pos, cell in self._grid.cells():
            if isinstance(cell, Edge):
                yield pos, cell

    # -------------------------------------------------------------------------
    # Mutation
    # -------------------------------------------------------------------------

    def apply(self, change: Change) -> None:
        """Write the `after` side of every entry in a change."""
        for cell_change in change.cells:
            self._grid[cell_change.pos] = cell_change.after
        for shape_change in change.shapes:
            if shape_change.after is None:
                self._shapes.pop(shape_change.shape_id, None)
            else:
                self._shapes[shape_change.shape_id] = shape_change.after

    def __repr__(self) -> str:
        return (
            f"Document(cells={len(self._grid)}, shapes={len(self._shapes)}, "
            f"glyph_set={self.glyph_set.value})"
        )

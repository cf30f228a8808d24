"""CellGrid - sparse, unbounded 2D mapping of positions to cells."""

from __future__ import annotations

from typing import Iterator

from cellsketch.core.cell import BLANK, Cell
from cellsketch.core.direction import Pos
from cellsketch.core.geometry import Region


class CellGrid:
    """Sparse storage for diagram cells.

    Only non-blank cells are stored. Reads of unwritten coordinates return
    BLANK; no coordinate is ever out of range, negative ones included.
    Bounds are tracked lazily and recomputed on demand after a clear.
    """

    def __init__(self) -> None:
        self._cells: dict[Pos, Cell] = {}
        self._bounds: Region | None = None
        self._bounds_stale = False

    def get(self, row: int, col: int) -> Cell:
        """Get the cell at (row, col); BLANK if nothing was written there."""
        return self._cells.get((row, col), BLANK)

    def set(self, row: int, col: int, cell: Cell) -> None:
        """Set the cell at (row, col), overwriting any previous value."""
        if cell.is_blank:
            self.clear(row, col)
            return
        self._cells[(row, col)] = cell
        if not self._bounds_stale:
            here = Region(row, col, row, col)
            self._bounds = here if self._bounds is None else self._bounds.union(here)

    def clear(self, row: int, col: int) -> None:
        """Reset (row, col) to BLANK."""
        if self._cells.pop((row, col), None) is not None:
            self._bounds_stale = True

    def __getitem__(self, pos: Pos) -> Cell:
        """Get cell using indexing: grid[row, col]."""
        row, col = pos
        return self.get(row, col)

    def __setitem__(self, pos: Pos, cell: Cell) -> None:
        """Set cell using indexing: grid[row, col] = cell."""
        row, col = pos
        self.set(row, col, cell)

    def __contains__(self, pos: object) -> bool:
        return pos in self._cells

    def __len__(self) -> int:
        """Number of non-blank cells."""
        return len(self._cells)

    @property
    def bounds(self) -> Region | None:
        """Smallest region covering every non-blank cell, or None if empty."""
        if self._bounds_stale:
            self._bounds = None
            for row, col in self._cells:
                here = Region(row, col, row, col)
                self._bounds = here if self._bounds is None else self._bounds.union(here)
            self._bounds_stale = False
        return self._bounds

    def cells(self) -> Iterator[tuple[Pos, Cell]]:
        """Iterate non-blank cells in row-major order."""
        for pos in sorted(self._cells):
            yield pos, self._cells[pos]

    def cells_in(self, region: Region) -> Iterator[tuple[Pos, Cell]]:
        """Iterate non-blank cells inside `region` in row-major order."""
        if region.rows * region.cols < len(self._cells):
            for pos in region.positions():
                cell = self._cells.get(pos)
                if cell is not None:
                    yield pos, cell
        else:
            for pos, cell in self.cells():
                if region.contains(pos):
                    yield pos, cell

    def snapshot(self) -> dict[Pos, Cell]:
        """Copy of all non-blank cells (cells are immutable, so this is cheap)."""
        return dict(self._cells)

    def copy(self) -> CellGrid:
        grid = CellGrid()
        for pos, cell in self._cells.items():
            grid[pos] = cell
        return grid

    def __repr__(self) -> str:
        return f"CellGrid(cells={len(self._cells)}, bounds={self.bounds})"

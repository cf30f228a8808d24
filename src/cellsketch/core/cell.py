"""Cell - atomic unit of the diagram grid.

A cell holds exactly one of three variants:

- ``Blank``: nothing drawn.
- ``Edge``: line or box-border ink. Each direction keeps a stroke count so
  that overlapping strokes (a box border shared with a line, two crossing
  lines) can be removed independently; a direction is part of the edge mask
  while at least one stroke still uses it.
- ``Text``: one literal character.

Edge and Text never layer: writing one over the other replaces it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from cellsketch.core.direction import Direction


@dataclass(frozen=True, slots=True)
class Blank:
    """An empty cell."""

    @property
    def is_blank(self) -> bool:
        return True


@dataclass(frozen=True, slots=True)
class Edge:
    """Line-drawing ink passing through a cell."""
    north: int = 0
    south: int = 0
    east: int = 0
    west: int = 0

    @classmethod
    def from_mask(cls, mask: Direction) -> Edge:
        """Create an edge with a single stroke in each direction of `mask`."""
        return cls(
            north=1 if mask & Direction.NORTH else 0,
            south=1 if mask & Direction.SOUTH else 0,
            east=1 if mask & Direction.EAST else 0,
            west=1 if mask & Direction.WEST else 0,
        )

    @property
    def mask(self) -> Direction:
        """Directions with at least one stroke."""
        mask = Direction.NONE
        if self.north > 0:
            mask |= Direction.NORTH
        if self.south > 0:
            mask |= Direction.SOUTH
        if self.east > 0:
            mask |= Direction.EAST
        if self.west > 0:
            mask |= Direction.WEST
        return mask

    @property
    def is_blank(self) -> bool:
        return self.mask == Direction.NONE

    def add(self, directions: Direction) -> Edge:
        """Return a copy with one more stroke in each of `directions`."""
        return self._shift(directions, 1)

    def remove(self, directions: Direction) -> Edge:
        """Return a copy with one stroke fewer in each of `directions`.

        Counts never go below zero.
        """
        return self._shift(directions, -1)

    def _shift(self, directions: Direction, amount: int) -> Edge:
        def bump(count: int, direction: Direction) -> int:
            if directions & direction:
                return max(0, count + amount)
            return count

        return Edge(
            north=bump(self.north, Direction.NORTH),
            south=bump(self.south, Direction.SOUTH),
            east=bump(self.east, Direction.EAST),
            west=bump(self.west, Direction.WEST),
        )


@dataclass(frozen=True, slots=True)
class Text:
    """A literal character placed on the grid."""
    char: str

    def __post_init__(self) -> None:
        if len(self.char) != 1:
            raise ValueError(f"Text cells hold exactly one character, got {self.char!r}")

    @property
    def is_blank(self) -> bool:
        return False


Cell = Union[Blank, Edge, Text]

BLANK = Blank()


def normalize(cell: Cell) -> Cell:
    """Collapse an Edge with no remaining strokes to BLANK."""
    if isinstance(cell, Edge) and cell.is_blank:
        return BLANK
    return cell

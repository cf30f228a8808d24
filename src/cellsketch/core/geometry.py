"""Grid geometry: rectangular regions and straight-line rasterization."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

from cellsketch.core.direction import OPPOSITE, Axis, Direction, Pos


@dataclass(frozen=True)
class Region:
    """An inclusive rectangle of grid cells."""
    top: int
    left: int
    bottom: int
    right: int

    @classmethod
    def from_corners(cls, a: Pos, b: Pos) -> Region:
        """Build the region spanned by two opposite corners, in any order."""
        return cls(
            top=min(a[0], b[0]),
            left=min(a[1], b[1]),
            bottom=max(a[0], b[0]),
            right=max(a[1], b[1]),
        )

    @classmethod
    def from_size(cls, top_left: Pos, size: tuple[int, int]) -> Region:
        """Build a region from its top-left cell and (rows, columns) size."""
        rows, cols = size
        return cls(top_left[0], top_left[1], top_left[0] + rows - 1, top_left[1] + cols - 1)

    @property
    def rows(self) -> int:
        return self.bottom - self.top + 1

    @property
    def cols(self) -> int:
        return self.right - self.left + 1

    @property
    def is_empty(self) -> bool:
        return self.rows <= 0 or self.cols <= 0

    def contains(self, pos: Pos) -> bool:
        return self.top <= pos[0] <= self.bottom and self.left <= pos[1] <= self.right

    def contains_region(self, other: Region) -> bool:
        return (
            self.top <= other.top
            and self.left <= other.left
            and other.bottom <= self.bottom
            and other.right <= self.right
        )

    def intersects(self, other: Region) -> bool:
        if self.is_empty or other.is_empty:
            return False
        return not (
            other.left > self.right
            or other.right < self.left
            or other.top > self.bottom
            or other.bottom < self.top
        )

    def union(self, other: Region) -> Region:
        return Region(
            min(self.top, other.top),
            min(self.left, other.left),
            max(self.bottom, other.bottom),
            max(self.right, other.right),
        )

    def positions(self) -> Iterator[Pos]:
        """Iterate positions row by row."""
        for row in range(self.top, self.bottom + 1):
            for col in range(self.left, self.right + 1):
                yield row, col


def is_straight(start: Pos, end: Pos) -> bool:
    """True when both points share a row or a column."""
    return start[0] == end[0] or start[1] == end[1]


def travel_direction(start: Pos, end: Pos) -> Direction:
    """Direction of travel along a straight segment (NONE if zero-length)."""
    if end[1] > start[1]:
        return Direction.EAST
    if end[1] < start[1]:
        return Direction.WEST
    if end[0] > start[0]:
        return Direction.SOUTH
    if end[0] < start[0]:
        return Direction.NORTH
    return Direction.NONE


def steps(start: Pos, end: Pos) -> Iterator[tuple[Pos, Pos, Direction]]:
    """Rasterize a straight segment into unit steps.

    Yields ``(previous, next, direction)`` for each step from `start` to
    `end`. Raises ValueError for a segment that is not horizontal or vertical.
    """
    if not is_straight(start, end):
        raise ValueError(f"Segment {start} -> {end} is not horizontal or vertical")

    direction = travel_direction(start, end)
    if direction == Direction.NONE:
        return

    row, col = start
    dr = (end[0] > row) - (end[0] < row)
    dc = (end[1] > col) - (end[1] < col)
    while (row, col) != end:
        nxt = (row + dr, col + dc)
        yield (row, col), nxt, direction
        row, col = nxt


def strokes(start: Pos, end: Pos) -> dict[Pos, Direction]:
    """Edge directions contributed by a straight segment.

    Every step contributes the direction of travel at the cell it leaves
    and the opposite direction at the cell it enters.
    """
    result: dict[Pos, Direction] = {}
    for prev, nxt, direction in steps(start, end):
        result[prev] = result.get(prev, Direction.NONE) | direction
        result[nxt] = result.get(nxt, Direction.NONE) | OPPOSITE[direction]
    return result


def lock_axis(anchor: Pos, pos: Pos, threshold: int) -> Axis | None:
    """Pick the dominant axis of displacement once it reaches `threshold`.

    Returns None while the pointer is still within `threshold` cells of the
    anchor. Ties favour the horizontal axis.
    """
    dr = abs(pos[0] - anchor[0])
    dc = abs(pos[1] - anchor[1])
    if max(dr, dc) < threshold or (dr == 0 and dc == 0):
        return None
    return Axis.HORIZONTAL if dc >= dr else Axis.VERTICAL


def constrain(anchor: Pos, pos: Pos, axis: Axis) -> Pos:
    """Project `pos` onto the line through `anchor` along `axis`."""
    if axis == Axis.HORIZONTAL:
        return (anchor[0], pos[1])
    return (pos[0], anchor[1])

"""Direction - the four cardinal directions a stroke can leave a cell by."""

from __future__ import annotations

from enum import Enum, IntFlag, auto

# Grid positions are (row, column) pairs; rows grow downward.
Pos = tuple[int, int]


class Direction(IntFlag):
    """A set of cardinal directions, used as a 4-bit edge mask."""
    NONE = 0
    NORTH = 1
    SOUTH = 2
    EAST = 4
    WEST = 8


CARDINALS: tuple[Direction, ...] = (
    Direction.NORTH,
    Direction.SOUTH,
    Direction.EAST,
    Direction.WEST,
)

ALL_DIRECTIONS = Direction.NORTH | Direction.SOUTH | Direction.EAST | Direction.WEST

OPPOSITE: dict[Direction, Direction] = {
    Direction.NORTH: Direction.SOUTH,
    Direction.SOUTH: Direction.NORTH,
    Direction.EAST: Direction.WEST,
    Direction.WEST: Direction.EAST,
}

# (row, column) offset of one unit step in each direction
STEP: dict[Direction, Pos] = {
    Direction.NORTH: (-1, 0),
    Direction.SOUTH: (1, 0),
    Direction.EAST: (0, 1),
    Direction.WEST: (0, -1),
}


class Axis(Enum):
    """Axis a line gesture is locked to."""
    HORIZONTAL = auto()
    VERTICAL = auto()


def directions_in(mask: Direction) -> list[Direction]:
    """List the single directions present in a mask, in N, S, E, W order."""
    return [d for d in CARDINALS if d & mask]


def offset(pos: Pos, direction: Direction, distance: int = 1) -> Pos:
    """Return the position `distance` steps from `pos` in `direction`."""
    dr, dc = STEP[direction]
    return (pos[0] + dr * distance, pos[1] + dc * distance)

"""Interaction states.

Each state is an immutable record of the gesture in progress. The state
machine replaces the current state on every transition; nothing here is
mutated in place.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from cellsketch.core.direction import Axis, Direction, Pos
from cellsketch.core.geometry import Region


@dataclass(frozen=True)
class Idle:
    """No gesture in progress."""


@dataclass(frozen=True)
class DrawingLine:
    """Dragging out a line from `anchor`.

    `axis_lock` is None until the pointer has moved far enough; once set it
    holds for the rest of the gesture.
    """
    anchor: Pos
    current: Pos
    axis_lock: Optional[Axis] = None
    arrow: bool = False


@dataclass(frozen=True)
class DrawingBox:
    """Dragging out a box from corner `anchor`."""
    anchor: Pos
    current: Pos


@dataclass(frozen=True)
class MovingShape:
    """Dragging a box by its interior."""
    shape_id: str
    grab_offset: tuple[int, int]
    start: Pos
    current: Pos

    @property
    def top_left(self) -> Pos:
        return (self.current[0] - self.grab_offset[0], self.current[1] - self.grab_offset[1])


@dataclass(frozen=True)
class ResizingShape:
    """Dragging one side (or a corner, two sides) of a box."""
    shape_id: str
    active_edge: Direction
    start: Pos
    current: Pos


@dataclass(frozen=True)
class EditingText:
    """Typing at a text cursor; nothing is committed until confirmed."""
    origin: Pos
    buffer: str = ""

    @property
    def cursor_position(self) -> Pos:
        return (self.origin[0], self.origin[1] + len(self.buffer))


@dataclass(frozen=True)
class SelectingRegion:
    """Dragging a selection rectangle; `erase` blanks it on release."""
    anchor: Pos
    current: Pos
    erase: bool = False

    @property
    def region(self) -> Region:
        return Region.from_corners(self.anchor, self.current)


State = Union[Idle, DrawingLine, DrawingBox, MovingShape, ResizingShape, EditingText, SelectingRegion]

STATE_TYPES: tuple[type, ...] = (
    Idle,
    DrawingLine,
    DrawingBox,
    MovingShape,
    ResizingShape,
    EditingText,
    SelectingRegion,
)

"""Gesture handling: input events, interaction states and the state machine."""

from cellsketch.interact.events import (
    Cancel,
    InputEvent,
    Key,
    KeyEvent,
    PointerDown,
    PointerMove,
    PointerUp,
    Scroll,
)
from cellsketch.interact.machine import InteractionStateMachine
from cellsketch.interact.states import (
    DrawingBox,
    DrawingLine,
    EditingText,
    Idle,
    MovingShape,
    ResizingShape,
    SelectingRegion,
    State,
)

__all__ = [
    "Cancel",
    "DrawingBox",
    "DrawingLine",
    "EditingText",
    "Idle",
    "InputEvent",
    "InteractionStateMachine",
    "Key",
    "KeyEvent",
    "MovingShape",
    "PointerDown",
    "PointerMove",
    "PointerUp",
    "ResizingShape",
    "Scroll",
    "SelectingRegion",
    "State",
]

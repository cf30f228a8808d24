"""Input events consumed by the interaction state machine."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional, Union

from cellsketch.core.direction import Pos


class Key(Enum):
    """Named key constants."""
    UP = auto()
    DOWN = auto()
    LEFT = auto()
    RIGHT = auto()
    ENTER = auto()
    ESCAPE = auto()
    TAB = auto()
    BACKSPACE = auto()
    HOME = auto()
    END = auto()
    PAGE_UP = auto()
    PAGE_DOWN = auto()
    DELETE = auto()
    INSERT = auto()
    F1 = auto()


@dataclass(frozen=True)
class KeyEvent:
    """Represents a keyboard input event."""
    key: Optional[Key] = None  # Named key if recognized
    char: Optional[str] = None  # Character if printable
    raw: str = ""  # Raw escape sequence
    ctrl: bool = False  # Ctrl held; char is then the lowercase letter

    @property
    def is_char(self) -> bool:
        """Check if this is a printable character."""
        return self.char is not None and self.key is None and not self.ctrl


@dataclass(frozen=True)
class PointerDown:
    """Primary button pressed over a grid cell."""
    pos: Pos


@dataclass(frozen=True)
class PointerMove:
    """Pointer dragged to a grid cell."""
    pos: Pos


@dataclass(frozen=True)
class PointerUp:
    """Primary button released over a grid cell."""
    pos: Pos


@dataclass(frozen=True)
class Cancel:
    """Abort the gesture in progress."""


@dataclass(frozen=True)
class Scroll:
    """Move the viewport by (rows, cols)."""
    rows: int = 0
    cols: int = 0


InputEvent = Union[PointerDown, PointerMove, PointerUp, KeyEvent, Cancel, Scroll]

EVENT_TYPES: tuple[type, ...] = (PointerDown, PointerMove, PointerUp, KeyEvent, Cancel, Scroll)

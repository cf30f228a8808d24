"""Keyboard and mouse input handling with event abstraction."""

from __future__ import annotations

import os
import re
import select
import sys
import time
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from cellsketch.interact.events import Key, KeyEvent


class MouseButton(Enum):
    LEFT = "left"
    MIDDLE = "middle"
    RIGHT = "right"
    WHEEL_UP = "wheel_up"
    WHEEL_DOWN = "wheel_down"


class MouseAction(Enum):
    PRESS = "press"
    DRAG = "drag"
    RELEASE = "release"


@dataclass(frozen=True)
class MouseEvent:
    """A mouse report in 0-indexed screen coordinates."""
    button: MouseButton
    action: MouseAction
    row: int
    col: int


TerminalEvent = Union[KeyEvent, MouseEvent]

# xterm SGR mouse report, without the \x1b prefix: [<button;col;row(M|m)
_SGR_MOUSE = re.compile(r'\[<(\d+);(\d+);(\d+)([Mm])')

_BUTTONS = {
    0: MouseButton.LEFT,
    1: MouseButton.MIDDLE,
    2: MouseButton.RIGHT,
    64: MouseButton.WHEEL_UP,
    65: MouseButton.WHEEL_DOWN,
}


class InputReader:
    """
    Non-blocking keyboard and mouse input reader.

    Uses os.read() to bypass Python's I/O buffering and properly
    handle escape sequences that may arrive split across reads.
    """

    # Escape sequence mappings (without the \x1b prefix)
    SEQUENCES: dict[str, Key] = {
        # Arrow keys (CSI)
        '[A': Key.UP,
        '[B': Key.DOWN,
        '[C': Key.RIGHT,
        '[D': Key.LEFT,
        # Arrow keys (SS3 - application mode)
        'OA': Key.UP,
        'OB': Key.DOWN,
        'OC': Key.RIGHT,
        'OD': Key.LEFT,
        # Navigation
        '[H': Key.HOME,
        '[F': Key.END,
        '[1~': Key.HOME,
        '[4~': Key.END,
        '[5~': Key.PAGE_UP,
        '[6~': Key.PAGE_DOWN,
        '[2~': Key.INSERT,
        '[3~': Key.DELETE,
        'OP': Key.F1,
    }

    SIMPLE_KEYS: dict[str, Key] = {
        '\r': Key.ENTER,
        '\n': Key.ENTER,
        '\t': Key.TAB,
        '\x7f': Key.BACKSPACE,
        '\x08': Key.BACKSPACE,
    }

    def __init__(self, fd: Optional[int] = None) -> None:
        self._buffer = ""
        self._fd = fd

    @property
    def fd(self) -> int:
        if self._fd is None:
            self._fd = sys.stdin.fileno()
        return self._fd

    def feed(self, data: str) -> None:
        """Queue raw terminal input for parsing."""
        self._buffer += data

    def read(self, timeout: float = 0.1) -> Optional[TerminalEvent]:
        """
        Read a single event.

        Returns None if no input available within timeout.
        """
        # Process any buffered input first
        if self._buffer:
            return self._process_buffer()

        if not self._has_input(timeout):
            return None

        self._read_available()

        if self._buffer:
            return self._process_buffer()

        return None

    def _read_available(self) -> None:
        """Read all currently available input into buffer using os.read."""
        try:
            data = os.read(self.fd, 1024)
            self._buffer += data.decode('utf-8', errors='replace')
        except (OSError, BlockingIOError):
            pass

        # If buffer is just escape, wait for potential sequence
        if self._buffer == '\x1b':
            self._wait_for_escape_sequence()

    def _wait_for_escape_sequence(self) -> None:
        """Wait briefly for the rest of an escape sequence."""
        deadline = time.monotonic() + 0.1

        while time.monotonic() < deadline:
            wait_time = min(deadline - time.monotonic(), 0.025)
            if wait_time <= 0:
                break

            if self._has_input(wait_time):
                try:
                    data = os.read(self.fd, 1024)
                    self._buffer += data.decode('utf-8', errors='replace')
                except (OSError, BlockingIOError):
                    pass

                rest = self._buffer[1:]
                if rest and (rest[-1].isalpha() or rest[-1] == '~' or rest in self.SEQUENCES):
                    return

    def _process_buffer(self) -> Optional[TerminalEvent]:
        """Process buffered input and return next event."""
        if not self._buffer:
            return None

        first = self._buffer[0]

        # Simple keys
        if first in self.SIMPLE_KEYS:
            self._buffer = self._buffer[1:]
            return KeyEvent(key=self.SIMPLE_KEYS[first], raw=first)

        # Escape sequence
        if first == '\x1b':
            return self._parse_escape_sequence()

        # Ctrl+letter
        if '\x01' <= first <= '\x1a':
            self._buffer = self._buffer[1:]
            letter = chr(ord(first) + ord('a') - 1)
            return KeyEvent(char=letter, raw=first, ctrl=True)

        # Printable character
        if first.isprintable():
            self._buffer = self._buffer[1:]
            return KeyEvent(char=first, raw=first)

        # Unknown control character - skip it
        self._buffer = self._buffer[1:]
        return None

    def _parse_escape_sequence(self) -> Optional[TerminalEvent]:
        """Parse an escape sequence from the buffer."""
        rest = self._buffer[1:]

        mouse = _SGR_MOUSE.match(rest)
        if mouse:
            self._buffer = rest[mouse.end():]
            return self._mouse_event(mouse)

        # Find where this sequence ends
        end_idx = 0
        for i, ch in enumerate(rest):
            if ch == '\x1b':
                end_idx = i
                break
            if i > 0 and (ch.isalpha() or ch == '~'):
                end_idx = i + 1
                break
            end_idx = i + 1

        if end_idx == 0:
            # Just escape, no sequence
            self._buffer = rest
            return KeyEvent(key=Key.ESCAPE, raw='\x1b')

        seq = rest[:end_idx]
        self._buffer = rest[end_idx:]
        raw = '\x1b' + seq
        if seq in self.SEQUENCES:
            return KeyEvent(key=self.SEQUENCES[seq], raw=raw)

        # Unknown sequence
        return KeyEvent(raw=raw)

    @staticmethod
    def _mouse_event(match: re.Match[str]) -> Optional[MouseEvent]:
        code = int(match.group(1))
        col = int(match.group(2)) - 1
        row = int(match.group(3)) - 1
        released = match.group(4) == 'm'

        drag = bool(code & 32)
        button = _BUTTONS.get(code & ~(4 | 8 | 16 | 32))
        if button is None:
            return None
        if released:
            action = MouseAction.RELEASE
        elif drag:
            action = MouseAction.DRAG
        else:
            action = MouseAction.PRESS
        return MouseEvent(button, action, row, col)

    def _has_input(self, timeout: float) -> bool:
        """Check if input is available within timeout."""
        try:
            ready, _, _ = select.select([self.fd], [], [], timeout)
            return bool(ready)
        except (ValueError, OSError):
            return False

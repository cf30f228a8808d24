"""Low-level terminal operations - platform-independent abstraction."""

from __future__ import annotations

import os
import sys
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator


@dataclass(frozen=True)
class TerminalSize:
    """Terminal dimensions."""
    rows: int
    cols: int


class Terminal:
    """Terminal I/O abstraction for TUI applications."""

    @staticmethod
    def size() -> TerminalSize:
        """Get current terminal dimensions."""
        try:
            size = os.get_terminal_size()
            return TerminalSize(size.lines, size.columns)
        except OSError:
            return TerminalSize(24, 80)

    @staticmethod
    def clear() -> None:
        """Clear screen and move cursor to home."""
        Terminal.write('\x1b[2J\x1b[H')

    @staticmethod
    def move_to(row: int, col: int) -> None:
        """Move cursor to position (1-indexed)."""
        Terminal.write(f'\x1b[{row};{col}H')

    @staticmethod
    def write(text: str) -> None:
        """Write text to terminal."""
        sys.stdout.write(text)
        sys.stdout.flush()

    @staticmethod
    @contextmanager
    def raw_mode() -> Iterator[None]:
        """Context manager for raw terminal mode (Unix only)."""
        try:
            import termios
            import tty
        except ImportError:
            # Windows or no termios - just yield
            yield
            return
        fd = sys.stdin.fileno()
        old_settings = termios.tcgetattr(fd)
        try:
            tty.setraw(fd)
            yield
        finally:
            termios.tcsetattr(fd, termios.TCSADRAIN, old_settings)

    @staticmethod
    @contextmanager
    def alternate_screen() -> Iterator[None]:
        """Use alternate screen buffer (preserves scrollback)."""
        Terminal.write('\x1b[?1049h')
        try:
            yield
        finally:
            Terminal.write('\x1b[?1049l')

    @staticmethod
    @contextmanager
    def mouse_reporting() -> Iterator[None]:
        """Report button presses and drags as xterm SGR mouse sequences."""
        Terminal.write('\x1b[?1002h\x1b[?1006h')
        try:
            yield
        finally:
            Terminal.write('\x1b[?1006l\x1b[?1002l')

    @staticmethod
    @contextmanager
    def managed_mode() -> Iterator[None]:
        """Full TUI mode: alternate screen, hidden cursor, mouse, raw input."""
        with Terminal.alternate_screen():
            Terminal.write('\x1b[?25l')
            try:
                with Terminal.mouse_reporting(), Terminal.raw_mode():
                    yield
            finally:
                Terminal.write('\x1b[?25h\x1b[0m')

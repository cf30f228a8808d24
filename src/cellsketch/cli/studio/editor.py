"""Interactive diagram editor application.

This module provides the EditorApp that ties together:
- EditSession: the document, history and gesture handling
- CanvasWidget: the visible window onto the grid
- StatusBarWidget: mode line with document name, tool and messages
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

from cellsketch.cli.core.ansi_text import fit
from cellsketch.cli.core.input import InputReader, MouseAction, MouseButton, MouseEvent
from cellsketch.cli.core.shortcuts import create_default_shortcuts
from cellsketch.cli.core.terminal import Terminal
from cellsketch.cli.widgets.base import Rect
from cellsketch.cli.widgets.canvas import CanvasWidget
from cellsketch.cli.widgets.status_bar import StatusBarWidget
from cellsketch.config import EditorSettings, Tool
from cellsketch.edit.session import EditSession
from cellsketch.errors import CellsketchError
from cellsketch.interact.events import (
    Key,
    KeyEvent,
    PointerDown,
    PointerMove,
    PointerUp,
)
from cellsketch.ports import Clipboard, SystemClipboard

logger = logging.getLogger(__name__)

STATUS_BAR_HEIGHT = 1
SCROLL_STEP = 1
WHEEL_STEP = 3


class EditorApp:
    """Interactive terminal diagram editor.

    Layout:
        +------------------------------------------+
        |                                          |
        |      Canvas (window onto the grid)       |
        |                                          |
        +------------------------------------------+
        | Status Bar (name, message, hints, tool)  |
        +------------------------------------------+

    Mouse:
        Left drag: use the active tool (draw, move/resize boxes, select)
        Right drag: pan the view
        Wheel: scroll vertically

    Keyboard: see ``create_default_shortcuts()``; ``?`` shows the list.
    """

    def __init__(
        self,
        path: Optional[Path] = None,
        settings: Optional[EditorSettings] = None,
        clipboard: Optional[Clipboard] = None,
    ) -> None:
        """Initialize the editor.

        Args:
            path: Optional file to open (created on first save if missing)
            settings: Editor settings; loaded from the config file if omitted
            clipboard: Clipboard port; the system clipboard if omitted
        """
        self.running = False
        self.input = InputReader()
        self.session = EditSession(
            settings or EditorSettings.load(),
            clipboard=clipboard or SystemClipboard(),
        )
        self.canvas = CanvasWidget(self.session)
        self.session.renderer = self.canvas
        self.status_bar = StatusBarWidget()
        self._shortcuts = create_default_shortcuts()

        # UI state
        self._message: str | None = None
        self._show_help = False
        self._last_size: tuple[int, int] | None = None
        self._pan_anchor: tuple[int, int] | None = None

        # Save prompt state
        self._save_prompt_active = False
        self._save_prompt_text = ""

        # Discard confirmation: handler name to run if the user answers yes
        self._pending_discard: str | None = None

        if path is not None:
            if path.exists():
                self._open(path)
            else:
                self.session.path = path
                self._message = f"New file: {path.name}"

    # -------------------------------------------------------------------------
    # Document Management
    # -------------------------------------------------------------------------

    def _open(self, path: Path) -> None:
        try:
            self.session.open(path)
            self._message = f"Loaded: {path.name}"
        except CellsketchError as e:
            self._message = f"Error loading {path.name}: {e}"

    def _save_to_path(self, path: Path) -> None:
        try:
            saved = self.session.save(path.resolve())
            self._message = f"Saved: {saved}"
        except CellsketchError as e:
            self._message = f"Error saving: {e}"

    def _handle_save_prompt_input(self, event: KeyEvent) -> None:
        """Handle input while the save prompt is active."""
        if event.key == Key.ESCAPE:
            self._save_prompt_active = False
            self._message = "Save cancelled"
        elif event.key == Key.ENTER:
            self._save_prompt_active = False
            path = Path(self._save_prompt_text.strip())
            if path.name:
                self._save_to_path(path)
            else:
                self._message = "Invalid filename"
        elif event.key == Key.BACKSPACE:
            self._save_prompt_text = self._save_prompt_text[:-1]
        elif event.is_char:
            self._save_prompt_text += event.char
        self.canvas.needs_redraw = True

    # -------------------------------------------------------------------------
    # Shortcut handlers
    # -------------------------------------------------------------------------

    def use_box(self) -> None:
        self.session.set_tool(Tool.BOX)

    def use_line(self) -> None:
        self.session.set_tool(Tool.LINE)

    def use_arrow(self) -> None:
        self.session.set_tool(Tool.ARROW)

    def use_text(self) -> None:
        self.session.set_tool(Tool.TEXT)

    def use_erase(self) -> None:
        self.session.set_tool(Tool.ERASE)

    def use_select(self) -> None:
        self.session.set_tool(Tool.SELECT)

    def undo(self) -> None:
        if not self.session.undo():
            self._message = "Nothing to undo"

    def redo(self) -> None:
        if not self.session.redo():
            self._message = "Nothing to redo"

    def copy(self) -> None:
        try:
            text = self.session.copy_selection()
        except CellsketchError as e:
            self._message = f"Copy failed: {e}"
            return
        self._message = "Copied" if text else "Nothing selected"

    def paste(self) -> None:
        try:
            self.session.paste()
        except CellsketchError as e:
            self._message = f"Paste failed: {e}"

    def delete(self) -> None:
        self._message = "Nothing selected"

    def scroll_up(self) -> None:
        self.session.scroll(-SCROLL_STEP, 0)

    def scroll_down(self) -> None:
        self.session.scroll(SCROLL_STEP, 0)

    def scroll_left(self) -> None:
        self.session.scroll(0, -SCROLL_STEP)

    def scroll_right(self) -> None:
        self.session.scroll(0, SCROLL_STEP)

    def toggle_help(self) -> None:
        self._show_help = not self._show_help

    def save(self) -> None:
        if self.session.path is not None:
            self._save_to_path(self.session.path)
            return
        self._save_prompt_text = "untitled.txt"
        self._save_prompt_active = True

    def new(self) -> None:
        if self._confirm_discard("new"):
            self.session.new()
            self._message = "New diagram"

    def quit(self) -> None:
        if self._confirm_discard("quit"):
            self.running = False

    def _confirm_discard(self, handler: str) -> bool:
        """True if it is OK to drop the document now; otherwise ask first."""
        if not self.session.dirty or self._pending_discard == handler:
            self._pending_discard = None
            return True
        self._pending_discard = handler
        self._message = "Discard unsaved changes? (y/n)"
        return False

    # -------------------------------------------------------------------------
    # Main Loop
    # -------------------------------------------------------------------------

    def run(self) -> None:
        """Run the editor main loop."""
        self.running = True

        with Terminal.managed_mode():
            Terminal.clear()

            while self.running:
                size = Terminal.size()
                current_size = (size.cols, size.rows)
                if current_size != self._last_size:
                    self._last_size = current_size
                    self.canvas.needs_redraw = True

                if self.canvas.needs_redraw:
                    self._render()
                    self.canvas.needs_redraw = False

                self._handle_input()

    # -------------------------------------------------------------------------
    # Input Handling
    # -------------------------------------------------------------------------

    def _handle_input(self) -> None:
        event = self.input.read(timeout=0.1)
        if event is None:
            return
        if isinstance(event, MouseEvent):
            self._handle_mouse(event)
            return

        if self._save_prompt_active:
            self._handle_save_prompt_input(event)
            return

        if self._pending_discard is not None:
            handler = self._pending_discard
            if event.char in ('y', 'Y'):
                getattr(self, handler)()
            else:
                self._pending_discard = None
                self._message = None
            self.canvas.needs_redraw = True
            return

        self._message = None
        self.canvas.needs_redraw = True
        if self.session.handle(event):
            return

        shortcut = self._shortcuts.match(event)
        if shortcut is not None:
            logger.debug("Shortcut %s", shortcut.id)
            getattr(self, shortcut.handler)()

    def _handle_mouse(self, event: MouseEvent) -> None:
        if self._save_prompt_active or self._pending_discard is not None:
            return
        content_height = (self._last_size[1] if self._last_size else 24) - STATUS_BAR_HEIGHT
        row = min(event.row, content_height - 1)
        pos = self.canvas.to_grid(row, event.col)

        if event.button == MouseButton.WHEEL_UP:
            self.session.scroll(-WHEEL_STEP, 0)
        elif event.button == MouseButton.WHEEL_DOWN:
            self.session.scroll(WHEEL_STEP, 0)
        elif event.button == MouseButton.RIGHT:
            self._pan(event)
        elif event.button == MouseButton.LEFT:
            self._message = None
            if event.action == MouseAction.PRESS:
                self.session.handle(PointerDown(pos))
            elif event.action == MouseAction.DRAG:
                self.session.handle(PointerMove(pos))
            else:
                self.session.handle(PointerUp(pos))

    def _pan(self, event: MouseEvent) -> None:
        """Right-drag moves the view with the pointer."""
        if event.action == MouseAction.PRESS:
            self._pan_anchor = (event.row, event.col)
        elif event.action == MouseAction.DRAG and self._pan_anchor is not None:
            rows = self._pan_anchor[0] - event.row
            cols = self._pan_anchor[1] - event.col
            self._pan_anchor = (event.row, event.col)
            self.session.scroll(rows, cols)
        else:
            self._pan_anchor = None

    # -------------------------------------------------------------------------
    # Rendering
    # -------------------------------------------------------------------------

    def _render(self) -> None:
        """Render all widgets to the screen."""
        size = Terminal.size()
        content_height = max(1, size.rows - STATUS_BAR_HEIGHT)

        lines = [
            f"{fit(line, size.cols)}\x1b[K"
            for line in self.canvas.render(Rect(0, 0, size.cols, content_height))
        ]
        if self._show_help:
            lines = self._overlay_help(lines, size.cols)

        if self._save_prompt_active:
            lines.append(self._render_save_prompt(size.cols))
        else:
            self._update_status_bar()
            lines.extend(self.status_bar.render(Rect(0, 0, size.cols, STATUS_BAR_HEIGHT)))

        # Output all at once to minimize flicker
        Terminal.move_to(1, 1)
        sys.stdout.write('\r\n'.join(lines))
        sys.stdout.flush()

    def _render_save_prompt(self, width: int) -> str:
        style = "\x1b[38;2;255;255;255m\x1b[48;2;30;60;120m"
        cursor = "\x1b[7m \x1b[27m"
        line = f"{style} Save as: {self._save_prompt_text}{cursor}"
        return fit(line, width - 16) + f"{style} [Enter] [Esc] \x1b[0m"

    def _overlay_help(self, lines: list[str], width: int) -> list[str]:
        """Draw the shortcut list over the top-left of the canvas."""
        style = "\x1b[1;97;48;5;236m"
        help_lines = [" SHORTCUTS  (? to close)", ""] + self._shortcuts.help_lines()
        box_width = min(width, max(len(line) for line in help_lines) + 2)
        result = list(lines)
        for i, text in enumerate(help_lines[:len(result)]):
            result[i] = f"{style}{fit(text, box_width)}\x1b[0m\x1b[K"
        return result

    def _update_status_bar(self) -> None:
        self.status_bar.name = self.session.name
        self.status_bar.dirty = self.session.dirty
        self.status_bar.tool = self.session.active_tool.value.upper()
        self.status_bar.message = self._message or self.session.machine.notice
        self.status_bar.shortcuts = self._shortcuts.status_hints()


def run_editor(path: Optional[Path] = None, settings: Optional[EditorSettings] = None) -> None:
    """Launch the editor application.

    Args:
        path: Optional file path to open
        settings: Settings to use instead of the config file
    """
    app = EditorApp(path, settings)
    app.run()

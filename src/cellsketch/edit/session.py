"""EditSession - one open diagram and everything needed to edit it.

The session ties a Document to its CommandHistory and the interaction
state machine, remembers where the document lives on disk and whether it
has unsaved changes, and asks the renderer to redraw after every change.
"""

from __future__ import annotations

import logging
from pathlib import Path

from cellsketch.config import EditorSettings, Tool
from cellsketch.core.constants import BLANK_GLYPH
from cellsketch.core.direction import Pos
from cellsketch.core.document import Document, ViewportCell
from cellsketch.core.geometry import Region
from cellsketch.edit.commands import Change, Command, InsertText
from cellsketch.edit.history import CommandHistory
from cellsketch.errors import ClipboardUnavailable, InvalidGeometry, SaveFailure
from cellsketch.interact.events import Cancel, InputEvent, Scroll
from cellsketch.interact.machine import InteractionStateMachine
from cellsketch.interact.states import Idle
from cellsketch.io.reader import load as load_document
from cellsketch.io.writer import save as save_document
from cellsketch.ports import Clipboard, Renderer
from cellsketch.render.text import TextRenderer

logger = logging.getLogger(__name__)

SCRATCH_NAME = "*scratch*"


class EditSession:
    """An editing session over one document.

    Attributes:
        settings: Editor settings in effect
        renderer: Display to redraw after changes, if any
        clipboard: Clipboard port for copy/paste, if any
        path: File the document was loaded from or last saved to
        dirty: True when there are changes since the last load or save
        viewport_origin: Grid position shown at the top-left of the display
        viewport_size: Visible (rows, cols)
    """

    def __init__(
        self,
        settings: EditorSettings | None = None,
        renderer: Renderer | None = None,
        clipboard: Clipboard | None = None,
    ) -> None:
        self.settings = settings or EditorSettings()
        self.renderer = renderer
        self.clipboard = clipboard
        self.path: Path | None = None
        self.dirty = False
        self.viewport_origin: Pos = (0, 0)
        self.viewport_size: tuple[int, int] = (24, 80)

        self._document = Document(self.settings.glyph_set)
        self.history = CommandHistory(self._document, self.settings.max_history)
        self.history.on_change(self._changed)
        self.machine = InteractionStateMachine(
            self._document,
            self.execute,
            tool=self.settings.default_tool,
            axis_lock_threshold=self.settings.axis_lock_threshold,
        )

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def document(self) -> Document:
        return self._document

    @property
    def active_tool(self) -> Tool:
        return self.machine.tool

    @property
    def name(self) -> str:
        """Display name of the document."""
        return str(self.path) if self.path else SCRATCH_NAME

    def set_tool(self, tool: Tool) -> None:
        self.machine.set_tool(tool)
        self.redraw()

    # -------------------------------------------------------------------------
    # Document Management
    # -------------------------------------------------------------------------

    def new(self) -> None:
        """Start over with an empty, unnamed document."""
        self._replace_document(Document(self.settings.glyph_set))
        self.path = None
        self.redraw()

    def open(self, path: str | Path) -> None:
        """Replace the document with one loaded from `path`.

        Raises:
            LoadFailure: The file could not be loaded; the session is unchanged.
        """
        document = load_document(
            path,
            glyph_set=self.settings.glyph_set,
            fill_char=self.settings.fill_char,
            reconstruct_shapes=self.settings.reconstruct_shapes,
        )
        self._replace_document(document)
        self.path = Path(path)
        self.redraw()

    def save(self, path: str | Path | None = None) -> Path:
        """Write the document to `path` (default: where it came from).

        Raises:
            SaveFailure: No path is known or the file could not be written.
        """
        self.commit_pending()
        target = Path(path) if path is not None else self.path
        if target is None:
            raise SaveFailure("No file name given")
        save_document(self._document, target, fill_char=self.settings.fill_char)
        self.path = target
        self.dirty = False
        self.redraw()
        return target

    def _replace_document(self, document: Document) -> None:
        self._document = document
        self.history.reset(document)
        self.machine.reset(document)
        self.dirty = False
        self.viewport_origin = (0, 0)

    # -------------------------------------------------------------------------
    # Editing
    # -------------------------------------------------------------------------

    def handle(self, event: InputEvent) -> bool:
        """Feed one input event through the state machine.

        Returns True if the event was consumed.
        """
        if isinstance(event, Scroll):
            self.scroll(event.rows, event.cols)
            return True
        consumed = self.machine.handle(event)
        if consumed:
            self.redraw()
        return consumed

    def execute(self, command: Command) -> Change:
        """Run a command through history.

        Raises:
            InvalidGeometry: The command does not apply; nothing changes.
        """
        return self.history.execute(command)

    def undo(self) -> bool:
        self._abandon_gesture()
        return self.history.undo() is not None

    def redo(self) -> bool:
        self._abandon_gesture()
        return self.history.redo() is not None

    def commit_pending(self) -> None:
        """Confirm typed-but-unconfirmed text, if any."""
        if not isinstance(self.machine.state, Idle):
            self.machine.set_tool(self.machine.tool)

    def _abandon_gesture(self) -> None:
        if not isinstance(self.machine.state, Idle):
            self.machine.handle(Cancel())

    def _changed(self, change: Change) -> None:
        self.dirty = True
        self.redraw()

    # -------------------------------------------------------------------------
    # Clipboard
    # -------------------------------------------------------------------------

    def selected_region(self) -> Region | None:
        """Current selection, or the footprint of the selected box."""
        if self.machine.selection is not None:
            return self.machine.selection
        if self.machine.selected_shape is not None:
            shape = self._document.shape(self.machine.selected_shape)
            if shape is not None:
                return shape.footprint
        return None

    def copy_selection(self, region: Region | None = None) -> str:
        """Serialize a region to a text block and hand it to the clipboard.

        Raises:
            ClipboardUnavailable: A clipboard is configured but unreachable.
        """
        region = region or self.selected_region()
        if region is None:
            return ""
        text = TextRenderer().render(self._document, region)
        if self.clipboard is not None:
            self.clipboard.copy(text)
        return text

    def paste(self, at: Pos | None = None, text: str | None = None) -> Change:
        """Place a text block at `at`, taking it from the clipboard if not given.

        Characters land as Text cells, line-drawing glyphs included; spaces
        in the block leave the cells underneath alone.

        Raises:
            ClipboardUnavailable: No clipboard, or the clipboard is unreachable.
        """
        if text is None:
            if self.clipboard is None:
                raise ClipboardUnavailable("No clipboard configured")
            text = self.clipboard.paste()
        self.commit_pending()
        if at is None:
            at = self._paste_position()
        return self.execute(InsertText(at, text, transparent=True))

    def _paste_position(self) -> Pos:
        region = self.selected_region()
        if region is not None:
            return (region.top, region.left)
        return self.viewport_origin

    # -------------------------------------------------------------------------
    # Viewport
    # -------------------------------------------------------------------------

    def scroll(self, rows: int = 0, cols: int = 0) -> None:
        top, left = self.viewport_origin
        self.viewport_origin = (top + rows, left + cols)
        self.redraw()

    def query_viewport(self, top_left: Pos, size: tuple[int, int]) -> list[ViewportCell]:
        """Visible cells with the gesture preview, selection and text cursor on top."""
        window = Region.from_size(top_left, size)
        cells = {cell.pos: cell for cell in self._document.query_viewport(top_left, size)}

        selection = self.selected_region()
        if selection is not None:
            for pos, cell in list(cells.items()):
                if selection.contains(pos):
                    cells[pos] = ViewportCell(pos, cell.glyph, "selection")

        for pos, glyph in self._preview().items():
            if window.contains(pos):
                cells[pos] = ViewportCell(pos, glyph, "preview")

        cursor = self.machine.text_cursor
        if cursor is not None and window.contains(cursor):
            glyph = cells[cursor].glyph if cursor in cells else BLANK_GLYPH
            cells[cursor] = ViewportCell(cursor, glyph, "cursor")

        return sorted(cells.values(), key=lambda c: c.pos)

    def _preview(self) -> dict[Pos, str]:
        command = self.machine.pending_command()
        if command is None:
            return {}
        try:
            change = command.compute(self._document)
        except InvalidGeometry:
            return {}
        synth = self._document.synthesizer
        return {c.pos: synth.cell_glyph(c.after) for c in change.cells}

    def redraw(self) -> None:
        if self.renderer is not None:
            self.renderer.redraw(self)

    # -------------------------------------------------------------------------
    # Status
    # -------------------------------------------------------------------------

    def status_line(self) -> str:
        """One-line summary: document name, modified marker, tool and notice."""
        parts = [self.name + (" [+]" if self.dirty else ""), self.active_tool.value.upper()]
        if self.machine.notice:
            parts.append(self.machine.notice)
        return " | ".join(parts)

    def __repr__(self) -> str:
        return f"EditSession(path={self.path}, dirty={self.dirty}, {self.history!r})"

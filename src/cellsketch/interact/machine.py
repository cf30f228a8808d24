"""InteractionStateMachine - turns raw gestures into committed commands.

Every (state, event) pair is listed in ``TRANSITIONS``. A handler returns the
next state, or None when the event was not consumed (the caller may then use
it, e.g. as an editor shortcut). Handlers never touch the document; a
finished gesture is turned into a Command, validated, and passed to `emit`.
"""

from __future__ import annotations

import logging
from typing import Callable, ClassVar, Optional

from cellsketch.config import Tool
from cellsketch.core.direction import Direction, Pos
from cellsketch.core.document import Document
from cellsketch.core.geometry import Region, constrain, lock_axis
from cellsketch.edit.commands import (
    Command,
    DeleteShape,
    DrawBox,
    DrawLine,
    EraseRegion,
    InsertText,
    Move,
    Resize,
)
from cellsketch.errors import InvalidGeometry
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

logger = logging.getLogger(__name__)

Handler = Callable[["InteractionStateMachine", State, InputEvent], Optional[State]]

# Tools that grab existing boxes on pointer-down
_GRABBING_TOOLS = (Tool.BOX, Tool.LINE, Tool.ARROW, Tool.SELECT)


class InteractionStateMachine:
    """Mode-dependent gesture handling.

    Attributes:
        tool: Active drawing tool
        notice: Message describing the last rejected gesture, if any
        selected_shape: Identifier of the selected box, if any
        selection: Selected region, if any
    """

    def __init__(
        self,
        document: Document,
        emit: Callable[[Command], object],
        tool: Tool = Tool.BOX,
        axis_lock_threshold: int = 1,
    ) -> None:
        self._document = document
        self._emit = emit
        self._state: State = Idle()
        self.tool = tool
        self.axis_lock_threshold = axis_lock_threshold
        self.notice: str | None = None
        self.selected_shape: str | None = None
        self.selection: Region | None = None

    @property
    def state(self) -> State:
        return self._state

    @property
    def document(self) -> Document:
        return self._document

    # -------------------------------------------------------------------------
    # Public API
    # -------------------------------------------------------------------------

    def handle(self, event: InputEvent) -> bool:
        """Dispatch one event. Returns True if the event was consumed."""
        handler = self.TRANSITIONS[(type(self._state), type(event))]
        result = handler(self, self._state, event)
        if result is None:
            return False
        if type(result) is not type(self._state):
            logger.debug("%s -> %s on %s", type(self._state).__name__, type(result).__name__, event)
        self._state = result
        return True

    def set_tool(self, tool: Tool) -> None:
        """Switch tools, confirming pending text and dropping any other gesture."""
        if isinstance(self._state, EditingText):
            self._commit_text(self._state)
        self._state = Idle()
        self.tool = tool

    def reset(self, document: Document | None = None) -> None:
        """Drop all gesture and selection state, optionally for a new document."""
        if document is not None:
            self._document = document
        self._state = Idle()
        self.notice = None
        self.selected_shape = None
        self.selection = None

    def pending_command(self) -> Command | None:
        """The command the current gesture would commit right now."""
        state = self._state
        if isinstance(state, DrawingLine):
            end = self._line_end(state)
            if end == state.anchor:
                return None
            return DrawLine(state.anchor, end, arrow=state.arrow)
        if isinstance(state, DrawingBox):
            return DrawBox(state.anchor, state.current)
        if isinstance(state, MovingShape):
            top, left = state.top_left
            return Move(state.shape_id, top, left)
        if isinstance(state, ResizingShape):
            shape = self._document.shape(state.shape_id)
            if shape is None:
                return None
            resized = shape.drag_edges(state.active_edge, state.current)
            return Resize(state.shape_id, resized.top, resized.left, resized.width, resized.height)
        if isinstance(state, EditingText):
            if not state.buffer:
                return None
            return InsertText(state.origin, state.buffer)
        if isinstance(state, SelectingRegion) and state.erase:
            return EraseRegion(state.anchor, state.current)
        return None

    @property
    def text_cursor(self) -> Pos | None:
        if isinstance(self._state, EditingText):
            return self._state.cursor_position
        return None

    # -------------------------------------------------------------------------
    # Committing
    # -------------------------------------------------------------------------

    def _commit(self, command: Command) -> bool:
        """Validate and emit `command`. Returns False if it was rejected."""
        try:
            command.validate(self._document)
        except InvalidGeometry as e:
            self.notice = str(e)
            logger.warning("Rejected %s: %s", type(command).__name__, e)
            return False
        self.notice = None
        self._emit(command)
        return True

    def _commit_text(self, state: EditingText) -> None:
        if state.buffer:
            self._commit(InsertText(state.origin, state.buffer))

    def _line_end(self, state: DrawingLine) -> Pos:
        if state.axis_lock is None:
            return state.anchor
        return constrain(state.anchor, state.current, state.axis_lock)

    # -------------------------------------------------------------------------
    # Shared handlers
    # -------------------------------------------------------------------------

    def _ignore(self, state: State, event: InputEvent) -> State | None:
        return None

    def _absorb(self, state: State, event: InputEvent) -> State | None:
        return state

    def _cancel(self, state: State, event: InputEvent) -> State | None:
        logger.debug("Cancelled %s", type(state).__name__)
        return Idle()

    def _drag_key(self, state: State, event: KeyEvent) -> State | None:
        if event.key == Key.ESCAPE:
            return self._cancel(state, event)
        return state

    # -------------------------------------------------------------------------
    # Idle
    # -------------------------------------------------------------------------

    def _idle_pointer_down(self, state: Idle, event: PointerDown) -> State | None:
        pos = event.pos
        self.notice = None

        if self.tool == Tool.TEXT:
            return EditingText(pos)
        if self.tool == Tool.ERASE:
            return SelectingRegion(pos, pos, erase=True)

        hit = self._document.hit_test(pos)
        if hit is not None and self.tool in _GRABBING_TOOLS:
            shape = hit.shape
            if hit.on_border:
                return ResizingShape(shape.shape_id, hit.edges, pos, pos)
            offset = (pos[0] - shape.top, pos[1] - shape.left)
            return MovingShape(shape.shape_id, offset, pos, pos)

        self.selected_shape = None
        self.selection = None
        if self.tool == Tool.SELECT:
            return SelectingRegion(pos, pos)
        if self.tool == Tool.BOX:
            return DrawingBox(pos, pos)
        return DrawingLine(pos, pos, arrow=self.tool == Tool.ARROW)

    def _idle_key(self, state: Idle, event: KeyEvent) -> State | None:
        if event.key in (Key.DELETE, Key.BACKSPACE):
            if self.selected_shape is not None:
                self._commit(DeleteShape(self.selected_shape))
                self.selected_shape = None
                return state
            if self.selection is not None:
                region = self.selection
                self._commit(EraseRegion((region.top, region.left), (region.bottom, region.right)))
                self.selection = None
                return state
            return None
        if event.key == Key.ESCAPE and (self.selected_shape or self.selection):
            self.selected_shape = None
            self.selection = None
            return state
        return None

    def _idle_cancel(self, state: Idle, event: Cancel) -> State | None:
        self.selected_shape = None
        self.selection = None
        return state

    # -------------------------------------------------------------------------
    # DrawingLine
    # -------------------------------------------------------------------------

    def _line_move(self, state: DrawingLine, event: PointerMove | PointerDown | PointerUp) -> DrawingLine:
        axis = state.axis_lock
        if axis is None:
            axis = lock_axis(state.anchor, event.pos, self.axis_lock_threshold)
        return DrawingLine(state.anchor, event.pos, axis, state.arrow)

    def _line_up(self, state: DrawingLine, event: PointerUp) -> State:
        final = self._line_move(state, event)
        end = self._line_end(final)
        if end != final.anchor:
            self._commit(DrawLine(final.anchor, end, arrow=final.arrow))
        return Idle()

    # -------------------------------------------------------------------------
    # DrawingBox
    # -------------------------------------------------------------------------

    def _box_move(self, state: DrawingBox, event: PointerMove | PointerDown) -> DrawingBox:
        return DrawingBox(state.anchor, event.pos)

    def _box_up(self, state: DrawingBox, event: PointerUp) -> State:
        if event.pos != state.anchor:
            self._commit(DrawBox(state.anchor, event.pos))
        return Idle()

    # -------------------------------------------------------------------------
    # MovingShape / ResizingShape
    # -------------------------------------------------------------------------

    def _moving_move(self, state: MovingShape, event: PointerMove | PointerDown) -> MovingShape:
        return MovingShape(state.shape_id, state.grab_offset, state.start, event.pos)

    def _moving_up(self, state: MovingShape, event: PointerUp) -> State:
        final = self._moving_move(state, event)
        self.selection = None
        self.selected_shape = state.shape_id
        if final.current != state.start:
            top, left = final.top_left
            self._commit(Move(state.shape_id, top, left))
        return Idle()

    def _resizing_move(self, state: ResizingShape, event: PointerMove | PointerDown) -> ResizingShape:
        return ResizingShape(state.shape_id, state.active_edge, state.start, event.pos)

    def _resizing_up(self, state: ResizingShape, event: PointerUp) -> State:
        self.selection = None
        self.selected_shape = state.shape_id
        shape = self._document.shape(state.shape_id)
        if shape is None or event.pos == state.start:
            return Idle()
        resized = shape.drag_edges(state.active_edge, event.pos)
        if resized != shape:
            self._commit(Resize(state.shape_id, resized.top, resized.left, resized.width, resized.height))
        return Idle()

    # -------------------------------------------------------------------------
    # EditingText
    # -------------------------------------------------------------------------

    def _text_key(self, state: EditingText, event: KeyEvent) -> State | None:
        if event.ctrl:
            return None
        if event.key == Key.ENTER:
            self._commit_text(state)
            return Idle()
        if event.key == Key.ESCAPE:
            return self._cancel(state, event)
        if event.key == Key.BACKSPACE:
            return EditingText(state.origin, state.buffer[:-1])
        if event.is_char:
            return EditingText(state.origin, state.buffer + event.char)
        return state

    def _text_pointer_down(self, state: EditingText, event: PointerDown) -> State | None:
        self._commit_text(state)
        return self._idle_pointer_down(Idle(), event)

    # -------------------------------------------------------------------------
    # SelectingRegion
    # -------------------------------------------------------------------------

    def _selecting_move(self, state: SelectingRegion, event: PointerMove | PointerDown) -> SelectingRegion:
        return SelectingRegion(state.anchor, event.pos, state.erase)

    def _selecting_up(self, state: SelectingRegion, event: PointerUp) -> State:
        final = self._selecting_move(state, event)
        if not state.erase:
            self.selection = final.region
            return Idle()

        hit = self._document.hit_test(event.pos) if event.pos == state.anchor else None
        if hit is not None and hit.on_border:
            self._commit(DeleteShape(hit.shape.shape_id))
        else:
            self._commit(EraseRegion(final.anchor, final.current))
        return Idle()

    # -------------------------------------------------------------------------
    # Transition table
    # -------------------------------------------------------------------------

    TRANSITIONS: ClassVar[dict[tuple[type, type], Handler]] = {
        (Idle, PointerDown): _idle_pointer_down,
        (Idle, PointerMove): _ignore,
        (Idle, PointerUp): _ignore,
        (Idle, KeyEvent): _idle_key,
        (Idle, Cancel): _idle_cancel,
        (Idle, Scroll): _ignore,

        (DrawingLine, PointerDown): _line_move,
        (DrawingLine, PointerMove): _line_move,
        (DrawingLine, PointerUp): _line_up,
        (DrawingLine, KeyEvent): _drag_key,
        (DrawingLine, Cancel): _cancel,
        (DrawingLine, Scroll): _ignore,

        (DrawingBox, PointerDown): _box_move,
        (DrawingBox, PointerMove): _box_move,
        (DrawingBox, PointerUp): _box_up,
        (DrawingBox, KeyEvent): _drag_key,
        (DrawingBox, Cancel): _cancel,
        (DrawingBox, Scroll): _ignore,

        (MovingShape, PointerDown): _moving_move,
        (MovingShape, PointerMove): _moving_move,
        (MovingShape, PointerUp): _moving_up,
        (MovingShape, KeyEvent): _drag_key,
        (MovingShape, Cancel): _cancel,
        (MovingShape, Scroll): _ignore,

        (ResizingShape, PointerDown): _resizing_move,
        (ResizingShape, PointerMove): _resizing_move,
        (ResizingShape, PointerUp): _resizing_up,
        (ResizingShape, KeyEvent): _drag_key,
        (ResizingShape, Cancel): _cancel,
        (ResizingShape, Scroll): _ignore,

        (EditingText, PointerDown): _text_pointer_down,
        (EditingText, PointerMove): _absorb,
        (EditingText, PointerUp): _absorb,
        (EditingText, KeyEvent): _text_key,
        (EditingText, Cancel): _cancel,
        (EditingText, Scroll): _ignore,

        (SelectingRegion, PointerDown): _selecting_move,
        (SelectingRegion, PointerMove): _selecting_move,
        (SelectingRegion, PointerUp): _selecting_up,
        (SelectingRegion, KeyEvent): _drag_key,
        (SelectingRegion, Cancel): _cancel,
        (SelectingRegion, Scroll): _ignore,
    }

    def __repr__(self) -> str:
        return f"InteractionStateMachine(state={type(self._state).__name__}, tool={self.tool.value})"

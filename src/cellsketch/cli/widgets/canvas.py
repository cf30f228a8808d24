"""Canvas widget - the visible window onto the diagram."""

from __future__ import annotations

from cellsketch.cli.widgets.base import BaseWidget, Rect
from cellsketch.core.direction import Pos
from cellsketch.edit.session import EditSession
from cellsketch.ports import ViewportSource
from cellsketch.render.terminal import TerminalRenderer


class CanvasWidget(BaseWidget):
    """Draws the session's viewport and maps screen cells to grid cells.

    Implements the Renderer port: the session calls ``redraw()`` after
    every change, which only flags the widget; the app repaints on its
    next loop iteration.
    """

    def __init__(self, session: EditSession) -> None:
        super().__init__()
        self.session = session
        self.needs_redraw = True
        self._renderer = TerminalRenderer(reset_at_end=False)

    def redraw(self, source: ViewportSource) -> None:
        self.needs_redraw = True

    def to_grid(self, row: int, col: int) -> Pos:
        """Grid position under screen cell (row, col)."""
        top, left = self.session.viewport_origin
        return (top + row, left + col)

    def render(self, bounds: Rect) -> list[str]:
        size = (bounds.height, bounds.width)
        self.session.viewport_size = size
        origin = self.session.viewport_origin
        cells = self.session.query_viewport(origin, size)
        return self._renderer.render_lines(cells, origin, size)

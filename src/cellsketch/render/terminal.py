"""Render viewport cells to terminal escape sequences."""

from __future__ import annotations

from typing import Iterable

from cellsketch.core.direction import Pos
from cellsketch.core.document import ViewportCell

# SGR parameters per style hint
STYLE_SGR: dict[str, str] = {
    "edge": "0",
    "text": "1",
    "preview": "36",
    "cursor": "7",
    "selection": "4",
}


class TerminalRenderer:
    """
    Render viewport cells to ANSI escape sequences for terminal display.

    Optimizes output by only emitting SGR codes when the style changes.
    """

    def __init__(self, reset_at_end: bool = True):
        self.reset_at_end = reset_at_end

    def render_lines(
        self,
        cells: Iterable[ViewportCell],
        top_left: Pos,
        size: tuple[int, int],
    ) -> list[str]:
        """Render a (rows, cols) window at `top_left` to one string per row.

        Every returned line covers exactly `cols` terminal columns.
        """
        rows, cols = size
        grid: dict[Pos, ViewportCell] = {}
        for cell in cells:
            grid[(cell.pos[0] - top_left[0], cell.pos[1] - top_left[1])] = cell

        lines: list[str] = []
        for y in range(rows):
            parts: list[str] = []
            last_style = "edge"
            for x in range(cols):
                cell = grid.get((y, x))
                style = cell.style if cell else "edge"
                if style != last_style:
                    parts.append(f"\x1b[0;{STYLE_SGR.get(style, '0')}m")
                    last_style = style
                parts.append(cell.glyph if cell else ' ')

            # Reset at end of each line to prevent style bleeding into clear-to-EOL
            if last_style != "edge":
                parts.append('\x1b[0m')
            lines.append(''.join(parts))
        return lines

    def render(self, cells: Iterable[ViewportCell], top_left: Pos, size: tuple[int, int]) -> str:
        """Render a window to a single ANSI string."""
        result = '\n'.join(self.render_lines(cells, top_left, size))
        if self.reset_at_end:
            result += '\x1b[0m'
        return result

"""Render a diagram to plain text."""

from __future__ import annotations

from cellsketch.core.document import Document
from cellsketch.core.geometry import Region


class TextRenderer:
    """Render a Document (or a region of it) to plain text without any styling."""

    def __init__(self, preserve_whitespace: bool = False, fill_char: str = " "):
        self.preserve_whitespace = preserve_whitespace
        self.fill_char = fill_char

    def render(self, document: Document, region: Region | None = None) -> str:
        """Render `region` (default: the document's bounds) to plain text."""
        region = region or document.bounds
        if region is None:
            return ""

        glyphs = {pos: document.glyph_at(pos) for pos, _ in document.grid.cells_in(region)}
        lines: list[str] = []

        for row in range(region.top, region.bottom + 1):
            line = ''.join(
                glyphs.get((row, col), self.fill_char)
                for col in range(region.left, region.right + 1)
            )
            if not self.preserve_whitespace:
                line = line.rstrip(self.fill_char)
            lines.append(line)

        result = '\n'.join(lines)

        if not self.preserve_whitespace:
            # Remove trailing empty lines
            result = result.rstrip('\n')

        return result

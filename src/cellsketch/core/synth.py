"""ShapeSynthesizer - picks the glyph for the edge directions at a cell.

Glyph choice is a pure function of the accumulated mask, so the same set of
strokes always renders the same way regardless of drawing order.
"""

from __future__ import annotations

from enum import Enum

from cellsketch.core.cell import Cell, Edge, Text
from cellsketch.core.constants import (
    ASCII_ARROWS,
    ASCII_GLYPHS,
    BLANK_GLYPH,
    UNICODE_ARROWS,
    UNICODE_GLYPHS,
)
from cellsketch.core.direction import ALL_DIRECTIONS, Direction


class GlyphSet(Enum):
    """Alphabet used to draw edges."""
    UNICODE = "unicode"
    ASCII = "ascii"


_GLYPHS = {
    GlyphSet.UNICODE: UNICODE_GLYPHS,
    GlyphSet.ASCII: ASCII_GLYPHS,
}

_ARROWS = {
    GlyphSet.UNICODE: UNICODE_ARROWS,
    GlyphSet.ASCII: ASCII_ARROWS,
}

# Reverse lookup for the unicode set, where every glyph is unambiguous
_UNICODE_MASKS: dict[str, Direction] = {
    glyph: mask for mask, glyph in UNICODE_GLYPHS.items() if mask != Direction.NONE
}


class ShapeSynthesizer:
    """Maps edge masks to display glyphs for one glyph set.

    Example:
        synth = ShapeSynthesizer()
        mask, glyph = synth.synthesize(Direction.EAST | Direction.WEST,
                                       Direction.NORTH | Direction.SOUTH)
        # mask == all four directions, glyph == '┼'
    """

    def __init__(self, glyph_set: GlyphSet = GlyphSet.UNICODE) -> None:
        self.glyph_set = glyph_set
        self._table = _GLYPHS[glyph_set]
        self._arrows = _ARROWS[glyph_set]

    def glyph(self, mask: Direction) -> str:
        """Glyph for a mask. The table is total over all 16 masks."""
        return self._table[Direction(mask)]

    def synthesize(self, existing: Direction, incoming: Direction) -> tuple[Direction, str]:
        """Combine incoming directions with an existing mask."""
        mask = Direction(existing | incoming)
        return mask, self.glyph(mask)

    def erase(self, existing: Direction, removed: Direction) -> tuple[Direction, str]:
        """Clear directions from a mask and look the glyph up again."""
        mask = Direction(int(existing) & ~int(removed) & int(ALL_DIRECTIONS))
        return mask, self.glyph(mask)

    def arrow(self, direction: Direction) -> str:
        """Arrow-head glyph pointing in `direction`."""
        return self._arrows[direction]

    def cell_glyph(self, cell: Cell) -> str:
        """Display glyph for any cell variant."""
        if isinstance(cell, Text):
            return cell.char
        if isinstance(cell, Edge):
            return self.glyph(cell.mask)
        return BLANK_GLYPH

    def mask_for(self, glyph: str) -> Direction | None:
        """Edge mask a glyph was drawn from, or None for non-edge glyphs.

        In the ASCII set '-' and '|' read back as straight segments; '+' is
        ambiguous on its own and returns None here (see io.reader).
        """
        if self.glyph_set == GlyphSet.UNICODE:
            return _UNICODE_MASKS.get(glyph)
        if glyph == "-":
            return Direction.EAST | Direction.WEST
        if glyph == "|":
            return Direction.NORTH | Direction.SOUTH
        return None

    def __repr__(self) -> str:
        return f"ShapeSynthesizer(glyph_set={self.glyph_set.value})"


"""Load diagrams from plain text.

Every character of the file becomes one cell. Characters that are edge
glyphs of the document's glyph set are read back as Edge cells, everything
else as Text. A glyph is only read as an edge if synthesizing the recovered
mask gives back the very same character, so the visible grid survives a
save/load round trip unchanged.

Boxes are not stored in the file. When `reconstruct_shapes` is set, closed
rectangles in the edge layer are re-registered as shapes.
"""

from __future__ import annotations

import logging
from pathlib import Path

from cellsketch.core.cell import Cell, Edge, Text
from cellsketch.core.direction import CARDINALS, OPPOSITE, Direction, Pos, offset
from cellsketch.core.document import Document
from cellsketch.core.shape import Shape
from cellsketch.core.synth import GlyphSet, ShapeSynthesizer
from cellsketch.errors import LoadFailure

logger = logging.getLogger(__name__)

# ASCII glyphs that carry a stroke in each direction
_ASCII_CONNECTS = {
    Direction.NORTH: "|+",
    Direction.SOUTH: "|+",
    Direction.EAST: "-+",
    Direction.WEST: "-+",
}


def load(
    path: str | Path,
    glyph_set: GlyphSet = GlyphSet.UNICODE,
    fill_char: str = " ",
    reconstruct_shapes: bool = True,
) -> Document:
    """
    Load a diagram file from disk.

    Raises:
        LoadFailure: If the file cannot be read or is not a text diagram.
    """
    path = Path(path)
    try:
        with open(path, 'r', encoding='utf-8', newline='') as f:
            text = f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise LoadFailure(f"Cannot read {path}: {e}") from e

    document = loads(text, glyph_set, fill_char, reconstruct_shapes)
    logger.info("Loaded %s (%d cells, %d shapes)", path, len(document.grid), len(document.shapes))
    return document


def loads(
    text: str,
    glyph_set: GlyphSet = GlyphSet.UNICODE,
    fill_char: str = " ",
    reconstruct_shapes: bool = True,
) -> Document:
    """Parse a diagram from a string."""
    chars = _parse_chars(text, fill_char)
    synth = ShapeSynthesizer(glyph_set)

    cells: dict[Pos, Cell] = {}
    for pos, ch in chars.items():
        mask = synth.mask_for(ch)
        if mask is None and glyph_set == GlyphSet.ASCII and ch == "+":
            mask = _resolve_plus(pos, chars)
        if mask and synth.glyph(mask) == ch:
            cells[pos] = Edge.from_mask(mask)
        else:
            cells[pos] = Text(ch)

    shapes = find_rectangles(cells) if reconstruct_shapes else []
    if shapes:
        _count_shared_strokes(cells, shapes)
    return Document.from_cells(cells.items(), shapes, glyph_set)


def _parse_chars(text: str, fill_char: str) -> dict[Pos, str]:
    lines = text.replace('\r\n', '\n').replace('\r', '\n').split('\n')
    if lines and lines[-1] == "":
        lines.pop()

    chars: dict[Pos, str] = {}
    for row, line in enumerate(lines):
        for col, ch in enumerate(line.expandtabs(8)):
            if ch == fill_char or ch == " ":
                continue
            if not ch.isprintable():
                raise LoadFailure(
                    f"Unexpected control character {ch!r} at line {row + 1}, column {col + 1}"
                )
            chars[(row, col)] = ch
    return chars


def _resolve_plus(pos: Pos, chars: dict[Pos, str]) -> Direction:
    """Work out which way an ASCII '+' junction connects from its neighbours."""
    mask = Direction.NONE
    for direction in CARDINALS:
        neighbour = chars.get(offset(pos, direction))
        if neighbour is not None and neighbour in _ASCII_CONNECTS[OPPOSITE[direction]]:
            mask |= direction
    return mask


# -----------------------------------------------------------------------------
# Shape reconstruction
# -----------------------------------------------------------------------------

def _has(cells: dict[Pos, Cell], pos: Pos, directions: Direction) -> bool:
    cell = cells.get(pos)
    return isinstance(cell, Edge) and (cell.mask & directions) == directions


def _run(cells: dict[Pos, Cell], start: Pos, direction: Direction, length: int) -> bool:
    """True if every cell strictly between start and start+length connects along `direction`."""
    through = direction | OPPOSITE[direction]
    return all(_has(cells, offset(start, direction, i), through) for i in range(1, length))


def find_rectangles(cells: dict[Pos, Cell]) -> list[Shape]:
    """Find closed boxes in the edge layer.

    Each top-left corner yields at most one box: the narrowest, then
    shortest, rectangle whose four sides are unbroken. Identifiers are
    assigned in row-major order of the top-left corners.
    """
    east_south = Direction.EAST | Direction.SOUTH
    shapes: list[Shape] = []

    for top_left in sorted(pos for pos in cells if _has(cells, pos, east_south)):
        shape = _rectangle_from(cells, top_left)
        if shape is not None:
            shapes.append(Shape(f"box-{len(shapes) + 1}", shape[0], shape[1], shape[2], shape[3]))
    return shapes


def _rectangle_from(cells: dict[Pos, Cell], top_left: Pos) -> tuple[int, int, int, int] | None:
    top, left = top_left
    horizontal = Direction.EAST | Direction.WEST
    vertical = Direction.NORTH | Direction.SOUTH

    width = 1
    while _has(cells, (top, left + width), Direction.WEST):
        if _has(cells, (top, left + width), Direction.SOUTH):
            height = 1
            while _has(cells, (top + height, left), Direction.NORTH):
                if (
                    _has(cells, (top + height, left), Direction.EAST)
                    and _has(cells, (top + height, left + width), Direction.NORTH | Direction.WEST)
                    and _run(cells, (top, left + width), Direction.SOUTH, height)
                    and _run(cells, (top + height, left), Direction.EAST, width)
                ):
                    return top, left, width, height
                if not _has(cells, (top + height, left), vertical):
                    break
                height += 1
        if not _has(cells, (top, left + width), horizontal):
            break
        width += 1
    return None


def _count_shared_strokes(cells: dict[Pos, Cell], shapes: list[Shape]) -> None:
    """Give each border direction one stroke per box drawn through it.

    Two boxes sharing a side then keep that side when one of them is moved.
    """
    contributions: dict[Pos, list[int]] = {}
    order = (Direction.NORTH, Direction.SOUTH, Direction.EAST, Direction.WEST)
    for shape in shapes:
        for pos, directions in shape.border().items():
            counts = contributions.setdefault(pos, [0, 0, 0, 0])
            for i, direction in enumerate(order):
                if directions & direction:
                    counts[i] += 1

    for pos, counts in contributions.items():
        cell = cells[pos]
        if not isinstance(cell, Edge):
            continue
        n, s, e, w = counts
        cells[pos] = Edge(
            north=max(cell.north, n),
            south=max(cell.south, s),
            east=max(cell.east, e),
            west=max(cell.west, w),
        )

"""Glyph tables for line and box drawing."""

from cellsketch.core.direction import Direction

N = Direction.NORTH
S = Direction.SOUTH
E = Direction.EAST
W = Direction.WEST

BLANK_GLYPH = " "

# Every 4-bit mask maps to exactly one glyph.
UNICODE_GLYPHS: dict[Direction, str] = {
    Direction.NONE: BLANK_GLYPH,
    # Stubs
    N: "╵",
    S: "╷",
    E: "╶",
    W: "╴",
    # Straight segments
    N | S: "│",
    E | W: "─",
    # Corners
    S | E: "┌",
    S | W: "┐",
    N | E: "└",
    N | W: "┘",
    # T-junctions
    N | S | E: "├",
    N | S | W: "┤",
    S | E | W: "┬",
    N | E | W: "┴",
    # Cross
    N | S | E | W: "┼",
}

ASCII_GLYPHS: dict[Direction, str] = {
    Direction.NONE: BLANK_GLYPH,
    N: "|",
    S: "|",
    E: "-",
    W: "-",
    N | S: "|",
    E | W: "-",
    S | E: "+",
    S | W: "+",
    N | E: "+",
    N | W: "+",
    N | S | E: "+",
    N | S | W: "+",
    S | E | W: "+",
    N | E | W: "+",
    N | S | E | W: "+",
}

# Arrow heads keyed by the direction the arrow points
UNICODE_ARROWS: dict[Direction, str] = {
    N: "▲",
    S: "▼",
    E: "▶",
    W: "◀",
}

ASCII_ARROWS: dict[Direction, str] = {
    N: "^",
    S: "v",
    E: ">",
    W: "<",
}

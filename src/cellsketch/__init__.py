"""
cellsketch: text-character diagram editor

Draw boxes, lines and text on an unbounded character grid, with exact
undo/redo and plain-text files.

Quick Start:
    >>> import cellsketch
    >>> from cellsketch.edit import CommandHistory, DrawLine
    >>> doc = cellsketch.Document()
    >>> history = CommandHistory(doc)
    >>> change = history.execute(DrawLine((2, 5), (8, 5)))
    >>> change = history.execute(DrawLine((5, 2), (5, 8)))
    >>> doc.glyph_at((5, 5))
    '┼'
    >>> cellsketch.save(doc, "diagram.txt")

Features:
    - Sparse, unbounded grid of blank, edge and text cells
    - Junction glyphs synthesized from the strokes through each cell
    - Boxes that can be moved and resized without breaking shared lines
    - Linear undo/redo over exact per-command diffs
    - Unicode box-drawing or plain ASCII glyphs
    - Plain-text load/save with box reconstruction
    - Interactive terminal editor with mouse support
"""

__version__ = "0.1.0"

# Core types
from cellsketch.core.cell import BLANK, Blank, Cell, Edge, Text
from cellsketch.core.direction import Direction
from cellsketch.core.document import Document
from cellsketch.core.grid import CellGrid
from cellsketch.core.shape import Shape
from cellsketch.core.synth import GlyphSet, ShapeSynthesizer

# Settings and errors
from cellsketch.config import EditorSettings, Tool
from cellsketch.errors import (
    CellsketchError,
    ClipboardUnavailable,
    InvalidGeometry,
    LoadFailure,
    SaveFailure,
)

# Convenience functions
from cellsketch.io.reader import load, loads
from cellsketch.io.writer import dumps, save

# Editing
from cellsketch.edit.session import EditSession

__all__ = [
    # Version
    "__version__",
    # Core types
    "BLANK",
    "Blank",
    "Cell",
    "CellGrid",
    "Direction",
    "Document",
    "Edge",
    "GlyphSet",
    "Shape",
    "ShapeSynthesizer",
    "Text",
    # Settings and errors
    "CellsketchError",
    "ClipboardUnavailable",
    "EditorSettings",
    "InvalidGeometry",
    "LoadFailure",
    "SaveFailure",
    "Tool",
    # I/O
    "dumps",
    "load",
    "loads",
    "save",
    # Editing
    "EditSession",
]

"""Core data structures for the diagram canvas."""

from cellsketch.core.cell import BLANK, Blank, Cell, Edge, Text
from cellsketch.core.direction import Axis, Direction, Pos
from cellsketch.core.document import Document, HitResult, ViewportCell
from cellsketch.core.geometry import Region
from cellsketch.core.grid import CellGrid
from cellsketch.core.shape import Shape
from cellsketch.core.synth import GlyphSet, ShapeSynthesizer

__all__ = [
    "BLANK",
    "Blank",
    "Cell",
    "Edge",
    "Text",
    "Axis",
    "Direction",
    "Pos",
    "Document",
    "HitResult",
    "ViewportCell",
    "Region",
    "CellGrid",
    "Shape",
    "GlyphSet",
    "ShapeSynthesizer",
]

"""File I/O for text diagrams."""

from cellsketch.io.reader import find_rectangles, load, loads
from cellsketch.io.writer import dumps, save

__all__ = ["dumps", "find_rectangles", "load", "loads", "save"]

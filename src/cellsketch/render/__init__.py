"""Renderers for diagrams."""

from cellsketch.render.terminal import TerminalRenderer
from cellsketch.render.text import TextRenderer

__all__ = ["TerminalRenderer", "TextRenderer"]

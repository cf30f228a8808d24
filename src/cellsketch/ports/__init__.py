"""Outward-facing interfaces: display and clipboard.

The core never draws and never touches the host clipboard itself; it calls
through these protocols. The CLI supplies terminal implementations, tests
supply in-memory ones.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from cellsketch.core.direction import Pos
from cellsketch.core.document import ViewportCell
from cellsketch.ports.clipboard import MemoryClipboard, SystemClipboard


@runtime_checkable
class ViewportSource(Protocol):
    """Anything that can list the visible cells of a window."""

    def query_viewport(self, top_left: Pos, size: tuple[int, int]) -> list[ViewportCell]:
        ...


@runtime_checkable
class Renderer(Protocol):
    """Display surface asked to redraw after each change."""

    def redraw(self, source: ViewportSource) -> None:
        ...


@runtime_checkable
class Clipboard(Protocol):
    """Exchanges plain text blocks with the host."""

    def copy(self, text: str) -> None:
        ...

    def paste(self) -> str:
        ...


__all__ = [
    "Clipboard",
    "MemoryClipboard",
    "Renderer",
    "SystemClipboard",
    "ViewportSource",
]

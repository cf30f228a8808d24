"""Editing: commands and undo/redo history.

The edit session lives in :mod:`cellsketch.edit.session`.
"""

from cellsketch.edit.commands import (
    Change,
    CellChange,
    Command,
    Delete,
    DeleteShape,
    DrawBox,
    DrawLine,
    EraseLine,
    EraseRegion,
    InsertText,
    Move,
    Resize,
    ShapeChange,
)
from cellsketch.edit.history import CommandHistory, HistoryEntry

__all__ = [
    "CellChange",
    "Change",
    "Command",
    "CommandHistory",
    "Delete",
    "DeleteShape",
    "DrawBox",
    "DrawLine",
    "EraseLine",
    "EraseRegion",
    "HistoryEntry",
    "InsertText",
    "Move",
    "Resize",
    "ShapeChange",
]

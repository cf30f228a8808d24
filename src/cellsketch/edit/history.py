"""CommandHistory - the single path through which a Document changes."""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from typing import Callable

from cellsketch.core.document import Document
from cellsketch.edit.commands import Change, Command

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HistoryEntry:
    """A command together with the diff it produced when executed."""
    command: Command
    change: Change


class CommandHistory:
    """Linear undo/redo over precomputed forward diffs.

    ``execute()`` computes a command's Change against the current document,
    applies it and pushes it onto the undo stack, discarding anything that
    could have been redone. ``undo()`` applies the inverted change; ``redo()``
    re-applies the stored forward change. Only diffs are stored, never
    snapshots of the grid.

    With `max_history` set, the oldest undo entry is dropped silently once
    the stack is full.
    """

    def __init__(self, document: Document, max_history: int | None = None) -> None:
        if max_history is not None and max_history < 1:
            raise ValueError(f"max_history must be positive, got {max_history}")
        self._document = document
        self._max_history = max_history
        self._undo: deque[HistoryEntry] = deque(maxlen=max_history)
        self._redo: list[HistoryEntry] = []
        self._on_change: Callable[[Change], None] | None = None

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def document(self) -> Document:
        return self._document

    @property
    def max_history(self) -> int | None:
        return self._max_history

    @property
    def can_undo(self) -> bool:
        return bool(self._undo)

    @property
    def can_redo(self) -> bool:
        return bool(self._redo)

    @property
    def undo_depth(self) -> int:
        return len(self._undo)

    @property
    def redo_depth(self) -> int:
        return len(self._redo)

    def undo_commands(self) -> list[Command]:
        """Commands on the undo stack, oldest first."""
        return [entry.command for entry in self._undo]

    def redo_commands(self) -> list[Command]:
        """Commands on the redo stack, next-to-redo last."""
        return [entry.command for entry in self._redo]

    def on_change(self, callback: Callable[[Change], None] | None) -> None:
        """Register callback run after every applied change."""
        self._on_change = callback

    # -------------------------------------------------------------------------
    # Operations
    # -------------------------------------------------------------------------

    def execute(self, command: Command) -> Change:
        """Apply `command` and record it.

        Raises:
            InvalidGeometry: If the command cannot apply; nothing changes.

        Returns:
            The change that was applied. An empty change is not recorded,
            but still ends the redo chain.
        """
        change = command.compute(self._document)
        if change.is_empty:
            logger.debug("Skipping %s: no effect", command)
            self._redo.clear()
            return change

        self._apply(change)
        self._undo.append(HistoryEntry(command, change))
        self._redo.clear()
        logger.debug("Executed %s (%d cells)", command, len(change.cells))
        return change

    def undo(self) -> Change | None:
        """Revert the most recent command. Returns None if there is none."""
        if not self._undo:
            return None
        entry = self._undo.pop()
        change = entry.change.inverted()
        self._apply(change)
        self._redo.append(entry)
        logger.debug("Undid %s", entry.command)
        return change

    def redo(self) -> Change | None:
        """Re-apply the most recently undone command. Returns None if there is none."""
        if not self._redo:
            return None
        entry = self._redo.pop()
        self._apply(entry.change)
        self._undo.append(entry)
        logger.debug("Redid %s", entry.command)
        return entry.change

    def reset(self, document: Document | None = None) -> None:
        """Clear both stacks, optionally switching to another document."""
        if document is not None:
            self._document = document
        self._undo.clear()
        self._redo.clear()

    def _apply(self, change: Change) -> None:
        self._document.apply(change)
        if self._on_change:
            self._on_change(change)

    def __repr__(self) -> str:
        return f"CommandHistory(undo={len(self._undo)}, redo={len(self._redo)})"

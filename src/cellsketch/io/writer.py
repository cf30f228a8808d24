"""Save diagrams as plain text."""

from __future__ import annotations

import logging
from pathlib import Path

from cellsketch.core.cell import Text
from cellsketch.core.document import Document
from cellsketch.core.geometry import Region
from cellsketch.errors import SaveFailure
from cellsketch.render.text import TextRenderer

logger = logging.getLogger(__name__)


def dumps(document: Document, fill_char: str = " ") -> str:
    """
    Serialize a document to a rectangular block of text.

    Rows 0 through the last used row and columns 0 through the last used
    column are written; content at negative coordinates shifts the block so
    nothing is lost. Each row is padded to the same width with `fill_char`.

    Raises:
        SaveFailure: If a text cell holds `fill_char`, which would read back
            as blank.
    """
    bounds = document.bounds
    if bounds is None:
        return ""
    for (row, col), cell in document.grid.cells():
        if isinstance(cell, Text) and cell.char == fill_char:
            raise SaveFailure(
                f"Text {fill_char!r} at row {row}, column {col} matches the fill character"
            )
    region = Region(min(0, bounds.top), min(0, bounds.left), bounds.bottom, bounds.right)
    text = TextRenderer(preserve_whitespace=True, fill_char=fill_char).render(document, region)
    return text + '\n'


def save(document: Document, path: str | Path, fill_char: str = " ") -> None:
    """
    Save a document to disk as UTF-8 text.

    Raises:
        SaveFailure: If the file cannot be written.
    """
    path = Path(path)
    content = dumps(document, fill_char)
    try:
        with open(path, 'w', encoding='utf-8', newline='\n') as f:
            f.write(content)
    except OSError as e:
        raise SaveFailure(f"Cannot write {path}: {e}") from e
    logger.info("Saved %s (%d cells)", path, len(document.grid))

"""Clipboard adapters."""

from __future__ import annotations

import logging

import pyperclip

from cellsketch.errors import ClipboardUnavailable

logger = logging.getLogger(__name__)


class SystemClipboard:
    """Host clipboard through pyperclip."""

    def copy(self, text: str) -> None:
        try:
            pyperclip.copy(text)
        except pyperclip.PyperclipException as e:
            logger.warning("Clipboard copy failed: %s", e)
            raise ClipboardUnavailable(str(e)) from e

    def paste(self) -> str:
        try:
            return pyperclip.paste()
        except pyperclip.PyperclipException as e:
            logger.warning("Clipboard paste failed: %s", e)
            raise ClipboardUnavailable(str(e)) from e


class MemoryClipboard:
    """Process-local clipboard, for tests and headless sessions."""

    def __init__(self, text: str = "") -> None:
        self.text = text

    def copy(self, text: str) -> None:
        self.text = text

    def paste(self) -> str:
        return self.text

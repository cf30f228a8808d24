"""Status bar widget: document name, tool, messages and shortcut hints."""

from __future__ import annotations

from cellsketch.cli.core.ansi_text import fit, visible_len
from cellsketch.cli.widgets.base import BaseWidget, Rect


class StatusBarWidget(BaseWidget):
    """Bottom mode line.

    Left: document name (highlighted while there are unsaved changes) and
    any message. Right: shortcut hints, then the active tool.
    """

    def __init__(self) -> None:
        super().__init__()
        self.name = ""
        self.dirty = False
        self.tool = ""
        self.message: str | None = None
        self.shortcuts: list[tuple[str, str]] = []

    def render(self, bounds: Rect) -> list[str]:
        """Render the status bar, fitting within bounds.width."""
        width = bounds.width
        name_style = "\x1b[1;30;103m" if self.dirty else "\x1b[100;97m"
        left = f"{name_style} {self.name}{' [+]' if self.dirty else ''} \x1b[100;97m"
        if self.message:
            left += f"  {self.message}"

        tool = f"\x1b[1;30;106m {self.tool} \x1b[0m"
        hints = ""
        for key, label in self.shortcuts:
            part = f"\x1b[7m {key} \x1b[0;100;36m{label} "
            if visible_len(left) + visible_len(hints + part) + visible_len(tool) + 2 > width:
                break
            hints += part

        right = hints + tool
        left_width = max(0, width - visible_len(right))
        line = f"\x1b[100;97m{fit(left, left_width)}\x1b[100m{right}\x1b[0m"
        return [line]

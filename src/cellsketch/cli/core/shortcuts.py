"""Keyboard shortcut registry for the diagram editor.

Shortcuts are defined once with keys, labels, descriptions and handler
names, and used both for dispatch and for the help overlay.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from cellsketch.interact.events import Key, KeyEvent


@dataclass
class ShortcutDef:
    """Definition of a keyboard shortcut.

    Attributes:
        id: Unique identifier for the shortcut
        keys: Keys/chars that trigger this shortcut
        label: Short label for status bar (empty to hide it there)
        description: Longer description for help menu
        handler: Name of the handler method to call
        category: Category for grouping in help menu
        ctrl: Whether character keys must be pressed with Ctrl
    """
    id: str
    keys: list[str | Key]
    label: str
    description: str
    handler: str
    category: str = "General"
    ctrl: bool = False

    def matches(self, event: KeyEvent) -> bool:
        """Check if a key event matches this shortcut."""
        for key in self.keys:
            if isinstance(key, Key):
                if event.key == key:
                    return True
            elif event.char == key and event.ctrl == self.ctrl:
                return True
        return False

    @property
    def key_display(self) -> str:
        """Get display string for the keys."""
        displays = []
        for key in self.keys:
            if isinstance(key, Key):
                displays.append(_KEY_DISPLAY.get(key, key.name.title()))
            elif self.ctrl:
                displays.append(f"^{key.upper()}")
            else:
                displays.append(key)
        return "/".join(displays)


_KEY_DISPLAY = {
    Key.UP: "↑",
    Key.DOWN: "↓",
    Key.LEFT: "←",
    Key.RIGHT: "→",
    Key.ESCAPE: "Esc",
    Key.DELETE: "Del",
    Key.PAGE_UP: "PgUp",
    Key.PAGE_DOWN: "PgDn",
    Key.F1: "F1",
}


class ShortcutRegistry:
    """Registry of all keyboard shortcuts.

    Example:
        registry = create_default_shortcuts()
        shortcut = registry.match(event)
        if shortcut:
            getattr(app, shortcut.handler)()
    """

    def __init__(self) -> None:
        self._shortcuts: dict[str, ShortcutDef] = {}

    def register_many(self, shortcuts: list[ShortcutDef]) -> None:
        for shortcut in shortcuts:
            self._shortcuts[shortcut.id] = shortcut

    def get(self, shortcut_id: str) -> Optional[ShortcutDef]:
        return self._shortcuts.get(shortcut_id)

    def match(self, event: KeyEvent) -> Optional[ShortcutDef]:
        """Find the shortcut matching the event, if any."""
        for shortcut in self._shortcuts.values():
            if shortcut.matches(event):
                return shortcut
        return None

    def status_hints(self, max_hints: int = 8) -> list[tuple[str, str]]:
        """(key_display, label) pairs for the status bar."""
        hints = [(s.key_display, s.label) for s in self._shortcuts.values() if s.label]
        return hints[:max_hints]

    def help_lines(self) -> list[str]:
        """Shortcut descriptions grouped by category."""
        by_category: dict[str, list[ShortcutDef]] = {}
        for shortcut in self._shortcuts.values():
            by_category.setdefault(shortcut.category, []).append(shortcut)

        lines: list[str] = []
        for category, shortcuts in by_category.items():
            lines.append(f"  {category.upper()}")
            for shortcut in shortcuts:
                lines.append(f"    {shortcut.key_display:<16}{shortcut.description}")
            lines.append("")
        return lines[:-1]


def create_default_shortcuts() -> ShortcutRegistry:
    """Create the editor's shortcut registry."""
    registry = ShortcutRegistry()

    registry.register_many([
        ShortcutDef("tool_box", ["b"], "Box", "Draw boxes", "use_box", "Tools"),
        ShortcutDef("tool_line", ["l"], "Line", "Draw lines", "use_line", "Tools"),
        ShortcutDef("tool_arrow", ["a"], "Arrow", "Draw arrows", "use_arrow", "Tools"),
        ShortcutDef("tool_text", ["t"], "Text", "Type text", "use_text", "Tools"),
        ShortcutDef("tool_erase", ["e"], "Erase", "Erase regions", "use_erase", "Tools"),
        ShortcutDef("tool_select", ["s"], "Select", "Select regions", "use_select", "Tools"),
    ])

    registry.register_many([
        ShortcutDef("undo", ["z"], "Undo", "Undo", "undo", "Edit", ctrl=True),
        ShortcutDef("redo", ["y"], "", "Redo", "redo", "Edit", ctrl=True),
        ShortcutDef("copy", ["c"], "", "Copy selection", "copy", "Edit", ctrl=True),
        ShortcutDef("paste", ["v"], "", "Paste at selection", "paste", "Edit", ctrl=True),
        ShortcutDef("delete", [Key.DELETE], "", "Delete selection", "delete", "Edit"),
    ])

    registry.register_many([
        ShortcutDef("scroll_up", [Key.UP], "", "Scroll up", "scroll_up", "View"),
        ShortcutDef("scroll_down", [Key.DOWN], "", "Scroll down", "scroll_down", "View"),
        ShortcutDef("scroll_left", [Key.LEFT], "", "Scroll left", "scroll_left", "View"),
        ShortcutDef("scroll_right", [Key.RIGHT], "", "Scroll right", "scroll_right", "View"),
        ShortcutDef("help", ["?", Key.F1], "Help", "Toggle help", "toggle_help", "View"),
    ])

    registry.register_many([
        ShortcutDef("save", ["s"], "Save", "Save", "save", "File", ctrl=True),
        ShortcutDef("new", ["n"], "", "New diagram", "new", "File", ctrl=True),
        ShortcutDef("quit", ["q"], "Quit", "Quit", "quit", "File", ctrl=True),
    ])

    return registry

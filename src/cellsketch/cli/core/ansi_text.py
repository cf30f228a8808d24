"""ANSI text utilities - measuring and fitting strings with escape codes."""

from __future__ import annotations

import re

# Pattern to match CSI escape sequences
_ANSI_ESCAPE = re.compile(r'\x1b\[[0-9;?<]*[A-Za-z~]')


def visible_len(s: str) -> int:
    """Get visible length of string (excluding ANSI escape codes)."""
    return len(_ANSI_ESCAPE.sub('', s))


def fit(s: str, width: int) -> str:
    """
    Truncate or pad an ANSI-escaped string to exactly `width` columns.

    Escape codes are kept; only visible characters are counted. A reset is
    appended when the string was cut, so styles don't bleed.
    """
    if width <= 0:
        return ""

    parts: list[str] = []
    used = 0
    pos = 0
    while pos < len(s) and used < width:
        match = _ANSI_ESCAPE.match(s, pos)
        if match:
            parts.append(match.group())
            pos = match.end()
            continue
        parts.append(s[pos])
        used += 1
        pos += 1

    if pos < len(s):
        parts.append('\x1b[0m')
    elif used < width:
        parts.append(' ' * (width - used))
    return ''.join(parts)

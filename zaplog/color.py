"""ANSI foreground colours for terminal output."""

from __future__ import annotations

import enum


class Color(enum.IntEnum):
    """An ANSI foreground colour code."""

    BLACK = 30
    RED = 31
    GREEN = 32
    YELLOW = 33
    BLUE = 34
    MAGENTA = 35
    CYAN = 36
    WHITE = 37

    def add(self, text: str) -> str:
        """Wrap ``text`` in this colour's escape sequence."""
        return f"\x1b[{int(self)}m{text}\x1b[0m"
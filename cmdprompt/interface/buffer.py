#!/usr/bin/env python3
# cmdprompt/interface/buffer.py
from __future__ import annotations


class CommandBuffer:
    """Text of the command being typed plus a cursor offset (0 <= cursor <= len)."""

    def __init__(self) -> None:
        self._text = ""
        self._cursor = 0

    @property
    def text(self) -> str:
        return self._text

    @property
    def cursor(self) -> int:
        return self._cursor

    def __len__(self) -> int:
        return len(self._text)

    def __str__(self) -> str:
        return self._text

    def insert(self, index: int, ch: str) -> None:
        """Insert at `index` (clamped to the text) and leave the cursor after it."""
        index = max(0, min(index, len(self._text)))
        self._text = self._text[:index] + ch + self._text[index:]
        self._cursor = index + len(ch)

    def append(self, ch: str) -> None:
        self.insert(len(self._text), ch)

    def remove_last(self) -> bool:
        """Drop the last character, wherever the cursor is. False when empty."""
        if not self._text:
            return False
        self._text = self._text[:-1]
        self._cursor = min(self._cursor, len(self._text))
        return True

    def move_to(self, offset: int) -> None:
        """Place the cursor, clamped to [0, len]."""
        self._cursor = max(0, min(offset, len(self._text)))

    def set_text(self, text: str) -> None:
        """Replace buffer content and move cursor to end."""
        self._text = text
        self._cursor = len(text)

    def clear(self) -> str:
        """Clear the buffer and return the previous content."""
        text = self._text
        self._text = ""
        self._cursor = 0
        return text

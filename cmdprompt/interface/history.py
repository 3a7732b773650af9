#!/usr/bin/env python3
# cmdprompt/interface/history.py
from __future__ import annotations

from typing import Iterator, Optional


class CommandHistory:
    """
    Committed commands, oldest first, with up/down browsing.

    `index` is None while not browsing; otherwise it points at the entry the
    edit buffer currently mirrors.
    """

    def __init__(self) -> None:
        self._entries: list[str] = []
        self._index: Optional[int] = None

    @property
    def index(self) -> Optional[int]:
        return self._index

    @property
    def browsing(self) -> bool:
        return self._index is not None

    @property
    def entries(self) -> tuple[str, ...]:
        return tuple(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __getitem__(self, idx: int) -> str:
        return self._entries[idx]

    def add(self, cmd: str) -> bool:
        """Add a command. Skip blank ones and a repeat of the last entry."""
        if not cmd.strip():
            return False
        if self._entries and self._entries[-1] == cmd:
            return False
        self._entries.append(cmd)
        return True

    def reset(self) -> None:
        """Stop browsing."""
        self._index = None

    def older(self) -> Optional[str]:
        """
        Step towards the oldest entry (clamped at 0). Starts browsing at the
        newest entry. Returns None when there is nothing to show.
        """
        if self._index is None:
            if not self._entries:
                return None
            self._index = len(self._entries) - 1
        elif self._index > 0:
            self._index -= 1
        return self._entries[self._index]

    def newer(self) -> Optional[str]:
        """
        Step towards the newest entry (clamped at the last one). Returns None
        when not browsing.
        """
        if self._index is None:
            return None
        if self._index < len(self._entries) - 1:
            self._index += 1
        return self._entries[self._index]

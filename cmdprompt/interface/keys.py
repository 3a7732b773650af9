#!/usr/bin/env python3
# cmdprompt/interface/keys.py
from __future__ import annotations

"""
Key events as seen by the line editor.

A terminal adapter turns whatever its backend produces into `KeyEvent`s:
one printable character, or one control key.
"""

import unicodedata
from dataclasses import dataclass
from enum import Enum


class Key(Enum):
    CHAR = "char"
    ENTER = "enter"
    BACKSPACE = "backspace"
    LEFT = "left"
    RIGHT = "right"
    UP = "up"
    DOWN = "down"
    ESCAPE = "escape"
    OTHER = "other"


def is_printable(ch: str) -> bool:
    """A single character outside the Unicode control category."""
    return len(ch) == 1 and unicodedata.category(ch) != "Cc"


@dataclass(frozen=True, slots=True)
class KeyEvent:
    char: str = ""
    key: Key = Key.CHAR
    is_control: bool = False

    @classmethod
    def printable(cls, ch: str) -> "KeyEvent":
        if not is_printable(ch):
            raise ValueError(f"Not a printable character: {ch!r}")
        return cls(char=ch, key=Key.CHAR, is_control=False)

    @classmethod
    def control(cls, key: Key, char: str = "") -> "KeyEvent":
        if key is Key.CHAR:
            raise ValueError("Key.CHAR is not a control key")
        return cls(char=char, key=key, is_control=True)

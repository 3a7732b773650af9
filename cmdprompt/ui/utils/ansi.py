#!/usr/bin/env python3
# cmdprompt/ui/utils/ansi.py
from __future__ import annotations

import os
import re
from typing import Optional

# ---- SGR table --------------------------------------------------------------

_ESC = "\x1b["

# Order matters: offset from 30 (normal) / 90 (bright)
_COLOR_NAMES = ("black", "red", "green", "yellow", "blue", "magenta", "cyan", "white")

_STYLES = {"reset": 0, "bold": 1, "dim": 2, "underline": 4}


def _build_table() -> dict[str, str]:
    table = {name: f"{_ESC}{code}m" for name, code in _STYLES.items()}
    for offset, name in enumerate(_COLOR_NAMES):
        table[name] = f"{_ESC}{30 + offset}m"
        table[f"bright_{name}"] = f"{_ESC}{90 + offset}m"
    return table


ANSI = _build_table()

# Names accepted as a prompt color
FOREGROUND_COLORS: frozenset[str] = frozenset(ANSI) - frozenset(_STYLES)

ANSI_REGEX = re.compile(r"\x1b\[[0-9;]*[A-Za-z]")
_HEX_COLOR = re.compile(r"#[0-9A-Fa-f]{6}")

_vt_ok: Optional[bool] = None


def strip_ansi(text: str) -> str:
    return ANSI_REGEX.sub("", text)


def _windows_console_speaks_vt() -> bool:
    env = os.environ
    if env.get("WT_SESSION") or env.get("ANSICON"):
        return True
    if env.get("ConEmuANSI") == "ON":
        return True
    return env.get("TERM", "").startswith(("xterm", "vt100"))


def enable_windows_vt() -> bool:
    """
    Whether escape sequences can be written to this console.

    POSIX terminals always qualify. On Windows only hosts that announce VT
    support through the environment do; the answer is computed once.
    """
    global _vt_ok
    if _vt_ok is None:
        _vt_ok = os.name != "nt" or _windows_console_speaks_vt()
    return _vt_ok


def clear_screen() -> None:
    """Shell-level screen clear, for when no terminal adapter is bound."""
    os.system("cls" if os.name == "nt" else "clear")


def is_color(value: str) -> bool:
    """True for a foreground name from ANSI ('cyan', 'bright_red') or '#RRGGBB'."""
    return value in FOREGROUND_COLORS or _HEX_COLOR.fullmatch(value) is not None


def colorize(text: str, *styles: str) -> str:
    """
    Wrap `text` in the given ANSI styles, resetting afterwards.
    Unknown style names are ignored; no known style means plain text.
    """
    prefix = "".join(ANSI.get(style, "") for style in styles)
    if not prefix:
        return text
    return prefix + text + ANSI["reset"]

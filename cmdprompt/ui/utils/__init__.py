#!/usr/bin/env python3
# cmdprompt/ui/utils/__init__.py
from __future__ import annotations
from .ansi import (
    ANSI,
    FOREGROUND_COLORS,
    strip_ansi,
    enable_windows_vt,
    clear_screen,
    colorize,
    is_color,
)
from .console import print_line

__all__ = [
    "ANSI",
    "FOREGROUND_COLORS",
    "strip_ansi",
    "enable_windows_vt",
    "clear_screen",
    "colorize",
    "is_color",
    "print_line",
]

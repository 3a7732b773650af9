#!/usr/bin/env python3
# cmdprompt/ui/__init__.py
from __future__ import annotations
# Re-export convenient top-level API
from .utils import (
    ANSI,
    FOREGROUND_COLORS,
    strip_ansi,
    enable_windows_vt,
    clear_screen,
    colorize,
    is_color,
    print_line,
)
from .static import (
    format_table,
    print_table,
    init_logger,
    ColorizingStreamHandler,
    PlainFormatter,
)

__all__ = [
    "ANSI",
    "FOREGROUND_COLORS",
    "strip_ansi",
    "enable_windows_vt",
    "clear_screen",
    "colorize",
    "is_color",
    "print_line",
    "format_table",
    "print_table",
    "init_logger",
    "ColorizingStreamHandler",
    "PlainFormatter",
]

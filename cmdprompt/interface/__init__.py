#!/usr/bin/env python3
# cmdprompt/interface/__init__.py
from __future__ import annotations

"""
Package for the interactive console: line editing and command dispatch.

Provides:
- Key events and terminal adapters (prompt_toolkit backed).
- The edit buffer and command history.
- The line editor driving the read-eval-print loop.
- Parser utilities for normalizing commands and extracting arguments.
- The command router and the default command handler.
"""


# Keys and terminals FIRST (editor and handler depend on them)
from .keys import Key, KeyEvent, is_printable
from .terminal import (
    BaseTerminal,
    PromptToolkitTerminal,
    make_terminal,
    to_prompt_toolkit_color,
    translate_key_press,
)

# Parser utilities
from .parser import (
    NOT_RECOGNISED,
    tokenize,
    parse_arguments,
    resolve_command,
    normalize_command,
    wants_help,
    extract_param,
    extract_int,
    extract_float,
    extract_bool,
    normalise_bool_str,
)

# Routing / handlers
from .router import CommandRouter
from .handler import CommandHandler, DefaultCommandHandler

# Editing
from .buffer import CommandBuffer
from .history import CommandHistory
from .editor import LineEditor, DEFAULT_PROMPT

__all__ = [
    # keys / terminal
    "Key",
    "KeyEvent",
    "is_printable",
    "BaseTerminal",
    "PromptToolkitTerminal",
    "make_terminal",
    "to_prompt_toolkit_color",
    "translate_key_press",
    # parser
    "NOT_RECOGNISED",
    "tokenize",
    "parse_arguments",
    "resolve_command",
    "normalize_command",
    "wants_help",
    "extract_param",
    "extract_int",
    "extract_float",
    "extract_bool",
    "normalise_bool_str",
    # routing
    "CommandRouter",
    "CommandHandler",
    "DefaultCommandHandler",
    # editing
    "CommandBuffer",
    "CommandHistory",
    "LineEditor",
    "DEFAULT_PROMPT",
]

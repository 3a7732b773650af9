#!/usr/bin/env python3
# cmdprompt/commands/__init__.py
from __future__ import annotations

"""
Package for command management and registration.

Provides:
- Data structures and protocols (`Command`, `OperationKind`, `CommandCallback`).
- Per-handler registry with a decorator (`CommandRegistry`).
- Plain alias map helpers (`add_aliases`, `merge_aliases`, `aliases_for`).

This package re-exports public APIs from:
- command_types.py
- commands.py
"""


# Re-export from submodules
from .command_types import Command, CommandCallback, OperationKind
from .commands import (
    AliasMap,
    CommandRegistry,
    add_aliases,
    aliases_for,
    merge_aliases,
    normalize_alias_map,
    normalize_command_name,
)

__all__ = [
    "Command",
    "CommandCallback",
    "OperationKind",
    "AliasMap",
    "CommandRegistry",
    "add_aliases",
    "aliases_for",
    "merge_aliases",
    "normalize_alias_map",
    "normalize_command_name",
]

#!/usr/bin/env python3
# cmdprompt/boot/__init__.py
from __future__ import annotations
"""
Boot sequence package.

Exports:
- boot_sequence: Orchestrated startup pipeline with [  OK  ] / [FAILED] lines.
- BootState: Dataclass containing config, logger, terminal, handler and editor.
"""


from .boot import BootState, boot_sequence, default_handler_factory

__all__ = ["boot_sequence", "BootState", "default_handler_factory"]

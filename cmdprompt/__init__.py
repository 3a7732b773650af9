#!/usr/bin/env python3
# cmdprompt/__init__.py
from __future__ import annotations
"""
Interactive command prompt: a raw-keystroke line editor in front of a
pluggable, alias-aware command router.

Subpackages expose their own APIs:
- cmdprompt.commands   command records and registry
- cmdprompt.interface  terminal, editor, router, handlers
- cmdprompt.ui         colors, tables, logging
"""

try:
    from importlib.metadata import version

    __version__ = version("cmdprompt")
except Exception:
    __version__ = "0.0.0.dev"

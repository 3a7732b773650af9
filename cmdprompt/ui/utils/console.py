#!/usr/bin/env python3
# cmdprompt/ui/utils/console.py
from __future__ import annotations

import sys
from typing import TextIO


def print_line(text: str = "", *, file: TextIO | None = None, flush: bool = False) -> None:
    """print() for one line; `file` defaults to sys.stdout as it is at call time."""
    stream = file if file is not None else sys.stdout
    stream.write(f"{text}\n")
    if flush:
        stream.flush()

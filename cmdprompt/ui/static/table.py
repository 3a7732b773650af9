#!/usr/bin/env python3
# cmdprompt/ui/static/table.py
from __future__ import annotations

from itertools import zip_longest
from typing import List, Optional, Sequence, TextIO

from cmdprompt.ui.utils import print_line, strip_ansi


def _visible_len(cell: str) -> int:
    return len(strip_ansi(cell))


def _column_widths(rows: Sequence[Sequence[str]]) -> List[int]:
    widths: List[int] = []
    for row in rows:
        widths = [
            max(old or 0, _visible_len(cell or ""))
            for old, cell in zip_longest(widths, row)
        ]
    return widths


def format_table(
    rows: Sequence[Sequence[object]],
    headers: Optional[Sequence[object]] = None,
    *,
    padding: int = 1,
) -> str:
    """
    Column-aligned text without borders; colored cells are measured by their
    visible width. Trailing spaces are trimmed from every line.
    """
    body = [[str(cell) for cell in row] for row in rows]
    head = [str(h) for h in headers] if headers is not None else None

    widths = _column_widths(body if head is None else [head, *body])
    separator = " " * (2 * padding)

    def line(cells: Sequence[str]) -> str:
        padded = (cell + " " * (width - _visible_len(cell)) for cell, width in zip(cells, widths))
        return separator.join(padded).rstrip()

    out: List[str] = []
    if head is not None:
        out += [line(head), line(["-" * w for w in widths])]
    out.extend(line(row) for row in body)
    return "\n".join(out)


def print_table(
    rows: Sequence[Sequence[object]],
    headers: Optional[Sequence[object]] = None,
    *,
    padding: int = 1,
    file: TextIO | None = None,
) -> None:
    print_line(format_table(rows, headers, padding=padding), file=file)

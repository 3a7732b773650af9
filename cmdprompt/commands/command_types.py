#!/usr/bin/env python3
# cmdprompt/commands/command_types.py
from __future__ import annotations

"""
What a registered command is.

`OperationKind` is fixed when the command is registered, so dispatch never
has to inspect a callback to find out whether it must be awaited.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping, Protocol


class CommandCallback(Protocol):
    def __call__(self, *args: Any) -> Any:  # pragma: no cover - signature only
        ...


class OperationKind(Enum):
    SYNC = "sync"        # called, result ignored
    ASYNC = "async"      # awaited before control returns to the editor


@dataclass(slots=True)
class Command:
    """
    One dispatch target.

    name: lowercase canonical name, the registry key.
    callback: the implementation; receives the argument map only when
        takes_args is set.
    description / example: shown by `help`.
    aliases: alternative names, added to the alias map on registration.
    hidden: dispatchable but not listed.
    """

    name: str
    callback: CommandCallback
    kind: OperationKind = OperationKind.SYNC
    takes_args: bool = False
    description: str = ""
    example: str = ""
    aliases: list[str] = field(default_factory=list)
    hidden: bool = False

    @property
    def is_async(self) -> bool:
        return self.kind is OperationKind.ASYNC

    async def invoke(self, args: Mapping[str, str] | None = None) -> Any:
        """Run the callback with a private copy of `args` if it takes them."""
        call_args = (dict(args or {}),) if self.takes_args else ()
        if self.is_async:
            return await self.callback(*call_args)
        return self.callback(*call_args)

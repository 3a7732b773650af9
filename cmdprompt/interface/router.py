#!/usr/bin/env python3
# cmdprompt/interface/router.py
from __future__ import annotations

"""
Command routing: committed line -> canonical command + arguments -> operation.

The router owns the alias map and the command registry of one handler. It
never catches errors raised by the operation it dispatches to.
"""

import difflib
import logging
from types import MappingProxyType
from typing import Any, Callable, Iterable, Mapping, Optional

from cmdprompt.commands import (
    Command,
    CommandRegistry,
    add_aliases,
    merge_aliases,
    normalize_alias_map,
)
from cmdprompt.interface.parser import NOT_RECOGNISED, normalize_command, tokenize

logger = logging.getLogger(__name__)

UnknownCallback = Callable[[str], None]


class CommandRouter:
    """Resolves aliases, parses arguments and invokes registered commands."""

    def __init__(
        self,
        registry: Optional[CommandRegistry] = None,
        aliases: Optional[Mapping[str, str]] = None,
        *,
        on_unknown: Optional[UnknownCallback] = None,
    ) -> None:
        self.registry = registry if registry is not None else CommandRegistry()
        self._alias_map: dict[str, str] = normalize_alias_map(aliases)
        self.on_unknown = on_unknown

    # ---------------- Alias map ----------------

    @property
    def alias_map(self) -> Mapping[str, str]:
        """Read-only view of the current alias map."""
        return MappingProxyType(self._alias_map)

    def set_up_command_map(self, aliases: Optional[Mapping[str, str]], overwrite: bool = False) -> None:
        """
        Merge `aliases` into the alias map, or replace the whole map when
        `overwrite` is set.
        """
        if overwrite:
            self._alias_map = normalize_alias_map(aliases)
        else:
            merge_aliases(self._alias_map, aliases)

    def add_aliases(self, canonical: str, *aliases: str) -> None:
        add_aliases(self._alias_map, canonical, *aliases)

    # ---------------- Registration ----------------

    def register(self, name: str, callback: Callable[..., Any], **options: Any) -> Command:
        """Register a command in the registry and point its aliases at it."""
        command_obj = self.registry.register(name, callback, **options)
        self.add_aliases(command_obj.name, *command_obj.aliases)
        return command_obj

    def add(self, command_obj: Command) -> Command:
        command_obj = self.registry.add(command_obj)
        self.add_aliases(command_obj.name, *command_obj.aliases)
        return command_obj

    # ---------------- Normalization ----------------

    def normalize(self, line: str) -> tuple[str, Optional[dict[str, str]]]:
        return normalize_command(line, self._alias_map, self.registry)

    def suggest(self, token: str, limit: int = 3) -> list[str]:
        """Close matches among visible command names and aliases."""
        universe: Iterable[str] = [*self.registry.names(), *self._alias_map.keys()]
        return difflib.get_close_matches(token.lower(), list(dict.fromkeys(universe)), n=limit, cutoff=0.6)

    # ---------------- Dispatch ----------------

    async def dispatch(self, line: str) -> bool:
        """
        Normalize `line` and run the matching command.

        Returns False when nothing could be dispatched; the unknown-command
        callback has been notified in that case.
        """
        canonical, arguments = self.normalize(line)
        command_obj = self.registry.get(canonical) if canonical != NOT_RECOGNISED else None

        if command_obj is None:
            # alias may point at a command that has since been removed
            logger.info("Unrecognised command: %r (resolved to %r)", line, canonical)
            if self.on_unknown is not None:
                self.on_unknown(line)
            return False

        logger.debug("Dispatching %s (%s) args=%r", command_obj.name, command_obj.kind.value, arguments)
        await command_obj.invoke(arguments)
        return True

    def first_token(self, line: str) -> str:
        tokens = tokenize(line)
        return tokens[0] if tokens else ""

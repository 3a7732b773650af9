#!/usr/bin/env python3
# cmdprompt/commands/commands.py
from __future__ import annotations

"""
Command registry, decorator and alias map utilities.

This module provides:
- CommandRegistry: canonical name -> Command, populated when a handler is built.
- CommandRegistry.command: decorator to register functions as commands with metadata.
- add_aliases / merge_aliases / normalize_alias_map: helpers operating on a plain
  alias map (lowercase alias -> canonical command name).
"""

import inspect
from typing import Any, Callable, Dict, Iterable, Mapping, MutableMapping, Optional

from cmdprompt.commands.command_types import Command, OperationKind


AliasMap = Dict[str, str]


def normalize_command_name(name: str) -> str:
    """Canonical names are case-insensitive; store them lowercase and trimmed."""
    return name.strip().lower()


# ---------------- Alias map helpers ----------------

def normalize_alias_map(aliases: Mapping[str, str] | None) -> AliasMap:
    """Return a fresh alias map with lowercase keys and canonical values."""
    if not aliases:
        return {}
    return {
        normalize_command_name(alias): normalize_command_name(target)
        for alias, target in aliases.items()
    }


def add_aliases(
    alias_map: MutableMapping[str, str] | None,
    canonical: str,
    *aliases: str,
) -> MutableMapping[str, str]:
    """
    Point every alias at `canonical`, creating the map when None is passed.
    Existing keys are overwritten.
    """
    if alias_map is None:
        alias_map = {}
    target = normalize_command_name(canonical)
    for alias in aliases:
        alias_map[normalize_command_name(alias)] = target
    return alias_map


def merge_aliases(
    alias_map: MutableMapping[str, str],
    extra: Mapping[str, str] | None,
) -> MutableMapping[str, str]:
    """Merge `extra` into `alias_map`; colliding keys are overwritten, others kept."""
    alias_map.update(normalize_alias_map(extra))
    return alias_map


def aliases_for(alias_map: Mapping[str, str], canonical: str) -> list[str]:
    """Return the aliases pointing at `canonical`, excluding the name itself."""
    target = normalize_command_name(canonical)
    return [alias for alias, name in alias_map.items() if name == target and alias != target]


# ---------------- Registry ----------------

def _takes_args(func: Callable[..., Any]) -> bool:
    try:
        signature = inspect.signature(func)
    except (TypeError, ValueError):
        return False
    return len(signature.parameters) > 0


def _is_coroutine_callable(func: Callable[..., Any]) -> bool:
    """Coroutine functions, and objects whose __call__ is one."""
    if inspect.iscoroutinefunction(func):
        return True
    return inspect.iscoroutinefunction(getattr(func, "__call__", None))


class CommandRegistry:
    """Holds all command definitions of one handler and provides lookup utilities."""

    def __init__(self) -> None:
        # Canonical name -> Command
        self._commands_by_name: Dict[str, Command] = {}

    # ---------------- Registration ----------------

    def add(self, command_obj: Command) -> Command:
        """Register a pre-built command, ensuring no name collisions."""
        key = normalize_command_name(command_obj.name)
        if not key:
            raise ValueError("Command name cannot be empty.")
        if key in self._commands_by_name:
            raise ValueError(f"Command '{command_obj.name}' already registered.")
        command_obj.name = key
        command_obj.aliases = [normalize_command_name(a) for a in command_obj.aliases]
        self._commands_by_name[key] = command_obj
        return command_obj

    def register(
        self,
        name: str,
        callback: Callable[..., Any],
        *,
        aliases: Iterable[str] = (),
        description: str | None = None,
        example: str = "",
        takes_args: bool | None = None,
        is_async: bool | None = None,
        hidden: bool = False,
    ) -> Command:
        """
        Register `callback` under `name`.

        `takes_args` and `is_async` are fixed here, once; when omitted they are
        read off the callback (any parameter -> takes the argument map,
        coroutine function -> awaited).
        """
        if is_async is None:
            is_async = _is_coroutine_callable(callback)
        if takes_args is None:
            takes_args = _takes_args(callback)

        command_obj = Command(
            name=name,
            callback=callback,
            kind=OperationKind.ASYNC if is_async else OperationKind.SYNC,
            takes_args=takes_args,
            description=(description or (callback.__doc__ or "")).strip(),
            example=example,
            aliases=list(aliases),
            hidden=hidden,
        )
        return self.add(command_obj)

    def command(
        self,
        *,
        name: str | None = None,
        aliases: Iterable[str] = (),
        description: str | None = None,
        example: str = "",
        takes_args: bool | None = None,
        is_async: bool | None = None,
        hidden: bool = False,
    ) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
        """
        Decorator form of `register`.

        The function name is used as the command name when `name` is not given.
        """

        def wrapper(func: Callable[..., Any]) -> Callable[..., Any]:
            self.register(
                name or func.__name__,
                func,
                aliases=aliases,
                description=description,
                example=example,
                takes_args=takes_args,
                is_async=is_async,
                hidden=hidden,
            )
            return func

        return wrapper

    def remove(self, name: str) -> Optional[Command]:
        """Drop a command; aliases still pointing at it become unresolvable."""
        return self._commands_by_name.pop(normalize_command_name(name), None)

    # ---------------- Lookup ----------------

    def get(self, name: str) -> Optional[Command]:
        """Return the command by canonical name, or None if not found."""
        return self._commands_by_name.get(normalize_command_name(name))

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and normalize_command_name(name) in self._commands_by_name

    def __len__(self) -> int:
        return len(self._commands_by_name)

    def all(self, *, include_hidden: bool = False) -> list[Command]:
        """Return registered commands in registration order."""
        return [
            cmd for cmd in self._commands_by_name.values()
            if include_hidden or not cmd.hidden
        ]

    def names(self, *, include_hidden: bool = False) -> list[str]:
        """Return canonical names."""
        return [cmd.name for cmd in self.all(include_hidden=include_hidden)]

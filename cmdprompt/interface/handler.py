#!/usr/bin/env python3
# cmdprompt/interface/handler.py
from __future__ import annotations

"""
Command handlers: what the line editor hands committed lines to.

`CommandHandler` is the capability the editor depends on:
    - print_startup_info()
    - handle_command(line)   (awaitable)
    - is_exit_requested()

`DefaultCommandHandler` hosts a `CommandRouter` and ships the built-in
commands (exit, cls, help, selftest). Subclasses add their own commands
with `self.register(...)` or `@handler.command(...)`.
"""

import logging
from typing import Any, Callable, Mapping, Optional, TextIO

from cmdprompt import __version__
from cmdprompt.commands import Command, aliases_for
from cmdprompt.interface.keys import Key
from cmdprompt.interface.parser import wants_help
from cmdprompt.interface.router import CommandRouter
from cmdprompt.interface.terminal import BaseTerminal
from cmdprompt.ui import clear_screen, colorize, format_table, print_line

logger = logging.getLogger(__name__)

DEFAULT_INFO = f"Default cmd handler... v {__version__}"


class CommandHandler:
    """
    Base interface for command handlers.

    Subclasses should implement handle_command(); the other hooks have
    harmless defaults.
    """

    def print_startup_info(self) -> None:
        ...

    async def handle_command(self, line: str) -> None:  # pragma: no cover - interface
        raise NotImplementedError

    def is_exit_requested(self) -> bool:
        return False


class DefaultCommandHandler(CommandHandler):
    """Router-backed handler with the stock commands."""

    def __init__(
        self,
        info: Optional[str] = None,
        *,
        terminal: Optional[BaseTerminal] = None,
        stream: Optional[TextIO] = None,
        aliases: Optional[Mapping[str, str]] = None,
        show_banner: bool = True,
    ) -> None:
        self.info = info.strip() if info and info.strip() else DEFAULT_INFO
        self.terminal = terminal
        self.stream = stream
        self.show_banner = show_banner
        self._exit = False

        self.router = CommandRouter(on_unknown=self.handle_unknown)
        self._register_builtins()
        if aliases:
            self.set_up_command_map(aliases)

    # ---------------- Capability ----------------

    def print_startup_info(self) -> None:
        if not self.show_banner:
            return
        self._print(colorize(self.info, "red"))
        self._print(colorize("Hi there!", "red"))
        self._print()

    async def handle_command(self, line: str) -> None:
        await self.router.dispatch(line)

    def is_exit_requested(self) -> bool:
        return self._exit

    # ---------------- Command map maintenance ----------------

    def set_up_command_map(self, aliases: Optional[Mapping[str, str]], overwrite: bool = False) -> None:
        """Hook to add extra aliases or replace the default mapping."""
        self.router.set_up_command_map(aliases, overwrite=overwrite)

    def register(self, name: str, callback: Callable[..., Any], **options: Any) -> Command:
        return self.router.register(name, callback, **options)

    def command(self, **options: Any) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
        """Decorator registering a function on this handler."""

        def wrapper(func: Callable[..., Any]) -> Callable[..., Any]:
            self.register(options.pop("name", None) or func.__name__, func, **options)
            return func

        return wrapper

    def _register_builtins(self) -> None:
        self.register(
            "exit", self.handle_exit,
            aliases=["e", "quit", "q"],
            description="Leave the prompt.",
        )
        self.register(
            "cls", self.handle_cls,
            aliases=["clear"],
            description="Clear the screen.",
        )
        self.register(
            "help", self.handle_help,
            description="List commands, or describe the ones given.",
            example="help exit cls",
        )
        self.register(
            "selftest", self.handle_selftest,
            description="Check that command registration works.",
            example="selftest help",
            hidden=True,
        )

    # ---------------- Built-in commands ----------------

    def handle_exit(self) -> None:
        self._print("Bye, bye...")
        self._print()
        self._exit = True

    def handle_cls(self) -> None:
        if self.terminal is not None:
            self.terminal.clear_screen()
        else:
            clear_screen()

    def handle_help(self, args: dict[str, str]) -> None:
        if args:
            for name in args:
                self._print(self.format_command_help(name))
                self._print()
            return

        self._print(colorize(f"{self.info} :: help...", "green"))
        self._print()
        self.print_commands()
        self._print(colorize("Type 'help <command>' to get a detailed help on a particular command", "green"))
        self._print()

    def handle_selftest(self, args: dict[str, str]) -> None:
        if wants_help(args):
            self._print("This is a selftest help. The command is registered properly!")
            self._print()
            return
        self._print("This is a selftest command output. The command is registered properly!")
        self._print()

    # ---------------- Confirmation ----------------

    async def prompt_user(self, question: str) -> bool:
        """
        Ask a yes/no question and wait for 'y' or 'n' (any case).

        Answers are read through the bound terminal; anything else is
        refused and the question stays open.
        """
        if self.terminal is None:
            raise RuntimeError("prompt_user needs a terminal to read answers from")

        self._print(colorize(question, "yellow"))
        self._print(colorize("Y/N", "yellow"))
        while True:
            answer = (await self._read_answer()).lower()
            if answer == "y":
                return True
            if answer == "n":
                return False
            self._print(colorize("Only Y or N please...", "red"))

    async def _read_answer(self) -> str:
        chars: list[str] = []
        while True:
            event = await self.terminal.read_key()
            if event.key is Key.ENTER:
                self.terminal.write("\n")
                return "".join(chars)
            if not event.is_control:
                chars.append(event.char)
            elif event.key is Key.BACKSPACE and chars:
                chars.pop()

    # ---------------- Utils ----------------

    def handle_unknown(self, line: str) -> None:
        """Unknown-command notification; empty lines print nothing."""
        if not line.strip():
            return
        token = self.router.first_token(line)
        matches = self.router.suggest(token)
        hint = f" Did you mean: {', '.join(matches)}?" if matches else ""
        self._print(colorize(f"Sorry mate, but '{line}' is not something I recognise...{hint}", "red"))
        self._print()

    def print_commands(self) -> None:
        """Print every listed command with its aliases."""
        self._print("Supported commands are:")
        rows = []
        for command_obj in self.router.registry.all():
            aliases = aliases_for(self.router.alias_map, command_obj.name)
            rows.append([
                colorize(command_obj.name, "magenta"),
                colorize("aliases: " + ", ".join(aliases), "blue") if aliases else "",
                command_obj.description,
            ])
        self._print(format_table(rows))
        self._print()

    def format_command_help(self, name: str) -> str:
        """Detail block for a command name or alias."""
        canonical, _ = self.router.normalize(name)
        command_obj = self.router.registry.get(canonical)
        if command_obj is None:
            return colorize(f"No such command: {name}", "red")
        aliases = aliases_for(self.router.alias_map, command_obj.name)
        lines = [
            f"Name:        {command_obj.name}",
            f"Aliases:     {', '.join(aliases) if aliases else '(none)'}",
            f"Description: {command_obj.description or '(none)'}",
            f"Example:     {command_obj.example or '(none)'}",
        ]
        return "\n".join(lines)

    def _print(self, text: str = "") -> None:
        print_line(text, file=self.stream)

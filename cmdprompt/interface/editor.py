#!/usr/bin/env python3
# cmdprompt/interface/editor.py
from __future__ import annotations

"""
Single-line command editor.

Reads key events from a terminal adapter, keeps the command buffer and the
history in step with what is on screen, and hands committed lines to a
command handler until the handler asks to exit.

All column arithmetic assumes the adapter's echo contract: by the time a
key reaches the editor, the caret has already moved one column right.
"""

import logging
from typing import Optional

from cmdprompt.interface.buffer import CommandBuffer
from cmdprompt.interface.handler import CommandHandler
from cmdprompt.interface.history import CommandHistory
from cmdprompt.interface.keys import Key, KeyEvent
from cmdprompt.interface.terminal import BaseTerminal, make_terminal

logger = logging.getLogger(__name__)

DEFAULT_PROMPT = "cmd>"


class LineEditor:
    """Turns key events into buffer edits, screen output and command commits."""

    def __init__(
        self,
        handler: CommandHandler,
        terminal: Optional[BaseTerminal] = None,
        *,
        prompt: Optional[str] = None,
        prompt_color: Optional[str] = None,
    ) -> None:
        if handler is None:
            logger.error("LineEditor created without a command handler")
            raise ValueError("Command handler cannot be None!")

        self.handler = handler
        self.terminal = terminal if terminal is not None else make_terminal()
        self._prompt = DEFAULT_PROMPT
        self.prompt = prompt
        self.prompt_color = prompt_color
        self.buffer = CommandBuffer()
        self.history = CommandHistory()

    # ---------------- Configuration ----------------

    @property
    def prompt(self) -> str:
        return self._prompt

    @prompt.setter
    def prompt(self, value: Optional[str]) -> None:
        self._prompt = value if value and value.strip() else DEFAULT_PROMPT

    @property
    def text(self) -> str:
        return self.buffer.text

    @property
    def cursor(self) -> int:
        """Cursor offset within the command text."""
        return self.buffer.cursor

    @property
    def cursor_column(self) -> int:
        return self.terminal.get_cursor_column()

    # ---------------- Main loop ----------------

    async def run(self) -> None:
        """Take over the terminal until the handler reports exit."""
        # fresh state if this editor is reused
        self.buffer = CommandBuffer()
        self.history = CommandHistory()

        self.handler.print_startup_info()
        self.print_prompt()

        while not self.handler.is_exit_requested():
            await self.handle_input()

    async def handle_input(self) -> None:
        event = await self.terminal.read_key()
        await self.handle_key(event)

    async def handle_key(self, event: KeyEvent) -> None:
        logger.debug("key %s %r at column %d", event.key.value, event.char, self.cursor_column)

        if not event.is_control:
            self._handle_printable(event.char)
            return

        if event.key is Key.ENTER:
            await self._handle_enter()
        elif event.key is Key.BACKSPACE:
            self._handle_backspace()
        elif event.key is Key.LEFT:
            self._handle_left_arrow()
        elif event.key is Key.RIGHT:
            self._handle_right_arrow()
        elif event.key is Key.UP:
            self._handle_up_arrow()
        elif event.key is Key.DOWN:
            self._handle_down_arrow()
        elif event.key is Key.ESCAPE:
            self._handle_escape()
        else:
            # only undo the echo; reprint since the echo may have hidden a char
            self.render(column=self.cursor_column - 1)

    # ---------------- Key handlers ----------------

    def _handle_printable(self, ch: str) -> None:
        column = self.cursor_column
        if column != self._prompt_and_command_length() + 1:
            self.buffer.insert(column - self._prompt_length() - 1, ch)
        else:
            self.buffer.append(ch)
        self.render(column=column)

    def _handle_backspace(self) -> None:
        # always the last character, whatever the cursor position
        self.buffer.remove_last()
        self.render(clear_after=1)

    def _handle_left_arrow(self) -> None:
        column = self.cursor_column
        if column <= self._prompt_length() + 1:
            column = self._prompt_length()
        else:
            # one step back for the move, one for the echo
            column -= 2
        self.render(column=column)

    def _handle_right_arrow(self) -> None:
        # the echo already moved the caret right
        column = self.cursor_column
        if column > self._prompt_and_command_length():
            column = self._prompt_and_command_length()
        self.render(column=column)

    def _handle_up_arrow(self) -> None:
        entry = self.history.older()
        if entry is None:
            self._undo_echo()
            return
        self._show_history_entry(entry)

    def _handle_down_arrow(self) -> None:
        entry = self.history.newer()
        if entry is None:
            self._undo_echo()
            return
        self._show_history_entry(entry)

    def _handle_escape(self) -> None:
        # one extra cell for the echoed escape
        self.clear_line(extra=1)

    async def _handle_enter(self) -> None:
        command = self.buffer.text

        self.history.add(command)
        self.history.reset()

        # finalise the line with prompt and command as they were
        self.terminal.write("\n")

        await self.handler.handle_command(command)

        if not self.handler.is_exit_requested():
            self.buffer.clear()
            self.print_prompt()

    # ---------------- Helpers ----------------

    def clear_line(self, extra: int = 0) -> None:
        """Empty the buffer and wipe the old text from the screen."""
        cleared = len(self.buffer) + extra
        self.buffer.clear()
        self.render(clear_after=cleared)

    def _show_history_entry(self, entry: str) -> None:
        clear = max(0, len(self.buffer) - len(entry))
        self.buffer.set_text(entry)
        self.render(clear_after=clear)

    def _undo_echo(self) -> None:
        self.terminal.set_cursor_column(self.cursor_column - 1)
        self._sync_cursor()

    def _prompt_length(self) -> int:
        return len(self._prompt)

    def _prompt_and_command_length(self) -> int:
        return self._prompt_length() + len(self.buffer)

    def _sync_cursor(self) -> None:
        self.buffer.move_to(self.cursor_column - self._prompt_length())

    # ---------------- Rendering ----------------

    def print_prompt(self) -> None:
        """Write the prompt in its color at the current position."""
        if self.prompt_color:
            self.terminal.set_foreground_color(self.prompt_color)
        self.terminal.write(self._prompt)
        if self.prompt_color:
            self.terminal.reset_color()
        self._sync_cursor()

    def render(self, clear_after: int = 0, column: Optional[int] = None) -> None:
        """
        Reprint prompt and command from column 0.

        clear_after: cells after the command to blank out (leftovers of a
            longer previous render); the caret is stepped back over them.
        column: where to leave the caret afterwards.
        """
        self.terminal.set_cursor_column(0)
        self.print_prompt()
        self.terminal.write(self.buffer.text)

        if clear_after > 0:
            self.terminal.write(" " * clear_after)
            self.terminal.set_cursor_column(self.cursor_column - clear_after)

        if column is not None:
            self.terminal.set_cursor_column(column)

        self._sync_cursor()

#!/usr/bin/env python3
# cmdprompt/interface/terminal.py
from __future__ import annotations

"""
Terminal I/O adapters.

The line editor talks to a terminal only through `BaseTerminal`:
    - read_key()              next key event (awaitable)
    - get/set_cursor_column() absolute column of the caret
    - write() / clear_screen()
    - set_foreground_color() / reset_color()

Echo contract: every key handed out by read_key() has already moved the
reported cursor column one step to the right, the way a console echoes
keystrokes. Printable keys are echoed at the caret.
"""

import asyncio
import logging
from collections import deque
from typing import Deque, Iterable, Optional

from prompt_toolkit.input import Input, create_input
from prompt_toolkit.key_binding import KeyPress
from prompt_toolkit.keys import Keys
from prompt_toolkit.output import Output, create_output
from prompt_toolkit.styles import DEFAULT_ATTRS

from cmdprompt.interface.keys import Key, KeyEvent, is_printable

logger = logging.getLogger(__name__)

# Time a lone ESC byte may wait for the rest of an escape sequence
DEFAULT_ESCAPE_TIMEOUT = 0.05

_KEY_MAP = {
    Keys.ControlM: Key.ENTER,
    Keys.ControlJ: Key.ENTER,
    Keys.ControlH: Key.BACKSPACE,
    Keys.Left: Key.LEFT,
    Keys.Right: Key.RIGHT,
    Keys.Up: Key.UP,
    Keys.Down: Key.DOWN,
    Keys.Escape: Key.ESCAPE,
}

# prompt_toolkit names the 37/97 pair gray/white
_SPECIAL_COLORS = {
    "white": "ansigray",
    "bright_white": "ansiwhite",
}


class BaseTerminal:
    """
    Base interface for terminal adapters.

    Subclasses should implement every capability method; setup()/teardown()
    are optional hooks. This base also provides context manager support to
    guarantee teardown.
    """

    async def read_key(self) -> KeyEvent:  # pragma: no cover - interface
        raise NotImplementedError

    def get_cursor_column(self) -> int:  # pragma: no cover - interface
        raise NotImplementedError

    def set_cursor_column(self, column: int) -> None:  # pragma: no cover - interface
        raise NotImplementedError

    def write(self, text: str) -> None:  # pragma: no cover - interface
        raise NotImplementedError

    def clear_screen(self) -> None:  # pragma: no cover - interface
        raise NotImplementedError

    def set_foreground_color(self, color: str) -> None:  # pragma: no cover - interface
        raise NotImplementedError

    def reset_color(self) -> None:  # pragma: no cover - interface
        raise NotImplementedError

    def setup(self) -> None:
        ...

    def teardown(self) -> None:
        ...

    # Context manager helpers
    def __enter__(self) -> "BaseTerminal":
        self.setup()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        try:
            self.teardown()
        except Exception:
            logger.exception("Terminal teardown failed")


def to_prompt_toolkit_color(color: str) -> str:
    """Map 'cyan' / 'bright_red' / '#RRGGBB' to prompt_toolkit's color names."""
    if color.startswith("#"):
        return color[1:].lower()
    if color in _SPECIAL_COLORS:
        return _SPECIAL_COLORS[color]
    return "ansi" + color.replace("_", "")


def translate_key_press(press: KeyPress) -> list[KeyEvent]:
    """
    Turn one prompt_toolkit key press into editor key events.

    A bracketed paste becomes one printable event per character; Ctrl+C is
    not a key but an interrupt.
    """
    key = press.key
    if key == Keys.ControlC:
        raise KeyboardInterrupt
    if key == Keys.BracketedPaste:
        return [KeyEvent.printable(ch) for ch in press.data if is_printable(ch)]
    if key == Keys.CPRResponse:
        return []
    if key in _KEY_MAP:
        return [KeyEvent.control(_KEY_MAP[key], press.data)]
    if isinstance(key, Keys):
        return [KeyEvent.control(Key.OTHER, press.data)]
    if is_printable(key):
        return [KeyEvent.printable(key)]
    return [KeyEvent.control(Key.OTHER, press.data)]


def translate_key_presses(presses: Iterable[KeyPress]) -> list[KeyEvent]:
    events: list[KeyEvent] = []
    for press in presses:
        events.extend(translate_key_press(press))
    return events


class PromptToolkitTerminal(BaseTerminal):
    """
    Raw-mode terminal on top of prompt_toolkit's Input/Output.

    prompt_toolkit does not report the caret position, so the adapter keeps
    track of the column itself: every write, echo and move goes through it.
    """

    def __init__(
        self,
        input: Optional[Input] = None,
        output: Optional[Output] = None,
        *,
        escape_timeout: float = DEFAULT_ESCAPE_TIMEOUT,
    ) -> None:
        self._input = input if input is not None else create_input()
        self._output = output if output is not None else create_output()
        self._color_depth = self._output.get_default_color_depth()
        self._pending: Deque[KeyEvent] = deque()
        self._column = 0
        self._raw_mode = None
        self.escape_timeout = escape_timeout
        self._may_hold_prefix = False

    def setup(self) -> None:
        self._raw_mode = self._input.raw_mode()
        self._raw_mode.__enter__()
        self._output.enable_bracketed_paste()
        self._output.flush()

    def teardown(self) -> None:
        self._output.disable_bracketed_paste()
        self._output.reset_attributes()
        self._output.flush()
        if self._raw_mode is not None:
            self._raw_mode.__exit__(None, None, None)
            self._raw_mode = None

    # ---------------- Input ----------------

    async def read_key(self) -> KeyEvent:
        while not self._pending:
            self._pending.extend(translate_key_presses(await self._read_presses()))
        event = self._pending.popleft()
        self._echo(event)
        return event

    async def _read_presses(self) -> list[KeyPress]:
        if self._input.closed:
            raise EOFError("terminal input closed")
        ready = asyncio.Event()
        with self._input.attach(ready.set):
            while True:
                if self._may_hold_prefix:
                    # the parser may be sitting on an ESC; give it a deadline
                    try:
                        await asyncio.wait_for(ready.wait(), self.escape_timeout)
                    except asyncio.TimeoutError:
                        self._may_hold_prefix = False
                        presses = self._input.flush_keys()
                        if presses:
                            return presses
                        continue
                else:
                    await ready.wait()
                ready.clear()
                presses = self._input.read_keys()
                self._may_hold_prefix = True
                if presses:
                    return presses

    def _echo(self, event: KeyEvent) -> None:
        if event.key is Key.CHAR:
            self._output.write(event.char)
        else:
            self._output.cursor_forward(1)
        self._column += 1
        self._output.flush()

    # ---------------- Output ----------------

    def get_cursor_column(self) -> int:
        return self._column

    def set_cursor_column(self, column: int) -> None:
        column = max(0, column)
        self._output.write_raw("\r")
        self._output.cursor_forward(column)
        self._column = column
        self._output.flush()

    def write(self, text: str) -> None:
        if not text:
            return
        self._output.write(text)
        last_break = max(text.rfind("\n"), text.rfind("\r"))
        if last_break >= 0:
            self._column = len(text) - last_break - 1
        else:
            self._column += len(text)
        self._output.flush()

    def clear_screen(self) -> None:
        self._output.erase_screen()
        self._output.cursor_goto(0, 0)
        self._column = 0
        self._output.flush()

    def set_foreground_color(self, color: str) -> None:
        attrs = DEFAULT_ATTRS._replace(color=to_prompt_toolkit_color(color))
        self._output.set_attributes(attrs, self._color_depth)

    def reset_color(self) -> None:
        self._output.reset_attributes()


def make_terminal(*, escape_timeout: float = DEFAULT_ESCAPE_TIMEOUT) -> BaseTerminal:
    """
    Factory for the terminal attached to the current process.
    """
    return PromptToolkitTerminal(escape_timeout=escape_timeout)

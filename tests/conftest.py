import asyncio
import io
from collections import deque

import pytest

from cmdprompt.interface import (
    BaseTerminal,
    CommandHandler,
    DefaultCommandHandler,
    Key,
    KeyEvent,
    LineEditor,
)


ENTER = KeyEvent.control(Key.ENTER)
BACKSPACE = KeyEvent.control(Key.BACKSPACE)
LEFT = KeyEvent.control(Key.LEFT)
RIGHT = KeyEvent.control(Key.RIGHT)
UP = KeyEvent.control(Key.UP)
DOWN = KeyEvent.control(Key.DOWN)
ESCAPE = KeyEvent.control(Key.ESCAPE)
TAB = KeyEvent.control(Key.OTHER, "\t")


def chars(text):
    return [KeyEvent.printable(ch) for ch in text]


class ScriptedTerminal(BaseTerminal):
    """In-memory terminal honouring the echo contract, with a one-line screen."""

    def __init__(self, keys=()):
        self.keys = deque(keys)
        self.column = 0
        self.cells = []
        self.lines = []
        self.colors = []
        self.cleared = 0

    async def read_key(self):
        if not self.keys:
            raise EOFError("script exhausted")
        event = self.keys.popleft()
        if event.key is Key.CHAR:
            self._put(event.char)
        else:
            self.column += 1
        return event

    def _put(self, ch):
        while len(self.cells) < self.column:
            self.cells.append(" ")
        if self.column < len(self.cells):
            self.cells[self.column] = ch
        else:
            self.cells.append(ch)
        self.column += 1

    @property
    def line(self):
        return "".join(self.cells).rstrip()

    def get_cursor_column(self):
        return self.column

    def set_cursor_column(self, column):
        self.column = max(0, column)

    def write(self, text):
        for ch in text:
            if ch == "\n":
                self.lines.append(self.line)
                self.cells = []
                self.column = 0
            else:
                self._put(ch)

    def clear_screen(self):
        self.cleared += 1
        self.cells = []
        self.lines = []
        self.column = 0

    def set_foreground_color(self, color):
        self.colors.append(color)

    def reset_color(self):
        self.colors.append(None)


class RecordingHandler(CommandHandler):
    def __init__(self, exit_on=None):
        self.commands = []
        self.started = 0
        self.exit_on = exit_on
        self._exit = False

    def print_startup_info(self):
        self.started += 1

    async def handle_command(self, line):
        self.commands.append(line)
        if self.exit_on is not None and line == self.exit_on:
            self._exit = True

    def is_exit_requested(self):
        return self._exit


def press(editor, *events):
    """Queue key events and let the editor consume all of them."""
    editor.terminal.keys.extend(events)

    async def drain():
        while editor.terminal.keys:
            await editor.handle_input()

    asyncio.run(drain())


@pytest.fixture
def terminal():
    return ScriptedTerminal()


@pytest.fixture
def recorder():
    return RecordingHandler()


@pytest.fixture
def editor(recorder, terminal):
    ed = LineEditor(recorder, terminal)
    ed.print_prompt()
    return ed


@pytest.fixture
def out():
    return io.StringIO()


@pytest.fixture
def handler(out, terminal):
    return DefaultCommandHandler(terminal=terminal, stream=out)

import asyncio

import pytest

from cmdprompt.interface import CommandHandler, DefaultCommandHandler, LineEditor, DEFAULT_PROMPT
from conftest import (
    BACKSPACE,
    DOWN,
    ENTER,
    ESCAPE,
    LEFT,
    RIGHT,
    TAB,
    UP,
    RecordingHandler,
    ScriptedTerminal,
    chars,
    press,
)


class TestConstruction:
    def test_missing_handler_fails(self, terminal):
        with pytest.raises(ValueError):
            LineEditor(None, terminal)

    def test_default_prompt(self, recorder, terminal):
        ed = LineEditor(recorder, terminal)
        assert ed.prompt == DEFAULT_PROMPT == "cmd>"

    def test_blank_prompt_falls_back(self, recorder, terminal):
        ed = LineEditor(recorder, terminal, prompt="   ")
        assert ed.prompt == "cmd>"

    def test_prompt_reassignment(self, recorder, terminal):
        ed = LineEditor(recorder, terminal, prompt="app>")
        assert ed.prompt == "app>"
        ed.prompt = ""
        assert ed.prompt == "cmd>"
        ed.prompt = "x$"
        assert ed.prompt == "x$"

    def test_prompt_color_wraps_prompt(self, recorder, terminal):
        ed = LineEditor(recorder, terminal, prompt_color="green")
        ed.print_prompt()
        assert terminal.colors == ["green", None]
        assert terminal.line == "cmd>"

    def test_no_color_calls_without_prompt_color(self, editor, terminal):
        assert terminal.colors == []


class TestTyping:
    def test_prompt_printed(self, editor, terminal):
        assert terminal.line == "cmd>"
        assert terminal.column == 4
        assert editor.cursor == 0

    def test_type_appends(self, editor, terminal):
        press(editor, *chars("abc"))
        assert editor.text == "abc"
        assert editor.cursor == 3
        assert terminal.column == 7
        assert terminal.line == "cmd>abc"

    @pytest.mark.parametrize("text", ["a", "hello world", "set x:1 y:true", "zażółć"])
    def test_column_tracks_prompt_plus_length(self, editor, terminal, text):
        press(editor, *chars(text))
        assert editor.text == text
        assert terminal.column == len("cmd>") + len(text)

    def test_custom_prompt_length(self, recorder, terminal):
        ed = LineEditor(recorder, terminal, prompt=">>")
        ed.print_prompt()
        press(ed, *chars("ab"))
        assert terminal.column == 4
        assert terminal.line == ">>ab"

    def test_insert_after_left_arrow(self, editor, terminal):
        press(editor, *chars("ab"), LEFT, *chars("x"))
        assert editor.text == "axb"
        assert editor.cursor == 2
        assert terminal.column == 6
        assert terminal.line == "cmd>axb"

    def test_insert_at_start(self, editor, terminal):
        press(editor, *chars("a"), LEFT, LEFT, *chars("z"))
        assert editor.text == "za"
        assert terminal.column == 5


class TestArrows:
    def test_left_moves_one(self, editor, terminal):
        press(editor, *chars("abc"), LEFT)
        assert terminal.column == 6
        assert editor.cursor == 2

    def test_left_clamped_at_prompt(self, editor, terminal):
        press(editor, *chars("a"), LEFT, LEFT, LEFT)
        assert terminal.column == 4
        assert editor.cursor == 0

    def test_left_on_empty_buffer(self, editor, terminal):
        press(editor, LEFT)
        assert terminal.column == 4

    def test_right_clamped_at_end(self, editor, terminal):
        press(editor, *chars("ab"), RIGHT, RIGHT)
        assert terminal.column == 6
        assert editor.cursor == 2

    def test_right_moves_one_within_text(self, editor, terminal):
        press(editor, *chars("abc"), LEFT, LEFT, RIGHT)
        assert terminal.column == 6
        assert editor.cursor == 2

    def test_other_control_key_only_undoes_echo(self, editor, terminal):
        press(editor, *chars("ab"), TAB)
        assert editor.text == "ab"
        assert terminal.column == 6
        assert terminal.line == "cmd>ab"


class TestBackspace:
    def test_removes_last_char(self, editor, terminal):
        press(editor, *chars("abc"), BACKSPACE)
        assert editor.text == "ab"
        assert terminal.line == "cmd>ab"
        assert terminal.column == 6

    def test_removes_last_char_even_mid_line(self, editor):
        press(editor, *chars("abc"), LEFT, LEFT, BACKSPACE)
        assert editor.text == "ab"

    def test_empty_buffer_is_noop(self, editor, terminal):
        press(editor, BACKSPACE)
        assert editor.text == ""
        assert terminal.line == "cmd>"
        assert terminal.column == 4

    def test_each_backspace_shortens_by_one(self, editor):
        press(editor, *chars("hello"))
        for expected in ["hell", "hel", "he", "h", "", ""]:
            press(editor, BACKSPACE)
            assert editor.text == expected


class TestEscape:
    @pytest.mark.parametrize("text", ["", "x", "a much longer command line"])
    def test_always_empties_buffer(self, editor, terminal, text):
        press(editor, *chars(text), ESCAPE)
        assert editor.text == ""
        assert editor.cursor == 0
        assert terminal.line == "cmd>"
        assert terminal.column == 4

    def test_typing_after_escape(self, editor):
        press(editor, *chars("junk"), ESCAPE, *chars("ok"))
        assert editor.text == "ok"


class TestEnter:
    def test_commit_hands_line_to_handler(self, editor, recorder, terminal):
        press(editor, *chars("foo"), ENTER)
        assert recorder.commands == ["foo"]
        assert editor.text == ""
        assert terminal.lines[-1] == "cmd>foo"
        assert terminal.line == "cmd>"
        assert terminal.column == 4

    def test_repeat_is_stored_once(self, editor):
        press(editor, *chars("foo"), ENTER, *chars("foo"), ENTER)
        assert editor.history.entries == ("foo",)

    def test_non_adjacent_repeat_is_stored(self, editor):
        press(editor, *chars("foo"), ENTER, *chars("bar"), ENTER, *chars("foo"), ENTER)
        assert editor.history.entries == ("foo", "bar", "foo")

    def test_blank_lines_dispatched_but_not_stored(self, editor, recorder):
        press(editor, ENTER, *chars("   "), ENTER)
        assert recorder.commands == ["", "   "]
        assert len(editor.history) == 0

    def test_enter_stops_browsing(self, editor):
        press(editor, *chars("a"), ENTER, UP)
        assert editor.history.browsing
        press(editor, ENTER)
        assert editor.history.index is None
        assert editor.history.entries == ("a",)

    def test_exit_skips_prompt(self, recorder, terminal):
        recorder.exit_on = "bye"
        ed = LineEditor(recorder, terminal)
        ed.print_prompt()
        press(ed, *chars("bye"), ENTER)
        assert terminal.lines[-1] == "cmd>bye"
        assert terminal.line == ""
        assert ed.text == "bye"


class TestHistoryBrowsing:
    def test_up_with_empty_history(self, editor, terminal):
        press(editor, *chars("xy"), UP)
        assert editor.text == "xy"
        assert terminal.column == 6
        assert not editor.history.browsing

    def test_up_walks_back_and_clamps(self, editor):
        press(editor, *chars("a"), ENTER, *chars("b"), ENTER)
        press(editor, UP)
        assert editor.text == "b"
        press(editor, UP)
        assert editor.text == "a"
        press(editor, UP)
        assert editor.text == "a"
        assert editor.history.index == 0

    def test_down_without_browsing(self, editor, terminal):
        press(editor, *chars("a"), ENTER, *chars("xyz"), DOWN)
        assert editor.text == "xyz"
        assert terminal.column == 7

    def test_down_walks_forward_and_clamps(self, editor):
        press(editor, *chars("a"), ENTER, *chars("b"), ENTER, UP, UP)
        press(editor, DOWN)
        assert editor.text == "b"
        press(editor, DOWN)
        assert editor.text == "b"
        assert editor.history.index == 1

    def test_shorter_entry_erases_leftovers(self, editor, terminal):
        press(editor, *chars("a"), ENTER, *chars("longer"), UP)
        assert editor.text == "a"
        assert terminal.line == "cmd>a"
        assert terminal.column == 5

    def test_browsed_entry_can_be_edited(self, editor, recorder):
        press(editor, *chars("help"), ENTER, UP, *chars(" exit"), ENTER)
        assert recorder.commands == ["help", "help exit"]


class TestRun:
    def test_runs_until_exit(self, out):
        term = ScriptedTerminal([*chars("selftest"), ENTER, *chars("Q"), ENTER])
        handler = DefaultCommandHandler(terminal=term, stream=out)
        ed = LineEditor(handler, term, prompt="test>")
        asyncio.run(ed.run())

        text = out.getvalue()
        assert "Hi there!" in text
        assert "selftest command output" in text
        assert "Bye, bye..." in text
        assert ed.history.entries == ("selftest", "Q")
        assert term.lines == ["test>selftest", "test>Q"]
        assert not term.keys

    def test_unknown_command_keeps_looping(self, out):
        term = ScriptedTerminal([*chars("nope"), ENTER, *chars("exit"), ENTER])
        handler = DefaultCommandHandler(terminal=term, stream=out)
        asyncio.run(LineEditor(handler, term).run())
        assert "'nope' is not something I recognise" in out.getvalue()
        assert handler.is_exit_requested()

    def test_startup_info_once(self, terminal):
        rec = RecordingHandler(exit_on="x")
        terminal.keys.extend([*chars("x"), ENTER])
        asyncio.run(LineEditor(rec, terminal).run())
        assert rec.started == 1
        assert rec.commands == ["x"]

    def test_run_resets_state(self, terminal):
        rec = RecordingHandler(exit_on="x")
        ed = LineEditor(rec, terminal)
        terminal.keys.extend([*chars("a"), ENTER, *chars("x"), ENTER])
        asyncio.run(ed.run())
        assert ed.history.entries == ("a", "x")

        rec._exit = False
        terminal.keys.extend([*chars("x"), ENTER])
        asyncio.run(ed.run())
        assert ed.history.entries == ("x",)

    def test_no_key_read_while_command_suspended(self, terminal):
        class SlowHandler(CommandHandler):
            def __init__(self):
                self.seen = []
                self.done = False

            async def handle_command(self, line):
                before = len(terminal.keys)
                await asyncio.sleep(0)
                await asyncio.sleep(0)
                self.seen.append((line, before, len(terminal.keys)))
                if line == "stop":
                    self.done = True

            def is_exit_requested(self):
                return self.done

        slow = SlowHandler()
        terminal.keys.extend([*chars("go"), ENTER, *chars("stop"), ENTER])
        asyncio.run(LineEditor(slow, terminal).run())
        assert slow.seen == [("go", 5, 5), ("stop", 0, 0)]

    def test_command_errors_propagate(self, terminal):
        class Broken(CommandHandler):
            async def handle_command(self, line):
                raise RuntimeError("boom")

        terminal.keys.extend([*chars("x"), ENTER])
        with pytest.raises(RuntimeError):
            asyncio.run(LineEditor(Broken(), terminal).run())

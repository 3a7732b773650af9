import pytest

from cmdprompt.interface import (
    NOT_RECOGNISED,
    extract_bool,
    extract_float,
    extract_int,
    extract_param,
    normalise_bool_str,
    normalize_command,
    parse_arguments,
    resolve_command,
    tokenize,
    wants_help,
)

ALIASES = {"e": "exit", "quit": "exit", "q": "exit", "clear": "cls"}
KNOWN = {"exit", "cls", "help"}


class TestTokenize:
    def test_splits_on_any_whitespace(self):
        assert tokenize("  set   x:1\ty:2 ") == ["set", "x:1", "y:2"]

    def test_blank(self):
        assert tokenize("") == []
        assert tokenize("    ") == []


class TestParseArguments:
    def test_mixed_tokens(self):
        assert parse_arguments(["x:1", "y:true", "help"]) == {"x": "1", "y": "true", "help": ""}

    def test_names_lowercased_values_kept(self):
        assert parse_arguments(["Name:Bob"]) == {"name": "Bob"}

    def test_value_keeps_later_colons(self):
        assert parse_arguments(["url:http://x:80"]) == {"url": "http://x:80"}

    def test_empty_value(self):
        assert parse_arguments(["x:"]) == {"x": ""}

    def test_last_duplicate_wins(self):
        assert parse_arguments(["x:1", "X:2"]) == {"x": "2"}

    def test_nameless_token_kept_under_empty_name(self):
        assert parse_arguments([":1", "y:2"]) == {"": "1", "y": "2"}

    def test_fresh_map_each_call(self):
        first = parse_arguments(["a:1"])
        second = parse_arguments(["b:2"])
        assert first == {"a": "1"}
        assert second == {"b": "2"}


class TestResolve:
    def test_registered_name(self):
        assert resolve_command("help", ALIASES, KNOWN) == "help"

    @pytest.mark.parametrize("token", ["e", "quit", "q", "Q", "QUIT"])
    def test_aliases(self, token):
        assert resolve_command(token, ALIASES, KNOWN) == "exit"

    def test_registered_name_beats_alias(self):
        assert resolve_command("help", {"help": "exit"}, KNOWN) == "help"

    def test_unknown(self):
        assert resolve_command("bogus", ALIASES, KNOWN) == NOT_RECOGNISED

    def test_alias_only_resolution(self):
        assert resolve_command("cls", {"cls": "cls"}) == "cls"
        assert resolve_command("cls", {}) == NOT_RECOGNISED


class TestNormalize:
    def test_with_arguments(self):
        assert normalize_command("set x:1 y:true help", {"set": "set"}) == (
            "set",
            {"x": "1", "y": "true", "help": ""},
        )

    def test_aliases_normalize_identically(self):
        results = [normalize_command(line, ALIASES, KNOWN) for line in ("e", "quit", "q", "exit")]
        assert all(result == ("exit", {}) for result in results)

    @pytest.mark.parametrize("alias", ["e", "quit", "q"])
    def test_alias_keeps_arguments(self, alias):
        assert normalize_command(f"{alias} now:1", ALIASES, KNOWN) == normalize_command("exit now:1", ALIASES, KNOWN)

    def test_no_arguments_gives_empty_map(self):
        assert normalize_command("exit", ALIASES, KNOWN) == ("exit", {})

    def test_unknown_has_no_arguments(self):
        assert normalize_command("bogus x:1", ALIASES, KNOWN) == (NOT_RECOGNISED, None)

    def test_blank_line(self):
        assert normalize_command("   ", ALIASES, KNOWN) == (NOT_RECOGNISED, None)


class TestExtract:
    def test_wants_help(self):
        assert wants_help({"help": ""})
        assert wants_help({"x": "1", "help": "yes"})
        assert not wants_help({"x": "1"})
        assert not wants_help(None)

    def test_param(self):
        assert extract_param("X", {"x": "1"}) == "1"
        assert extract_param("y", {"x": "1"}, "d") == "d"
        assert extract_param("y", None) is None

    def test_int(self):
        assert extract_int("n", {"n": " 42 "}) == 42
        assert extract_int("n", {"n": "4.2"}, default=7) == 7
        assert extract_int("n", {}, default=3) == 3

    def test_float(self):
        assert extract_float("f", {"f": "2.5"}) == 2.5
        assert extract_float("f", {"f": "abc"}, default=1.0) == 1.0

    @pytest.mark.parametrize(
        "raw,expected",
        [("1", "true"), ("T", "true"), ("0", "false"), ("f", "false"), ("yes", "yes")],
    )
    def test_normalise_bool_str(self, raw, expected):
        assert normalise_bool_str(raw) == expected

    @pytest.mark.parametrize(
        "raw,expected",
        [("true", True), ("TRUE", True), ("1", True), ("t", True), ("false", False), ("0", False), ("f", False)],
    )
    def test_bool(self, raw, expected):
        assert extract_bool("b", {"b": raw}, default=not expected) is expected

    def test_bool_falls_back_to_default(self):
        assert extract_bool("b", {"b": "maybe"}, default=True) is True
        assert extract_bool("b", {}, default=False) is False

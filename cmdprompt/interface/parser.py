#!/usr/bin/env python3
# cmdprompt/interface/parser.py
from __future__ import annotations

"""
Command line normalization and argument helpers.

Responsibilities:
- Split a committed line into whitespace-separated tokens.
- Resolve the first token to a canonical command name (registered name or alias).
- Parse the remaining `name:value` tokens into a fresh argument map.
- Typed extraction of argument values for command implementations.
"""

from typing import Container, Mapping, Optional

# Canonical name reported for anything that does not resolve
NOT_RECOGNISED = "not_recognised"

_BOOL_SHORTHANDS = {
    "1": "true",
    "t": "true",
    "0": "false",
    "f": "false",
}


def tokenize(line: str) -> list[str]:
    """Split a raw command line on whitespace."""
    return line.split()


def parse_arguments(tokens: list[str]) -> dict[str, str]:
    """
    Build the argument map from `name:value` tokens.

    The name is lowercased, the value is whatever follows the first ':'
    (empty when there is no ':'). A token like ':v' is stored under the
    empty name. Later duplicates win.
    """
    arguments: dict[str, str] = {}
    for token in tokens:
        name, _, value = token.partition(":")
        arguments[name.lower()] = value
    return arguments


def resolve_command(
    token: str,
    alias_map: Mapping[str, str],
    known_names: Container[str] = (),
) -> str:
    """
    Return the canonical name for `token`, or NOT_RECOGNISED.

    A registered name resolves to itself; anything else goes through the
    alias map. Both lookups are case-insensitive.
    """
    key = token.lower()
    if not key:
        return NOT_RECOGNISED
    if key in known_names:
        return key
    return alias_map.get(key, NOT_RECOGNISED)


def normalize_command(
    line: str,
    alias_map: Mapping[str, str],
    known_names: Container[str] = (),
) -> tuple[str, Optional[dict[str, str]]]:
    """
    Normalize a committed line into (canonical name, arguments).

    Arguments are None when the command is not recognised.
    """
    tokens = tokenize(line)
    if not tokens:
        return NOT_RECOGNISED, None
    canonical = resolve_command(tokens[0], alias_map, known_names)
    if canonical == NOT_RECOGNISED:
        return NOT_RECOGNISED, None
    return canonical, parse_arguments(tokens[1:])


# ---------------------------------------------------------------------------
# Typed extraction
# ---------------------------------------------------------------------------

def wants_help(args: Optional[Mapping[str, str]]) -> bool:
    """Whether a `help` argument was passed."""
    return bool(args) and any(k.lower() == "help" for k in args)


def extract_param(
    name: str,
    args: Optional[Mapping[str, str]],
    default: Optional[str] = None,
) -> Optional[str]:
    """Raw string value of `name`, or `default` when absent."""
    if not args:
        return default
    return args.get(name.lower(), default)


def extract_int(name: str, args: Optional[Mapping[str, str]], default: int = 0) -> int:
    raw = extract_param(name, args)
    if raw is None:
        return default
    try:
        return int(raw.strip())
    except ValueError:
        return default


def extract_float(name: str, args: Optional[Mapping[str, str]], default: float = 0.0) -> float:
    raw = extract_param(name, args)
    if raw is None:
        return default
    try:
        return float(raw.strip())
    except ValueError:
        return default


def normalise_bool_str(value: str) -> str:
    """Map the shorthands 1/t/0/f to true/false; anything else passes through."""
    return _BOOL_SHORTHANDS.get(value.strip().lower(), value)


def extract_bool(name: str, args: Optional[Mapping[str, str]], default: bool = False) -> bool:
    raw = extract_param(name, args)
    if raw is None:
        return default
    normalised = normalise_bool_str(raw).strip().lower()
    if normalised == "true":
        return True
    if normalised == "false":
        return False
    return default

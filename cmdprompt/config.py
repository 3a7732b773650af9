#!/usr/bin/env python3
# cmdprompt/config.py
from __future__ import annotations

"""
Layered configuration (stdlib only).

Sources, later ones winning:
  1) DEFAULTS
  2) Files in the working directory, in this order:
     .env, config.ini, config.json, config.toml
  3) Environment variables named CMDPROMPT_<KEY>
  4) Overrides handed in by the caller (CLI flags); None means "not given"

Nested file sections are flattened to UPPER_SNAKE keys, so
`[prompt] color = "red"` in TOML sets PROMPT_COLOR.

Every recognised key is coerced and validated; a bad value raises
ValueError naming the key. Unrecognised keys end up in AppConfig.extra.
"""

import configparser
import json
import os
import re
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Mapping

from cmdprompt.ui import is_color

ENV_PREFIX = "CMDPROMPT_"

DEFAULTS: dict[str, Any] = {
    "PROMPT": None,                 # None -> editor default
    "PROMPT_COLOR": "cyan",
    "HANDLER_INFO": None,           # None -> handler default
    "SHOW_BANNER": True,
    "LOG_LEVEL": "WARNING",
    "LOG_FILE_PATH": None,
    "ESCAPE_TIMEOUT": 0.05,         # seconds
}

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class AppConfig:
    prompt: str | None
    prompt_color: str
    handler_info: str | None
    show_banner: bool
    log_level: str
    log_file_path: Path | None
    escape_timeout: float

    extra: dict[str, Any] = field(default_factory=dict)


# ---------- readers: each returns a flat UPPER_SNAKE mapping ----------

_ENV_LINE = re.compile(r"([A-Za-z_][A-Za-z0-9_]*)\s*=\s*(.*)")


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in "'\"":
        return value[1:-1]
    return value


def _flatten(data: Mapping[str, Any], prefix: str = "") -> dict[str, Any]:
    flat: dict[str, Any] = {}
    for key, value in data.items():
        name = f"{prefix}_{key}" if prefix else str(key)
        if isinstance(value, Mapping):
            flat.update(_flatten(value, name))
        else:
            flat[name.upper()] = value
    return flat


def _read_env(path: Path) -> dict[str, Any]:
    """KEY=VALUE lines; blank lines, comments and anything else are skipped."""
    values: dict[str, Any] = {}
    for line in path.read_text(encoding="utf-8").splitlines():
        line = line.strip()
        if line.startswith("#"):
            continue
        match = _ENV_LINE.fullmatch(line)
        if match:
            values[match.group(1).upper()] = _unquote(match.group(2).strip())
    return values


def _read_ini(path: Path) -> dict[str, Any]:
    # section names are only grouping here
    parser = configparser.ConfigParser()
    try:
        parser.read(path, encoding="utf-8")
    except configparser.Error:
        return {}
    return {key.upper(): value for section in parser.sections() for key, value in parser.items(section)}


def _read_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError:
        return {}
    return _flatten(data) if isinstance(data, dict) else {}


def _read_toml(path: Path) -> dict[str, Any]:
    try:
        with path.open("rb") as fh:
            return _flatten(tomllib.load(fh))
    except tomllib.TOMLDecodeError:
        return {}


CONFIG_FILES: tuple[tuple[str, Callable[[Path], dict[str, Any]]], ...] = (
    (".env", _read_env),
    ("config.ini", _read_ini),
    ("config.json", _read_json),
    ("config.toml", _read_toml),
)


def _from_files(base: Path) -> dict[str, Any]:
    merged: dict[str, Any] = {}
    for filename, reader in CONFIG_FILES:
        path = base / filename
        if path.is_file():
            merged.update(reader(path))
    return merged


def _from_environ(environ: Mapping[str, str]) -> dict[str, Any]:
    return {
        name[len(ENV_PREFIX):].upper(): value
        for name, value in environ.items()
        if name.startswith(ENV_PREFIX) and name != ENV_PREFIX
    }


# ---------- coercion ----------

_TRUTHY = frozenset({"1", "true", "yes", "y", "on"})
_FALSY = frozenset({"0", "false", "no", "n", "off"})


def _optional_text(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value)
    return None if text.strip().lower() in ("", "none") else text


def _flag(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    word = str(value).strip().lower()
    if word in _TRUTHY:
        return True
    if word in _FALSY:
        return False
    raise ValueError(f"expected a boolean, got {value!r}")


def _seconds(value: Any) -> float:
    if isinstance(value, bool):
        raise ValueError(f"expected a number, got {value!r}")
    try:
        seconds = float(str(value).strip())
    except ValueError:
        raise ValueError(f"expected a number, got {value!r}") from None
    if seconds <= 0:
        raise ValueError(f"must be > 0, got {value!r}")
    return seconds


def _level(value: Any) -> str:
    name = (_optional_text(value) or DEFAULTS["LOG_LEVEL"]).strip().upper()
    if name not in LOG_LEVELS:
        raise ValueError(f"must be one of {', '.join(LOG_LEVELS)}, got {value!r}")
    return name


def _color(value: Any) -> str:
    name = (_optional_text(value) or DEFAULTS["PROMPT_COLOR"]).strip().lower()
    if not is_color(name):
        raise ValueError(f"expected an ANSI color name or #RRGGBB, got {value!r}")
    return name


def _path(value: Any) -> Path | None:
    text = _optional_text(value)
    if text is None:
        return None
    return Path(os.path.expandvars(os.path.expanduser(text.strip()))).resolve()


# key -> (AppConfig field, coercer)
FIELDS: dict[str, tuple[str, Callable[[Any], Any]]] = {
    "PROMPT": ("prompt", _optional_text),
    "PROMPT_COLOR": ("prompt_color", _color),
    "HANDLER_INFO": ("handler_info", _optional_text),
    "SHOW_BANNER": ("show_banner", _flag),
    "LOG_LEVEL": ("log_level", _level),
    "LOG_FILE_PATH": ("log_file_path", _path),
    "ESCAPE_TIMEOUT": ("escape_timeout", _seconds),
}


def _build(raw: Mapping[str, Any]) -> AppConfig:
    values: dict[str, Any] = {}
    for key, (attr, coerce) in FIELDS.items():
        try:
            values[attr] = coerce(raw.get(key, DEFAULTS[key]))
        except ValueError as exc:
            raise ValueError(f"{key}: {exc}") from None
    extra = {key: value for key, value in raw.items() if key not in FIELDS}
    return AppConfig(**values, extra=extra)


# ---------- public API ----------

def load_config(
    overrides: Mapping[str, Any] | None = None,
    *,
    base: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> AppConfig:
    """
    Merge every source and validate the result.

    base: directory searched for config files (default: working directory).
    environ: mapping used instead of os.environ.
    """
    raw: dict[str, Any] = dict(DEFAULTS)
    raw.update(_from_files(base if base is not None else Path.cwd()))
    raw.update(_from_environ(os.environ if environ is None else environ))
    if overrides:
        raw.update({key.upper(): value for key, value in overrides.items() if value is not None})
    return _build(raw)

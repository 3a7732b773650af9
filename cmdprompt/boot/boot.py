#!/usr/bin/env python3
# cmdprompt/boot/boot.py
from __future__ import annotations
"""
Boot sequence for the command prompt.

Goals:
- Build every collaborator of the line editor in a fixed order.
- Report each step as [  OK  ] / [FAILED]; successful steps only when verbose.
"""

import logging
import platform
from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional

from cmdprompt.config import AppConfig, load_config
from cmdprompt.interface import (
    BaseTerminal,
    CommandHandler,
    DefaultCommandHandler,
    LineEditor,
    make_terminal,
)
from cmdprompt.ui import colorize, enable_windows_vt, init_logger, print_line

HandlerFactory = Callable[[AppConfig, BaseTerminal], CommandHandler]


@dataclass(slots=True)
class BootState:
    config: AppConfig
    logger: logging.Logger
    terminal: BaseTerminal
    handler: CommandHandler
    editor: LineEditor


def _step(label: str, fn: Callable[[], Any], *, verbose: bool = False) -> Any:
    """Run a boot step with status output."""
    try:
        out = fn()
    except Exception as exc:
        print_line(
            colorize(f"[FAILED] {label} ({type(exc).__name__}: {exc})", "red")
        )
        raise
    if verbose:
        print_line(colorize(f"[  OK  ] {label}", "green"))
    return out


def default_handler_factory(config: AppConfig, terminal: BaseTerminal) -> CommandHandler:
    return DefaultCommandHandler(
        config.handler_info,
        terminal=terminal,
        show_banner=config.show_banner,
    )


def boot_sequence(
    overrides: Optional[Mapping[str, Any]] = None,
    *,
    terminal: Optional[BaseTerminal] = None,
    handler_factory: HandlerFactory = default_handler_factory,
    verbose: bool = False,
) -> BootState:
    # ---------- console + env ----------
    _step("Enable ANSI sequences", enable_windows_vt, verbose=verbose)
    _step(
        f"Detect environment: {platform.system()} {platform.release()} / Python {platform.python_version()}",
        lambda: None,
        verbose=verbose,
    )

    # ---------- config ----------
    config: AppConfig = _step("Load configuration", lambda: load_config(overrides), verbose=verbose)

    # ---------- logging ----------
    logger = _step(
        "Initialize logger",
        lambda: init_logger(
            "cmdprompt",
            level=config.log_level,
            logfile=str(config.log_file_path) if config.log_file_path else None,
        ),
        verbose=verbose,
    )

    # ---------- interface ----------
    term = _step(
        "Open terminal",
        lambda: terminal if terminal is not None else make_terminal(escape_timeout=config.escape_timeout),
        verbose=verbose,
    )
    handler = _step("Build command handler", lambda: handler_factory(config, term), verbose=verbose)
    editor = _step(
        "Build line editor",
        lambda: LineEditor(handler, term, prompt=config.prompt, prompt_color=config.prompt_color),
        verbose=verbose,
    )
    _step("Boot complete", lambda: None, verbose=verbose)

    logger.debug("Booted with config %r", config)
    return BootState(
        config=config,
        logger=logger,
        terminal=term,
        handler=handler,
        editor=editor,
    )

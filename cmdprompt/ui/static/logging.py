#!/usr/bin/env python3
# cmdprompt/ui/static/logging.py
from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from typing import Optional, TextIO

from cmdprompt.ui.utils import colorize, enable_windows_vt, strip_ansi

CONSOLE_FORMAT = "[%(levelname)s] %(message)s"
FILE_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
FILE_DATEFMT = "%Y-%m-%d %H:%M:%S"

LOG_FILE_MAX_BYTES = 2_000_000
LOG_FILE_BACKUPS = 3


def _is_tty(stream: TextIO) -> bool:
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())


class ColorizingStreamHandler(logging.StreamHandler):
    """Console handler: level-colored on an ANSI tty, plain text everywhere else."""

    level_styles = {
        logging.DEBUG: "bright_black",
        logging.WARNING: "yellow",
        logging.ERROR: "red",
        logging.CRITICAL: "magenta",
    }

    def __init__(self, stream: Optional[TextIO] = None) -> None:
        super().__init__(stream)
        self.use_color = enable_windows_vt() and _is_tty(self.stream)

    def format(self, record: logging.LogRecord) -> str:
        message = strip_ansi(super().format(record))
        style = self.level_styles.get(record.levelno)
        if self.use_color and style:
            return colorize(message, style)
        return message


class PlainFormatter(logging.Formatter):
    """No escape sequences in the output, including ones carried by arguments."""

    def format(self, record: logging.LogRecord) -> str:
        return strip_ansi(super().format(record))


def _console_handler(level: int | str) -> logging.Handler:
    # stderr: keeps log lines off the line being edited
    handler = ColorizingStreamHandler(stream=sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    return handler


def _file_handler(path: str) -> logging.Handler:
    handler = RotatingFileHandler(
        path, maxBytes=LOG_FILE_MAX_BYTES, backupCount=LOG_FILE_BACKUPS, encoding="utf-8"
    )
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(PlainFormatter(FILE_FORMAT, datefmt=FILE_DATEFMT))
    return handler


def init_logger(
    name: str = "cmdprompt",
    level: int | str = logging.WARNING,
    logfile: Optional[str] = None,
) -> logging.Logger:
    """
    Configure the application logger once; repeated calls add no handlers.

    The console gets records from `level` up. With a logfile, everything
    from DEBUG up also goes to a rotating UTF-8 file.
    """
    logger = logging.getLogger(name)
    logger.propagate = False
    logger.setLevel(logging.DEBUG if logfile else level)

    kinds = {type(h) for h in logger.handlers}
    if ColorizingStreamHandler not in kinds:
        logger.addHandler(_console_handler(level))
    if logfile and RotatingFileHandler not in kinds:
        logger.addHandler(_file_handler(logfile))
    return logger

#!/usr/bin/env python3
# cmdprompt/cli.py
from __future__ import annotations

import argparse
import asyncio
import sys
from typing import Optional, Sequence

from cmdprompt import __version__
from cmdprompt.boot import boot_sequence
from cmdprompt.ui import print_line


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="cmdprompt", description="Interactive command prompt")
    p.add_argument("-v", "--version", action="version",
                   version=f"%(prog)s {__version__}")
    p.add_argument("-p", "--prompt", default=None,
                   help="Prompt text (default: cmd>)")
    p.add_argument("--prompt-color", default=None,
                   help="Prompt color: ANSI name such as cyan or bright_red, or #RRGGBB")
    p.add_argument("--info", dest="handler_info", default=None,
                   help="Info line printed at startup and in help")
    p.add_argument("--no-banner", dest="show_banner", action="store_false", default=None,
                   help="Skip the startup banner")
    p.add_argument("--log-level", default=None,
                   choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
                   help="Console log level (default: WARNING)")
    p.add_argument("--log-file", dest="log_file_path", default=None,
                   help="Also log everything to this rotating file")
    p.add_argument("--verbose", action="store_true", default=False,
                   help="Show boot steps")
    return p


def main(argv: Optional[Sequence[str]] = None) -> int:
    p = build_parser()
    args = p.parse_args(argv)

    overrides = {
        "PROMPT": args.prompt,
        "PROMPT_COLOR": args.prompt_color,
        "HANDLER_INFO": args.handler_info,
        "SHOW_BANNER": args.show_banner,
        "LOG_LEVEL": args.log_level,
        "LOG_FILE_PATH": args.log_file_path,
    }

    try:
        state = boot_sequence(overrides, verbose=args.verbose)
    except ValueError as exc:
        p.error(str(exc))

    try:
        with state.terminal:
            asyncio.run(state.editor.run())
    except KeyboardInterrupt:
        print_line()
        return 130
    except EOFError:
        return 0
    except Exception:
        state.logger.exception("Command prompt stopped on an unhandled error")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())

"""
gottodo command line entry point.

Usage:
    gottodo                    Open the task list (todos.json in cwd)
    gottodo --debug            Show the diagnostic log panel
    gottodo --file PATH        Use another task file
    gottodo --log-file PATH    Also append diagnostics to PATH
"""

from __future__ import annotations

import argparse
import sys

from gottodo.config import Settings


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gottodo",
        description="Keyboard-driven terminal task list",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable diagnostic output (debug panel)",
    )
    parser.add_argument(
        "--file",
        help="Path to the task file (default: ./todos.json, env GOTTODO_FILE)",
    )
    parser.add_argument(
        "--log-file",
        help="Append diagnostics to this file (requires --debug, env GOTTODO_LOG_FILE)",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    settings = Settings.from_args(args)

    from gottodo.logging_setup import setup_logging

    ring = setup_logging(debug=settings.debug, log_file=settings.log_file)

    from gottodo.app import run

    return run(settings=settings, ring=ring)


if __name__ == "__main__":
    sys.exit(main())

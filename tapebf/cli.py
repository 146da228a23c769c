from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from .bf_interpreter import BrainfuckError, BrainfuckInterpreter
from .repl import run_repl

logger = logging.getLogger(__name__)

MENU = (
    "Select an option: \n"
    "1. Run Brainfuck program from file\n"
    "2. Start Brainfuck REPL"
)


def _read_source(path: str) -> str:
    source_path = Path(path)
    if not source_path.exists():
        raise FileNotFoundError(f"Source file not found: {path}")
    return source_path.read_text(encoding="utf-8")


def run_file(path: str, max_steps: Optional[int] = None) -> int:
    try:
        program = _read_source(path)
    except (OSError, UnicodeDecodeError) as exc:
        print(str(exc), file=sys.stderr)
        return 1

    logger.debug("Loaded %s (%d characters)", path, len(program))
    interpreter = BrainfuckInterpreter()
    try:
        interpreter.execute(program, max_steps=max_steps)
    except BrainfuckError as exc:
        sys.stdout.flush()
        print(f"Execution error: {exc}", file=sys.stderr)
        return 1
    return 0


def run_menu(max_steps: Optional[int] = None) -> int:
    print(MENU)
    choice = sys.stdin.readline().strip()
    if choice == "1":
        print("Enter the file name: ")
        filename = sys.stdin.readline().strip()
        return run_file(filename, max_steps=max_steps)
    if choice == "2":
        run_repl(max_steps=max_steps)
        return 0
    print("Invalid choice!")
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Brainfuck tape interpreter")
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log interpreter activity to stderr",
    )
    parser.add_argument(
        "--max-steps",
        type=int,
        default=None,
        help="Abort a program after this many instructions (default: unlimited)",
    )
    subparsers = parser.add_subparsers(dest="command")
    run_parser = subparsers.add_parser("run", help="Run a Brainfuck program from a file")
    run_parser.add_argument("source", help="Path to Brainfuck source file")
    subparsers.add_parser("repl", help="Start the interactive prompt")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command == "run":
        return run_file(args.source, max_steps=args.max_steps)
    if args.command == "repl":
        run_repl(max_steps=args.max_steps)
        return 0
    return run_menu(max_steps=args.max_steps)


if __name__ == "__main__":
    raise SystemExit(main())

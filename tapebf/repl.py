from __future__ import annotations

import sys
from typing import Optional, TextIO

from .bf_interpreter import BrainfuckError, BrainfuckInterpreter

BANNER = "Brainfuck REPL. Type 'exit' to quit."
PROMPT = "> "
EXIT_TOKEN = "exit"


def run_repl(
    interpreter: Optional[BrainfuckInterpreter] = None,
    *,
    stdin: Optional[TextIO] = None,
    stdout: Optional[TextIO] = None,
    stderr: Optional[TextIO] = None,
    max_steps: Optional[int] = None,
) -> BrainfuckInterpreter:
    """Read one program per line and execute it on a shared interpreter.

    ',' inside a line reads from the same stream as the prompt. A failing
    line reports its error and leaves the tape as it was at the failure.
    """
    reader = stdin if stdin is not None else sys.stdin
    writer = stdout if stdout is not None else sys.stdout
    errors = stderr if stderr is not None else sys.stderr
    session = interpreter if interpreter is not None else BrainfuckInterpreter()

    print(BANNER, file=writer)
    while True:
        writer.write(PROMPT)
        writer.flush()
        line = reader.readline()
        if not line:
            print(file=writer)
            break
        program = line.strip()
        if program == EXIT_TOKEN:
            break
        if not program:
            continue
        try:
            session.execute(program, stdin=reader, stdout=writer, max_steps=max_steps)
        except BrainfuckError as exc:
            writer.flush()
            print(f"error: {exc}", file=errors)
    return session


__all__ = ["BANNER", "EXIT_TOKEN", "PROMPT", "run_repl"]

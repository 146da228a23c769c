from __future__ import annotations

import io
import logging
import sys
from dataclasses import dataclass, field
from typing import Iterator, List, Optional, TextIO, Tuple

from .tape import Tape

logger = logging.getLogger(__name__)


class BrainfuckError(RuntimeError):
    """Base class for fatal conditions raised while executing a program."""


class MalformedLoopError(BrainfuckError):
    """Raised when a bracket has no partner to jump to."""

    def __init__(self, message: str, position: int) -> None:
        super().__init__(message)
        self.position = position


class InputExhaustedError(BrainfuckError):
    """Raised when ',' needs a line and the input stream cannot supply one."""


class StepLimitExceeded(BrainfuckError):
    """Raised when Brainfuck execution exceeds the configured step budget."""


@dataclass
class ExecutionState:
    step: int
    pc: int
    command: Optional[str]
    pointer: int
    tape_start: int
    tape: List[int]
    output: str
    code_length: int


@dataclass
class BrainfuckInterpreter:
    """Tape and data pointer shared by every program run on this instance.

    Successive ``execute`` calls continue from whatever tape and pointer the
    previous call left behind; ``reset`` starts over with an empty tape.
    """

    tape: Tape = field(default_factory=Tape, repr=False)
    pointer: int = 0

    output_buffer: List[str] = field(init=False, repr=False, default_factory=list)

    def reset(self) -> None:
        self.tape.clear()
        self.pointer = 0
        self.output_buffer = []

    def execute(
        self,
        program: str,
        stdin: Optional[TextIO] = None,
        stdout: Optional[TextIO] = None,
        max_steps: Optional[int] = None,
    ) -> int:
        """Run ``program`` to completion and return the number of steps taken.

        Raises a ``BrainfuckError`` subclass on a fatal condition. Whatever
        the program did to the tape before failing is kept.
        """
        logger.debug("Executing %d-character program at pointer %d", len(program), self.pointer)
        self.output_buffer = []
        steps = 0
        try:
            for _, _, steps in self._dispatch(program, stdin, stdout, max_steps, False):
                pass
        except BrainfuckError as exc:
            logger.info("Execution aborted after %d steps: %s", steps, exc)
            raise
        logger.debug("Finished after %d steps; tape length %d", steps, len(self.tape))
        return steps

    def run(
        self,
        program: str,
        input_text: str = "",
        max_steps: Optional[int] = None,
    ) -> str:
        """Execute against in-memory streams and return everything written.

        Each ',' consumes one line of ``input_text``.
        """
        output = io.StringIO()
        self.execute(program, stdin=io.StringIO(input_text), stdout=output, max_steps=max_steps)
        return output.getvalue()

    def step(
        self,
        program: str,
        stdin: Optional[TextIO] = None,
        stdout: Optional[TextIO] = None,
        max_steps: Optional[int] = None,
        tape_window: int = 10,
    ) -> Iterator[ExecutionState]:
        self.output_buffer = []
        pc = 0
        steps = 0
        code_length = len(program)
        for pc, command, steps in self._dispatch(program, stdin, stdout, max_steps, True):
            yield self._snapshot(pc, command, steps, code_length, tape_window)

        # Emit final snapshot indicating completion
        yield self._snapshot(pc, None, steps, code_length, tape_window)

    def _dispatch(
        self,
        program: str,
        stdin: Optional[TextIO],
        stdout: Optional[TextIO],
        max_steps: Optional[int],
        record_output: bool,
    ) -> Iterator[Tuple[int, str, int]]:
        reader = stdin if stdin is not None else sys.stdin
        writer = stdout if stdout is not None else sys.stdout
        loop_stack: List[int] = []
        pc = 0
        steps = 0
        code_length = len(program)

        while pc < code_length:
            if max_steps is not None and steps >= max_steps:
                raise StepLimitExceeded("Brainfuck program exceeded allowed step count")

            command = program[pc]
            pc = self._execute_instruction(
                command, pc, program, loop_stack, reader, writer, record_output
            )
            steps += 1
            yield pc, command, steps

    def _execute_instruction(
        self,
        command: str,
        pc: int,
        program: str,
        loop_stack: List[int],
        reader: TextIO,
        writer: TextIO,
        record_output: bool = False,
    ) -> int:
        if command == ">":
            self.pointer += 1
        elif command == "<":
            if self.pointer > 0:
                self.pointer -= 1
        elif command == "+":
            self.tape.write(self.pointer, self.tape.read(self.pointer) + 1)
        elif command == "-":
            self.tape.write(self.pointer, self.tape.read(self.pointer) - 1)
        elif command == ".":
            char = chr(self.tape.peek(self.pointer))
            writer.write(char)
            writer.flush()
            if record_output:
                self.output_buffer.append(char)
        elif command == ",":
            # Enter alone stores the newline itself (10)
            line = self._read_line(reader)
            self.tape.write(self.pointer, ord(line[0]))
        elif command == "[":
            if self.tape.peek(self.pointer) == 0:
                pc = self._find_matching_close(program, pc)
            else:
                loop_stack.append(pc)
        elif command == "]":
            if not loop_stack:
                raise MalformedLoopError(
                    "Unmatched ']' at position {}".format(pc), position=pc
                )
            if self.tape.peek(self.pointer) != 0:
                pc = loop_stack[-1]
            else:
                loop_stack.pop()
        return pc + 1

    @staticmethod
    def _find_matching_close(program: str, start: int) -> int:
        depth = 1
        index = start
        while depth > 0:
            index += 1
            if index >= len(program):
                raise MalformedLoopError(
                    "Unmatched '[' at position {}".format(start), position=start
                )
            if program[index] == "[":
                depth += 1
            elif program[index] == "]":
                depth -= 1
        return index

    @staticmethod
    def _read_line(reader: TextIO) -> str:
        try:
            line = reader.readline()
        except OSError as exc:
            raise InputExhaustedError(f"Failed to read input: {exc}") from exc
        if not line:
            raise InputExhaustedError("Input stream is exhausted")
        return line

    def _snapshot(
        self,
        pc: int,
        command: Optional[str],
        step: int,
        code_length: int,
        tape_window: int,
    ) -> ExecutionState:
        start = max(0, self.pointer - tape_window)
        end = self.pointer + tape_window + 1
        return ExecutionState(
            step=step,
            pc=pc,
            command=command,
            pointer=self.pointer,
            tape_start=start,
            tape=self.tape.window(start, end),
            output="".join(self.output_buffer),
            code_length=code_length,
        )


__all__ = [
    "BrainfuckError",
    "BrainfuckInterpreter",
    "ExecutionState",
    "InputExhaustedError",
    "MalformedLoopError",
    "StepLimitExceeded",
]

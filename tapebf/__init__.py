from .bf_interpreter import (
    BrainfuckError,
    BrainfuckInterpreter,
    ExecutionState,
    InputExhaustedError,
    MalformedLoopError,
    StepLimitExceeded,
)
from .repl import run_repl
from .tape import Tape

__all__ = [
    "BrainfuckError",
    "BrainfuckInterpreter",
    "ExecutionState",
    "InputExhaustedError",
    "MalformedLoopError",
    "StepLimitExceeded",
    "Tape",
    "run_repl",
]

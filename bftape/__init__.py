"""bftape: Brainfuck on a fixed-size circular byte tape."""

from .errors import (
    BrainfuckError,
    FileAccessError,
    InputParseError,
    MalformedProgram,
    StepLimitExceeded,
    UsageError,
)
from .interpreter import BrainfuckInterpreter, Instruction
from .io import BufferedIO, ConsoleIO, TokenReader
from .runner import run_persistent, run_program
from .tape import DEFAULT_TAPE_SIZE, Tape

__version__ = "0.1.0"

__all__ = [
    "BrainfuckError",
    "BrainfuckInterpreter",
    "BufferedIO",
    "ConsoleIO",
    "DEFAULT_TAPE_SIZE",
    "FileAccessError",
    "InputParseError",
    "Instruction",
    "MalformedProgram",
    "StepLimitExceeded",
    "Tape",
    "TokenReader",
    "UsageError",
    "run_persistent",
    "run_program",
]

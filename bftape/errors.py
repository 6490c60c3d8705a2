"""
Exception hierarchy for the tape interpreter.

All errors raised by the engine and its collaborators derive from
BrainfuckError so hosts can catch a single type.
"""

from typing import Optional


class BrainfuckError(Exception):
    """Base class for interpreter errors."""


class MalformedProgram(BrainfuckError):
    """A ']' was reached with no open '[' on the loop stack."""

    def __init__(self, position: int, message: Optional[str] = None):
        self.position = position
        super().__init__(message or f"Unmatched ']' at position {position}")


class InputParseError(BrainfuckError):
    """The host could not produce an integer for ','."""

    def __init__(self, text: Optional[str], message: Optional[str] = None):
        self.text = text
        if message is None:
            message = "Reached end of input" if text is None else f"Not an integer: {text!r}"
        super().__init__(message)


class FileAccessError(BrainfuckError):
    def __init__(self, path: str, reason: str = "cannot open file"):
        self.path = path
        self.reason = reason
        super().__init__(f"{path}: {reason}")


class UsageError(BrainfuckError):
    """Malformed command-line flags or configuration values."""


class StepLimitExceeded(BrainfuckError):
    def __init__(self, position: int, steps: int):
        self.position = position
        self.steps = steps
        super().__init__(f"Step limit of {steps} exceeded at position {position}")

"""
Host I/O bindings for the interpreter.

The engine calls emit_byte() on '.' and request_integer() on ','. Any object
with those two methods can serve as a host; ConsoleIO talks to the terminal
and BufferedIO replays scripted inputs and collects the output.
"""

import sys
from collections import deque
from typing import Deque, Iterable, List, Optional, Protocol, TextIO, Union

from .errors import InputParseError


class HostIO(Protocol):
    def emit_byte(self, value: int) -> None: ...

    def request_integer(self) -> int: ...


def parse_integer(text: Optional[str]) -> int:
    """Parse one input token as an integer, raising InputParseError."""
    if text is None:
        raise InputParseError(None)
    try:
        return int(text.strip())
    except ValueError:
        raise InputParseError(text) from None


class TokenReader:
    """Reads whitespace-delimited tokens from a text stream.

    Tokens left over on a line are kept for the next call, so the REPL and
    the ',' instruction can share one stream the way a terminal user expects.
    """

    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream
        self._pending: Deque[str] = deque()

    def next_token(self) -> Optional[str]:
        """Return the next token, or None at end of input."""
        stream = self.stream if self.stream is not None else sys.stdin
        while not self._pending:
            line = stream.readline()
            if not line:
                return None
            self._pending.extend(line.split())
        return self._pending.popleft()


class ConsoleIO:
    """Terminal host: bytes go to stdout, integers come from stdin tokens."""

    def __init__(self, reader: Optional[TokenReader] = None, out: Optional[TextIO] = None,
                 echo: bool = True):
        self.reader = reader or TokenReader()
        self.out = out
        self.echo = echo

    def emit_byte(self, value: int) -> None:
        if not self.echo:
            return
        out = self.out if self.out is not None else sys.stdout
        buffer = getattr(out, "buffer", None)
        if buffer is None:
            # Plain text streams such as StringIO
            out.write(chr(value))
            out.flush()
            return
        # Raw byte, not the terminal encoding of chr(value); flush pending text first
        out.flush()
        buffer.write(bytes([value & 0xFF]))
        buffer.flush()

    def request_integer(self) -> int:
        return parse_integer(self.reader.next_token())


class BufferedIO:
    """In-memory host for library callers and tests."""

    def __init__(self, inputs: Iterable[Union[int, str]] = ()):
        self.inputs: Deque[Union[int, str]] = deque(inputs)
        self.output = bytearray()
        self.requests = 0

    def emit_byte(self, value: int) -> None:
        self.output.append(value & 0xFF)

    def request_integer(self) -> int:
        self.requests += 1
        if not self.inputs:
            raise InputParseError(None)
        value = self.inputs.popleft()
        if isinstance(value, int):
            return value
        return parse_integer(value)

    def feed(self, *values: Union[int, str]):
        self.inputs.extend(values)

    @property
    def text(self) -> str:
        return self.output.decode("latin-1")

    def emitted(self) -> List[int]:
        return list(self.output)

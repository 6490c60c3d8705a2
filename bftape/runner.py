from typing import Iterable, Optional, Union

from .interpreter import BrainfuckInterpreter
from .io import BufferedIO
from .tape import DEFAULT_TAPE_SIZE


def run_program(code: str, inputs: Iterable[Union[int, str]] = (),
                tape_size: int = DEFAULT_TAPE_SIZE, step_limit: Optional[int] = None) -> bytes:
    """Execute code on a fresh tape with scripted inputs, return the emitted bytes.
    Stateless: every call builds a new interpreter.
    """
    io = BufferedIO(inputs)
    itp = BrainfuckInterpreter(tape_size, io=io, step_limit=step_limit)
    itp.parse(code)
    return bytes(io.output)


def run_persistent(itp: BrainfuckInterpreter, code: str,
                   inputs: Iterable[Union[int, str]] = ()) -> bytes:
    """Run code on an existing interpreter without resetting its tape.
    Inputs are queued on the interpreter's BufferedIO; returns only the bytes
    emitted by this call.
    """
    io = itp.io
    if not isinstance(io, BufferedIO):
        raise TypeError("run_persistent requires an interpreter with BufferedIO")
    io.feed(*inputs)
    start = len(io.output)
    itp.parse(code)
    return bytes(io.output[start:])

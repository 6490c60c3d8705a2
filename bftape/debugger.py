"""
Step-by-step trace printer.

Hooked into the interpreter as its trace callback, it prints one line per
executed instruction: the symbol, the whole tape as two-digit hex bytes with
the cursor cell in parentheses, and the byte emitted by that instruction.

    [+] 00(01)00000000
    [.] 00(41)00000000    A
"""

import sys
from typing import Optional, TextIO


def format_tape(snapshot: bytes, cursor: int) -> str:
    """Render tape cells as hex, bracketing the cell under the cursor."""
    parts = []
    for i, value in enumerate(snapshot):
        if i == cursor:
            parts.append(f"({value:02x})")
        else:
            parts.append(f"{value:02x}")
    return "".join(parts)


def format_trace_line(symbol: str, snapshot: bytes, cursor: int,
                      last_emitted: Optional[int]) -> str:
    line = f"[{symbol}] {format_tape(snapshot, cursor)}"
    if last_emitted is not None:
        line += f"    {chr(last_emitted)}"
    return line


class TracePrinter:
    """Trace callback that writes formatted lines to a stream."""

    def __init__(self, out: Optional[TextIO] = None):
        self.out = out
        self.lines_printed = 0

    def __call__(self, symbol: str, snapshot: bytes, cursor: int,
                 last_emitted: Optional[int]):
        out = self.out if self.out is not None else sys.stdout
        print(format_trace_line(symbol, snapshot, cursor, last_emitted), file=out)
        self.lines_printed += 1

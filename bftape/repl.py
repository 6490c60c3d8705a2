"""
Interactive shell.

Each prompt reads one whitespace-delimited token and runs it against the
same interpreter, so the tape carries over between lines. Errors are
reported and the next prompt is shown.
"""

import logging
import sys
from typing import Optional, TextIO

from .errors import BrainfuckError
from .interpreter import BrainfuckInterpreter
from .io import TokenReader

logger = logging.getLogger(__name__)


def command_line(itp: BrainfuckInterpreter, reader: TokenReader, prompt: str = ">>> ",
                 out: Optional[TextIO] = None, err: Optional[TextIO] = None) -> int:
    """Run the read-eval-print loop until end of input; return lines executed."""
    out = out if out is not None else sys.stdout
    err = err if err is not None else sys.stderr
    executed = 0
    while True:
        out.write(prompt)
        out.flush()
        source = reader.next_token()
        if source is None:
            out.write("\n")
            return executed
        traced = getattr(itp.trace, "lines_printed", 0)
        error = None
        try:
            itp.parse(source)
            executed += 1
        except BrainfuckError as e:
            logger.info("Line %r failed: %s", source, e)
            error = e
        # Trace lines already end with a newline
        if getattr(itp.trace, "lines_printed", 0) == traced:
            out.write("\n")
        if error is not None:
            out.flush()
            print(f"error: {error}", file=err)

#!/usr/bin/env python3
"""
Brainfuck Interpreter

Brainfuck is an esoteric programming language with only 8 commands:
    >   Move the pointer to the right (wraps to cell 0 past the end)
    <   Move the pointer to the left (wraps to the last cell before 0)
    +   Increment the memory cell at the pointer (255 + 1 = 0)
    -   Decrement the memory cell at the pointer (0 - 1 = 255)
    .   Output the byte in the cell at the pointer
    ,   Read an integer from the host and store its low 8 bits
    [   Mark the start of a loop
    ]   Jump back to the matching [ if the cell at the pointer is nonzero

All other characters are treated as comments and ignored.

Loops are resolved while scanning: '[' pushes its position on a loop stack
and ']' either jumps back to the position on top of the stack or pops it.
A loop body therefore always runs at least once.
"""

import logging
from enum import Enum
from typing import Callable, List, Optional

from .errors import MalformedProgram, StepLimitExceeded
from .io import BufferedIO, HostIO
from .tape import DEFAULT_TAPE_SIZE, Tape

logger = logging.getLogger(__name__)

# trace(symbol, tape_snapshot, cursor_index, last_emitted_byte)
TraceFn = Callable[[str, bytes, int, Optional[int]], None]


class Instruction(Enum):
    ADVANCE = '>'
    RETREAT = '<'
    INCREMENT = '+'
    DECREMENT = '-'
    OUTPUT = '.'
    INPUT = ','
    LOOP_START = '['
    LOOP_END = ']'

    @classmethod
    def from_symbol(cls, symbol: str) -> Optional['Instruction']:
        """Return the instruction for symbol, or None for a comment character."""
        return _SYMBOLS.get(symbol)


_SYMBOLS = {instr.value: instr for instr in Instruction}


class BrainfuckInterpreter:
    """Owns one tape and runs source text against it.

    The tape and cursor live as long as the interpreter; the program counter
    and loop stack are rebuilt for every parse() call.
    """

    def __init__(self, tape_size: int = DEFAULT_TAPE_SIZE, io: Optional[HostIO] = None,
                 trace: Optional[TraceFn] = None, step_limit: Optional[int] = None):
        self.tape = Tape(tape_size)
        self.io = io if io is not None else BufferedIO()
        self.trace = trace
        # 0 means unlimited, as in the config layer
        self.step_limit = step_limit or None
        self.instruction_pointer = 0
        self.loop_stack: List[int] = []
        self.last_emitted: Optional[int] = None
        self.input_reads = 0
        self.output_writes = 0

    @property
    def cursor(self) -> int:
        return self.tape.cursor

    def reset(self):
        """Clear the tape, the cursor and any leftover loop markers."""
        self.tape.reset()
        self.loop_stack = []
        self.instruction_pointer = 0
        self.last_emitted = None

    def parse(self, source: str):
        """Execute source against the current tape state.

        Raises MalformedProgram on a ']' with no open loop. Instructions
        already executed keep their effect on the tape.
        """
        self.instruction_pointer = 0
        self.loop_stack = []
        steps = 0
        logger.debug("Executing %d characters from cursor %d", len(source), self.tape.cursor)

        while self.instruction_pointer < len(source):
            symbol = source[self.instruction_pointer]
            instr = Instruction.from_symbol(symbol)
            if instr is not None:
                steps += 1
                if self.step_limit is not None and steps > self.step_limit:
                    raise StepLimitExceeded(self.instruction_pointer, self.step_limit)
                self._dispatch(instr)
                if self.trace is not None:
                    self.trace(symbol, self.tape.snapshot(), self.tape.cursor, self.last_emitted)
                    self.last_emitted = None
            self.instruction_pointer += 1

        if self.loop_stack:
            logger.debug("Discarding %d unclosed loop marker(s)", len(self.loop_stack))
        self.loop_stack = []
        logger.debug("Finished after %d instructions", steps)

    def _dispatch(self, instr: Instruction):
        tape = self.tape
        if instr is Instruction.ADVANCE:
            tape.advance()

        elif instr is Instruction.RETREAT:
            tape.retreat()

        elif instr is Instruction.INCREMENT:
            tape.increment()

        elif instr is Instruction.DECREMENT:
            tape.decrement()

        elif instr is Instruction.OUTPUT:
            value = tape.read()
            self.io.emit_byte(value)
            self.last_emitted = value
            self.output_writes += 1

        elif instr is Instruction.INPUT:
            # A failed request leaves the cell untouched
            value = self.io.request_integer()
            tape.write(value)
            self.input_reads += 1

        elif instr is Instruction.LOOP_START:
            self.loop_stack.append(self.instruction_pointer)

        elif instr is Instruction.LOOP_END:
            if not self.loop_stack:
                raise MalformedProgram(self.instruction_pointer)
            if tape.read() != 0:
                # The scan advances past the '[' so it is not pushed again
                self.instruction_pointer = self.loop_stack[-1]
            else:
                self.loop_stack.pop()

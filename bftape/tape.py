"""
Circular byte tape.

A fixed number of unsigned 8-bit cells backed by a numpy uint8 array, with
an index cursor that wraps at both ends.
"""

import logging

import numpy as np

logger = logging.getLogger(__name__)

DEFAULT_TAPE_SIZE = 16
MAX_TAPE_SIZE = 1 << 24


class Tape:
    """Fixed-size tape of 8-bit cells with a wraparound cursor."""

    def __init__(self, size: int = DEFAULT_TAPE_SIZE):
        if not 1 <= size <= MAX_TAPE_SIZE:
            raise ValueError(f"Tape size must be between 1 and {MAX_TAPE_SIZE}, got {size}")
        self.cells = np.zeros(size, dtype=np.uint8)
        self.cursor = 0

    @property
    def size(self) -> int:
        return len(self.cells)

    def advance(self):
        self.cursor = (self.cursor + 1) % self.size

    def retreat(self):
        self.cursor = (self.cursor - 1 + self.size) % self.size

    def increment(self):
        # Python ints avoid numpy scalar overflow warnings
        self.cells[self.cursor] = (int(self.cells[self.cursor]) + 1) % 256

    def decrement(self):
        self.cells[self.cursor] = (int(self.cells[self.cursor]) - 1) % 256

    def read(self) -> int:
        return int(self.cells[self.cursor])

    def write(self, value: int):
        """Store the low 8 bits of value at the cursor."""
        self.cells[self.cursor] = int(value) & 0xFF

    def reset(self):
        """Zero every cell and move the cursor back to 0."""
        self.cells.fill(0)
        self.cursor = 0
        logger.debug("Tape reset (%d cells)", self.size)

    def snapshot(self) -> bytes:
        return self.cells.tobytes()

    def __len__(self) -> int:
        return self.size

    def __repr__(self) -> str:
        return f"Tape(size={self.size}, cursor={self.cursor})"

# beam_core/models.py
"""Core dataclasses and enums for the beam timeline counter.

Coordinate conventions:
- Grid indices (row, col) address characters; top-left is (0, 0).
- Rows grow downward. A path advances exactly one row per generation.
- Signatures are raw ``bytes`` built from ``Move`` symbols, one per row advanced.
"""
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import List

START_CHAR = "S"
DEFLECTOR_CHAR = "^"


class CellKind(str, Enum):
    START = "start"            # 'S'
    DEFLECTOR = "deflector"    # '^'
    PASS = "pass"              # '.' or anything else

    @staticmethod
    def from_char(ch: str) -> "CellKind":
        if ch == START_CHAR:
            return CellKind.START
        if ch == DEFLECTOR_CHAR:
            return CellKind.DEFLECTOR
        return CellKind.PASS


class Move(str, Enum):
    DOWN = "D"
    LEFT = "L"
    RIGHT = "R"

    @property
    def symbol(self) -> bytes:
        return self.value.encode("ascii")

    @property
    def offset(self) -> int:
        """Column delta applied when this move is taken."""
        if self is Move.LEFT:
            return -1
        if self is Move.RIGHT:
            return 1
        return 0


@dataclass(frozen=True)
class Path:
    """A single in-flight path.

    Never mutated: every generation replaces it by zero, one or two new
    ``Path`` values built through ``advance``.
    """
    row: int
    col: int
    signature: bytes = b""

    def advance(self, move: Move) -> "Path":
        # Imported here to keep models free of module-level cycles.
        from .signature import extend
        return Path(row=self.row + 1, col=self.col + move.offset, signature=extend(self.signature, move))


@dataclass
class GridSpec:
    """Holds raw parsed information from a grid text file.

    Attributes
    ----------
    rows : List[str]
        Grid rows in file order, newline stripped, blank lines dropped.
    source : str
        Where the rows came from (a path, or ``"<memory>"``).
    """
    rows: List[str]
    source: str = "<memory>"

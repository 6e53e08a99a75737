# beam_core/grid.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, Optional, Tuple
from .models import CellKind, GridSpec, START_CHAR, DEFLECTOR_CHAR


class GridFormatError(ValueError):
    """Raised for grids that are empty or not rectangular."""


class MissingStartError(GridFormatError):
    """Raised in strict mode when row 0 carries no start marker."""


@dataclass(frozen=True)
class Grid:
    """Grid stores the immutable character matrix of one run (no simulation here).

    - `rows` holds one string per row, all of length `width`.
    - Cells are 'S' (start, row 0), '^' (deflector) or anything else (pass-through).
    """
    rows: Tuple[str, ...]

    def __post_init__(self) -> None:
        if not self.rows:
            raise GridFormatError("Grid has no rows.")
        width = len(self.rows[0])
        if width == 0:
            raise GridFormatError("Grid row 0 is empty.")
        for r, row in enumerate(self.rows):
            if len(row) != width:
                raise GridFormatError(f"Ragged grid: row 0 has {width} cols but row {r} has {len(row)}.")

    @property
    def height(self) -> int:
        return len(self.rows)

    @property
    def width(self) -> int:
        return len(self.rows[0])

    @property
    def start_col(self) -> Optional[int]:
        """Column of the first start marker on row 0, or None when absent."""
        idx = self.rows[0].find(START_CHAR)
        return idx if idx >= 0 else None

    def in_bounds(self, r: int, c: int) -> bool:
        return 0 <= r < self.height and 0 <= c < self.width

    def cell(self, r: int, c: int) -> str:
        if not self.in_bounds(r, c):
            raise IndexError(f"Cell ({r}, {c}) out of bounds for {self.height}x{self.width} grid")
        return self.rows[r][c]

    def kind(self, r: int, c: int) -> CellKind:
        return CellKind.from_char(self.cell(r, c))

    def is_deflector(self, r: int, c: int) -> bool:
        return self.cell(r, c) == DEFLECTOR_CHAR

    def deflector_count(self) -> int:
        return sum(row.count(DEFLECTOR_CHAR) for row in self.rows)

    @classmethod
    def from_lines(cls, lines: Iterable[str]) -> "Grid":
        return cls(rows=tuple(lines))

    @classmethod
    def from_spec(cls, spec: GridSpec) -> "Grid":
        return cls.from_lines(spec.rows)

    # Pretty printers useful during development
    def to_ascii(self) -> str:
        return "\n".join(self.rows)

    def summary(self) -> str:
        start = self.start_col
        return (
            f"Grid {self.height}x{self.width}\n"
            f"Start column: {start if start is not None else 'none'}\n"
            f"Deflectors: {self.deflector_count()}\n"
        )

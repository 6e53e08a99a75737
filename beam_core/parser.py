# beam_core/parser.py
from __future__ import annotations
import logging
import os
from typing import Iterable, List, Union

from .grid import Grid, GridFormatError, MissingStartError
from .models import GridSpec

logger = logging.getLogger(__name__)

PathLike = Union[str, "os.PathLike[str]"]


def _normalize(line: str) -> str:
    """Strip the line terminator only; interior and trailing spaces are grid cells."""
    return line.rstrip("\r\n")


def parse_lines(lines: Iterable[str], source: str = "<memory>") -> GridSpec:
    rows: List[str] = []
    for ln in lines:
        ln = _normalize(ln)
        if not ln:
            continue
        rows.append(ln)

    if not rows:
        raise GridFormatError(f"{source}: grid not found or empty.")
    ncols = len(rows[0])
    for r, row in enumerate(rows):
        if len(row) != ncols:
            raise GridFormatError(
                f"{source}: non-rectangular grid: row 0 has {ncols} cols but row {r} has {len(row)}."
            )
    return GridSpec(rows=rows, source=source)


def parse_grid(path: PathLike) -> GridSpec:
    """Read a grid text file.

    OSError from opening or reading the file is left to the caller; bytes
    that are not UTF-8 raise GridFormatError.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            raw_lines = f.readlines()
    except UnicodeDecodeError as e:
        raise GridFormatError(f"{os.fspath(path)}: not UTF-8 text ({e.reason} at byte {e.start})") from e
    return parse_lines(raw_lines, source=os.fspath(path))


def load_grid(path: PathLike) -> Grid:
    return Grid.from_spec(parse_grid(path))


def resolve_start(grid: Grid, strict: bool = False) -> int:
    """Return the start column of ``grid``.

    Without a marker on row 0 this falls back to column 0 and logs a
    warning, unless ``strict`` is set, in which case MissingStartError is raised.
    """
    col = grid.start_col
    if col is not None:
        return col
    if strict:
        raise MissingStartError("No start marker 'S' found on row 0.")
    logger.warning("No start marker 'S' found on row 0; defaulting to column 0")
    return 0

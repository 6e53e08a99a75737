# beam_core/simulator.py
"""Beam timeline engine.

Breadth-first, generation-by-generation simulation. Every live path
advances one row per generation:

- past the last row it exits, and its signature goes into the dedup set;
- onto a '^' it splits into a left ('L') and a right ('R') successor,
  each only if that column exists;
- onto anything else it continues straight down ('D').

Duplicates are collapsed only at the boundary, never mid-flight.
"""
from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Tuple, Union

from .dedup import SignatureSet
from .frontier import Frontier
from .grid import Grid
from .models import Move, Path
from .signature import EMPTY, decode

logger = logging.getLogger(__name__)

DEFAULT_TRACE_EVERY = 10


@dataclass
class GenerationStats:
    """Counters for a single generation."""
    consumed: int = 0
    produced: int = 0
    exits: int = 0
    new_signatures: int = 0
    dead_ends: int = 0
    deflections: int = 0


@dataclass
class SimulationResult:
    count: int
    generations: int
    peak_frontier: int
    dead_ends: int
    deflections: int
    exits: int
    signatures: SignatureSet = field(repr=False)

    def summary(self) -> str:
        return (
            f"Distinct exit signatures: {self.count}\n"
            f"Generations: {self.generations}\n"
            f"Peak frontier: {self.peak_frontier}\n"
            f"Exits (with duplicates): {self.exits}\n"
            f"Dead ends: {self.dead_ends}\n"
            f"Deflections: {self.deflections}\n"
        )


def expand_path(grid: Grid, path: Path) -> List[Path]:
    """
    Apply the branching rule to one path that has not yet exited.

    Returns
    -------
    Zero, one or two successors. An empty list means the path hit a
    deflector with no room on either side and dead-ends.
    """
    next_row = path.row + 1
    if grid.is_deflector(next_row, path.col):
        successors: List[Path] = []
        if path.col > 0:
            successors.append(path.advance(Move.LEFT))
        if path.col < grid.width - 1:
            successors.append(path.advance(Move.RIGHT))
        return successors
    return [path.advance(Move.DOWN)]


def _trace(path: Path, trace_every: int) -> None:
    if path.row % trace_every == 0:
        logger.debug("At position (%d, %d) with signature '%s'", path.row, path.col, decode(path.signature))


def step_generation(
    grid: Grid,
    frontier: Frontier,
    dedup: SignatureSet,
    trace: bool = False,
    trace_every: int = DEFAULT_TRACE_EVERY,
) -> Tuple[Frontier, GenerationStats]:
    """Advance every path in ``frontier`` by one row and return the next frontier."""
    stats = GenerationStats()
    next_frontier = Frontier()

    for p in frontier:
        stats.consumed += 1
        if trace:
            _trace(p, trace_every)

        if p.row + 1 >= grid.height:
            stats.exits += 1
            if dedup.add(p.signature):
                stats.new_signatures += 1
            continue

        successors = expand_path(grid, p)
        if len(successors) != 1 or successors[0].col != p.col:
            stats.deflections += 1
            if not successors:
                stats.dead_ends += 1
        next_frontier.extend(successors)

    stats.produced = len(next_frontier)
    return next_frontier, stats


def _check_starts(grid: Grid, starts: Iterable[int]) -> List[int]:
    cols = list(starts)
    if not cols:
        raise ValueError("At least one start column is required.")
    for c in cols:
        if not 0 <= c < grid.width:
            raise ValueError(f"Start column {c} outside grid of width {grid.width}.")
    return cols


def simulate(
    grid: Grid,
    starts: Union[int, Iterable[int]],
    trace: bool = False,
    trace_every: int = DEFAULT_TRACE_EVERY,
) -> SimulationResult:
    """
    Run the generation loop until no path is left alive.

    Parameters
    ----------
    grid : Grid
        Read-only grid context.
    starts : int or iterable of int
        Start column(s) on row 0. Paths from every start share one dedup
        set, so a signature produced from two starts is counted once.
    trace : bool
        Log every path sitting on a row that is a multiple of ``trace_every``.
    """
    if isinstance(starts, int):
        starts = [starts]
    cols = _check_starts(grid, starts)
    if trace_every <= 0:
        raise ValueError("trace_every must be positive.")

    current = Frontier.seed(Path(row=0, col=c, signature=EMPTY) for c in cols)
    dedup = SignatureSet()
    count = 0
    generations = 0
    peak = len(current)
    dead_ends = deflections = exits = 0

    while current:
        current, stats = step_generation(grid, current, dedup, trace=trace, trace_every=trace_every)
        generations += 1
        count += stats.new_signatures
        exits += stats.exits
        dead_ends += stats.dead_ends
        deflections += stats.deflections
        peak = max(peak, len(current))
        logger.debug(
            "generation %d: consumed=%d produced=%d exits=%d new=%d dead_ends=%d",
            generations, stats.consumed, stats.produced, stats.exits, stats.new_signatures, stats.dead_ends,
        )

    logger.info("Simulation finished after %d generations: %d distinct exits (peak frontier %d)",
                generations, count, peak)
    return SimulationResult(
        count=count,
        generations=generations,
        peak_frontier=peak,
        dead_ends=dead_ends,
        deflections=deflections,
        exits=exits,
        signatures=dedup,
    )


def count_timelines(grid: Grid, start_col: int) -> int:
    """Number of distinct exit signatures reachable from ``start_col``."""
    return simulate(grid, start_col).count

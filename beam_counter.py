#!/usr/bin/env python3
"""
Beam Timeline Counter - Main Entry Point

Reads a grid, finds the start column, runs the generation loop and prints
the number of distinct exit signatures.
"""
import argparse
import logging
import sys
import time
from typing import List, Optional

from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from beam_core import (
    Grid,
    GridFormatError,
    RunConfig,
    SimulationResult,
    load_config,
    load_grid,
    resolve_start,
    simulate,
)

logger = logging.getLogger("beam_counter")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Count distinct beam timelines through a deflector grid",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("grid", help="Path to the grid text file")
    parser.add_argument("--config", help="JSON or TOML run configuration")
    parser.add_argument(
        "--strict-start",
        action="store_true",
        default=None,
        help="Fail when row 0 has no 'S' instead of starting at column 0",
    )
    parser.add_argument(
        "--trace",
        action="store_true",
        default=None,
        help="Log path positions and signatures at DEBUG level",
    )
    parser.add_argument(
        "--trace-every",
        type=int,
        default=None,
        help="Trace only rows that are a multiple of this value (default: 10)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="-v for INFO logging and summaries, -vv for DEBUG",
    )
    parser.add_argument("--quiet", action="store_true", help="Print only the count")
    return parser


def _log_level(verbose: int) -> Optional[str]:
    if verbose >= 2:
        return "DEBUG"
    if verbose == 1:
        return "INFO"
    return None


def grid_panel(grid: Grid, start_col: int) -> Panel:
    body = Text()
    body.append(f"{grid.height} x {grid.width}", style="bold")
    body.append(f"  start column {start_col}  deflectors {grid.deflector_count()}\n\n")
    body.append(grid.to_ascii())
    return Panel(body, title="Grid", border_style="blue")


def result_panel(result: SimulationResult, elapsed: float) -> Panel:
    body = Text(result.summary())
    body.append(f"Time: {elapsed:.2f}s", style="dim")
    return Panel(body, title="Result", border_style="green")


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = load_config(args.config) if args.config else RunConfig()
        config = config.merged(
            strict_start=args.strict_start,
            trace=args.trace,
            trace_every=args.trace_every,
            log_level=_log_level(args.verbose),
        )
    except (OSError, ValueError) as e:
        print(f"Config error: {e}", file=sys.stderr)
        return 1

    # Trace lines are DEBUG records.
    level = logging.DEBUG if config.trace else config.level
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")
    console = Console(stderr=True)

    try:
        grid = load_grid(args.grid)
        start_col = resolve_start(grid, strict=config.strict_start)
    except OSError as e:
        logger.error("Cannot read %s: %s", args.grid, e)
        return 1
    except GridFormatError as e:
        logger.error("Invalid grid: %s", e)
        return 1

    if args.verbose:
        console.print(grid_panel(grid, start_col))

    start_time = time.time()
    result = simulate(grid, start_col, trace=config.trace, trace_every=config.trace_every)
    elapsed = time.time() - start_time

    if args.verbose:
        console.print(result_panel(result, elapsed))

    if args.quiet:
        print(result.count)
    else:
        print(f"Part 2: {result.count}")
    return 0


if __name__ == "__main__":
    sys.exit(main())

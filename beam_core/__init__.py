from .models import CellKind, Move, Path, GridSpec
from .grid import Grid, GridFormatError, MissingStartError
from .parser import parse_grid, parse_lines, load_grid, resolve_start
from .frontier import Frontier
from .dedup import SignatureSet
from .simulator import (
    GenerationStats,
    SimulationResult,
    expand_path,
    step_generation,
    simulate,
    count_timelines,
)
from .config import RunConfig, load_config
__all__ = [
    "CellKind", "Move", "Path", "GridSpec",
    "Grid", "GridFormatError", "MissingStartError",
    "parse_grid", "parse_lines", "load_grid", "resolve_start",
    "Frontier", "SignatureSet",
    "GenerationStats", "SimulationResult", "expand_path", "step_generation", "simulate", "count_timelines",
    "RunConfig", "load_config",
]

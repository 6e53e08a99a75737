# tests/test_simulator.py
from pathlib import Path as FsPath
import logging
import pytest

from beam_core.frontier import Frontier
from beam_core.dedup import SignatureSet
from beam_core.grid import Grid
from beam_core.models import Path
from beam_core.simulator import count_timelines, expand_path, simulate, step_generation

EXAMPLES = FsPath(__file__).resolve().parents[1] / "examples"


def _sample_grid():
    from beam_core.parser import load_grid
    p = EXAMPLES / "sample.txt"
    if not p.exists():
        pytest.skip("sample.txt not found")
    return load_grid(p)


def test_single_row_grid_exits_immediately():
    grid = Grid.from_lines(["..S."])
    result = simulate(grid, 2)
    assert result.count == 1
    assert set(result.signatures) == {b""}
    assert result.generations == 1


def test_deflector_on_left_edge_only_branches_right():
    grid = Grid.from_lines(["S.", "^."])
    result = simulate(grid, 0)
    assert result.count == 1
    assert set(result.signatures) == {b"R"}


def test_deflector_in_middle_branches_both_ways():
    grid = Grid.from_lines([".S.", ".^."])
    result = simulate(grid, 1)
    assert result.count == 2
    assert set(result.signatures) == {b"L", b"R"}
    assert result.deflections == 1


def test_shared_signatures_from_two_starts_count_once():
    """
    Both starts hit a deflector and produce "L" and "R";
    each signature is only counted once even though four paths exit.
    """
    grid = Grid.from_lines([".....", ".^.^."])
    result = simulate(grid, [1, 3])
    assert result.exits == 4
    assert result.count == 2
    assert len(result.signatures) == result.count


def test_straight_paths_from_two_starts_collapse():
    grid = Grid.from_lines(["S...", "....", "...."])
    result = simulate(grid, [0, 3])
    assert result.exits == 2
    assert result.count == 1
    assert set(result.signatures) == {b"DD"}


def test_dead_end_is_not_counted():
    grid = Grid.from_lines(["S", "^", "."])
    result = simulate(grid, 0)
    assert result.count == 0
    assert result.dead_ends == 1
    assert result.exits == 0
    assert len(result.signatures) == 0


def test_right_edge_deflector_only_branches_left():
    grid = Grid.from_lines(["S.", "^.", ".^"])
    result = simulate(grid, 0)
    assert set(result.signatures) == {b"RL"}
    assert result.count == 1


def test_sample_grid_counts_forty_timelines():
    grid = _sample_grid()
    assert count_timelines(grid, grid.start_col) == 40


def test_every_exit_signature_has_one_move_per_row():
    grid = _sample_grid()
    result = simulate(grid, grid.start_col)
    assert all(len(sig) == grid.height - 1 for sig in result.signatures)
    assert result.generations == grid.height
    assert result.count == result.exits


def test_repeated_runs_are_deterministic():
    grid = _sample_grid()
    first = simulate(grid, grid.start_col)
    second = simulate(grid, grid.start_col)
    assert first.count == second.count
    assert set(first.signatures) == set(second.signatures)
    assert first.peak_frontier == second.peak_frontier


def test_step_generation_emits_left_before_right():
    grid = Grid.from_lines([".S.", ".^.", "..."])
    dedup = SignatureSet()
    nxt, stats = step_generation(grid, Frontier.seed([Path(0, 1)]), dedup)
    assert [(p.row, p.col, p.signature) for p in nxt] == [(1, 0, b"L"), (1, 2, b"R")]
    assert stats.consumed == 1 and stats.produced == 2
    assert len(dedup) == 0


def test_step_generation_retires_paths_on_last_row():
    grid = Grid.from_lines(["S.", ".."])
    dedup = SignatureSet()
    frontier = Frontier.seed([Path(1, 0, b"D"), Path(1, 1, b"D"), Path(1, 1, b"L")])
    nxt, stats = step_generation(grid, frontier, dedup)
    assert len(nxt) == 0
    assert stats.exits == 3
    assert stats.new_signatures == 2
    assert set(dedup) == {b"D", b"L"}


def test_expand_path_dead_end_returns_nothing():
    grid = Grid.from_lines(["S", "^"])
    assert expand_path(grid, Path(0, 0)) == []


def test_start_column_must_be_in_bounds():
    grid = Grid.from_lines(["S.", ".."])
    with pytest.raises(ValueError):
        simulate(grid, 2)
    with pytest.raises(ValueError):
        simulate(grid, [])


def test_trace_logs_every_tenth_row(caplog):
    grid = _sample_grid()
    with caplog.at_level(logging.DEBUG, logger="beam_core.simulator"):
        simulate(grid, grid.start_col, trace=True)
    traced = [r.getMessage() for r in caplog.records if r.getMessage().startswith("At position")]
    assert traced[0] == "At position (0, 7) with signature ''"
    assert all(msg.startswith("At position (0,") or msg.startswith("At position (10,") for msg in traced)
    assert any(msg.startswith("At position (10,") for msg in traced)

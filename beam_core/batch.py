# beam_core/batch.py
"""Count many grid files in worker processes.

At most ``jobs`` workers run at once. Each file gets its own deadline,
measured from the moment its worker starts; a worker past its deadline is
terminated and the file is reported as TIMEOUT.
"""
from __future__ import annotations
import logging
import multiprocessing
from multiprocessing.connection import wait
from pathlib import Path
from time import perf_counter
from typing import Any, Dict, List, Sequence

from .parser import load_grid, resolve_start
from .simulator import simulate

logger = logging.getLogger(__name__)

_POLL_S = 0.05


def count_file(grid_path: str, strict_start: bool = False) -> Dict[str, Any]:
    grid = load_grid(grid_path)
    start_col = resolve_start(grid, strict=strict_start)
    result = simulate(grid, start_col)
    return {
        "count": result.count,
        "generations": result.generations,
        "peak_frontier": result.peak_frontier,
        "dead_ends": result.dead_ends,
        "height": grid.height,
        "width": grid.width,
        "start_col": start_col,
    }


def _worker(conn, grid_path: str, strict_start: bool) -> None:
    """Runs in a child process and sends back ("OK", stats) or ("ERROR", message)."""
    try:
        conn.send(("OK", count_file(grid_path, strict_start)))
    except (OSError, ValueError) as e:
        conn.send(("ERROR", str(e)))
    finally:
        conn.close()


class _Job:
    __slots__ = ("index", "path", "process", "conn", "started")

    def __init__(self, index: int, path: Path, strict_start: bool) -> None:
        self.index = index
        self.path = path
        recv_conn, send_conn = multiprocessing.Pipe(duplex=False)
        self.conn = recv_conn
        self.process = multiprocessing.Process(
            target=_worker, args=(send_conn, str(path), strict_start), daemon=True
        )
        self.process.start()
        send_conn.close()
        self.started = perf_counter()

    def elapsed(self) -> float:
        return round(perf_counter() - self.started, 3)

    def finish(self) -> Dict[str, Any]:
        try:
            status, payload = self.conn.recv()
        except EOFError:
            status, payload = "ERROR", f"worker exited with code {self.process.exitcode}"
        self.process.join()
        self.conn.close()
        if status == "OK":
            return {"file": self.path.name, "status": "OK", "time_s": self.elapsed(), **payload}
        logger.warning("%s failed: %s", self.path.name, payload)
        return {"file": self.path.name, "status": "ERROR", "error": payload, "time_s": self.elapsed()}

    def kill(self, time_limit_s: float) -> Dict[str, Any]:
        logger.warning("%s timed out after %ss", self.path.name, time_limit_s)
        self.process.terminate()
        self.process.join()
        self.conn.close()
        return {"file": self.path.name, "status": "TIMEOUT", "time_s": self.elapsed()}


def run_batch(
    grid_paths: Sequence[Path],
    jobs: int = 1,
    time_limit_s: float = 60.0,
    strict_start: bool = False,
) -> List[Dict[str, Any]]:
    """Count every file in ``grid_paths``; results come back in input order."""
    if jobs < 1:
        raise ValueError(f"jobs must be at least 1, got {jobs}")
    if time_limit_s <= 0:
        raise ValueError(f"time limit must be positive, got {time_limit_s}")

    pending = list(enumerate(grid_paths))
    pending.reverse()
    running: List[_Job] = []
    results: Dict[int, Dict[str, Any]] = {}

    while pending or running:
        while pending and len(running) < jobs:
            index, path = pending.pop()
            logger.info("[%d/%d] %s", index + 1, len(grid_paths), Path(path).name)
            running.append(_Job(index, Path(path), strict_start))

        ready = wait([job.conn for job in running], timeout=_POLL_S)
        still_running: List[_Job] = []
        for job in running:
            if job.conn in ready:
                results[job.index] = job.finish()
            elif perf_counter() - job.started > time_limit_s:
                results[job.index] = job.kill(time_limit_s)
            else:
                still_running.append(job)
        running = still_running

    return [results[i] for i in range(len(grid_paths))]

#!/usr/bin/env python3
# scripts/batch_count.py
import argparse
import json
import logging
import sys
from pathlib import Path

# Add the project root to the import path so beam_core resolves when run from scripts/
_script_dir = Path(__file__).resolve().parent
_project_root = _script_dir.parent
sys.path.insert(0, str(_project_root))

from beam_core.batch import run_batch

logger = logging.getLogger("batch_count")


def main(argv=None):
    parser = argparse.ArgumentParser(description="Count beam timelines for every grid in a directory")
    parser.add_argument("directory", help="Directory holding grid files")
    parser.add_argument("--pattern", default="*.txt", help="Glob for grid files (default: *.txt)")
    parser.add_argument("--jobs", type=int, default=1, help="Number of worker processes (default: 1)")
    parser.add_argument("--timeout", type=float, default=60.0, help="Per-file time limit in seconds")
    parser.add_argument("--strict-start", action="store_true", help="Fail grids without an 'S' marker")
    parser.add_argument("--out", default=None, help="Write a JSON manifest of results here")
    args = parser.parse_args(argv)
    if args.jobs < 1:
        parser.error("--jobs must be at least 1")
    if args.timeout <= 0:
        parser.error("--timeout must be positive")

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    in_dir = Path(args.directory)
    grid_files = sorted(in_dir.glob(args.pattern))
    logger.info("Found %d grid files in %s", len(grid_files), in_dir)

    results = run_batch(grid_files, jobs=args.jobs, time_limit_s=args.timeout, strict_start=args.strict_start)

    print("\n=== Batch Result ===")
    for r in results:
        line = f"{r['file']:20s}  {r['status']:8s}  {r['time_s']:>7}s"
        if "count" in r:
            line += f"  count={r['count']}"
        print(line)

    if args.out:
        out_path = Path(args.out)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        manifest = {
            "directory": str(in_dir),
            "pattern": args.pattern,
            "jobs": args.jobs,
            "timeout_s": args.timeout,
            "results": results,
        }
        with out_path.open("w", encoding="utf-8") as f:
            json.dump(manifest, f, indent=2)

    return 0 if all(r["status"] == "OK" for r in results) else 1


if __name__ == "__main__":
    sys.exit(main())

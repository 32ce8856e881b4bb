#!/usr/bin/env python3
"""
Stress benchmark: upscale a map by increasing factors and time a full search.

    python scripts/benchmark_scaled.py --map maps/basic_7x7.json --start 1,1 --goal 1,5
"""

import argparse
import logging
import sys
import time
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from pathstep.config import BENCH_SCALE_FACTORS, DEFAULT_MAP, configure_logging
from pathstep.core.dijkstra import PathFinder
from pathstep.core.grid import Point, load_map

logger = logging.getLogger("benchmark_scaled")


def parse_point(text: str) -> Point:
    try:
        row, col = (int(v) for v in text.split(","))
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected ROW,COL, got {text!r}")
    return Point(row, col)


def run_factor(map_path: Path, start: Point, goal: Point, factor: int) -> dict:
    grid = load_map(map_path)
    grid.scale_up(factor)
    start = Point(start.row * factor, start.col * factor)
    goal = Point(goal.row * factor, goal.col * factor)

    t0 = time.perf_counter()
    finder = PathFinder(start, goal, grid.create_storage())
    state, _ = finder.finish(grid)
    elapsed_ms = (time.perf_counter() - t0) * 1000.0

    metrics = finder.metrics()
    metrics.update(factor=factor, cells=grid.rows * grid.columns,
                   status=state.status.value, elapsed_ms=elapsed_ms)
    return metrics


def main() -> int:
    ap = argparse.ArgumentParser(description=__doc__.strip().splitlines()[0])
    ap.add_argument("--map", type=Path, default=DEFAULT_MAP, help="JSON map file.")
    ap.add_argument("--start", type=parse_point, default=Point(1, 1), help="Start as ROW,COL.")
    ap.add_argument("--goal", type=parse_point, default=Point(1, 5), help="Goal as ROW,COL.")
    ap.add_argument("--factors", type=int, nargs="+", default=list(BENCH_SCALE_FACTORS))
    ap.add_argument("--log-level", default=None)
    args = ap.parse_args()

    configure_logging(args.log_level)

    for factor in args.factors:
        m = run_factor(args.map, args.start, args.goal, factor)
        logger.info("factor=%d cells=%d status=%s cost=%s settled=%d discarded=%d time=%.2fms",
                    m["factor"], m["cells"], m["status"], m["total_cost"],
                    m["settled"], m["discarded"], m["elapsed_ms"])
    return 0


if __name__ == "__main__":
    sys.exit(main())

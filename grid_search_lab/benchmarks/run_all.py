# grid_search_lab/benchmarks/run_all.py
from __future__ import annotations

import json
import logging
import os
import time
from pathlib import Path
from typing import Any, Callable, List, Tuple

from ..algorithms.astar import a_star_search
from ..algorithms.bfs import breadth_first_search
from ..algorithms.ucs import dijkstra_search
from ..core.grid import Grid
from ..core.problem import at_position
from ..core.state import Direction, StateKey
from ..problems import puzzles
from ..problems.rules import FourNeighbourWalk, TurnPenaltyWalk

logger = logging.getLogger(__name__)

# ---- Tunables (overridable via environment variables) -----------------------
TURN_COST  = int(os.getenv("TURN_COST", "1000"))     # maze rotation cost
BATCH_JOBS = int(os.getenv("BATCH_JOBS", "1"))       # workers for the batch row
BENCH_MAZE = os.getenv("BENCH_MAZE", "")             # maze file; empty = built-in sample

SAMPLE_MAZE = """\
###############
#.......#....E#
#.#.###.#.###.#
#.....#.#...#.#
#.###.#####.#.#
#.#.#.......#.#
#.#.#####.###.#
#...........#.#
###.#.#####.#.#
#...#.....#.#.#
#.#.#.###.#.#.#
#.....#...#.#.#
#.###.#.#.#.#.#
#S..#.....#...#
###############
"""

SAMPLE_GUARD = """\
....#.....
.........#
..........
..#.......
.......#..
..........
.#..^.....
........#.
#.........
......#...
"""

# ---- Helpers ----------------------------------------------------------------
def _fmt_time(x):
    try:
        return f"{float(x):.4f}"
    except (TypeError, ValueError):
        return "n/a"

def _load_problem() -> Grid:
    if BENCH_MAZE:
        return Grid.from_text(Path(BENCH_MAZE).read_text(), alphabet="#.SE")
    return Grid.from_text(SAMPLE_MAZE, alphabet="#.SE")

def _load_algos(grid: Grid) -> List[Tuple[str, Callable[[], Any]]]:
    """
    Each entry is a zero-argument callable returning a SearchResult-like object with
    .algo, .reached, .cost, .nodes_expanded, .time_s, .peak_kb
    """
    start, end = grid.require("S"), grid.require("E")
    walk = FourNeighbourWalk(grid)
    turns = TurnPenaltyWalk(grid, turn_cost=TURN_COST)
    return [
        ("BFS", lambda: breadth_first_search(grid, walk, StateKey(start), at_position(end))),
        ("Dijkstra", lambda: dijkstra_search(grid, walk, StateKey(start), at_position(end),
                                             measure_memory=True)),
        ("A*", lambda: a_star_search(grid, walk, StateKey(start), end, measure_memory=True)),
        (f"Dijkstra+turns(R={TURN_COST})",
         lambda: dijkstra_search(grid, turns, StateKey(start, Direction.EAST), at_position(end),
                                 measure_memory=True)),
    ]

def _batch_row() -> dict:
    t0 = time.perf_counter()
    hits = puzzles.loop_obstructions(SAMPLE_GUARD, n_jobs=BATCH_JOBS)
    return {
        "algo": f"Batch guard loops(n_jobs={BATCH_JOBS})",
        "success": True,
        "cost": len(hits),
        "nodes_expanded": None,
        "time_s": time.perf_counter() - t0,
        "peak_kb": None,
        "error": None,
    }

def main():
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    grid = _load_problem()
    algos = _load_algos(grid)

    rows = []
    for name, fn in algos:
        print(f"→ Running {name} ...")
        r = fn()
        print(
            f"  {r.algo}: "
            f"{'OK' if r.reached else 'FAIL'} "
            f"cost={r.cost} "
            f"expanded={r.nodes_expanded}, "
            f"time={_fmt_time(r.time_s)}s"
        )
        rows.append({
            "algo": name,
            "success": r.reached,
            "cost": r.cost,
            "nodes_expanded": r.nodes_expanded,
            "time_s": r.time_s,
            "peak_kb": r.peak_kb,
            "error": None,
        })

    print("→ Running batch ...")
    rows.append(_batch_row())

    out = {"results": rows, "ts": time.time()}
    print(json.dumps(out, indent=2))

    # Save JSON next to this script
    out_path = Path(__file__).with_name("results.json")
    try:
        out_path.write_text(json.dumps(out, indent=2))
    except OSError as e:
        logger.warning("could not write %s: %s", out_path, e)

if __name__ == "__main__":
    main()

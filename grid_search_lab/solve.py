# grid_search_lab/solve.py
"""
Command-line front-end: read one puzzle from stdin (or --input), print the answers.

    python -m grid_search_lab.solve maze < input.txt
    python -m grid_search_lab.solve bytes --size 7 --count 12 < bytes.txt
"""
from __future__ import annotations
import argparse
import logging
import os
import sys
from typing import List, Optional

from .core.errors import GridError
from .problems import puzzles

DEFAULT_JOBS = int(os.getenv("GRID_SEARCH_JOBS", "1"))


def _maze(text: str, args) -> List[str]:
    grid, result = puzzles.maze_search(text, turn_cost=args.turn_cost)
    if args.plot:
        from .plots.plotting import save_grid_path
        save_grid_path(grid, result.path_positions(), args.plot, title="Reindeer maze")
    if not result.reached:
        return ["No route from S to E"]
    return [f"The lowest score a reindeer can get is {result.cost}"]


def _trailheads(text: str, args) -> List[str]:
    return [f"The sum of all the trailhead scores is {puzzles.trailhead_score_sum(text)}"]


def _hill(text: str, args) -> List[str]:
    return [
        f"Fewest steps from S to E: {puzzles.fewest_climb_steps(text)}",
        f"Fewest steps from any lowest square: {puzzles.fewest_steps_from_any_low(text)}",
    ]


def _risk(text: str, args) -> List[str]:
    return [f"The lowest total risk is {puzzles.lowest_total_risk(text)}"]


def _guard(text: str, args) -> List[str]:
    return [
        f"Guard visits {puzzles.guard_visited_count(text)} distinct positions.",
        f"There are {len(puzzles.loop_obstructions(text, n_jobs=args.jobs))} "
        "obstruction positions that will create loops",
    ]


def _bytes(text: str, args) -> List[str]:
    positions = puzzles.parse_byte_positions(text)
    steps = puzzles.shortest_exit_steps(positions, size=args.size, count=args.count)
    blocker = puzzles.first_blocking_byte(positions, size=args.size, count=args.count, n_jobs=args.jobs)
    lines = [f"Minimum number of steps required is {steps}"]
    if blocker is None:
        lines.append("No byte blocks the exit")
    else:
        lines.append(f"The byte that prevents exit is {blocker[0]},{blocker[1]}")
    return lines


_COMMANDS = {
    "maze": _maze,
    "trailheads": _trailheads,
    "hill": _hill,
    "risk": _risk,
    "guard": _guard,
    "bytes": _bytes,
}


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="grid-search", description="Grid state-space puzzle solver.")
    ap.add_argument("puzzle", choices=sorted(_COMMANDS))
    ap.add_argument("--input", help="puzzle file (default: stdin)")
    ap.add_argument("--turn-cost", type=int, default=1000, help="maze: cost of a 90 degree turn")
    ap.add_argument("--size", type=int, default=71, help="bytes: memory grid side length")
    ap.add_argument("--count", type=int, default=1024, help="bytes: bytes fallen before the first search")
    ap.add_argument("--jobs", type=int, default=DEFAULT_JOBS, help="parallel batch workers (-1 = all cores)")
    ap.add_argument("--plot", help="maze: write a PNG of the best path here")
    ap.add_argument("-v", "--verbose", action="store_true")
    return ap


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format="%(levelname)s %(name)s: %(message)s")

    if args.input:
        with open(args.input) as f:
            text = f.read()
    else:
        text = sys.stdin.read()

    try:
        lines = _COMMANDS[args.puzzle](text, args)
    except GridError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2
    for line in lines:
        print(line)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

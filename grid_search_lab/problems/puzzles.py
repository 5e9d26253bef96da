# grid_search_lab/problems/puzzles.py
# Puzzle front-ends: parse one day's input text, pick a rule, run the engine, return the answer.
# Nothing here prints; solve.py owns presentation.
from __future__ import annotations
import logging
import string
from functools import partial
from typing import List, Optional, Tuple

from ..algorithms.astar import a_star_search
from ..algorithms.batch import BatchRunner, Perturbation, first_index
from ..algorithms.bfs import breadth_first_search, reachable_states
from ..algorithms.cycle import detect_cycle
from ..algorithms.ucs import dijkstra_search
from ..core.errors import GridError
from ..core.grid import Coord, Grid
from ..core.metrics import CycleResult, RunState, SearchResult
from ..core.problem import at_position
from ..core.state import Direction, StateKey
from .rules import FourNeighbourWalk, GuardWalk, MonotonicClimbWalk, TurnPenaltyWalk, WeightedCellWalk

logger = logging.getLogger(__name__)

DIGITS = string.digits


# --- Reindeer maze (turn-penalty Dijkstra) -------------------------------------

def maze_search(text: str, turn_cost: int = 1000) -> Tuple[Grid, SearchResult]:
    grid = Grid.from_text(text, alphabet="#.SE")
    start = grid.require("S")
    end = grid.require("E")
    rule = TurnPenaltyWalk(grid, turn_cost=turn_cost)
    return grid, dijkstra_search(grid, rule, StateKey(start, Direction.EAST), at_position(end))


def lowest_maze_score(text: str, turn_cost: int = 1000) -> Optional[int]:
    return maze_search(text, turn_cost)[1].cost


def best_maze_path(text: str, turn_cost: int = 1000) -> Optional[List[Coord]]:
    return maze_search(text, turn_cost)[1].path_positions()


# --- Trailheads (monotonic +1 reachability) ------------------------------------

def trailhead_scores(text: str) -> List[int]:
    """For each `0` (row-major), how many distinct `9` cells an exact +1 climb can reach."""
    grid = Grid.from_text(text, alphabet=DIGITS)
    rule = MonotonicClimbWalk(grid, height=int, max_rise=1, exact=True)
    scores = []
    for head in grid.find_all("0"):
        reached = reachable_states(grid, rule, StateKey(head))
        scores.append(sum(1 for s in reached if grid.at(s.position) == "9"))
    return scores


def trailhead_score_sum(text: str) -> int:
    return sum(trailhead_scores(text))


# --- Hill climbing (A* / multi-source BFS) -------------------------------------

def _elevation(ch: str) -> int:
    if ch == "S":
        return 0
    if ch == "E":
        return 25
    return ord(ch) - ord("a")


def _hill(text: str) -> Tuple[Grid, MonotonicClimbWalk, Coord, Coord]:
    grid = Grid.from_text(text, alphabet=string.ascii_lowercase + "SE")
    rule = MonotonicClimbWalk(grid, height=_elevation, max_rise=1, exact=False)
    return grid, rule, grid.require("S"), grid.require("E")


def fewest_climb_steps(text: str) -> Optional[int]:
    grid, rule, start, end = _hill(text)
    return a_star_search(grid, rule, StateKey(start), end).cost


def fewest_steps_from_any_low(text: str) -> Optional[int]:
    grid, rule, _, end = _hill(text)
    lows = [StateKey(c) for c in grid.find_all("S") + grid.find_all("a")]
    logger.debug("hill: %d low starting cells", len(lows))
    return breadth_first_search(grid, rule, lows, at_position(end), want_path=False).cost


# --- Chiton risk (weighted Dijkstra) -------------------------------------------

def lowest_total_risk(text: str) -> Optional[int]:
    grid = Grid.from_text(text, alphabet=DIGITS)
    goal = StateKey((grid.width - 1, grid.height - 1))
    return dijkstra_search(grid, WeightedCellWalk(grid), StateKey((0, 0)), goal, want_path=False).cost


# --- Guard patrol (cycle detection + batch of obstructions) --------------------

def parse_guard(text: str) -> Tuple[Grid, StateKey]:
    grid = Grid.from_text(text, alphabet=".#^>v<")
    guards = [(c, ch) for ch in "^>v<" for c in grid.find_all(ch)]
    if len(guards) != 1:
        raise GridError(f"expected exactly one guard, found {len(guards)}")
    pos, ch = guards[0]
    return grid.with_symbols([pos], "."), StateKey(pos, Direction.from_symbol(ch))


def guard_patrol(text: str) -> CycleResult:
    grid, start = parse_guard(text)
    return detect_cycle(start, GuardWalk(grid))


def guard_visited_count(text: str) -> int:
    return len(guard_patrol(text).visited_positions())


def _guard_loops(start: StateKey, grid: Grid) -> bool:
    return detect_cycle(start, GuardWalk(grid)).looped


def loop_obstructions(text: str, n_jobs: int = 1) -> List[Coord]:
    """Cells where one extra obstacle traps the guard in a loop, in patrol order."""
    grid, start = parse_guard(text)
    walk = detect_cycle(start, GuardWalk(grid))
    candidates = list(dict.fromkeys(s.position for s in walk.visited if s.position != start.position))
    logger.debug("guard: %d candidate obstruction(s)", len(candidates))

    runner = BatchRunner(partial(_guard_loops, start), n_jobs=n_jobs)
    looped = runner.run_all(grid, [Perturbation.single(x, y) for x, y in candidates])
    return [c for c, hit in zip(candidates, looped) if hit]


# --- Falling bytes (BFS; batch of prefixes until the exit is cut off) ----------

def parse_byte_positions(text: str) -> List[Coord]:
    out: List[Coord] = []
    for n, line in enumerate(text.splitlines(), 1):
        line = line.strip()
        if not line:
            continue
        try:
            x, y = line.split(",")
            out.append((int(x), int(y)))
        except ValueError:
            raise GridError(f"line {n}: expected 'x,y', got {line!r}") from None
    return out


def _exit_search(grid: Grid) -> SearchResult:
    goal = StateKey((grid.width - 1, grid.height - 1))
    return breadth_first_search(grid, FourNeighbourWalk(grid), StateKey((0, 0)), goal, want_path=False)


def shortest_exit_steps(positions: List[Coord], size: int = 71, count: int = 1024) -> Optional[int]:
    grid = Grid.filled(size, size).with_symbols(positions[:count])
    return _exit_search(grid).cost


def first_blocking_byte(positions: List[Coord], size: int = 71, count: int = 1024,
                        n_jobs: int = 1) -> Optional[Coord]:
    """First byte (after the first `count`) whose landing leaves no path to the exit."""
    base = Grid.filled(size, size)
    trials = [Perturbation(tuple(positions[:k])) for k in range(count + 1, len(positions) + 1)]
    results = BatchRunner(_exit_search, n_jobs=n_jobs).run_all(base, trials)
    i = first_index(results, lambda r: r.outcome is RunState.EXHAUSTED)
    return None if i is None else positions[count + i]

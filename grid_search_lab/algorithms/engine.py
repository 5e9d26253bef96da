# grid_search_lab/algorithms/engine.py
"""
Generic best-first search over (position, facing) states on a Grid.

Dijkstra, BFS and A* are all this loop with a different frontier or priority:

1. cost[start] = 0, push (start, 0)
2. pop the cheapest entry; skip it if stale (cost worse than the recorded best)
3. stop if it satisfies the goal test
4. relax each edge from rule.expand(u); on strict improvement record cost and
   predecessor and push
5. frontier empty -> EXHAUSTED (a normal outcome, not an error)
"""
from __future__ import annotations
import logging
from typing import Callable, Dict, Iterable, List, Optional, Union

from ..core.errors import TransitionRuleError
from ..core.frontiers import MinCostFrontier
from ..core.grid import Grid
from ..core.metrics import MeasuredRun, RunState, SearchResult
from ..core.problem import Goal, Heuristic, TransitionRule, goal_test
from ..core.state import StateKey
from ..core.utils import reconstruct_path

logger = logging.getLogger(__name__)

Observer = Callable[[StateKey, int], None]


class SearchEngine:
    def __init__(
        self,
        grid: Grid,
        rule: TransitionRule,
        name: str = "Dijkstra",
        frontier_factory: Callable[[], object] = MinCostFrontier,
        heuristic: Optional[Heuristic] = None,
        unit_cost: bool = False,
        measure_memory: bool = False,
        observer: Optional[Observer] = None,
    ):
        self.grid = grid
        self.rule = rule
        self.name = name
        self.frontier_factory = frontier_factory
        self.heuristic = heuristic
        self.unit_cost = unit_cost
        self.measure_memory = measure_memory
        self.observer = observer
        self.state = RunState.IDLE

    def _check_edge(self, u: StateKey, v: object, w: int) -> None:
        if not isinstance(v, StateKey):
            raise TransitionRuleError(f"expand({u!r}) produced {v!r}, not a StateKey")
        if w < 0:
            raise TransitionRuleError(f"expand({u!r}) produced negative cost {w} to {v!r}")
        if not self.grid.in_bounds(*v.position):
            raise TransitionRuleError(f"expand({u!r}) left the grid: {v!r}")

    def run(
        self,
        start: Union[StateKey, Iterable[StateKey]],
        goal: Goal = None,
        want_path: bool = True,
    ) -> SearchResult:
        starts: List[StateKey] = [start] if isinstance(start, StateKey) else list(start)
        is_goal = goal_test(goal)
        h = self.heuristic

        best: Dict[StateKey, int] = {}
        parent: Dict[StateKey, StateKey] = {}
        frontier = self.frontier_factory()
        expanded = 0

        for s in starts:
            if s in best:
                continue
            best[s] = 0
            frontier.push(s, 0, None if h is None else h(s))
            if self.observer is not None:
                self.observer(s, 0)

        self.state = RunState.RUNNING
        logger.debug("%s: start %d source(s)", self.name, len(starts))

        found: Optional[StateKey] = None
        with MeasuredRun(self.measure_memory) as meter:
            while True:
                entry = frontier.pop_min()
                if entry is None:
                    break
                u, cost_u = entry
                if cost_u > best[u]:
                    continue  # stale (lazy deletion)
                if is_goal is not None and is_goal(u):
                    found = u
                    break

                expanded += 1
                for v, w in self.rule.expand(u):
                    self._check_edge(u, v, w)
                    candidate = cost_u + (1 if self.unit_cost else w)
                    if candidate < best.get(v, candidate + 1):
                        best[v] = candidate
                        parent[v] = u
                        frontier.push(v, candidate, None if h is None else candidate + h(v))
                        if self.observer is not None:
                            self.observer(v, candidate)

        if found is not None:
            self.state = RunState.SUCCEEDED
            path = reconstruct_path(parent, found, frozenset(starts)) if want_path else None
            result = SearchResult(self.name, self.state, best[found], best, found, path,
                                  expanded, meter.elapsed, meter.peak_kb)
        else:
            self.state = RunState.EXHAUSTED
            result = SearchResult(self.name, self.state, None, best, None, None,
                                  expanded, meter.elapsed, meter.peak_kb)

        logger.debug("%s: %s cost=%s expanded=%d", self.name, self.state.value, result.cost, expanded)
        return result


def best_first_search(
    grid: Grid,
    rule: TransitionRule,
    start: Union[StateKey, Iterable[StateKey]],
    goal: Goal = None,
    name: str = "BestFirst",
    **engine_kwargs,
) -> SearchResult:
    want_path = engine_kwargs.pop("want_path", True)
    return SearchEngine(grid, rule, name=name, **engine_kwargs).run(start, goal, want_path=want_path)

# grid_search_lab/algorithms/bfs.py
from __future__ import annotations
from typing import Iterable, Set, Union

from ..core.frontiers import FIFOFrontier
from ..core.grid import Grid
from ..core.metrics import SearchResult
from ..core.problem import Goal, TransitionRule
from ..core.state import StateKey
from .engine import SearchEngine


def breadth_first_search(
    grid: Grid,
    rule: TransitionRule,
    start: Union[StateKey, Iterable[StateKey]],
    goal: Goal = None,
    want_path: bool = True,
) -> SearchResult:
    """Unweighted search: every edge counts as one hop whatever cost the rule gives it."""
    engine = SearchEngine(grid, rule, name="BFS", frontier_factory=FIFOFrontier, unit_cost=True)
    return engine.run(start, goal, want_path=want_path)


def reachable_states(
    grid: Grid,
    rule: TransitionRule,
    start: Union[StateKey, Iterable[StateKey]],
) -> Set[StateKey]:
    return set(breadth_first_search(grid, rule, start, want_path=False).distances)

# Defines the interfaces the engine consumes: edge expansion for cost searches, a single successor for walks.
# grid_search_lab/core/problem.py
from __future__ import annotations
from typing import Callable, Iterable, Optional, Protocol, Union

from .grid import Coord
from .state import Edge, StateKey


class TransitionRule(Protocol):
    """Expands a StateKey into its outgoing edges.

    Must be a pure function of `state` and the Grid the rule closes over, and
    total over in-bounds states.
    """
    def expand(self, state: StateKey) -> Iterable[Edge]: ...


class StepRule(Protocol):
    """Deterministic walk: exactly one successor, or None once the walk leaves the state space."""
    def step(self, state: StateKey) -> Optional[StateKey]: ...


GoalTest = Callable[[StateKey], bool]
Goal = Union[StateKey, GoalTest, None]
Heuristic = Callable[[StateKey], float]


def at_position(target: Coord) -> GoalTest:
    """Goal test matching `target` with any facing."""
    def is_goal(s: StateKey) -> bool:
        return s.position == target
    return is_goal


def goal_test(goal: Goal) -> Optional[GoalTest]:
    if goal is None:
        return None
    if isinstance(goal, StateKey):
        return lambda s: s == goal
    return goal


def manhattan_to(target: Coord) -> Heuristic:
    # admissible on a 4-neighbour grid whose moves cost at least 1
    tx, ty = target
    def h(s: StateKey) -> float:
        return float(abs(s.position[0] - tx) + abs(s.position[1] - ty))
    return h

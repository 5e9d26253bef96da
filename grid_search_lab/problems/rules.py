# grid_search_lab/problems/rules.py
# Stock TransitionRules (and one StepRule) over a Grid. The engine knows nothing about walls,
# heights or turning; all of it lives in the edges these return.
from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, List, Optional

from ..core.errors import TransitionRuleError
from ..core.grid import Coord, Grid
from ..core.state import Edge, StateKey


@dataclass(frozen=True)
class GridRule:
    grid: Grid
    walls: str = "#"

    def walkable(self, c: Coord) -> bool:
        ch = self.grid.at(c)
        return ch is not None and ch not in self.walls


class FourNeighbourWalk(GridRule):
    """
    Unit-cost moves to each orthogonal neighbour that is on the grid and not a wall.
    Facing is carried through unchanged (usually None).
    """
    def expand(self, state: StateKey) -> List[Edge]:
        x, y = state.position
        return [Edge(StateKey(n, state.facing), 1)
                for n in self.grid.neighbours(x, y) if self.walkable(n)]


class WeightedCellWalk(GridRule):
    """Entering a cell costs the integer its symbol spells (chiton risk map)."""
    def expand(self, state: StateKey) -> List[Edge]:
        x, y = state.position
        return [Edge(StateKey(n), int(self.grid.at(n)))
                for n in self.grid.neighbours(x, y) if self.walkable(n)]


@dataclass(frozen=True)
class TurnPenaltyWalk(GridRule):
    """
    Facing-aware maze walk, two edge kinds:
      - step forward: same facing, next cell, cost `step_cost`
      - rotate 90 degrees in place: same cell, new facing, cost `turn_cost`
    """
    turn_cost: int = 1000
    step_cost: int = 1

    def expand(self, state: StateKey) -> List[Edge]:
        if state.facing is None:
            raise TransitionRuleError(f"{type(self).__name__} needs a facing, got {state!r}")
        out: List[Edge] = []
        ahead = state.moved()
        if self.walkable(ahead.position):
            out.append(Edge(ahead, self.step_cost))
        out.append(Edge(state.turned(state.facing.turn_right()), self.turn_cost))
        out.append(Edge(state.turned(state.facing.turn_left()), self.turn_cost))
        return out


@dataclass(frozen=True)
class MonotonicClimbWalk(GridRule):
    """
    Orthogonal moves constrained by height(next) - height(here):
      exact=True  -> the rise must equal max_rise (trail counting: 0,1,2,...,9)
      exact=False -> the rise may be at most max_rise; any descent is fine
    """
    height: Callable[[str], int] = int
    max_rise: int = 1
    exact: bool = True

    def allowed(self, here: int, there: int) -> bool:
        rise = there - here
        return rise == self.max_rise if self.exact else rise <= self.max_rise

    def expand(self, state: StateKey) -> List[Edge]:
        x, y = state.position
        h0 = self.height(self.grid.get(x, y))
        return [Edge(StateKey(n), 1)
                for n in self.grid.neighbours(x, y)
                if self.walkable(n) and self.allowed(h0, self.height(self.grid.at(n)))]


class GuardWalk(GridRule):
    """
    Deterministic patrol: walk forward; if the cell ahead is a wall turn right in place;
    stepping off the grid ends the walk.
    """
    def step(self, state: StateKey) -> Optional[StateKey]:
        ahead = state.moved()
        ch = self.grid.at(ahead.position)
        if ch is None:
            return None
        if ch in self.walls:
            return state.turned(state.facing.turn_right())
        return ahead


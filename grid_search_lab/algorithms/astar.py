# grid_search_lab/algorithms/astar.py
from __future__ import annotations
from typing import Optional

from ..core.grid import Coord
from ..core.problem import Heuristic, at_position, manhattan_to
from .engine import best_first_search


def a_star_search(grid, rule, start, target: Coord, heuristic: Optional[Heuristic] = None, **kwargs):
    """A* towards `target` (any facing). Default heuristic: Manhattan distance, admissible for unit-or-more moves."""
    h = heuristic or manhattan_to(target)
    return best_first_search(grid, rule, start, at_position(target), name="A*", heuristic=h, **kwargs)

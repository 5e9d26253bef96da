# Uniform Cost Search (Dijkstra) by reusing the generic search engine.
# grid_search_lab/algorithms/ucs.py
from __future__ import annotations
from .engine import best_first_search


def dijkstra_search(grid, rule, start, goal=None, **kwargs):
    return best_first_search(grid, rule, start, goal, name="Dijkstra", **kwargs)

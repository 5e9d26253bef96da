# grid_search_lab/core/frontiers.py
from __future__ import annotations
import heapq
from collections import deque
from typing import Deque, List, Optional, Tuple

from .state import StateKey

Entry = Tuple[StateKey, int]


class FIFOFrontier:
    """Plain queue for unweighted BFS; `priority` is accepted and ignored."""
    def __init__(self):
        self.q: Deque[Entry] = deque()
    def push(self, state: StateKey, cost: int, priority: Optional[float] = None) -> None:
        self.q.append((state, cost))
    def pop_min(self) -> Optional[Entry]:
        return self.q.popleft() if self.q else None
    def __len__(self): return len(self.q)
    def peek(self) -> Entry: return self.q[0]


class MinCostFrontier:
    """Min-heap by priority (defaults to cost). Equal priorities pop in push order."""
    def __init__(self):
        self.h: List[Tuple[float, int, StateKey, int]] = []
        self.counter = 0  # tie-breaker for stability
    def push(self, state: StateKey, cost: int, priority: Optional[float] = None) -> None:
        self.counter += 1
        key = cost if priority is None else priority
        heapq.heappush(self.h, (key, self.counter, state, cost))
    def pop_min(self) -> Optional[Entry]:
        if not self.h:
            return None
        _, _, state, cost = heapq.heappop(self.h)
        return state, cost
    def __len__(self): return len(self.h)
    def peek(self) -> Entry:
        _, _, state, cost = self.h[0]
        return state, cost

# grid_search_lab/core/utils.py
# Rebuilds the literal path from the predecessor map a search leaves behind.
from __future__ import annotations
from typing import List, Mapping, Optional

from .state import StateKey


def reconstruct_path(predecessors: Mapping[StateKey, StateKey], goal: StateKey,
                     starts: Optional[frozenset] = None) -> Optional[List[StateKey]]:
    """
    Walk back from `goal` until a state with no predecessor entry (a start), then reverse.
    Returns None when `goal` never got a predecessor and is not itself a start.
    """
    if goal not in predecessors and (starts is None or goal not in starts):
        return None
    path = [goal]
    cur = goal
    while cur in predecessors:
        cur = predecessors[cur]
        path.append(cur)
    path.reverse()
    return path

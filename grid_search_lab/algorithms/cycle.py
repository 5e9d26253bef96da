# grid_search_lab/algorithms/cycle.py
# Deterministic walk-until-repeat. One successor per state, so no frontier: an insertion-ordered
# visited map from state to the step index it was first seen at is enough.
from __future__ import annotations
import logging
from typing import Callable, Dict, Optional, Union

from ..core.metrics import CycleResult, RunState
from ..core.problem import StepRule
from ..core.state import StateKey

logger = logging.getLogger(__name__)

Successor = Callable[[StateKey], Optional[StateKey]]


def detect_cycle(start: StateKey, rule: Union[StepRule, Successor],
                 max_steps: Optional[int] = None) -> CycleResult:
    """
    Follow rule.step (or a bare successor function) from `start`.

    - a state seen before  -> CYCLE_DETECTED, first_seen/second_seen are its two step indices
    - successor is None    -> EXHAUSTED (walked out of the state space)
    - max_steps reached    -> RuntimeError; finite grids never need it
    """
    step: Successor = rule.step if hasattr(rule, "step") else rule
    visited: Dict[StateKey, int] = {start: 0}
    cur = start
    i = 0
    while True:
        nxt = step(cur)
        i += 1
        if nxt is None:
            logger.debug("walk from %r left the state space after %d steps", start, i)
            return CycleResult(RunState.EXHAUSTED, visited, steps=i)
        seen_at = visited.get(nxt)
        if seen_at is not None:
            logger.debug("walk from %r repeats %r (steps %d and %d)", start, nxt, seen_at, i)
            return CycleResult(RunState.CYCLE_DETECTED, visited, nxt, seen_at, i, i)
        if max_steps is not None and i >= max_steps:
            raise RuntimeError(f"walk from {start!r} exceeded {max_steps} steps")
        visited[nxt] = i
        cur = nxt

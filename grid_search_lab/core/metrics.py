# grid_search_lab/core/metrics.py
from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Set
import time, tracemalloc

from .grid import Coord
from .state import StateKey


class RunState(Enum):
    IDLE = "idle"
    RUNNING = "running"
    SUCCEEDED = "succeeded"
    EXHAUSTED = "exhausted"
    CYCLE_DETECTED = "cycle_detected"

    @property
    def terminal(self) -> bool:
        return self not in (RunState.IDLE, RunState.RUNNING)


@dataclass
class SearchResult:
    algo: str
    outcome: RunState
    cost: Optional[int]
    distances: Dict[StateKey, int]
    goal: Optional[StateKey] = None
    path: Optional[List[StateKey]] = None
    nodes_expanded: int = 0
    time_s: float = 0.0
    peak_kb: int = 0

    @property
    def reached(self) -> bool:
        return self.outcome is RunState.SUCCEEDED

    def reachable_positions(self) -> Set[Coord]:
        return {s.position for s in self.distances}

    def path_positions(self) -> Optional[List[Coord]]:
        if self.path is None:
            return None
        out: List[Coord] = []
        for s in self.path:
            # rotations in place repeat the position
            if not out or out[-1] != s.position:
                out.append(s.position)
        return out


@dataclass
class CycleResult:
    """Outcome of a deterministic walk: it either repeats a state or leaves the state space."""
    outcome: RunState
    visited: Dict[StateKey, int] = field(default_factory=dict)  # state -> first step index, insertion-ordered
    repeated: Optional[StateKey] = None
    first_seen: Optional[int] = None
    second_seen: Optional[int] = None
    steps: int = 0

    @property
    def cycle_length(self) -> Optional[int]:
        if self.first_seen is None or self.second_seen is None:
            return None
        return self.second_seen - self.first_seen

    @property
    def looped(self) -> bool:
        return self.outcome is RunState.CYCLE_DETECTED

    def visited_positions(self) -> Set[Coord]:
        return {s.position for s in self.visited}


class MeasuredRun:
    """
    Context manager for timing and (optionally) approximate peak memory.
    tracemalloc is process-global, so memory tracing stays off unless asked for;
    leave it off for batch runs sharing a process.
    """
    def __init__(self, trace_memory: bool = False) -> None:
        self.trace_memory = trace_memory
        self.t0: Optional[float] = None
        self.t1: Optional[float] = None
        self._peak_kb: int = 0
        self._tracing: bool = False

    def __enter__(self) -> "MeasuredRun":
        if self.trace_memory:
            self._tracing = True
            tracemalloc.start()
        self.t0 = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        self.t1 = time.perf_counter()
        if self._tracing:
            current, peak = tracemalloc.get_traced_memory()
            tracemalloc.stop()
            self._tracing = False
            self._peak_kb = max(self._peak_kb, peak // 1024)
        return False  # don't suppress exceptions

    @property
    def elapsed(self) -> float:
        """Seconds elapsed. Works before and after __exit__."""
        if self.t0 is None:
            return 0.0
        if self.t1 is None:
            return time.perf_counter() - self.t0
        return self.t1 - self.t0

    @property
    def peak_kb(self) -> int:
        """Approx peak KB (0 when not tracing). Works before and after __exit__."""
        if self._tracing:
            current, peak = tracemalloc.get_traced_memory()
            return max(self._peak_kb, peak // 1024)
        return self._peak_kb

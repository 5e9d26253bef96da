# grid_search_lab/algorithms/batch.py
"""
Fan-out of independent searches, one per perturbed Grid snapshot.

Every trial gets its own Grid (copy-on-write from the base) and its own engine
state, so trials share nothing mutable and may run in any order on any worker.
Results are tagged with the index of their perturbation and put back in input
order before they are returned.
"""
from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Callable, Generic, Iterable, List, Optional, Sequence, Tuple, TypeVar

from joblib import Parallel, delayed

from ..core.grid import Coord, Grid

logger = logging.getLogger(__name__)

R = TypeVar("R")


@dataclass(frozen=True)
class Perturbation:
    """One hypothetical grid change: extra obstacle cells."""
    obstacles: Tuple[Coord, ...]
    symbol: str = "#"
    label: Optional[str] = None

    @classmethod
    def single(cls, x: int, y: int, symbol: str = "#") -> "Perturbation":
        return cls(((x, y),), symbol, label=f"{x},{y}")

    def apply(self, grid: Grid) -> Grid:
        return grid.with_symbols(self.obstacles, self.symbol)


def _run_one(index: int, perturbation: Perturbation, base_grid: Grid,
             search: Callable[[Grid], R]) -> Tuple[int, R]:
    return index, search(perturbation.apply(base_grid))


class BatchRunner(Generic[R]):
    """
    `search` maps a Grid to any result (SearchResult, CycleResult, ...). It must be
    picklable for process backends: prefer module-level functions or functools.partial.

    n_jobs=1 runs inline; anything else goes through joblib (loky processes by default,
    or whatever `backend` names).
    """
    def __init__(self, search: Callable[[Grid], R], n_jobs: int = 1, backend: Optional[str] = None):
        self.search = search
        self.n_jobs = n_jobs
        self.backend = backend

    def run_all(self, base_grid: Grid, perturbations: Iterable[Perturbation]) -> List[R]:
        perturbations = list(perturbations)
        logger.info("batch: %d trial(s), n_jobs=%s", len(perturbations), self.n_jobs)
        if self.n_jobs == 1:
            return [self.search(p.apply(base_grid)) for p in perturbations]

        tagged = Parallel(n_jobs=self.n_jobs, backend=self.backend, return_as="generator_unordered")(
            delayed(_run_one)(i, p, base_grid, self.search) for i, p in enumerate(perturbations)
        )
        results: List[Optional[R]] = [None] * len(perturbations)
        for i, r in tagged:
            results[i] = r
        return results  # type: ignore[return-value]


def run_all(base_grid: Grid, perturbations: Iterable[Perturbation], search: Callable[[Grid], R],
            n_jobs: int = 1, backend: Optional[str] = None) -> List[R]:
    return BatchRunner(search, n_jobs=n_jobs, backend=backend).run_all(base_grid, perturbations)


def indices_where(results: Sequence[R], predicate: Callable[[R], bool]) -> List[int]:
    return [i for i, r in enumerate(results) if predicate(r)]


def first_index(results: Sequence[R], predicate: Callable[[R], bool]) -> Optional[int]:
    for i, r in enumerate(results):
        if predicate(r):
            return i
    return None

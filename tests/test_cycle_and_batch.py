import threading
import time

import pytest

from grid_search_lab.algorithms.batch import (
    BatchRunner, Perturbation, first_index, indices_where, run_all,
)
from grid_search_lab.algorithms.bfs import breadth_first_search
from grid_search_lab.algorithms.cycle import detect_cycle
from grid_search_lab.core.grid import Grid
from grid_search_lab.core.metrics import RunState
from grid_search_lab.core.state import Direction, StateKey
from grid_search_lab.problems.rules import FourNeighbourWalk, GuardWalk


S = [StateKey((i, 0)) for i in range(5)]


def test_five_state_table_cycles_back_after_four_steps():
    table = {S[0]: S[1], S[1]: S[2], S[2]: S[3], S[3]: S[0], S[4]: S[0]}
    r = detect_cycle(S[0], table.get)
    assert r.outcome is RunState.CYCLE_DETECTED
    assert (r.first_seen, r.second_seen) == (0, 4)
    assert r.cycle_length == 4
    assert r.repeated == S[0]
    assert list(r.visited) == S[:4]


def test_cycle_entered_mid_walk():
    table = {S[4]: S[0], S[0]: S[1], S[1]: S[2], S[2]: S[0]}
    r = detect_cycle(S[4], table.get)
    assert (r.first_seen, r.second_seen, r.cycle_length) == (1, 4, 3)


def test_walk_off_the_table_is_exhausted():
    table = {S[0]: S[1], S[1]: S[2]}
    r = detect_cycle(S[0], table.get)
    assert r.outcome is RunState.EXHAUSTED
    assert not r.looped
    assert r.cycle_length is None
    assert list(r.visited) == S[:3]


def test_max_steps_guard():
    with pytest.raises(RuntimeError):
        detect_cycle(StateKey((0, 0)), lambda s: StateKey((s.x + 1, 0)), max_steps=10)


def test_guard_walk_turns_right_at_walls_and_loops():
    grid = Grid.from_text(".#..\n...#\n#...\n..#.\n")
    r = detect_cycle(StateKey((1, 2), Direction.NORTH), GuardWalk(grid))
    assert r.looped
    assert r.visited_positions() == {(1, 1), (1, 2), (2, 1), (2, 2)}


def test_perturbation_apply_leaves_base_alone():
    base = Grid.filled(3, 3)
    p = Perturbation.single(1, 1)
    assert p.label == "1,1"
    g = p.apply(base)
    assert g.get(1, 1) == "#" and base.get(1, 1) == "."
    assert Perturbation(((0, 0), (2, 2)), symbol="x").apply(base).find_all("x") == [(0, 0), (2, 2)]


def _exit_cost(grid):
    return breadth_first_search(grid, FourNeighbourWalk(grid), StateKey((0, 0)),
                                StateKey((grid.width - 1, 0)), want_path=False)


def test_run_all_reports_blocking_perturbations_in_order():
    base = Grid.from_text("...\n...\n")
    perts = [Perturbation.single(1, 0), Perturbation(((1, 0), (1, 1))), Perturbation.single(0, 1)]
    results = run_all(base, perts, _exit_cost)
    assert [r.outcome for r in results] == [RunState.SUCCEEDED, RunState.EXHAUSTED, RunState.SUCCEEDED]
    assert [r.cost for r in results] == [4, None, 2]
    assert first_index(results, lambda r: not r.reached) == 1
    assert indices_where(results, lambda r: r.reached) == [0, 2]
    assert first_index(results, lambda r: r.cost == 99) is None


def _slow_label(delays, grid):
    # earlier perturbations sleep longer so workers finish in reverse order
    n = len(grid.find_all("#"))
    time.sleep(delays[n])
    return (n, threading.current_thread().name)


def test_batch_output_keeps_input_order_when_workers_finish_out_of_order():
    base = Grid.filled(4, 1)
    perts = [Perturbation(tuple((x, 0) for x in range(k))) for k in range(4)]
    delays = [0.3, 0.2, 0.1, 0.0]
    runner = BatchRunner(lambda g: _slow_label(delays, g), n_jobs=4, backend="threading")
    results = runner.run_all(base, perts)
    assert [n for n, _ in results] == [0, 1, 2, 3]


def test_inline_and_parallel_agree():
    base = Grid.filled(4, 4)
    perts = [Perturbation.single(x, 1) for x in range(4)]
    inline = BatchRunner(_exit_cost).run_all(base, perts)
    threaded = BatchRunner(_exit_cost, n_jobs=2, backend="threading").run_all(base, perts)
    assert [r.cost for r in inline] == [r.cost for r in threaded]
    assert [r.distances for r in inline] == [r.distances for r in threaded]

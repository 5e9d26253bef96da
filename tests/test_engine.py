import random

import pytest

from grid_search_lab.algorithms.astar import a_star_search
from grid_search_lab.algorithms.bfs import breadth_first_search, reachable_states
from grid_search_lab.algorithms.engine import SearchEngine
from grid_search_lab.algorithms.ucs import dijkstra_search
from grid_search_lab.core.errors import TransitionRuleError
from grid_search_lab.core.grid import Grid
from grid_search_lab.core.metrics import RunState
from grid_search_lab.core.problem import at_position
from grid_search_lab.core.state import Direction, Edge, StateKey
from grid_search_lab.problems.rules import FourNeighbourWalk, TurnPenaltyWalk, WeightedCellWalk


def random_weighted_grid(seed, width=5, height=4, wall_p=0.2):
    rng = random.Random(seed)
    rows = []
    for y in range(height):
        row = ""
        for x in range(width):
            if (x, y) in ((0, 0), (width - 1, height - 1)):
                row += str(rng.randint(1, 9))
            elif rng.random() < wall_p:
                row += "#"
            else:
                row += str(rng.randint(1, 9))
        rows.append(row)
    return Grid.from_lines(rows)


def min_walk_cost(rule, start, is_goal, n_states):
    """Bellman-Ford: cheapest walk using at most n_states edges, by repeated relaxation of every edge."""
    dist = {start: 0}
    for _ in range(n_states):
        changed = False
        for s, d in list(dist.items()):
            for v, w in rule.expand(s):
                if d + w < dist.get(v, float("inf")):
                    dist[v] = d + w
                    changed = True
        if not changed:
            break
    goals = [d for s, d in dist.items() if is_goal(s)]
    return min(goals) if goals else None


def simple_path_min(rule, start, goal):
    best = [None]
    def dfs(s, cost, seen):
        if s == goal:
            if best[0] is None or cost < best[0]:
                best[0] = cost
            return
        for v, w in rule.expand(s):
            if v not in seen:
                dfs(v, cost + w, seen | {v})
    dfs(start, 0, {start})
    return best[0]


@pytest.mark.parametrize("seed", range(12))
def test_dijkstra_matches_brute_force_weighted(seed):
    grid = random_weighted_grid(seed)
    rule = WeightedCellWalk(grid)
    start, goal = StateKey((0, 0)), StateKey((grid.width - 1, grid.height - 1))
    r = dijkstra_search(grid, rule, start, goal)
    expected = min_walk_cost(rule, start, lambda s: s == goal, grid.width * grid.height)
    assert r.cost == expected
    if expected is None:
        assert r.outcome is RunState.EXHAUSTED
    else:
        assert r.outcome is RunState.SUCCEEDED


@pytest.mark.parametrize("seed", range(6))
def test_dijkstra_matches_simple_path_enumeration_3x3(seed):
    grid = random_weighted_grid(seed, width=3, height=3, wall_p=0.0)
    rule = WeightedCellWalk(grid)
    start, goal = StateKey((0, 0)), StateKey((2, 2))
    assert dijkstra_search(grid, rule, start, goal).cost == simple_path_min(rule, start, goal)


@pytest.mark.parametrize("seed", range(8))
def test_turn_penalty_matches_brute_force(seed):
    rng = random.Random(seed)
    rows = ["".join("#" if rng.random() < 0.25 else "." for _ in range(4)) for _ in range(4)]
    grid = Grid.from_lines(rows).with_symbols([(0, 0), (3, 3)], ".")
    rule = TurnPenaltyWalk(grid, turn_cost=7)
    start = StateKey((0, 0), Direction.EAST)
    r = dijkstra_search(grid, rule, start, at_position((3, 3)))
    assert r.cost == min_walk_cost(rule, start, at_position((3, 3)), 4 * 16)


@pytest.mark.parametrize("seed", range(6))
def test_a_star_agrees_with_dijkstra(seed):
    grid = random_weighted_grid(seed, width=6, height=6, wall_p=0.3)
    rule = FourNeighbourWalk(grid)
    target = (5, 5)
    d = dijkstra_search(grid, rule, StateKey((0, 0)), at_position(target))
    a = a_star_search(grid, rule, StateKey((0, 0)), target)
    assert a.cost == d.cost
    assert a.nodes_expanded <= d.nodes_expanded


def test_cost_map_only_ever_decreases():
    grid = random_weighted_grid(3, width=7, height=7, wall_p=0.1)
    seen = {}
    def observer(state, cost):
        if state in seen:
            assert cost < seen[state]
        seen[state] = cost
    engine = SearchEngine(grid, WeightedCellWalk(grid), observer=observer)
    r = engine.run(StateKey((0, 0)))
    assert seen == r.distances


def test_turn_penalty_single_bend_costs_steps_plus_turn():
    grid = Grid.from_text("S...\n###.\n###.\n###E\n")
    r = dijkstra_search(grid, TurnPenaltyWalk(grid, turn_cost=1000),
                        StateKey((0, 0), Direction.EAST), at_position((3, 3)))
    assert r.cost == 1006
    assert r.path_positions() == [(0, 0), (1, 0), (2, 0), (3, 0), (3, 1), (3, 2), (3, 3)]
    assert r.goal == StateKey((3, 3), Direction.SOUTH)


def test_turn_cost_is_caller_supplied():
    grid = Grid.from_text("S..\n##.\n##E\n")
    start = StateKey((0, 0), Direction.EAST)
    assert dijkstra_search(grid, TurnPenaltyWalk(grid, turn_cost=1000), start, at_position((2, 2))).cost == 1004
    assert dijkstra_search(grid, TurnPenaltyWalk(grid, turn_cost=5), start, at_position((2, 2))).cost == 9


def test_enclosed_goal_is_exhausted_not_succeeded():
    grid = Grid.from_text("S....\n...#.\n..#E#\n...#.\n")
    engine = SearchEngine(grid, FourNeighbourWalk(grid))
    assert engine.state is RunState.IDLE
    r = engine.run(StateKey((0, 0)), StateKey((3, 2)))
    assert engine.state is RunState.EXHAUSTED
    assert r.outcome is RunState.EXHAUSTED
    assert not r.reached
    assert r.cost is None and r.path is None
    assert StateKey((3, 2)) not in r.distances
    assert (3, 2) not in r.reachable_positions()
    assert len(r.distances) == 14


def test_start_is_goal_costs_zero_and_is_reached():
    grid = Grid.filled(2, 2)
    r = breadth_first_search(grid, FourNeighbourWalk(grid), StateKey((1, 1)), StateKey((1, 1)))
    assert r.reached and r.cost == 0
    assert r.path == [StateKey((1, 1))]


def test_tie_break_pins_exact_path_and_is_repeatable():
    grid = Grid.filled(3, 3)
    rule = FourNeighbourWalk(grid)
    runs = [dijkstra_search(grid, rule, StateKey((0, 0)), StateKey((2, 2))) for _ in range(3)]
    expected = [(0, 0), (1, 0), (2, 0), (2, 1), (2, 2)]
    for r in runs:
        assert r.cost == 4
        assert [s.position for s in r.path] == expected


def test_bfs_counts_hops_and_reachable_set_is_stable():
    grid = Grid.from_text("..#.\n..#.\n....\n")
    rule = FourNeighbourWalk(grid)
    r = breadth_first_search(grid, rule, StateKey((0, 0)), StateKey((3, 0)))
    assert r.cost == 7
    first = reachable_states(grid, rule, StateKey((0, 0)))
    second = reachable_states(grid, rule, StateKey((0, 0)))
    assert first == second
    assert {s.position for s in first} == set(grid.find_all("."))


def test_multi_source_search():
    grid = Grid.filled(5, 1)
    r = breadth_first_search(grid, FourNeighbourWalk(grid),
                             [StateKey((0, 0)), StateKey((4, 0))], StateKey((3, 0)))
    assert r.cost == 1
    assert r.path == [StateKey((4, 0)), StateKey((3, 0))]


class _NegativeRule:
    def expand(self, state):
        return [Edge(StateKey((1, 0)), -1)]


class _OffGridRule:
    def expand(self, state):
        return [Edge(StateKey((9, 9)), 1)]


@pytest.mark.parametrize("rule", [_NegativeRule(), _OffGridRule()])
def test_bad_edges_fail_fast(rule):
    grid = Grid.filled(3, 3)
    with pytest.raises(TransitionRuleError):
        dijkstra_search(grid, rule, StateKey((0, 0)), StateKey((2, 2)))


def test_turn_rule_requires_facing():
    grid = Grid.filled(2, 2)
    with pytest.raises(TransitionRuleError, match="facing"):
        dijkstra_search(grid, TurnPenaltyWalk(grid), StateKey((0, 0)), at_position((1, 1)))

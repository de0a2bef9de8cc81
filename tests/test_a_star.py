"""Tests for the A* engine: optimality, errors and the state contract."""

from concurrent.futures import ThreadPoolExecutor

import pytest

from pathfinder.domains.grid import Grid
from pathfinder.heuristics.manhattan import taxicab
from pathfinder.heuristics.zero import zero
from pathfinder.search.a_star import PathFinder, a_star, reconstruct_path, shortest_path, TIE_BREAKS
from pathfinder.search.bfs import bfs
from pathfinder.search.errors import InvalidHeuristic, NoPathFound, SearchError


def _assert_valid_path(path, start, goal, neighbors):
    assert path[0] == start
    assert path[-1] == goal
    for a, b in zip(path, path[1:]):
        assert b in neighbors(a)


def test_start_equals_goal(ring):
    neighbors, h = ring(4)
    assert PathFinder(neighbors, h).shortest_path(0, 0) == [0]


def test_ring_of_four(ring):
    neighbors, h = ring(4)
    path = PathFinder(neighbors, h).shortest_path(0, 2)
    assert len(path) == 3
    assert path in ([0, 1, 2], [0, 3, 2])


def test_grid_with_blocked_cell_next_to_start():
    grid = Grid(4, 4, walls=[(1, 0)])
    path = PathFinder(grid.neighbors, taxicab).shortest_path((0, 0), (3, 3))

    assert len(path) == 7
    _assert_valid_path(path, (0, 0), (3, 3), grid.neighbors)
    for a, b in zip(path, path[1:]):
        assert taxicab(a, b) == 1
    assert (1, 0) not in path


def test_disconnected_raises_no_path_found():
    adj = {0: [1], 1: [0], 2: [3], 3: [2]}
    finder = PathFinder(lambda s: adj[s], zero)

    with pytest.raises(NoPathFound) as exc:
        finder.shortest_path(0, 3)

    assert exc.value.start == 0
    assert exc.value.goal == 3
    assert exc.value.result.termination == "exhausted"
    assert exc.value.result.expanded == 2
    assert isinstance(exc.value, SearchError)


def test_walled_off_goal_in_grid():
    grid = Grid.from_lines([
        "..#.",
        "..#.",
        "###.",
        "....",
    ])
    with pytest.raises(NoPathFound):
        PathFinder(grid.neighbors, grid.heuristic_cost).shortest_path((0, 0), (3, 0))


def test_search_reports_exhausted_instead_of_raising():
    res = a_star(0, 5, zero, lambda s: [1] if s == 0 else [])
    assert res.path is None
    assert res.g is None
    assert not res.found


@pytest.mark.parametrize("seed", range(12))
def test_matches_breadth_first_oracle_on_random_graphs(random_graph, seed):
    neighbors = random_graph(25, 0.1, seed)
    for goal in (1, 7, 24):
        oracle = bfs(0, goal, neighbors)
        res = a_star(0, goal, zero, neighbors)
        assert res.termination == oracle.termination
        if oracle.found:
            assert res.g == oracle.g
            assert len(res.path) == oracle.g + 1
            _assert_valid_path(res.path, 0, goal, neighbors)


@pytest.mark.parametrize("seed", range(8))
def test_taxicab_matches_zero_heuristic_on_random_mazes(seed):
    grid = Grid.random(15, 15, 0.3, seed, keep_open=[(0, 0), (14, 14)])
    guided = a_star((0, 0), (14, 14), grid.heuristic_cost, grid.neighbors)
    blind = a_star((0, 0), (14, 14), zero, grid.neighbors)

    assert guided.termination == blind.termination
    assert guided.g == blind.g
    if guided.found:
        # a consistent heuristic never expands more than plain breadth-first order
        assert guided.expanded <= blind.expanded


def test_repeated_calls_return_same_length(ring):
    neighbors, h = ring(9)
    finder = PathFinder(neighbors, h)
    lengths = {len(finder.shortest_path(0, 4)) for _ in range(5)}
    assert lengths == {5}


@pytest.mark.parametrize("tie_break", TIE_BREAKS)
def test_every_tie_break_is_optimal(tie_break):
    grid = Grid(6, 6, walls=[(2, 1), (2, 2), (2, 3), (4, 4)])
    finder = PathFinder(grid.neighbors, grid.heuristic_cost, tie_break=tie_break)
    path = finder.shortest_path((0, 0), (5, 5))
    assert len(path) - 1 == bfs((0, 0), (5, 5), grid.neighbors).g
    assert finder.search((0, 0), (5, 5)).tie_break == tie_break


def test_unknown_tie_break_rejected():
    with pytest.raises(ValueError):
        PathFinder(lambda s: [], zero, tie_break="random")
    with pytest.raises(ValueError):
        a_star(0, 0, zero, lambda s: [], tie_break="random")


def test_negative_heuristic_does_not_crash():
    assert shortest_path(3, 3, lambda s: [s + 1], lambda a, b: -5) == [3]
    path = shortest_path(0, 3, lambda s: [s + 1] if s < 3 else [], lambda a, b: -1)
    assert path == [0, 1, 2, 3]


def test_inadmissible_heuristic_still_terminates(ring):
    neighbors, _ = ring(10)
    path = PathFinder(neighbors, lambda a, b: 100 * (a != b)).shortest_path(0, 5)
    _assert_valid_path(path, 0, 5, neighbors)


def test_check_heuristic_flags_inconsistent_estimate():
    line = {0: [1], 1: [0, 2], 2: [1, 3], 3: [2]}
    h = {0: 3, 1: 0, 2: 1, 3: 0}
    finder = PathFinder(lambda s: line[s], lambda a, b: h[a], check_heuristic=True)

    with pytest.raises(InvalidHeuristic):
        finder.shortest_path(0, 3)
    # off by default
    assert len(PathFinder(lambda s: line[s], lambda a, b: h[a]).shortest_path(0, 3)) == 4


def test_check_heuristic_flags_negative_estimate():
    finder = PathFinder(lambda s: [], lambda a, b: -1, check_heuristic=True)
    with pytest.raises(InvalidHeuristic):
        finder.shortest_path(0, 0)
    assert issubclass(InvalidHeuristic, ValueError)


def test_check_heuristic_accepts_taxicab():
    grid = Grid(5, 5, walls=[(1, 1), (2, 1), (3, 1)])
    finder = PathFinder(grid.neighbors, grid.heuristic_cost, check_heuristic=True)
    assert len(finder.shortest_path((0, 0), (4, 4))) == 9


def test_neighbor_errors_propagate():
    def neighbors(s):
        if s == 2:
            raise RuntimeError("corrupt state")
        return [s + 1]

    with pytest.raises(RuntimeError, match="corrupt state"):
        shortest_path(0, 5, neighbors, zero)


class Walker:
    """Position plus the moves taken; at the target the moves stop mattering."""

    TARGET = (2, 2)

    def __init__(self, x, y, trail=""):
        self.x = x
        self.y = y
        self.trail = trail

    def __eq__(self, other):
        if not isinstance(other, Walker):
            return NotImplemented
        if (self.x, self.y) != (other.x, other.y):
            return False
        if (self.x, self.y) == self.TARGET:
            return True
        return self.trail == other.trail

    def __hash__(self):
        if (self.x, self.y) == self.TARGET:
            return hash((self.x, self.y))
        return hash((self.x, self.y, self.trail))

    def __repr__(self):
        return f"Walker({self.x}, {self.y}, {self.trail!r})"


def _walker_neighbors(w):
    out = []
    for dx, dy, step in ((0, -1, "U"), (0, 1, "D"), (-1, 0, "L"), (1, 0, "R")):
        x, y = w.x + dx, w.y + dy
        if 0 <= x <= 2 and 0 <= y <= 2:
            out.append(Walker(x, y, w.trail + step))
    return out


def test_state_equality_may_ignore_history_at_goal():
    path = PathFinder(
        _walker_neighbors,
        lambda a, b: abs(a.x - b.x) + abs(a.y - b.y),
    ).shortest_path(Walker(0, 0), Walker(2, 2))

    assert len(path) == 5
    assert path[-1] == Walker(2, 2, "anything")
    assert len(path[-1].trail) == 4
    assert sorted(path[-1].trail) == ["D", "D", "R", "R"]


def test_return_path_false_keeps_cost():
    grid = Grid(5, 5)
    res = a_star((0, 0), (4, 4), grid.heuristic_cost, grid.neighbors, return_path=False)
    assert res.path is None
    assert res.g == 8
    assert res.expanded >= 8
    assert res.generated >= res.expanded


def test_fewest_steps_counts_moves(ring):
    neighbors, h = ring(12)
    assert PathFinder(neighbors, h).fewest_steps(0, 5) == 5
    assert PathFinder(neighbors, h).fewest_steps(0, 0) == 0


def test_reconstruct_path_follows_predecessors():
    assert reconstruct_path({"b": "a", "c": "b"}, "c") == ["a", "b", "c"]
    assert reconstruct_path({}, "a") == ["a"]


def test_shared_finder_across_threads():
    grid = Grid.random(20, 20, 0.2, seed=3, keep_open=[(0, 0)])
    finder = PathFinder(grid.neighbors, grid.heuristic_cost)
    goals = [p for p in grid.open_cells() if p != (0, 0)][::7]
    expected = {g: finder.search((0, 0), g, return_path=False).g for g in goals}

    def solve(goal):
        return goal, finder.search((0, 0), goal, return_path=False).g

    with ThreadPoolExecutor(max_workers=4) as pool:
        got = dict(pool.map(solve, goals))

    assert got == expected

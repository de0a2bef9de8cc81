from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, Dict, Generic, Hashable, Iterable, List, Optional, Set, Tuple, TypeVar
import heapq
from time import perf_counter
import itertools

from pathfinder.search.errors import InvalidHeuristic, NoPathFound

# Any immutable value with == and a hash consistent with it.
State = TypeVar("State", bound=Hashable)

NeighborsFn = Callable[[State], Iterable[State]]
HeuristicFn = Callable[[State, State], int]

TIE_BREAKS = ("h", "g", "fifo", "lifo")
STEP_COST = 1


@dataclass
class SearchResult(Generic[State]):
    path: Optional[List[State]]
    g: Optional[int]
    expanded: int = 0
    generated: int = 0
    duplicates: int = 0
    peak_open: int = 0
    peak_closed: int = 0
    time: float = 0.0
    algorithm: str = "A*"
    tie_break: str = ""
    termination: str = "ok"

    @property
    def found(self) -> bool:
        return self.termination == "ok"


def reconstruct_path(came_from: Dict[State, State], end: State) -> List[State]:
    path: List[State] = [end]
    node = end
    while node in came_from:
        node = came_from[node]
        path.append(node)
    path.reverse()
    return path


def _priority_fn(tie_break: str) -> Callable[[int, int, int, int], Tuple[int, int, int]]:
    if tie_break == "h":    return lambda f, g, h, ctr: (f, h, ctr)
    if tie_break == "g":    return lambda f, g, h, ctr: (f, -g, ctr)
    if tie_break == "fifo": return lambda f, g, h, ctr: (f, 0, ctr)
    if tie_break == "lifo": return lambda f, g, h, ctr: (f, 0, -ctr)
    raise ValueError(f"Unknown tie_break {tie_break!r}; expected one of {TIE_BREAKS}")


def a_star(
    start: State,
    goal: State,
    heuristic_cost: HeuristicFn,
    neighbors_fn: NeighborsFn,
    tie_break: str = "h",
    return_path: bool = True,
    check_heuristic: bool = False,
) -> SearchResult[State]:
    """
    A* over unit-cost edges, with instrumentation.

    neighbors_fn(state) -> iterable of successor states. It may yield states that
    were already visited; closed states are filtered here.
    heuristic_cost(from, to) -> int, an estimate of the remaining steps. Optimality
    needs it admissible and consistent; nothing is checked unless check_heuristic.

    Every dict and set below is local to this call, so one pair of caller
    functions can serve concurrent searches.
    """
    priority = _priority_fn(tie_break)
    t0 = perf_counter()

    counter = itertools.count()
    open_heap: List[Tuple[Tuple[int, int, int], int, State]] = []

    def estimate(state: State) -> int:
        h = heuristic_cost(state, goal)
        if check_heuristic and h < 0:
            raise InvalidHeuristic(f"heuristic_cost({state!r}, goal) returned {h} < 0")
        return h

    h0 = estimate(start)
    cost: Dict[State, int] = {start: 0}
    estimated: Dict[State, int] = {start: h0}
    came_from: Dict[State, State] = {}
    open_set: Set[State] = {start}
    closed: Set[State] = set()
    heapq.heappush(open_heap, (priority(h0, 0, h0, next(counter)), next(counter), start))

    expanded = 0
    generated = 0
    duplicates = 0
    peak_open = 1
    peak_closed = 0

    while open_set:
        peak_open = max(peak_open, len(open_set))
        _, _, current = heapq.heappop(open_heap)
        if current in closed:
            # stale entry, the state was re-pushed with a lower f and already expanded
            continue

        if current == goal:
            g = cost[current]
            return SearchResult(
                path=reconstruct_path(came_from, current) if return_path else None,
                g=g,
                expanded=expanded,
                generated=generated,
                duplicates=duplicates,
                peak_open=peak_open,
                peak_closed=peak_closed,
                time=perf_counter() - t0,
                algorithm="A*",
                tie_break=tie_break,
                termination="ok",
            )

        open_set.discard(current)
        closed.add(current)
        expanded += 1
        peak_closed = max(peak_closed, len(closed))

        g_current = cost[current]
        h_current = estimated[current] - g_current
        for neighbor in neighbors_fn(current):
            generated += 1
            if check_heuristic:
                h_next = estimate(neighbor)
                if h_current > STEP_COST + h_next:
                    raise InvalidHeuristic(
                        f"heuristic drops from {h_current} to {h_next} across "
                        f"{current!r} -> {neighbor!r}"
                    )

            if neighbor in closed:
                duplicates += 1
                continue

            tentative = g_current + STEP_COST
            if neighbor in open_set:
                duplicates += 1
                if tentative >= cost[neighbor]:
                    continue  # not a better path
            else:
                open_set.add(neighbor)

            h = h_next if check_heuristic else estimate(neighbor)
            came_from[neighbor] = current
            cost[neighbor] = tentative
            estimated[neighbor] = tentative + h
            heapq.heappush(open_heap, (priority(tentative + h, tentative, h, next(counter)), next(counter), neighbor))

    # Open exhausted without finding goal
    return SearchResult(
        path=None,
        g=None,
        expanded=expanded,
        generated=generated,
        duplicates=duplicates,
        peak_open=peak_open,
        peak_closed=peak_closed,
        time=perf_counter() - t0,
        algorithm="A*",
        tie_break=tie_break,
        termination="exhausted",
    )


class PathFinder(Generic[State]):
    """
    A* search bound to one state domain.

    Callers supply how a state expands (neighbors) and how far a state looks
    from another (heuristic_cost); the finder knows nothing else about states
    beyond equality and hashing. No search state is kept on the instance.
    """

    def __init__(
        self,
        neighbors: NeighborsFn,
        heuristic_cost: HeuristicFn,
        tie_break: str = "h",
        check_heuristic: bool = False,
    ):
        _priority_fn(tie_break)
        self.neighbors = neighbors
        self.heuristic_cost = heuristic_cost
        self.tie_break = tie_break
        self.check_heuristic = check_heuristic

    def search(self, start: State, goal: State, return_path: bool = True) -> SearchResult[State]:
        return a_star(
            start,
            goal,
            self.heuristic_cost,
            self.neighbors,
            tie_break=self.tie_break,
            return_path=return_path,
            check_heuristic=self.check_heuristic,
        )

    def shortest_path(self, start: State, goal: State) -> List[State]:
        """
        Shortest sequence of states from start to goal, both inclusive.
        Raises NoPathFound when the goal cannot be reached.
        """
        res = self.search(start, goal)
        if res.path is None:
            raise NoPathFound(start, goal, res)
        return res.path

    def fewest_steps(self, start: State, goal: State) -> int:
        # the starting state is not a move
        return len(self.shortest_path(start, goal)) - 1


def shortest_path(
    start: State,
    goal: State,
    neighbors_fn: NeighborsFn,
    heuristic_cost: HeuristicFn,
) -> List[State]:
    return PathFinder(neighbors_fn, heuristic_cost).shortest_path(start, goal)

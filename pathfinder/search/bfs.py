from collections import deque
from time import perf_counter
from typing import Dict, Set

from pathfinder.search.a_star import NeighborsFn, SearchResult, State, reconstruct_path

def bfs(start: State, goal: State,
        neighbors_fn: NeighborsFn,
        return_path: bool = True) -> SearchResult:
    t0 = perf_counter()
    q = deque([start])
    parent: Dict[State, State] = {}
    depth: Dict[State, int] = {start: 0}
    expanded = generated = duplicates = 0
    seen: Set[State] = {start}
    peak = 1
    while q:
        peak = max(peak, len(q))
        s = q.popleft()
        if s == goal:
            return SearchResult(
                path=reconstruct_path(parent, s) if return_path else None,
                g=depth[s], expanded=expanded, generated=generated, duplicates=duplicates,
                peak_open=peak, peak_closed=expanded,
                time=perf_counter()-t0, algorithm="BFS", termination="ok")
        expanded += 1
        for s2 in neighbors_fn(s):
            generated += 1
            if s2 in seen:
                duplicates += 1
                continue
            seen.add(s2); parent[s2] = s; depth[s2] = depth[s] + 1; q.append(s2)
    return SearchResult(
        path=None, g=None, expanded=expanded, generated=generated, duplicates=duplicates,
        peak_open=peak, peak_closed=expanded,
        time=perf_counter()-t0, algorithm="BFS", termination="exhausted")

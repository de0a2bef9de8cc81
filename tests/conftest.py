import random

import pytest


@pytest.fixture
def ring():
    """Factory: neighbor function and ring-distance heuristic for an n-node ring."""

    def make(n):
        def neighbors(i):
            return [(i - 1) % n, (i + 1) % n]

        def heuristic(a, b):
            d = abs(a - b) % n
            return min(d, n - d)

        return neighbors, heuristic

    return make


@pytest.fixture
def random_graph():
    """Factory: undirected random graph on nodes 0..n-1 as a neighbor function."""

    def make(n, p, seed):
        rng = random.Random(seed)
        adj = {i: [] for i in range(n)}
        for i in range(n):
            for j in range(i + 1, n):
                if rng.random() < p:
                    adj[i].append(j)
                    adj[j].append(i)
        return lambda i: adj[i]

    return make

from __future__ import annotations
from typing import Tuple, List, Dict, Optional
import bisect
import random

State = Tuple[int, ...]  # row-major tiles, 0 is the blank

class RectPuzzle:
    """
    Generic R×C sliding-tile puzzle (0 is blank).
    Works for 3×3 (8-puzzle), 3×4, 4×4 (15-puzzle), etc.
    Heuristics take the goal explicitly, so any arrangement can be the target.
    """
    def __init__(self, rows: int, cols: int):
        if rows < 2 or cols < 2:
            raise ValueError(f"board must be at least 2x2, got {rows}x{cols}")
        self.R = rows
        self.C = cols
        self.size = rows * cols
        self.GOAL: State = tuple(range(1, self.size)) + (0,)
        # cells the blank can swap with, indexed by blank cell: up, down, left, right
        self._swaps: List[Tuple[int, ...]] = [self._adjacent(i) for i in range(self.size)]
        self._goal_pos = self._positions(self.GOAL)

    def _adjacent(self, i: int) -> Tuple[int, ...]:
        r, c = divmod(i, self.C)
        around = ((r - 1, c), (r + 1, c), (r, c - 1), (r, c + 1))
        return tuple(rr * self.C + cc for rr, cc in around
                     if 0 <= rr < self.R and 0 <= cc < self.C)

    def _positions(self, goal: State) -> Dict[int, Tuple[int, int]]:
        return {t: divmod(i, self.C) for i, t in enumerate(goal) if t != 0}

    def _goal_positions(self, goal: State) -> Dict[int, Tuple[int, int]]:
        return self._goal_pos if goal == self.GOAL else self._positions(goal)

    # ---------- transitions ----------
    def neighbors(self, s: State) -> List[State]:
        """States reachable by sliding one tile into the blank."""
        z = s.index(0)
        out: List[State] = []
        for j in self._swaps[z]:
            lst = list(s)
            lst[z], lst[j] = lst[j], lst[z]
            out.append(tuple(lst))
        return out

    # ---------- instance generation ----------
    def scramble(self, depth: int, seed: int) -> State:
        """Random walk of `depth` moves from GOAL that never steps straight back."""
        rng = random.Random(seed)
        prev: Optional[State] = None
        s = self.GOAL
        for _ in range(depth):
            options = [n for n in self.neighbors(s) if n != prev]
            prev, s = s, rng.choice(options)
        return s

    # ---------- solvability ----------
    def is_solvable(self, s: State, goal: Optional[State] = None) -> bool:
        """
        Whether s can reach goal (GOAL by default).

        Every move is a transposition with the blank and moves the blank one
        cell, so the parity of the permutation s -> goal must equal the parity
        of the blank's taxicab distance to its goal cell.
        """
        goal = self.GOAL if goal is None else goal
        where = {t: i for i, t in enumerate(goal)}
        perm = [where[t] for t in s]
        seen = [False] * self.size
        cycles = 0
        for i in range(self.size):
            if seen[i]:
                continue
            cycles += 1
            while not seen[i]:
                seen[i] = True
                i = perm[i]
        (br, bc), (gr, gc) = divmod(s.index(0), self.C), divmod(goal.index(0), self.C)
        return (self.size - cycles) % 2 == (abs(br - gr) + abs(bc - gc)) % 2

    # ---------- heuristics ----------
    def manhattan(self, s: State, goal: State) -> int:
        """Sum of tile distances to their place in goal (blank ignored)."""
        pos = self._goal_positions(goal)
        dist = 0
        for idx, t in enumerate(s):
            if t == 0: continue
            r, c = divmod(idx, self.C)
            gr, gc = pos[t]
            dist += abs(r - gr) + abs(c - gc)
        return dist

    def linear_conflict(self, s: State, goal: State) -> int:
        """
        Manhattan + 2 per tile that has to leave its goal line so the tiles
        already in that line can pass each other.
        """
        pos = self._goal_positions(goal)
        m = self.manhattan(s, goal)
        R, C = self.R, self.C
        # Row conflicts
        for r in range(R):
            row = s[r * C:(r + 1) * C]
            m += 2 * _tiles_to_remove([pos[t][1] for t in row if t != 0 and pos[t][0] == r])
        # Column conflicts
        for c in range(C):
            col = [s[c + r * C] for r in range(R)]
            m += 2 * _tiles_to_remove([pos[t][0] for t in col if t != 0 and pos[t][1] == c])
        return m


def _tiles_to_remove(goal_order: List[int]) -> int:
    """Tiles in a line minus its longest increasing run of goal indices."""
    best: List[int] = []  # best[k] = smallest tail of an increasing run of length k+1
    for g in goal_order:
        k = bisect.bisect_left(best, g)
        if k == len(best): best.append(g)
        else:              best[k] = g
    return len(goal_order) - len(best)


class NPuzzle(RectPuzzle):
    """Square N×N board."""
    def __init__(self, n: int):
        super().__init__(n, n)
        self.N = n


def make_unsolvable_variant(s: State) -> State:
    """Swap two tiles without moving the blank. The result is unreachable from s."""
    a, b = [i for i, t in enumerate(s) if t != 0][:2]
    lst = list(s)
    lst[a], lst[b] = lst[b], lst[a]
    return tuple(lst)

from __future__ import annotations
from typing import FrozenSet, Iterable, List, Sequence, Tuple
import random

from pathfinder.heuristics.manhattan import taxicab

Pos = Tuple[int, int]  # (x, y), y grows downwards

class Grid:
    """
    Rectangular 4-connected grid. States are (x, y) positions; walls and
    anything outside the bounds are impassable.
    """
    def __init__(self, width: int, height: int, walls: Iterable[Pos] = ()):
        if width < 1 or height < 1:
            raise ValueError(f"grid must be at least 1x1, got {width}x{height}")
        self.W = width
        self.H = height
        self.walls: FrozenSet[Pos] = frozenset(walls)
        outside = sorted(p for p in self.walls if not self.in_bounds(p))
        if outside:
            raise ValueError(f"walls outside the {width}x{height} grid: {outside}")

    def in_bounds(self, p: Pos) -> bool:
        x, y = p
        return 0 <= x < self.W and 0 <= y < self.H

    def is_open(self, p: Pos) -> bool:
        return self.in_bounds(p) and p not in self.walls

    def open_cells(self) -> List[Pos]:
        return [(x, y) for y in range(self.H) for x in range(self.W) if (x, y) not in self.walls]

    # ---------- search contract ----------
    def neighbors(self, p: Pos) -> List[Pos]:
        """Open orthogonal neighbours: left, right, up, down."""
        x, y = p
        cand = ((x - 1, y), (x + 1, y), (x, y - 1), (x, y + 1))
        return [q for q in cand if self.is_open(q)]

    def heuristic_cost(self, a: Pos, b: Pos) -> int:
        # Taxicab distance passes through walls, so it never overestimates.
        return taxicab(a, b)

    # ---------- text form ----------
    @classmethod
    def from_lines(cls, lines: Sequence[str]) -> "Grid":
        """Parse rows of '#' (wall) and '.' (open). Blank lines are ignored."""
        rows = [ln.rstrip("\r\n") for ln in lines if ln.strip()]
        if not rows:
            raise ValueError("no grid rows given")
        width = len(rows[0])
        walls: List[Pos] = []
        for y, row in enumerate(rows):
            if len(row) != width:
                raise ValueError(f"row {y} has length {len(row)}, expected {width}")
            for x, ch in enumerate(row):
                if ch == "#":
                    walls.append((x, y))
                elif ch != ".":
                    raise ValueError(f"unexpected character {ch!r} at ({x}, {y})")
        return cls(width, len(rows), walls)

    def render(self, path: Iterable[Pos] = ()) -> List[str]:
        """One string per row: '#' wall, 'O' on the given path, '.' open."""
        on_path = set(path)
        lines = []
        for y in range(self.H):
            row = []
            for x in range(self.W):
                if (x, y) in self.walls:  row.append("#")
                elif (x, y) in on_path:   row.append("O")
                else:                     row.append(".")
            lines.append("".join(row))
        return lines

    # ---------- instance generation ----------
    @classmethod
    def random(cls, width: int, height: int, density: float, seed: int,
               keep_open: Iterable[Pos] = ()) -> "Grid":
        """Each cell becomes a wall with probability `density`, except cells in keep_open."""
        if not 0.0 <= density < 1.0:
            raise ValueError(f"density must be in [0, 1), got {density}")
        rng = random.Random(seed)
        keep = set(keep_open)
        walls = [(x, y) for y in range(height) for x in range(width)
                 if rng.random() < density and (x, y) not in keep]
        return cls(width, height, walls)

from typing import Sequence

Point = Sequence[int]

def taxicab(a: Point, b: Point) -> int:
    """L1 distance between two coordinate tuples. Admissible on any 4-connected unit grid."""
    return sum(abs(x - y) for x, y in zip(a, b))

from typing import Any

def zero(a: Any, b: Any) -> int:
    # A* with this estimate expands in breadth-first order.
    return 0

from __future__ import annotations
from typing import Any, Optional


class SearchError(Exception):
    """Base class for errors raised by the search engine."""


class NoPathFound(SearchError):
    """The open set was exhausted before the goal was reached."""

    def __init__(self, start: Any, goal: Any, result: Optional[Any] = None):
        super().__init__(f"No path from {start!r} to {goal!r}")
        self.start = start
        self.goal = goal
        self.result = result


class InvalidHeuristic(SearchError, ValueError):
    """
    Raised only when heuristic checking is switched on and the heuristic
    returns a negative estimate or drops by more than one step cost across an edge.
    """

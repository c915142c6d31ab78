"""Pathfinding engines: A* and depth-bounded backtracking."""

from .base import SearchEngine, SearchInvariantError, SearchPhase
from .astar import AStarSearch
from .backtracking import BacktrackingSearch

__all__ = [
    "SearchEngine",
    "SearchInvariantError",
    "SearchPhase",
    "AStarSearch",
    "BacktrackingSearch",
]

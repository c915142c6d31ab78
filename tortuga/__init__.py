"""
Tortuga - shortest-route search on the 9x9 sea map.

Jack Sparrow starts at (0, 0) and must reach the Dead Man's Chest while
avoiding Davy Jones, the Kraken and the Rock. Tortuga's rum casks let him
destroy the Kraken. Two engines (A* and depth-bounded backtracking) solve
the same maps so their results and timings can be compared.
"""

__version__ = "0.1.0"

from .agents import Agent, AgentKind, PLACEMENT_ORDER, perception_offsets

from .environment import (
    GRID_SIZE,
    GridCell,
    GridMap,
    MapLayout,
    InvalidPlacementError,
    MalformedInputError,
    clamp_to_bounds,
    format_path,
    render_ascii_map,
    validate_path,
)

from .search import (
    SearchEngine,
    SearchInvariantError,
    SearchPhase,
    AStarSearch,
    BacktrackingSearch,
)

from .scenario import MapLoader, load_map
from .analysis import Analysis, AlgorithmStats, SearchOutcome, run_batch, timed_search

__all__ = [
    # Agents
    "Agent",
    "AgentKind",
    "PLACEMENT_ORDER",
    "perception_offsets",
    # Map
    "GRID_SIZE",
    "GridCell",
    "GridMap",
    "MapLayout",
    "InvalidPlacementError",
    "MalformedInputError",
    "clamp_to_bounds",
    "format_path",
    "render_ascii_map",
    "validate_path",
    # Engines
    "SearchEngine",
    "SearchInvariantError",
    "SearchPhase",
    "AStarSearch",
    "BacktrackingSearch",
    # Input and analysis
    "MapLoader",
    "load_map",
    "Analysis",
    "AlgorithmStats",
    "SearchOutcome",
    "run_batch",
    "timed_search",
]

"""
Common interface for the pathfinding engines.

Both engines answer the same question: the shortest route from Jack Sparrow
to the Dead Man's Chest, either straight there or via Tortuga, where the rum
casks let Jack destroy the Kraken on the way to the Chest.

Every run walks through the same phases:

    IDLE -> SEARCHING_DIRECT -> SEARCHING_TO_WAYPOINT
         -> SEARCHING_WAYPOINT_TO_GOAL -> RESOLVED | FAILED

The waypoint phases are skipped when they cannot succeed. A failed
sub-search is not an error; it just takes that route out of the comparison.
Finding no route at all is reported as ``None`` from ``find_path``.

An engine mutates the map it is bound to (search scratch, and hazard state
when the Kraken dies) and restores it before ``find_path`` returns, so the
other engine always starts from a pristine map.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Iterable, List, Optional

from tortuga.agents import AgentKind, Position
from tortuga.environment import GridCell, GridMap
from tortuga.logging_utils import log_search


class SearchPhase(Enum):
    """Where an engine is in its run."""

    IDLE = "idle"
    SEARCHING_DIRECT = "searching direct route"
    SEARCHING_TO_WAYPOINT = "searching route to Tortuga"
    SEARCHING_WAYPOINT_TO_GOAL = "searching route from Tortuga to the Chest"
    RESOLVED = "resolved"
    FAILED = "failed"


class SearchInvariantError(RuntimeError):
    """Raised when search bookkeeping is inconsistent.

    This signals a bug in adjacency or scratch-state handling, never a map
    without a route.
    """


class SearchEngine(ABC):
    """Base class for pathfinding engines bound to one ``GridMap``."""

    name: str = "Engine"

    def __init__(self, grid: GridMap):
        self.grid = grid
        self.phase = SearchPhase.IDLE

    @abstractmethod
    def find_path(self) -> Optional[List[Position]]:
        """Return the route from Jack to the Chest, or ``None`` if there is none.

        The route starts at Jack's spawn and ends on the Chest, inclusive.
        Implementations must leave the map's hazard state as they found it.
        """

    def _enter_phase(self, phase: SearchPhase) -> None:
        self.phase = phase
        log_search(f"[{self.name}] {phase.value}")

    def _finish(self, path: Optional[List[Position]]) -> Optional[List[Position]]:
        if path is None:
            self._enter_phase(SearchPhase.FAILED)
        else:
            self._enter_phase(SearchPhase.RESOLVED)
        return path

    def _restore_map(self) -> None:
        self.grid.reset_search_scratch()
        self.grid.fill_cells(refill=True)

    def _neutralize_kraken(self, neighbors: Iterable[GridCell]) -> bool:
        """Destroy the Kraken if it sits in one of ``neighbors``.

        Returns True when the Kraken was killed. Its own cell opens up right
        away unless the Rock shares it.
        """
        for neighbor in neighbors:
            if not neighbor.holds(AgentKind.KRAKEN) or neighbor.danger_level == 0:
                continue
            self.grid.kill_hazard(neighbor)
            if not neighbor.holds(AgentKind.ROCK) and neighbor.danger_level == 0:
                neighbor.walkable = True
            log_search(f"[{self.name}] Kraken at {neighbor.position} destroyed with the rum casks")
            return True
        return False

    @staticmethod
    def _prefer_waypoint(direct_moves: Optional[int], waypoint_moves: Optional[int]) -> bool:
        """Pick the Tortuga route only when it is strictly shorter (or the only one)."""
        if waypoint_moves is None:
            return False
        return direct_moves is None or waypoint_moves < direct_moves

"""Backtracking engine.

Exhaustive depth-first search with a memorized best cost per cell: a
neighbour is only entered when the current route reaches it in strictly
fewer moves than any route seen so far. A cell reached again at equal cost
is skipped.
Cells on the current route are marked visited and unmarked when the
recursion unwinds.

The search is bounded by a maximum route length (``Config.MAX_SEARCH_DEPTH``,
25 moves by default). This is a pragmatic cutoff picked from the longest
routes observed on generated maps, not a guarantee: a map whose only route is
longer than the cap is reported as having no route.
"""

from __future__ import annotations

import math
from typing import List, Optional

from tortuga.agents import Position
from tortuga.config import Config
from tortuga.environment import GridCell, GridMap, chebyshev_distance

from .base import SearchEngine, SearchInvariantError, SearchPhase


class BacktrackingSearch(SearchEngine):
    """Depth-bounded exhaustive pathfinding."""

    name = "Backtracking"

    def __init__(self, grid: GridMap, max_depth: Optional[int] = None):
        super().__init__(grid)
        self.max_depth = Config.MAX_SEARCH_DEPTH if max_depth is None else max_depth
        if self.max_depth < 1:
            raise ValueError(f"max_depth must be at least 1, got {self.max_depth}")

        # Best routes per phase, start and goal inclusive
        self.best_path_to_waypoint: List[GridCell] = []
        self.best_path_from_waypoint: List[GridCell] = []
        self.best_direct_path: List[GridCell] = []

        # Cells on the current recursion stack
        self._route: List[GridCell] = []

    def find_path(self) -> Optional[List[Position]]:
        grid = self.grid
        start_cell = grid.cell_at(grid.player.position)
        goal_cell = grid.cell_at(grid.chest.position)
        waypoint_cell = grid.cell_at(grid.tortuga.position)

        self.best_path_to_waypoint = []
        self.best_path_from_waypoint = []
        self.best_direct_path = []

        direct_moves: Optional[int] = None
        waypoint_moves: Optional[int] = None

        try:
            self._enter_phase(SearchPhase.SEARCHING_DIRECT)
            self._restore_map()
            direct = self.search(start_cell, goal_cell, math.inf, 0, waypoint_passed=False)
            if direct != math.inf:
                direct_moves = int(direct)

            # Neither pruning history nor a dead Kraken may leak between invocations
            self._enter_phase(SearchPhase.SEARCHING_TO_WAYPOINT)
            self._restore_map()
            to_waypoint = self.search(start_cell, waypoint_cell, math.inf, 0, waypoint_passed=False)

            if to_waypoint != math.inf:
                self._enter_phase(SearchPhase.SEARCHING_WAYPOINT_TO_GOAL)
                self._restore_map()
                from_waypoint = self.search(waypoint_cell, goal_cell, math.inf, 0, waypoint_passed=True)
                if from_waypoint != math.inf:
                    waypoint_moves = int(to_waypoint + from_waypoint)
        finally:
            self._restore_map()

        if self._prefer_waypoint(direct_moves, waypoint_moves):
            # Tortuga ends the first leg and starts the second
            route = self.best_path_to_waypoint[:-1] + self.best_path_from_waypoint
        elif direct_moves is not None:
            route = self.best_direct_path
        else:
            return self._finish(None)

        return self._finish([cell.position for cell in route])

    def search(
        self,
        cell: GridCell,
        goal: GridCell,
        best: float,
        depth: int,
        waypoint_passed: bool,
        hazard_alive: bool = True,
    ) -> float:
        """Explore every route from ``cell`` and return the best move count to ``goal``.

        Args:
            cell: Cell the route currently ends on
            goal: Destination cell for this phase
            best: Fewest moves found so far (``math.inf`` if none)
            depth: Moves taken to reach ``cell``
            waypoint_passed: Whether Jack already picked up the rum casks
            hazard_alive: Whether the Kraken is still alive on this branch

        Returns:
            The updated best move count
        """
        self._route.append(cell)
        try:
            if cell is goal:
                if depth < best:
                    best = depth
                    self._store_route(depth)
                return best

            cell.best_cost = depth
            cell.visited = True

            neighbors = sorted(
                self.grid.get_neighbors(cell),
                key=lambda neighbor: (chebyshev_distance(neighbor.position, goal.position), neighbor.position),
            )

            if waypoint_passed and hazard_alive and self.grid.kraken_alive:
                if self._neutralize_kraken(neighbors):
                    hazard_alive = False

            if depth < self.max_depth:
                for neighbor in neighbors:
                    if not neighbor.walkable or neighbor.visited:
                        continue
                    # Only enter cells this route reaches faster than any before
                    if depth + 1 >= neighbor.best_cost:
                        continue
                    neighbor.best_cost = depth + 1
                    best = self.search(neighbor, goal, best, depth + 1, waypoint_passed, hazard_alive)

            cell.visited = False
            return best
        finally:
            self._route.pop()

    def _store_route(self, depth: int) -> None:
        if len(self._route) != depth + 1:
            raise SearchInvariantError(
                f"Route holds {len(self._route)} cells but reached the goal after {depth} moves"
            )
        route = list(self._route)

        match self.phase:
            case SearchPhase.SEARCHING_DIRECT:
                self.best_direct_path = route
            case SearchPhase.SEARCHING_TO_WAYPOINT:
                self.best_path_to_waypoint = route
            case SearchPhase.SEARCHING_WAYPOINT_TO_GOAL:
                self.best_path_from_waypoint = route
            case _:
                raise SearchInvariantError(f"Goal reached outside a search phase ({self.phase.value})")

"""A* engine.

Best-first search ordered by ``g + h`` (ties go to the smaller ``h``), with
Chebyshev distance both as step cost and heuristic. On an 8-connected grid
with unit steps Chebyshev distance is exact for an empty map, so the
heuristic is admissible and consistent.

On the leg from Tortuga the Kraken dies while the first cell next to it is
expanded. Cells closed before that moment are never reopened, so a cell that
only became walkable with the kill is reached from later expansions only.
A* can therefore return a longer route than backtracking on such maps (or
fall back to an equally long direct route).
"""

from __future__ import annotations

import heapq
import itertools
from typing import List, Optional, Set, Tuple

from tortuga.agents import Position
from tortuga.environment import GridCell, chebyshev_distance

from .base import SearchEngine, SearchInvariantError, SearchPhase


class AStarSearch(SearchEngine):
    """Heuristic best-first pathfinding."""

    name = "AStar"

    def find_path(self) -> Optional[List[Position]]:
        grid = self.grid
        start = grid.player.position
        goal = grid.chest.position
        waypoint = grid.tortuga.position

        direct: Optional[List[GridCell]] = None
        via_waypoint: Optional[List[GridCell]] = None

        try:
            self._enter_phase(SearchPhase.SEARCHING_DIRECT)
            direct = self.shortest_path(start, goal)

            self._enter_phase(SearchPhase.SEARCHING_TO_WAYPOINT)
            to_waypoint = self.shortest_path(start, waypoint)
            if to_waypoint is not None:
                self._enter_phase(SearchPhase.SEARCHING_WAYPOINT_TO_GOAL)
                from_waypoint = self.shortest_path(waypoint, goal, waypoint_passed=True)
                if from_waypoint is not None:
                    via_waypoint = to_waypoint + from_waypoint
        finally:
            # The Kraken may be dead now; put the map back for the next engine
            self._restore_map()

        direct_moves = len(direct) if direct is not None else None
        waypoint_moves = len(via_waypoint) if via_waypoint is not None else None

        if self._prefer_waypoint(direct_moves, waypoint_moves):
            route = via_waypoint
        else:
            route = direct

        if route is None:
            return self._finish(None)
        return self._finish([start] + [cell.position for cell in route])

    def shortest_path(
        self,
        start: Position,
        goal: Position,
        *,
        waypoint_passed: bool = False,
    ) -> Optional[List[GridCell]]:
        """Return the cells from ``start`` (exclusive) to ``goal`` (inclusive).

        With ``waypoint_passed`` Jack carries the rum casks: the first time an
        expanded cell has the Kraken next to it, the Kraken is destroyed and its
        zone opens up for the rest of this search.
        """
        grid = self.grid
        grid.reset_search_scratch()

        start_cell = grid.cell_at(start)
        goal_cell = grid.cell_at(goal)
        start_cell.h_cost = chebyshev_distance(start, goal)

        # Heap entries are (f, h, insertion order, cell); stale entries are skipped once closed
        counter = itertools.count()
        open_heap: List[Tuple[int, int, int, GridCell]] = [
            (start_cell.f_cost, start_cell.h_cost, next(counter), start_cell)
        ]
        open_cells: Set[GridCell] = {start_cell}
        closed_cells: Set[GridCell] = set()

        while open_heap:
            _, _, _, current = heapq.heappop(open_heap)
            if current in closed_cells:
                continue

            if current is goal_cell:
                return self._trace(start_cell, goal_cell)

            open_cells.discard(current)
            closed_cells.add(current)

            neighbors = sorted(grid.get_neighbors(current), key=lambda cell: cell.position)
            if waypoint_passed and grid.kraken_alive:
                self._neutralize_kraken(neighbors)

            for neighbor in neighbors:
                if neighbor in closed_cells or not neighbor.walkable:
                    continue

                tentative = current.g_cost + chebyshev_distance(current.position, neighbor.position)
                if neighbor not in open_cells or tentative < neighbor.g_cost:
                    neighbor.g_cost = tentative
                    neighbor.h_cost = chebyshev_distance(neighbor.position, goal)
                    neighbor.parent = current
                    open_cells.add(neighbor)
                    heapq.heappush(open_heap, (neighbor.f_cost, neighbor.h_cost, next(counter), neighbor))

        return None

    @staticmethod
    def _trace(start_cell: GridCell, goal_cell: GridCell) -> List[GridCell]:
        path: List[GridCell] = []
        cell = goal_cell
        while cell is not start_cell:
            if cell.parent is None:
                raise SearchInvariantError(f"Parent chain from {goal_cell.position} breaks at {cell.position}")
            path.append(cell)
            cell = cell.parent
        path.reverse()
        return path

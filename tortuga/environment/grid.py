"""The 9x9 sea map: cells, agent placement, danger zones and adjacency.

``GridMap`` owns 81 ``GridCell`` objects plus the six agents. Cell state has
two layers:

- hazard state (``danger_level``, ``walkable``, ``occupants``), derived from
  agent perception zones by ``fill_cells`` and mutated only by
  ``kill_hazard`` during a search
- search scratch (``best_cost``, ``g_cost``, ``h_cost``, ``parent``,
  ``visited``), owned by whichever search engine is running

A cell is walkable iff its danger level is zero. Danger is a counter rather
than a flag because hazard zones overlap: killing the Kraken must not free a
cell that Davy Jones (or the Rock) still covers.

Engines run one at a time. Each one restores hazard state with
``fill_cells(refill=True)`` before handing the map to anyone else.
"""

from __future__ import annotations

import math
import random
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Mapping, Optional, Sequence, Set, Tuple

from ..agents import (
    PLACEMENT_ORDER,
    SCENARIOS,
    SHARED_CELL_PAIRS,
    SURROUNDING_OFFSETS,
    Agent,
    AgentKind,
    Offset,
    Position,
)
from .schemas import GRID_SIZE, MapLayout

PLAYER_SPAWN: Position = (0, 0)


class InvalidPlacementError(ValueError):
    """Raised when agents are placed in a way the map rules forbid."""

    def __init__(self, violations: Sequence[str]) -> None:
        self.violations = list(violations)
        super().__init__("Invalid agent placement: " + "; ".join(self.violations))


def clamp_to_bounds(origin: Position, offset: Offset) -> Position:
    """Add ``offset`` to ``origin`` and clamp each axis to the map.

    Clamping (not wrapping, not discarding) is how perception zones behave at
    the edges: an agent at (0, 0) looking at (-1, -1) sees (0, 0).
    """
    x = min(max(origin[0] + offset[0], 0), GRID_SIZE - 1)
    y = min(max(origin[1] + offset[1], 0), GRID_SIZE - 1)
    return x, y


def in_bounds(x: int, y: int) -> bool:
    return 0 <= x < GRID_SIZE and 0 <= y < GRID_SIZE


@dataclass(eq=False)
class GridCell:
    """Mutable state of a single map cell.

    Cells compare by identity so they can live in sets and open/closed lists.
    """

    x: int
    y: int
    walkable: bool = True
    danger_level: int = 0
    # Aliases of the agents standing here ("K", "R", ...)
    occupants: Set[str] = field(default_factory=set)
    # Backtracking scratch
    best_cost: float = math.inf
    visited: bool = False
    # A* scratch
    g_cost: int = 0
    h_cost: int = 0
    parent: Optional["GridCell"] = None

    @property
    def position(self) -> Position:
        return self.x, self.y

    @property
    def f_cost(self) -> int:
        return self.g_cost + self.h_cost

    def holds(self, kind: AgentKind) -> bool:
        return kind.value in self.occupants

    def add_danger(self) -> None:
        self.danger_level += 1
        self.walkable = False

    def reset_hazard(self) -> None:
        self.danger_level = 0
        self.walkable = True
        self.occupants.clear()

    def reset_scratch(self) -> None:
        self.best_cost = math.inf
        self.visited = False
        self.g_cost = 0
        self.h_cost = 0
        self.parent = None

    def __repr__(self) -> str:
        return f"GridCell({self.x}, {self.y}, walkable={self.walkable}, danger={self.danger_level})"


class GridMap:
    """The sea map with its six agents.

    Build one with ``GridMap.generate`` (random, retried until valid) or
    ``GridMap.load`` (from an input line, rejected if invalid). Constructing a
    ``GridMap`` directly does not validate or fill cells; the two factories do
    both.
    """

    def __init__(self, positions: Mapping[AgentKind, Position], scenario: int = 1):
        if scenario not in SCENARIOS:
            raise ValueError(f"Unknown scenario {scenario!r}; expected 1 or 2")
        missing = [kind.name for kind in PLACEMENT_ORDER if kind not in positions]
        if missing:
            raise ValueError(f"Map needs all six agents, missing: {missing}")
        outside = [kind.name for kind in PLACEMENT_ORDER if not in_bounds(*positions[kind])]
        if outside:
            raise ValueError(f"Agents placed outside the {GRID_SIZE}x{GRID_SIZE} map: {outside}")

        self.scenario = scenario
        # Insertion order follows PLACEMENT_ORDER; fill_cells and rendering rely on it
        self.agents: Dict[AgentKind, Agent] = {
            kind: Agent.spawn(kind, positions[kind], scenario) for kind in PLACEMENT_ORDER
        }
        self.cells: List[List[GridCell]] = []
        self.kraken_alive = True

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def generate(cls, scenario: int = 1, rng: Optional[random.Random] = None) -> "GridMap":
        """Place agents uniformly at random until the placement is valid.

        Jack always spawns at (0, 0). Pass a seeded ``random.Random`` for
        reproducible maps.
        """
        rng = rng or random.Random()
        while True:
            positions: Dict[AgentKind, Position] = {AgentKind.PLAYER: PLAYER_SPAWN}
            for kind in PLACEMENT_ORDER[1:]:
                positions[kind] = (rng.randrange(GRID_SIZE), rng.randrange(GRID_SIZE))
            grid = cls(positions, scenario)
            if grid.is_valid:
                break
        grid.fill_cells(refill=False)
        return grid

    @classmethod
    def load(cls, raw_positions: str | MapLayout, scenario: Optional[int] = None) -> "GridMap":
        """Build a map from an input line (or an already parsed ``MapLayout``).

        Unlike ``generate`` there is no retry: the input is fixed, so an
        invalid placement is reported to the caller.

        Raises:
            MalformedInputError: If ``raw_positions`` text cannot be parsed
            InvalidPlacementError: If the placement breaks the map rules
        """
        if isinstance(raw_positions, MapLayout):
            layout = raw_positions
            if scenario is not None and scenario != layout.scenario:
                layout = layout.model_copy(update={"scenario": scenario})
        else:
            layout = MapLayout.from_text(raw_positions, scenario if scenario is not None else 1)

        grid = cls(layout.positions(), layout.scenario)
        violations = grid.placement_violations()
        if violations:
            raise InvalidPlacementError(violations)
        grid.fill_cells(refill=False)
        return grid

    def layout(self) -> MapLayout:
        return MapLayout.from_positions(
            {kind: agent.position for kind, agent in self.agents.items()}, self.scenario
        )

    # ------------------------------------------------------------------
    # Agents and cells
    # ------------------------------------------------------------------

    def agent(self, kind: AgentKind) -> Agent:
        return self.agents[kind]

    @property
    def player(self) -> Agent:
        return self.agents[AgentKind.PLAYER]

    @property
    def kraken(self) -> Agent:
        return self.agents[AgentKind.KRAKEN]

    @property
    def chest(self) -> Agent:
        return self.agents[AgentKind.CHEST]

    @property
    def tortuga(self) -> Agent:
        return self.agents[AgentKind.TORTUGA]

    def cell_at(self, position: Position) -> GridCell:
        if not self.cells:
            raise RuntimeError("Map cells are not filled yet; call fill_cells() first")
        x, y = position
        return self.cells[x][y]

    def iter_cells(self) -> Iterator[GridCell]:
        for row in self.cells:
            yield from row

    def zone_cells(self, agent: Agent) -> Set[Position]:
        """Distinct clamped cells covered by ``agent``'s perception zone."""
        return {clamp_to_bounds(agent.position, offset) for offset in agent.perception}

    def set_scenario(self, scenario: int) -> None:
        """Switch the adjacency rule (and Jack's perception) without touching hazards."""
        if scenario not in SCENARIOS:
            raise ValueError(f"Unknown scenario {scenario!r}; expected 1 or 2")
        self.scenario = scenario
        self.agents[AgentKind.PLAYER] = Agent.spawn(AgentKind.PLAYER, self.player.position, scenario)

    # ------------------------------------------------------------------
    # Placement rules
    # ------------------------------------------------------------------

    def placement_violations(self) -> List[str]:
        """Return a description of every placement rule the agents break.

        Rules:
        1. Jack spawns at (0, 0)
        2. No two agents share a cell, except Rock+Kraken and Tortuga+Jack
        3. No hazard zone covers Tortuga or the Chest
        """
        violations: List[str] = []

        if self.player.position != PLAYER_SPAWN:
            violations.append(f"Jack Sparrow must start at {PLAYER_SPAWN}, not {self.player.position}")

        agents = list(self.agents.values())
        for index, first in enumerate(agents):
            for second in agents[index + 1:]:
                if first.position != second.position:
                    continue
                if frozenset({first.kind, second.kind}) in SHARED_CELL_PAIRS:
                    continue
                violations.append(f"{first.kind.name} and {second.kind.name} share cell {first.position}")

        for hazard in agents:
            if not hazard.is_hazardous:
                continue
            covered = self.zone_cells(hazard) - {hazard.position}
            for target in (self.tortuga, self.chest):
                if target.position in covered:
                    violations.append(
                        f"{target.kind.name} at {target.position} lies in the {hazard.kind.name} danger zone"
                    )

        return violations

    @property
    def is_valid(self) -> bool:
        return not self.placement_violations()

    # ------------------------------------------------------------------
    # Hazard state
    # ------------------------------------------------------------------

    def fill_cells(self, refill: bool = False) -> None:
        """Compute danger levels, walkability and occupants from the agents.

        With ``refill=True`` the existing cells are reset in place, which
        restores pristine hazard state after a search killed the Kraken.
        Search scratch fields are left alone; see ``reset_search_scratch``.
        """
        if not refill or not self.cells:
            self.cells = [[GridCell(x, y) for y in range(GRID_SIZE)] for x in range(GRID_SIZE)]
        else:
            for cell in self.iter_cells():
                cell.reset_hazard()
        self.kraken_alive = True

        for agent in self.agents.values():
            if agent.is_hazardous:
                for target in self.zone_cells(agent):
                    # The hazard's own cell is handled below with the occupant
                    if target != agent.position:
                        self.cell_at(target).add_danger()

            own_cell = self.cell_at(agent.position)
            own_cell.occupants.add(agent.alias)
            if agent.blocks_own_cell:
                own_cell.add_danger()

    def kill_hazard(self, cell: GridCell) -> None:
        """Neutralize the Kraken standing on ``cell`` with Tortuga's rum casks.

        Each cell of the Kraken's zone loses one danger point and becomes
        walkable when nothing else threatens it. The Kraken's own cell also
        loses a point; whether it becomes walkable is left to the caller,
        since the Rock may still be sitting there.
        """
        for target in {clamp_to_bounds(cell.position, offset) for offset in self.kraken.perception}:
            if target == cell.position:
                continue
            zone_cell = self.cell_at(target)
            zone_cell.danger_level -= 1
            if zone_cell.danger_level == 0:
                zone_cell.walkable = True
        cell.danger_level -= 1
        self.kraken_alive = False

    def reset_search_scratch(self) -> None:
        """Forget every cell's best-known cost, parent and visited flag."""
        for cell in self.iter_cells():
            cell.reset_scratch()

    def hazard_snapshot(self) -> Tuple[Tuple[bool, int, frozenset], ...]:
        """Immutable copy of hazard state, for comparing before/after a search."""
        return tuple(
            (cell.walkable, cell.danger_level, frozenset(cell.occupants)) for cell in self.iter_cells()
        )

    # ------------------------------------------------------------------
    # Adjacency
    # ------------------------------------------------------------------

    def get_neighbors(self, cell: GridCell) -> Set[GridCell]:
        """Return the cells Jack can step to from ``cell`` under the active scenario.

        Scenario 1 uses Jack's perception offsets. Scenario 2 extends what
        Jack sees but movement stays the plain 8-neighbourhood. Targets
        outside the map are dropped, not clamped.
        """
        match self.scenario:
            case 1:
                offsets = self.player.perception
            case 2:
                offsets = SURROUNDING_OFFSETS
            case _:
                raise ValueError(f"Unknown scenario {self.scenario!r}")

        neighbors: Set[GridCell] = set()
        for dx, dy in offsets:
            x, y = cell.x + dx, cell.y + dy
            if in_bounds(x, y):
                neighbors.add(self.cells[x][y])
        return neighbors

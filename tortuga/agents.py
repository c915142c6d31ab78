"""Agent model for the sea map.

Every object placed on the map is an ``Agent``: a kind tag plus a position.
The kind fully determines the rest (perception zone, hazard flag, alias), so
instead of one class per kind we keep a single frozen dataclass and dispatch
on ``AgentKind`` with ``match``.

Perception zones are relative offsets:
- Jack Sparrow (player): the 8 surrounding cells in scenario 1, plus the 4
  cells two steps away along each axis in scenario 2
- Kraken: the 4 orthogonal neighbours
- Davy Jones: the 8 surrounding cells
- Rock, Chest, Tortuga: the agent's own cell only

For hazards the zone marks danger; for the player it defines adjacency.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple

Position = Tuple[int, int]
Offset = Tuple[int, int]

SCENARIOS = (1, 2)

SELF_OFFSETS: Tuple[Offset, ...] = ((0, 0),)

ORTHOGONAL_OFFSETS: Tuple[Offset, ...] = ((0, -1), (-1, 0), (1, 0), (0, 1))

SURROUNDING_OFFSETS: Tuple[Offset, ...] = (
    (-1, -1), (0, -1), (1, -1),
    (-1, 0), (1, 0),
    (-1, 1), (0, 1), (1, 1),
)

# Scenario 2 spyglass: the surrounding ring plus a two-cell reach on each axis
EXTENDED_OFFSETS: Tuple[Offset, ...] = SURROUNDING_OFFSETS + ((0, -2), (-2, 0), (2, 0), (0, 2))


class AgentKind(Enum):
    """Kinds of agents on the map. Values are the single-character aliases."""

    PLAYER = "J"
    DAVY_JONES = "D"
    KRAKEN = "K"
    ROCK = "R"
    CHEST = "C"
    TORTUGA = "T"


# Order used by the input format, rendering precedence and cell filling
PLACEMENT_ORDER: Tuple[AgentKind, ...] = (
    AgentKind.PLAYER,
    AgentKind.DAVY_JONES,
    AgentKind.KRAKEN,
    AgentKind.ROCK,
    AgentKind.CHEST,
    AgentKind.TORTUGA,
)

# Pairs of kinds allowed to spawn on the same cell
SHARED_CELL_PAIRS = frozenset(
    {
        frozenset({AgentKind.ROCK, AgentKind.KRAKEN}),
        frozenset({AgentKind.TORTUGA, AgentKind.PLAYER}),
    }
)


def perception_offsets(kind: AgentKind, scenario: int = 1) -> Tuple[Offset, ...]:
    """Return the perception zone offsets for ``kind`` under ``scenario``."""
    match kind:
        case AgentKind.PLAYER:
            if scenario not in SCENARIOS:
                raise ValueError(f"Unknown scenario {scenario!r}; expected 1 or 2")
            return SURROUNDING_OFFSETS if scenario == 1 else EXTENDED_OFFSETS
        case AgentKind.KRAKEN:
            return ORTHOGONAL_OFFSETS
        case AgentKind.DAVY_JONES:
            return SURROUNDING_OFFSETS
        case AgentKind.ROCK | AgentKind.CHEST | AgentKind.TORTUGA:
            return SELF_OFFSETS


def is_hazardous(kind: AgentKind) -> bool:
    """True for agents whose perception zone is deadly."""
    match kind:
        case AgentKind.KRAKEN | AgentKind.DAVY_JONES:
            return True
        case AgentKind.PLAYER | AgentKind.ROCK | AgentKind.CHEST | AgentKind.TORTUGA:
            return False


def blocks_own_cell(kind: AgentKind) -> bool:
    """True for agents that make the cell they stand on impassable."""
    match kind:
        case AgentKind.KRAKEN | AgentKind.DAVY_JONES | AgentKind.ROCK:
            return True
        case AgentKind.PLAYER | AgentKind.CHEST | AgentKind.TORTUGA:
            return False


@dataclass(frozen=True)
class Agent:
    """An agent standing on the map."""

    kind: AgentKind
    position: Position
    perception: Tuple[Offset, ...]

    @classmethod
    def spawn(cls, kind: AgentKind, position: Position, scenario: int = 1) -> "Agent":
        x, y = position
        return cls(kind=kind, position=(int(x), int(y)), perception=perception_offsets(kind, scenario))

    @property
    def alias(self) -> str:
        return self.kind.value

    @property
    def is_hazardous(self) -> bool:
        return is_hazardous(self.kind)

    @property
    def blocks_own_cell(self) -> bool:
        return blocks_own_cell(self.kind)

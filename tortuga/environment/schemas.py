"""Pydantic schemas for map layouts.

``MapLayout`` is the serializable description of a puzzle instance: where
each of the six agents spawns and which perception scenario is active. The
mutable cell grid in ``grid.py`` is built from it. Text parsing lives here
too because the input line format is just another rendering of a layout.

Input line format (spaces are ignored)::

    [0,0] [4,2] [2,7] [7,4] [0,8] [8,8]

in the order Jack Sparrow, Davy Jones, Kraken, Rock, Dead Man's Chest,
Tortuga.
"""

from __future__ import annotations

import re
from typing import Dict, Mapping, Tuple

from pydantic import BaseModel, Field, ValidationError, field_validator

from ..agents import PLACEMENT_ORDER, SCENARIOS, AgentKind, Position

GRID_SIZE = 9


class MalformedInputError(ValueError):
    """Raised when raw map or scenario text does not have the expected shape."""


_FIELD_BY_KIND: Dict[AgentKind, str] = {
    AgentKind.PLAYER: "player",
    AgentKind.DAVY_JONES: "davy_jones",
    AgentKind.KRAKEN: "kraken",
    AgentKind.ROCK: "rock",
    AgentKind.CHEST: "chest",
    AgentKind.TORTUGA: "tortuga",
}

_LINE_PATTERN = re.compile(r"^(?:\[\d,\d\]){6}$")
_PAIR_PATTERN = re.compile(r"\[(\d),(\d)\]")
_SCENARIO_PATTERN = re.compile(r"^[12]$")


def parse_scenario(raw: str | int) -> int:
    """Parse the perception scenario line. Only ``1`` and ``2`` are accepted."""
    text = str(raw).strip()
    if not _SCENARIO_PATTERN.match(text):
        raise MalformedInputError(f"Scenario must be 1 or 2, got {text!r}")
    return int(text)


def parse_positions(raw: str) -> Dict[AgentKind, Position]:
    """Parse six ``[x,y]`` pairs into agent positions.

    Raises:
        MalformedInputError: If the text is not exactly six single-digit pairs
    """
    compact = raw.replace(" ", "").strip()
    if not _LINE_PATTERN.match(compact):
        raise MalformedInputError(
            f"Expected six [x,y] pairs (Jack, Davy Jones, Kraken, Rock, Chest, Tortuga), got {raw!r}"
        )
    pairs = [(int(x), int(y)) for x, y in _PAIR_PATTERN.findall(compact)]
    return dict(zip(PLACEMENT_ORDER, pairs))


class MapLayout(BaseModel):
    """Spawn positions for all six agents plus the active scenario."""

    player: Tuple[int, int] = Field((0, 0), description="Jack Sparrow spawn; must be (0, 0)")
    davy_jones: Tuple[int, int]
    kraken: Tuple[int, int]
    rock: Tuple[int, int]
    chest: Tuple[int, int] = Field(..., description="Dead Man's Chest, the destination")
    tortuga: Tuple[int, int] = Field(..., description="Tortuga, where the rum casks are")
    scenario: int = Field(1, description="Perception scenario (1 or 2)")

    @field_validator("player", "davy_jones", "kraken", "rock", "chest", "tortuga")
    @classmethod
    def _check_bounds(cls, value: Tuple[int, int]) -> Tuple[int, int]:
        if not all(0 <= coord < GRID_SIZE for coord in value):
            raise ValueError(f"coordinates {value} fall outside the {GRID_SIZE}x{GRID_SIZE} map")
        return value

    @field_validator("scenario")
    @classmethod
    def _check_scenario(cls, value: int) -> int:
        if value not in SCENARIOS:
            raise ValueError(f"scenario must be 1 or 2, got {value}")
        return value

    @classmethod
    def from_positions(cls, positions: Mapping[AgentKind, Position], scenario: int = 1) -> "MapLayout":
        missing = [kind.name for kind in PLACEMENT_ORDER if kind not in positions]
        if missing:
            raise ValueError(f"Layout missing agents: {missing}")
        return cls(
            scenario=scenario,
            **{_FIELD_BY_KIND[kind]: tuple(positions[kind]) for kind in PLACEMENT_ORDER},
        )

    @classmethod
    def from_text(cls, raw: str, scenario: str | int = 1) -> "MapLayout":
        """Build a layout from the input-line format.

        Raises:
            MalformedInputError: If the line or scenario cannot be parsed
        """
        positions = parse_positions(raw)
        try:
            return cls.from_positions(positions, parse_scenario(scenario))
        except ValidationError as exc:
            raise MalformedInputError(str(exc)) from exc

    def positions(self) -> Dict[AgentKind, Position]:
        return {kind: getattr(self, _FIELD_BY_KIND[kind]) for kind in PLACEMENT_ORDER}

    def to_text(self) -> str:
        return " ".join(f"[{x},{y}]" for x, y in self.positions().values())

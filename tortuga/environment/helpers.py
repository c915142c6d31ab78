"""Utilities around the sea map: distances, path checks and ASCII rendering."""

from __future__ import annotations

from typing import Dict, List, Optional, Sequence

from ..agents import AgentKind, Position
from .grid import GridMap, clamp_to_bounds
from .schemas import GRID_SIZE

BACKGROUND_SYMBOL = "-"
DANGER_SYMBOL = "$"
PATH_SYMBOL = "*"

_BORDER = " " + "—" * 21


def chebyshev_distance(first: Position, second: Position) -> int:
    """Number of king moves between two cells; the cost metric for 8-way movement."""
    return max(abs(first[0] - second[0]), abs(first[1] - second[1]))


def format_path(path: Sequence[Position]) -> str:
    """Format a path the way the report files list it: ``[x,y] [x,y] ...``."""
    return " ".join(f"[{x},{y}]" for x, y in path)


def validate_path(grid: GridMap, path: Sequence[Position]) -> bool:
    """Check that a path starts at Jack, ends at the Chest and only takes legal steps.

    Each consecutive pair must be neighbours under the map's active scenario.
    Walkability is not checked here because it depends on whether the Kraken
    was already dead when the step was taken.
    """
    if not path:
        return False
    if tuple(path[0]) != grid.player.position or tuple(path[-1]) != grid.chest.position:
        return False

    for current, following in zip(path, path[1:]):
        neighbors = {cell.position for cell in grid.get_neighbors(grid.cell_at(current))}
        if tuple(following) not in neighbors:
            return False
    return True


def build_symbol_grid(grid: GridMap) -> List[List[str]]:
    """Return the 9x9 character grid for ``grid`` without any path overlay.

    Agents are drawn in placement order and an earlier agent keeps a shared
    cell (Jack over Tortuga, Kraken over Rock). Every non-player zone cell
    that is still background becomes ``$``.
    """
    symbols = [[BACKGROUND_SYMBOL] * GRID_SIZE for _ in range(GRID_SIZE)]

    for agent in grid.agents.values():
        x, y = agent.position
        if agent.kind is not AgentKind.PLAYER:
            for offset in agent.perception:
                zx, zy = clamp_to_bounds(agent.position, offset)
                if symbols[zx][zy] == BACKGROUND_SYMBOL:
                    symbols[zx][zy] = DANGER_SYMBOL
        if symbols[x][y] in (BACKGROUND_SYMBOL, DANGER_SYMBOL):
            symbols[x][y] = agent.alias

    return symbols


def render_ascii_map(
    grid: GridMap,
    path: Optional[Sequence[Position]] = None,
    *,
    symbols: Optional[Dict[str, str]] = None,
) -> str:
    """Render the framed board, optionally with ``path`` overlaid as ``*``.

    Rendering never touches the map, so "clearing" a path is simply
    rendering again without it. ``symbols`` remaps characters, e.g.
    ``{"$": "!"}``.
    """
    board = build_symbol_grid(grid)
    for x, y in path or ():
        board[x][y] = PATH_SYMBOL

    mapping = symbols or {}
    lines = [_BORDER, "|   " + " ".join(str(col) for col in range(GRID_SIZE)) + " |"]
    for row_index, row in enumerate(board):
        cells = " ".join(mapping.get(symbol, symbol) for symbol in row)
        lines.append(f"| {row_index} {cells} |")
    lines.append(_BORDER)
    return "\n".join(lines)

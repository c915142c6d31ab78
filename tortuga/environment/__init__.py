"""Sea map environment: cells, agent placement, hazards and rendering."""

from .schemas import GRID_SIZE, MapLayout, MalformedInputError, parse_positions, parse_scenario
from .grid import GridCell, GridMap, InvalidPlacementError, PLAYER_SPAWN, clamp_to_bounds
from .helpers import (
    build_symbol_grid,
    chebyshev_distance,
    format_path,
    render_ascii_map,
    validate_path,
)

__all__ = [
    "GRID_SIZE",
    "PLAYER_SPAWN",
    "MapLayout",
    "MalformedInputError",
    "parse_positions",
    "parse_scenario",
    "GridCell",
    "GridMap",
    "InvalidPlacementError",
    "clamp_to_bounds",
    "build_symbol_grid",
    "chebyshev_distance",
    "format_path",
    "render_ascii_map",
    "validate_path",
]

"""Tests for distance, path formatting, path validation and ASCII rendering."""

from tortuga.environment import (
    GridMap,
    build_symbol_grid,
    chebyshev_distance,
    format_path,
    render_ascii_map,
    validate_path,
)


def make_grid(scenario: int = 1) -> GridMap:
    return GridMap.load("[0,0] [0,8] [8,0] [8,0] [8,8] [4,0]", scenario)


def test_chebyshev_distance():
    assert chebyshev_distance((0, 0), (8, 8)) == 8
    assert chebyshev_distance((0, 0), (5, 2)) == 5
    assert chebyshev_distance((3, 3), (3, 3)) == 0


def test_format_path():
    assert format_path([(0, 0), (1, 1), (2, 1)]) == "[0,0] [1,1] [2,1]"
    assert format_path([]) == ""


def test_validate_path():
    grid = make_grid()
    diagonal = [(i, i) for i in range(9)]

    assert validate_path(grid, diagonal)
    assert not validate_path(grid, [])
    assert not validate_path(grid, diagonal[1:])
    assert not validate_path(grid, diagonal[:-1])
    # Jump of two cells
    assert not validate_path(grid, [(0, 0), (2, 2)] + diagonal[3:])


def test_symbol_grid_precedence():
    symbols = build_symbol_grid(make_grid())

    assert symbols[0][0] == "J"
    assert symbols[0][8] == "D"
    assert symbols[0][7] == "$"
    # Kraken drawn over the Rock sharing its cell
    assert symbols[8][0] == "K"
    assert symbols[8][1] == "$"
    assert symbols[4][0] == "T"
    assert symbols[8][8] == "C"
    assert symbols[4][4] == "-"


def test_tortuga_hidden_under_jack():
    grid = GridMap.load("[0,0] [0,8] [8,0] [8,0] [8,8] [0,0]", 1)
    assert build_symbol_grid(grid)[0][0] == "J"


def test_render_ascii_map_layout():
    rendered = render_ascii_map(make_grid()).splitlines()

    assert rendered[0] == " " + "—" * 21
    assert rendered[1] == "|   0 1 2 3 4 5 6 7 8 |"
    assert rendered[2] == "| 0 J - - - - - - $ D |"
    assert rendered[3] == "| 1 - - - - - - - $ $ |"
    assert rendered[6] == "| 4 T - - - - - - - - |"
    assert rendered[9] == "| 7 $ - - - - - - - - |"
    assert rendered[10] == "| 8 K $ - - - - - - C |"
    assert rendered[-1] == rendered[0]
    assert len(rendered) == 12


def test_render_path_overlay_does_not_touch_map():
    grid = make_grid()
    before = render_ascii_map(grid)
    snapshot = grid.hazard_snapshot()

    with_path = render_ascii_map(grid, [(i, i) for i in range(9)]).splitlines()

    assert with_path[2] == "| 0 * - - - - - - $ D |"
    assert with_path[10] == "| 8 K $ - - - - - - * |"
    assert render_ascii_map(grid) == before
    assert grid.hazard_snapshot() == snapshot


def test_render_symbol_remap():
    rendered = render_ascii_map(make_grid(), symbols={"$": "!"})
    assert "$" not in rendered
    assert "| 8 K ! - - - - - - C |" in rendered

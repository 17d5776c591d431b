import pytest

import constants as const
from geometry import (
    cell_wall_segments,
    entry_exit_openings,
    extract_wall_bases_2d,
    extract_wall_centerlines,
    extract_wall_segments,
)
from grid_core import Grid, remove_walls
from maze_gen import generate_maze


def test_closed_cell_has_four_segments():
    grid = Grid(2, 2)
    segments = cell_wall_segments(grid.get_cell(1, 0), cell_size=40)

    assert segments == [
        ((0, 40), (40, 40)),
        ((40, 40), (40, 80)),
        ((0, 80), (40, 80)),
        ((0, 40), (0, 80)),
    ]


def test_cleared_wall_is_not_drawn():
    grid = Grid(1, 2)
    remove_walls(grid.get_cell(0, 0), grid.get_cell(0, 1))

    assert len(cell_wall_segments(grid.get_cell(0, 0), cell_size=10)) == 3
    assert ((10, 0), (10, 10)) not in extract_wall_segments(grid, cell_size=10)


def test_per_cell_segments_match_wall_flags():
    grid = generate_maze(4, 5, seed=2)

    segments = extract_wall_segments(grid)

    assert len(segments) == sum(cell.wall_count() for cell in grid.get_all_cells())


def test_centerlines_count_each_boundary_once():
    rows, cols = 5, 6
    grid = generate_maze(rows, cols, seed=6)

    centerlines = extract_wall_centerlines(grid, cell_size=1)

    # Every grid edge minus the carved passages
    all_edges = rows * (cols + 1) + cols * (rows + 1)
    assert len(centerlines) == all_edges - (rows * cols - 1)
    assert len(set(centerlines)) == len(centerlines)


def test_entry_exit_openings_on_outer_boundary():
    grid = Grid(3, 4)

    assert entry_exit_openings(grid) == {("0,0", const.WALL_TOP), ("2,3", const.WALL_BOTTOM)}


def test_openings_are_skipped():
    grid = generate_maze(3, 3, seed=1)
    openings = entry_exit_openings(grid)

    with_all = extract_wall_centerlines(grid)
    with_openings = extract_wall_centerlines(grid, openings=openings)

    assert len(with_all) - len(with_openings) == 2


def test_wall_bases_are_thick_extended_quads():
    grid = Grid(1, 1)

    bases = extract_wall_bases_2d(grid, wall_thickness=2.0, cell_size=10)

    assert len(bases) == 4
    top = bases[0]
    xs = [p[0] for p in top]
    ys = [p[1] for p in top]
    assert min(xs) == pytest.approx(-1.0)
    assert max(xs) == pytest.approx(11.0)
    assert min(ys) == pytest.approx(-1.0)
    assert max(ys) == pytest.approx(1.0)

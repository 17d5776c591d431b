import pytest

import constants as const
from grid_core import Cell, Grid, remove_walls


def test_fresh_grid_has_all_walls_and_no_visits():
    grid = Grid(3, 4)

    assert grid.size() == 12
    assert all(cell.wall_count() == 4 for cell in grid.get_all_cells())
    assert not any(cell.is_visited() for cell in grid.get_all_cells())
    assert grid.passage_count() == 0


def test_default_markers_are_corners():
    grid = Grid(3, 4)

    assert grid.start_cell.coords == (0, 0)
    assert grid.end_cell.coords == (2, 3)


def test_custom_markers():
    grid = Grid(3, 3, start=(1, 1), end=(0, 2))

    assert grid.start_cell is grid.get_cell(1, 1)
    assert grid.end_cell is grid.get_cell(0, 2)


@pytest.mark.parametrize("rows, cols", [(0, 5), (5, 0), (-1, 3), (0, 0)])
def test_invalid_dimensions_rejected(rows, cols):
    with pytest.raises(ValueError):
        Grid(rows, cols)


def test_out_of_bounds_marker_rejected():
    with pytest.raises(ValueError):
        Grid(2, 2, end=(2, 2))


def test_get_cell_outside_grid_is_none():
    grid = Grid(2, 3)

    assert grid.get_cell(-1, 0) is None
    assert grid.get_cell(0, 3) is None
    assert grid.get_cell(2, 0) is None
    assert grid.get_cell(1, 2).coords == (1, 2)


def test_neighbour_lookup_at_edges():
    grid = Grid(2, 2)
    corner = grid.get_cell(0, 0)

    assert grid.neighbour(corner, const.DIR_UP) is None
    assert grid.neighbour(corner, const.DIR_LEFT) is None
    assert grid.neighbour(corner, const.DIR_RIGHT) is grid.get_cell(0, 1)
    assert grid.neighbour(corner, const.DIR_DOWN) is grid.get_cell(1, 0)


def test_unvisited_neighbours_skip_visited_cells():
    grid = Grid(3, 3)
    center = grid.get_cell(1, 1)
    grid.get_cell(0, 1).mark_visited()

    neighbours = grid.get_unvisited_neighbours(center)

    assert [n.coords for n in neighbours] == [(1, 2), (2, 1), (1, 0)]


@pytest.mark.parametrize(
    "offset, current_side, next_side",
    [
        ((0, 1), const.WALL_RIGHT, const.WALL_LEFT),
        ((0, -1), const.WALL_LEFT, const.WALL_RIGHT),
        ((1, 0), const.WALL_BOTTOM, const.WALL_TOP),
        ((-1, 0), const.WALL_TOP, const.WALL_BOTTOM),
    ],
)
def test_remove_walls_clears_both_sides(offset, current_side, next_side):
    current = Cell(1, 1)
    next_cell = Cell(1 + offset[0], 1 + offset[1])

    remove_walls(current, next_cell)

    assert not current.has_wall(current_side)
    assert not next_cell.has_wall(next_side)
    assert current.wall_count() == 3
    assert next_cell.wall_count() == 3


@pytest.mark.parametrize("other", [(1, 1), (0, 0), (1, 3), (3, 1)])
def test_remove_walls_requires_adjacent_cells(other):
    with pytest.raises(AssertionError):
        remove_walls(Cell(1, 1), Cell(*other))


def test_passages_and_symmetry():
    grid = Grid(2, 2)
    remove_walls(grid.get_cell(0, 0), grid.get_cell(0, 1))
    remove_walls(grid.get_cell(0, 1), grid.get_cell(1, 1))

    assert grid.passage_count() == 2
    assert grid.walls_symmetric()
    assert grid.open_neighbours(grid.get_cell(0, 1)) == [grid.get_cell(1, 1), grid.get_cell(0, 0)]

    # A one-sided change breaks the relation
    grid.get_cell(1, 0).walls[const.WALL_TOP] = False
    assert not grid.walls_symmetric()


def test_wall_array_layout():
    grid = Grid(1, 2)
    remove_walls(grid.get_cell(0, 0), grid.get_cell(0, 1))

    walls = grid.wall_array()

    assert walls.shape == (1, 2, 4)
    assert walls[0, 0].tolist() == [True, False, True, True]
    assert walls[0, 1].tolist() == [True, True, True, False]

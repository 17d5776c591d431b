import pytest

import constants as const
from grid_core import Grid, remove_walls
from maze_gen import MazeGenerator, generate_maze
from player import MazeGame, PlayerController, get_move_target, is_move_legal


def _direction_between(a, b):
    for direction, (d_row, d_col) in const.DIRECTION_DELTAS.items():
        if (a.row + d_row, a.col + d_col) == b.coords:
            return direction
    raise AssertionError(f"{a} and {b} are not adjacent")


def test_two_by_two_walled_and_open_moves():
    grid = generate_maze(2, 2, seed=4)
    start = grid.start_cell
    right, down = grid.get_cell(0, 1), grid.get_cell(1, 0)

    # A 2x2 perfect maze has 3 openings out of 4 inner walls, so exactly one
    # of the start's two inner walls may still stand
    for direction, target in ((const.DIR_RIGHT, right), (const.DIR_DOWN, down)):
        player = PlayerController(grid)
        wall_present = start.has_wall(const.DIRECTION_TO_WALL[direction])
        moved = player.move(direction)
        if wall_present:
            assert not moved
            assert player.position == (0, 0)
        else:
            assert moved
            assert player.position == target.coords


@pytest.mark.parametrize("seed", range(10))
def test_moves_follow_walls_on_small_mazes(seed):
    grid = generate_maze(2, 2, seed=seed)
    start = grid.start_cell

    for direction in (const.DIR_RIGHT, const.DIR_DOWN):
        legal = is_move_legal(grid, start, direction)
        assert legal == (not start.has_wall(const.DIRECTION_TO_WALL[direction]))


@pytest.mark.parametrize(
    "position, direction",
    [((0, 0), const.DIR_UP), ((0, 0), const.DIR_LEFT), ((2, 2), const.DIR_DOWN), ((2, 2), const.DIR_RIGHT)],
)
def test_leaving_the_grid_is_a_noop_even_without_wall(position, direction):
    grid = generate_maze(3, 3, seed=1)
    cell = grid.get_cell(*position)
    # Knock the outer wall down by hand; bounds must still block the move
    cell.walls[const.DIRECTION_TO_WALL[direction]] = False
    player = PlayerController(grid)
    player.place(*position)

    assert get_move_target(grid, cell, direction) is None
    assert not player.move(direction)
    assert player.position == position


def test_unvisited_destination_blocks_move():
    grid = Grid(1, 2)
    start, other = grid.get_cell(0, 0), grid.get_cell(0, 1)
    start.mark_visited()
    remove_walls(start, other)

    assert not is_move_legal(grid, start, const.DIR_RIGHT)
    other.mark_visited()
    assert is_move_legal(grid, start, const.DIR_RIGHT)


def test_partially_carved_maze_only_allows_carved_cells():
    generator = MazeGenerator(seed=21)
    steps = generator.iter_steps(4, 4)
    for _ in range(3):
        next(steps)
    grid = generator.grid

    for cell in grid.get_all_cells():
        for direction in const.DIRECTIONS:
            target = get_move_target(grid, cell, direction)
            if target is not None:
                assert target.is_visited()


def test_unknown_direction_is_rejected():
    grid = generate_maze(2, 2, seed=0)

    with pytest.raises(ValueError):
        PlayerController(grid).move("north")


def test_walking_the_solution_reaches_goal_once():
    grid = generate_maze(5, 5, seed=9)
    goals = []
    moves = []
    player = PlayerController(grid, on_move=moves.append, on_goal=goals.append)

    # Depth-first walk to the end cell through open walls
    parents = {grid.start_cell.coords: None}
    stack = [grid.start_cell]
    while stack:
        cell = stack.pop()
        for neighbour in grid.open_neighbours(cell):
            if neighbour.coords not in parents:
                parents[neighbour.coords] = cell
                stack.append(neighbour)
    path = [grid.end_cell]
    while parents[path[-1].coords] is not None:
        path.append(parents[path[-1].coords])
    path.reverse()

    for current, nxt in zip(path, path[1:]):
        assert player.move(_direction_between(current, nxt))

    assert player.position == grid.end_cell.coords
    assert player.goal_reached
    assert goals == [grid.end_cell]
    assert len(moves) == len(path) - 1


def test_goal_fires_once_while_stationary_or_returning():
    grid = generate_maze(3, 3, seed=5)
    goals = []
    player = PlayerController(grid, on_goal=goals.append)

    player.place(*grid.end_cell.coords)
    for _ in range(5):
        player.check_goal()
    assert goals == [grid.end_cell]

    player.place(0, 0)
    player.place(*grid.end_cell.coords)
    assert len(goals) == 1


def test_single_cell_maze_is_solved_at_start():
    grid = generate_maze(1, 1, seed=0)
    goals = []
    player = PlayerController(grid, on_goal=goals.append)

    assert player.goal_reached
    assert goals == [grid.end_cell]
    assert not player.check_goal()
    assert goals == [grid.end_cell]


def test_place_outside_grid_rejected():
    player = PlayerController(generate_maze(2, 2, seed=0))

    with pytest.raises(ValueError):
        player.place(5, 5)


def test_maze_game_new_maze_resets_session():
    renders = []
    goals = []
    game = MazeGame(4, 4, seed=3, on_render=renders.append, on_goal=goals.append)
    first_grid = game.grid
    assert renders == [game]

    game.player.place(*game.grid.end_cell.coords)
    assert game.goal_reached
    assert goals == [game]

    assert game.handle_key(const.KEY_NEW_GAME)
    assert game.grid is not first_grid
    assert game.player.position == (0, 0)
    assert not game.goal_reached
    assert len(renders) == 2


def test_maze_game_keys():
    game = MazeGame(3, 3, seed=12)
    start = game.grid.start_cell

    assert not game.handle_key("x")
    for key in ("ArrowRight", "down"):
        direction = const.KEY_TO_DIRECTION[key]
        expected = is_move_legal(game.grid, game.player.cell, direction)
        assert game.handle_key(key) == expected
    assert game.player.move_count <= 2
    assert start.is_visited()


def test_maze_game_rejects_bad_size():
    with pytest.raises(ValueError):
        MazeGame(0, 4)


def test_single_cell_maze_game_reports_goal_with_current_player():
    seen = []
    game = MazeGame(1, 1, seed=0, on_goal=lambda g: seen.append((g.goal_reached, g.player)))

    assert seen == [(True, game.player)]

    first_player = game.player
    game.new_maze()

    assert len(seen) == 2
    assert seen[1] == (True, game.player)
    assert seen[1][1] is not first_player

# player.py
import random
from typing import Callable, Optional

# Import from other project modules
import constants as const
from grid_core import Cell, Grid
from maze_gen import MazeGenerator


def _check_direction(direction: str):
    if direction not in const.DIRECTION_DELTAS:
        raise ValueError(
            f"Unknown direction '{direction}', expected one of {const.DIRECTIONS}."
        )


def get_move_target(grid: Grid, cell: Cell, direction: str) -> Optional[Cell]:
    """
    Returns the cell a move would land on, or None if the move is illegal.

    A move is legal when the destination is inside the grid, the wall on
    ``cell`` facing ``direction`` is gone, and the destination was visited
    by the generator. The visited check only matters while a maze is still
    being carved; on a finished maze every cell behind a cleared wall is
    visited.
    """
    _check_direction(direction)
    next_cell = grid.neighbour(cell, direction)
    if next_cell is None:
        return None
    if cell.has_wall(const.DIRECTION_TO_WALL[direction]):
        return None
    if not next_cell.is_visited():
        return None
    return next_cell


def is_move_legal(grid: Grid, cell: Cell, direction: str) -> bool:
    return get_move_target(grid, cell, direction) is not None


class PlayerController:
    """
    Tracks the player's cell on one grid and applies directional commands.

    ``on_move`` is called with the new cell after every legal move (the
    re-render hook). ``on_goal`` is called once, the first time the player
    stands on the grid's end cell.
    """

    def __init__(
        self,
        grid: Grid,
        on_move: Optional[Callable[[Cell], None]] = None,
        on_goal: Optional[Callable[[Cell], None]] = None,
        check_start: bool = True,
    ):
        self.grid = grid
        self.cell = grid.start_cell
        self.on_move = on_move
        self.on_goal = on_goal
        self.goal_reached = False
        self.move_count = 0
        if check_start:
            self.check_goal()

    @property
    def position(self):
        return self.cell.coords

    def move(self, direction: str) -> bool:
        """Applies one command. Illegal moves leave the player where it is."""
        next_cell = get_move_target(self.grid, self.cell, direction)
        if next_cell is None:
            return False
        self.cell = next_cell
        self.move_count += 1
        if self.on_move:
            self.on_move(next_cell)
        self.check_goal()
        return True

    def place(self, row: int, col: int):
        """Teleports the player, bypassing walls. Used for setup and debugging."""
        cell = self.grid.get_cell(row, col)
        if cell is None:
            raise ValueError(f"Cell ({row}, {col}) lies outside {self.grid}.")
        self.cell = cell
        self.check_goal()

    def check_goal(self) -> bool:
        """Fires the goal event on the first arrival at the end cell only."""
        if self.goal_reached or self.cell != self.grid.end_cell:
            return False
        self.goal_reached = True
        print(f"  Goal reached at cell {self.cell.id} after {self.move_count} moves.")
        if self.on_goal:
            self.on_goal(self.cell)
        return True


class MazeGame:
    """
    One play session: a generator, the current maze and the player on it.
    ``new_maze`` throws the previous grid away and builds a fresh one.
    """

    def __init__(
        self,
        rows: int = const.DEFAULT_ROWS,
        cols: int = const.DEFAULT_COLS,
        rng: Optional[random.Random] = None,
        seed: Optional[int] = None,
        on_render: Optional[Callable[["MazeGame"], None]] = None,
        on_goal: Optional[Callable[["MazeGame"], None]] = None,
    ):
        # Reject bad sizes before any generation work
        if rows <= 0 or cols <= 0:
            raise ValueError(
                f"Grid dimensions must be positive, got rows={rows}, cols={cols}."
            )
        self.rows = rows
        self.cols = cols
        self.generator = MazeGenerator(rng=rng, seed=seed)
        self.on_render = on_render
        self.on_goal = on_goal
        self.grid: Optional[Grid] = None
        self.player: Optional[PlayerController] = None
        self.new_maze()

    def new_maze(self) -> Grid:
        self.grid = self.generator.generate(self.rows, self.cols)
        self.player = PlayerController(
            self.grid,
            on_move=lambda _cell: self._render(),
            on_goal=lambda _cell: self._goal(),
            check_start=False,
        )
        self._render()
        # A 1x1 maze starts on its end cell
        self.player.check_goal()
        return self.grid

    @property
    def goal_reached(self) -> bool:
        return self.player.goal_reached

    def handle_command(self, direction: str) -> bool:
        return self.player.move(direction)

    def handle_key(self, key: str) -> bool:
        """Maps a keyboard key to a command; unrelated keys are ignored."""
        if key == const.KEY_NEW_GAME:
            self.new_maze()
            return True
        direction = const.KEY_TO_DIRECTION.get(key)
        if direction is None:
            return False
        return self.player.move(direction)

    def _render(self):
        if self.on_render:
            self.on_render(self)

    def _goal(self):
        if self.on_goal:
            self.on_goal(self)

# grid_core.py
import numpy as np
from typing import List, Tuple, Optional, Dict, Iterator

# Import from other project modules
import constants as const


class Cell:
    """Represents a single square cell of the rectangular maze grid."""

    def __init__(self, row: int, col: int):
        self.row = row
        self.col = col
        self.id = f"{row},{col}"
        self.coords = (row, col)  # Store as tuple for convenience
        # True means the wall is present and blocks movement on that side
        self.walls: Dict[str, bool] = {side: True for side in const.WALL_SIDES}
        self.visited: bool = False  # Set by maze generation

    def mark_visited(self):
        """Marks the cell as visited (for algorithms)."""
        self.visited = True

    def is_visited(self) -> bool:
        return self.visited

    def has_wall(self, side: str) -> bool:
        """Checks if the wall on the given side is still standing."""
        return self.walls[side]

    def wall_count(self) -> int:
        return sum(1 for present in self.walls.values() if present)

    def __repr__(self) -> str:
        return f"Cell({self.id})"

    def __hash__(self):
        return hash(self.coords)

    def __eq__(self, other):
        return isinstance(other, Cell) and self.coords == other.coords


def remove_walls(current: Cell, next_cell: Cell):
    """
    Clears the pair of walls shared by two 4-adjacent cells.
    Both sides are cleared so the wall relation stays symmetric.
    """
    d_col = current.col - next_cell.col
    d_row = current.row - next_cell.row
    assert abs(d_row) + abs(d_col) == 1, (
        f"remove_walls needs 4-adjacent cells, got {current.id} and {next_cell.id}"
    )

    if d_col == 1:
        current.walls[const.WALL_LEFT] = False
        next_cell.walls[const.WALL_RIGHT] = False
    elif d_col == -1:
        current.walls[const.WALL_RIGHT] = False
        next_cell.walls[const.WALL_LEFT] = False

    if d_row == 1:
        current.walls[const.WALL_TOP] = False
        next_cell.walls[const.WALL_BOTTOM] = False
    elif d_row == -1:
        current.walls[const.WALL_BOTTOM] = False
        next_cell.walls[const.WALL_TOP] = False


class Grid:
    """
    Represents the rectangular R x C grid of cells plus the start and end
    markers. A fresh Grid has every wall standing and no cell visited.
    """

    def __init__(
        self,
        rows: int = const.DEFAULT_ROWS,
        cols: int = const.DEFAULT_COLS,
        start: Optional[Tuple[int, int]] = None,
        end: Optional[Tuple[int, int]] = None,
    ):
        if rows <= 0 or cols <= 0:
            raise ValueError(
                f"Grid dimensions must be positive, got rows={rows}, cols={cols}."
            )

        self.rows = rows
        self.cols = cols
        self.cells: List[List[Cell]] = [
            [Cell(r, c) for c in range(cols)] for r in range(rows)
        ]

        start = start if start is not None else (0, 0)
        end = end if end is not None else (rows - 1, cols - 1)
        self.start_cell = self._marker_cell(start, "Start")
        self.end_cell = self._marker_cell(end, "End")

    def _marker_cell(self, coords: Tuple[int, int], label: str) -> Cell:
        cell = self.get_cell(*coords)
        if cell is None:
            raise ValueError(
                f"{label} cell {coords} lies outside the {self.rows}x{self.cols} grid."
            )
        return cell

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols

    def get_cell(self, row: int, col: int) -> Optional[Cell]:
        """Safely retrieves a cell, returning None outside the grid."""
        if not self.in_bounds(row, col):
            return None
        return self.cells[row][col]

    def neighbour(self, cell: Cell, direction: str) -> Optional[Cell]:
        """Returns the cell one step away in the given direction, if any."""
        d_row, d_col = const.DIRECTION_DELTAS[direction]
        return self.get_cell(cell.row + d_row, cell.col + d_col)

    def get_unvisited_neighbours(self, cell: Cell) -> List[Cell]:
        """Gets the in-bounds, unvisited neighbours in up/right/down/left order."""
        unvisited = []
        for direction in const.DIRECTIONS:
            neighbour = self.neighbour(cell, direction)
            if neighbour and not neighbour.is_visited():
                unvisited.append(neighbour)
        return unvisited

    def open_neighbours(self, cell: Cell) -> List[Cell]:
        """Neighbours reachable from the cell through a cleared wall."""
        reachable = []
        for direction in const.DIRECTIONS:
            if cell.has_wall(const.DIRECTION_TO_WALL[direction]):
                continue
            neighbour = self.neighbour(cell, direction)
            if neighbour:
                reachable.append(neighbour)
        return reachable

    def passages(self) -> Iterator[Tuple[Cell, Cell]]:
        """Yields every carved opening once, as (cell, right-or-below neighbour)."""
        for cell in self.get_all_cells():
            for direction in (const.DIR_RIGHT, const.DIR_DOWN):
                neighbour = self.neighbour(cell, direction)
                if neighbour and not cell.has_wall(const.DIRECTION_TO_WALL[direction]):
                    yield cell, neighbour

    def passage_count(self) -> int:
        return sum(1 for _ in self.passages())

    def walls_symmetric(self) -> bool:
        """Checks that every shared wall is either present or absent on both sides."""
        for cell in self.get_all_cells():
            for direction in const.DIRECTIONS:
                neighbour = self.neighbour(cell, direction)
                if neighbour is None:
                    continue
                wall = const.DIRECTION_TO_WALL[direction]
                if cell.has_wall(wall) != neighbour.has_wall(const.OPPOSITE_WALL[wall]):
                    return False
        return True

    def wall_array(self) -> np.ndarray:
        """Returns a (rows, cols, 4) boolean array of walls in top/right/bottom/left order."""
        walls = np.ones((self.rows, self.cols, len(const.WALL_SIDES)), dtype=bool)
        for cell in self.get_all_cells():
            walls[cell.row, cell.col] = [cell.walls[side] for side in const.WALL_SIDES]
        return walls

    def size(self) -> int:
        """Returns the total number of cells in the grid."""
        return self.rows * self.cols

    def get_all_cells(self) -> Iterator[Cell]:
        """Returns an iterator over all cells in row-major order."""
        for row in self.cells:
            yield from row

    def __repr__(self) -> str:
        return f"Grid({self.rows}x{self.cols})"

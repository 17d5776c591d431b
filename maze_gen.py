# maze_gen.py
import random
from typing import Iterator, List, NamedTuple, Optional, Tuple

# Import from other project modules
import constants as const
from grid_core import Cell, Grid, remove_walls

STEP_CARVE = "carve"
STEP_BACKTRACK = "backtrack"


class GenerationStep(NamedTuple):
    """One iteration of the backtracking loop, for step-by-step rendering."""

    kind: str  # STEP_CARVE or STEP_BACKTRACK
    current: Cell
    next_cell: Optional[Cell]  # None when backtracking


class MazeGenerator:
    """
    Generates perfect mazes using the randomized iterative Recursive
    Backtracking (depth-first search) algorithm.

    The random source is owned by the generator so results are reproducible:
    pass either a ``random.Random`` instance or a seed. The grid and the
    frontier stack belong to a single generation run.
    """

    def __init__(self, rng: Optional[random.Random] = None, seed: Optional[int] = None):
        if rng is not None and seed is not None:
            raise ValueError("Pass either rng or seed, not both.")
        self.rng = rng if rng is not None else random.Random(seed)
        self.grid: Optional[Grid] = None
        self.stack: List[Cell] = []

    def iter_steps(
        self,
        rows: int = const.DEFAULT_ROWS,
        cols: int = const.DEFAULT_COLS,
        start: Optional[Tuple[int, int]] = None,
        end: Optional[Tuple[int, int]] = None,
    ) -> Iterator[GenerationStep]:
        """
        Builds a fresh grid and carves it, yielding after every carve or
        backtrack. ``self.grid`` is usable (partially carved) between steps.
        """
        # Validates dimensions before any carving starts
        grid = Grid(rows, cols, start=start, end=end)
        self.grid = grid
        self.stack = []

        start_cell = grid.start_cell
        start_cell.mark_visited()
        self.stack.append(start_cell)

        while self.stack:
            current_cell = self.stack[-1]
            unvisited_neighbours = grid.get_unvisited_neighbours(current_cell)

            if unvisited_neighbours:
                # Choose a random unvisited neighbour
                next_cell = self.rng.choice(unvisited_neighbours)
                next_cell.mark_visited()
                self.stack.append(next_cell)
                remove_walls(current_cell, next_cell)
                yield GenerationStep(STEP_CARVE, current_cell, next_cell)
            else:
                # No unvisited neighbours, backtrack
                self.stack.pop()
                yield GenerationStep(STEP_BACKTRACK, current_cell, None)

    def generate(
        self,
        rows: int = const.DEFAULT_ROWS,
        cols: int = const.DEFAULT_COLS,
        start: Optional[Tuple[int, int]] = None,
        end: Optional[Tuple[int, int]] = None,
    ) -> Grid:
        """Runs the backtracking loop to completion and returns the carved grid."""
        print(f"--- Starting Maze Generation (Recursive Backtracking, {rows}x{cols}) ---")
        carved = 0
        for step in self.iter_steps(rows, cols, start=start, end=end):
            if step.kind == STEP_CARVE:
                carved += 1

        grid = self.grid
        visited_count = sum(1 for cell in grid.get_all_cells() if cell.is_visited())
        print(
            f"--- Maze Generation Complete: Visited {visited_count}/{grid.size()} cells, "
            f"carved {carved} passages. ---"
        )
        return grid


def generate_maze(
    rows: int = const.DEFAULT_ROWS,
    cols: int = const.DEFAULT_COLS,
    rng: Optional[random.Random] = None,
    seed: Optional[int] = None,
) -> Grid:
    """Convenience wrapper: one generator, one maze."""
    return MazeGenerator(rng=rng, seed=seed).generate(rows, cols)

# geometry.py
import numpy as np
from typing import Dict, List, Tuple, Set, Optional, Iterable

# Import from other project modules
from grid_core import Grid, Cell
import constants as const

Point = Tuple[float, float]
Segment = Tuple[Point, Point]
Quad = Tuple[Point, Point, Point, Point]


def _cell_side_segments(cell: Cell, cell_size: float) -> Dict[str, Segment]:
    x = cell.col * cell_size
    y = cell.row * cell_size
    return {
        const.WALL_TOP: ((x, y), (x + cell_size, y)),
        const.WALL_RIGHT: ((x + cell_size, y), (x + cell_size, y + cell_size)),
        const.WALL_BOTTOM: ((x, y + cell_size), (x + cell_size, y + cell_size)),
        const.WALL_LEFT: ((x, y), (x, y + cell_size)),
    }


def cell_wall_segments(cell: Cell, cell_size: float = const.CELL_SIZE) -> List[Segment]:
    """
    Line segments for the walls still standing around one cell, in canvas
    coordinates (x to the right, y downward). At most four segments.
    """
    sides = _cell_side_segments(cell, cell_size)
    return [sides[side] for side in const.WALL_SIDES if cell.walls[side]]


def extract_wall_segments(grid: Grid, cell_size: float = const.CELL_SIZE) -> List[Segment]:
    """Per-cell wall segments for every cell. Shared walls appear once per side."""
    segments = []
    for cell in grid.get_all_cells():
        segments.extend(cell_wall_segments(cell, cell_size))
    return segments


def _owned_walls(grid: Grid, cell: Cell) -> Iterable[str]:
    """
    Sides whose wall this cell is responsible for when each boundary is
    counted once: top and left always, right and bottom only on the border.
    """
    yield const.WALL_TOP
    yield const.WALL_LEFT
    if cell.col == grid.cols - 1:
        yield const.WALL_RIGHT
    if cell.row == grid.rows - 1:
        yield const.WALL_BOTTOM


def entry_exit_openings(grid: Grid) -> Set[Tuple[str, str]]:
    """
    Outer-boundary walls to leave out so the start and end cells open onto
    the outside. Returns (cell id, side) pairs.
    """
    openings = set()
    for cell, preferred in (
        (grid.start_cell, (const.WALL_TOP, const.WALL_LEFT, const.WALL_BOTTOM, const.WALL_RIGHT)),
        (grid.end_cell, (const.WALL_BOTTOM, const.WALL_RIGHT, const.WALL_TOP, const.WALL_LEFT)),
    ):
        for side in preferred:
            d_row, d_col = const.DIRECTION_DELTAS[_side_to_direction(side)]
            if not grid.in_bounds(cell.row + d_row, cell.col + d_col):
                openings.add((cell.id, side))
                break
    return openings


def _side_to_direction(side: str) -> str:
    for direction, wall in const.DIRECTION_TO_WALL.items():
        if wall == side:
            return direction
    raise KeyError(side)


def extract_wall_centerlines(
    grid: Grid,
    cell_size: float = const.CELL_SIZE,
    openings: Optional[Set[Tuple[str, str]]] = None,
) -> List[Segment]:
    """
    Extracts wall CENTERLINE segments with each boundary counted once.
    ``openings`` lists (cell id, side) walls to skip.
    """
    segments = []
    for cell in grid.get_all_cells():
        sides = _cell_side_segments(cell, cell_size)
        for side in _owned_walls(grid, cell):
            if not cell.walls[side]:
                continue
            if openings and (cell.id, side) in openings:
                continue
            segments.append(sides[side])
    return segments


def extract_wall_bases_2d(
    grid: Grid,
    wall_thickness: float,
    cell_size: float = const.CELL_SIZE,
    openings: Optional[Set[Tuple[str, str]]] = None,
) -> List[Quad]:
    """
    Extracts 2D wall base polygons offset by thickness.
    Each centerline becomes a rectangle, extended by half the thickness at
    both ends so walls meeting at a corner overlap instead of leaving a notch.
    """
    print(f"--- Extracting Wall Base Vertices (Openings: {len(openings) if openings else 0}) ---")
    wall_bases = []
    half_thick = wall_thickness / 2.0
    EXTENSION_AMOUNT = half_thick

    for p1, p2 in extract_wall_centerlines(grid, cell_size, openings=openings):
        p1_center = np.array(p1, dtype=float)
        p2_center = np.array(p2, dtype=float)
        direction = p2_center - p1_center
        dist = np.linalg.norm(direction)
        if dist <= const.GEOMETRY_TOLERANCE:
            continue
        dir_norm = direction / dist
        perp_dir = np.array([-dir_norm[1], dir_norm[0]])
        v0 = p1_center - perp_dir * half_thick - dir_norm * EXTENSION_AMOUNT
        v1 = p2_center - perp_dir * half_thick + dir_norm * EXTENSION_AMOUNT
        v2 = p2_center + perp_dir * half_thick + dir_norm * EXTENSION_AMOUNT
        v3 = p1_center + perp_dir * half_thick - dir_norm * EXTENSION_AMOUNT
        if (
            np.linalg.norm(v1 - v0) > const.GEOMETRY_TOLERANCE
            and np.linalg.norm(v2 - v1) > const.GEOMETRY_TOLERANCE
        ):
            wall_bases.append(
                (
                    (float(v0[0]), float(v0[1])),
                    (float(v1[0]), float(v1[1])),
                    (float(v2[0]), float(v2[1])),
                    (float(v3[0]), float(v3[1])),
                )
            )

    print(f"  Extracted {len(wall_bases)} wall base polygons.")
    return wall_bases

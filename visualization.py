# visualization.py
import matplotlib.pyplot as plt
import matplotlib.cm as cm
import matplotlib.colors as mcolors
from matplotlib.animation import FuncAnimation, PillowWriter
from matplotlib.patches import Rectangle
import numpy as np
from collections import deque
from typing import List, Tuple, Optional, Dict

# Import from other project modules
from grid_core import Grid, Cell
from geometry import cell_wall_segments
from maze_gen import MazeGenerator, STEP_CARVE
from player import MazeGame
from snake import SnakeGame
import constants as const


# --- Pathfinding (Often used with visualization) ---
def find_solution_path(
    grid: Grid, start_cell: Optional[Cell], end_cell: Optional[Cell]
) -> Optional[List[Cell]]:
    """Finds the shortest path between two cells using Breadth-First Search through open walls."""
    print(f"--- Finding path from {start_cell.id if start_cell else 'None'} to {end_cell.id if end_cell else 'None'} ---")
    if not (start_cell and end_cell and grid.get_cell(*start_cell.coords) is start_cell
            and grid.get_cell(*end_cell.coords) is end_cell):
        print("ERROR: Invalid start or end cell provided.")
        return None

    # BFS initialization
    queue = deque([start_cell])
    # Keep track of predecessors to reconstruct the path
    predecessor: Dict[Tuple[int, int], Optional[Cell]] = {start_cell.coords: None}
    path_found = False

    while queue:
        current_cell = queue.popleft()

        if current_cell is end_cell:
            path_found = True
            break

        for neighbour_cell in grid.open_neighbours(current_cell):
            if neighbour_cell.coords not in predecessor:
                predecessor[neighbour_cell.coords] = current_cell
                queue.append(neighbour_cell)

    if not path_found:
        print("  Path not found!")
        return None

    # Reconstruct path
    path_cells: List[Cell] = []
    cell: Optional[Cell] = end_cell
    while cell is not None:
        path_cells.append(cell)
        cell = predecessor[cell.coords]
    path_cells.reverse()  # Reverse to get path from start to end

    print(f"  Path length: {len(path_cells)} cells.")
    return path_cells


def compute_distances(grid: Grid, start_cell: Optional[Cell] = None) -> np.ndarray:
    """BFS step counts from the start cell through open walls; -1 marks unreachable cells."""
    start_cell = start_cell or grid.start_cell
    distances = np.full((grid.rows, grid.cols), -1, dtype=int)
    distances[start_cell.row, start_cell.col] = 0
    queue = deque([start_cell])
    while queue:
        current_cell = queue.popleft()
        current_dist = distances[current_cell.row, current_cell.col]
        for neighbour in grid.open_neighbours(current_cell):
            if distances[neighbour.row, neighbour.col] == -1:
                distances[neighbour.row, neighbour.col] = current_dist + 1
                queue.append(neighbour)
    return distances


# --- Drawing Helpers ---
def _setup_plot(grid: Grid, cell_size: float = const.CELL_SIZE) -> Tuple[plt.Figure, plt.Axes]:
    """Creates an axis laid out like the canvas: origin top-left, y downward."""
    fig, ax = plt.subplots(figsize=const.VIS_FIGURE_SIZE)
    _configure_axes(ax, grid, cell_size)
    return fig, ax


def _configure_axes(ax: plt.Axes, grid: Grid, cell_size: float):
    margin = cell_size * 0.1
    ax.set_xlim(-margin, grid.cols * cell_size + margin)
    ax.set_ylim(grid.rows * cell_size + margin, -margin)
    ax.set_aspect("equal")
    ax.set_axis_off()


def _fill_cell(ax: plt.Axes, cell: Cell, color, cell_size: float, alpha: float = 1.0):
    ax.add_patch(
        Rectangle(
            (cell.col * cell_size, cell.row * cell_size),
            cell_size,
            cell_size,
            facecolor=color,
            edgecolor="none",
            alpha=alpha,
        )
    )


def draw_cell(ax: plt.Axes, cell: Cell, cell_size: float = const.CELL_SIZE) -> int:
    """Strokes the walls standing around one cell."""
    segments = cell_wall_segments(cell, cell_size)
    for (x1, y1), (x2, y2) in segments:
        ax.plot([x1, x2], [y1, y2], color=const.VIS_WALL_COLOR,
                lw=const.VIS_WALL_LINE_LW, solid_capstyle="projecting")
    return len(segments)


def draw_maze(ax: plt.Axes, grid: Grid, cell_size: float = const.CELL_SIZE) -> int:
    """Draws every cell's walls. Returns the number of segments stroked."""
    return sum(draw_cell(ax, cell, cell_size) for cell in grid.get_all_cells())


def _draw_start_end(ax: plt.Axes, grid: Grid, cell_size: float):
    _fill_cell(ax, grid.start_cell, const.VIS_START_COLOR, cell_size, const.VIS_MARKER_ALPHA)
    _fill_cell(ax, grid.end_cell, const.VIS_END_COLOR, cell_size, const.VIS_MARKER_ALPHA)


def draw_player(ax: plt.Axes, cell: Cell, cell_size: float = const.CELL_SIZE):
    _fill_cell(ax, cell, const.VIS_PLAYER_COLOR, cell_size)


def _save(fig: plt.Figure, filename: str):
    fig.savefig(filename, dpi=const.VIS_DPI, bbox_inches="tight")
    plt.close(fig)


# --- Main Visualization Functions ---

def visualize_maze_walls(grid: Grid, filename="maze_walls.png", cell_size: float = const.CELL_SIZE):
    """Renders the maze walls with start and end markers."""
    print(f"--- Generating Maze Walls Visualization: {filename} ---")
    try:
        fig, ax = _setup_plot(grid, cell_size)
        _draw_start_end(ax, grid, cell_size)
        segment_count = draw_maze(ax, grid, cell_size)
        ax.set_title(f"Maze {grid.rows}x{grid.cols} ({grid.passage_count()} Passages)")
        _save(fig, filename)
        print(f"  Walls visualization saved to {filename} ({segment_count} segments)")
        return filename
    except Exception as e:
        print(f"ERROR during visualization: {e}")
        return None


def visualize_maze_solution(grid: Grid, filename="maze_solution.png", cell_size: float = const.CELL_SIZE):
    """Finds and visualizes the solution path from start to end."""
    print(f"--- Generating Maze Solution Visualization: {filename} ---")
    solution_path = find_solution_path(grid, grid.start_cell, grid.end_cell)
    if not solution_path:
        print("  Could not find solution path, cannot visualize.")
        return None

    try:
        fig, ax = _setup_plot(grid, cell_size)
        _draw_start_end(ax, grid, cell_size)
        draw_maze(ax, grid, cell_size)

        half = cell_size / 2.0
        path_xs = [cell.col * cell_size + half for cell in solution_path]
        path_ys = [cell.row * cell_size + half for cell in solution_path]
        ax.plot(path_xs, path_ys,
                const.VIS_SOLUTION_LINE_STYLE,
                lw=const.VIS_SOLUTION_LINE_LW,
                alpha=const.VIS_SOLUTION_LINE_ALPHA)

        ax.set_title(f"Maze Solution Path ({len(solution_path)} cells)")
        _save(fig, filename)
        print(f"  Solution visualization saved to {filename}")
        return filename
    except Exception as e:
        print(f"ERROR during visualization: {e}")
        return None


def visualize_maze_connectivity(grid: Grid, filename="maze_connectivity.png", cell_size: float = const.CELL_SIZE):
    """Colors each cell by its distance from the start cell."""
    print(f"--- Generating Connectivity Visualization: {filename} ---")
    distances = compute_distances(grid)
    reachable = int(np.count_nonzero(distances >= 0))
    print(f"  Connectivity check visited {reachable}/{grid.size()} cells.")
    if reachable < grid.size():
        print("  WARNING: Not all cells are reachable from the start cell!")

    try:
        fig, ax = _setup_plot(grid, cell_size)
        cmap = cm.viridis
        max_distance = int(distances.max())
        norm = mcolors.Normalize(vmin=0, vmax=max(1, max_distance))
        for cell in grid.get_all_cells():
            distance = distances[cell.row, cell.col]
            color = const.VIS_CONN_UNREACHABLE_COLOR if distance == -1 else cmap(norm(distance))
            _fill_cell(ax, cell, color, cell_size, alpha=0.95)
        draw_maze(ax, grid, cell_size)

        sm = plt.cm.ScalarMappable(cmap=cmap, norm=norm)
        sm.set_array([])
        cbar = plt.colorbar(sm, ax=ax, shrink=0.7, aspect=20, pad=0.04)
        cbar.set_label(f"Distance from Start Cell ({grid.start_cell.id})")

        ax.set_title(f"Maze Connectivity ({reachable}/{grid.size()} Reachable)")
        _save(fig, filename)
        print(f"  Connectivity visualization saved to {filename}")
        return filename
    except Exception as e:
        print(f"ERROR during visualization: {e}")
        return None


def visualize_generation(
    rows: int = const.DEFAULT_ROWS,
    cols: int = const.DEFAULT_COLS,
    seed: Optional[int] = None,
    filename="maze_generation.gif",
    cell_size: float = const.CELL_SIZE,
    fps: int = 20,
):
    """Animates the carving, one frame per opened passage, and saves it as a GIF."""
    print(f"--- Generating Maze Carving Animation: {filename} ---")
    generator = MazeGenerator(seed=seed)
    frames = []
    for step in generator.iter_steps(rows, cols):
        if step.kind == STEP_CARVE:
            frames.append((generator.grid.wall_array(), step.next_cell.coords))
    grid = generator.grid
    print(f"  Captured {len(frames)} frames.")
    if not frames:
        print("  Single-cell maze, nothing to animate.")
        return None

    try:
        fig, ax = _setup_plot(grid, cell_size)
        snapshot = Grid(rows, cols)

        def _draw_frame(index: int):
            walls, head = frames[index]
            ax.clear()
            _configure_axes(ax, snapshot, cell_size)
            for cell in snapshot.get_all_cells():
                cell.walls = dict(zip(const.WALL_SIDES, walls[cell.row, cell.col].tolist()))
            _fill_cell(ax, snapshot.get_cell(*head), const.VIS_PLAYER_COLOR, cell_size)
            draw_maze(ax, snapshot, cell_size)
            ax.set_title(f"Carving {index + 1}/{len(frames)}")

        animation = FuncAnimation(fig, _draw_frame, frames=len(frames), repeat=False)
        animation.save(filename, writer=PillowWriter(fps=fps))
        plt.close(fig)
        print(f"  Animation saved to {filename}")
        return filename
    except Exception as e:
        print(f"ERROR during animation: {e}")
        return None


# --- Interactive Play ---

def _release_game_keys():
    """Unbinds the game keys from matplotlib's toolbar shortcuts (left/right are back/forward)."""
    game_keys = set(const.KEY_TO_DIRECTION) | {const.KEY_NEW_GAME}
    for name in ("keymap.back", "keymap.forward"):
        plt.rcParams[name] = [key for key in plt.rcParams[name] if key not in game_keys]


class MazeView:
    """Draws a MazeGame on a matplotlib figure and feeds it arrow-key commands."""

    def __init__(self, game: MazeGame, cell_size: float = const.CELL_SIZE):
        self.game = game
        self.cell_size = cell_size
        _release_game_keys()
        self.fig, self.ax = _setup_plot(game.grid, cell_size)
        game.on_render = lambda _game: self.redraw()
        self.fig.canvas.mpl_connect("key_press_event", self.on_key)
        self.redraw()

    def redraw(self):
        grid = self.game.grid
        self.ax.clear()
        _configure_axes(self.ax, grid, self.cell_size)
        _draw_start_end(self.ax, grid, self.cell_size)
        draw_maze(self.ax, grid, self.cell_size)
        draw_player(self.ax, self.game.player.cell, self.cell_size)
        if self.game.goal_reached:
            self.ax.set_title(const.VIS_GOAL_MESSAGE, color=const.VIS_PLAYER_COLOR)
        else:
            self.ax.set_title("Arrow keys to move, 'n' for a new maze")
        self.fig.canvas.draw_idle()

    def on_key(self, event):
        self.game.handle_key(event.key)


class SnakeView:
    """Draws a SnakeGame and advances it on a matplotlib timer."""

    def __init__(self, game: SnakeGame, interval_ms: int = const.SNAKE_TICK_MS):
        self.game = game
        _release_game_keys()
        self.fig, self.ax = plt.subplots(figsize=(4, 6))
        self.fig.canvas.mpl_connect("key_press_event", self.on_key)
        self.timer = self.fig.canvas.new_timer(interval=interval_ms)
        self.timer.add_callback(self.on_timer)
        self.redraw()

    def start(self):
        self.timer.start()

    def redraw(self):
        game = self.game
        unit = const.SNAKE_UNIT_PX
        self.ax.clear()
        self.ax.set_xlim(0, game.width * unit)
        self.ax.set_ylim(game.height * unit, 0)
        self.ax.set_aspect("equal")
        self.ax.set_xticks([])
        self.ax.set_yticks([])
        self.ax.set_facecolor(const.SNAKE_BACKGROUND_COLOR)

        apple_x, apple_y = game.apple
        self.ax.add_patch(Rectangle((apple_x * unit, apple_y * unit), unit, unit,
                                    facecolor=const.SNAKE_APPLE_COLOR))
        for i, (x, y) in enumerate(game.segments):
            color = const.SNAKE_HEAD_COLOR if i == 0 else const.SNAKE_BODY_COLOR
            self.ax.add_patch(Rectangle((x * unit, y * unit), unit, unit, facecolor=color))

        status = "Game over, 'n' to restart" if game.game_over else "Arrow keys to steer"
        self.ax.set_title(f"Score {game.score}   High {game.high_score}\n{status}")
        self.fig.canvas.draw_idle()

    def on_timer(self):
        self.game.tick()
        self.redraw()

    def on_key(self, event):
        if self.game.handle_key(event.key):
            self.redraw()


def play_maze(game: Optional[MazeGame] = None):
    """Opens an interactive window for the maze game."""
    view = MazeView(game or MazeGame())
    plt.show()
    return view


def play_snake(game: Optional[SnakeGame] = None):
    """Opens an interactive window for the snake game."""
    view = SnakeView(game or SnakeGame())
    view.start()
    plt.show()
    return view

# --- Grid Structure ---
DEFAULT_ROWS = 10
DEFAULT_COLS = 10
CELL_SIZE = 40  # Pixel size of one maze cell on the canvas

# --- Cell Walls ---
WALL_TOP = "top"
WALL_RIGHT = "right"
WALL_BOTTOM = "bottom"
WALL_LEFT = "left"
WALL_SIDES = (WALL_TOP, WALL_RIGHT, WALL_BOTTOM, WALL_LEFT)

OPPOSITE_WALL = {
    WALL_TOP: WALL_BOTTOM,
    WALL_RIGHT: WALL_LEFT,
    WALL_BOTTOM: WALL_TOP,
    WALL_LEFT: WALL_RIGHT,
}

# --- Movement Directions ---
DIR_UP = "up"
DIR_DOWN = "down"
DIR_LEFT = "left"
DIR_RIGHT = "right"
DIRECTIONS = (DIR_UP, DIR_RIGHT, DIR_DOWN, DIR_LEFT)  # Neighbour scan order

# (d_row, d_col) for each direction, rows grow downward
DIRECTION_DELTAS = {
    DIR_UP: (-1, 0),
    DIR_RIGHT: (0, 1),
    DIR_DOWN: (1, 0),
    DIR_LEFT: (0, -1),
}

# Wall a cell must lack for movement in a direction
DIRECTION_TO_WALL = {
    DIR_UP: WALL_TOP,
    DIR_RIGHT: WALL_RIGHT,
    DIR_DOWN: WALL_BOTTOM,
    DIR_LEFT: WALL_LEFT,
}

OPPOSITE_DIRECTION = {
    DIR_UP: DIR_DOWN,
    DIR_DOWN: DIR_UP,
    DIR_LEFT: DIR_RIGHT,
    DIR_RIGHT: DIR_LEFT,
}

# Keyboard keys (matplotlib and browser names) accepted as commands
KEY_TO_DIRECTION = {
    "up": DIR_UP,
    "down": DIR_DOWN,
    "left": DIR_LEFT,
    "right": DIR_RIGHT,
    "ArrowUp": DIR_UP,
    "ArrowDown": DIR_DOWN,
    "ArrowLeft": DIR_LEFT,
    "ArrowRight": DIR_RIGHT,
}
KEY_NEW_GAME = "n"

# --- 2D STL Export ---
MAZE_2D_WALL_THICKNESS = 4.0  # In canvas units (same scale as CELL_SIZE)
MAZE_2D_WALL_HEIGHT = 15.0
MAZE_2D_BASE_HEIGHT = MAZE_2D_WALL_HEIGHT / 3.0

# --- Tolerances ---
GEOMETRY_TOLERANCE = 1e-9
MESH_VERTEX_DISTANCE_TOLERANCE_SQ = 1e-12

# --- Visualization ---
VIS_FIGURE_SIZE = (8, 8)
VIS_DPI = 150
VIS_WALL_COLOR = "black"
VIS_WALL_LINE_LW = 2.0
VIS_PLAYER_COLOR = "green"
VIS_START_COLOR = "lime"
VIS_END_COLOR = "red"
VIS_MARKER_ALPHA = 0.35
VIS_SOLUTION_LINE_STYLE = "r-"
VIS_SOLUTION_LINE_LW = 2.0
VIS_SOLUTION_LINE_ALPHA = 0.9
VIS_CONN_UNREACHABLE_COLOR = "lightgrey"
VIS_GOAL_MESSAGE = "You reached the goal!"

# --- Snake Game ---
SNAKE_BOARD_WIDTH = 30  # Board units (the canvas was 300x500 px at 10 px each)
SNAKE_BOARD_HEIGHT = 50
SNAKE_UNIT_PX = 10
SNAKE_START_HEAD = (4, 1)  # (x, y) of the head, body trails to the left
SNAKE_START_LENGTH = 5
SNAKE_GROWTH = 5  # Length and score gained per apple
SNAKE_TICK_MS = 100
SNAKE_HEAD_COLOR = "#2a9df4"
SNAKE_BODY_COLOR = "white"
SNAKE_APPLE_COLOR = "red"
SNAKE_BACKGROUND_COLOR = "black"
SNAKE_HIGH_SCORE_FILE = "snake_high_score.json"

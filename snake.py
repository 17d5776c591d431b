# snake.py
import json
import random
from pathlib import Path
from typing import List, Optional, Tuple, Union

# Import from other project modules
import constants as const

Position = Tuple[int, int]  # (x, y) in board units, y grows downward


def swipe_direction(dx: float, dy: float) -> Optional[str]:
    """Maps a touch drag to a direction: the dominant axis wins."""
    if dx == 0 and dy == 0:
        return None
    if abs(dx) > abs(dy):
        return const.DIR_RIGHT if dx > 0 else const.DIR_LEFT
    return const.DIR_DOWN if dy > 0 else const.DIR_UP


class HighScoreStore:
    """Persists the single snake high score as a JSON document."""

    def __init__(self, path: Union[str, Path] = const.SNAKE_HIGH_SCORE_FILE):
        self.path = Path(path)

    def load(self) -> int:
        if not self.path.exists():
            return 0
        try:
            data = json.loads(self.path.read_text(encoding="utf8"))
            return max(0, int(data["high_score"]))
        except (OSError, ValueError, KeyError, TypeError, OverflowError) as e:
            print(f"WARN: Ignoring unreadable high score file {self.path}: {e}")
            return 0

    def save(self, score: int) -> bool:
        try:
            self.path.write_text(json.dumps({"high_score": int(score)}), encoding="utf8")
        except OSError as e:
            print(f"WARN: Could not save high score to {self.path}: {e}")
            return False
        return True


class SnakeGame:
    """
    Snake on a fixed board. The snake stays put until the first direction
    command; after that every ``tick`` moves it one unit.
    """

    def __init__(
        self,
        width: int = const.SNAKE_BOARD_WIDTH,
        height: int = const.SNAKE_BOARD_HEIGHT,
        rng: Optional[random.Random] = None,
        high_score_store: Optional[HighScoreStore] = None,
    ):
        if width <= 0 or height <= 0:
            raise ValueError(
                f"Board dimensions must be positive, got width={width}, height={height}."
            )
        self.width = width
        self.height = height
        self.rng = rng if rng is not None else random.Random()
        self.high_score_store = high_score_store
        self.high_score = high_score_store.load() if high_score_store else 0

        self.segments: List[Position] = []
        self.length = const.SNAKE_START_LENGTH
        self.direction: Optional[str] = None
        self.apple: Position = (0, 0)
        self.score = 0
        self.game_over = False
        self.new_game()

    def new_game(self):
        """Resets snake, apple and score. The high score is kept."""
        head_x, head_y = const.SNAKE_START_HEAD
        self.length = const.SNAKE_START_LENGTH
        self.segments = [(head_x - i, head_y) for i in range(self.length)]
        self.direction = None
        self.score = 0
        self.game_over = False
        self.apple = self._random_free_position()

    @property
    def head(self) -> Position:
        return self.segments[0]

    def change_direction(self, direction: str) -> str:
        """
        Accepts a new heading unless it reverses the current one, in which
        case the current heading is kept. Returns the heading in effect.
        """
        if direction not in const.DIRECTION_DELTAS:
            raise ValueError(
                f"Unknown direction '{direction}', expected one of {const.DIRECTIONS}."
            )
        if self.game_over:
            return self.direction
        if self.direction and const.OPPOSITE_DIRECTION[self.direction] == direction:
            return self.direction
        self.direction = direction
        return direction

    def handle_key(self, key: str) -> bool:
        if key == const.KEY_NEW_GAME:
            self.new_game()
            return True
        direction = const.KEY_TO_DIRECTION.get(key)
        if direction is None:
            return False
        self.change_direction(direction)
        return True

    def tick(self) -> bool:
        """Advances the snake one unit. Returns False once the game is over."""
        if self.game_over:
            return False
        if self.direction is None:
            return True

        d_row, d_col = const.DIRECTION_DELTAS[self.direction]
        head_x, head_y = self.head
        new_head = (head_x + d_col, head_y + d_row)
        self.segments.insert(0, new_head)
        if len(self.segments) > self.length:
            self.segments.pop()

        if not self._in_bounds(new_head):
            self._end_game("hit the wall")
            return False

        if new_head == self.apple:
            self.length += const.SNAKE_GROWTH
            self.score += const.SNAKE_GROWTH
            self.apple = self._random_free_position()
            self._update_high_score()

        if new_head in self.segments[1:]:
            self._end_game("ran into itself")
            return False
        return True

    def _in_bounds(self, pos: Position) -> bool:
        x, y = pos
        return 0 <= x < self.width and 0 <= y < self.height

    def _random_free_position(self) -> Position:
        occupied = set(self.segments)
        free = [
            (x, y)
            for x in range(self.width)
            for y in range(self.height)
            if (x, y) not in occupied
        ]
        if not free:
            # Board is full, leave the apple where it is
            return self.apple
        return self.rng.choice(free)

    def _update_high_score(self):
        if self.score <= self.high_score:
            return
        self.high_score = self.score
        if self.high_score_store:
            self.high_score_store.save(self.high_score)

    def _end_game(self, reason: str):
        self.game_over = True
        self._update_high_score()
        print(f"  Snake {reason}. Final score: {self.score} (high score {self.high_score}).")

# main.py
import argparse
import os
import time
import traceback
from typing import Optional, Sequence

# Import project modules
import constants as const
from maze_gen import MazeGenerator
from mesh_builder import create_2d_maze_stl
from player import MazeGame
from snake import HighScoreStore, SnakeGame
from visualization import (
    play_maze,
    play_snake,
    visualize_generation,
    visualize_maze_connectivity,
    visualize_maze_solution,
    visualize_maze_walls,
)


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Maze generator and snake mini-games")
    parser.add_argument("--rows", type=int, default=const.DEFAULT_ROWS, help="Maze rows")
    parser.add_argument("--cols", type=int, default=const.DEFAULT_COLS, help="Maze columns")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--output-dir", default="output", help="Directory for images, STL and the snake high score")
    parser.add_argument("--no-stl", action="store_true", help="Skip the STL export")
    parser.add_argument("--animate", action="store_true", help="Also save a carving GIF")
    parser.add_argument("--play", action="store_true", help="Play the maze interactively")
    parser.add_argument("--snake", action="store_true", help="Play the snake game instead")
    args = parser.parse_args(argv)
    if args.rows <= 0 or args.cols <= 0:
        parser.error(f"--rows and --cols must be positive, got {args.rows}x{args.cols}")
    return args


def run_maze_generation(args: argparse.Namespace) -> int:
    start_time = time.time()
    output_dir = args.output_dir
    os.makedirs(output_dir, exist_ok=True)

    print("\n--- Configuration ---")
    print(f"  Grid: {args.rows}x{args.cols}, Cell Size: {const.CELL_SIZE}, Seed: {args.seed}")

    try:
        grid = MazeGenerator(seed=args.seed).generate(args.rows, args.cols)
    except Exception as e:
        print(f"ERROR during maze generation: {e}")
        traceback.print_exc()
        return 1

    # --- Visualizations ---
    print("\n--- Generating Visualizations ---")
    visualize_maze_walls(grid, filename=os.path.join(output_dir, "maze_walls.png"))
    visualize_maze_solution(grid, filename=os.path.join(output_dir, "maze_solution.png"))
    visualize_maze_connectivity(grid, filename=os.path.join(output_dir, "maze_connectivity.png"))
    if args.animate:
        visualize_generation(
            args.rows, args.cols, seed=args.seed,
            filename=os.path.join(output_dir, "maze_generation.gif"),
        )

    # --- Create 2D Flat STL ---
    if not args.no_stl:
        create_2d_maze_stl(grid, output_filename=os.path.join(output_dir, "maze_2d_flat.stl"))

    end_time = time.time()
    print(f"\n--- Total Execution Time: {end_time - start_time:.2f} seconds ---")
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    if args.snake:
        os.makedirs(args.output_dir, exist_ok=True)
        store = HighScoreStore(os.path.join(args.output_dir, const.SNAKE_HIGH_SCORE_FILE))
        play_snake(SnakeGame(high_score_store=store))
        return 0
    if args.play:
        play_maze(MazeGame(args.rows, args.cols, seed=args.seed))
        return 0
    return run_maze_generation(args)


if __name__ == "__main__":
    raise SystemExit(main())

#!/usr/bin/env python3
"""
Minesweeper Solver - Main entry point.

Usage (after `pip install -e .` from the repository root):
    python main.py solve [--width W] [--height H] [--mines N] [--step]
    python main.py evaluate [--games N] [--output stats.json]
"""
import argparse
import logging

import numpy as np

from game import Board, BoardConfig, format_board
from solver import GameResult, Solver, TurnReport
from evaluation import Evaluator, TrialConfig, format_stats


RESULT_MESSAGES = {
    GameResult.VICTORY: "The game was won!",
    GameResult.DEFEAT: "The game was LOST by a deduction :(",
    GameResult.RANDOM_DEFEAT: "The game was LOST on a guess :(",
    GameResult.STUCK: "The solver got stuck.",
}


def board_config_from_args(args: argparse.Namespace) -> BoardConfig:
    """Build the board configuration from command-line flags."""
    return BoardConfig(
        width=args.width,
        height=args.height,
        num_mines=args.mines,
        first_click=args.first_click,
    )


def solve(args: argparse.Namespace) -> None:
    """Play a single game and show the board."""
    config = board_config_from_args(args)
    rng = np.random.default_rng(args.seed)
    board = Board(config, rng=rng)
    solver = Solver(board, rng=rng)

    def show_turn(report: TurnReport) -> None:
        print(f"\n=== Turn {report.turn} ===")
        if report.guess is not None:
            print(f"Guessed {report.guess}")
        print(format_board(board))
        if report.result is None:
            input("\nThe turn is complete. Press Enter to resume...")

    result = solver.solve(on_turn=show_turn if args.step else None)

    if not args.step:
        print(format_board(board))
    print(f"\n{RESULT_MESSAGES[result]}")
    print(f"Turns: {solver.turns} | Guesses: {solver.guesses}")


def evaluate(args: argparse.Namespace) -> None:
    """Run many games and print aggregate statistics."""
    config = TrialConfig(
        board=board_config_from_args(args),
        num_games=args.games,
        seed=args.seed,
        output_path=args.output,
    )

    print(
        f"Solving {config.num_games} boards of "
        f"{config.board.width}x{config.board.height} "
        f"with {config.board.num_mines} mines..."
    )
    stats = Evaluator(config).run()
    print(format_stats(stats))
    if args.output:
        print(f"Statistics saved to: {args.output}")


def add_board_arguments(parser: argparse.ArgumentParser) -> None:
    """Board flags shared by every command."""
    parser.add_argument("--width", type=int, default=16, help="Board width")
    parser.add_argument("--height", type=int, default=16, help="Board height")
    parser.add_argument("--mines", type=int, default=40, help="Number of mines")
    parser.add_argument(
        "--first-click",
        choices=["safe_cell", "safe_neighborhood"],
        default="safe_neighborhood",
        help="Mine-free area guaranteed around the first reveal",
    )
    parser.add_argument("--seed", type=int, default=None, help="Random seed")


def main() -> None:
    """Parse arguments and run the appropriate command."""
    parser = argparse.ArgumentParser(
        description="Minesweeper Solver - Constraint fusion deduction engine"
    )
    parser.add_argument(
        "--verbose", action="store_true", help="Log every deduction"
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # Solve command
    solve_parser = subparsers.add_parser("solve", help="Solve a single board")
    add_board_arguments(solve_parser)
    solve_parser.add_argument(
        "--step", action="store_true", help="Pause after every turn"
    )

    # Evaluate command
    eval_parser = subparsers.add_parser("evaluate", help="Solve many boards")
    add_board_arguments(eval_parser)
    eval_parser.add_argument(
        "--games", type=int, default=1000, help="Number of games to play"
    )
    eval_parser.add_argument(
        "--output", type=str, default=None, help="Write statistics JSON here"
    )

    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    if args.command == "solve":
        solve(args)
    elif args.command == "evaluate":
        evaluate(args)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()

#!/usr/bin/env python3
"""
Watch the solver play Minesweeper.

Usage (after `pip install -e .` from the repository root):
    python demo.py [--delay S] [--games N] [--size N] [--mines N]
"""
import time
import os

from game import Board, BoardConfig, format_board
from solver import GameResult, Solver, TurnReport


def clear_screen():
    os.system('cls' if os.name == 'nt' else 'clear')


def demo(delay: float = 0.3, games: int = 5, size: int = 9, mines: int = 10):
    """Run demo games with visualization."""
    config = BoardConfig(
        height=size, width=size, num_mines=mines, first_click="safe_neighborhood"
    )

    print(f"Board: {size}x{size} with {mines} mines ({100*mines/(size*size):.1f}% density)")
    print("Starting in 2 seconds...")
    time.sleep(2)

    wins = 0

    for game in range(games):
        board = Board(config)
        solver = Solver(board)

        def show_turn(report: TurnReport) -> None:
            clear_screen()
            print(f"=== Game {game + 1}/{games} | Turn {report.turn} ===")
            print(f"Wins so far: {wins}")
            if report.guess is not None:
                print(f"Guessed: {report.guess}")
            print()
            print(format_board(board))
            time.sleep(delay)

        result = solver.solve(on_turn=show_turn)

        if result == GameResult.VICTORY:
            wins += 1
            print(f"\n*** WIN! ***")
        elif result == GameResult.STUCK:
            print(f"\n*** STUCK ***")
        else:
            print(f"\n*** LOST ({result.name.lower().replace('_', ' ')}) ***")

        time.sleep(1.0)  # Pause between games

    print(f"\n=== Final: {wins}/{games} wins ({100*wins/games:.0f}%) ===")


if __name__ == "__main__":
    import argparse
    parser = argparse.ArgumentParser()
    parser.add_argument("--delay", type=float, default=0.3, help="Delay between turns")
    parser.add_argument("--games", type=int, default=5, help="Number of games")
    parser.add_argument("--size", type=int, default=9, help="Board size (NxN)")
    parser.add_argument("--mines", type=int, default=None, help="Number of mines (default: ~16%% of cells)")
    args = parser.parse_args()

    mines = args.mines if args.mines else int(args.size * args.size * 0.16)

    demo(delay=args.delay, games=args.games, size=args.size, mines=mines)

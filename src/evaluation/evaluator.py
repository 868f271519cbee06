"""
Evaluation module for the Minesweeper solver.

Plays many independent games and aggregates their outcomes and timings.
"""
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Dict, Any, List, Callable
import time
import json

import numpy as np

from game import Board, BoardConfig
from solver import GameResult, Solver


# ============================================================================
# Trial Configuration
# ============================================================================

@dataclass
class TrialConfig:
    """Configuration for a batch of solver games."""

    # Board settings
    board: BoardConfig = field(default_factory=lambda: BoardConfig(16, 16, 40))

    # Trial settings
    num_games: int = 1000
    seed: Optional[int] = None
    max_turns: Optional[int] = None

    # Output
    show_progress: bool = True
    output_path: Optional[str] = None

    def __post_init__(self) -> None:
        if self.num_games < 1:
            raise ValueError("Number of games must be positive")
        if self.max_turns is not None and self.max_turns < 1:
            raise ValueError("max_turns must be positive")


# ============================================================================
# Trial Statistics
# ============================================================================

@dataclass
class GameRecord:
    """Statistics for a single game."""

    result: GameResult
    turns: int = 0
    guesses: int = 0
    elapsed: float = 0.0
    revealed_cells: int = 0


@dataclass
class TrialStats:
    """Accumulated trial statistics."""

    games_played: int = 0
    outcomes: Dict[GameResult, int] = field(
        default_factory=lambda: {result: 0 for result in GameResult}
    )
    total_time: float = 0.0
    total_turns: int = 0
    total_guesses: int = 0
    records: List[GameRecord] = field(default_factory=list)

    def add(self, record: GameRecord) -> None:
        """Fold one game's record into the totals."""
        self.games_played += 1
        self.outcomes[record.result] += 1
        self.total_time += record.elapsed
        self.total_turns += record.turns
        self.total_guesses += record.guesses
        self.records.append(record)

    @property
    def victories(self) -> int:
        return self.outcomes[GameResult.VICTORY]

    @property
    def defeats(self) -> int:
        return self.outcomes[GameResult.DEFEAT]

    @property
    def random_defeats(self) -> int:
        return self.outcomes[GameResult.RANDOM_DEFEAT]

    @property
    def stuck(self) -> int:
        return self.outcomes[GameResult.STUCK]

    @property
    def average_time(self) -> float:
        """Mean seconds per game."""
        if not self.games_played:
            return 0.0
        return self.total_time / self.games_played

    def rate(self, result: GameResult) -> float:
        """Fraction of games that ended with ``result``."""
        if not self.games_played:
            return 0.0
        return self.outcomes[result] / self.games_played

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "games_played": self.games_played,
            "victories": self.victories,
            "defeats": self.defeats,
            "random_defeats": self.random_defeats,
            "stuck": self.stuck,
            "total_time": self.total_time,
            "average_time": self.average_time,
            "average_turns": (
                self.total_turns / self.games_played if self.games_played else 0.0
            ),
            "average_guesses": (
                self.total_guesses / self.games_played if self.games_played else 0.0
            ),
            "rates": {result.name.lower(): self.rate(result) for result in GameResult},
        }


def format_stats(stats: TrialStats) -> str:
    """Render statistics as an indented summary block."""
    return "\n".join([
        "Stats:",
        f"  Games: {stats.games_played}",
        f"  Victories: {stats.victories}",
        f"  Defeats: {stats.defeats}",
        f"  Random Defeats: {stats.random_defeats}",
        f"  Stuck: {stats.stuck}",
        f"  Time: {stats.total_time * 1000:.0f}ms",
        f"  Average Time: {stats.average_time * 1000:.4f}ms",
        f"  Percent victory: {stats.rate(GameResult.VICTORY):.2%}",
        f"  Percent defeat: {stats.rate(GameResult.DEFEAT):.2%}",
        f"  Percent random defeat: {stats.rate(GameResult.RANDOM_DEFEAT):.2%}",
        f"  Percent stuck: {stats.rate(GameResult.STUCK):.2%}",
    ])


# ============================================================================
# Evaluator
# ============================================================================

class Evaluator:
    """
    Run the solver over many fresh boards.

    Every game gets its own board and solver; nothing is shared between
    games except the seed sequence they are derived from.
    """

    def __init__(self, config: Optional[TrialConfig] = None) -> None:
        """
        Initialize the evaluator.

        Args:
            config: Trial configuration.
        """
        self.config = config or TrialConfig()
        self.stats = TrialStats()
        self._seeds = np.random.SeedSequence(self.config.seed)

    def play_game(self) -> GameRecord:
        """Build a fresh board, solve it and record the outcome."""
        board_seed, solver_seed = self._seeds.spawn(2)
        board = Board(self.config.board, rng=np.random.default_rng(board_seed))
        solver = Solver(board, rng=np.random.default_rng(solver_seed))

        start_time = time.perf_counter()
        result = solver.solve(max_turns=self.config.max_turns)
        elapsed = time.perf_counter() - start_time

        return GameRecord(
            result=result,
            turns=solver.turns,
            guesses=solver.guesses,
            elapsed=elapsed,
            revealed_cells=board.cells_revealed,
        )

    def run(
        self, callback: Optional[Callable[[GameRecord, TrialStats], None]] = None
    ) -> TrialStats:
        """
        Play every configured game.

        Args:
            callback: Optional hook called after each game.

        Returns:
            Final trial statistics.
        """
        if self.config.show_progress:
            print("Progress: 0% ...", end="", flush=True)

        for game in range(self.config.num_games):
            record = self.play_game()
            self.stats.add(record)

            if self.config.show_progress:
                self._log_progress(game + 1)

            if callback:
                callback(record, self.stats)

        if self.config.show_progress:
            print(" Done!\n")

        if self.config.output_path:
            self._save_stats()

        return self.stats

    def _log_progress(self, games: int) -> None:
        """Print a marker at every tenth of the run."""
        total = self.config.num_games
        step = max(total // 10, 1)
        if games % step == 0 and games < total:
            print(f" {games * 100 // total}% ({games}/{total}) ...", end="", flush=True)

    def _save_stats(self) -> None:
        """Save trial statistics to JSON."""
        stats_file = Path(self.config.output_path)
        stats_file.parent.mkdir(parents=True, exist_ok=True)
        with open(stats_file, "w") as f:
            json.dump(self.stats.to_dict(), f, indent=2)

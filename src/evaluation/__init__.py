"""
Evaluation module for the Minesweeper solver.

Provides repeated-trial runs and outcome statistics.
"""
from .evaluator import (
    TrialConfig,
    GameRecord,
    TrialStats,
    Evaluator,
    format_stats,
)

__all__ = [
    "TrialConfig",
    "GameRecord",
    "TrialStats",
    "Evaluator",
    "format_stats",
]

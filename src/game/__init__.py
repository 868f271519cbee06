"""
Minesweeper game module.

Provides the board and cell model the solver plays against,
plus text rendering.
"""
from .cell import Cell, CellState
from .board import (
    Board,
    BoardConfig,
    GameState,
    RevealResult,
    BEGINNER,
    INTERMEDIATE,
    EXPERT,
)
from .display import format_board

__all__ = [
    "Cell",
    "CellState",
    "Board",
    "BoardConfig",
    "GameState",
    "RevealResult",
    "BEGINNER",
    "INTERMEDIATE",
    "EXPERT",
    "format_board",
]

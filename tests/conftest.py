"""
Pytest configuration and shared fixtures.
"""
import pytest
import sys
from pathlib import Path

import numpy as np

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from game import Board, BoardConfig, Cell
from solver import Solver


# ============================================================================
# Board Fixtures
# ============================================================================

@pytest.fixture
def default_board() -> Board:
    """Create a default 9x9 board with 10 mines."""
    return Board(rng=np.random.default_rng(0))


@pytest.fixture
def small_board() -> Board:
    """Create a small 3x3 board with 1 mine for testing."""
    return Board(BoardConfig(3, 3, 1), rng=np.random.default_rng(1))


@pytest.fixture
def empty_board() -> Board:
    """Create a board with no mines for cascade testing."""
    return Board(BoardConfig(5, 5, 0))


@pytest.fixture
def center_mine_board() -> Board:
    """
    3x3 board with a flagged mine in the center and revealed corners.

    The four edge cells are still covered; every corner reads 1.
    """
    return Board.from_mines(
        3, 3,
        mines=[(1, 1)],
        revealed=[(0, 0), (0, 2), (2, 0), (2, 2)],
        flagged=[(1, 1)],
    )


@pytest.fixture
def nested_ranges_board() -> Board:
    """
    2x3 board where a 2-cell range sits inside a 3-cell range.

        row 0:  a  b  c      (covered, mine at a)
        row 1:  1  2  F      (revealed, revealed, flagged mine)

    (1, 0) sees {a, b} with 1 mine; (1, 1) sees {a, b, c} with 1 mine
    once its flag is excluded, so c must be safe.
    """
    return Board.from_mines(
        3, 2,
        mines=[(0, 0), (1, 2)],
        revealed=[(1, 0), (1, 1)],
        flagged=[(1, 2)],
    )


@pytest.fixture
def fifty_fifty_board() -> Board:
    """2x2 board with one mine in the top row and no way to tell where."""
    return Board.from_mines(
        2, 2,
        mines=[(0, 0)],
        revealed=[(1, 0), (1, 1)],
    )


# ============================================================================
# Solver Fixtures
# ============================================================================

@pytest.fixture
def make_solver():
    """Factory building a seeded solver for a board."""
    def _make(board: Board, seed: int = 0) -> Solver:
        return Solver(board, seed=seed)
    return _make


# ============================================================================
# Cell Fixtures
# ============================================================================

@pytest.fixture
def hidden_cell() -> Cell:
    """Create a hidden cell."""
    return Cell()


@pytest.fixture
def mine_cell() -> Cell:
    """Create a cell containing a mine."""
    return Cell(is_mine=True)


@pytest.fixture
def numbered_cell() -> Cell:
    """Create a revealed cell with adjacent mines."""
    cell = Cell(adjacent_mines=3)
    cell.reveal()
    return cell


# ============================================================================
# Configuration Fixtures
# ============================================================================

@pytest.fixture
def valid_config() -> BoardConfig:
    """Create a valid board configuration."""
    return BoardConfig(9, 9, 10)

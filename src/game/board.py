"""
Board module for Minesweeper game.

Implements the game board with mine placement, cascading reveals,
flagging and the victory predicate the solver plays against.
"""
from collections import deque
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Deque, Dict, Iterable, Iterator, List, Optional, Tuple

import numpy as np

from .cell import Cell, CellState


Position = Tuple[int, int]


# ============================================================================
# Constants
# ============================================================================

class GameState(Enum):
    """Possible states of the game."""

    PLAYING = auto()
    WON = auto()
    LOST = auto()


class RevealResult(Enum):
    """Outcome of a single reveal request."""

    SAFE = auto()
    MINE = auto()
    DISALLOWED = auto()


FIRST_CLICK_RULES = ("safe_cell", "safe_neighborhood")


@dataclass
class BoardConfig:
    """
    Configuration for a Minesweeper board.

    Attributes:
        width: Number of columns.
        height: Number of rows.
        num_mines: Total mines to place.
        first_click: Mine placement rule applied on the first reveal;
            "safe_cell" keeps only the revealed cell mine-free,
            "safe_neighborhood" also keeps its neighbors mine-free.
    """

    width: int = 9
    height: int = 9
    num_mines: int = 10
    first_click: str = "safe_cell"

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Ensure configuration values are valid."""
        if self.width < 1 or self.height < 1:
            raise ValueError("Board dimensions must be positive")
        if self.num_mines < 0:
            raise ValueError("Number of mines cannot be negative")
        if self.first_click not in FIRST_CLICK_RULES:
            raise ValueError(
                f"Unknown first click rule {self.first_click!r} "
                f"(expected one of {', '.join(FIRST_CLICK_RULES)})"
            )
        max_mines = self.width * self.height - self.safe_zone_size
        if self.num_mines > max_mines:
            raise ValueError(f"Too many mines (max {max_mines})")

    @property
    def safe_zone_size(self) -> int:
        """Largest number of cells the first-click rule keeps mine-free."""
        if self.first_click == "safe_neighborhood":
            return min(3, self.width) * min(3, self.height)
        return 1

    @property
    def total_cells(self) -> int:
        return self.width * self.height


# Preset difficulty levels
BEGINNER = BoardConfig(9, 9, 10)
INTERMEDIATE = BoardConfig(16, 16, 40)
EXPERT = BoardConfig(30, 16, 99)


def get_neighborhoods(height: int, width: int) -> Dict[Position, Tuple[Position, ...]]:
    """
    Precompute 8-connected neighbor positions for every cell.

    Args:
        height: Number of rows.
        width: Number of columns.

    Returns:
        Mapping from each (row, col) to the tuple of its in-bounds neighbors,
        in row-major order.
    """
    neighborhoods: Dict[Position, Tuple[Position, ...]] = {}
    for row in range(height):
        for col in range(width):
            neighbors: List[Position] = []
            for delta_row in (-1, 0, 1):
                for delta_col in (-1, 0, 1):
                    if delta_row == 0 and delta_col == 0:
                        continue
                    new_row = row + delta_row
                    new_col = col + delta_col
                    if 0 <= new_row < height and 0 <= new_col < width:
                        neighbors.append((new_row, new_col))
            neighborhoods[(row, col)] = tuple(neighbors)

    return neighborhoods


# ============================================================================
# Board Class
# ============================================================================

@dataclass
class Board:
    """
    Minesweeper game board.

    Manages the grid of cells, mine placement, revealing logic,
    and win/lose conditions. Positions are (row, col) tuples.
    """

    config: BoardConfig = field(default_factory=lambda: BoardConfig())
    rng: Optional[np.random.Generator] = field(default=None, repr=False)
    _grid: List[List[Cell]] = field(default_factory=list, repr=False)
    _game_state: GameState = GameState.PLAYING
    _first_click: bool = True
    _cells_revealed: int = 0

    def __post_init__(self) -> None:
        """Initialize the grid after dataclass creation."""
        if self.rng is None:
            self.rng = np.random.default_rng()
        self._neighborhoods = get_neighborhoods(
            self.config.height, self.config.width
        )
        self._init_grid()

    @classmethod
    def from_mines(
        cls,
        width: int,
        height: int,
        mines: Iterable[Position],
        revealed: Iterable[Position] = (),
        flagged: Iterable[Position] = (),
    ) -> "Board":
        """
        Build a board with a fixed mine layout and optional prior progress.

        Cells in ``revealed`` are revealed one by one without cascading, so
        a fixture can describe any intermediate position exactly.

        Args:
            width: Number of columns.
            height: Number of rows.
            mines: Positions of every mine.
            revealed: Safe positions to show as already revealed.
            flagged: Positions to show as already flagged.

        Raises:
            ValueError: If a position is out of range, or a mine is
                listed as revealed.
        """
        mines = set(mines)
        board = cls(BoardConfig(width, height, len(mines)))
        board._first_click = False
        for row, col in mines:
            board._require_valid_position(row, col)
            board._grid[row][col].is_mine = True
        board._calculate_adjacent_mines()

        for row, col in flagged:
            board._require_valid_position(row, col)
            board._grid[row][col].toggle_flag()
        for row, col in revealed:
            board._require_valid_position(row, col)
            cell = board._grid[row][col]
            if cell.is_mine:
                raise ValueError(f"Cannot pre-reveal mine at {(row, col)}")
            if cell.reveal():
                board._cells_revealed += 1

        board._check_win_condition()
        return board

    # ========================================================================
    # Grid Initialization (Low-level)
    # ========================================================================

    def _init_grid(self) -> None:
        """Create empty grid of cells."""
        self._grid = [
            [Cell() for _ in range(self.config.width)]
            for _ in range(self.config.height)
        ]

    def _place_mines(self, exclude: Position) -> None:
        """
        Place mines randomly, honoring the first-click rule.

        Args:
            exclude: (row, col) of the first revealed cell.
        """
        positions = self._get_valid_mine_positions(exclude)
        chosen = self.rng.choice(
            len(positions), size=self.config.num_mines, replace=False
        )
        for index in chosen:
            row, col = positions[int(index)]
            self._grid[row][col].is_mine = True

    def _get_valid_mine_positions(self, exclude: Position) -> List[Position]:
        """Get all valid positions for mine placement."""
        safe = {exclude}
        if self.config.first_click == "safe_neighborhood":
            safe.update(self.neighbors(*exclude))

        positions = []
        for row in range(self.config.height):
            for col in range(self.config.width):
                if (row, col) not in safe:
                    positions.append((row, col))
        return positions

    def _calculate_adjacent_mines(self) -> None:
        """Calculate adjacent mine counts for all cells."""
        for row in range(self.config.height):
            for col in range(self.config.width):
                if not self._grid[row][col].is_mine:
                    count = self._count_adjacent_mines(row, col)
                    self._grid[row][col].adjacent_mines = count

    def _count_adjacent_mines(self, row: int, col: int) -> int:
        """Count mines adjacent to a specific cell."""
        count = 0
        for neighbor_row, neighbor_col in self.neighbors(row, col):
            if self._grid[neighbor_row][neighbor_col].is_mine:
                count += 1
        return count

    # ========================================================================
    # Neighbor Utilities (Low-level)
    # ========================================================================

    def neighbors(self, row: int, col: int) -> Tuple[Position, ...]:
        """
        Get valid neighboring cell positions.

        Args:
            row: Row index of center cell.
            col: Column index of center cell.

        Returns:
            Tuple of (row, col) positions for in-bounds neighbors.
        """
        return self._neighborhoods[(row, col)]

    def is_valid_position(self, row: int, col: int) -> bool:
        """Check if position is within board bounds."""
        return 0 <= row < self.config.height and 0 <= col < self.config.width

    def _require_valid_position(self, row: int, col: int) -> None:
        if not self.is_valid_position(row, col):
            raise ValueError(f"Cell coordinates {(row, col)} are outside the board.")

    # ========================================================================
    # Game Actions (Mid-level)
    # ========================================================================

    def reveal(self, row: int, col: int) -> RevealResult:
        """
        Reveal a cell at the given position.

        On a lazily placed board the first reveal places the mines.
        A zero-hint cell cascades to its covered neighbors; flagged
        cells are never revealed by the cascade.

        Args:
            row: Row index to reveal.
            col: Column index to reveal.

        Returns:
            MINE if a mine was revealed (game lost), SAFE if at least the
            requested cell was revealed, DISALLOWED for a no-op (cell
            already revealed, flagged, or game over).

        Raises:
            ValueError: If coordinates are out of bounds.
        """
        self._require_valid_position(row, col)
        if not self._can_reveal(row, col):
            return RevealResult.DISALLOWED

        if self._first_click:
            self._handle_first_click(row, col)

        return self._reveal_cascade(row, col)

    def _can_reveal(self, row: int, col: int) -> bool:
        """Check if a cell can be revealed."""
        if self._game_state != GameState.PLAYING:
            return False
        return self._grid[row][col].state == CellState.HIDDEN

    def _handle_first_click(self, row: int, col: int) -> None:
        """Handle first click: place mines and calculate counts."""
        self._first_click = False
        self._place_mines((row, col))
        self._calculate_adjacent_mines()

    def _reveal_cascade(self, row: int, col: int) -> RevealResult:
        """Reveal a cell and flood through zero-hint neighbors."""
        frontier: Deque[Position] = deque([(row, col)])

        while frontier:
            current_row, current_col = frontier.popleft()
            cell = self._grid[current_row][current_col]
            if not cell.reveal():
                continue

            if cell.is_mine:
                self._game_state = GameState.LOST
                return RevealResult.MINE

            self._cells_revealed += 1
            if cell.adjacent_mines == 0:
                for neighbor in self.neighbors(current_row, current_col):
                    if self._grid[neighbor[0]][neighbor[1]].is_hidden:
                        frontier.append(neighbor)

        self._check_win_condition()
        return RevealResult.SAFE

    def flag(self, row: int, col: int) -> bool:
        """
        Toggle flag on a cell.

        Args:
            row: Row index.
            col: Column index.

        Returns:
            True if flag was toggled, False otherwise.
        """
        if self._game_state != GameState.PLAYING:
            return False
        if not self.is_valid_position(row, col):
            return False
        toggled = self._grid[row][col].toggle_flag()
        if toggled:
            self._check_win_condition()
        return toggled

    def mark_safe(self, row: int, col: int) -> None:
        """Mark a revealed cell as fully explained."""
        self.cell(row, col).mark_safe()

    def check_victory(self) -> bool:
        """Check that every mine is flagged and every other cell revealed."""
        for row in self._grid:
            for cell in row:
                if cell.is_mine and not cell.is_flagged:
                    return False
                if not cell.is_mine and not cell.is_revealed:
                    return False
        return True

    def _check_win_condition(self) -> None:
        """Move to WON once the victory predicate holds."""
        if self._game_state == GameState.PLAYING and self.check_victory():
            self._game_state = GameState.WON

    # ========================================================================
    # State Accessors (High-level)
    # ========================================================================

    @property
    def game_state(self) -> GameState:
        """Get current game state."""
        return self._game_state

    @property
    def is_playing(self) -> bool:
        """Check if game is still in progress."""
        return self._game_state == GameState.PLAYING

    @property
    def is_won(self) -> bool:
        """Check if game was won."""
        return self._game_state == GameState.WON

    @property
    def is_lost(self) -> bool:
        """Check if game was lost."""
        return self._game_state == GameState.LOST

    @property
    def cells_revealed(self) -> int:
        """Number of safe cells revealed so far."""
        return self._cells_revealed

    @property
    def flags_placed(self) -> int:
        """Number of flagged cells."""
        return sum(1 for _, cell in self.iter_cells() if cell.is_flagged)

    def get_cell(self, row: int, col: int) -> Optional[Cell]:
        """Get cell at position, or None if invalid."""
        if not self.is_valid_position(row, col):
            return None
        return self._grid[row][col]

    def cell(self, row: int, col: int) -> Cell:
        """
        Get cell at position.

        Raises:
            IndexError: If the position is outside the board.
        """
        if not self.is_valid_position(row, col):
            raise IndexError(f"Cell coordinates {(row, col)} are outside the board.")
        return self._grid[row][col]

    def iter_cells(self) -> Iterator[Tuple[Position, Cell]]:
        """Yield ((row, col), cell) pairs in row-major order."""
        for row in range(self.config.height):
            for col in range(self.config.width):
                yield (row, col), self._grid[row][col]

    def covered_cells(self) -> List[Position]:
        """
        Get hidden, unflagged cells.

        Returns:
            List of (row, col) positions in row-major order.
        """
        return [position for position, cell in self.iter_cells() if cell.is_hidden]

    def mine_positions(self) -> List[Position]:
        """Get the positions of every placed mine."""
        return [position for position, cell in self.iter_cells() if cell.is_mine]

    def get_observation(self) -> np.ndarray:
        """
        Get board state as a numpy array.

        Returns:
            2D numpy array where:
                -1 = hidden
                -2 = flagged
                0-8 = revealed with adjacent count
                9 = revealed mine
        """
        obs = np.zeros((self.config.height, self.config.width), dtype=np.int8)
        for row in range(self.config.height):
            for col in range(self.config.width):
                obs[row, col] = self._grid[row][col].to_observation()
        return obs

    def reset(self) -> None:
        """Reset board to initial state for new game."""
        self._init_grid()
        self._game_state = GameState.PLAYING
        self._first_click = True
        self._cells_revealed = 0

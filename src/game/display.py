"""Text rendering of a board for terminals and logs."""
from .board import Board


def _cell_symbol(board: Board, row: int, col: int, show_mines: bool) -> str:
    cell = board.cell(row, col)
    if show_mines:
        if cell.is_mine:
            return "#" if cell.is_flagged else "*"
        if cell.is_flagged:
            return "X"
    if cell.is_flagged:
        return "F"
    if not cell.is_revealed:
        return "."
    if cell.adjacent_mines == 0:
        return " "
    return str(cell.adjacent_mines)


def format_board(board: Board, reveal_all: bool = False) -> str:
    """
    Render the board as a multi-line string.

    Legend: ``.`` covered, ``F`` flag, blank for a revealed zero, digits
    for hints. Once the game is over (or with ``reveal_all``) mines are
    shown as ``*`` when unflagged and ``#`` when correctly flagged, and a
    flag on a safe cell becomes ``X``.

    Args:
        board: Board to render.
        reveal_all: Show mines even while the game is in progress.

    Returns:
        The board with column numbers on top and row numbers on the left.
    """
    width = board.config.width
    height = board.config.height
    show_mines = reveal_all or not board.is_playing

    lines = ["    " + " ".join(f"{col:2d}" for col in range(width))]
    lines.append("    " + "-" * (3 * width - 1))
    for row in range(height):
        cells = " ".join(
            f" {_cell_symbol(board, row, col, show_mines)}" for col in range(width)
        )
        lines.append(f"{row:2d} |" + cells)
    return "\n".join(lines)

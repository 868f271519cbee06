"""
Unit tests for board rendering.
"""
from game import Board, format_board


class TestFormatBoard:
    """Test the text grid."""

    def test_header_and_rule(self, center_mine_board: Board) -> None:
        """Column numbers sit above a dashed rule."""
        lines = format_board(center_mine_board).splitlines()
        assert lines[0] == "     0  1  2"
        assert lines[1] == "    --------"
        assert len(lines) == 5

    def test_playing_board(self, center_mine_board: Board) -> None:
        """Hints, covered cells and flags during play."""
        lines = format_board(center_mine_board).splitlines()
        assert lines[2] == " 0 | 1  .  1"
        assert lines[3] == " 1 | .  F  ."

    def test_reveal_all_shows_flagged_mine(self, center_mine_board: Board) -> None:
        """A correct flag is drawn as # when mines are shown."""
        lines = format_board(center_mine_board, reveal_all=True).splitlines()
        assert lines[3] == " 1 | .  #  ."

    def test_lost_board_shows_mines(self) -> None:
        """Unflagged mines are drawn once the game is lost."""
        board = Board.from_mines(2, 1, mines=[(0, 0)])
        board.reveal(0, 0)
        assert format_board(board).splitlines()[2] == " 0 | *  ."

    def test_wrong_flag_is_marked(self) -> None:
        """A flag on a safe cell is drawn as X when mines are shown."""
        board = Board.from_mines(2, 1, mines=[], flagged=[(0, 0)])
        assert format_board(board, reveal_all=True).splitlines()[2] == " 0 | X  ."

    def test_revealed_zero_is_blank(self) -> None:
        """Zero hints render as blanks."""
        board = Board.from_mines(3, 1, mines=[(0, 2)], revealed=[(0, 0)])
        row = format_board(board).splitlines()[2]
        assert row == " 0 |    .  ."

"""
Deduction engine that plays a Minesweeper board to completion.

Each turn runs three passes over the revealed cells:

1. Dig safe cells: an anchor whose flags already account for its hint is
   marked safe and the rest of its neighborhood is revealed.
2. Flag certain ranges: an anchor whose covered neighbors are all mines
   gets them flagged.
3. Analyze and fuse ranges: constraints nested inside one another are
   intersected, and the part of the largest one outside the intersection
   is checked for certainty.

When no pass makes progress the engine guesses inside the least dangerous
region it can find. A game ends in victory, defeat (a deduction revealed
a mine), random defeat (a guess revealed a mine) or stuck (nothing left
to try).

The engine owns its board exclusively while solving; passes mutate the
board in place and expect nothing else to touch it concurrently.
"""
import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import Callable, Iterator, List, Optional, Tuple

import numpy as np

from game import Board, RevealResult

from .constraint import Constraint, build_constraint


logger = logging.getLogger(__name__)

Position = Tuple[int, int]


# ============================================================================
# Outcomes
# ============================================================================

class GameResult(Enum):
    """Terminal outcome of a solve."""

    VICTORY = auto()
    DEFEAT = auto()
    RANDOM_DEFEAT = auto()
    STUCK = auto()


@dataclass
class TurnReport:
    """What a single turn did, handed to ``on_turn`` callbacks."""

    turn: int
    dug: bool = False
    flagged: bool = False
    fused: bool = False
    guess: Optional[Position] = None
    result: Optional[GameResult] = None

    @property
    def made_progress(self) -> bool:
        return self.dug or self.flagged or self.fused or self.guess is not None


# ============================================================================
# Solver
# ============================================================================

class Solver:
    """
    Constraint-fusion Minesweeper solver.

    Strategy per turn:
        1. Dig around anchors whose flags explain their hint
        2. Flag the first neighborhood that is entirely mines
        3. Fuse nested neighborhoods and act on certain results
        4. If all of the above stall, guess in the lowest-density region
    """

    def __init__(
        self,
        board: Board,
        seed: Optional[int] = None,
        rng: Optional[np.random.Generator] = None,
    ) -> None:
        """
        Initialize the solver.

        Args:
            board: Board to play; the solver mutates it in place.
            seed: Seed for the guess generator (ignored if rng is given).
            rng: Random generator used to pick guesses.
        """
        self.board = board
        self.rng = rng if rng is not None else np.random.default_rng(seed)
        self.turns = 0
        self.guesses = 0

    # ========================================================================
    # Anchors
    # ========================================================================

    def _open_anchors(self) -> Iterator[Position]:
        """Yield revealed cells not yet marked safe, in row-major order."""
        for position, cell in self.board.iter_cells():
            if cell.is_revealed and not cell.marked_safe:
                yield position

    def _reveal_all(self, cells: List[Position]) -> bool:
        """
        Reveal every cell in order.

        Returns:
            False as soon as a mine is revealed, True otherwise.
        """
        for row, col in cells:
            if self.board.reveal(row, col) == RevealResult.MINE:
                logger.info("Revealed a mine at %s", (row, col))
                return False
        return True

    def _flag_all(self, cells: List[Position]) -> None:
        for row, col in cells:
            if not self.board.cell(row, col).is_flagged:
                self.board.flag(row, col)

    def _open_constraints(self) -> List[Tuple[Position, Constraint]]:
        """Flag-excluding constraints of every open anchor that has any cells."""
        constraints = []
        for anchor in self._open_anchors():
            constraint = build_constraint(self.board, *anchor)
            # An empty set would nest inside every other one and empty each fusion.
            if not constraint.is_empty:
                constraints.append((anchor, constraint))
        return constraints

    @staticmethod
    def _overlapping_group(
        anchor: Position,
        constraint: Constraint,
        candidates: List[Tuple[Position, Constraint]],
    ) -> List[Constraint]:
        """Collect the anchor's constraint, then every candidate nested with it."""
        group = [constraint]
        for other_anchor, other in candidates:
            if other_anchor != anchor and other.overlaps(constraint):
                group.append(other)
        return group

    @staticmethod
    def _largest(group: List[Constraint]) -> Constraint:
        """First member with the largest cell set."""
        largest = group[0]
        for constraint in group[1:]:
            if constraint.size > largest.size:
                largest = constraint
        return largest

    # ========================================================================
    # Passes
    # ========================================================================

    def dig_safe_cells(self) -> bool:
        """
        Reveal the neighborhoods of anchors whose flags explain their hint.

        An anchor counts as satisfied when the number of flags around it
        equals the number of mines around it. It is marked safe and every
        unflagged covered neighbor is revealed.

        Returns:
            True if any anchor was satisfied. Stops early (returning False)
            if a reveal hits a mine; the board is then lost.
        """
        progress = False
        for row, col in self._open_anchors():
            with_flags = build_constraint(self.board, row, col, include_flagged=True)
            flags = sum(
                1 for cell in with_flags.cells if self.board.cell(*cell).is_flagged
            )
            if flags != with_flags.mine_count:
                continue

            self.board.mark_safe(row, col)
            unflagged = build_constraint(self.board, row, col)
            logger.debug(
                "Cell %s is satisfied, digging %d cells",
                (row, col),
                unflagged.size,
            )
            if not self._reveal_all(unflagged.sorted_cells()):
                return False
            progress = True
        return progress

    def flag_certain_ranges(self) -> bool:
        """
        Flag the first neighborhood made entirely of mines.

        Returns:
            True if cells were flagged.
        """
        for row, col in self._open_anchors():
            constraint = build_constraint(self.board, row, col)
            if not constraint.is_saturated:
                continue

            logger.debug(
                "Cell %s has a certain range, flagging %s",
                (row, col),
                constraint.sorted_cells(),
            )
            self._flag_all(constraint.sorted_cells())
            return True
        return False

    def analyze_and_fuse_ranges(self) -> bool:
        """
        Derive certainty from nested neighborhoods.

        For each anchor, every open constraint nested with its own (one
        contained in the other) joins a group. The group's intersection
        takes the smallest mine count in the group; if that saturates it,
        the intersection is flagged. Otherwise the largest member minus
        the intersection is checked: all mines gets flagged, no mines gets
        revealed.

        Returns:
            True after the first anchor that yields a flag or a reveal.
            Stops early (returning False) if a reveal hits a mine.
        """
        candidates = self._open_constraints()
        for anchor, constraint in candidates:
            group = self._overlapping_group(anchor, constraint, candidates)
            if len(group) < 2:
                continue

            fused = Constraint.fuse(group)
            logger.debug(
                "Fused range around %s has %d cells and %d mines",
                anchor,
                fused.size,
                fused.mine_count,
            )
            if fused.is_saturated:
                logger.debug("Fused range is certain, flagging %s", fused.sorted_cells())
                self._flag_all(fused.sorted_cells())
                return True

            difference = self._largest(group).difference(fused)
            if difference.is_saturated:
                logger.debug(
                    "Range outside the fusion is certain, flagging %s",
                    difference.sorted_cells(),
                )
                self._flag_all(difference.sorted_cells())
                return True
            if difference.is_clear:
                logger.debug(
                    "Range outside the fusion is clear, digging %s",
                    difference.sorted_cells(),
                )
                if not self._reveal_all(difference.sorted_cells()):
                    return False
                return True
        return False

    def _choose_guess_range(self) -> Optional[Constraint]:
        """
        Pick the region to guess in.

        Prefers the lowest-density anchor constraint among anchors whose
        group fuses to a non-empty intersection; the density is that of
        the anchor's own constraint, not of the fusion. Falls back to the
        first anchor with any covered neighbor, then to every covered
        cell on the board.
        """
        best: Optional[Constraint] = None
        candidates = self._open_constraints()

        for anchor, constraint in candidates:
            group = self._overlapping_group(anchor, constraint, candidates)
            if len(group) < 2:
                continue
            if Constraint.fuse(group).is_empty:
                continue
            if best is None or constraint.probability < best.probability:
                best = constraint

        if best is not None:
            return best
        if candidates:
            logger.debug("No fused range to guess from, using first open range")
            return candidates[0][1]

        covered = self.board.covered_cells()
        if not covered:
            return None
        logger.debug("No range touches a revealed cell, guessing over the board")
        return Constraint(frozenset(covered), 0)

    def guess(self) -> Optional[Position]:
        """
        Reveal one cell chosen uniformly inside the best guess region.

        Returns:
            The guessed position, or None if no covered cell remains.
            A mine leaves the board lost.
        """
        region = self._choose_guess_range()
        if region is None:
            return None

        cells = region.sorted_cells()
        row, col = cells[int(self.rng.integers(len(cells)))]
        self.guesses += 1
        logger.debug(
            "Guessing %s from %d cells at density %.3f",
            (row, col),
            len(cells),
            region.probability,
        )
        self.board.reveal(row, col)
        return (row, col)

    # ========================================================================
    # Turn Driver
    # ========================================================================

    def play_turn(self) -> TurnReport:
        """
        Play one turn: the three passes, then a guess if all stalled.

        Returns:
            The turn's report; ``result`` is set once the game is over.
        """
        self.turns += 1
        report = TurnReport(turn=self.turns)

        if self.board.check_victory():
            report.result = GameResult.VICTORY
            return report

        report.dug = self.dig_safe_cells()
        if self.board.is_lost:
            report.result = GameResult.DEFEAT
            return report

        report.flagged = self.flag_certain_ranges()
        if self.board.is_lost:
            report.result = GameResult.DEFEAT
            return report

        report.fused = self.analyze_and_fuse_ranges()
        if self.board.is_lost:
            report.result = GameResult.DEFEAT
            return report

        if report.made_progress:
            if self.board.check_victory():
                report.result = GameResult.VICTORY
            return report

        report.guess = self.guess()
        if report.guess is None:
            report.result = GameResult.STUCK
        elif self.board.is_lost:
            report.result = GameResult.RANDOM_DEFEAT
        return report

    def solve(
        self,
        on_turn: Optional[Callable[[TurnReport], None]] = None,
        max_turns: Optional[int] = None,
    ) -> GameResult:
        """
        Play turns until the game reaches a terminal outcome.

        Args:
            on_turn: Called with every turn's report.
            max_turns: Optional cap; reaching it counts as stuck.

        Returns:
            The terminal outcome.
        """
        while True:
            report = self.play_turn()
            if report.result is None and max_turns is not None and self.turns >= max_turns:
                report.result = GameResult.STUCK
            if on_turn is not None:
                on_turn(report)
            if report.result is not None:
                logger.info(
                    "Game finished with %s after %d turns and %d guesses",
                    report.result.name,
                    self.turns,
                    self.guesses,
                )
                return report.result

"""
Constraint (range) type for the solver.

A constraint pairs a set of covered cells with the number of mines known
to lie among them. Constraints are rebuilt from the board on every pass
and never outlive it.
"""
import math
from dataclasses import dataclass
from typing import FrozenSet, Iterable, List, Tuple

from game import Board


Position = Tuple[int, int]


class UnrevealedAnchorError(ValueError):
    """Raised when a constraint is requested around an unrevealed cell."""


# ============================================================================
# Constraint Types
# ============================================================================

@dataclass(frozen=True)
class Constraint:
    """
    A constraint representing: sum of mines over 'cells' == mine_count.

    For example, if a revealed "2" has 3 hidden neighbors and 0 flagged,
    the constraint is: cells={A, B, C}, mine_count=2
    """

    cells: FrozenSet[Position]
    mine_count: int

    def __post_init__(self) -> None:
        if not 0 <= self.mine_count <= len(self.cells):
            raise ValueError(
                f"Constraint has {self.mine_count} mines over "
                f"{len(self.cells)} cells"
            )

    @property
    def size(self) -> int:
        return len(self.cells)

    @property
    def is_empty(self) -> bool:
        return not self.cells

    @property
    def is_saturated(self) -> bool:
        """Every cell is a mine."""
        return bool(self.cells) and self.mine_count == len(self.cells)

    @property
    def is_clear(self) -> bool:
        """No cell is a mine."""
        return bool(self.cells) and self.mine_count == 0

    @property
    def probability(self) -> float:
        """Mine density of the set; infinite when the set is empty."""
        if not self.cells:
            return math.inf
        return self.mine_count / len(self.cells)

    def overlaps(self, other: "Constraint") -> bool:
        """Check whether the smaller of the two sets lies inside the larger."""
        shared = len(self.cells & other.cells)
        return shared >= min(len(self.cells), len(other.cells))

    def difference(self, other: "Constraint") -> "Constraint":
        """
        Remove a contained constraint from this one.

        Only sound when ``other.cells`` is a subset of ``self.cells``;
        the remaining cells hold the remaining mines.
        """
        if not other.cells <= self.cells:
            raise ValueError("Difference requires a contained constraint")
        return Constraint(
            cells=self.cells - other.cells,
            mine_count=self.mine_count - other.mine_count,
        )

    @staticmethod
    def fuse(constraints: Iterable["Constraint"]) -> "FusedConstraint":
        """
        Intersect constraints, keeping only the cells common to all.

        The mine count of the intersection is approximated by the smallest
        count in the group: no subset can hold more mines than any set
        containing it, but it may hold fewer. The count is kept as is even
        when it exceeds the number of shared cells.
        """
        constraints = list(constraints)
        if not constraints:
            return FusedConstraint(frozenset(), 0)

        cells = constraints[0].cells
        for constraint in constraints[1:]:
            cells = cells & constraint.cells
        mine_count = min(constraint.mine_count for constraint in constraints)
        return FusedConstraint(cells, mine_count)

    def sorted_cells(self) -> List[Position]:
        """Cells in row-major order."""
        return sorted(self.cells)


@dataclass(frozen=True)
class FusedConstraint(Constraint):
    """
    Intersection of a group of nested constraints.

    ``mine_count`` is the smallest count in the group, an upper bound on
    the mines among ``cells``. It may exceed the number of cells, in which
    case the intersection is not saturated.
    """

    def __post_init__(self) -> None:
        if self.mine_count < 0:
            raise ValueError(f"Constraint has {self.mine_count} mines")


# ============================================================================
# Construction
# ============================================================================

def build_constraint(
    board: Board, row: int, col: int, include_flagged: bool = False
) -> Constraint:
    """
    Build the constraint around a revealed anchor cell.

    Covers the anchor's in-bounds, unrevealed neighbors, optionally
    keeping flagged ones. The mine count is the number of mines among
    those neighbors; since a revealed cell is never a mine this equals
    the anchor's hint when flags are included.

    Args:
        board: Board to read.
        row: Anchor row.
        col: Anchor column.
        include_flagged: Keep flagged neighbors in the set.

    Raises:
        UnrevealedAnchorError: If the anchor is not revealed.
    """
    anchor = board.cell(row, col)
    if not anchor.is_revealed:
        raise UnrevealedAnchorError(
            f"Attempted to build a constraint around unrevealed cell {(row, col)}"
        )

    cells = set()
    mine_count = 0
    for neighbor_row, neighbor_col in board.neighbors(row, col):
        neighbor = board.cell(neighbor_row, neighbor_col)
        if neighbor.is_revealed:
            continue
        if neighbor.is_flagged and not include_flagged:
            continue
        cells.add((neighbor_row, neighbor_col))
        if neighbor.is_mine:
            mine_count += 1

    return Constraint(frozenset(cells), mine_count)

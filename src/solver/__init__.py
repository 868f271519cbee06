"""
Minesweeper solver module.

Provides the constraint (range) type and the deduction engine:
- Local deduction: reveal around anchors whose flags explain their hint
- Certain ranges: flag neighborhoods made entirely of mines
- Fusion: intersect nested neighborhoods and check what is left over
- Guessing: uniform pick inside the lowest-density fused region
"""
from .constraint import (
    Constraint,
    FusedConstraint,
    UnrevealedAnchorError,
    build_constraint,
)
from .engine import GameResult, Solver, TurnReport

__all__ = [
    "Constraint",
    "FusedConstraint",
    "UnrevealedAnchorError",
    "build_constraint",
    "GameResult",
    "Solver",
    "TurnReport",
]

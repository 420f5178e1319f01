"""Shared constants for the polyomino covering solver."""

from __future__ import annotations

import sys


MAX_DIM: int = 16

BLOCKED_SYMBOL = "#"
OPEN_SYMBOL = "."
FILLED_SYMBOL = BLOCKED_SYMBOL
EMPTY_SYMBOL = OPEN_SYMBOL
OVERLAP_SYMBOL = "*"

# Penalty reported for a board that still has an uncovered cell.
INFEASIBLE: int = sys.maxsize


def is_infeasible(penalty: int) -> bool:
    return penalty == INFEASIBLE

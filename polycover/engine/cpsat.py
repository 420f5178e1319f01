"""CP-SAT minimum-penalty model used to cross-check the search.

Every full covering has ``penalty == sum(cells placed) - open cells``, so the
model only needs to minimize the number of placed cells subject to every open
cell being covered and each original piece being used at most once.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

from ortools.sat.python import cp_model

from ..core.exceptions import CrossCheckError
from ..core.models import Placement, Position
from ..utils.logger import get_logger
from .board import Board
from .piece import Piece
from .search import candidate_positions


LOGGER = get_logger(__name__)


@dataclass
class CrossCheckConfig:
    time_limit_seconds: float = 30.0
    num_workers: int = 4
    flush_edge_positions: bool = False


@dataclass
class CrossCheckResult:
    penalty: int
    placements: List[Placement]
    status: str


def solve_min_penalty(
    board: Board,
    rotation_sets: Sequence[Sequence[Piece]],
    config: Optional[CrossCheckConfig] = None,
) -> Optional[CrossCheckResult]:
    """Find the optimal penalty with OR-Tools.

    Args:
        board: Board in its initial state; it is not modified.
        rotation_sets: Distinct rotations per original piece.
        config: Solver limits and the edge-position switch.

    Returns:
        The optimal covering, or None when no covering exists.
    """
    config = config or CrossCheckConfig()
    model = cp_model.CpModel()

    # ------------------------------------------------------------------
    # Step 1: One boolean per (piece, variant, position)
    # ------------------------------------------------------------------
    choices: List[Tuple[cp_model.IntVar, int, Piece, Position]] = []
    covering: Dict[Tuple[int, int], List[cp_model.IntVar]] = {
        (p.row, p.col): [] for p in board.open_cells()
    }
    for index, variants in enumerate(rotation_sets):
        per_piece = []
        for variant_index, variant in enumerate(variants):
            for position in candidate_positions(board, variant, config.flush_edge_positions):
                var = model.new_bool_var(
                    f"x_{index}_{variant_index}_{position.row}_{position.col}"
                )
                choices.append((var, index, variant, position))
                per_piece.append(var)
                for dy, dx in variant.offsets:
                    cell = (position.row + dy, position.col + dx)
                    if cell in covering:
                        covering[cell].append(var)
        if per_piece:
            model.add_at_most_one(per_piece)

    # ------------------------------------------------------------------
    # Step 2: Every open cell covered at least once
    # ------------------------------------------------------------------
    for (row, col), cover in covering.items():
        if not cover:
            LOGGER.info("CP-SAT: open cell (%d,%d) cannot be reached by any piece", row, col)
            return None
        model.add_bool_or(cover)

    # ------------------------------------------------------------------
    # Step 3: Minimize placed cells
    # ------------------------------------------------------------------
    if choices:
        model.minimize(sum(var * variant.cell_count for var, _, variant, _ in choices))

    solver = cp_model.CpSolver()
    solver.parameters.max_time_in_seconds = config.time_limit_seconds
    solver.parameters.num_workers = config.num_workers

    LOGGER.info(
        "CP-SAT: %d placement vars over %d open cells, solving (timeout=%0.1fs)...",
        len(choices),
        len(covering),
        config.time_limit_seconds,
    )
    status = solver.solve(model)
    status_name = solver.status_name(status)

    if status == cp_model.INFEASIBLE:
        LOGGER.info("CP-SAT: no covering exists")
        return None
    if status != cp_model.OPTIMAL:
        raise CrossCheckError(f"CP-SAT ended with status {status_name}")

    LOGGER.info("CP-SAT: optimum found in %.2fs", solver.wall_time)

    # ------------------------------------------------------------------
    # Step 4: Extract and replay
    # ------------------------------------------------------------------
    placements = [
        Placement(index, variant, position)
        for var, index, variant, position in choices
        if solver.value(var)
    ]
    replayed = board.copy()
    for placement in placements:
        replayed.place(placement.variant, placement.position)
    return CrossCheckResult(penalty=replayed.penalty(), placements=placements, status=status_name)

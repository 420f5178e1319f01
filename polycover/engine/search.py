"""Branch-and-bound search for the covering with the fewest overlaps.

The engine decides one original piece per recursion level. For every
rotation variant of that piece it first explores leaving the piece unused and
then every position where the variant fits, recursing only while the running
overlap penalty can still match the best full covering found so far. Board,
solution stack and penalty live in a single :class:`SearchState` that is
mutated in place and restored after every probe.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from ..core.constants import INFEASIBLE, is_infeasible
from ..core.exceptions import InfeasibleBoardError
from ..core.models import Placement, Position, SearchStats
from ..utils.logger import get_logger
from .board import Board
from .piece import Piece, pieces_with_rotations


LOGGER = get_logger(__name__)


@dataclass
class SearchConfig:
    """Knobs that change which branches the search walks."""

    # The position loops stop one short of the bottom/right flush index
    # unless this is set.
    flush_edge_positions: bool = False
    # Skip subtrees whose remaining pieces hold fewer cells than there are
    # open cells. Those subtrees only contain infeasible leaves.
    prune_uncoverable: bool = True


@dataclass
class SearchState:
    board: Board
    solution: List[Placement] = field(default_factory=list)
    current_penalty: int = 0
    open_cells: int = 0


@dataclass
class SearchResult:
    min_penalty: int
    best_solution: Optional[List[Placement]]
    rotation_sets: List[List[Piece]]
    stats: SearchStats

    @property
    def feasible(self) -> bool:
        return self.best_solution is not None and not is_infeasible(self.min_penalty)

    def require_solution(self) -> List[Placement]:
        """Return the best solution or fail when nothing covered the board."""

        if self.best_solution is None:
            raise InfeasibleBoardError(
                f"No covering assignment exists for {len(self.rotation_sets)} piece(s)"
            )
        return self.best_solution

    def used_placements(self) -> List[Placement]:
        return [entry for entry in self.require_solution() if entry.is_used]


def position_range(size: int, variant: Piece, flush_edge_positions: bool = False) -> Tuple[int, int]:
    """Row and column counts walked for ``variant`` on a ``size`` grid."""

    extra = 1 if flush_edge_positions else 0
    return (
        max(0, size - variant.height + extra),
        max(0, size - variant.width + extra),
    )


def candidate_positions(
    board: Board, variant: Piece, flush_edge_positions: bool = False
) -> List[Position]:
    """Row-major positions where some filled cell lands on an open cell.

    Covered or blocked cells never reopen while descending, so any other
    position could never pass the open-cell test and is left out.
    """

    rows, cols = position_range(board.size, variant, flush_edge_positions)
    cells = board.cells
    positions: List[Position] = []
    for row in range(rows):
        for col in range(cols):
            if any(cells[row + dy][col + dx] == 0 for dy, dx in variant.offsets):
                positions.append(Position(row, col))
    return positions


class BranchAndBoundSearch:
    """Exhaustive search with penalty pruning over a fixed piece list."""

    def __init__(
        self,
        board: Board,
        pieces: Sequence[Piece],
        config: Optional[SearchConfig] = None,
    ) -> None:
        self.config = config or SearchConfig()
        self.board = board
        self.rotation_sets = pieces_with_rotations(pieces)
        self._candidates = [
            [self.candidate_positions(variant) for variant in variants]
            for variants in self.rotation_sets
        ]
        # Cells still available from piece ``depth`` onwards.
        self._remaining_cells = [0] * (len(self.rotation_sets) + 1)
        for depth in range(len(self.rotation_sets) - 1, -1, -1):
            largest = max((v.cell_count for v in self.rotation_sets[depth]), default=0)
            self._remaining_cells[depth] = self._remaining_cells[depth + 1] + largest
        self.min_penalty = INFEASIBLE
        self.best_solution: Optional[List[Placement]] = None
        self.stats = SearchStats()

    def candidate_positions(self, variant: Piece) -> List[Position]:
        return candidate_positions(self.board, variant, self.config.flush_edge_positions)

    # ------------------------------------------------------------------
    # Search
    # ------------------------------------------------------------------
    def run(self) -> SearchResult:
        state = SearchState(board=self.board.copy(), open_cells=self.board.open_count())
        LOGGER.info(
            "Searching %d piece(s) with %s variant(s) over %d open cell(s)",
            len(self.rotation_sets),
            [len(variants) for variants in self.rotation_sets],
            state.open_cells,
        )
        LOGGER.debug(
            "Candidate positions per variant: %s",
            [[len(positions) for positions in per_piece] for per_piece in self._candidates],
        )
        started = time.perf_counter()
        self._advance(state)
        self.stats.elapsed_seconds = time.perf_counter() - started

        if self.best_solution is None:
            LOGGER.warning(
                "Search finished without a full covering after %d nodes", self.stats.nodes
            )
        else:
            LOGGER.info(
                "Search finished: penalty %d, %d nodes, %d leaves in %.2fs",
                self.min_penalty,
                self.stats.nodes,
                self.stats.leaves,
                self.stats.elapsed_seconds,
            )
        return SearchResult(
            min_penalty=self.min_penalty,
            best_solution=self.best_solution,
            rotation_sets=self.rotation_sets,
            stats=self.stats,
        )

    def _advance(self, state: SearchState) -> None:
        self.stats.nodes += 1
        depth = len(state.solution)
        if depth == len(self.rotation_sets):
            self._test_solution(state)
            return
        if self.config.prune_uncoverable and state.open_cells > self._remaining_cells[depth]:
            self.stats.pruned_uncoverable += 1
            return

        board = state.board
        for variant, positions in zip(self.rotation_sets[depth], self._candidates[depth]):
            state.solution.append(Placement(depth, variant, None))
            try:
                self._advance(state)
            finally:
                state.solution.pop()

            for position in positions:
                touched_open, added = board.place(variant, position)
                state.current_penalty += added
                try:
                    if not touched_open:
                        continue
                    if state.current_penalty > self.min_penalty:
                        self.stats.pruned_penalty += 1
                        continue
                    covered = variant.cell_count - added
                    state.solution.append(Placement(depth, variant, position))
                    state.open_cells -= covered
                    try:
                        self._advance(state)
                    finally:
                        state.open_cells += covered
                        state.solution.pop()
                finally:
                    state.current_penalty -= added
                    board.place(variant, position, negate=True)

    def _test_solution(self, state: SearchState) -> None:
        self.stats.leaves += 1
        # Recomputed from the board rather than trusting the running counter.
        total = state.board.penalty()
        if total < self.min_penalty:
            self.min_penalty = total
            self.best_solution = list(state.solution)
            self.stats.improvements += 1
            LOGGER.debug(
                "New best penalty %d after %d nodes (running counter %d)",
                total,
                self.stats.nodes,
                state.current_penalty,
            )


def solve(
    board: Board,
    pieces: Sequence[Piece],
    config: Optional[SearchConfig] = None,
) -> SearchResult:
    """Run the branch-and-bound search on a copy of ``board``."""

    return BranchAndBoundSearch(board, pieces, config).run()

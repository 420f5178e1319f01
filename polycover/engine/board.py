"""Board representation with reversible placement bookkeeping."""

from __future__ import annotations

from typing import List, Tuple

from ..core.constants import BLOCKED_SYMBOL, INFEASIBLE, MAX_DIM, OPEN_SYMBOL
from ..core.exceptions import BoardFormatError, PlacementError
from ..core.models import Position
from ..utils.logger import get_logger
from .piece import Piece


LOGGER = get_logger(__name__)


class Board:
    """Square grid of coverage counts.

    ``0`` is an open cell, ``1`` is blocked or covered once and larger values
    are overlaps. Cells outside the parsed text stay blocked for good.
    """

    def __init__(self, size: int = MAX_DIM) -> None:
        self.size = size
        self.cells: List[List[int]] = [[1] * size for _ in range(size)]
        self.rows = 0
        self.cols = 0

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------
    @classmethod
    def parse(cls, text: str, size: int = MAX_DIM) -> "Board":
        """Build a board from ``#`` (blocked) and ``.`` (open) rows."""

        board = cls(size)
        for y, line in enumerate(text.splitlines()):
            if y >= size or len(line) > size:
                raise BoardFormatError(
                    f"Board row {y} exceeds grid dimension {size}"
                )
            for x, symbol in enumerate(line):
                if symbol == OPEN_SYMBOL:
                    board.cells[y][x] = 0
                elif symbol != BLOCKED_SYMBOL:
                    raise BoardFormatError(
                        f"Board symbol unknown: {symbol!r} at row {y}, column {x}"
                    )
            board.rows = y + 1
            board.cols = max(board.cols, len(line))
        LOGGER.debug(
            "Parsed %dx%d board with %d open cells", board.rows, board.cols, board.open_count()
        )
        return board

    def copy(self) -> "Board":
        clone = Board(self.size)
        clone.cells = [list(row) for row in self.cells]
        clone.rows = self.rows
        clone.cols = self.cols
        return clone

    # ------------------------------------------------------------------
    # Placement
    # ------------------------------------------------------------------
    def fits(self, piece: Piece, position: Position) -> bool:
        return (
            position.row >= 0
            and position.col >= 0
            and position.row + piece.height <= self.size
            and position.col + piece.width <= self.size
        )

    def place(self, piece: Piece, position: Position, negate: bool = False) -> Tuple[bool, int]:
        """Add (or with ``negate`` subtract) the piece at ``position``.

        Returns whether any filled cell landed on an open cell, and how many
        filled cells landed on cells that were already non-zero. A negated
        call with the same arguments restores the board exactly.
        """

        if not self.fits(piece, position):
            raise PlacementError(
                f"{piece.height}x{piece.width} piece at ({position.row},{position.col}) "
                f"leaves the {self.size}x{self.size} grid"
            )
        step = -1 if negate else 1
        cells = self.cells
        touched_open = False
        overlap = 0
        for dy, dx in piece.offsets:
            line = cells[position.row + dy]
            col = position.col + dx
            if line[col] == 0:
                touched_open = True
            else:
                overlap += 1
            line[col] += step
        return touched_open, overlap

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def cell(self, row: int, col: int) -> int:
        return self.cells[row][col]

    def penalty(self) -> int:
        """Total excess coverage, or ``INFEASIBLE`` while any cell is open."""

        total = 0
        for line in self.cells:
            for value in line:
                if value == 0:
                    return INFEASIBLE
                total += value - 1
        return total

    def open_cells(self) -> List[Position]:
        return [
            Position(row, col)
            for row in range(self.size)
            for col in range(self.size)
            if self.cells[row][col] == 0
        ]

    def open_count(self) -> int:
        return sum(line.count(0) for line in self.cells)

    def to_text(self) -> str:
        return "\n".join(
            "".join(BLOCKED_SYMBOL if value > 0 else OPEN_SYMBOL for value in line)
            for line in self.cells
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self.size == other.size and self.cells == other.cells

    def __repr__(self) -> str:
        return f"Board(size={self.size}, open={self.open_count()})"

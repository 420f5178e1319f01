"""Pretty-print helpers for boards and solutions."""

from __future__ import annotations

import string
import sys
from typing import TYPE_CHECKING, Any, Dict, List, Sequence

from ..core.constants import (
    EMPTY_SYMBOL,
    FILLED_SYMBOL,
    MAX_DIM,
    OVERLAP_SYMBOL,
    is_infeasible,
)

if TYPE_CHECKING:
    from ..core.models import Placement, Position
    from ..engine.board import Board
    from ..engine.piece import Piece
    from ..engine.search import SearchResult


def render(piece: Piece, position: Position, size: int = MAX_DIM) -> str:
    """Full ``size x size`` grid with ``#`` where the placed piece sits."""

    lines = []
    for y in range(size):
        row = []
        for x in range(size):
            dy, dx = y - position.row, x - position.col
            inside = 0 <= dy < piece.height and 0 <= dx < piece.width
            row.append(FILLED_SYMBOL if inside and piece.cells[dy][dx] > 0 else EMPTY_SYMBOL)
        lines.append("".join(row))
    return "\n".join(lines) + "\n"


def format_board(board: Board) -> str:
    return board.to_text() + "\n"


def format_coverage(board: Board) -> str:
    """Per-cell coverage counts; counts above 9 show as ``+``."""

    return "\n".join(
        "".join(str(value) if 0 <= value <= 9 else "+" for value in line)
        for line in board.cells
    )


def format_overlay(board: Board, placements: Sequence[Placement]) -> str:
    """Original board with one letter per used piece and ``*`` on overlaps."""

    grid = [
        [FILLED_SYMBOL if value > 0 else EMPTY_SYMBOL for value in line]
        for line in board.cells
    ]
    letters = string.ascii_uppercase
    for placement in placements:
        if placement.position is None:
            continue
        letter = letters[placement.piece_index % len(letters)]
        for dy, dx in placement.variant.offsets:
            row, col = placement.position.row + dy, placement.position.col + dx
            grid[row][col] = letter if grid[row][col] == EMPTY_SYMBOL else OVERLAP_SYMBOL
    return "\n".join("".join(line) for line in grid)


def print_report(result: SearchResult, board: Board, *, stream=None) -> None:
    """Print the penalty, the original board and every used placement."""

    stream = stream or sys.stdout
    print(f"Minimal penalty: {result.min_penalty}", file=stream)
    print("Board:", file=stream)
    print(format_board(board), file=stream)
    print("Pieces:", file=stream)
    for placement in result.used_placements():
        print(render(placement.variant, placement.position, board.size), file=stream)


def result_to_jsonable(result: SearchResult, board: Board) -> Dict[str, Any]:
    placements: List[Dict[str, Any]] = []
    if result.best_solution is not None:
        for entry in result.best_solution:
            placements.append(
                {
                    "piece": entry.piece_index,
                    "used": entry.is_used,
                    "row": entry.position.row if entry.position else None,
                    "col": entry.position.col if entry.position else None,
                    "shape": entry.variant.shape_rows(),
                }
            )
    return {
        "min_penalty": None if is_infeasible(result.min_penalty) else result.min_penalty,
        "feasible": result.feasible,
        "board": board.to_text().splitlines(),
        "placements": placements,
        "stats": result.stats.as_dict(),
    }

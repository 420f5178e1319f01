"""Replay checks for a reported best solution."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List

from ..core.exceptions import PlacementError, ValidationError
from ..utils.logger import get_logger
from .board import Board
from .search import SearchResult


LOGGER = get_logger(__name__)


@dataclass
class ValidationResult:
    ok: bool
    messages: List[str]


class SolutionValidator:
    """Replays the best solution on a fresh board and checks its claims."""

    def __init__(self, strict: bool = False) -> None:
        self.strict = strict

    def validate(self, board: Board, result: SearchResult) -> ValidationResult:
        try:
            self._check_shape(result)
            replayed = self._replay(board, result)
            self._check_coverage(board, replayed)
            self._check_penalty(replayed, result)
        except ValidationError as exc:
            LOGGER.error("Validation failed: %s", exc)
            if self.strict:
                raise
            return ValidationResult(ok=False, messages=[str(exc)])
        return ValidationResult(ok=True, messages=[])

    def _check_shape(self, result: SearchResult) -> None:
        if result.best_solution is None:
            raise ValidationError("No solution to validate")
        if len(result.best_solution) != len(result.rotation_sets):
            raise ValidationError(
                f"Solution has {len(result.best_solution)} entries for "
                f"{len(result.rotation_sets)} piece(s)"
            )
        for index, entry in enumerate(result.best_solution):
            if entry.piece_index != index:
                raise ValidationError(f"Entry {index} refers to piece {entry.piece_index}")
            if entry.variant not in result.rotation_sets[index]:
                raise ValidationError(f"Entry {index} uses a shape that is not a rotation of piece {index}")

    @staticmethod
    def _replay(board: Board, result: SearchResult) -> Board:
        replayed = board.copy()
        for entry in result.used_placements():
            try:
                replayed.place(entry.variant, entry.position)
            except PlacementError as exc:
                raise ValidationError(f"Piece {entry.piece_index}: {exc}") from exc
        return replayed

    @staticmethod
    def _check_coverage(board: Board, replayed: Board) -> None:
        for position in board.open_cells():
            if replayed.cell(position.row, position.col) == 0:
                raise ValidationError(
                    f"Open cell ({position.row},{position.col}) is left uncovered"
                )

    @staticmethod
    def _check_penalty(replayed: Board, result: SearchResult) -> None:
        actual = replayed.penalty()
        if actual != result.min_penalty:
            raise ValidationError(
                f"Reported penalty {result.min_penalty} but replay gives {actual}"
            )

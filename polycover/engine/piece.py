"""Polyomino shapes and their rotation variants."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Tuple

from ..core.constants import EMPTY_SYMBOL, FILLED_SYMBOL, MAX_DIM
from ..core.exceptions import PieceFormatError
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)

Offsets = Tuple[Tuple[int, int], ...]


@dataclass(frozen=True, order=True)
class Piece:
    """A shape stored in the top-left ``height x width`` corner of a square grid.

    Ordering compares the whole grid first, then width, then height, so a
    sorted set of variants has a stable order independent of insertion.
    """

    cells: Tuple[Tuple[int, ...], ...] = field(repr=False)
    width: int
    height: int
    _offsets: Offsets = field(default=(), init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        offsets = tuple(
            (y, x)
            for y in range(self.height)
            for x in range(self.width)
            if self.cells[y][x] > 0
        )
        object.__setattr__(self, "_offsets", offsets)

    @classmethod
    def parse(cls, text: str, size: int = MAX_DIM) -> "Piece":
        """Build a piece from ``#`` (filled) and ``.`` (empty) rows."""

        grid = [[0] * size for _ in range(size)]
        width = height = 1
        for y, line in enumerate(text.splitlines()):
            for x, symbol in enumerate(line):
                width = max(width, x + 1)
                height = max(height, y + 1)
                if symbol == FILLED_SYMBOL:
                    if y >= size or x >= size:
                        raise PieceFormatError(
                            f"Piece cell ({y},{x}) exceeds grid dimension {size}"
                        )
                    grid[y][x] = 1
                elif symbol != EMPTY_SYMBOL:
                    raise PieceFormatError(
                        f"Piece symbol unknown: {symbol!r} at row {y}, column {x}"
                    )
        if width > size or height > size:
            raise PieceFormatError(
                f"Piece of {height}x{width} exceeds grid dimension {size}"
            )
        return cls(cells=_freeze(grid), width=width, height=height)

    @property
    def size(self) -> int:
        return len(self.cells)

    @property
    def offsets(self) -> Offsets:
        """``(dy, dx)`` of every filled cell, row-major."""
        return self._offsets

    @property
    def cell_count(self) -> int:
        return len(self._offsets)

    def rotate(self) -> "Piece":
        """Return the shape turned a quarter turn with width and height swapped."""

        grid = [[0] * self.size for _ in range(self.size)]
        for y in range(self.width):
            for x in range(self.height):
                grid[y][x] = self.cells[self.height - 1 - x][y]
        return Piece(cells=_freeze(grid), width=self.height, height=self.width)

    def shape_rows(self) -> List[str]:
        return [
            "".join(FILLED_SYMBOL if self.cells[y][x] > 0 else EMPTY_SYMBOL for x in range(self.width))
            for y in range(self.height)
        ]

    def to_text(self) -> str:
        return "\n".join(self.shape_rows())


def _freeze(grid: List[List[int]]) -> Tuple[Tuple[int, ...], ...]:
    return tuple(tuple(row) for row in grid)


def pieces_with_rotations(pieces: Iterable[Piece]) -> List[List[Piece]]:
    """Return the distinct rotations of every piece, each list in sorted order."""

    result: List[List[Piece]] = []
    for index, piece in enumerate(pieces):
        variants = set()
        current = piece
        for _ in range(4):
            variants.add(current)
            current = current.rotate()
        ordered = sorted(variants)
        LOGGER.debug("Piece %d has %d distinct rotation(s)", index, len(ordered))
        result.append(ordered)
    return result

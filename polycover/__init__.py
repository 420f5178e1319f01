"""Polyomino covering solver with minimum-overlap penalty.

This package exposes the public API surface via:

- ``polycover.engine.board.Board``: the fixed-size occupancy grid.
- ``polycover.engine.piece.Piece`` and ``pieces_with_rotations``: shapes and
  their distinct rotations.
- ``polycover.engine.search.solve``: branch-and-bound search for the covering
  with the fewest double-covered cells.
"""

from .engine.board import Board
from .engine.piece import Piece, pieces_with_rotations
from .engine.search import BranchAndBoundSearch, SearchConfig, SearchResult, solve

__all__ = [
    "Board",
    "Piece",
    "pieces_with_rotations",
    "BranchAndBoundSearch",
    "SearchConfig",
    "SearchResult",
    "solve",
]

__version__ = "0.1.0"

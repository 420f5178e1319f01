"""Data models shared by the search engine and its helpers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from ..engine.piece import Piece


@dataclass(frozen=True)
class Position:
    """Board cell receiving a piece's own top-left cell."""

    row: int
    col: int


@dataclass(frozen=True)
class Placement:
    """One solution entry: the chosen rotation variant and where it went.

    ``position`` is ``None`` when the piece is left unused.
    """

    piece_index: int
    variant: Piece
    position: Optional[Position] = None

    @property
    def is_used(self) -> bool:
        return self.position is not None


@dataclass
class SearchStats:
    nodes: int = 0
    leaves: int = 0
    improvements: int = 0
    pruned_penalty: int = 0
    pruned_uncoverable: int = 0
    elapsed_seconds: float = 0.0

    def as_dict(self) -> dict:
        return {
            "nodes": self.nodes,
            "leaves": self.leaves,
            "improvements": self.improvements,
            "pruned_penalty": self.pruned_penalty,
            "pruned_uncoverable": self.pruned_uncoverable,
            "elapsed_seconds": round(self.elapsed_seconds, 3),
        }

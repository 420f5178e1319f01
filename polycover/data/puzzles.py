"""Built-in puzzle and the puzzle text file loader."""

from __future__ import annotations

import textwrap
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Tuple

from ..core.constants import MAX_DIM
from ..core.exceptions import PuzzleFormatError
from ..engine.board import Board
from ..engine.piece import Piece
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)

COMMENT_PREFIX = ";"

DEFAULT_BOARD = textwrap.dedent(
    """\
    ##########.#
    #....####..#
    #.#....###.#
    ############
    """
)

DEFAULT_PIECES = [
    textwrap.dedent(
        """\
        ###
        .#.
        """
    ),
    textwrap.dedent(
        """\
        ##
        ##
        """
    ),
    "####\n",
    "###\n",
]


@dataclass
class Puzzle:
    board_text: str
    piece_texts: List[str] = field(default_factory=list)

    def build(self, size: int = MAX_DIM) -> Tuple[Board, List[Piece]]:
        board = Board.parse(self.board_text, size)
        pieces = [Piece.parse(text, size) for text in self.piece_texts]
        return board, pieces


def default_puzzle() -> Puzzle:
    return Puzzle(board_text=DEFAULT_BOARD, piece_texts=list(DEFAULT_PIECES))


def parse_puzzle(text: str) -> Puzzle:
    """Split blank-line separated blocks: the board first, then one per piece."""

    blocks: List[List[str]] = []
    current: List[str] = []
    for line in text.splitlines():
        line = line.rstrip()
        if line.startswith(COMMENT_PREFIX):
            continue
        if not line:
            if current:
                blocks.append(current)
                current = []
            continue
        current.append(line)
    if current:
        blocks.append(current)

    if len(blocks) < 2:
        raise PuzzleFormatError(
            f"Puzzle needs a board block and at least one piece block, found {len(blocks)} block(s)"
        )
    return Puzzle(
        board_text="\n".join(blocks[0]),
        piece_texts=["\n".join(block) for block in blocks[1:]],
    )


def load_puzzle(path: Path | str) -> Puzzle:
    source = Path(path)
    puzzle = parse_puzzle(source.read_text(encoding="utf-8"))
    LOGGER.info("Loaded puzzle from %s with %d piece(s)", source, len(puzzle.piece_texts))
    return puzzle

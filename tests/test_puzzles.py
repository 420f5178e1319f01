import tempfile
import unittest
from pathlib import Path

from polycover.core.exceptions import BoardFormatError, PieceFormatError, PuzzleFormatError
from polycover.data.puzzles import Puzzle, default_puzzle, load_puzzle, parse_puzzle


class PuzzleTests(unittest.TestCase):
    def test_default_puzzle_builds(self) -> None:
        board, pieces = default_puzzle().build()
        self.assertEqual(board.open_count(), 13)
        self.assertEqual([p.shape_rows() for p in pieces], [["###", ".#."], ["##", "##"], ["####"], ["###"]])

    def test_parse_splits_blocks_and_skips_comments(self) -> None:
        puzzle = parse_puzzle(
            "; two by two\n"
            "..\n"
            "..\n"
            "\n"
            "##\n"
            "\n"
            "\n"
            "; second piece\n"
            "#\n"
            "#\n"
        )
        self.assertEqual(puzzle.board_text, "..\n..")
        self.assertEqual(puzzle.piece_texts, ["##", "#\n#"])

    def test_parse_requires_a_piece_block(self) -> None:
        with self.assertRaises(PuzzleFormatError):
            parse_puzzle("..\n..\n")

    def test_build_reports_bad_symbols(self) -> None:
        with self.assertRaises(BoardFormatError):
            Puzzle(board_text="..o", piece_texts=["#"]).build()
        with self.assertRaises(PieceFormatError):
            Puzzle(board_text="...", piece_texts=["#o"]).build()

    def test_load_puzzle_reads_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "puzzle.txt"
            path.write_text("...\n\n###\n", encoding="utf-8")
            puzzle = load_puzzle(path)
            board, pieces = puzzle.build(size=4)
        self.assertEqual(board.open_count(), 3)
        self.assertEqual(len(pieces), 1)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()

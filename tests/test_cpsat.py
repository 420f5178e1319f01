import unittest
from unittest import mock

from ortools.sat.python import cp_model

from polycover.core.exceptions import CrossCheckError
from polycover.data.puzzles import default_puzzle
from polycover.engine.board import Board
from polycover.engine.cpsat import CrossCheckConfig, solve_min_penalty
from polycover.engine.piece import Piece, pieces_with_rotations
from polycover.engine.search import SearchConfig, solve


class CrossCheckTests(unittest.TestCase):
    def assert_agrees(self, board, pieces, flush: bool = False) -> None:
        result = solve(board, pieces, SearchConfig(flush_edge_positions=flush))
        check = solve_min_penalty(
            board,
            result.rotation_sets,
            CrossCheckConfig(time_limit_seconds=20.0, flush_edge_positions=flush),
        )
        self.assertIsNotNone(check)
        assert check is not None
        self.assertEqual(check.penalty, result.min_penalty)
        self.assertEqual(check.status, "OPTIMAL")

    def test_default_puzzle_optimum_matches_search(self) -> None:
        board, pieces = default_puzzle().build()
        self.assert_agrees(board, pieces)

    def test_ring_optimum_matches_search(self) -> None:
        board = Board.parse("...\n.#.\n...", size=5)
        pieces = [Piece.parse(t, size=5) for t in ("###", "###", "##", "#\n#")]
        self.assert_agrees(board, pieces)

    def test_flush_edges_optimum_matches_search(self) -> None:
        board = Board.parse("...\n...\n...", size=3)
        pieces = [Piece.parse(t, size=3) for t in ("###", "#.\n##", "##", "#")]
        self.assert_agrees(board, pieces, flush=True)

    def test_uses_at_most_one_variant_per_piece(self) -> None:
        board, pieces = default_puzzle().build()
        check = solve_min_penalty(board, pieces_with_rotations(pieces))
        assert check is not None
        indices = [p.piece_index for p in check.placements]
        self.assertEqual(len(indices), len(set(indices)))

    def test_infeasible_board_returns_none(self) -> None:
        board = Board.parse("...", size=4)
        self.assertIsNone(solve_min_penalty(board, pieces_with_rotations([Piece.parse("#")])))

    def test_unreachable_cell_returns_none(self) -> None:
        # The only open cell sits on the flush row, which is never tried.
        board = Board.parse("##\n#.", size=2)
        self.assertIsNone(solve_min_penalty(board, pieces_with_rotations([Piece.parse("#")])))

    def test_unproven_optimum_raises(self) -> None:
        board, pieces = default_puzzle().build()
        with mock.patch("polycover.engine.cpsat.cp_model.CpSolver") as solver_cls:
            solver = solver_cls.return_value
            solver.solve.return_value = cp_model.UNKNOWN
            solver.status_name.return_value = "UNKNOWN"
            with self.assertRaises(CrossCheckError) as ctx:
                solve_min_penalty(board, pieces_with_rotations(pieces))
        self.assertIn("UNKNOWN", str(ctx.exception))


if __name__ == "__main__":  # pragma: no cover
    unittest.main()

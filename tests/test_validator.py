import dataclasses
import unittest

from polycover.core.exceptions import ValidationError
from polycover.core.models import Placement, Position
from polycover.engine.board import Board
from polycover.engine.piece import Piece
from polycover.engine.search import solve
from polycover.engine.validator import SolutionValidator


class ValidatorTests(unittest.TestCase):
    def setUp(self) -> None:
        self.board = Board.parse("...\n.#.\n...", size=5)
        pieces = [Piece.parse(t, size=5) for t in ("###", "###", "##", "#\n#")]
        self.result = solve(self.board, pieces)

    def test_search_result_passes(self) -> None:
        outcome = SolutionValidator().validate(self.board, self.result)
        self.assertTrue(outcome.ok)
        self.assertEqual(outcome.messages, [])

    def test_wrong_penalty_is_reported(self) -> None:
        tampered = dataclasses.replace(self.result, min_penalty=self.result.min_penalty - 1)
        outcome = SolutionValidator().validate(self.board, tampered)
        self.assertFalse(outcome.ok)
        self.assertIn("replay gives", outcome.messages[0])

    def test_uncovered_cell_is_reported(self) -> None:
        solution = list(self.result.best_solution)
        solution[0] = Placement(0, solution[0].variant, None)
        tampered = dataclasses.replace(self.result, best_solution=solution)
        outcome = SolutionValidator().validate(self.board, tampered)
        self.assertFalse(outcome.ok)
        self.assertIn("uncovered", outcome.messages[0])

    def test_foreign_shape_is_reported(self) -> None:
        solution = list(self.result.best_solution)
        solution[0] = Placement(0, Piece.parse("##\n##", size=5), Position(0, 0))
        tampered = dataclasses.replace(self.result, best_solution=solution)
        outcome = SolutionValidator().validate(self.board, tampered)
        self.assertFalse(outcome.ok)

    def test_strict_mode_raises(self) -> None:
        tampered = dataclasses.replace(self.result, best_solution=None)
        with self.assertRaises(ValidationError):
            SolutionValidator(strict=True).validate(self.board, tampered)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()

import unittest

from polycover.core.exceptions import PieceFormatError
from polycover.engine.piece import Piece, pieces_with_rotations


T_SHAPE = "###\n.#.\n"


class PieceParseTests(unittest.TestCase):
    def test_parse_records_dimensions_and_cells(self) -> None:
        piece = Piece.parse(T_SHAPE)
        self.assertEqual((piece.width, piece.height), (3, 2))
        self.assertEqual(piece.offsets, ((0, 0), (0, 1), (0, 2), (1, 1)))
        self.assertEqual(piece.cell_count, 4)
        self.assertEqual(piece.size, 16)

    def test_trailing_empty_cells_count_towards_width(self) -> None:
        piece = Piece.parse(".#.")
        self.assertEqual((piece.width, piece.height), (3, 1))
        self.assertEqual(piece.offsets, ((0, 1),))

    def test_empty_text_gives_unit_empty_piece(self) -> None:
        piece = Piece.parse("")
        self.assertEqual((piece.width, piece.height), (1, 1))
        self.assertEqual(piece.cell_count, 0)

    def test_unknown_symbol_is_rejected(self) -> None:
        with self.assertRaises(PieceFormatError) as ctx:
            Piece.parse("#?#")
        self.assertIn("'?'", str(ctx.exception))

    def test_oversized_piece_is_rejected(self) -> None:
        with self.assertRaises(PieceFormatError):
            Piece.parse("#####", size=4)

    def test_shape_rows_round_trip_text(self) -> None:
        piece = Piece.parse(T_SHAPE)
        self.assertEqual(piece.shape_rows(), ["###", ".#."])
        self.assertEqual(piece.to_text(), "###\n.#.")


class PieceRotationTests(unittest.TestCase):
    def test_rotate_maps_cells_a_quarter_turn(self) -> None:
        rotated = Piece.parse(T_SHAPE).rotate()
        self.assertEqual((rotated.width, rotated.height), (2, 3))
        self.assertEqual(rotated.shape_rows(), [".#", "##", ".#"])

    def test_four_rotations_return_to_original(self) -> None:
        for text in (T_SHAPE, "##\n##", "####", "#.\n##", "##.\n.##\n..#", "#"):
            piece = Piece.parse(text)
            turned = piece.rotate().rotate().rotate().rotate()
            self.assertEqual(turned, piece)

    def test_variant_counts_follow_symmetry(self) -> None:
        texts = ["##\n##", "#.\n##", "####", "###", T_SHAPE, "#", ".#.\n###\n.#."]
        sets = pieces_with_rotations(Piece.parse(t) for t in texts)
        self.assertEqual([len(s) for s in sets], [1, 4, 2, 2, 4, 1, 1])

    def test_variants_are_sorted_by_grid_contents(self) -> None:
        (variants,) = pieces_with_rotations([Piece.parse("####")])
        self.assertEqual([(v.width, v.height) for v in variants], [(1, 4), (4, 1)])
        self.assertEqual(variants, sorted(variants))

    def test_equal_shapes_hash_together(self) -> None:
        a = Piece.parse("#.\n##")
        b = Piece.parse("#.\n##\n")
        self.assertEqual(len({a, b}), 1)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()

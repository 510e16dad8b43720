import random
import unittest

from game import AnimalKind, Board, Cell, CENTER_INDEX, Color, Piece, build_deck, deal_board


class TestDeal(unittest.TestCase):
    def test_given_deck_when_built_then_one_piece_per_color_and_kind(self):
        deck = build_deck()
        self.assertEqual(len(deck), 16)
        pairs = {(p.color, p.kind) for p in deck}
        self.assertEqual(len(pairs), 16)
        self.assertEqual(len({p.id for p in deck}), 16)
        for p in deck:
            self.assertEqual(p.rank, p.kind.rank)

    def test_given_seed_when_dealing_then_fresh_board_layout_valid(self):
        board = deal_board(seed=42)
        self.assertEqual(len(board), 17)
        grid_pairs = set()
        for i in range(16):
            cell = board[i]
            self.assertFalse(cell.revealed)
            self.assertIsNotNone(cell.piece)
            grid_pairs.add((cell.piece.color, cell.piece.kind))
        self.assertEqual(len(grid_pairs), 16)
        center = board[CENTER_INDEX]
        self.assertTrue(center.revealed)
        self.assertIsNone(center.piece)
        self.assertEqual(board.unrevealed_count, 16)

    def test_given_same_seed_or_rng_when_dealing_then_same_deal(self):
        self.assertEqual(deal_board(seed=7), deal_board(seed=7))
        self.assertEqual(deal_board(rng=random.Random(7)), deal_board(seed=7))
        self.assertNotEqual(deal_board(seed=1), deal_board(seed=2))

    def test_given_bad_cells_when_building_board_then_rejected(self):
        rat = Piece('red-RAT-0', AnimalKind.RAT, Color.RED)
        with self.assertRaises(ValueError):
            Board(tuple(Cell(i, None, True) for i in range(16)))
        with self.assertRaises(ValueError):
            Board.empty().place(0, rat).place(1, rat)
        cells = [Cell(i, None, True) for i in range(17)]
        cells[CENTER_INDEX] = Cell(CENTER_INDEX, None, False)
        with self.assertRaises(ValueError):
            Board(tuple(cells))


if __name__ == '__main__':
    unittest.main()

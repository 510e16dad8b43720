import unittest

from game import (
    AnimalKind,
    Board,
    CENTER_INDEX,
    Color,
    Move,
    Piece,
    deal_board,
    find_move,
    is_legal,
    legal_moves,
)


def piece(color, kind, tag=''):
    return Piece(f'{color.value.lower()}-{kind.value}{tag}', kind, color)


def make_board(placements, hidden=()):
    """placements: {index: (color, kind)}; hidden: indices whose card stays face down."""
    board = Board.empty()
    for index, (color, kind) in placements.items():
        board = board.place(index, piece(color, kind, f'-{index}'), revealed=index not in hidden)
    return board


R, B = Color.RED, Color.BLUE


class TestMoveGenerator(unittest.TestCase):
    def test_given_fresh_board_when_listing_moves_then_sixteen_flips_in_index_order(self):
        board = deal_board(seed=3)
        for color in (R, B):
            moves = legal_moves(board, color)
            self.assertEqual(moves, [Move.flip(i) for i in range(16)])

    def test_given_lone_rat_next_to_empty_center_when_listing_then_center_entry_offered(self):
        board = make_board({5: (R, AnimalKind.RAT)})
        moves = legal_moves(board, R)
        self.assertIn(Move.step(5, CENTER_INDEX), moves)
        self.assertEqual([m.dst for m in moves], [1, 9, 4, 6, 16])
        self.assertEqual(legal_moves(board, B), [])

    def test_given_non_rat_next_to_empty_center_when_listing_then_no_center_entry(self):
        for kind in AnimalKind:
            if kind is AnimalKind.RAT:
                continue
            board = make_board({6: (R, kind)})
            dsts = [m.dst for m in legal_moves(board, R)]
            self.assertNotIn(CENTER_INDEX, dsts, kind)

    def test_given_occupied_center_when_listing_then_nobody_enters_or_attacks(self):
        board = make_board({
            CENTER_INDEX: (B, AnimalKind.RAT),
            5: (R, AnimalKind.RAT),
            9: (R, AnimalKind.ELEPHANT),
            10: (R, AnimalKind.CAT),
            6: (B, AnimalKind.RAT),
        })
        for color in (R, B):
            dsts = [m.dst for m in legal_moves(board, color) if m.src != CENTER_INDEX]
            self.assertNotIn(CENTER_INDEX, dsts)
        # The rat inside can still come out and fight.
        self.assertIn(Move.step(CENTER_INDEX, 5), legal_moves(board, B))

    def test_given_elephant_next_to_rat_when_listing_then_only_rat_may_attack(self):
        board = make_board({0: (R, AnimalKind.ELEPHANT), 1: (B, AnimalKind.RAT), 15: (B, AnimalKind.DOG)})
        red_moves = legal_moves(board, R)
        self.assertNotIn(Move.step(0, 1), red_moves)
        self.assertIn(Move.step(0, 4), red_moves)
        self.assertIn(Move.step(1, 0), legal_moves(board, B))

    def test_given_hidden_and_friendly_neighbors_when_listing_then_not_enterable(self):
        board = make_board(
            {0: (R, AnimalKind.LION), 1: (B, AnimalKind.CAT), 4: (R, AnimalKind.DOG)},
            hidden=(1,),
        )
        moves = legal_moves(board, R)
        self.assertIn(Move.flip(1), moves)
        self.assertEqual([m for m in moves if m.src == 0], [])
        self.assertFalse(is_legal(board, R, Move.step(0, 1)))
        self.assertTrue(is_legal(board, R, Move.step(4, 8)))

    def test_given_same_input_when_listing_twice_then_identical_output(self):
        board = make_board({5: (R, AnimalKind.TIGER), 6: (B, AnimalKind.WOLF), 10: (B, AnimalKind.LION)})
        self.assertEqual(legal_moves(board, R), legal_moves(board, R))
        self.assertIsNotNone(find_move(legal_moves(board, R), 5, 6))
        self.assertIsNone(find_move(legal_moves(board, R), 5, 10))

    def test_given_inconsistent_flags_when_building_move_then_value_error(self):
        with self.assertRaises(ValueError):
            Move(src=None, dst=3, is_flip=False)
        with self.assertRaises(ValueError):
            Move(src=2, dst=3, is_flip=True)


if __name__ == '__main__':
    unittest.main()

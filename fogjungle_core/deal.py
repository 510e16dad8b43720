from __future__ import annotations

import random
from typing import List, Optional

from .board import Board, Cell
from .pieces import AnimalKind, Color, Piece
from .topology import CENTER_INDEX, GRID_CELLS


def build_deck() -> List[Piece]:
    """One piece per (color, kind): 16 cards, ids unique across the deck."""
    deck: List[Piece] = []
    counter = 0
    for kind in AnimalKind:
        for color in (Color.RED, Color.BLUE):
            deck.append(Piece(id=f'{color.value.lower()}-{kind.value}-{counter}', kind=kind, color=color))
            counter += 1
    return deck


def deal_board(seed: Optional[int] = None, rng: Optional[random.Random] = None) -> Board:
    """Shuffles the deck face down onto cells 0-15; the center starts open and empty."""
    rng = rng or random.Random(seed)
    deck = build_deck()
    rng.shuffle(deck)
    if len(deck) != GRID_CELLS:
        raise ValueError(f'Invalid deck: expected {GRID_CELLS} cards, got {len(deck)}')
    cells = [Cell(index=i, piece=deck[i], revealed=False) for i in range(GRID_CELLS)]
    cells.append(Cell(index=CENTER_INDEX, piece=None, revealed=True))
    return Board(tuple(cells))

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from .board import Board, Cell
from .combat import can_capture
from .pieces import AnimalKind, Color
from .topology import CENTER_INDEX, label, neighbors


@dataclass(frozen=True)
class Move:
    """A flip (src is None) or a one-step move from src to dst."""
    src: Optional[int]
    dst: int
    is_flip: bool = False

    def __post_init__(self) -> None:
        if self.is_flip != (self.src is None):
            raise ValueError('a flip has no source cell and a move needs one')

    @classmethod
    def flip(cls, index: int) -> 'Move':
        return cls(src=None, dst=index, is_flip=True)

    @classmethod
    def step(cls, src: int, dst: int) -> 'Move':
        return cls(src=src, dst=dst, is_flip=False)

    def __str__(self) -> str:
        if self.is_flip:
            return f'flip {label(self.dst)}'
        return f'{label(self.src)}->{label(self.dst)}'  # type: ignore[arg-type]


def can_enter(board: Board, src: int, dst: int) -> bool:
    """Whether the revealed piece on src may step onto the neighboring cell dst."""
    mover = board[src].piece
    target: Cell = board[dst]
    if mover is None:
        return False
    if not target.revealed:
        return False
    if dst == CENTER_INDEX:
        # Only a Rat may go in, and an occupied center is a safe zone.
        if mover.kind is not AnimalKind.RAT or target.piece is not None:
            return False
    if target.piece is None:
        return True
    if target.piece.color is mover.color:
        return False
    return can_capture(mover, target.piece)


def legal_moves(board: Board, color: Color) -> List[Move]:
    """
    All legal actions for `color`, cells in index order and neighbors in topology order.
    Every hidden card can be flipped by whoever is on turn.
    """
    moves: List[Move] = []
    for cell in board:
        if not cell.revealed:
            moves.append(Move.flip(cell.index))
            continue
        if not cell.holds(color):
            continue
        for dst in neighbors(cell.index):
            if can_enter(board, cell.index, dst):
                moves.append(Move.step(cell.index, dst))
    return moves


def is_legal(board: Board, color: Color, move: Move) -> bool:
    return move in legal_moves(board, color)


def find_move(moves: List[Move], src: Optional[int], dst: int) -> Optional[Move]:
    """Looks up the legal move matching a (src, dst) pair, e.g. from a click or a request."""
    for m in moves:
        if m.src == src and m.dst == dst:
            return m
    return None

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple

from .board import Board
from .pieces import Color, Piece


class Winner(Enum):
    RED = 'RED'
    BLUE = 'BLUE'
    DRAW = 'DRAW'

    @classmethod
    def of(cls, color: Color) -> 'Winner':
        return cls(color.value)


class Controller(Enum):
    UNASSIGNED = 'UNASSIGNED'
    HUMAN = 'HUMAN'
    AUTOMATED = 'AUTOMATED'


class Phase(Enum):
    AWAITING_FIRST_FLIP = 'AWAITING_FIRST_FLIP'
    IN_PROGRESS = 'IN_PROGRESS'
    CONCLUDED = 'CONCLUDED'


class GameMode(Enum):
    PVE = 'PVE'  # one human against the automated player
    PVP = 'PVP'  # two humans sharing the board


class BindingPolicy(Enum):
    """Who owns which color once the first card is turned over."""
    FLIPPER_TAKES_REVEALED = 'revealed'  # the first flipper plays the revealed color
    FLIPPER_TAKES_TURN = 'turn'          # the first flipper plays the color that was on turn


@dataclass(frozen=True)
class FirstReveal:
    """Recorded together with the first flip of the game."""
    turn: Color        # color on turn when the card was flipped
    actor: Controller  # who flipped it
    color: Color       # color of the revealed piece


@dataclass(frozen=True)
class GameState:
    """Represents the dynamic state of one game. Replaced wholesale on every applied action."""
    board: Board
    turn: Color = Color.RED
    winner: Optional[Winner] = None
    red: Controller = Controller.UNASSIGNED
    blue: Controller = Controller.UNASSIGNED
    primary_color: Optional[Color] = None
    first_reveal: Optional[FirstReveal] = None
    captured: Tuple[Piece, ...] = ()
    history: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def phase(self) -> Phase:
        if self.winner is not None:
            return Phase.CONCLUDED
        if self.first_reveal is None:
            return Phase.AWAITING_FIRST_FLIP
        return Phase.IN_PROGRESS

    @property
    def is_over(self) -> bool:
        return self.winner is not None

    def controller(self, color: Color) -> Controller:
        return self.red if color is Color.RED else self.blue

    def on_turn(self) -> Controller:
        return self.controller(self.turn)


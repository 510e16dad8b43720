from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional

from .pieces import AnimalKind, Color, Piece
from .state import Winner


class EventKind(Enum):
    START = 'start'
    FLIP = 'flip'
    MOVE = 'move'
    CAPTURE = 'capture'
    MUTUAL = 'mutual'
    WIN = 'win'
    DRAW = 'draw'


@dataclass(frozen=True)
class Event:
    """Something observable that happened while applying an action."""
    kind: EventKind
    piece: Optional[Piece] = None
    other: Optional[Piece] = None
    src: Optional[int] = None
    dst: Optional[int] = None
    winner: Optional[Winner] = None


ANIMAL_NAMES: Dict[str, Dict[AnimalKind, str]] = {
    'en': {
        AnimalKind.ELEPHANT: 'Elephant',
        AnimalKind.LION: 'Lion',
        AnimalKind.TIGER: 'Tiger',
        AnimalKind.LEOPARD: 'Leopard',
        AnimalKind.WOLF: 'Wolf',
        AnimalKind.DOG: 'Dog',
        AnimalKind.CAT: 'Cat',
        AnimalKind.RAT: 'Rat',
    },
    'zh': {
        AnimalKind.ELEPHANT: '大象',
        AnimalKind.LION: '狮子',
        AnimalKind.TIGER: '老虎',
        AnimalKind.LEOPARD: '豹',
        AnimalKind.WOLF: '狼',
        AnimalKind.DOG: '狗',
        AnimalKind.CAT: '猫',
        AnimalKind.RAT: '老鼠',
    },
}

COLOR_NAMES: Dict[str, Dict[Color, str]] = {
    'en': {Color.RED: 'Red', Color.BLUE: 'Blue'},
    'zh': {Color.RED: '红方', Color.BLUE: '蓝方'},
}

TEMPLATES: Dict[str, Dict[EventKind, str]] = {
    'en': {
        EventKind.START: 'Game started. Flip a card!',
        EventKind.FLIP: 'Revealed {color} {animal}',
        EventKind.MOVE: '{color} {animal} moved',
        EventKind.CAPTURE: '{color} {animal} captured {other}',
        EventKind.MUTUAL: '{animal} and {other} eliminated each other',
        EventKind.WIN: 'Game over! {winner} wins!',
        EventKind.DRAW: 'Game over! Draw.',
    },
    'zh': {
        EventKind.START: '游戏开始。请翻开一张牌！',
        EventKind.FLIP: '翻出了 {color} {animal}',
        EventKind.MOVE: '{animal} 移动了',
        EventKind.CAPTURE: '{animal} 吃掉了 {other}',
        EventKind.MUTUAL: '{animal} 与 {other} 同归于尽',
        EventKind.WIN: '游戏结束! {winner} 获胜!',
        EventKind.DRAW: '游戏结束! 平局!',
    },
}


def supported_langs():
    return sorted(TEMPLATES)


def animal_name(kind: AnimalKind, lang: str = 'en') -> str:
    return ANIMAL_NAMES[lang][kind]


def color_name(color: Color, lang: str = 'en') -> str:
    return COLOR_NAMES[lang][color]


def describe(event: Event, lang: str = 'en') -> str:
    if lang not in TEMPLATES:
        raise ValueError(f'unsupported language: {lang}')
    fields = {
        'color': color_name(event.piece.color, lang) if event.piece else '',
        'animal': animal_name(event.piece.kind, lang) if event.piece else '',
        'other': animal_name(event.other.kind, lang) if event.other else '',
        'winner': color_name(Color(event.winner.value), lang)
        if event.winner is not None and event.winner is not Winner.DRAW else '',
    }
    return TEMPLATES[lang][event.kind].format(**fields)


def log_line(*events: Event, lang: str = 'en') -> str:
    """One history line per action: the action itself plus any game-over announcement."""
    return ' '.join(describe(e, lang) for e in events)

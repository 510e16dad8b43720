from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Color(Enum):
    """Board colors. Red always moves first."""
    RED = 'RED'
    BLUE = 'BLUE'

    def opponent(self) -> 'Color':
        return Color.BLUE if self is Color.RED else Color.RED


class AnimalKind(Enum):
    ELEPHANT = 'ELEPHANT'
    LION = 'LION'
    TIGER = 'TIGER'
    LEOPARD = 'LEOPARD'
    WOLF = 'WOLF'
    DOG = 'DOG'
    CAT = 'CAT'
    RAT = 'RAT'

    @property
    def rank(self) -> int:
        return ANIMAL_RANKS[self]


ANIMAL_RANKS = {
    AnimalKind.ELEPHANT: 8,
    AnimalKind.LION: 7,
    AnimalKind.TIGER: 6,
    AnimalKind.LEOPARD: 5,
    AnimalKind.WOLF: 4,
    AnimalKind.DOG: 3,
    AnimalKind.CAT: 2,
    AnimalKind.RAT: 1,
}

# One-letter board symbols; uppercase for Red, lowercase for Blue.
ANIMAL_LETTERS = {
    AnimalKind.ELEPHANT: 'E',
    AnimalKind.LION: 'L',
    AnimalKind.TIGER: 'T',
    AnimalKind.LEOPARD: 'P',
    AnimalKind.WOLF: 'W',
    AnimalKind.DOG: 'D',
    AnimalKind.CAT: 'C',
    AnimalKind.RAT: 'R',
}


@dataclass(frozen=True)
class Piece:
    """A single animal card. Created once when the deck is built, never mutated."""
    id: str
    kind: AnimalKind
    color: Color

    @property
    def rank(self) -> int:
        return self.kind.rank

    @property
    def symbol(self) -> str:
        letter = ANIMAL_LETTERS[self.kind]
        return letter if self.color is Color.RED else letter.lower()

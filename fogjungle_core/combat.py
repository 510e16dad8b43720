from __future__ import annotations

from enum import Enum

from .pieces import AnimalKind, Piece


class CaptureOutcome(Enum):
    CAPTURE = 'capture'  # defender removed, attacker takes the cell
    MUTUAL = 'mutual'    # equal ranks: both removed


def can_capture(attacker: Piece, defender: Piece) -> bool:
    """Higher or equal rank wins, except the Rat takes the Elephant and never the reverse."""
    allowed = attacker.rank >= defender.rank
    if attacker.kind is AnimalKind.RAT and defender.kind is AnimalKind.ELEPHANT:
        allowed = True
    if attacker.kind is AnimalKind.ELEPHANT and defender.kind is AnimalKind.RAT:
        allowed = False
    return allowed


def resolve_capture(attacker: Piece, defender: Piece) -> CaptureOutcome:
    if not can_capture(attacker, defender):
        raise ValueError(f'{attacker.kind.value} cannot capture {defender.kind.value}')
    if attacker.rank == defender.rank:
        return CaptureOutcome.MUTUAL
    return CaptureOutcome.CAPTURE

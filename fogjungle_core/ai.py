from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import List, Optional, Protocol

from .board import Board
from .errors import SuggestionPortError
from .moves import Move
from .pieces import Color

logger = logging.getLogger(__name__)

FALLBACK_REASONING = 'Suggestion unavailable, playing a random legal move.'


@dataclass(frozen=True)
class Suggestion:
    move: Move
    reasoning: str = ''


class MoveSuggester(Protocol):
    """Anything that picks one of the legal moves for the side on turn."""

    def suggest(self, board: Board, color: Color, legal: List[Move]) -> Suggestion:
        ...


class RandomSuggester:
    """Uniform choice over the legal moves."""

    def __init__(self, seed: Optional[int] = None, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random(seed)

    def suggest(self, board: Board, color: Color, legal: List[Move]) -> Suggestion:
        if not legal:
            raise SuggestionPortError('no legal moves to choose from')
        return Suggestion(self.rng.choice(legal), 'random pick')


def validate_suggestion(result: object, legal: List[Move]) -> Suggestion:
    """Checks that a port answer is a Suggestion naming one of the supplied moves."""
    if not isinstance(result, Suggestion):
        raise SuggestionPortError(f'malformed suggestion: {result!r}')
    if result.move not in legal:
        raise SuggestionPortError(f'suggested move {result.move} is not legal')
    return result


def choose_move(
    suggester: MoveSuggester,
    board: Board,
    color: Color,
    legal: List[Move],
    fallback_rng: Optional[random.Random] = None,
) -> Optional[Suggestion]:
    """
    Asks the port for a move and never returns anything outside `legal`.
    None when there is nothing to play; any port failure falls back to a uniform pick.
    """
    if not legal:
        return None
    try:
        return validate_suggestion(suggester.suggest(board, color, list(legal)), legal)
    except SuggestionPortError as e:
        logger.warning('suggester failed for %s: %s; falling back to random', color.value, e)
    except Exception as e:
        logger.warning('suggester raised %s for %s: %s; falling back to random', type(e).__name__, color.value, e)
    rng = fallback_rng or random.Random()
    return Suggestion(rng.choice(legal), FALLBACK_REASONING)

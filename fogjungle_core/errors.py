from __future__ import annotations

from typing import Optional


class FogJungleError(Exception):
    """Base class for all engine errors."""

    code = 'FOG_JUNGLE_ERROR'

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return f'[{self.code}] {self.message}'


class InvalidMoveError(FogJungleError):
    """The requested action is not in the legal move set of the side on turn."""

    code = 'INVALID_MOVE'

    def __init__(self, move: object, reason: str = ''):
        message = f'illegal move: {move}'
        if reason:
            message += f' - {reason}'
        super().__init__(message)
        self.move = move
        self.reason = reason


class GameOverError(FogJungleError):
    """Raised instead of a silent no-op when strict mode is on and the game already has a winner."""

    code = 'GAME_OVER'


class EngineBusyError(FogJungleError):
    """An automated decision is pending; interactive input is refused until it resolves."""

    code = 'ENGINE_BUSY'


class SuggestionPortError(FogJungleError):
    """The move-suggestion source failed or answered with something unusable."""

    code = 'SUGGESTION_PORT'

    def __init__(self, message: str, raw: Optional[str] = None):
        super().__init__(message)
        self.raw = raw


class SuggesterUnavailableError(SuggestionPortError):
    """The configured suggester could not be constructed (missing package, key, ...)."""

    code = 'SUGGESTER_UNAVAILABLE'

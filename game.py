from __future__ import annotations

# Facade module that re-exports the Fog Jungle core.
# Kept flat so the Flask app, the tests and ad-hoc scripts share one import point.
# Single-responsibility modules live under fogjungle_core/*.

from fogjungle_core.pieces import ANIMAL_RANKS, AnimalKind, Color, Piece
from fogjungle_core.topology import (
    BOARD_SIZE,
    CENTER_INDEX,
    CENTER_LINKS,
    TOTAL_CELLS,
    adjacent,
    coords,
    index_of,
    neighbors,
)
from fogjungle_core.board import Board, Cell
from fogjungle_core.deal import build_deck, deal_board
from fogjungle_core.combat import CaptureOutcome, can_capture, resolve_capture
from fogjungle_core.moves import Move, can_enter, find_move, is_legal, legal_moves
from fogjungle_core.state import (
    BindingPolicy,
    Controller,
    FirstReveal,
    GameMode,
    GameState,
    Phase,
    Winner,
)
from fogjungle_core.engine import (
    GameEngine,
    PendingDecision,
    Transition,
    apply_move,
    bind_colors,
    evaluate_winner,
    new_game,
)
from fogjungle_core.ai import MoveSuggester, RandomSuggester, Suggestion, choose_move
from fogjungle_core.config import GameConfig, LLMConfig
from fogjungle_core.errors import (
    EngineBusyError,
    FogJungleError,
    GameOverError,
    InvalidMoveError,
    SuggestionPortError,
)


def main() -> None:
    # CLI driver delegated to fogjungle_core.cli
    from fogjungle_core.cli import main as _main
    _main()


if __name__ == '__main__':
    main()

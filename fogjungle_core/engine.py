from __future__ import annotations

import logging
import random
import threading
from dataclasses import dataclass, replace
from typing import List, Optional, Tuple

from .ai import MoveSuggester, Suggestion, choose_move
from .board import Board, Cell
from .combat import CaptureOutcome, resolve_capture
from .config import GameConfig
from .deal import deal_board
from .errors import EngineBusyError, GameOverError, InvalidMoveError
from .messages import Event, EventKind, describe, log_line
from .moves import Move, legal_moves
from .pieces import Color, Piece
from .state import BindingPolicy, Controller, FirstReveal, GameMode, GameState, Winner

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Transition:
    """What one call to apply_move produced. `applied` is False for a no-op after the game ended."""
    state: GameState
    move: Optional[Move]
    events: Tuple[Event, ...] = ()
    line: str = ''
    applied: bool = True
    turn: Optional[Color] = None  # color that was on turn when the action was applied
    actor: Optional[Controller] = None


@dataclass(frozen=True)
class PendingDecision:
    """Read-only request handed to the automated side while the engine waits on it."""
    token: int
    board: Board
    color: Color
    legal: Tuple[Move, ...]


def new_game(seed: Optional[int] = None, rng: Optional[random.Random] = None, lang: str = 'en') -> GameState:
    """Fresh game: shuffled hidden deck, Red on turn, nobody bound to a color yet."""
    board = deal_board(seed=seed, rng=rng)
    return GameState(board=board, history=(describe(Event(EventKind.START), lang),))


def evaluate_winner(board: Board) -> Optional[Winner]:
    """No verdict while any card is face down; then whoever still has pieces wins."""
    if board.unrevealed_count > 0:
        return None
    red = board.count(Color.RED)
    blue = board.count(Color.BLUE)
    if red == 0 and blue == 0:
        return Winner.DRAW
    if red == 0:
        return Winner.BLUE
    if blue == 0:
        return Winner.RED
    return None


def bind_colors(
    state: GameState,
    revealed: Color,
    actor: Controller,
    mode: GameMode,
    policy: BindingPolicy,
) -> GameState:
    """One-time latch run on the first flip: decides which participant plays which color."""
    flipper_color = revealed if policy is BindingPolicy.FLIPPER_TAKES_REVEALED else state.turn
    record = FirstReveal(turn=state.turn, actor=actor, color=revealed)
    if mode is GameMode.PVP:
        return replace(
            state,
            red=Controller.HUMAN,
            blue=Controller.HUMAN,
            primary_color=flipper_color,
            first_reveal=record,
        )
    if actor is Controller.UNASSIGNED:
        raise ValueError('the first flip in a PVE game needs a HUMAN or AUTOMATED actor')
    other = Controller.AUTOMATED if actor is Controller.HUMAN else Controller.HUMAN
    controllers = {flipper_color: actor, flipper_color.opponent(): other}
    human_color = flipper_color if actor is Controller.HUMAN else flipper_color.opponent()
    return replace(
        state,
        red=controllers[Color.RED],
        blue=controllers[Color.BLUE],
        primary_color=human_color,
        first_reveal=record,
    )


def _check_legal(state: GameState, move: Move, actor: Optional[Controller]) -> None:
    if not move.is_flip:
        source = state.board[move.src] if move.src is not None and 0 <= move.src < len(state.board) else None
        if source is None or not source.holds(state.turn):
            raise InvalidMoveError(move, f'source must hold a revealed {state.turn.value} piece')
    if actor is not None:
        expected = state.on_turn()
        if expected is not Controller.UNASSIGNED and expected is not actor:
            raise InvalidMoveError(move, f'{state.turn.value} is controlled by {expected.value}')
    if move not in legal_moves(state.board, state.turn):
        raise InvalidMoveError(move, 'not in the legal move set')


def apply_move(
    state: GameState,
    move: Move,
    actor: Optional[Controller] = None,
    mode: GameMode = GameMode.PVP,
    policy: BindingPolicy = BindingPolicy.FLIPPER_TAKES_REVEALED,
    lang: str = 'en',
    history_limit: int = 50,
    strict: bool = False,
) -> Transition:
    """
    Validates and applies one flip or move, returning the new state.
    The input state is never modified; either the whole action lands
    (reveal/relocate/capture, turn advance, win check) or an error is raised.
    """
    if state.winner is not None:
        if strict:
            raise GameOverError(f'game already decided: {state.winner.value}')
        return Transition(state=state, move=move, applied=False, turn=state.turn, actor=actor)

    _check_legal(state, move, actor)

    board = state.board
    captured: List[Piece] = list(state.captured)
    events: List[Event] = []
    next_state = state

    if move.is_flip:
        target = board[move.dst]
        piece = target.piece
        if piece is None:
            raise InvalidMoveError(move, 'hidden cell without a card')
        board = board.with_cells({move.dst: replace(target, revealed=True)})
        events.append(Event(EventKind.FLIP, piece=piece, dst=move.dst))
        if state.first_reveal is None:
            next_state = bind_colors(state, piece.color, actor or Controller.HUMAN, mode, policy)
            logger.info(
                'first reveal: %s flipped %s on %s turn; red=%s blue=%s primary=%s',
                (actor or Controller.HUMAN).value, piece.color.value, state.turn.value,
                next_state.red.value, next_state.blue.value,
                next_state.primary_color.value if next_state.primary_color else None,
            )
    else:
        src_cell = board[move.src]  # type: ignore[index]
        dst_cell = board[move.dst]
        attacker = src_cell.piece
        defender = dst_cell.piece
        if attacker is None:
            raise InvalidMoveError(move, 'source cell is empty')
        updates = {move.src: Cell(src_cell.index, None, True)}
        if defender is None:
            updates[move.dst] = Cell(dst_cell.index, attacker, True)
            events.append(Event(EventKind.MOVE, piece=attacker, src=move.src, dst=move.dst))
        elif resolve_capture(attacker, defender) is CaptureOutcome.MUTUAL:
            updates[move.dst] = Cell(dst_cell.index, None, True)
            captured.extend((defender, attacker))
            events.append(Event(EventKind.MUTUAL, piece=attacker, other=defender, src=move.src, dst=move.dst))
        else:
            updates[move.dst] = Cell(dst_cell.index, attacker, True)
            captured.append(defender)
            events.append(Event(EventKind.CAPTURE, piece=attacker, other=defender, src=move.src, dst=move.dst))
        board = board.with_cells(updates)  # type: ignore[arg-type]

    winner = evaluate_winner(board)
    if winner is Winner.DRAW:
        events.append(Event(EventKind.DRAW, winner=winner))
    elif winner is not None:
        events.append(Event(EventKind.WIN, winner=winner))

    line = log_line(*events, lang=lang)
    history = state.history + (line,)
    if history_limit > 0:
        history = history[-history_limit:]
    next_state = replace(
        next_state,
        board=board,
        turn=state.turn.opponent(),
        winner=winner,
        captured=tuple(captured),
        history=history,
    )
    logger.debug('%s %s: %s', state.turn.value, move, line)
    if winner is not None:
        logger.info('game concluded: %s', winner.value)
    return Transition(
        state=next_state,
        move=move,
        events=tuple(events),
        line=line,
        applied=True,
        turn=state.turn,
        actor=actor,
    )


class GameEngine:
    """
    Owns the GameState of a single game and commits one action at a time.

    While an automated decision is pending (begin_automated() .. finish_automated()),
    interactive apply() calls are refused with EngineBusyError.
    """

    def __init__(
        self,
        state: Optional[GameState] = None,
        config: Optional[GameConfig] = None,
        rng: Optional[random.Random] = None,
    ):
        self.config = config or GameConfig()
        self._rng = rng or random.Random(self.config.seed)
        self._state = state or new_game(rng=self._rng, lang=self.config.lang)
        self._lock = threading.Lock()
        self._pending: Optional[PendingDecision] = None
        self._tokens = 0
        self.last_reasoning: Optional[str] = None

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def pending(self) -> bool:
        return self._pending is not None

    def legal_moves(self) -> List[Move]:
        if self._state.winner is not None:
            return []
        return legal_moves(self._state.board, self._state.turn)

    def _commit(self, move: Move, actor: Optional[Controller]) -> Transition:
        tr = apply_move(
            self._state,
            move,
            actor=actor,
            mode=self.config.mode,
            policy=self.config.policy,
            lang=self.config.lang,
            history_limit=self.config.history_limit,
            strict=self.config.strict,
        )
        self._state = tr.state
        return tr

    def apply(self, move: Move, actor: Optional[Controller] = None) -> Transition:
        """Applies an interactive action. Refused while an automated decision is pending."""
        with self._lock:
            if self._pending is not None:
                raise EngineBusyError('waiting for the automated player')
            return self._commit(move, actor)

    def begin_automated(self) -> Optional[PendingDecision]:
        """Latches the engine for an automated decision; None when the game is over."""
        with self._lock:
            if self._pending is not None:
                raise EngineBusyError('an automated decision is already pending')
            if self._state.winner is not None:
                return None
            self._tokens += 1
            self._pending = PendingDecision(
                token=self._tokens,
                board=self._state.board,
                color=self._state.turn,
                legal=tuple(legal_moves(self._state.board, self._state.turn)),
            )
            return self._pending

    def finish_automated(self, decision: PendingDecision, suggestion: Optional[Suggestion]) -> Optional[Transition]:
        """
        Applies the automated choice for `decision`. Returns None when the decision
        was cancelled in the meantime or the port had nothing to offer.
        """
        with self._lock:
            if self._pending is None or self._pending.token != decision.token:
                logger.info('dropping stale automated decision %d', decision.token)
                return None
            self._pending = None
            if suggestion is None:
                return None
            self.last_reasoning = suggestion.reasoning
            return self._commit(suggestion.move, Controller.AUTOMATED)

    def cancel_pending(self) -> bool:
        """Drops a pending automated decision. No move is applied; the turn stays put."""
        with self._lock:
            was_pending = self._pending is not None
            self._pending = None
            return was_pending

    def play_automated(self, suggester: MoveSuggester) -> Optional[Transition]:
        """Runs one automated turn end to end: snapshot, ask the port, validate, apply."""
        decision = self.begin_automated()
        if decision is None:
            return None
        try:
            suggestion = choose_move(suggester, decision.board, decision.color, list(decision.legal), self._rng)
        except BaseException:
            self.cancel_pending()
            raise
        return self.finish_automated(decision, suggestion)

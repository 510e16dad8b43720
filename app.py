from __future__ import annotations

import logging
import os
import threading
import uuid
from collections import OrderedDict
from typing import Any, Dict, List, Optional

from flask import Flask, jsonify, request

from fogjungle_core.ai import MoveSuggester, RandomSuggester
from fogjungle_core.board import Board, Cell
from fogjungle_core.config import GameConfig, LLMConfig
from fogjungle_core.engine import GameEngine, Transition
from fogjungle_core.errors import (
    EngineBusyError,
    InvalidMoveError,
    SuggesterUnavailableError,
)
from fogjungle_core.messages import supported_langs
from fogjungle_core.moves import Move
from fogjungle_core.state import BindingPolicy, Controller, GameMode, GameState

logger = logging.getLogger(__name__)

SUGGESTER = os.getenv("FOGJUNGLE_SUGGESTER", "random")
MAX_GAMES = int(os.getenv("FOGJUNGLE_MAX_GAMES", "256"))

app = Flask(__name__)

# Live games, in memory only, least recently used first. Nothing survives a restart.
GAMES: OrderedDict[str, GameEngine] = OrderedDict()
_GAMES_LOCK = threading.Lock()


def make_suggester(seed: Optional[int] = None) -> MoveSuggester:
    if SUGGESTER == "llm":
        from fogjungle_core.llm import LLMSuggester

        try:
            return LLMSuggester(config=LLMConfig.from_env())
        except SuggesterUnavailableError as e:
            logger.warning("LLM suggester unavailable (%s); using random moves", e)
    return RandomSuggester(seed=seed)


# ---------- JSON helpers ----------

def cell_to_json(cell: Cell) -> Dict[str, Any]:
    out: Dict[str, Any] = {"index": cell.index, "revealed": cell.revealed, "piece": None}
    if cell.revealed and cell.piece is not None:
        p = cell.piece
        out["piece"] = {"id": p.id, "kind": p.kind.value, "color": p.color.value, "rank": p.rank}
    elif not cell.revealed:
        out["hidden"] = True
    return out


def board_to_json(b: Board) -> List[Dict[str, Any]]:
    return [cell_to_json(c) for c in b]


def move_to_json(m: Move) -> Dict[str, Any]:
    return {"from": m.src, "to": int(m.dst), "flip": bool(m.is_flip)}


def json_to_move(obj: Any) -> Move:
    if not isinstance(obj, dict):
        raise TypeError("move must be an object")
    src = obj.get("from")
    dst = int(obj["to"])
    flip = bool(obj.get("flip", src is None))
    return Move(src=None if src is None else int(src), dst=dst, is_flip=flip)


def state_to_json(s: GameState) -> Dict[str, Any]:
    return {
        "board": board_to_json(s.board),
        "turn": s.turn.value,
        "phase": s.phase.value,
        "winner": s.winner.value if s.winner is not None else None,
        "redPlayer": s.red.value,
        "bluePlayer": s.blue.value,
        "userColor": s.primary_color.value if s.primary_color is not None else None,
        "firstReveal": None if s.first_reveal is None else {
            "turn": s.first_reveal.turn.value,
            "actor": s.first_reveal.actor.value,
            "color": s.first_reveal.color.value,
        },
        "captured": [p.id for p in s.captured],
        "history": list(s.history),
    }


def _game_payload(engine: GameEngine, **extra: Any) -> Dict[str, Any]:
    payload = {
        "ok": True,
        "state": state_to_json(engine.state),
        "legalMoves": [move_to_json(m) for m in engine.legal_moves()],
        "pending": engine.pending,
    }
    payload.update(extra)
    return payload


def _transition_json(tr: Transition) -> Dict[str, Any]:
    return {
        "applied": tr.applied,
        "move": move_to_json(tr.move) if tr.move is not None else None,
        "line": tr.line,
        "turn": tr.turn.value if tr.turn is not None else None,
    }


def _body() -> Optional[Dict[str, Any]]:
    """JSON request body; None when it is present but not an object."""
    body = request.get_json(force=True, silent=True)
    if body is None:
        return {}
    if not isinstance(body, dict):
        return None
    return body


def _bad_body() -> Any:
    return jsonify({"ok": False, "error": "request body must be a JSON object"}), 400


def _register(game_id: str, engine: GameEngine) -> None:
    with _GAMES_LOCK:
        GAMES[game_id] = engine
        while len(GAMES) > max(1, MAX_GAMES):
            old_id, _ = GAMES.popitem(last=False)
            logger.info("evicted game %s", old_id)


def _lookup(game_id: Any) -> Optional[GameEngine]:
    if not isinstance(game_id, str):
        return None
    with _GAMES_LOCK:
        engine = GAMES.get(game_id)
        if engine is not None:
            GAMES.move_to_end(game_id)
        return engine


# ---------- Game API ----------

@app.post("/api/new")
def api_new() -> Any:
    body = _body()
    if body is None:
        return _bad_body()
    base = GameConfig.from_env()
    try:
        seed = body.get("seed", base.seed)
        lang = str(body.get("lang", base.lang))
        if lang not in supported_langs():
            raise ValueError(f"unsupported language: {lang}")
        config = GameConfig(
            mode=GameMode(str(body.get("mode", base.mode.value)).upper()),
            policy=BindingPolicy(str(body.get("policy", base.policy.value)).lower()),
            seed=None if seed is None else int(seed),
            history_limit=base.history_limit,
            lang=lang,
            strict=base.strict,
        )
    except (TypeError, ValueError) as e:
        return jsonify({"ok": False, "error": f"bad config: {e}"}), 400
    engine = GameEngine(config=config)
    game_id = uuid.uuid4().hex
    _register(game_id, engine)
    logger.info("new game %s mode=%s policy=%s", game_id, config.mode.value, config.policy.value)
    return jsonify(_game_payload(engine, gameId=game_id))


@app.get("/api/game/<game_id>")
def api_game(game_id: str) -> Any:
    engine = _lookup(game_id)
    if engine is None:
        return jsonify({"ok": False, "error": "unknown game"}), 404
    return jsonify(_game_payload(engine, gameId=game_id))


@app.delete("/api/game/<game_id>")
def api_delete(game_id: str) -> Any:
    with _GAMES_LOCK:
        engine = GAMES.pop(game_id, None)
    if engine is None:
        return jsonify({"ok": False, "error": "unknown game"}), 404
    logger.info("deleted game %s", game_id)
    return jsonify({"ok": True, "gameId": game_id})


@app.post("/api/move")
def api_move() -> Any:
    body = _body()
    if body is None:
        return _bad_body()
    engine = _lookup(body.get("gameId"))
    if engine is None:
        return jsonify({"ok": False, "error": "unknown game"}), 404
    try:
        move = json_to_move(body["move"])
    except (KeyError, TypeError, ValueError) as e:
        return jsonify({"ok": False, "error": f"bad move: {e}"}), 400
    # Interactive requests always act for the human side.
    actor = None
    if engine.config.mode is GameMode.PVE:
        actor = Controller.HUMAN
    try:
        tr = engine.apply(move, actor=actor)
    except EngineBusyError as e:
        return jsonify({"ok": False, "error": e.message}), 409
    except InvalidMoveError as e:
        legal = [move_to_json(m) for m in engine.legal_moves()]
        return jsonify({"ok": False, "error": e.message, "legalMoves": legal}), 400
    return jsonify(_game_payload(engine, gameId=body["gameId"], transition=_transition_json(tr)))


@app.post("/api/ai")
def api_ai() -> Any:
    body = _body()
    if body is None:
        return _bad_body()
    engine = _lookup(body.get("gameId"))
    if engine is None:
        return jsonify({"ok": False, "error": "unknown game"}), 404
    if engine.config.mode is GameMode.PVP:
        return jsonify({"ok": False, "error": "no automated player in PVP games"}), 409
    if engine.state.on_turn() is Controller.HUMAN:
        return jsonify({"ok": False, "error": "it is the human player's turn"}), 409
    try:
        tr = engine.play_automated(make_suggester(engine.config.seed))
    except EngineBusyError as e:
        return jsonify({"ok": False, "error": e.message}), 409
    except InvalidMoveError as e:
        return jsonify({"ok": False, "error": e.message}), 500
    if tr is None:
        return jsonify({"ok": False, "error": "No AI move available"}), 409
    return jsonify(_game_payload(
        engine,
        gameId=body["gameId"],
        transition=_transition_json(tr),
        reasoning=engine.last_reasoning,
    ))


@app.post("/api/cancel")
def api_cancel() -> Any:
    body = _body()
    if body is None:
        return _bad_body()
    engine = _lookup(body.get("gameId"))
    if engine is None:
        return jsonify({"ok": False, "error": "unknown game"}), 404
    return jsonify(_game_payload(engine, gameId=body["gameId"], cancelled=engine.cancel_pending()))


if __name__ == "__main__":
    logging.basicConfig(level=os.getenv("FOGJUNGLE_LOG_LEVEL", "INFO"))
    app.run(host="127.0.0.1", port=int(os.getenv("PORT", "5000")), debug=False)

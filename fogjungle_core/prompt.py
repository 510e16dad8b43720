from __future__ import annotations

import json
import re
from typing import List

from .ai import Suggestion
from .board import Board
from .errors import SuggestionPortError
from .messages import animal_name
from .moves import Move
from .pieces import Color
from .topology import CENTER_INDEX, CENTER_LINKS, label

_THINK_RE = re.compile(r'<\s*think\s*>.*?<\s*/\s*think\s*>', re.DOTALL | re.IGNORECASE)
_OBJECT_RE = re.compile(r'\{.*\}', re.DOTALL)

REASONING_LANGS = {
    'en': 'English',
    'zh': 'Simplified Chinese',
}


def serialize_board(board: Board, color: Color) -> str:
    lines: List[str] = []
    for cell in board:
        head = f'Index {cell.index} {label(cell.index)}'
        if not cell.revealed:
            lines.append(f'{head}: [HIDDEN CARD]')
        elif cell.piece is None:
            lines.append(f'{head}: Empty')
        else:
            p = cell.piece
            owner = '[YOURS]' if p.color is color else '[OPPONENT]'
            lines.append(f'{head}: {p.color.value} {animal_name(p.kind)} (Rank {p.rank}) {owner}')
    return '\n'.join(lines)


def describe_moves(legal: List[Move]) -> str:
    out: List[str] = []
    for i, m in enumerate(legal):
        if m.is_flip:
            out.append(f'ID {i}: FLIP card at Index {m.dst} {label(m.dst)}')
        else:
            out.append(f'ID {i}: MOVE from {label(m.src)} to {label(m.dst)}')  # type: ignore[arg-type]
    return '\n'.join(out)


def build_prompt(board: Board, color: Color, legal: List[Move], lang: str = 'en') -> str:
    links = ', '.join(str(i) for i in CENTER_LINKS)
    language = REASONING_LANGS.get(lang, 'English')
    return f"""You are playing a variation of Dou Shou Qi (Animal Chess) with hidden cards.
You are playing as {color.value}.

Board topology:
- A 4x4 grid of intersections, indices 0-15, labelled (x,y).
- A special center point, index {CENTER_INDEX}, connected to indices {links}.
- Only the RAT (rank 1) may enter the center, and only while it is empty.
- An occupied center is a safe zone: nothing may enter or attack it.

Rules:
1. Higher rank captures lower or equal rank (8 > 7 > ... > 1).
2. The Rat (1) captures the Elephant (8); the Elephant cannot capture the Rat.
3. Equal ranks eliminate each other.
4. On your turn either flip a hidden card or move a revealed piece of yours one step.
5. Hidden cards cannot be entered. Nobody wins while hidden cards remain.

Current board:
{serialize_board(board, color)}

Valid moves:
{describe_moves(legal)}

Choose the best move ID from the list above. Answer with JSON only:
{{"moveId": <integer>, "reasoning": "<one short sentence in {language}>"}}
"""


def parse_response(text: str, legal: List[Move]) -> Suggestion:
    """Extracts {"moveId", "reasoning"} from a model answer. Raises SuggestionPortError when unusable."""
    if not text or not text.strip():
        raise SuggestionPortError('empty response')
    cleaned = _THINK_RE.sub('', text)
    match = _OBJECT_RE.search(cleaned)
    if match is None:
        raise SuggestionPortError('no JSON object in response', raw=text)
    try:
        data = json.loads(match.group(0))
    except json.JSONDecodeError as e:
        raise SuggestionPortError(f'bad JSON: {e}', raw=text) from e
    if not isinstance(data, dict):
        raise SuggestionPortError('response is not an object', raw=text)
    move_id = data.get('moveId')
    if isinstance(move_id, bool) or not isinstance(move_id, int):
        raise SuggestionPortError(f'moveId must be an integer, got {move_id!r}', raw=text)
    if not 0 <= move_id < len(legal):
        raise SuggestionPortError(f'moveId {move_id} out of range', raw=text)
    reasoning = data.get('reasoning', '')
    if not isinstance(reasoning, str):
        reasoning = str(reasoning)
    return Suggestion(legal[move_id], reasoning.strip())

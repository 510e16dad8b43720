from __future__ import annotations

import argparse
import logging
import random
from typing import List, Optional

from .ai import MoveSuggester, RandomSuggester, choose_move
from .config import GameConfig, LLMConfig
from .engine import GameEngine, Transition
from .errors import InvalidMoveError, SuggesterUnavailableError
from .messages import color_name, supported_langs
from .moves import Move, find_move
from .state import BindingPolicy, Controller, GameMode, GameState


def build_suggester(name: str, seed: Optional[int], lang: str) -> MoveSuggester:
    if name == 'llm':
        from .llm import LLMSuggester

        config = LLMConfig.from_env()
        config.lang = lang
        try:
            return LLMSuggester(config=config)
        except SuggesterUnavailableError as e:
            print(f'warning: {e}; using the random suggester instead.')
    return RandomSuggester(seed=seed)


def parse_command(text: str, legal: List[Move]) -> Optional[Move]:
    """'7' flips cell 7, '5 16' or '5-16' moves from 5 to 16. None when nothing matches."""
    parts = text.replace(',', ' ').replace('-', ' ').split()
    try:
        numbers = [int(p) for p in parts]
    except ValueError:
        return None
    if len(numbers) == 1:
        return find_move(legal, None, numbers[0])
    if len(numbers) == 2:
        return find_move(legal, numbers[0], numbers[1])
    return None


def print_state(state: GameState, lang: str) -> None:
    print(state.board.pretty())
    print(f'{color_name(state.turn, lang)} to play '
          f'(red={state.red.value.lower()}, blue={state.blue.value.lower()})')


def report(tr: Transition, who: str) -> None:
    if tr.move is not None:
        print(f'{who}: {tr.move} -> {tr.line}')


def prompt_human_move(engine: GameEngine) -> Optional[Move]:
    legal = engine.legal_moves()
    if not legal:
        print('No legal moves available.')
        return None
    print('Legal moves:', ', '.join(str(m) for m in legal))
    while True:
        text = input('Flip with "<cell>", move with "<from> <to>", q to quit: ').strip()
        if text.lower() in ('q', 'quit', 'exit'):
            return None
        move = parse_command(text, legal)
        if move is not None:
            return move
        print('Illegal move. Try again.')


def self_play(engine: GameEngine, suggester: MoveSuggester, max_plies: int) -> None:
    rng = random.Random(engine.config.seed)
    for _ in range(max_plies):
        if engine.state.is_over:
            break
        legal = engine.legal_moves()
        choice = choose_move(suggester, engine.state.board, engine.state.turn, legal, rng)
        if choice is None:
            break
        tr = engine.apply(choice.move)
        report(tr, color_name(tr.turn, engine.config.lang))  # type: ignore[arg-type]
    print_state(engine.state, engine.config.lang)


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(description='Fog Jungle: hidden animal chess on a 4x4 board')
    parser.add_argument('--seed', type=int, default=None, help='RNG seed for the deal')
    parser.add_argument('--mode', choices=['pve', 'pvp'], default='pve', help='Human vs computer or two humans')
    parser.add_argument('--policy', choices=[p.value for p in BindingPolicy], default='revealed',
                        help='Which color the first flipper plays')
    parser.add_argument('--suggester', choices=['random', 'llm'], default='random',
                        help='Move source for the computer player')
    parser.add_argument('--lang', choices=supported_langs(), default='en', help='Language of the move log')
    parser.add_argument('--self-play', action='store_true', help='Let the suggester play both sides')
    parser.add_argument('--max-plies', type=int, default=400, help='Stop self-play after this many actions')
    parser.add_argument('--log-level', default='WARNING', help='Logging level (DEBUG, INFO, ...)')
    args = parser.parse_args(argv)

    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.WARNING),
                        format='%(levelname)s %(name)s: %(message)s')

    config = GameConfig(
        mode=GameMode.PVP if (args.mode == 'pvp' or args.self_play) else GameMode.PVE,
        policy=BindingPolicy(args.policy),
        seed=args.seed,
        lang=args.lang,
    )
    engine = GameEngine(config=config)
    suggester = build_suggester(args.suggester, args.seed, args.lang)
    print('Initial board:')
    print_state(engine.state, config.lang)

    if args.self_play:
        self_play(engine, suggester, args.max_plies)
    else:
        while not engine.state.is_over:
            state = engine.state
            if config.mode is GameMode.PVE and state.on_turn() is Controller.AUTOMATED:
                tr = engine.play_automated(suggester)
                if tr is None:
                    print('Computer has no move.')
                    break
                report(tr, 'Computer')
                if engine.last_reasoning:
                    print(f'  ({engine.last_reasoning})')
            else:
                move = prompt_human_move(engine)
                if move is None:
                    return
                try:
                    tr = engine.apply(move, actor=Controller.HUMAN)
                except InvalidMoveError as e:
                    print(f'error: {e}')
                    continue
                report(tr, 'You' if config.mode is GameMode.PVE else color_name(tr.turn, config.lang))  # type: ignore[arg-type]
                if config.mode is GameMode.PVE and state.first_reveal is None and engine.state.primary_color:
                    print(f'You play {color_name(engine.state.primary_color, config.lang)}.')
            print_state(engine.state, config.lang)

    winner = engine.state.winner
    if winner is not None:
        print(engine.state.history[-1])


if __name__ == '__main__':
    main()

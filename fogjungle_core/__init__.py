"""
Fog Jungle core Python package.

Rules engine for hidden-information animal chess on a 4x4 grid plus a
center burrow. Pure-logic modules, leaf first:
- pieces.py: AnimalKind, Color, Piece
- topology.py: adjacency and coordinates of the 17 cells
- board.py: Cell, Board
- deal.py: deck building and the shuffled initial board
- combat.py: capture rules
- moves.py: Move and the legal move generator
- state.py: GameState and its tagged enums
- engine.py: apply_move and the GameEngine state machine
- ai.py, prompt.py, llm.py: the move-suggestion port and its adapters
"""

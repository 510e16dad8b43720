from __future__ import annotations

from typing import List, Optional, Tuple

BOARD_SIZE = 4  # 4x4 grid of intersections
GRID_CELLS = BOARD_SIZE * BOARD_SIZE
CENTER_INDEX = 16
TOTAL_CELLS = GRID_CELLS + 1
CENTER_LINKS: Tuple[int, ...] = (5, 6, 9, 10)

Coord = Tuple[int, int]


def in_range(index: int) -> bool:
    return 0 <= index < TOTAL_CELLS


def coords(index: int) -> Optional[Coord]:
    """Returns (row, col) for a grid index, or None for the center."""
    if index == CENTER_INDEX:
        return None
    if not 0 <= index < GRID_CELLS:
        raise ValueError(f'cell index out of range: {index}')
    return index // BOARD_SIZE, index % BOARD_SIZE


def index_of(row: int, col: int) -> int:
    if not (0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE):
        raise ValueError(f'coordinate off the grid: ({row}, {col})')
    return row * BOARD_SIZE + col


def adjacent(a: int, b: int) -> bool:
    """
    True when a piece can step from a to b.
    The center touches only the four inner intersections; grid cells touch
    their orthogonal neighbors without wrap-around.
    """
    if not (in_range(a) and in_range(b)) or a == b:
        return False
    if a == CENTER_INDEX:
        return b in CENTER_LINKS
    if b == CENTER_INDEX:
        return a in CENTER_LINKS
    r1, c1 = divmod(a, BOARD_SIZE)
    r2, c2 = divmod(b, BOARD_SIZE)
    return abs(r1 - r2) + abs(c1 - c2) == 1


def neighbors(index: int) -> List[int]:
    """Adjacent cells in a fixed order: up, down, left, right, then the center."""
    if index == CENTER_INDEX:
        return list(CENTER_LINKS)
    r, c = coords(index)  # type: ignore[misc]
    out: List[int] = []
    if r > 0:
        out.append(index - BOARD_SIZE)
    if r < BOARD_SIZE - 1:
        out.append(index + BOARD_SIZE)
    if c > 0:
        out.append(index - 1)
    if c < BOARD_SIZE - 1:
        out.append(index + 1)
    if index in CENTER_LINKS:
        out.append(CENTER_INDEX)
    return out


def label(index: int) -> str:
    """Short human label, e.g. '(2,1)' as (x,y) or 'CENTER'."""
    if index == CENTER_INDEX:
        return 'CENTER'
    r, c = coords(index)  # type: ignore[misc]
    return f'({c},{r})'

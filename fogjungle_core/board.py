from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from .pieces import Color, Piece
from .topology import BOARD_SIZE, CENTER_INDEX, TOTAL_CELLS


@dataclass(frozen=True)
class Cell:
    """One intersection: its index, the card on it (if any) and whether it is face up."""
    index: int
    piece: Optional[Piece] = None
    revealed: bool = False

    @property
    def is_empty(self) -> bool:
        return self.piece is None

    def holds(self, color: Color) -> bool:
        return self.revealed and self.piece is not None and self.piece.color is color


@dataclass(frozen=True)
class Board:
    """
    Immutable snapshot of all 17 cells, indexed by position.
    Changes go through with_cells(), which returns a new Board.
    """
    cells: Tuple[Cell, ...]

    def __post_init__(self) -> None:
        if len(self.cells) != TOTAL_CELLS:
            raise ValueError(f'board must have {TOTAL_CELLS} cells, got {len(self.cells)}')
        seen = set()
        for i, cell in enumerate(self.cells):
            if cell.index != i:
                raise ValueError(f'cell at position {i} carries index {cell.index}')
            if cell.piece is not None:
                if cell.piece.id in seen:
                    raise ValueError(f'piece {cell.piece.id} placed twice')
                seen.add(cell.piece.id)
        center = self.cells[CENTER_INDEX]
        if not center.revealed:
            raise ValueError('center cell can never be hidden')

    @classmethod
    def empty(cls) -> 'Board':
        """All cells revealed and empty; handy for setting up positions by hand."""
        return cls(tuple(Cell(i, None, True) for i in range(TOTAL_CELLS)))

    def __getitem__(self, index: int) -> Cell:
        return self.cells[index]

    def __iter__(self) -> Iterator[Cell]:
        return iter(self.cells)

    def __len__(self) -> int:
        return len(self.cells)

    def with_cells(self, updates: Dict[int, Cell]) -> 'Board':
        cells = list(self.cells)
        for index, cell in updates.items():
            cells[index] = cell
        return Board(tuple(cells))

    def place(self, index: int, piece: Optional[Piece], revealed: bool = True) -> 'Board':
        return self.with_cells({index: replace(self.cells[index], piece=piece, revealed=revealed)})

    @property
    def unrevealed_count(self) -> int:
        return sum(1 for c in self.cells if not c.revealed)

    def pieces(self, color: Optional[Color] = None) -> Iterable[Tuple[int, Piece]]:
        """Every piece still on the board, face up or not."""
        for cell in self.cells:
            if cell.piece is not None and (color is None or cell.piece.color is color):
                yield cell.index, cell.piece

    def count(self, color: Color) -> int:
        return sum(1 for _ in self.pieces(color))

    def pretty(self, highlight: Optional[Iterable[int]] = None) -> str:
        """
        Text rendering: '#' hidden card, '.' empty, letters for animals
        (uppercase Red, lowercase Blue), '*' marks highlighted cells.
        The center is printed on its own line below the grid.
        """
        marks = set(highlight or ())

        def glyph(cell: Cell) -> str:
            if not cell.revealed:
                g = '#'
            elif cell.piece is None:
                g = '.'
            else:
                g = cell.piece.symbol
            return g + ('*' if cell.index in marks else ' ')

        lines: List[str] = []
        for r in range(BOARD_SIZE):
            row = [glyph(self.cells[r * BOARD_SIZE + c]) for c in range(BOARD_SIZE)]
            lines.append(' '.join(row).rstrip())
        lines.append('center: ' + glyph(self.cells[CENTER_INDEX]).rstrip())
        return '\n'.join(lines)

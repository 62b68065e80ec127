# hints.py
# Greedy hint oracle: naked single, then hidden single, then the empty cell
# with the fewest candidates. Not a solver; it only ranks cells for a hint.

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterable, Optional, Sequence, Tuple

from contracts.board_validator import cell_value, require_board

from .candidates import _candidates
from .grid import BOX, SIZE

_LOGGER = logging.getLogger(__name__)

NAKED_SINGLE = "Naked Single"
HIDDEN_SINGLE = "Hidden Single"
FEWEST_CANDIDATES = "Fewest Candidates"


@dataclass(frozen=True)
class Hint:
    row: int
    col: int
    technique: str

    @property
    def cell(self) -> Tuple[int, int]:
        return self.row, self.col


def _empty_cells(board: Sequence[Sequence[Any]]) -> Iterable[Tuple[int, int]]:
    for row in range(SIZE):
        for col in range(SIZE):
            if not cell_value(board[row][col]):
                yield row, col


def _unique_among(board, digit: int, cells: Iterable[Tuple[int, int]]) -> bool:
    """True if no empty cell in ``cells`` lists ``digit`` as a candidate."""
    for r, c in cells:
        if not cell_value(board[r][c]) and digit in _candidates(board, r, c):
            return False
    return True


def _is_hidden_single(board, row: int, col: int, digit: int) -> bool:
    row_cells = [(row, c) for c in range(SIZE) if c != col]
    if _unique_among(board, digit, row_cells):
        return True
    col_cells = [(r, col) for r in range(SIZE) if r != row]
    if _unique_among(board, digit, col_cells):
        return True
    box_row = row - row % BOX
    box_col = col - col % BOX
    box_cells = [
        (r, c)
        for r in range(box_row, box_row + BOX)
        for c in range(box_col, box_col + BOX)
        if (r, c) != (row, col)
    ]
    return _unique_among(board, digit, box_cells)


def find_hint(board: Sequence[Sequence[Any]]) -> Optional[Hint]:
    """Return the cell a player should look at next, with the reason.

    Scans in row-major order and returns the first naked single, else the
    first hidden single, else the cell with the strictly smallest non-zero
    candidate count. ``None`` when the board is full or every empty cell has
    run out of candidates.
    """
    require_board(board)

    for row, col in _empty_cells(board):
        if len(_candidates(board, row, col)) == 1:
            return Hint(row, col, NAKED_SINGLE)

    for row, col in _empty_cells(board):
        candidates = _candidates(board, row, col)
        # sorted keeps the per-candidate order deterministic
        for digit in sorted(candidates):
            if _is_hidden_single(board, row, col, digit):
                return Hint(row, col, HIDDEN_SINGLE)

    best: Optional[Hint] = None
    min_candidates = SIZE + 1
    for row, col in _empty_cells(board):
        size = len(_candidates(board, row, col))
        if 0 < size < min_candidates:
            min_candidates = size
            best = Hint(row, col, FEWEST_CANDIDATES)

    if best is None:
        _LOGGER.debug("find_hint: no empty cell with candidates left")
    return best


def find_hint_cell(board: Sequence[Sequence[Any]]) -> Optional[Tuple[int, int]]:
    hint = find_hint(board)
    return None if hint is None else hint.cell


__all__ = [
    "FEWEST_CANDIDATES",
    "HIDDEN_SINGLE",
    "Hint",
    "NAKED_SINGLE",
    "find_hint",
    "find_hint_cell",
]

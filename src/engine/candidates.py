"""Candidate computation over the interactive cell board.

A board is a 9×9 list of :class:`CellState`.  Candidate sets are derived
data: they can always be rebuilt from the cell values alone, and may be stale
or cleared until one of the ``refresh_*`` helpers runs.  Read-only functions
also accept a plain integer grid (``0`` = empty).
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, FrozenSet, Iterator, List, Optional, Sequence, Tuple

from contracts.board_validator import cell_value, require_board, require_coordinate
from contracts.errors import BoardContractError

from .grid import BOX, DIGITS, SIZE, Grid

Board = List[List["CellState"]]
Cell = Tuple[int, int]

_ALL_DIGITS: FrozenSet[int] = frozenset(DIGITS)
_EMPTY: FrozenSet[int] = frozenset()


@dataclass(frozen=True)
class CellState:
    """Value, origin and candidate marks of a single board cell."""

    value: Optional[int] = None
    is_fixed: bool = False
    candidates: FrozenSet[int] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        if self.is_fixed and self.value is None:
            raise BoardContractError("cell-fixed", "a fixed cell must hold a value")

    def evolve(self, **changes: Any) -> "CellState":
        if "is_fixed" in changes and changes["is_fixed"] != self.is_fixed:
            raise BoardContractError("cell-fixed", "is_fixed cannot change for an existing cell")
        if "candidates" in changes:
            changes["candidates"] = frozenset(changes["candidates"])
        return replace(self, **changes)


def board_from_puzzle(puzzle: Grid) -> Board:
    """Wrap a puzzle grid into cells; every clue becomes a fixed cell."""
    require_board(puzzle)
    return [
        [CellState(value=v or None, is_fixed=v != 0) for v in row]
        for row in puzzle
    ]


def board_values(board: Sequence[Sequence[Any]]) -> Grid:
    require_board(board)
    return [[cell_value(cell) for cell in row] for row in board]


def peers(row: int, col: int) -> Iterator[Cell]:
    """Yield the 20 distinct cells sharing a row, column or box with ``(row, col)``."""
    seen = {(row, col)}
    box_row = row - row % BOX
    box_col = col - col % BOX
    units = (
        [(row, c) for c in range(SIZE)],
        [(r, col) for r in range(SIZE)],
        [(box_row + r, box_col + c) for r in range(BOX) for c in range(BOX)],
    )
    for unit in units:
        for cell in unit:
            if cell not in seen:
                seen.add(cell)
                yield cell


def _candidates(board: Sequence[Sequence[Any]], row: int, col: int) -> FrozenSet[int]:
    if cell_value(board[row][col]):
        return _EMPTY

    used = set()
    for c in range(SIZE):
        used.add(cell_value(board[row][c]))
    for r in range(SIZE):
        used.add(cell_value(board[r][col]))
    box_row = row - row % BOX
    box_col = col - col % BOX
    for r in range(box_row, box_row + BOX):
        for c in range(box_col, box_col + BOX):
            used.add(cell_value(board[r][c]))
    return _ALL_DIGITS - used


def calculate_candidates(board: Sequence[Sequence[Any]], row: int, col: int) -> FrozenSet[int]:
    """Return the digits not excluded by the row, column and box of a cell.

    A filled cell has no candidates and yields the empty set.
    """
    require_board(board)
    require_coordinate(row, col)
    return _candidates(board, row, col)


def refresh_candidates(board: Board) -> None:
    """Recompute the candidate marks of every cell in place."""
    require_board(board)
    for r in range(SIZE):
        for c in range(SIZE):
            board[r][c] = board[r][c].evolve(candidates=_candidates(board, r, c))


def refresh_peer_candidates(board: Board, row: int, col: int) -> None:
    """Recompute candidates only for an edited cell and its peers.

    Equivalent to :func:`refresh_candidates` after a single edit, as long as
    the marks were current before it.
    """
    require_board(board)
    require_coordinate(row, col)
    for r, c in [(row, col), *peers(row, col)]:
        board[r][c] = board[r][c].evolve(candidates=_candidates(board, r, c))


def clear_candidates(board: Board) -> None:
    for r in range(SIZE):
        for c in range(SIZE):
            board[r][c] = board[r][c].evolve(candidates=_EMPTY)


__all__ = [
    "Board",
    "Cell",
    "CellState",
    "board_from_puzzle",
    "board_values",
    "calculate_candidates",
    "clear_candidates",
    "peers",
    "refresh_candidates",
    "refresh_peer_candidates",
]

# grid.py
# 9x9 grid helpers: constraint check, copying, clue counting and text codecs.

from __future__ import annotations

from typing import List

from contracts.board_validator import SIZE, require_board, require_coordinate, require_digit
from contracts.errors import BoardContractError

Grid = List[List[int]]

BOX = 3
DIGITS = tuple(range(1, SIZE + 1))
_DIGIT_SYMBOLS = "0123456789"


def create_empty_grid() -> Grid:
    return [[0] * SIZE for _ in range(SIZE)]


def grid_copy(g: Grid) -> Grid:
    return [row[:] for row in g]


def is_safe(grid: Grid, row: int, col: int, val: int) -> bool:
    """Return ``True`` if ``val`` can sit at ``(row, col)`` without a clash.

    Only the current contents of the row, column and box are inspected; the
    target cell is not required to be empty, callers ensure that.
    """
    require_board(grid)
    require_coordinate(row, col)
    require_digit(val)
    return _is_safe(grid, row, col, val)


def _is_safe(grid: Grid, row: int, col: int, val: int) -> bool:
    # unchecked; the grid, coordinate and digit are already validated
    for x in range(SIZE):
        if grid[row][x] == val or grid[x][col] == val:
            return False

    start_row = row - row % BOX
    start_col = col - col % BOX
    for r in range(BOX):
        for c in range(BOX):
            if grid[start_row + r][start_col + c] == val:
                return False
    return True


def count_clues(g: Grid) -> int:
    return sum(1 for r in range(SIZE) for c in range(SIZE) if g[r][c] != 0)


def is_valid_solution(g: Grid) -> bool:
    """Every row, column and 3x3 box is a permutation of 1..9."""
    full = set(DIGITS)
    for i in range(SIZE):
        if set(g[i]) != full:
            return False
        if {g[r][i] for r in range(SIZE)} != full:
            return False
    for br in range(0, SIZE, BOX):
        for bc in range(0, SIZE, BOX):
            box = {g[br + r][bc + c] for r in range(BOX) for c in range(BOX)}
            if box != full:
                return False
    return True


def to_string(g: Grid) -> str:
    return ''.join(str(g[r][c] or 0) for r in range(SIZE) for c in range(SIZE))


def from_string(s: str) -> Grid:
    """Parse an 81-character row-major string; ``0`` and ``.`` mark empties."""
    s = s.strip().replace("\n", "").replace(" ", "")
    if len(s) != SIZE * SIZE:
        raise BoardContractError("board-shape", f"expected 81 symbols, got {len(s)}")
    grid = []
    k = 0
    for r in range(SIZE):
        row = []
        for c in range(SIZE):
            ch = s[k]; k += 1
            if ch in _DIGIT_SYMBOLS:
                row.append(int(ch))
            elif ch == '.':
                row.append(0)
            else:
                raise BoardContractError("cell-value", f"unexpected symbol {ch!r} at ({r},{c})")
        grid.append(row)
    require_board(grid)
    return grid


def format_grid(g: Grid) -> str:
    lines = []
    for r in range(SIZE):
        if r % BOX == 0:
            lines.append("+-------+-------+-------+")
        row = []
        for c in range(SIZE):
            v = g[r][c]
            row.append(str(v) if v != 0 else ".")
            if c % BOX == 2:
                row.append("|")
        lines.append("| " + " ".join(row[:-1]) + " |")
    lines.append("+-------+-------+-------+")
    return "\n".join(lines)


__all__ = [
    "BOX",
    "DIGITS",
    "Grid",
    "SIZE",
    "count_clues",
    "create_empty_grid",
    "format_grid",
    "from_string",
    "grid_copy",
    "is_safe",
    "is_valid_solution",
    "to_string",
]

# filler.py
# Randomized backtracking that completes a grid into a full valid solution.

from __future__ import annotations

import logging
import random
from typing import Optional

from contracts.board_validator import require_board

from .grid import DIGITS, SIZE, Grid, _is_safe
from .shuffler import shuffle

_LOGGER = logging.getLogger(__name__)


def fill_grid(grid: Grid, rng: Optional[random.Random] = None) -> bool:
    """Fill every empty cell of ``grid`` in place.

    Returns ``True`` once a complete assignment is found and ``False`` when the
    given clues admit none (the grid is then restored to its input state).
    Starting from an empty grid always succeeds.
    """

    require_board(grid)
    filled = _fill(grid, rng)
    if not filled:
        _LOGGER.debug("fill_grid: no completion exists for the given clues")
    return filled


def _fill(grid: Grid, rng: Optional[random.Random]) -> bool:
    for row in range(SIZE):
        for col in range(SIZE):
            if grid[row][col] != 0:
                continue
            # fresh random digit order for every visited cell
            for val in shuffle(list(DIGITS), rng):
                if _is_safe(grid, row, col, val):
                    grid[row][col] = val
                    if _fill(grid, rng):
                        return True
                    grid[row][col] = 0
            return False
    return True


__all__ = ["fill_grid"]

# reducer.py
# Carve a solved grid into a puzzle by removing 180-degree symmetric clue pairs
# until the clue count reaches the difficulty target.

from __future__ import annotations

import enum
import logging
import random
from dataclasses import dataclass
from typing import Optional, Tuple

from contracts.errors import DifficultyError

from .filler import fill_grid
from .grid import SIZE, Grid, count_clues, create_empty_grid, grid_copy

_LOGGER = logging.getLogger(__name__)


class Difficulty(str, enum.Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"

    @classmethod
    def parse(cls, value: "Difficulty | str") -> "Difficulty":
        """Accept a member or its case-insensitive name; reject anything else."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        choices = ", ".join(member.value for member in cls)
        raise DifficultyError(f"expected one of {choices}, got {value!r}")


CLUE_TARGETS = {
    Difficulty.EASY: 40,
    Difficulty.MEDIUM: 34,
    Difficulty.HARD: 24,
}


def clues_target(difficulty: "Difficulty | str") -> int:
    return CLUE_TARGETS[Difficulty.parse(difficulty)]


@dataclass(frozen=True)
class PuzzleResult:
    """Carved puzzle together with the solved grid it was derived from.

    The grids are plain lists; callers that need to edit the puzzle should
    work on a copy so ``solution`` stays the canonical answer.
    """

    puzzle: Grid
    solution: Grid
    difficulty: Difficulty

    @property
    def clues(self) -> int:
        return count_clues(self.puzzle)


def symmetric_counterpart(row: int, col: int) -> Tuple[int, int]:
    return SIZE - 1 - row, SIZE - 1 - col


def carve(solution: Grid, target: int, rng: random.Random) -> Grid:
    """Return a copy of ``solution`` reduced to at most ``target`` clues.

    Picks random filled cells and clears them together with their mirror
    cell. No uniqueness or solvability check is performed.
    """
    puzzle = grid_copy(solution)
    clues = count_clues(puzzle)
    while clues > target:
        row = rng.randrange(SIZE)
        col = rng.randrange(SIZE)
        if puzzle[row][col] == 0:
            continue

        sym_row, sym_col = symmetric_counterpart(row, col)
        puzzle[row][col] = 0
        clues -= 1
        if puzzle[sym_row][sym_col] != 0:
            puzzle[sym_row][sym_col] = 0
            clues -= 1
        _LOGGER.debug("carve: cleared (%d,%d)/(%d,%d), %d clues left", row, col, sym_row, sym_col, clues)
    return puzzle


def generate_sudoku(
    difficulty: "Difficulty | str",
    *,
    rng: Optional[random.Random] = None,
    seed: Optional[int] = None,
) -> PuzzleResult:
    """Generate a puzzle and its solution for ``difficulty``.

    ``rng`` injects the random source; ``seed`` is a shortcut that builds a
    private :class:`random.Random`. Passing both is an error.
    """
    level = Difficulty.parse(difficulty)
    if rng is not None and seed is not None:
        raise ValueError("pass either rng or seed, not both")
    if rng is None:
        rng = random.Random(seed)

    solution = create_empty_grid()
    fill_grid(solution, rng)
    target = CLUE_TARGETS[level]
    puzzle = carve(solution, target, rng)
    _LOGGER.debug("generate_sudoku: %s puzzle with %d clues (target %d)", level.value, count_clues(puzzle), target)
    return PuzzleResult(puzzle=puzzle, solution=solution, difficulty=level)


__all__ = [
    "CLUE_TARGETS",
    "Difficulty",
    "PuzzleResult",
    "carve",
    "clues_target",
    "generate_sudoku",
    "symmetric_counterpart",
]

"""Explicit state object for one game of Sudoku.

The view layer owns rendering and input events; everything it needs to keep
between events lives on :class:`GameSession` instead of module globals.
"""

from __future__ import annotations

import enum
import logging
import random
from dataclasses import dataclass, field
from typing import Optional, Tuple

from contracts.board_validator import require_coordinate, require_digit

from .candidates import (
    Board,
    board_from_puzzle,
    board_values,
    clear_candidates,
    refresh_candidates,
    refresh_peer_candidates,
)
from .grid import SIZE, Grid, grid_copy
from .hints import Hint, find_hint
from .reducer import Difficulty, PuzzleResult, generate_sudoku

_LOGGER = logging.getLogger(__name__)


class InputMode(str, enum.Enum):
    NORMAL = "normal"
    CANDIDATE = "candidate"


def format_time(seconds: int) -> str:
    """Render elapsed seconds as zero padded ``MM:SS``."""
    if seconds < 0:
        raise ValueError("seconds must be non-negative")
    minutes, remaining = divmod(int(seconds), 60)
    return f"{minutes:02d}:{remaining:02d}"


def first_editable_cell(board: Board) -> Optional[Tuple[int, int]]:
    for r in range(SIZE):
        for c in range(SIZE):
            if not board[r][c].is_fixed:
                return r, c
    return None


@dataclass
class GameSession:
    """Board, retained solution and input settings of a running game."""

    board: Board
    solution: Grid
    difficulty: Difficulty
    selected: Optional[Tuple[int, int]] = None
    input_mode: InputMode = InputMode.NORMAL
    auto_candidates: bool = False
    last_hint: Optional[Hint] = field(default=None, repr=False)

    @classmethod
    def from_result(cls, result: PuzzleResult, *, auto_candidates: bool = False) -> "GameSession":
        board = board_from_puzzle(result.puzzle)
        session = cls(
            board=board,
            solution=grid_copy(result.solution),
            difficulty=result.difficulty,
            selected=first_editable_cell(board),
        )
        session.set_auto_candidates(auto_candidates)
        return session

    @classmethod
    def new(
        cls,
        difficulty: "Difficulty | str",
        *,
        rng: Optional[random.Random] = None,
        seed: Optional[int] = None,
        auto_candidates: bool = False,
    ) -> "GameSession":
        result = generate_sudoku(difficulty, rng=rng, seed=seed)
        return cls.from_result(result, auto_candidates=auto_candidates)

    def select(self, row: int, col: int) -> None:
        require_coordinate(row, col)
        self.selected = (row, col)

    def set_input_mode(self, mode: "InputMode | str") -> None:
        self.input_mode = InputMode(mode)

    def input_digit(self, digit: Optional[int]) -> bool:
        """Apply a digit (or ``None`` to erase) to the selected cell.

        Returns ``False`` when nothing changed: no selection or a fixed cell.
        With auto candidates on, erasing a value gives the cell its
        recomputed candidates back rather than leaving them empty.
        """
        if digit is not None:
            require_digit(digit)
        if self.selected is None:
            return False
        row, col = self.selected
        cell = self.board[row][col]
        if cell.is_fixed:
            return False

        if self.input_mode is InputMode.NORMAL:
            self.board[row][col] = cell.evolve(value=digit, candidates=frozenset())
            if self.auto_candidates:
                refresh_peer_candidates(self.board, row, col)
        elif digit is None:
            self.board[row][col] = cell.evolve(candidates=frozenset())
        else:
            marks = set(cell.candidates)
            marks.symmetric_difference_update({digit})
            self.board[row][col] = cell.evolve(candidates=marks)
        return True

    def set_auto_candidates(self, enabled: bool) -> None:
        self.auto_candidates = bool(enabled)
        if self.auto_candidates:
            refresh_candidates(self.board)
        else:
            clear_candidates(self.board)

    def hint(self) -> Optional[Hint]:
        """Select the cell suggested by the hint oracle, if any."""
        hint = find_hint(self.board)
        self.last_hint = hint
        if hint is not None:
            self.selected = hint.cell
            _LOGGER.debug("hint: %s at (%d,%d)", hint.technique, hint.row, hint.col)
        return hint

    def values(self) -> Grid:
        return board_values(self.board)

    def is_solved(self) -> bool:
        return self.values() == self.solution


__all__ = ["GameSession", "InputMode", "first_editable_cell", "format_time"]

"""Sudoku puzzle engine: generation, carving, candidates and hints."""

from __future__ import annotations

from .candidates import CellState, board_from_puzzle, board_values, calculate_candidates
from .filler import fill_grid
from .grid import count_clues, create_empty_grid, from_string, is_safe, to_string
from .hints import Hint, find_hint, find_hint_cell
from .reducer import CLUE_TARGETS, Difficulty, PuzzleResult, generate_sudoku
from .session import GameSession, InputMode, format_time
from .shuffler import shuffle

__all__ = [
    "CLUE_TARGETS",
    "CellState",
    "Difficulty",
    "GameSession",
    "Hint",
    "InputMode",
    "PuzzleResult",
    "board_from_puzzle",
    "board_values",
    "calculate_candidates",
    "count_clues",
    "create_empty_grid",
    "fill_grid",
    "find_hint",
    "find_hint_cell",
    "format_time",
    "from_string",
    "generate_sudoku",
    "is_safe",
    "shuffle",
    "to_string",
]

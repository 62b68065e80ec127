from __future__ import annotations

import random

import pytest

from contracts.errors import DifficultyError
from engine.grid import count_clues, create_empty_grid, is_valid_solution
from engine.filler import fill_grid
from engine.reducer import (
    CLUE_TARGETS,
    Difficulty,
    carve,
    clues_target,
    generate_sudoku,
    symmetric_counterpart,
)


def _assert_well_formed(result, target: int) -> None:
    assert is_valid_solution(result.solution)
    assert count_clues(result.puzzle) <= target
    for r in range(9):
        for c in range(9):
            value = result.puzzle[r][c]
            if value:
                assert value == result.solution[r][c]
            else:
                sr, sc = symmetric_counterpart(r, c)
                assert result.puzzle[sr][sc] == 0


def test_calibration_table():
    assert CLUE_TARGETS == {Difficulty.EASY: 40, Difficulty.MEDIUM: 34, Difficulty.HARD: 24}
    assert clues_target("Medium") == 34


@pytest.mark.parametrize("difficulty", ["easy", "medium", "hard"])
def test_generated_puzzle_matches_difficulty(difficulty):
    result = generate_sudoku(difficulty, seed=17)
    assert result.difficulty is Difficulty(difficulty)
    _assert_well_formed(result, CLUE_TARGETS[Difficulty(difficulty)])


def test_hard_generation_fifty_times():
    rng = random.Random(99)
    for _ in range(50):
        result = generate_sudoku(Difficulty.HARD, rng=rng)
        _assert_well_formed(result, 24)


def test_seeded_generation_is_reproducible():
    a = generate_sudoku("easy", seed=7)
    b = generate_sudoku("easy", seed=7)
    assert a.puzzle == b.puzzle
    assert a.solution == b.solution


def test_solution_is_not_the_puzzle_object():
    result = generate_sudoku("medium", seed=1)
    assert result.puzzle is not result.solution
    assert count_clues(result.solution) == 81


def test_rng_and_seed_are_exclusive():
    with pytest.raises(ValueError):
        generate_sudoku("easy", rng=random.Random(1), seed=1)


@pytest.mark.parametrize("bad", ["extreme", "", None, 3])
def test_unknown_difficulty_is_rejected(bad):
    with pytest.raises(DifficultyError) as excinfo:
        generate_sudoku(bad)
    assert excinfo.value.code == "difficulty-unknown"


def test_carve_leaves_full_grid_when_target_allows():
    solution = create_empty_grid()
    fill_grid(solution, random.Random(4))
    assert carve(solution, 81, random.Random(4)) == solution


def test_carve_does_not_touch_the_solution():
    solution = create_empty_grid()
    fill_grid(solution, random.Random(8))
    snapshot = [row[:] for row in solution]
    carve(solution, 24, random.Random(8))
    assert solution == snapshot


def test_centre_cell_is_its_own_counterpart():
    assert symmetric_counterpart(4, 4) == (4, 4)
    assert symmetric_counterpart(0, 2) == (8, 6)

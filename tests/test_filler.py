from __future__ import annotations

import random

import pytest

from contracts.errors import BoardContractError
from engine.filler import fill_grid
from engine.grid import create_empty_grid, grid_copy, is_valid_solution


def test_fill_empty_grid_produces_valid_solution():
    grid = create_empty_grid()
    assert fill_grid(grid, random.Random(3)) is True
    assert is_valid_solution(grid)


def test_fill_is_reproducible_with_seeded_rng():
    a = create_empty_grid()
    b = create_empty_grid()
    fill_grid(a, random.Random(11))
    fill_grid(b, random.Random(11))
    assert a == b


def test_fill_varies_across_seeds():
    grids = []
    for seed in range(5):
        grid = create_empty_grid()
        fill_grid(grid, random.Random(seed))
        grids.append(grid)
    assert len({str(g) for g in grids}) > 1


def test_fill_keeps_existing_clues():
    grid = create_empty_grid()
    grid[4][4] = 7
    grid[0][8] = 2
    assert fill_grid(grid, random.Random(5))
    assert grid[4][4] == 7
    assert grid[0][8] == 2
    assert is_valid_solution(grid)


def test_unfillable_grid_returns_false_and_is_restored():
    grid = create_empty_grid()
    grid[0][:8] = [1, 2, 3, 4, 5, 6, 7, 8]
    grid[1][8] = 9
    before = grid_copy(grid)
    assert fill_grid(grid, random.Random(0)) is False
    assert grid == before


def test_fill_rejects_malformed_grid():
    with pytest.raises(BoardContractError):
        fill_grid([[0] * 9 for _ in range(8)])

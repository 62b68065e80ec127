from __future__ import annotations

import pytest

from contracts.errors import BoardContractError
from engine.candidates import refresh_candidates
from engine.grid import count_clues, from_string
from engine.hints import NAKED_SINGLE
from engine.reducer import Difficulty, PuzzleResult
from engine.session import GameSession, InputMode, first_editable_cell, format_time

SOLVED = (
    "123456789"
    "456789123"
    "789123456"
    "214365897"
    "365897214"
    "897214365"
    "531642978"
    "642978531"
    "978531642"
)


def _session(*, auto_candidates: bool = False) -> GameSession:
    solution = from_string(SOLVED)
    puzzle = [row[:] for row in solution]
    for r, c in ((0, 0), (0, 1), (8, 8)):
        puzzle[r][c] = 0
    result = PuzzleResult(puzzle=puzzle, solution=solution, difficulty=Difficulty.HARD)
    return GameSession.from_result(result, auto_candidates=auto_candidates)


def test_new_session_selects_first_editable_cell():
    session = _session()
    assert session.selected == (0, 0)
    assert session.input_mode is InputMode.NORMAL
    assert first_editable_cell(session.board) == (0, 0)


def test_generated_session_mirrors_puzzle():
    session = GameSession.new("easy", seed=3)
    fixed = sum(cell.is_fixed for row in session.board for cell in row)
    assert fixed == count_clues(session.values()) <= 40
    assert session.difficulty is Difficulty.EASY
    assert not session.is_solved()


def test_fixed_cells_ignore_input():
    session = _session()
    session.select(0, 2)
    assert session.input_digit(9) is False
    assert session.board[0][2].value == 3


def test_normal_input_sets_and_clears_values():
    session = _session()
    session.select(0, 1)
    assert session.input_digit(2)
    assert session.board[0][1].value == 2
    assert session.board[0][1].candidates == frozenset()
    assert session.input_digit(None)
    assert session.board[0][1].value is None


def test_auto_candidates_track_edits():
    session = _session(auto_candidates=True)
    assert session.board[0][0].candidates == {1}
    assert session.board[0][1].candidates == {2}

    session.input_digit(2)  # wrong digit at (0,0)
    assert session.board[0][1].candidates == frozenset()

    expected = [row[:] for row in session.board]
    refresh_candidates(expected)
    assert session.board == expected

    session.input_digit(None)
    assert session.board[0][0].candidates == {1}
    assert session.board[0][1].candidates == {2}


def test_toggling_auto_candidates_off_clears_marks():
    session = _session(auto_candidates=True)
    session.set_auto_candidates(False)
    assert all(not cell.candidates for row in session.board for cell in row)


def test_candidate_mode_toggles_marks():
    session = _session()
    session.set_input_mode("candidate")
    session.select(8, 8)
    session.input_digit(3)
    session.input_digit(5)
    assert session.board[8][8].candidates == {3, 5}
    session.input_digit(3)
    assert session.board[8][8].candidates == {5}
    assert session.board[8][8].value is None
    session.input_digit(None)
    assert session.board[8][8].candidates == frozenset()


def test_hint_selects_the_cell():
    session = _session()
    session.select(4, 4)
    hint = session.hint()
    assert hint.cell == (0, 0)
    assert hint.technique == NAKED_SINGLE
    assert session.selected == (0, 0)


def test_solving_with_correct_digits():
    session = _session()
    for r, c in ((0, 0), (0, 1), (8, 8)):
        session.select(r, c)
        session.input_digit(session.solution[r][c])
    assert session.is_solved()
    assert session.hint() is None


def test_invalid_inputs_fail_fast():
    session = _session()
    with pytest.raises(BoardContractError):
        session.select(9, 0)
    with pytest.raises(BoardContractError):
        session.input_digit(0)
    with pytest.raises(ValueError):
        session.set_input_mode("pencil")


@pytest.mark.parametrize(
    "seconds, text",
    [(0, "00:00"), (9, "00:09"), (75, "01:15"), (3600, "60:00")],
)
def test_format_time(seconds, text):
    assert format_time(seconds) == text

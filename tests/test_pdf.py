from __future__ import annotations

import pytest

from engine.reducer import generate_sudoku
from printer.pdf import pdf_defaults, render_pdf


def test_pages_hold_rows_times_cols(tmp_path):
    puzzles = [generate_sudoku("easy", seed=seed).puzzle for seed in range(5)]
    out = tmp_path / "nested" / "sheet.pdf"
    pages = render_pdf(puzzles, out, rows=2, cols=2, footer="Difficulty: easy")
    assert pages == 2
    assert out.read_bytes().startswith(b"%PDF")


def test_bad_layouts_are_rejected(tmp_path):
    with pytest.raises(ValueError):
        render_pdf([], tmp_path / "empty.pdf")
    puzzle = generate_sudoku("hard", seed=1).puzzle
    with pytest.raises(ValueError):
        render_pdf([puzzle], tmp_path / "bad.pdf", rows=0)


def test_defaults_come_from_config():
    defaults = pdf_defaults()
    assert defaults["rows"] >= 1
    assert defaults["cols"] >= 1
    assert defaults["count"] >= 1
    assert defaults["out"].endswith(".pdf")

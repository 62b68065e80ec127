"""Boundary checks for grids, boards and coordinates handed to the engine.

The engine itself performs no sanitisation: every public entry point calls
into this module first and lets :class:`BoardContractError` propagate, so a
malformed board fails loudly instead of producing a wrong hint.
"""

from __future__ import annotations

from typing import Any, Sequence

from .errors import BoardContractError

SIZE = 9


def cell_value(cell: Any) -> int:
    """Return the digit held by ``cell`` (``0`` when empty).

    Accepts both plain grid integers and cell objects exposing ``value``.
    """

    value = getattr(cell, "value", cell)
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, int):
        raise BoardContractError("cell-value", f"expected int or None, got {value!r}")
    return value


def require_coordinate(row: Any, col: Any) -> None:
    for name, index in (("row", row), ("col", col)):
        if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index < SIZE:
            raise BoardContractError("coordinate-range", f"{name} must be in 0..8, got {index!r}")


def require_digit(value: Any, *, allow_empty: bool = False) -> None:
    low = 0 if allow_empty else 1
    if isinstance(value, bool) or not isinstance(value, int) or not low <= value <= SIZE:
        raise BoardContractError("cell-value", f"digit must be in {low}..9, got {value!r}")


def require_board(board: Any) -> None:
    """Ensure ``board`` is 9×9 and every cell is empty or holds 1..9."""

    if not isinstance(board, Sequence) or isinstance(board, (str, bytes)) or len(board) != SIZE:
        raise BoardContractError("board-shape", "board must have 9 rows")
    for r, row in enumerate(board):
        if not isinstance(row, Sequence) or isinstance(row, (str, bytes)) or len(row) != SIZE:
            raise BoardContractError("board-shape", f"row {r} must have 9 cells")
        for c, cell in enumerate(row):
            value = cell_value(cell)
            if not 0 <= value <= SIZE:
                raise BoardContractError("cell-value", f"cell ({r},{c}) holds {value!r}")


__all__ = [
    "SIZE",
    "cell_value",
    "require_board",
    "require_coordinate",
    "require_digit",
]

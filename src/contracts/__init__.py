"""Boundary contracts: board checks, error types and bundle validation."""

from __future__ import annotations

from .board_validator import require_board, require_coordinate, require_digit
from .errors import (
    BoardContractError,
    DifficultyError,
    ManagedValidationError,
    SchemaValidationError,
    ValidationIssue,
    ValidationReport,
)
from .schema_validator import assert_valid_bundle, validate_bundle

__all__ = [
    "BoardContractError",
    "DifficultyError",
    "ManagedValidationError",
    "SchemaValidationError",
    "ValidationIssue",
    "ValidationReport",
    "assert_valid_bundle",
    "require_board",
    "require_coordinate",
    "require_digit",
    "validate_bundle",
]

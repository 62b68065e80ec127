"""Shared error types for board and bundle validation."""

from __future__ import annotations


from dataclasses import dataclass
from typing import List, Optional

SEVERITY_ERROR = "ERROR"
SEVERITY_WARN = "WARN"


class BoardContractError(ValueError):
    """Raised when a caller hands the engine a malformed board or coordinate."""

    def __init__(self, code: str, detail: Optional[str] = None) -> None:
        self.code = code
        self.detail = detail
        message = code if detail is None else f"{code}:{detail}"
        super().__init__(message)


class DifficultyError(BoardContractError):
    """Raised for difficulty names outside the calibration table."""

    def __init__(self, detail: Optional[str] = None) -> None:
        super().__init__("difficulty-unknown", detail)


class SchemaValidationError(RuntimeError):
    """Exception raised when a bundle cannot be read or decoded."""

    def __init__(self, code: str, detail: Optional[str] = None) -> None:
        self.code = code
        self.detail = detail
        message = code if detail is None else f"{code}:{detail}"
        super().__init__(message)


@dataclass(frozen=True)
class ValidationIssue:
    """Single validation finding produced by a schema or invariant check."""

    code: str
    msg: str
    path: str
    severity: str


@dataclass(frozen=True)
class ValidationReport:
    """Aggregate result of validating a puzzle bundle."""

    ok: bool
    errors: List[ValidationIssue]
    warnings: List[ValidationIssue]
    timings_ms: dict[str, int]


class ManagedValidationError(RuntimeError):
    """Raised by :func:`assert_valid_bundle` and carries the full report."""

    def __init__(self, message: str, report: ValidationReport) -> None:
        super().__init__(message)
        self.report = report


def make_error(code: str, msg: str, path: str) -> ValidationIssue:
    """Construct an error-level :class:`ValidationIssue`."""

    return ValidationIssue(code=code, msg=msg, path=path, severity=SEVERITY_ERROR)


def make_warning(code: str, msg: str, path: str) -> ValidationIssue:
    """Construct a warning-level :class:`ValidationIssue`."""

    return ValidationIssue(code=code, msg=msg, path=path, severity=SEVERITY_WARN)


__all__ = [
    "SEVERITY_ERROR",
    "SEVERITY_WARN",
    "BoardContractError",
    "DifficultyError",
    "ManagedValidationError",
    "SchemaValidationError",
    "ValidationIssue",
    "ValidationReport",
    "make_error",
    "make_warning",
]

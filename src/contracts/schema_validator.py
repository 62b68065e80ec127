"""JSON Schema and invariant validation for puzzle bundles."""

from __future__ import annotations

import json
import time
from datetime import datetime
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List

import jsonschema

from .errors import (
    ManagedValidationError,
    SchemaValidationError,
    ValidationIssue,
    ValidationReport,
    make_error,
    make_warning,
)

_SCHEMA_PATH = Path(__file__).resolve().parent / "schemas" / "puzzle_bundle.schema.json"


@lru_cache(maxsize=1)
def load_schema() -> Dict[str, Any]:
    try:
        return json.loads(_SCHEMA_PATH.read_text("utf-8"))
    except FileNotFoundError as exc:  # pragma: no cover - broken install
        raise SchemaValidationError("schema-not-found", str(_SCHEMA_PATH)) from exc


def _jsonschema_path(error: jsonschema.ValidationError) -> str:
    components: List[str] = ["$"]
    for part in error.absolute_path:
        if isinstance(part, int):
            components.append(f"[{part}]")
        else:
            components.append(f".{part}")
    return "".join(components)


def _check_iso8601(value: Any) -> bool:
    if not isinstance(value, str):
        return False
    try:
        datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return False
    return True


def _schema_stage(bundle: Any) -> List[ValidationIssue]:
    validator = jsonschema.Draft202012Validator(load_schema())
    issues = [
        make_error("schema.violation", error.message, _jsonschema_path(error))
        for error in sorted(validator.iter_errors(bundle), key=lambda e: list(e.absolute_path))
    ]
    if isinstance(bundle, dict) and "created_at" in bundle and not _check_iso8601(bundle["created_at"]):
        issues.append(make_error("schema.bad_timestamp", "created_at must be ISO8601", "$.created_at"))
    return issues


def _invariant_stage(bundle: Dict[str, Any]) -> List[ValidationIssue]:
    # Imported here: the engine depends on this package for its own checks.
    from artifacts.bundle_store import compute_bundle_id
    from engine.grid import count_clues, from_string, is_valid_solution
    from engine.reducer import CLUE_TARGETS, Difficulty, symmetric_counterpart

    issues: List[ValidationIssue] = []
    puzzle = from_string(bundle["puzzle"])
    solution = from_string(bundle["solution"])

    if not is_valid_solution(solution):
        issues.append(make_error("solution.invalid", "solution is not a complete valid grid", "$.solution"))

    mismatch = next(
        ((r, c) for r in range(9) for c in range(9) if puzzle[r][c] and puzzle[r][c] != solution[r][c]),
        None,
    )
    if mismatch is not None:
        issues.append(
            make_error("puzzle.inconsistent", f"clue at {mismatch} differs from solution", "$.puzzle")
        )

    clues = count_clues(puzzle)
    if bundle["clues"] != clues:
        issues.append(make_error("clues.mismatch", f"clues field says {bundle['clues']}, puzzle has {clues}", "$.clues"))

    expected_target = CLUE_TARGETS[Difficulty.parse(bundle["difficulty"])]
    if bundle["clues_target"] != expected_target:
        issues.append(
            make_error("clues.target_mismatch", f"{bundle['difficulty']} targets {expected_target} clues", "$.clues_target")
        )
    if clues > expected_target:
        issues.append(make_error("clues.over_target", f"{clues} clues exceed target {expected_target}", "$.puzzle"))

    asymmetric = any(
        (puzzle[r][c] == 0) != (puzzle[sr][sc] == 0)
        for r in range(9)
        for c in range(9)
        for sr, sc in [symmetric_counterpart(r, c)]
    )
    if asymmetric:
        issues.append(make_warning("puzzle.asymmetric", "empty cells are not centrally symmetric", "$.puzzle"))

    if bundle["bundle_id"] != compute_bundle_id(bundle):
        issues.append(make_error("bundle.id_mismatch", "bundle_id does not match content", "$.bundle_id"))
    return issues


def validate_bundle(bundle: Any) -> ValidationReport:
    """Validate ``bundle`` against the schema, then against puzzle invariants.

    Invariants only run when the schema stage is clean.
    """
    timings = {"schema": 0, "invariants": 0}

    schema_start = time.perf_counter()
    issues = _schema_stage(bundle)
    timings["schema"] = int((time.perf_counter() - schema_start) * 1000)

    if not issues:
        invariants_start = time.perf_counter()
        issues.extend(_invariant_stage(bundle))
        timings["invariants"] = int((time.perf_counter() - invariants_start) * 1000)

    errors = [issue for issue in issues if issue.severity != "WARN"]
    warnings = [issue for issue in issues if issue.severity == "WARN"]
    return ValidationReport(ok=not errors, errors=errors, warnings=warnings, timings_ms=timings)


def assert_valid_bundle(bundle: Any, *, warn_as_error: bool = False) -> None:
    report = validate_bundle(bundle)
    if report.ok and not (warn_as_error and report.warnings):
        return
    issues = report.errors[:]
    if warn_as_error:
        issues.extend(report.warnings)
    codes = ", ".join(issue.code for issue in issues[:5])
    if len(issues) > 5:
        codes += ", …"
    raise ManagedValidationError(f"Validation failed for PuzzleBundle: {codes}", report)


__all__ = ["assert_valid_bundle", "load_schema", "validate_bundle"]

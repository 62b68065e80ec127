"""Canonical storage of generated puzzle bundles."""

from __future__ import annotations

import copy
import hashlib
import json
import math
import unicodedata
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional

from contracts.errors import SchemaValidationError
from engine.grid import count_clues, from_string, to_string
from engine.reducer import CLUE_TARGETS, Difficulty, PuzzleResult

BUNDLE_TYPE = "PuzzleBundle"
SCHEMA_VERSION = "1"

# Fields that do not take part in the content hash.
_UNHASHED_FIELDS = ("bundle_id", "created_at")


def _normalize(obj: Any) -> Any:
    """Return a deep-normalised structure suitable for canonical JSON."""

    if isinstance(obj, dict):
        return {str(k): _normalize(v) for k, v in sorted(obj.items(), key=lambda item: str(item[0]))}
    if isinstance(obj, (list, tuple)):
        return [_normalize(item) for item in obj]
    if isinstance(obj, str):
        return unicodedata.normalize("NFC", obj)
    if isinstance(obj, float):
        if not math.isfinite(obj):
            raise ValueError("Non-finite numbers are not allowed in bundles")
        return obj
    return obj


def canonicalize(obj: Dict[str, Any]) -> bytes:
    """Serialise *obj* into canonical JSON bytes.

    Dictionaries are sorted lexicographically by key, strings are normalised to
    NFC, and the output does not contain insignificant whitespace.
    """

    normalised = _normalize(obj)
    return json.dumps(normalised, sort_keys=True, separators=(",", ":"), ensure_ascii=False).encode("utf-8")


def compute_bundle_id(obj: Dict[str, Any]) -> str:
    """Compute the content identifier for *obj*.

    The hash covers the canonical JSON form without ``bundle_id`` and
    ``created_at``, so regenerating the same puzzle yields the same id.
    """

    base = {k: v for k, v in copy.deepcopy(obj).items() if k not in _UNHASHED_FIELDS}
    digest = hashlib.sha256(canonicalize(base)).hexdigest()
    return f"sha256-{digest}"


def make_bundle(
    result: PuzzleResult,
    *,
    seed: Optional[int] = None,
    created_at: Optional[str] = None,
) -> Dict[str, Any]:
    """Describe ``result`` as a JSON-ready bundle with its content id."""

    bundle: Dict[str, Any] = {
        "type": BUNDLE_TYPE,
        "schema_version": SCHEMA_VERSION,
        "difficulty": result.difficulty.value,
        "clues_target": CLUE_TARGETS[result.difficulty],
        "clues": count_clues(result.puzzle),
        "seed": seed,
        "puzzle": to_string(result.puzzle),
        "solution": to_string(result.solution),
        "created_at": created_at or datetime.now(timezone.utc).isoformat(timespec="seconds"),
    }
    bundle["bundle_id"] = compute_bundle_id(bundle)
    return bundle


def save_bundle(bundle: Dict[str, Any], directory: str | Path) -> Path:
    """Persist a bundle as ``<directory>/<bundle_id>.json`` and return the path.

    A ``bundle_id`` already present on *bundle* must match its content.
    """

    if not isinstance(bundle, dict):
        raise TypeError("Bundle must be a mapping")

    bundle_copy: Dict[str, Any] = copy.deepcopy(bundle)
    bundle_id = compute_bundle_id(bundle_copy)
    existing_id = bundle_copy.get("bundle_id")
    if existing_id is not None and existing_id != bundle_id:
        raise ValueError("Provided bundle_id does not match canonical hash")
    bundle_copy["bundle_id"] = bundle_id

    target_dir = Path(directory)
    target_dir.mkdir(parents=True, exist_ok=True)
    target_path = target_dir / f"{bundle_id}.json"
    target_path.write_bytes(canonicalize(bundle_copy))

    bundle["bundle_id"] = bundle_id
    return target_path


def load_bundle(path: str | Path) -> Dict[str, Any]:
    """Read a bundle file; unreadable or non-object content is rejected."""

    resolved = Path(path)
    try:
        data = json.loads(resolved.read_text("utf-8"))
    except FileNotFoundError as exc:
        raise SchemaValidationError("bundle-not-found", str(resolved)) from exc
    except OSError as exc:
        raise SchemaValidationError("bundle-unreadable", f"{resolved}: {exc.strerror or exc}") from exc
    except UnicodeDecodeError as exc:
        raise SchemaValidationError("invalid-json", f"{resolved}: not UTF-8 text") from exc
    except json.JSONDecodeError as exc:
        raise SchemaValidationError("invalid-json", f"{resolved}: {exc.msg}") from exc
    if not isinstance(data, dict):
        raise SchemaValidationError("invalid-json", "bundle must be a JSON object")
    return data


def bundle_to_result(bundle: Dict[str, Any]) -> PuzzleResult:
    return PuzzleResult(
        puzzle=from_string(bundle["puzzle"]),
        solution=from_string(bundle["solution"]),
        difficulty=Difficulty.parse(bundle["difficulty"]),
    )


__all__ = [
    "BUNDLE_TYPE",
    "SCHEMA_VERSION",
    "bundle_to_result",
    "canonicalize",
    "compute_bundle_id",
    "load_bundle",
    "make_bundle",
    "save_bundle",
]

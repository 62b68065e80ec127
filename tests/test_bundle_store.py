from __future__ import annotations

import json

import pytest

from artifacts import bundle_store
from contracts.errors import SchemaValidationError
from engine.reducer import generate_sudoku


def _bundle(**kwargs) -> dict:
    result = generate_sudoku("medium", seed=31)
    return bundle_store.make_bundle(result, seed=31, **kwargs)


def test_bundle_describes_the_result():
    bundle = _bundle()
    assert bundle["type"] == "PuzzleBundle"
    assert bundle["difficulty"] == "medium"
    assert bundle["clues_target"] == 34
    assert bundle["clues"] <= 34
    assert len(bundle["puzzle"]) == 81
    assert bundle["bundle_id"].startswith("sha256-")


def test_bundle_id_ignores_creation_time():
    a = _bundle(created_at="2024-01-01T00:00:00+00:00")
    b = _bundle(created_at="2025-06-30T12:00:00+00:00")
    assert a["bundle_id"] == b["bundle_id"]


def test_canonical_form_is_key_order_independent():
    assert bundle_store.canonicalize({"b": 2, "a": 1}) == bundle_store.canonicalize({"a": 1, "b": 2})
    with pytest.raises(ValueError):
        bundle_store.canonicalize({"x": float("nan")})


def test_save_and_load_round_trip(tmp_path):
    bundle = _bundle()
    path = bundle_store.save_bundle(bundle, tmp_path / "bundles")
    assert path.name == f"{bundle['bundle_id']}.json"
    loaded = bundle_store.load_bundle(path)
    assert loaded == bundle
    result = bundle_store.bundle_to_result(loaded)
    assert result.puzzle == generate_sudoku("medium", seed=31).puzzle


def test_save_rejects_mismatched_id(tmp_path):
    bundle = _bundle()
    bundle["bundle_id"] = "sha256-" + "0" * 64
    with pytest.raises(ValueError):
        bundle_store.save_bundle(bundle, tmp_path)


def test_load_rejects_bad_files(tmp_path):
    broken = tmp_path / "broken.json"
    broken.write_text("{not json", encoding="utf-8")
    with pytest.raises(SchemaValidationError) as excinfo:
        bundle_store.load_bundle(broken)
    assert excinfo.value.code == "invalid-json"

    listing = tmp_path / "list.json"
    listing.write_text(json.dumps([1, 2]), encoding="utf-8")
    with pytest.raises(SchemaValidationError):
        bundle_store.load_bundle(listing)

    with pytest.raises(SchemaValidationError) as excinfo:
        bundle_store.load_bundle(tmp_path / "missing.json")
    assert excinfo.value.code == "bundle-not-found"


def test_load_rejects_undecodable_and_directory_paths(tmp_path):
    binary = tmp_path / "binary.json"
    binary.write_bytes(b"\xff\xfe{}")
    with pytest.raises(SchemaValidationError) as excinfo:
        bundle_store.load_bundle(binary)
    assert excinfo.value.code == "invalid-json"

    with pytest.raises(SchemaValidationError) as excinfo:
        bundle_store.load_bundle(tmp_path)
    assert excinfo.value.code == "bundle-unreadable"

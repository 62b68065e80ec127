"""Command line front end for the Sudoku engine."""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
import time
from pathlib import Path
from typing import List

from artifacts import bundle_store
from contracts.errors import BoardContractError, ManagedValidationError, SchemaValidationError
from contracts.schema_validator import validate_bundle
from engine.candidates import calculate_candidates
from engine.grid import format_grid, from_string
from engine.hints import find_hint
from engine.reducer import generate_sudoku
from printer.pdf import pdf_defaults, render_pdf
from project_config import get_config, resolve_generator_settings
from telemetry import log as event_log

_LOGGER = logging.getLogger(__name__)


def _configure_logging(level: str | None) -> None:
    logging_cfg = get_config().get("logging", {})
    if not isinstance(logging_cfg, dict):
        logging_cfg = {}
    name = (level or str(logging_cfg.get("level", "WARNING"))).upper()
    logging.basicConfig(level=getattr(logging, name, logging.WARNING), format="%(levelname)s %(name)s: %(message)s")
    if logging_cfg.get("events_enabled", False):
        event_log.configure(
            logging_cfg.get("events_dir", "logs/events"),
            max_bytes=logging_cfg.get("events_max_bytes"),
        )


def _settings(args: argparse.Namespace):
    return resolve_generator_settings(
        env=dict(os.environ),
        overrides={"difficulty": args.difficulty, "seed": args.seed},
    )


def _generate(difficulty: str, seed: int | None):
    start = time.perf_counter()
    result = generate_sudoku(difficulty, seed=seed)
    elapsed_ms = int((time.perf_counter() - start) * 1000)
    event_log.append_event(
        {
            "event": "generate.completed",
            "difficulty": result.difficulty.value,
            "seed": seed,
            "clues": result.clues,
            "elapsed_ms": elapsed_ms,
        }
    )
    return result


def cmd_generate(args: argparse.Namespace) -> int:
    settings = _settings(args)
    result = _generate(settings.difficulty, settings.seed)
    bundle = bundle_store.make_bundle(result, seed=settings.seed)
    if args.out:
        path = bundle_store.save_bundle(bundle, args.out)
        _LOGGER.info("saved bundle to %s", path)
    if args.json:
        print(json.dumps(bundle, indent=2, sort_keys=True))
    else:
        print(f"Puzzle ({result.difficulty.value}, {result.clues} clues):")
        print(format_grid(result.puzzle))
        print("\nSolution:")
        print(format_grid(result.solution))
    return 0


def cmd_hint(args: argparse.Namespace) -> int:
    board = from_string(args.puzzle)
    hint = find_hint(board)
    if hint is None:
        print("no hint")
    else:
        print(f"{hint.row} {hint.col} {hint.technique}")
    return 0


def cmd_candidates(args: argparse.Namespace) -> int:
    board = from_string(args.puzzle)
    candidates = calculate_candidates(board, args.row, args.col)
    print(" ".join(str(d) for d in sorted(candidates)))
    return 0


def cmd_validate(args: argparse.Namespace) -> int:
    bundle = bundle_store.load_bundle(args.file)
    report = validate_bundle(bundle)
    for issue in report.errors + report.warnings:
        print(f"{issue.severity} {issue.code} {issue.path}: {issue.msg}")
    if report.ok:
        print("ok")
    return 0 if report.ok else 1


def cmd_pdf(args: argparse.Namespace) -> int:
    defaults = pdf_defaults()
    settings = _settings(args)
    count = args.count if args.count is not None else defaults["count"]
    if count < 1:
        raise SystemExit("--count must be positive")
    puzzles = []
    for i in range(count):
        seed = None if settings.seed is None else settings.seed + i
        puzzles.append(_generate(settings.difficulty, seed).puzzle)
    out_path = Path(args.out or defaults["out"])
    pages = render_pdf(
        puzzles,
        out_path,
        rows=defaults["rows"],
        cols=defaults["cols"],
        margin_cm=defaults["margin_cm"],
        gap_cm=defaults["gap_cm"],
        font_scale=defaults["font_scale"],
        footer=f"Difficulty: {settings.difficulty}",
    )
    print(f"PDF with {pages} pages and {len(puzzles)} puzzles saved to: {out_path.resolve()}")
    return 0


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Sudoku puzzle generator and hint helper")
    parser.add_argument("--log-level", default=None, help="Override [logging].level from config.toml")
    sub = parser.add_subparsers(dest="command", required=True)

    generate = sub.add_parser("generate", help="Generate a puzzle and its solution")
    generate.add_argument("--difficulty", default=None, help="easy, medium or hard")
    generate.add_argument("--seed", type=int, default=None)
    generate.add_argument("--out", default=None, help="Directory to save the bundle JSON into")
    generate.add_argument("--json", action="store_true", help="Print the bundle as JSON")
    generate.set_defaults(func=cmd_generate)

    hint = sub.add_parser("hint", help="Suggest the next cell to look at")
    hint.add_argument("puzzle", help="81-character row-major grid, 0 or . for empty")
    hint.set_defaults(func=cmd_hint)

    candidates = sub.add_parser("candidates", help="List the candidates of a cell")
    candidates.add_argument("puzzle")
    candidates.add_argument("row", type=int)
    candidates.add_argument("col", type=int)
    candidates.set_defaults(func=cmd_candidates)

    validate = sub.add_parser("validate", help="Validate a saved puzzle bundle")
    validate.add_argument("file")
    validate.set_defaults(func=cmd_validate)

    pdf = sub.add_parser("pdf", help="Render a printable sheet of puzzles")
    pdf.add_argument("--count", type=int, default=None)
    pdf.add_argument("--difficulty", default=None)
    pdf.add_argument("--seed", type=int, default=None)
    pdf.add_argument("--out", default=None)
    pdf.set_defaults(func=cmd_pdf)

    return parser


def main(argv: List[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.log_level)
    try:
        return args.func(args)
    except (BoardContractError, SchemaValidationError, ManagedValidationError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())

"""Utility helpers for loading project-wide configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

try:  # Python 3.11+
    import tomllib  # type: ignore[attr-defined]
except ModuleNotFoundError:  # pragma: no cover - fallback for older Python
    import tomli as tomllib  # type: ignore[import-untyped]


_CONFIG_FILENAME = "config.toml"
_CONFIG_ENV = "SUDOKU_CONFIG"
_DEFAULT_DIFFICULTY = "hard"


def _config_path() -> Path:
    override = os.environ.get(_CONFIG_ENV)
    if override:
        return Path(override)
    return Path(__file__).resolve().parents[1] / _CONFIG_FILENAME


@lru_cache(maxsize=1)
def get_config() -> Dict[str, Any]:
    """Load and cache the project configuration as a dictionary.

    A missing file yields an empty configuration so built-in defaults apply.
    """
    path = _config_path()
    if not path.exists():
        return {}
    with path.open("rb") as fh:
        return tomllib.load(fh)


def reload() -> None:
    """Clear the cached configuration."""

    get_config.cache_clear()


def get_section(path: str, default: Any = None) -> Any:
    """Retrieve a nested configuration value using dotted notation."""

    data: Any = get_config()
    for part in path.split("."):
        if isinstance(data, dict) and part in data:
            data = data[part]
        else:
            if default is not None:
                return default
            raise KeyError(f"Configuration path '{path}' not found")
    return data


@dataclass(frozen=True)
class GeneratorSettings:
    """Generation defaults after precedence resolution."""

    difficulty: str
    seed: Optional[int]


def _parse_int(value: Any) -> Optional[int]:
    try:
        if isinstance(value, bool):
            return None
        if isinstance(value, int):
            return value
        if isinstance(value, str) and value.strip():
            return int(value)
    except (TypeError, ValueError):
        return None
    return None


def _parse_str(value: Any) -> Optional[str]:
    if isinstance(value, str) and value.strip():
        return value.strip().lower()
    return None


def resolve_generator_settings(
    env: Mapping[str, str] | None = None,
    overrides: Mapping[str, Any] | None = None,
) -> GeneratorSettings:
    """Merge generator settings: ``overrides`` > ``env`` > TOML > defaults.

    ``overrides`` carries explicit CLI values; ``None`` entries are ignored.
    The difficulty name is not validated here, the engine rejects unknown
    names at its boundary.
    """

    section = get_config().get("generator", {})
    if not isinstance(section, dict):
        section = {}

    difficulty = _parse_str(section.get("difficulty")) or _DEFAULT_DIFFICULTY
    seed = _parse_int(section.get("seed"))

    env = env or {}
    env_difficulty = _parse_str(env.get("SUDOKU_DIFFICULTY"))
    if env_difficulty is not None:
        difficulty = env_difficulty
    env_seed = _parse_int(env.get("SUDOKU_SEED"))
    if env_seed is not None:
        seed = env_seed

    overrides = overrides or {}
    cli_difficulty = _parse_str(overrides.get("difficulty"))
    if cli_difficulty is not None:
        difficulty = cli_difficulty
    cli_seed = _parse_int(overrides.get("seed"))
    if cli_seed is not None:
        seed = cli_seed

    return GeneratorSettings(difficulty=difficulty, seed=seed)


__all__ = [
    "GeneratorSettings",
    "get_config",
    "get_section",
    "reload",
    "resolve_generator_settings",
]

"""Game settings from environment variables and optional .env files."""

from __future__ import annotations

import os
from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from pathlib import Path

from salvo.game.core.models import BOARD_SIZE, NUM_SHIPS, SHIP_LENGTH, STARTING_AMMO, GameRules

DEFAULT_ENV_FILES: tuple[str, ...] = (
    "appdata/config/.env",
    "appdata/config/.env.local",
    ".env",
    ".env.local",
)


@dataclass(frozen=True, slots=True)
class RuntimeSettings:
    """Process-level settings resolved from environment."""

    rules: GameRules
    seed: int | None
    persist_highscore: bool


def load_env_file(path: str = ".env", *, override_existing: bool = True) -> None:
    """Copy KEY=VALUE pairs from an env file into ``os.environ``.

    Missing files are skipped. Existing variables are replaced unless
    ``override_existing`` is false.
    """
    env_path = _resolve_env_path(path)
    if not env_path.is_file():
        return
    for key, value in _iter_env_pairs(env_path.read_text(encoding="utf-8")):
        if override_existing or key not in os.environ:
            os.environ[key] = value


def load_default_env_files(
    *, override_existing: bool = True, paths: Sequence[str] | None = None
) -> None:
    """Load env files in order; later files win over earlier ones."""
    for path in DEFAULT_ENV_FILES if paths is None else paths:
        load_env_file(path, override_existing=override_existing)


def load_game_rules() -> GameRules:
    """Build game rules from SALVO_* variables, falling back to classic values."""
    return GameRules(
        board_size=_int("SALVO_BOARD_SIZE", BOARD_SIZE),
        ship_length=_int("SALVO_SHIP_LENGTH", SHIP_LENGTH),
        num_ships=_int("SALVO_NUM_SHIPS", NUM_SHIPS),
        starting_ammo=_int("SALVO_STARTING_AMMO", STARTING_AMMO),
    )


def load_runtime_settings() -> RuntimeSettings:
    """Resolve all runtime settings from the environment."""
    return RuntimeSettings(
        rules=load_game_rules(),
        seed=_int("SALVO_SEED", None),
        persist_highscore=_flag("SALVO_PERSIST_HIGHSCORE", False),
    )


def _iter_env_pairs(text: str) -> Iterator[tuple[str, str]]:
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if line.startswith("#"):
            continue
        key, sep, value = line.partition("=")
        key = key.strip()
        if not sep or not key:
            continue
        value = value.strip()
        if len(value) >= 2 and value[0] == value[-1] and value[0] in "'\"":
            value = value[1:-1]
        yield key, value


def _flag(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _int(name: str, default: int | None) -> int | None:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _resolve_env_path(path: str) -> Path:
    """Resolve relative env paths against cwd first, then the project root."""
    candidate = Path(path)
    if candidate.is_absolute() or candidate.exists():
        return candidate
    return Path(__file__).resolve().parents[3] / path

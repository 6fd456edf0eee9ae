"""Unified Salvo app-data paths."""

from __future__ import annotations

import os
from pathlib import Path

HIGHSCORE_FILE_NAME = "highscore.json"


def resolve_app_data_root() -> Path:
    """Resolve app-data root directory for Salvo runtime state."""
    configured = os.getenv("SALVO_APP_DATA_DIR", "").strip()
    if configured:
        candidate = Path(configured)
        if candidate.is_absolute():
            return candidate
        return resolve_game_root() / candidate
    return resolve_game_root() / "appdata"


def resolve_game_root() -> Path:
    """Directory holding the installed salvo package."""
    return Path(__file__).resolve().parents[2]


def resolve_logs_dir() -> Path:
    """Resolve logs directory, honouring SALVO_LOG_DIR."""
    configured = os.getenv("SALVO_LOG_DIR", "").strip()
    if not configured:
        return resolve_app_data_root() / "logs"
    candidate = Path(configured)
    if candidate.is_absolute():
        return candidate
    return resolve_app_data_root() / candidate


def resolve_highscore_path() -> Path:
    return resolve_app_data_root() / HIGHSCORE_FILE_NAME


def ensure_app_data_dirs() -> dict[str, Path]:
    """Create app-data directories and return resolved paths."""
    root = resolve_app_data_root()
    logs = resolve_logs_dir()
    root.mkdir(parents=True, exist_ok=True)
    logs.mkdir(parents=True, exist_ok=True)
    return {"root": root, "logs": logs, "highscore": resolve_highscore_path()}

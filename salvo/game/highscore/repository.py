"""Persistence layer for the best score across runs."""

from __future__ import annotations

import json
import logging
from pathlib import Path

logger = logging.getLogger(__name__)

SCHEMA_VERSION = 1


class HighscoreRepository:
    """JSON file repository for a single highscore value."""

    def __init__(self, path: Path) -> None:
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> int:
        """Load the stored highscore, or 0 when nothing usable is stored."""
        if not self._path.exists():
            return 0
        try:
            with self._path.open("r", encoding="utf-8") as handle:
                payload = json.load(handle)
        except (OSError, json.JSONDecodeError) as exc:
            logger.warning("highscore_unreadable path=%s error=%s", self._path, exc)
            return 0
        return _payload_to_score(payload, self._path)

    def save(self, score: int) -> None:
        """Persist the highscore, replacing any previous value."""
        if score < 0:
            raise ValueError("Highscore cannot be negative.")
        self._path.parent.mkdir(parents=True, exist_ok=True)
        with self._path.open("w", encoding="utf-8") as handle:
            json.dump({"version": SCHEMA_VERSION, "highscore": score}, handle, indent=2)


def _payload_to_score(payload: object, path: Path) -> int:
    if not isinstance(payload, dict) or payload.get("version") != SCHEMA_VERSION:
        logger.warning("highscore_unsupported_payload path=%s", path)
        return 0
    value = payload.get("highscore")
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        logger.warning("highscore_invalid_value path=%s value=%r", path, value)
        return 0
    return value

"""Application entry point."""

import logging
import random

from salvo.game.app.console import run_console
from salvo.game.app.controller import GameController
from salvo.game.highscore.repository import HighscoreRepository
from salvo.game.infra.app_data import ensure_app_data_dirs
from salvo.game.infra.config import load_default_env_files, load_runtime_settings
from salvo.game.infra.logging import setup_logging, shutdown_logging

logger = logging.getLogger(__name__)


def main() -> None:
    """Run the Salvo console game."""
    load_default_env_files()
    paths = ensure_app_data_dirs()
    setup_logging()
    settings = load_runtime_settings()
    logger.info(
        "app_data_paths root=%s logs=%s highscore=%s",
        paths["root"],
        paths["logs"],
        paths["highscore"],
    )
    repository = HighscoreRepository(paths["highscore"]) if settings.persist_highscore else None
    controller = GameController(
        rules=settings.rules,
        rng=random.Random(settings.seed),
        highscore_repository=repository,
    )
    try:
        run_console(controller)
    finally:
        shutdown_logging()


if __name__ == "__main__":
    main()

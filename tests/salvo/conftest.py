from __future__ import annotations

import random

import pytest

from salvo.game.app.controller import GameController
from salvo.game.core.models import Coord, GameRules, Orientation, Ship, ShipPlacement
from salvo.game.highscore.repository import HighscoreRepository


def make_valid_ships() -> list[Ship]:
    return [
        Ship(ShipPlacement(Coord(0, 0), Orientation.HORIZONTAL)),
        Ship(ShipPlacement(Coord(2, 4), Orientation.VERTICAL)),
        Ship(ShipPlacement(Coord(6, 0), Orientation.HORIZONTAL)),
    ]


@pytest.fixture
def rules() -> GameRules:
    return GameRules()


@pytest.fixture
def valid_ships() -> list[Ship]:
    return make_valid_ships()


@pytest.fixture
def empty_cells() -> list[Coord]:
    # Clear of every ship in make_valid_ships().
    return [Coord(row, col) for row in range(1, 6) for col in range(0, 4)]


@pytest.fixture
def seeded_rng() -> random.Random:
    return random.Random(1337)


@pytest.fixture
def highscore_repository(tmp_path) -> HighscoreRepository:
    return HighscoreRepository(tmp_path / "highscore.json")


@pytest.fixture
def controller_factory():
    def _make(
        seed: int = 1337,
        rules: GameRules | None = None,
        highscore_repository: HighscoreRepository | None = None,
    ) -> GameController:
        return GameController(
            rules=rules,
            rng=random.Random(seed),
            highscore_repository=highscore_repository,
        )

    return _make

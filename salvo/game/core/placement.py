"""Random ship placement with no overlapping or side-touching ships."""

from __future__ import annotations

import random
from collections.abc import Sequence

from salvo.game.core.models import (
    Coord,
    GameRules,
    Orientation,
    Ship,
    ShipPlacement,
    cells_for_placement,
)

MAX_PLACEMENT_ATTEMPTS = 5_000


class PlacementInfeasibleError(RuntimeError):
    """Raised when no valid placement was found within the attempt cap."""


def are_adjacent(first: Coord, second: Coord) -> bool:
    """Return whether two cells overlap or share a side.

    Diagonal neighbours are not adjacent.
    """
    return abs(first.row - second.row) + abs(first.col - second.col) <= 1


def is_valid_placement(cells: Sequence[Coord], existing_ships: Sequence[Ship]) -> bool:
    """Return whether candidate cells stay clear of every existing ship."""
    for ship in existing_ships:
        for occupied in ship.cells:
            if any(are_adjacent(occupied, cell) for cell in cells):
                return False
    return True


class PlacementGenerator:
    """Bounded rejection sampler for ship placements."""

    def __init__(
        self,
        rules: GameRules,
        rng: random.Random,
        *,
        max_attempts: int = MAX_PLACEMENT_ATTEMPTS,
    ) -> None:
        self._rules = rules
        self._rng = rng
        self._max_attempts = max_attempts

    def generate(self, existing_ships: Sequence[Ship]) -> Ship:
        """Return one new ship valid against all previously placed ships."""
        for _ in range(self._max_attempts):
            placement = self._random_placement()
            if is_valid_placement(cells_for_placement(placement), existing_ships):
                return Ship(placement=placement)
        raise PlacementInfeasibleError(
            f"No valid placement after {self._max_attempts} attempts "
            f"(board={self._rules.board_size}, length={self._rules.ship_length}, "
            f"placed={len(existing_ships)})."
        )

    def generate_fleet(self) -> list[Ship]:
        """Place the full fleet for one game."""
        ships: list[Ship] = []
        for _ in range(self._rules.num_ships):
            ships.append(self.generate(ships))
        return ships

    def _random_placement(self) -> ShipPlacement:
        size = self._rules.board_size
        length = self._rules.ship_length
        orientation = self._rng.choice([Orientation.HORIZONTAL, Orientation.VERTICAL])
        if orientation is Orientation.HORIZONTAL:
            row = self._rng.randrange(size)
            col = self._rng.randrange(size - length + 1)
        else:
            row = self._rng.randrange(size - length + 1)
            col = self._rng.randrange(size)
        return ShipPlacement(bow=Coord(row=row, col=col), orientation=orientation, length=length)

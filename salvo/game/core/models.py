"""Core domain models used by game logic."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum, StrEnum

BOARD_SIZE = 7
SHIP_LENGTH = 3
NUM_SHIPS = 3
STARTING_AMMO = 15


class Orientation(StrEnum):
    """Ship orientation."""

    HORIZONTAL = "HORIZONTAL"
    VERTICAL = "VERTICAL"


class ShotResult(StrEnum):
    """Result of a single shot."""

    HIT = "HIT"
    HIT_AND_SUNK = "HIT_AND_SUNK"
    HIT_AND_GAME_WON = "HIT_AND_GAME_WON"
    MISS = "MISS"
    MISS_AND_OUT_OF_AMMO = "MISS_AND_OUT_OF_AMMO"
    IGNORED = "IGNORED"


class IgnoredReason(StrEnum):
    """Why a shot was absorbed without changing the session."""

    OUT_OF_BOUNDS = "OUT_OF_BOUNDS"
    ALREADY_RESOLVED = "ALREADY_RESOLVED"
    GAME_ENDED = "GAME_ENDED"


class GamePhase(StrEnum):
    """Session lifecycle phase."""

    NOT_STARTED = "NOT_STARTED"
    PLAYING = "PLAYING"
    WON = "WON"
    LOST = "LOST"


class CellMark(IntEnum):
    """Visible state of a board cell; values match the board shot grid."""

    EMPTY = 0
    MISS = 1
    HIT = 2


@dataclass(frozen=True, slots=True)
class Coord:
    """Board coordinate."""

    row: int
    col: int


@dataclass(frozen=True, slots=True)
class GameRules:
    """Board geometry and per-game allowances."""

    board_size: int = BOARD_SIZE
    ship_length: int = SHIP_LENGTH
    num_ships: int = NUM_SHIPS
    starting_ammo: int = STARTING_AMMO

    def __post_init__(self) -> None:
        for name in ("board_size", "ship_length", "num_ships", "starting_ammo"):
            if getattr(self, name) < 1:
                raise ValueError(f"{name} must be positive.")
        if self.ship_length > self.board_size:
            raise ValueError("ship_length cannot exceed board_size.")


@dataclass(frozen=True, slots=True)
class ShipPlacement:
    """Placement of a single ship."""

    bow: Coord
    orientation: Orientation
    length: int = SHIP_LENGTH


@dataclass(slots=True)
class Ship:
    """A placed ship and the number of its cells already hit."""

    placement: ShipPlacement
    hits: int = 0

    @property
    def cells(self) -> list[Coord]:
        return cells_for_placement(self.placement)

    @property
    def sunk(self) -> bool:
        return self.hits == self.placement.length

    def occupies(self, coord: Coord) -> bool:
        """Return whether the ship covers the coordinate."""
        return coord in self.cells

    def register_hit(self) -> None:
        """Record one more hit, never exceeding the ship length."""
        if self.sunk:
            raise ValueError("Ship is already sunk.")
        self.hits += 1


def cells_for_placement(placement: ShipPlacement) -> list[Coord]:
    """Compute occupied cells for a ship placement."""
    result: list[Coord] = []
    for i in range(placement.length):
        if placement.orientation is Orientation.HORIZONTAL:
            result.append(Coord(placement.bow.row, placement.bow.col + i))
        else:
            result.append(Coord(placement.bow.row + i, placement.bow.col))
    return result

"""Board shot tracking."""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

from salvo.game.core.models import BOARD_SIZE, CellMark, Coord


@dataclass(slots=True)
class BoardState:
    """Numpy-backed record of which cells were fired upon."""

    size: int = BOARD_SIZE
    shots: np.ndarray = field(
        default_factory=lambda: np.zeros((BOARD_SIZE, BOARD_SIZE), dtype=np.int8)
    )

    def __post_init__(self) -> None:
        if self.shots.shape != (self.size, self.size):
            self.shots = np.zeros((self.size, self.size), dtype=np.int8)

    def in_bounds(self, coord: Coord) -> bool:
        """Return whether the coordinate is in board bounds."""
        return 0 <= coord.row < self.size and 0 <= coord.col < self.size

    def was_shot(self, coord: Coord) -> bool:
        """Return whether this cell was previously targeted."""
        return self.shots[coord.row, coord.col] != CellMark.EMPTY

    def mark(self, coord: Coord, mark: CellMark) -> None:
        """Record the outcome shown on a cell."""
        if not self.in_bounds(coord):
            raise ValueError(f"Cell ({coord.row}, {coord.col}) is off the board.")
        self.shots[coord.row, coord.col] = mark

    def marks(self) -> list[list[CellMark]]:
        """Return the grid of visible cell marks, row-major."""
        return [[CellMark(int(value)) for value in row] for row in self.shots]

    def shots_fired(self) -> int:
        return int(np.count_nonzero(self.shots))

"""Grid state representation and mutation helpers."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

import numpy as np

from battleship.game.core.errors import AlreadyShot, InvalidCoordinate, InvalidPlacement
from battleship.game.core.models import (
    GRID_HEIGHT,
    GRID_WIDTH,
    Cell,
    Coord,
    Orientation,
    cells_for_run,
)

logger = logging.getLogger(__name__)


@dataclass(slots=True, eq=False)
class Grid:
    """Numpy-backed grid of shot/ship flags, indexed ``[row, col]``."""

    width: int = GRID_WIDTH
    height: int = GRID_HEIGHT
    ships: np.ndarray = field(init=False, repr=False)
    shots: np.ndarray = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if self.width < 1 or self.height < 1:
            raise ValueError(f"Grid dimensions must be positive, got {self.width}x{self.height}.")
        self.ships = np.zeros((self.height, self.width), dtype=np.bool_)
        self.shots = np.zeros((self.height, self.width), dtype=np.bool_)

    @property
    def shape(self) -> tuple[int, int]:
        return self.height, self.width

    def clear(self) -> None:
        """Reset every cell to unshot water."""
        self.ships[:, :] = False
        self.shots[:, :] = False

    def in_bounds(self, coord: Coord) -> bool:
        """Return whether the coordinate is in grid bounds."""
        return 0 <= coord.row < self.height and 0 <= coord.col < self.width

    def cell(self, coord: Coord) -> Cell:
        """Return a snapshot of one cell."""
        self._require_in_bounds(coord)
        return Cell(
            is_shot=bool(self.shots[coord.row, coord.col]),
            has_ship=bool(self.ships[coord.row, coord.col]),
        )

    def is_shot(self, coord: Coord) -> bool:
        self._require_in_bounds(coord)
        return bool(self.shots[coord.row, coord.col])

    def has_ship(self, coord: Coord) -> bool:
        self._require_in_bounds(coord)
        return bool(self.ships[coord.row, coord.col])

    def can_place(self, origin: Coord, orientation: Orientation, length: int) -> bool:
        """Return whether a run fits on the grid without touching another ship cell."""
        if length < 1:
            return False
        for cell in cells_for_run(origin, orientation, length):
            if not self.in_bounds(cell):
                return False
            if self.ships[cell.row, cell.col]:
                return False
        return True

    def place(self, origin: Coord, orientation: Orientation, length: int) -> list[Coord]:
        """Mark a run of ship cells and return them in order.

        Nothing is written unless the whole run is valid.
        """
        if not self.can_place(origin, orientation, length):
            raise InvalidPlacement(origin, orientation, length)
        cells = cells_for_run(origin, orientation, length)
        for cell in cells:
            self.ships[cell.row, cell.col] = True
        logger.debug(
            "ship_placed origin=%s orientation=%s length=%d",
            origin,
            orientation.value,
            length,
        )
        return cells

    def shoot(self, coord: Coord) -> bool:
        """Mark a cell as shot and return whether it held a ship."""
        self._require_in_bounds(coord)
        if self.shots[coord.row, coord.col]:
            raise AlreadyShot(coord)
        self.shots[coord.row, coord.col] = True
        return bool(self.ships[coord.row, coord.col])

    def ship_cell_count(self) -> int:
        return int(np.count_nonzero(self.ships))

    def shot_count(self) -> int:
        return int(np.count_nonzero(self.shots))

    def copy(self) -> Grid:
        """Return an independent copy with the same cell states."""
        clone = Grid(width=self.width, height=self.height)
        clone.ships[:, :] = self.ships
        clone.shots[:, :] = self.shots
        return clone

    def _require_in_bounds(self, coord: Coord) -> None:
        if not self.in_bounds(coord):
            raise InvalidCoordinate(coord, self.width, self.height)

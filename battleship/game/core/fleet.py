"""Fleet placement validation and construction."""

from __future__ import annotations

import logging
import random
from collections.abc import Iterator
from dataclasses import dataclass, field

from battleship.game.core.board import Grid
from battleship.game.core.errors import FleetFull
from battleship.game.core.models import MAX_SHIPS, SHIP_LENGTH, Coord, Orientation

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Ship:
    """A placed ship, stored as coordinates into its owning grid."""

    cells: tuple[Coord, ...]
    orientation: Orientation

    @property
    def length(self) -> int:
        return len(self.cells)

    def hits(self, grid: Grid) -> int:
        """Count how many of this ship's cells have been shot."""
        return sum(1 for cell in self.cells if grid.is_shot(cell))

    def is_sunk(self, grid: Grid) -> bool:
        """Return whether every cell of the ship has been shot."""
        return all(grid.is_shot(cell) for cell in self.cells)


@dataclass(slots=True)
class Fleet:
    """Capacity-bounded, ordered collection of one player's ships."""

    capacity: int = MAX_SHIPS
    ships: list[Ship] = field(default_factory=list)

    def __post_init__(self) -> None:
        if len(self.ships) > self.capacity:
            raise FleetFull(self.capacity)

    def __iter__(self) -> Iterator[Ship]:
        return iter(self.ships)

    def __len__(self) -> int:
        return len(self.ships)

    @property
    def size(self) -> int:
        return len(self.ships)

    @property
    def is_full(self) -> bool:
        return len(self.ships) >= self.capacity

    def append(self, ship: Ship) -> None:
        if self.is_full:
            raise FleetFull(self.capacity)
        self.ships.append(ship)

    def clear(self) -> None:
        self.ships.clear()


def place_ship(
    grid: Grid,
    fleet: Fleet,
    origin: Coord,
    orientation: Orientation,
    length: int = SHIP_LENGTH,
) -> Ship:
    """Place one ship on the grid and record it in the fleet.

    Raises ``FleetFull`` before touching the grid when the fleet is complete,
    and lets ``InvalidPlacement`` from the grid propagate unchanged.
    """
    if fleet.is_full:
        logger.warning("placement_rejected reason=fleet_full capacity=%d", fleet.capacity)
        raise FleetFull(fleet.capacity)
    cells = grid.place(origin, orientation, length)
    ship = Ship(cells=tuple(cells), orientation=orientation)
    fleet.append(ship)
    return ship


def random_fleet(
    grid: Grid,
    fleet: Fleet,
    rng: random.Random,
    length: int = SHIP_LENGTH,
) -> list[Ship]:
    """Fill the remaining fleet slots with random valid placements."""
    placed: list[Ship] = []
    while not fleet.is_full:
        candidates = _candidate_placements(grid, length)
        if not candidates:
            raise RuntimeError("Failed to generate random fleet placement.")
        origin, orientation = rng.choice(candidates)
        placed.append(place_ship(grid, fleet, origin, orientation, length))
    return placed


def _candidate_placements(grid: Grid, length: int) -> list[tuple[Coord, Orientation]]:
    candidates: list[tuple[Coord, Orientation]] = []
    for orientation in (Orientation.HORIZONTAL, Orientation.VERTICAL):
        for row in range(grid.height):
            for col in range(grid.width):
                origin = Coord(row=row, col=col)
                if grid.can_place(origin, orientation, length):
                    candidates.append((origin, orientation))
    return candidates

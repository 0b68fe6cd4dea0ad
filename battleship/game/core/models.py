"""Core domain models used by game logic."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

GRID_WIDTH = 20
GRID_HEIGHT = 20
SHIP_LENGTH = 5
MAX_SHIPS = 3
MAX_SHOTS = 30


class Orientation(StrEnum):
    """Ship orientation."""

    HORIZONTAL = "HORIZONTAL"
    VERTICAL = "VERTICAL"


class ShotResult(StrEnum):
    """Result of a single shot."""

    MISS = "MISS"
    HIT = "HIT"
    ALREADY_SHOT = "ALREADY_SHOT"


@dataclass(frozen=True, slots=True)
class Coord:
    """Zero-based board coordinate."""

    row: int
    col: int

    @classmethod
    def from_xy(cls, x: int, y: int) -> Coord:
        """Build a coordinate from a column (x) and row (y) pair."""
        return cls(row=y, col=x)

    @property
    def x(self) -> int:
        return self.col

    @property
    def y(self) -> int:
        return self.row


@dataclass(frozen=True, slots=True)
class Cell:
    """Snapshot of one grid position."""

    is_shot: bool = False
    has_ship: bool = False


def cells_for_run(origin: Coord, orientation: Orientation, length: int) -> list[Coord]:
    """Compute the cells covered by a run going right or down from origin."""
    result: list[Coord] = []
    for i in range(length):
        if orientation is Orientation.HORIZONTAL:
            result.append(Coord(origin.row, origin.col + i))
        else:
            result.append(Coord(origin.row + i, origin.col))
    return result


NAME_MAX_LENGTH = 100


@dataclass(frozen=True, slots=True)
class GameRules:
    """Grid, fleet and shot-budget parameters for one session."""

    width: int = GRID_WIDTH
    height: int = GRID_HEIGHT
    ship_length: int = SHIP_LENGTH
    max_ships: int = MAX_SHIPS
    max_shots: int = MAX_SHOTS

    @property
    def target_hits(self) -> int:
        """Ship cells a shooter must hit to win the round."""
        return self.max_ships * self.ship_length

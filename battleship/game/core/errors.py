"""Game-level exceptions.

Every error here is recoverable: callers reprompt or re-enter the current
turn instead of terminating.
"""

from __future__ import annotations

from battleship.game.core.models import Coord, Orientation


class BattleshipError(Exception):
    """Base class for game rule violations."""


class InvalidPlacement(BattleshipError, ValueError):
    """Ship run leaves the grid or overlaps an existing ship."""

    def __init__(self, origin: Coord, orientation: Orientation, length: int) -> None:
        super().__init__(
            f"Cannot place ship of length {length} at "
            f"(row={origin.row}, col={origin.col}) {orientation.value.lower()}."
        )
        self.origin = origin
        self.orientation = orientation
        self.length = length


class AlreadyShot(BattleshipError):
    """Target cell was shot before."""

    def __init__(self, coord: Coord) -> None:
        super().__init__(f"Cell (row={coord.row}, col={coord.col}) was already shot.")
        self.coord = coord


class FleetFull(BattleshipError):
    """Fleet already holds its maximum number of ships."""

    def __init__(self, capacity: int) -> None:
        super().__init__(f"Fleet already holds {capacity} ships.")
        self.capacity = capacity


class InvalidCoordinate(BattleshipError, ValueError):
    """Coordinate lies outside the grid."""

    def __init__(self, coord: Coord, width: int, height: int) -> None:
        super().__init__(
            f"Coordinate (row={coord.row}, col={coord.col}) is outside a {width}x{height} grid."
        )
        self.coord = coord


class InvalidTransition(BattleshipError):
    """Operation is not allowed in the current round state."""


class ConfigError(BattleshipError, ValueError):
    """Configuration value is missing or out of range."""

"""Shot outcome evaluation (miss/hit/already shot) and sunk counting."""

from __future__ import annotations

from typing import TYPE_CHECKING

from battleship.game.core.board import Grid
from battleship.game.core.errors import AlreadyShot
from battleship.game.core.fleet import Fleet
from battleship.game.core.models import Coord, ShotResult

if TYPE_CHECKING:
    from battleship.game.core.rules import Player


def resolve_shot(grid: Grid, coord: Coord) -> ShotResult:
    """Resolve a shot against a grid."""
    try:
        hit = grid.shoot(coord)
    except AlreadyShot:
        return ShotResult.ALREADY_SHOT
    return ShotResult.HIT if hit else ShotResult.MISS


def count_ships_sunk(grid: Grid, fleet: Fleet) -> int:
    """Return how many ships of the fleet have every cell shot."""
    return sum(1 for ship in fleet if ship.is_sunk(grid))


def apply_shot_to_player(shooter: Player, result: ShotResult) -> None:
    """Update the shooter's counters for one resolved shot."""
    if result is ShotResult.HIT:
        shooter.ship_cells_sunk += 1
        shooter.shots_taken += 1
    elif result is ShotResult.MISS:
        shooter.missed_shots += 1
        shooter.shots_taken += 1

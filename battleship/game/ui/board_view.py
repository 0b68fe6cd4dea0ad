"""Text rendering of grids and round messages."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

import numpy as np

from battleship.game.core.board import Grid
from battleship.game.core.models import ShotResult
from battleship.game.core.rules import RoundSummary, TurnOutcome


class CellView(StrEnum):
    """Visible state of one cell, valued by its console glyph."""

    HIT = "X"
    MISS = "O"
    SHIP = ">"
    UNKNOWN = "~"


@dataclass(frozen=True, slots=True)
class BoardSnapshot:
    """Immutable view of a grid as the viewer is allowed to see it."""

    rows: tuple[tuple[CellView, ...], ...]

    @property
    def height(self) -> int:
        return len(self.rows)

    @property
    def width(self) -> int:
        return len(self.rows[0]) if self.rows else 0


# Indexed by the codes board_snapshot assigns.
_CELL_CODES: tuple[CellView, ...] = (CellView.UNKNOWN, CellView.SHIP, CellView.MISS, CellView.HIT)


def board_snapshot(grid: Grid, reveal_ships: bool) -> BoardSnapshot:
    """Project a grid into cell views; unshot ships only show on the owner's board."""
    codes = np.select(
        [grid.shots & grid.ships, grid.shots, grid.ships & reveal_ships],
        [3, 2, 1],
        default=0,
    )
    return BoardSnapshot(rows=tuple(tuple(_CELL_CODES[code] for code in row) for row in codes.tolist()))


def row_label(row: int) -> str:
    return chr(ord("A") + row)


def render_board(snapshot: BoardSnapshot) -> str:
    """Render a snapshot with 1-based column numbers and lettered rows."""
    lines = ["  " + "".join(f" {col + 1:2d} " for col in range(snapshot.width))]
    for index, row in enumerate(snapshot.rows):
        cells = "".join(f" {cell}  " for cell in row)
        lines.append(f"{row_label(index)}  {cells}")
    return "\n".join(lines)


def shots_left_message(remaining: int) -> str:
    return f"You have {remaining} shots left."


def shot_message(outcome: TurnOutcome) -> str:
    if outcome.result is ShotResult.ALREADY_SHOT:
        return "You already shot there."
    if outcome.result is ShotResult.HIT:
        return f"{outcome.shooter.name}, you hit a ship!"
    return f"{outcome.shooter.name}, you missed!"


def round_result_message(outcome: TurnOutcome) -> str:
    if outcome.winner is outcome.shooter:
        return f"{outcome.shooter.name}, you won!"
    return f"{outcome.shooter.name}, you lost!"


def summary_lines(summary: RoundSummary) -> list[str]:
    """Build the end-of-round score block."""
    lines = ["-" * 52, "Final score:"]
    lines.extend(f"{name}: {wins} wins" for name, wins in summary.wins)
    lines.append(f"Ships sunk in this round: {summary.ships_sunk}")
    lines.append(f"Correct shots in this round: {summary.shooter_hits}")
    return lines

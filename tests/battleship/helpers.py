"""Shared builders for battleship tests."""

from __future__ import annotations

from collections.abc import Iterable

from battleship.game.core.board import Grid
from battleship.game.core.models import Coord, Orientation
from battleship.game.core.rules import Game, place_for
from battleship.game.infra.config import ConsoleSettings
from battleship.game.ui.console import ConsoleIO

# Three horizontal ships in columns 0-4 of rows 0, 2 and 4.
HORIZONTAL_ORIGINS: tuple[Coord, ...] = (Coord(0, 0), Coord(2, 0), Coord(4, 0))


def ship_cells(origins: Iterable[Coord] = HORIZONTAL_ORIGINS, length: int = 5) -> list[Coord]:
    return [Coord(origin.row, origin.col + i) for origin in origins for i in range(length)]


def water_cells(grid: Grid, count: int) -> list[Coord]:
    """Return ``count`` distinct cells without ships, row by row."""
    cells = [
        Coord(row, col)
        for row in range(grid.height)
        for col in range(grid.width)
        if not grid.has_ship(Coord(row, col))
    ]
    return cells[:count]


def place_standard_fleets(game: Game) -> None:
    for player in game.players:
        for origin in HORIZONTAL_ORIGINS:
            place_for(game, player, origin, Orientation.HORIZONTAL)


class ScriptedConsole:
    """Feeds canned answers to ConsoleIO and records everything printed."""

    def __init__(self, answers: Iterable[str]) -> None:
        self._answers = list(answers)
        self.prompts: list[str] = []
        self.output: list[str] = []
        self.sleeps: list[float] = []
        # Prompts and printed text in the order they happened.
        self.transcript: list[str] = []

    def input(self, prompt: str) -> str:
        self.prompts.append(prompt)
        self.transcript.append(prompt)
        if not self._answers:
            raise EOFError("script exhausted")
        return self._answers.pop(0)

    def print(self, text: str) -> None:
        self.output.append(text)
        self.transcript.append(text)

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)

    @property
    def remaining(self) -> int:
        return len(self._answers)

    def io(self, settings: ConsoleSettings | None = None) -> ConsoleIO:
        return ConsoleIO(
            input_fn=self.input,
            output_fn=self.print,
            sleep_fn=self.sleep,
            settings=settings if settings is not None else ConsoleSettings(countdown_seconds=0, clear_screen=False),
        )

"""Console prompts and input parsing.

Everything here converts free text into validated values for the core;
malformed input raises ``InputError`` and the ``ask_*`` helpers reprompt.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TypeVar

from battleship.game.core.models import Coord, Orientation
from battleship.game.infra.config import ConsoleSettings

logger = logging.getLogger(__name__)

T = TypeVar("T")

_CLEAR_SEQUENCE = "\033[2J\033[H"
_ORIENTATIONS = {
    "V": Orientation.VERTICAL,
    "VERTICAL": Orientation.VERTICAL,
    "H": Orientation.HORIZONTAL,
    "HORIZONTAL": Orientation.HORIZONTAL,
}
_YES = {"Y", "YES"}
_NO = {"N", "NO"}


class InputError(ValueError):
    """Console text could not be interpreted."""


def parse_column(text: str, width: int) -> int:
    """Parse a 1-based column number into a zero-based index."""
    raw = text.strip()
    try:
        value = int(raw)
    except ValueError as exc:
        raise InputError(f"Invalid value for x: {raw!r}.") from exc
    if not 1 <= value <= width:
        raise InputError(f"Invalid value for x: must be between 1 and {width}.")
    return value - 1


def parse_row(text: str, height: int) -> int:
    """Parse a row letter (``A`` onwards, any case) into a zero-based index."""
    raw = text.strip().upper()
    if len(raw) != 1 or not raw.isalpha():
        raise InputError(f"Invalid value for y: {text.strip()!r}.")
    value = ord(raw) - ord("A")
    if not 0 <= value < height:
        last = chr(ord("A") + height - 1)
        raise InputError(f"Invalid value for y: must be between A and {last}.")
    return value


def parse_orientation(text: str) -> Orientation:
    try:
        return _ORIENTATIONS[text.strip().upper()]
    except KeyError as exc:
        raise InputError("Invalid orientation.") from exc


def parse_yes_no(text: str) -> bool:
    raw = text.strip().upper()
    if raw in _YES:
        return True
    if raw in _NO:
        return False
    raise InputError("Please answer y or n.")


def parse_name(text: str, max_length: int) -> str:
    name = text.strip()
    if not name:
        raise InputError("Name must not be empty.")
    return name[:max_length]


@dataclass(slots=True)
class ConsoleIO:
    """Blocking prompt/display adapter over injectable input and output."""

    input_fn: Callable[[str], str] = input
    output_fn: Callable[[str], None] = print
    sleep_fn: Callable[[float], None] = time.sleep
    settings: ConsoleSettings = field(default_factory=ConsoleSettings)

    def show(self, text: str) -> None:
        self.output_fn(text)

    def clear(self) -> None:
        if self.settings.clear_screen:
            self.output_fn(_CLEAR_SEQUENCE)

    def ask(self, prompt: str, parse: Callable[[str], T]) -> T:
        """Prompt until ``parse`` accepts the answer."""
        while True:
            answer = self.input_fn(prompt)
            try:
                return parse(answer)
            except InputError as exc:
                logger.debug("input_rejected prompt=%r answer=%r", prompt, answer)
                self.output_fn(str(exc))

    def ask_names(self) -> tuple[str, str]:
        cap = self.settings.name_max_length
        first = self.ask("Player 1, enter your name: ", lambda text: parse_name(text, cap))
        second = self.ask("Player 2, enter your name: ", lambda text: parse_name(text, cap))
        return first, second

    def ask_coord(self, player_name: str, purpose: str, width: int, height: int) -> Coord:
        x = self.ask(
            f"{player_name}, please enter the coordinates of the {purpose} X: ",
            lambda text: parse_column(text, width),
        )
        y = self.ask(
            f"{player_name}, please enter the coordinates of the {purpose} Y: ",
            lambda text: parse_row(text, height),
        )
        return Coord.from_xy(x, y)

    def ask_placement(self, player_name: str, width: int, height: int) -> tuple[Coord, Orientation]:
        origin = self.ask_coord(player_name, "ship's starting point", width, height)
        orientation = self.ask(
            f"{player_name}, please enter the orientation of the ship ([v]vertical/[h]horizontal): ",
            parse_orientation,
        )
        return origin, orientation

    def ask_shot(self, player_name: str, width: int, height: int) -> Coord:
        return self.ask_coord(player_name, "shot", width, height)

    def ask_replay(self) -> bool:
        return self.ask("Play again? (y/n) ", parse_yes_no)

    def countdown(self) -> None:
        """Wait for ENTER, then count down to the first shot."""
        seconds = self.settings.countdown_seconds
        if seconds <= 0:
            return
        self.input_fn("Press ENTER to start the game.")
        self.clear()
        for remaining in range(seconds, 0, -1):
            prefix = "Starting game in " if remaining == seconds else ""
            self.output_fn(f"{prefix}{remaining}...")
            self.sleep_fn(1)
        self.clear()

"""Console session loop: setup, battle, summary and replay."""

from __future__ import annotations

import logging
import random

from battleship.game.core.errors import InvalidPlacement
from battleship.game.core.models import GameRules, ShotResult
from battleship.game.core.rules import (
    Game,
    Player,
    create_game,
    end_session,
    fire,
    new_round,
    place_for,
    place_randomly_for,
    round_summary,
)
from battleship.game.core.state_machine import RoundState
from battleship.game.ui.board_view import (
    board_snapshot,
    render_board,
    round_result_message,
    shot_message,
    shots_left_message,
    summary_lines,
)
from battleship.game.ui.console import ConsoleIO

logger = logging.getLogger(__name__)


class ConsoleSession:
    """Drives one session of rounds between two players at the same console."""

    def __init__(
        self,
        io: ConsoleIO,
        rules: GameRules | None = None,
        *,
        auto_place_rng: random.Random | None = None,
    ) -> None:
        self._io = io
        self._rules = rules if rules is not None else GameRules()
        self._auto_place_rng = auto_place_rng

    def run(self) -> Game:
        """Play rounds until the players decline a replay."""
        self._io.clear()
        name_a, name_b = self._io.ask_names()
        game = create_game(name_a, name_b, self._rules)
        self._io.clear()

        while game.state is not RoundState.ENDED:
            self._setup(game)
            self._io.countdown()
            self._battle(game)
            self._report(game)
            if self._io.ask_replay():
                new_round(game)
            else:
                end_session(game)
        return game

    def _setup(self, game: Game) -> None:
        for player in (game.target, game.shooting):
            self._place_fleet(game, player)
            self._io.clear()

    def _place_fleet(self, game: Game, player: Player) -> None:
        if self._auto_place_rng is not None:
            place_randomly_for(game, player, self._auto_place_rng)
            self._show_board(player, reveal=True)
            return

        while not player.fleet.is_full:
            self._show_board(player, reveal=True)
            origin, orientation = self._io.ask_placement(player.name, game.rules.width, game.rules.height)
            try:
                place_for(game, player, origin, orientation)
            except InvalidPlacement as exc:
                logger.debug("placement_rejected player=%s reason=%s", player.name, exc)
                self._io.show("Invalid coordinates, please try again.")
        self._show_board(player, reveal=True)

    def _battle(self, game: Game) -> None:
        while game.state is RoundState.IN_PROGRESS:
            shooter = game.shooting
            self._show_board(game.target, reveal=False)
            self._io.show(shots_left_message(shooter.shots_remaining(game.rules.max_shots)))
            coord = self._io.ask_shot(shooter.name, game.rules.width, game.rules.height)
            outcome = fire(game, coord)
            self._io.clear()
            if outcome.result is not ShotResult.ALREADY_SHOT:
                self._show_board(outcome.target, reveal=False)
            self._io.show(shot_message(outcome))
            if outcome.round_over:
                self._io.show(round_result_message(outcome))

    def _report(self, game: Game) -> None:
        for line in summary_lines(round_summary(game)):
            self._io.show(line)

    def _show_board(self, player: Player, *, reveal: bool) -> None:
        self._io.show(render_board(board_snapshot(player.grid, reveal_ships=reveal)))

"""Turn resolution, win/loss rules and round lifecycle."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field

from battleship.game.core.board import Grid
from battleship.game.core.errors import InvalidTransition
from battleship.game.core.fleet import Fleet, Ship, place_ship, random_fleet
from battleship.game.core.flow import FlowContext, FlowMachine, FlowTransition
from battleship.game.core.models import NAME_MAX_LENGTH, Coord, GameRules, Orientation, ShotResult
from battleship.game.core.shot_resolution import apply_shot_to_player, count_ships_sunk, resolve_shot
from battleship.game.core.state_machine import RoundState

logger = logging.getLogger(__name__)


@dataclass(slots=True, eq=False)
class Player:
    """One participant; counters reset every round, wins persist."""

    name: str
    grid: Grid
    fleet: Fleet
    shots_taken: int = 0
    missed_shots: int = 0
    ship_cells_sunk: int = 0
    wins: int = 0

    def reset_round(self) -> None:
        self.grid.clear()
        self.fleet.clear()
        self.shots_taken = 0
        self.missed_shots = 0
        self.ship_cells_sunk = 0

    def shots_remaining(self, max_shots: int) -> int:
        return max(max_shots - self.shots_taken, 0)


@dataclass(frozen=True, slots=True)
class TurnOutcome:
    """Result of one shot attempt and the round status after it."""

    result: ShotResult
    shooter: Player
    target: Player
    winner: Player | None = None

    @property
    def round_over(self) -> bool:
        return self.winner is not None


@dataclass(frozen=True, slots=True)
class RoundSummary:
    """End-of-round statistics for the display layer."""

    wins: tuple[tuple[str, int], ...]
    ships_sunk: int
    shooter_name: str
    shooter_hits: int
    winner_name: str | None


@dataclass(slots=True, eq=False)
class Game:
    """Single-owner match context threaded through every rule call."""

    player_a: Player
    player_b: Player
    rules: GameRules
    shooting: Player = field(init=False)
    target: Player = field(init=False)
    first_shooter: Player = field(init=False)
    winner: Player | None = None
    is_over: bool = False
    round_number: int = 1
    history: list[str] = field(default_factory=list)
    flow: FlowMachine[RoundState] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.first_shooter = self.player_b
        self.shooting = self.player_b
        self.target = self.player_a
        self.flow = FlowMachine(RoundState.SETUP, _round_transitions(self))

    @property
    def state(self) -> RoundState:
        return self.flow.state

    @property
    def players(self) -> tuple[Player, Player]:
        return self.player_a, self.player_b

    def opponent_of(self, player: Player) -> Player:
        if player is self.player_a:
            return self.player_b
        if player is self.player_b:
            return self.player_a
        raise ValueError(f"{player.name!r} is not part of this game.")

    def swap_turn(self) -> None:
        self.shooting, self.target = self.target, self.shooting


def _round_transitions(game: Game) -> tuple[FlowTransition[RoundState], ...]:
    def guard_fleets_ready(_: FlowContext[RoundState]) -> bool:
        return fleets_ready(game)

    def record_round_over(_: FlowContext[RoundState]) -> None:
        outcome = "won" if game.winner is game.shooting else "lost"
        game.history.append(f"{game.shooting.name}, you {outcome}!")
        logger.info(
            "round_over round=%d winner=%s shots=%d hits=%d",
            game.round_number,
            game.winner.name if game.winner is not None else None,
            game.shooting.shots_taken,
            game.shooting.ship_cells_sunk,
        )

    return (
        FlowTransition(
            trigger="start_battle",
            source=RoundState.SETUP,
            target=RoundState.IN_PROGRESS,
            guard=guard_fleets_ready,
        ),
        FlowTransition(
            trigger="finish_round",
            source=RoundState.IN_PROGRESS,
            target=RoundState.ROUND_OVER,
            after=record_round_over,
        ),
        FlowTransition(trigger="replay", source=RoundState.ROUND_OVER, target=RoundState.SETUP),
        FlowTransition(trigger="end_session", source=RoundState.ROUND_OVER, target=RoundState.ENDED),
    )


def create_player(name: str, rules: GameRules) -> Player:
    """Create a player with an empty grid and fleet sized by the rules."""
    cleaned = name.strip()
    if not cleaned:
        raise ValueError("Player name must not be empty.")
    return Player(
        name=cleaned[:NAME_MAX_LENGTH],
        grid=Grid(width=rules.width, height=rules.height),
        fleet=Fleet(capacity=rules.max_ships),
    )


def create_game(name_a: str, name_b: str, rules: GameRules | None = None) -> Game:
    """Create a session in SETUP with fresh players."""
    resolved = rules if rules is not None else GameRules()
    game = Game(
        player_a=create_player(name_a, resolved),
        player_b=create_player(name_b, resolved),
        rules=resolved,
    )
    logger.info(
        "game_created players=%s,%s grid=%dx%d",
        game.player_a.name,
        game.player_b.name,
        resolved.width,
        resolved.height,
    )
    return game


def place_for(game: Game, player: Player, origin: Coord, orientation: Orientation) -> Ship:
    """Place one ship for a player during SETUP.

    Once both fleets are complete the round moves to IN_PROGRESS.
    """
    _require_state(game, RoundState.SETUP, "place ships")
    _require_member(game, player)
    ship = place_ship(player.grid, player.fleet, origin, orientation, game.rules.ship_length)
    _maybe_start_battle(game)
    return ship


def place_randomly_for(game: Game, player: Player, rng: random.Random) -> list[Ship]:
    """Fill the rest of a player's fleet with random placements during SETUP."""
    _require_state(game, RoundState.SETUP, "place ships")
    _require_member(game, player)
    ships = random_fleet(player.grid, player.fleet, rng, game.rules.ship_length)
    _maybe_start_battle(game)
    return ships


def _maybe_start_battle(game: Game) -> None:
    if game.flow.trigger("start_battle"):
        logger.info("round_started round=%d shooter=%s", game.round_number, game.shooting.name)


def fleets_ready(game: Game) -> bool:
    """Return whether both players have a complete fleet."""
    return all(player.fleet.is_full for player in game.players)


def fire(game: Game, coord: Coord) -> TurnOutcome:
    """Resolve the current shooter's shot at the target grid.

    An already-shot cell consumes nothing: counters stay put and the same
    player keeps the turn.
    """
    _require_state(game, RoundState.IN_PROGRESS, "fire")
    shooter = game.shooting
    target = game.target
    result = resolve_shot(target.grid, coord)
    if result is ShotResult.ALREADY_SHOT:
        logger.debug("shot_repeat shooter=%s coord=%s", shooter.name, coord)
        game.history.append(f"{shooter.name} already shot there.")
        return TurnOutcome(result=result, shooter=shooter, target=target)

    apply_shot_to_player(shooter, result)
    verb = "hit a ship" if result is ShotResult.HIT else "missed"
    game.history.append(f"{shooter.name}, you {verb}!")
    logger.debug(
        "shot_resolved shooter=%s coord=%s result=%s shots=%d",
        shooter.name,
        coord,
        result.value,
        shooter.shots_taken,
    )

    winner: Player | None = None
    if shooter.ship_cells_sunk >= game.rules.target_hits:
        winner = shooter
    elif shooter.shots_taken >= game.rules.max_shots:
        winner = target

    if winner is None:
        game.swap_turn()
        return TurnOutcome(result=result, shooter=shooter, target=target)

    _finish_round(game, winner)
    return TurnOutcome(result=result, shooter=shooter, target=target, winner=winner)


def _finish_round(game: Game, winner: Player) -> None:
    winner.wins += 1
    game.winner = winner
    game.is_over = True
    game.flow.trigger("finish_round")


def round_summary(game: Game) -> RoundSummary:
    """Summarise the finished round from the final shooter's point of view."""
    _require_state(game, RoundState.ROUND_OVER, "summarise the round")
    return RoundSummary(
        wins=tuple((player.name, player.wins) for player in game.players),
        ships_sunk=count_ships_sunk(game.target.grid, game.target.fleet),
        shooter_name=game.shooting.name,
        shooter_hits=game.shooting.ship_cells_sunk,
        winner_name=game.winner.name if game.winner is not None else None,
    )


def new_round(game: Game) -> None:
    """Reset boards and counters and alternate who shoots first."""
    _require_state(game, RoundState.ROUND_OVER, "start a new round")
    for player in game.players:
        player.reset_round()
    game.first_shooter = game.opponent_of(game.first_shooter)
    game.shooting = game.first_shooter
    game.target = game.opponent_of(game.first_shooter)
    game.winner = None
    game.is_over = False
    game.round_number += 1
    game.history.clear()
    game.flow.trigger("replay")
    logger.info("round_reset round=%d first_shooter=%s", game.round_number, game.shooting.name)


def end_session(game: Game) -> None:
    """Close the session after a finished round."""
    _require_state(game, RoundState.ROUND_OVER, "end the session")
    game.flow.trigger("end_session")
    logger.info("session_ended rounds=%d", game.round_number)


def _require_member(game: Game, player: Player) -> None:
    if player not in game.players:
        raise ValueError(f"{player.name!r} is not part of this game.")


def _require_state(game: Game, expected: RoundState, action: str) -> None:
    if game.state is not expected:
        logger.warning("transition_rejected action=%r state=%s", action, game.state.name)
        raise InvalidTransition(f"Cannot {action} while the round is {game.state.name}.")

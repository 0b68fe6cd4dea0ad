from __future__ import annotations

import random

import pytest

from battleship.game.core.models import GameRules
from battleship.game.core.rules import Game, create_game
from tests.battleship.helpers import place_standard_fleets


@pytest.fixture
def rules() -> GameRules:
    return GameRules()


@pytest.fixture
def game(rules: GameRules) -> Game:
    return create_game("Alice", "Bob", rules)


@pytest.fixture
def placed_game(game: Game) -> Game:
    place_standard_fleets(game)
    return game


@pytest.fixture
def seeded_rng() -> random.Random:
    return random.Random(1337)

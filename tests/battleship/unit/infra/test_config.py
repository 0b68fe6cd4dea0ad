from __future__ import annotations

import os

import pytest

from battleship.game.core.errors import ConfigError
from battleship.game.core.models import GameRules
from battleship.game.infra.config import (
    ConsoleSettings,
    load_console_settings,
    load_default_env_files,
    load_env_file,
    load_game_rules,
    validate_rules,
)

RULE_VARS = (
    "BATTLESHIP_GRID_WIDTH",
    "BATTLESHIP_GRID_HEIGHT",
    "BATTLESHIP_SHIP_LENGTH",
    "BATTLESHIP_MAX_SHIPS",
    "BATTLESHIP_MAX_SHOTS",
)


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    for name in RULE_VARS + (
        "BATTLESHIP_COUNTDOWN_SECONDS",
        "BATTLESHIP_CLEAR_SCREEN",
        "BATTLESHIP_NAME_MAX_LENGTH",
    ):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_env_file_feeds_game_rules(tmp_path, clean_env) -> None:
    env_file = tmp_path / "rules.env"
    env_file.write_text(
        "# small practice board\n"
        "BATTLESHIP_GRID_WIDTH=8\n"
        "BATTLESHIP_GRID_HEIGHT = '6'\n"
        "BATTLESHIP_MAX_SHOTS\n"
        "=12\n"
        'BATTLESHIP_MAX_SHIPS="2"\n',
        encoding="utf-8",
    )
    for name in RULE_VARS:
        clean_env.setenv(name, "")

    load_env_file(str(env_file))

    rules = load_game_rules()
    assert (rules.width, rules.height, rules.max_ships) == (8, 6, 2)
    assert rules.max_shots == GameRules().max_shots


def test_env_file_can_leave_exported_rules_alone(tmp_path, clean_env) -> None:
    env_file = tmp_path / "rules.env"
    env_file.write_text("BATTLESHIP_GRID_WIDTH=8\n", encoding="utf-8")
    clean_env.setenv("BATTLESHIP_GRID_WIDTH", "12")

    load_env_file(str(env_file), override_existing=False)
    assert load_game_rules().width == 12

    load_env_file(str(env_file))
    assert load_game_rules().width == 8


def test_missing_env_file_changes_nothing(tmp_path) -> None:
    before = dict(os.environ)
    load_env_file(str(tmp_path / "absent.env"))
    assert dict(os.environ) == before


def test_local_env_file_overrides_shared_one(tmp_path, clean_env) -> None:
    shared = tmp_path / ".env"
    local = tmp_path / ".env.local"
    shared.write_text("BATTLESHIP_GRID_WIDTH=10\nBATTLESHIP_MAX_SHOTS=40\n", encoding="utf-8")
    local.write_text("BATTLESHIP_MAX_SHOTS=15\n", encoding="utf-8")
    clean_env.setenv("BATTLESHIP_GRID_WIDTH", "")
    clean_env.setenv("BATTLESHIP_MAX_SHOTS", "")

    load_default_env_files(paths=(str(shared), str(local)))

    rules = load_game_rules()
    assert (rules.width, rules.max_shots) == (10, 15)


def test_load_game_rules_defaults(clean_env) -> None:
    assert load_game_rules() == GameRules()


def test_load_game_rules_reads_overrides(clean_env) -> None:
    clean_env.setenv("BATTLESHIP_GRID_WIDTH", "10")
    clean_env.setenv("BATTLESHIP_GRID_HEIGHT", "8")
    clean_env.setenv("BATTLESHIP_MAX_SHOTS", "12")
    rules = load_game_rules()
    assert (rules.width, rules.height, rules.max_shots) == (10, 8, 12)
    assert rules.ship_length == 5


@pytest.mark.parametrize(
    ("name", "value"),
    [
        ("BATTLESHIP_GRID_WIDTH", "wide"),
        ("BATTLESHIP_GRID_HEIGHT", "27"),
        ("BATTLESHIP_MAX_SHIPS", "0"),
        ("BATTLESHIP_SHIP_LENGTH", "21"),
    ],
)
def test_load_game_rules_rejects_bad_values(clean_env, name: str, value: str) -> None:
    clean_env.setenv(name, value)
    with pytest.raises(ConfigError):
        load_game_rules()


def test_validate_rules_rejects_fleet_larger_than_grid() -> None:
    with pytest.raises(ConfigError):
        validate_rules(GameRules(width=3, height=3, ship_length=3, max_ships=4))


def test_load_console_settings(clean_env) -> None:
    assert load_console_settings() == ConsoleSettings()
    clean_env.setenv("BATTLESHIP_COUNTDOWN_SECONDS", "0")
    clean_env.setenv("BATTLESHIP_CLEAR_SCREEN", "0")
    clean_env.setenv("BATTLESHIP_NAME_MAX_LENGTH", "12")
    assert load_console_settings() == ConsoleSettings(
        countdown_seconds=0, clear_screen=False, name_max_length=12
    )
    clean_env.setenv("BATTLESHIP_COUNTDOWN_SECONDS", "-1")
    with pytest.raises(ConfigError):
        load_console_settings()

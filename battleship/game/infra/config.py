"""Application configuration and env loading."""

from __future__ import annotations

import os
import sys
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from battleship.game.core.errors import ConfigError
from battleship.game.core.models import NAME_MAX_LENGTH, GameRules

# Rows are labelled with single letters.
MAX_GRID_HEIGHT = 26


@dataclass(frozen=True, slots=True)
class ConsoleSettings:
    """Console presentation knobs."""

    countdown_seconds: int = 5
    clear_screen: bool = True
    name_max_length: int = NAME_MAX_LENGTH


def load_env_file(path: str = ".env", *, override_existing: bool = True) -> None:
    """Load KEY=VALUE pairs from an env file into process environment.

    By default, values from the env file overwrite existing environment variables.
    """
    env_path = _resolve_env_path(path)
    if not env_path.exists():
        return

    for raw_line in env_path.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue

        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip()
        if not key:
            continue

        if len(value) >= 2 and value[0] == value[-1] and value[0] in {"'", '"'}:
            value = value[1:-1]

        if override_existing or key not in os.environ:
            os.environ[key] = value


def load_default_env_files(
    *, override_existing: bool = True, paths: Sequence[str] | None = None
) -> None:
    """Load env files with optional local overrides, later files winning."""
    to_load = (
        tuple(paths)
        if paths is not None
        else (
            "appdata/config/.env",
            "appdata/config/.env.local",
            ".env",
            ".env.local",
        )
    )
    for path in to_load:
        load_env_file(path, override_existing=override_existing)


def load_game_rules(base: GameRules | None = None) -> GameRules:
    """Build game rules from ``BATTLESHIP_*`` env overrides on top of base."""
    defaults = base if base is not None else GameRules()
    rules = GameRules(
        width=_env_int("BATTLESHIP_GRID_WIDTH", defaults.width),
        height=_env_int("BATTLESHIP_GRID_HEIGHT", defaults.height),
        ship_length=_env_int("BATTLESHIP_SHIP_LENGTH", defaults.ship_length),
        max_ships=_env_int("BATTLESHIP_MAX_SHIPS", defaults.max_ships),
        max_shots=_env_int("BATTLESHIP_MAX_SHOTS", defaults.max_shots),
    )
    validate_rules(rules)
    return rules


def validate_rules(rules: GameRules) -> None:
    """Reject rule sets the grid or console layer cannot represent."""
    for name in ("width", "height", "ship_length", "max_ships", "max_shots"):
        value = getattr(rules, name)
        if value < 1:
            raise ConfigError(f"{name} must be at least 1, got {value}.")
    if rules.height > MAX_GRID_HEIGHT:
        raise ConfigError(f"height must be at most {MAX_GRID_HEIGHT}, got {rules.height}.")
    if rules.ship_length > max(rules.width, rules.height):
        raise ConfigError(
            f"ship_length {rules.ship_length} does not fit a {rules.width}x{rules.height} grid."
        )
    if rules.ship_length * rules.max_ships > rules.width * rules.height:
        raise ConfigError("Fleet has more ship cells than the grid.")


def load_console_settings() -> ConsoleSettings:
    """Build console settings from env overrides."""
    countdown = _env_int("BATTLESHIP_COUNTDOWN_SECONDS", 5)
    if countdown < 0:
        raise ConfigError(f"countdown seconds must not be negative, got {countdown}.")
    name_cap = _env_int("BATTLESHIP_NAME_MAX_LENGTH", NAME_MAX_LENGTH)
    if not 1 <= name_cap <= NAME_MAX_LENGTH:
        raise ConfigError(f"name length cap must be within 1..{NAME_MAX_LENGTH}, got {name_cap}.")
    return ConsoleSettings(
        countdown_seconds=countdown,
        clear_screen=os.getenv("BATTLESHIP_CLEAR_SCREEN", "1").strip() != "0",
        name_max_length=name_cap,
    )


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ConfigError(f"{name} must be an integer, got {raw!r}.") from exc


def _resolve_env_path(path: str) -> Path:
    """Resolve env path from cwd, frozen exe dir, then project root."""
    candidate = Path(path)
    if candidate.exists():
        return candidate

    if getattr(sys, "frozen", False):
        executable = getattr(sys, "executable", "")
        if executable:
            frozen_dir_candidate = Path(executable).resolve().parent / path
            if frozen_dir_candidate.exists():
                return frozen_dir_candidate

    # Fallback for IDE run configs with different working directory.
    project_root = Path(__file__).resolve().parents[3]
    return project_root / path

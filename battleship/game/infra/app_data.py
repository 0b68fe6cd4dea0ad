"""Unified Battleship app-data paths."""

from __future__ import annotations

import os
import sys
from pathlib import Path


def resolve_app_data_root() -> Path:
    """Resolve app-data root directory for runtime state."""
    configured = os.getenv("BATTLESHIP_APP_DATA_DIR", "").strip()
    if configured:
        candidate = Path(configured)
        if candidate.is_absolute():
            return candidate
        return resolve_game_root() / candidate
    return resolve_game_root() / "appdata"


def resolve_game_root() -> Path:
    """Resolve the runtime game root directory."""
    if getattr(sys, "frozen", False):
        executable = getattr(sys, "executable", "")
        if executable:
            return Path(executable).resolve().parent
    return Path(__file__).resolve().parents[2]


def resolve_logs_dir() -> Path:
    """Resolve logs directory under app-data root."""
    return resolve_app_data_root() / "logs"


def apply_runtime_path_defaults() -> dict[str, Path]:
    """Create app-data directories and pin ``BATTLESHIP_LOG_DIR`` to an absolute path."""
    root = resolve_app_data_root()
    root.mkdir(parents=True, exist_ok=True)
    log_dir = _normalize_runtime_path_env("BATTLESHIP_LOG_DIR", resolve_logs_dir())
    log_dir.mkdir(parents=True, exist_ok=True)
    return {"root": root, "logs": log_dir}


def _normalize_runtime_path_env(var_name: str, default_path: Path) -> Path:
    raw = os.getenv(var_name, "").strip()
    if not raw:
        os.environ[var_name] = str(default_path)
        return default_path
    candidate = Path(raw)
    if candidate.is_absolute():
        return candidate
    normalized = resolve_app_data_root() / candidate
    os.environ[var_name] = str(normalized)
    return normalized

# src/rune_rotation/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- Every value has a usable default; a bare checkout runs the offline demo.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "ROTATION"

ROTATION_MODES = ("next", "random")


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


load_dotenv(override=False)


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_path(name: str, default: Path | None) -> Path | None:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str
    console_enabled: bool

    # ---- Local data paths (ignored by git) ----
    data_dir: Path
    tasks_path: Path | None

    # ---- Rotation ----
    rotation_mode: str
    members: bool
    random_max_attempts: int
    task_time_budget_seconds: float
    step_interval_seconds: float

    # ---- Travel ----
    travel_timeout_seconds: float
    travel_poll_seconds: float

    # ---- Offline demo game ----
    offline_skill_level: int

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "rotation") or "rotation"
        log_level = _env(_k("LOG_LEVEL"), "INFO")
        console_enabled = _env_bool(_k("CONSOLE_ENABLED"), True)

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/rotation")) or Path(".local/rotation")
        tasks_path = _env_path(_k("TASKS_PATH"), None)

        rotation_mode = _env(_k("MODE"), "next").strip().lower()
        if rotation_mode not in ROTATION_MODES:
            rotation_mode = "next"

        return Settings(
            app_name=app_name,
            log_level=log_level,
            console_enabled=console_enabled,
            data_dir=data_dir,
            tasks_path=tasks_path,
            rotation_mode=rotation_mode,
            members=_env_bool(_k("MEMBERS"), False),
            random_max_attempts=max(1, _env_int(_k("RANDOM_MAX_ATTEMPTS"), 1000)),
            task_time_budget_seconds=_env_float(_k("TASK_TIME_BUDGET_SECONDS"), 600.0),
            step_interval_seconds=max(0.1, _env_float(_k("STEP_INTERVAL_SECONDS"), 1.0)),
            travel_timeout_seconds=_env_float(_k("TRAVEL_TIMEOUT_SECONDS"), 15.0),
            travel_poll_seconds=max(0.01, _env_float(_k("TRAVEL_POLL_SECONDS"), 0.1)),
            offline_skill_level=_env_int(_k("OFFLINE_SKILL_LEVEL"), 50),
        )


SETTINGS = Settings.from_env()

# ---- Optional local overrides (never committed) ----
# Prefer .env; use config_local.py only for safe overrides.
try:
    import config_local as _config_local  # type: ignore

    if hasattr(_config_local, "ROTATION_MODE") and _config_local.ROTATION_MODE in ROTATION_MODES:
        object.__setattr__(SETTINGS, "rotation_mode", str(_config_local.ROTATION_MODE))  # type: ignore[misc]
    if hasattr(_config_local, "MEMBERS"):
        object.__setattr__(SETTINGS, "members", bool(_config_local.MEMBERS))  # type: ignore[misc]
    if hasattr(_config_local, "TASKS_PATH"):
        object.__setattr__(SETTINGS, "tasks_path", Path(_config_local.TASKS_PATH))  # type: ignore[misc]
except ImportError:
    pass


def get_settings() -> Settings:
    return SETTINGS

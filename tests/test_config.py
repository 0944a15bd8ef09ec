# tests/test_config.py

from __future__ import annotations

import os
from pathlib import Path

import pytest

from rune_rotation.config import Settings


@pytest.fixture()
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    for name in list(os.environ):
        if name.startswith("ROTATION_"):
            monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_defaults(clean_env: pytest.MonkeyPatch) -> None:
    s = Settings.from_env()
    assert s.rotation_mode == "next"
    assert s.members is False
    assert s.tasks_path is None
    assert s.travel_timeout_seconds == 15.0
    assert s.travel_poll_seconds == 0.1
    assert s.random_max_attempts == 1000
    assert s.data_dir == Path(".local/rotation")


def test_env_overrides(clean_env: pytest.MonkeyPatch, tmp_path: Path) -> None:
    clean_env.setenv("ROTATION_MODE", "RANDOM")
    clean_env.setenv("ROTATION_MEMBERS", "yes")
    clean_env.setenv("ROTATION_TASKS_PATH", str(tmp_path / "tasks.json"))
    clean_env.setenv("ROTATION_TRAVEL_TIMEOUT_SECONDS", "7.5")
    clean_env.setenv("ROTATION_RANDOM_MAX_ATTEMPTS", "0")

    s = Settings.from_env()
    assert s.rotation_mode == "random"
    assert s.members is True
    assert s.tasks_path == tmp_path / "tasks.json"
    assert s.travel_timeout_seconds == 7.5
    assert s.random_max_attempts == 1


def test_bad_values_fall_back(clean_env: pytest.MonkeyPatch) -> None:
    clean_env.setenv("ROTATION_MODE", "sideways")
    clean_env.setenv("ROTATION_OFFLINE_SKILL_LEVEL", "high")
    clean_env.setenv("ROTATION_TASK_TIME_BUDGET_SECONDS", "soon")

    s = Settings.from_env()
    assert s.rotation_mode == "next"
    assert s.offline_skill_level == 50
    assert s.task_time_budget_seconds == 600.0

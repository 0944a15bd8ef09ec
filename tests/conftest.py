# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from rune_rotation.tasks.task_registry import TaskRegistry

from .fakes import FakeClock, FakeGame, make_spec


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with bootstrap and the rotation runner.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated from the environment.
    """
    return SimpleNamespace(
        app_name="rotation-test",
        data_dir=tmp_path / "data",
        tasks_path=None,
        rotation_mode="next",
        members=False,
        random_max_attempts=200,
        task_time_budget_seconds=60.0,
        step_interval_seconds=0.1,
        travel_timeout_seconds=1.0,
        travel_poll_seconds=0.1,
        offline_skill_level=50,
    )


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def game() -> FakeGame:
    return FakeGame(level=50)


@pytest.fixture()
def registry(game: FakeGame, clock: FakeClock) -> TaskRegistry:
    """Three eligible tasks (levels 1, 10, 20) at skill level 50."""
    reg = TaskRegistry(game, clock=clock)
    reg.setup([
        make_spec("first", required_level=1),
        make_spec("second", required_level=10),
        make_spec("third", required_level=20),
    ])
    return reg

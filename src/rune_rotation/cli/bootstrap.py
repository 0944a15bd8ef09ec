# src/rune_rotation/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- loads task definitions (file or built-in demo rotation),
- wires the game client, registry and rotation runner into AppState.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from ..config import get_settings
from ..core.ports import GameClient
from ..core.state import AppState
from ..game.offline import OfflineGameClient
from ..tasks.rotation import RotationRunner
from ..tasks.task_api import apply_membership
from ..tasks.task_loader import default_task_specs, load_task_specs
from ..tasks.task_models import TaskSpec
from ..tasks.task_registry import TaskRegistry

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)


def load_specs(settings) -> list[TaskSpec]:
    tasks_path = getattr(settings, "tasks_path", None)
    if tasks_path is None:
        logger.info("No task file configured; using the built-in demo rotation.")
        return default_task_specs()
    return load_task_specs(tasks_path)


def create_offline_game(settings, specs: Sequence[TaskSpec]) -> OfflineGameClient:
    anchors = {
        spec.teleport_anchor.id: spec.teleport_anchor.arrival_bounds
        for spec in specs
        if spec.teleport_anchor is not None
    }
    return OfflineGameClient(
        default_level=int(getattr(settings, "offline_skill_level", 50)),
        anchors=anchors,
    )


def create_initial_state(*, settings=None, game: GameClient | None = None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings and the game client injectable makes the app easier to test.
    If settings is None, falls back to get_settings(); without a game client the
    offline simulation is used.
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    specs = load_specs(settings)
    if game is None:
        game = create_offline_game(settings, specs)

    registry = TaskRegistry(
        game,
        random_max_attempts=int(getattr(settings, "random_max_attempts", 1000)),
    )
    registry.setup(specs)
    apply_membership(registry, bool(getattr(settings, "members", False)))

    runner = RotationRunner.from_settings(registry, game, settings)

    return AppState(settings=settings, game=game, registry=registry, runner=runner)

# src/rune_rotation/core/state.py

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Any

from ..tasks.rotation import RotationRunner
from ..tasks.task_registry import TaskRegistry
from .ports import GameClient


@dataclass
class AppState:
    # Settings (or a compatible namespace in tests).
    settings: Any

    game: GameClient
    registry: TaskRegistry
    runner: RotationRunner

    # Serializes console commands against the headless stepping loop.
    lock: threading.Lock = field(default_factory=threading.Lock)

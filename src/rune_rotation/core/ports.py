# src/rune_rotation/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The rotation core depends on Protocols instead of concrete game bindings.
Screen automation, pathing and skill lookup live behind these ports, which
keeps the registry testable without a running client.
"""

from collections.abc import Sequence
from typing import Protocol

from .geometry import Box, Point


class SkillLevelProvider(Protocol):
    """Current level of a skill; may change during a run."""
    def get_skill_level(self, skill: str) -> int: ...


class PositionProvider(Protocol):
    def get_current_position(self) -> Point: ...


class AreaChecker(Protocol):
    def rectangle_contains(self, box: Box, point: Point) -> bool: ...


class Teleporter(Protocol):
    """
    Fast-travel port.

    teleport_to() only fires the teleport; arrival is confirmed separately by
    polling detect_arrival_symbol() against the landing region.
    """

    def teleport_to(self, anchor_id: str) -> None: ...
    def detect_arrival_symbol(self, bounds: Box) -> bool: ...


class Walker(Protocol):
    def walk_path(self, points: Sequence[Point]) -> bool: ...
    def blind_walk_to(self, point: Point) -> None: ...


class GameClient(
    SkillLevelProvider,
    PositionProvider,
    AreaChecker,
    Teleporter,
    Walker,
    Protocol,
):
    """Everything the rotation needs from a live (or simulated) game client."""

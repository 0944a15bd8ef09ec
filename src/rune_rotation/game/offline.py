# src/rune_rotation/game/offline.py

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence

from ..core.geometry import Box, Point

logger = logging.getLogger(__name__)


class OfflineGameClient:
    """
    Offline deterministic game client used for demos when no live client is wired in.

    Behavior:
    - every skill sits at default_level unless overridden
    - teleports land in the centre of the anchor's arrival bounds
    - walking always succeeds and ends on the last waypoint
    """

    def __init__(
        self,
        *,
        default_level: int = 1,
        skill_levels: Mapping[str, int] | None = None,
        anchors: Mapping[str, Box] | None = None,
        start: Point = Point(3222, 3218),
    ) -> None:
        self.default_level = int(default_level)
        self.skill_levels: dict[str, int] = dict(skill_levels or {})
        self.anchors: dict[str, Box] = dict(anchors or {})
        self.position = start

    def set_skill_level(self, skill: str, level: int) -> None:
        self.skill_levels[str(skill)] = int(level)

    # ---- GameClient port ----

    def get_skill_level(self, skill: str) -> int:
        return self.skill_levels.get(str(skill), self.default_level)

    def get_current_position(self) -> Point:
        return self.position

    def rectangle_contains(self, box: Box, point: Point) -> bool:
        return box.contains(point)

    def teleport_to(self, anchor_id: str) -> None:
        bounds = self.anchors.get(anchor_id)
        if bounds is None:
            logger.warning("Offline client: unknown teleport anchor %s", anchor_id)
            return
        self.position = bounds.center()

    def detect_arrival_symbol(self, bounds: Box) -> bool:
        return bounds.contains(self.position)

    def walk_path(self, points: Sequence[Point]) -> bool:
        if not points:
            return False
        self.position = points[-1]
        return True

    def blind_walk_to(self, point: Point) -> None:
        self.position = point

# src/rune_rotation/tasks/task_models.py

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import StrEnum

from ..core.geometry import Box, Point
from ..core.ports import GameClient, SkillLevelProvider
from .work_timer import Clock, WorkTimer

logger = logging.getLogger(__name__)

DEFAULT_TRAVEL_TIMEOUT_SECONDS = 15.0
DEFAULT_TRAVEL_POLL_SECONDS = 0.1


class Skill(StrEnum):
    ATTACK = "attack"
    STRENGTH = "strength"
    DEFENCE = "defence"
    RANGED = "ranged"
    PRAYER = "prayer"
    MAGIC = "magic"
    RUNECRAFT = "runecraft"
    CONSTRUCTION = "construction"
    HITPOINTS = "hitpoints"
    AGILITY = "agility"
    HERBLORE = "herblore"
    THIEVING = "thieving"
    CRAFTING = "crafting"
    FLETCHING = "fletching"
    SLAYER = "slayer"
    HUNTER = "hunter"
    MINING = "mining"
    SMITHING = "smithing"
    FISHING = "fishing"
    COOKING = "cooking"
    FIREMAKING = "firemaking"
    WOODCUTTING = "woodcutting"
    FARMING = "farming"

    @classmethod
    def parse(cls, raw: str) -> Skill:
        try:
            return cls((raw or "").strip().lower())
        except ValueError:
            raise ValueError(f"Unknown skill: {raw!r}") from None


@dataclass(frozen=True, slots=True)
class TeleportAnchor:
    """Fast-travel point: the id handed to the teleport action plus its landing region."""

    id: str
    arrival_bounds: Box


@dataclass(frozen=True, slots=True)
class TaskSpec:
    """Descriptive part of a task; fixed once registered."""

    name: str
    skill: Skill
    required_level: int
    location: Box
    path: tuple[Point, ...] = ()
    teleport_anchor: TeleportAnchor | None = None
    membership_required: bool = False


class Task:
    """
    One rotation unit: an immutable TaskSpec plus runtime state.

    Only is_active and work_timer change after registration.
    """

    def __init__(self, spec: TaskSpec, *, clock: Clock = time.monotonic) -> None:
        self.spec = spec
        self.is_active = False
        self.work_timer = WorkTimer(clock=clock)

    def __repr__(self) -> str:
        return f"Task(name={self.name!r}, active={self.is_active}, timer={self.work_timer!r})"

    # ---- descriptive accessors ----

    @property
    def name(self) -> str:
        return self.spec.name

    @property
    def skill(self) -> Skill:
        return self.spec.skill

    @property
    def required_level(self) -> int:
        return self.spec.required_level

    @property
    def location(self) -> Box:
        return self.spec.location

    @property
    def path(self) -> tuple[Point, ...]:
        return self.spec.path

    @property
    def teleport_anchor(self) -> TeleportAnchor | None:
        return self.spec.teleport_anchor

    @property
    def membership_required(self) -> bool:
        return self.spec.membership_required

    # ---- predicates ----

    def can_do(self, skills: SkillLevelProvider) -> bool:
        return skills.get_skill_level(self.skill) >= self.required_level

    def is_in_area(self, game: GameClient) -> bool:
        return game.rectangle_contains(self.location, game.get_current_position())

    # ---- travel ----

    def travel_to(
        self,
        game: GameClient,
        *,
        timeout_seconds: float = DEFAULT_TRAVEL_TIMEOUT_SECONDS,
        poll_seconds: float = DEFAULT_TRAVEL_POLL_SECONDS,
        clock: Clock = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> bool:
        """
        Move the actor into this task's location.

        - already in area -> True, nothing is invoked
        - teleport to the anchor (if any) and wait for the arrival symbol,
          at most timeout_seconds; the walk proceeds even if it never shows
        - walk the predefined path, falling back to a blind walk to its last waypoint
        Returns whether the actor ended up inside the location.
        """
        if self.is_in_area(game):
            return True

        anchor = self.teleport_anchor
        if anchor is not None:
            logger.debug("Teleporting to anchor=%s for task=%s", anchor.id, self.name)
            game.teleport_to(anchor.id)
            if not _wait_for_arrival(game, anchor, timeout_seconds, poll_seconds, clock, sleep):
                logger.info(
                    "Arrival at anchor=%s not confirmed within %.1fs; walking anyway",
                    anchor.id,
                    timeout_seconds,
                )

        if self.path and not game.walk_path(self.path):
            logger.info("walk_path failed for task=%s; blind walking to last waypoint", self.name)
            game.blind_walk_to(self.path[-1])

        arrived = self.is_in_area(game)
        if not arrived:
            logger.warning("Could not reach area of task=%s", self.name)
        return arrived

    # ---- diagnostics ----

    def describe(self) -> str:
        anchor = self.teleport_anchor
        anchor_s = "none" if anchor is None else f"{anchor.id} {anchor.arrival_bounds}"
        loc = self.location
        lines = [
            f"Task: {self.name}",
            f"  Skill: {self.skill.value} (level {self.required_level}+)",
            f"  Members only: {'yes' if self.membership_required else 'no'}",
            f"  Location: ({loc.x1}, {loc.y1}) -> ({loc.x2}, {loc.y2})",
            f"  Teleport: {anchor_s}",
            f"  Path: {len(self.path)} waypoint(s)",
            f"  Active: {'yes' if self.is_active else 'no'}",
            f"  Timer: {self.work_timer.name or '-'} {self.work_timer.elapsed:.1f}s",
        ]
        return "\n".join(lines)


def _wait_for_arrival(
    game: GameClient,
    anchor: TeleportAnchor,
    timeout_seconds: float,
    poll_seconds: float,
    clock: Clock,
    sleep: Callable[[float], None],
) -> bool:
    deadline = clock() + max(0.0, float(timeout_seconds))
    while True:
        if game.detect_arrival_symbol(anchor.arrival_bounds):
            return True
        if clock() >= deadline:
            return False
        sleep(poll_seconds)

# src/rune_rotation/tasks/task_loader.py

from __future__ import annotations

"""
Task definitions.

Rotations are described as a JSON list:

    [
      {
        "name": "Varrock east mine",
        "skill": "mining",
        "required_level": 15,
        "membership_required": false,
        "location": [3280, 3360, 3290, 3371],
        "teleport_anchor": {"id": "varrock", "arrival_bounds": [3207, 3417, 3220, 3430]},
        "path": [[3213, 3424], [3254, 3427], [3285, 3365]]
      }
    ]

teleport_anchor may be null or omitted. Malformed entries raise ValueError.
"""

import json
import logging
from pathlib import Path
from typing import Any

from ..core.geometry import Box, Point
from .task_models import Skill, TaskSpec, TeleportAnchor

logger = logging.getLogger(__name__)


def _box(raw: Any, field_name: str) -> Box:
    if not isinstance(raw, (list, tuple)) or len(raw) != 4:
        raise ValueError(f"{field_name} must be [x1, y1, x2, y2], got {raw!r}")
    try:
        x1, y1, x2, y2 = (int(v) for v in raw)
    except (TypeError, ValueError):
        raise ValueError(f"{field_name} must be [x1, y1, x2, y2], got {raw!r}") from None
    return Box(x1, y1, x2, y2)


def _point(raw: Any) -> Point:
    if not isinstance(raw, (list, tuple)) or len(raw) != 2:
        raise ValueError(f"path waypoint must be [x, y], got {raw!r}")
    try:
        return Point(int(raw[0]), int(raw[1]))
    except (TypeError, ValueError):
        raise ValueError(f"path waypoint must be [x, y], got {raw!r}") from None


def _anchor(raw: Any) -> TeleportAnchor | None:
    if raw is None:
        return None
    if not isinstance(raw, dict) or not str(raw.get("id") or "").strip():
        raise ValueError(f"teleport_anchor must be an object with an id, got {raw!r}")
    return TeleportAnchor(
        id=str(raw["id"]).strip(),
        arrival_bounds=_box(raw.get("arrival_bounds"), "teleport_anchor.arrival_bounds"),
    )


def task_spec_from_dict(data: dict[str, Any]) -> TaskSpec:
    name = str(data.get("name") or "").strip()
    if not name:
        raise ValueError("task name is required")

    try:
        required_level = int(data.get("required_level", 1))
    except (TypeError, ValueError):
        raise ValueError(f"{name}: required_level must be an integer") from None

    membership_required = data.get("membership_required", False)
    if not isinstance(membership_required, bool):
        raise ValueError(f"{name}: membership_required must be true/false")

    try:
        return TaskSpec(
            name=name,
            skill=Skill.parse(str(data.get("skill", ""))),
            required_level=required_level,
            location=_box(data.get("location"), "location"),
            path=tuple(_point(p) for p in data.get("path") or []),
            teleport_anchor=_anchor(data.get("teleport_anchor")),
            membership_required=membership_required,
        )
    except ValueError as e:
        raise ValueError(f"{name}: {e}") from e


def load_task_specs(path: str | Path) -> list[TaskSpec]:
    path = Path(path)
    data = json.loads(path.read_text("utf-8"))
    if not isinstance(data, list):
        raise ValueError(f"{path}: expected a JSON list of tasks")

    specs = []
    for i, item in enumerate(data):
        if not isinstance(item, dict):
            raise ValueError(f"{path}: entry {i} is not an object")
        specs.append(task_spec_from_dict(item))

    logger.info("Loaded %d task definition(s) from %s", len(specs), path)
    return specs


def default_task_specs() -> list[TaskSpec]:
    """Built-in demo rotation (used when no task file is configured)."""
    return [
        TaskSpec(
            name="Lumbridge swamp fishing",
            skill=Skill.FISHING,
            required_level=1,
            location=Box(3238, 3141, 3246, 3156),
            path=(Point(3222, 3218), Point(3239, 3196), Point(3242, 3150)),
            teleport_anchor=TeleportAnchor("lumbridge", Box(3218, 3213, 3226, 3223)),
        ),
        TaskSpec(
            name="Varrock east mine",
            skill=Skill.MINING,
            required_level=15,
            location=Box(3280, 3360, 3290, 3371),
            path=(Point(3213, 3424), Point(3254, 3427), Point(3285, 3365)),
            teleport_anchor=TeleportAnchor("varrock", Box(3207, 3417, 3220, 3430)),
        ),
        TaskSpec(
            name="Draynor willows",
            skill=Skill.WOODCUTTING,
            required_level=30,
            location=Box(3081, 3224, 3092, 3239),
            path=(Point(3105, 3250), Point(3087, 3232)),
        ),
        TaskSpec(
            name="Seers' Village magic trees",
            skill=Skill.WOODCUTTING,
            required_level=75,
            location=Box(2690, 3422, 2705, 3428),
            path=(Point(2757, 3478), Point(2725, 3480), Point(2698, 3425)),
            teleport_anchor=TeleportAnchor("camelot", Box(2751, 3472, 2763, 3484)),
            membership_required=True,
        ),
    ]

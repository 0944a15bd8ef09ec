# src/rune_rotation/tasks/task_api.py

from __future__ import annotations

import logging

from .task_registry import TaskRegistry

logger = logging.getLogger(__name__)


def apply_membership(registry: TaskRegistry, members: bool) -> int:
    """
    Deactivate member-only tasks on a free account.

    The registry only carries the flag; enforcing it is the caller's job.
    Returns how many tasks were deactivated.
    """
    if members:
        return 0

    dropped = 0
    for i, task in enumerate(registry):
        if task.membership_required and task.is_active:
            registry.set_active(i, False)
            dropped += 1

    if dropped:
        logger.info("Free account: %d member-only task(s) deactivated", dropped)
    return dropped


def format_task_table(registry: TaskRegistry) -> str:
    lines = [f"Tasks ({registry.count_active()}/{len(registry)} active):"]
    for i, task in enumerate(registry):
        marker = "*" if i == registry.current_index else " "
        state = "on " if task.is_active else "off"
        members = " [members]" if task.membership_required else ""
        lines.append(
            f" {marker}{i:>2}. [{state}] {task.name} "
            f"({task.skill.value} {task.required_level}+){members} "
            f"{task.work_timer.elapsed:.0f}s"
        )
    return "\n".join(lines)

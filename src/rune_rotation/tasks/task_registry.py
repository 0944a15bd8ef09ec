# src/rune_rotation/tasks/task_registry.py

from __future__ import annotations

"""
Task registry.

Ordered collection of tasks with a single "current" pointer. The registry owns
every change to activity flags and implements task selection:
- switch_to: explicit switch, gated by eligibility and "something is active"
- next: circular scan for the next active task
- random_next: uniform sampling among the other active tasks

Failures are reported as False; last_outcome says why.
"""

import logging
import random
import time
from collections.abc import Iterable, Iterator
from enum import StrEnum

from ..core.ports import SkillLevelProvider
from .task_models import Task, TaskSpec
from .work_timer import Clock

logger = logging.getLogger(__name__)

DEFAULT_RANDOM_MAX_ATTEMPTS = 1000


class SwitchOutcome(StrEnum):
    NONE = "none"  # nothing attempted yet
    SWITCHED = "switched"
    INELIGIBLE = "ineligible"
    ALL_INACTIVE = "all_inactive"
    NO_TARGET = "no_target"
    INVALID_TARGET = "invalid_target"


class TaskRegistry:
    """
    Registry of rotation tasks.

    Build it with setup(); after that it is never empty and current_index always
    points at a task that passed its eligibility check (or at task 0 initially).
    Not thread-safe: callers are expected to drive it from one thread.
    """

    def __init__(
        self,
        skills: SkillLevelProvider,
        *,
        clock: Clock = time.monotonic,
        rng: random.Random | None = None,
        random_max_attempts: int = DEFAULT_RANDOM_MAX_ATTEMPTS,
    ) -> None:
        self._skills = skills
        self._clock = clock
        self._rng = rng or random.Random()
        self._random_max_attempts = max(1, int(random_max_attempts))
        self._tasks: list[Task] = []
        self.current_index = 0
        self.last_outcome = SwitchOutcome.NONE

    # ---- collection protocol ----

    def __len__(self) -> int:
        return len(self._tasks)

    def __iter__(self) -> Iterator[Task]:
        return iter(self._tasks)

    def __getitem__(self, index: int) -> Task:
        return self._tasks[index]

    @property
    def current(self) -> Task:
        return self._tasks[self.current_index]

    # ---- construction ----

    def add(self, task: TaskSpec | Task) -> None:
        """Append a fresh entry; runtime state is left uninitialized (see set_defaults)."""
        spec = task.spec if isinstance(task, Task) else task
        self._tasks.append(Task(spec, clock=self._clock))

    def set_defaults(self) -> None:
        for i, task in enumerate(self._tasks):
            task.is_active = True
            task.work_timer.name = f"task-{i}"
            task.work_timer.start()
            task.work_timer.pause()

    def setup(self, initial_tasks: Iterable[TaskSpec | Task]) -> None:
        """
        Populate a fresh registry and initialize every entry.

        Activity/timer state carried by Task inputs is ignored: only the
        descriptive fields are copied.
        """
        for task in initial_tasks:
            self.add(task)
        if not self._tasks:
            raise ValueError("TaskRegistry.setup() needs at least one task")
        self.set_defaults()
        logger.info("Task registry ready: %d task(s)", len(self._tasks))

    def reset(self) -> None:
        self._tasks.clear()
        self.current_index = 0
        self.last_outcome = SwitchOutcome.NONE

    # ---- activity ----

    def count_active(self) -> int:
        return sum(1 for t in self._tasks if t.is_active)

    def active_indexes(self) -> list[int]:
        return [i for i, t in enumerate(self._tasks) if t.is_active]

    def set_active(self, index: int, active: bool = True) -> None:
        task = self._tasks[index]
        task.is_active = bool(active)
        logger.info("Task %d (%s) is now %s", index, task.name, "active" if active else "inactive")

    # ---- selection ----

    def switch_to(self, target_index: int, keep_previous_active: bool = True) -> bool:
        """
        Switch the current pointer to target_index.

        The outgoing task's is_active is set to keep_previous_active BEFORE the
        switch is validated, and stays that way even if the switch fails.
        """
        if not 0 <= target_index < len(self._tasks):
            logger.warning("switch_to: no task at index %s (size=%d)", target_index, len(self._tasks))
            self.last_outcome = SwitchOutcome.INVALID_TARGET
            return False

        self._tasks[self.current_index].is_active = keep_previous_active

        if self.count_active() <= 0:
            logger.warning("No active tasks left; staying on task %d", self.current_index)
            self.last_outcome = SwitchOutcome.ALL_INACTIVE
            return False

        target = self._tasks[target_index]
        if not target.can_do(self._skills):
            logger.info(
                "Cannot switch to task %d (%s): %s level %d required",
                target_index,
                target.name,
                target.skill.value,
                target.required_level,
            )
            self.last_outcome = SwitchOutcome.INELIGIBLE
            return False

        previous = self.current_index
        self.current_index = target_index
        self.last_outcome = SwitchOutcome.SWITCHED
        logger.info(
            "Switched task %d (%s) -> %d (%s)",
            previous,
            self._tasks[previous].name,
            target_index,
            target.name,
        )
        return True

    def next(self, keep_previous_active: bool = True) -> bool:
        """Switch to the next active task after the current one, wrapping around."""
        n = len(self._tasks)
        if n == 0:
            self.last_outcome = SwitchOutcome.NO_TARGET
            return False

        # At most n checks; the last one lands back on the current task.
        for step in range(1, n + 1):
            index = (self.current_index + step) % n
            if self._tasks[index].is_active:
                return self.switch_to(index, keep_previous_active)

        logger.warning("next: no active task to switch to")
        self.last_outcome = SwitchOutcome.ALL_INACTIVE
        return False

    def random_next(self, keep_previous_active: bool = True) -> bool:
        """
        Switch to a uniformly sampled active task other than the current one.

        With a single active task equal to the current one, this degrades to a
        self-switch. After random_max_attempts missed draws the target is chosen
        directly from the active indexes, so a valid target is never missed.
        """
        n = len(self._tasks)
        if n == 0:
            self.last_outcome = SwitchOutcome.NO_TARGET
            return False

        if self.count_active() <= 0:
            logger.warning("random_next: no active task to switch to")
            self.last_outcome = SwitchOutcome.ALL_INACTIVE
            return False

        for _ in range(self._random_max_attempts):
            index = self._rng.randrange(n)
            if not self._tasks[index].is_active:
                continue
            if index != self.current_index:
                return self.switch_to(index, keep_previous_active)
            if self.count_active() == 1:
                return self.switch_to(index, keep_previous_active)

        # Draws exhausted: pick directly among the remaining candidates.
        active = self.active_indexes()
        candidates = [i for i in active if i != self.current_index] or active
        logger.debug(
            "random_next: no hit after %d draws; choosing among %d candidate(s)",
            self._random_max_attempts,
            len(candidates),
        )
        return self.switch_to(self._rng.choice(candidates), keep_previous_active)

    # ---- diagnostics ----

    def log_task(self, index: int) -> None:
        logger.info("Task %d:\n%s", index, self._tasks[index].describe())

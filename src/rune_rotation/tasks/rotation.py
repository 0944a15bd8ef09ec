# src/rune_rotation/tasks/rotation.py

from __future__ import annotations

"""
Rotation runner.

Caller-side policy on top of TaskRegistry. Each step():
- drops the current task if it was deactivated or is no longer doable,
- rotates away (keeping the task active) once the visit exceeded its time budget,
- travels into the task's area, dropping the task if travel fails,
- otherwise keeps the task's work timer running.

Retry decisions live here, never in the registry.
"""

import logging
import threading
import time
from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from ..core.ports import GameClient
from .task_registry import SwitchOutcome, TaskRegistry
from .work_timer import Clock

logger = logging.getLogger(__name__)


class StepStatus(StrEnum):
    WORKING = "working"
    TRAVELLED = "travelled"
    SWITCHED = "switched"
    STUCK = "stuck"


@dataclass(slots=True, frozen=True)
class StepResult:
    status: StepStatus
    task_index: int
    outcome: SwitchOutcome | None = None


class RotationRunner:
    def __init__(
        self,
        registry: TaskRegistry,
        game: GameClient,
        *,
        mode: str = "next",
        task_time_budget_seconds: float = 600.0,
        travel_timeout_seconds: float = 15.0,
        travel_poll_seconds: float = 0.1,
        clock: Clock = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        if mode not in ("next", "random"):
            raise ValueError(f"Unknown rotation mode: {mode!r}")
        self.registry = registry
        self.game = game
        self.mode = mode
        self.task_time_budget_seconds = float(task_time_budget_seconds)
        self.travel_timeout_seconds = float(travel_timeout_seconds)
        self.travel_poll_seconds = float(travel_poll_seconds)
        self._clock = clock
        self._sleep = sleep

        # Indexes deactivated only because their level requirement failed.
        self._benched: set[int] = set()
        self._visit_index: int | None = None
        self._visit_started = 0.0

    @classmethod
    def from_settings(cls, registry: TaskRegistry, game: GameClient, settings: Any) -> RotationRunner:
        return cls(
            registry,
            game,
            mode=str(getattr(settings, "rotation_mode", "next")),
            task_time_budget_seconds=float(getattr(settings, "task_time_budget_seconds", 600.0)),
            travel_timeout_seconds=float(getattr(settings, "travel_timeout_seconds", 15.0)),
            travel_poll_seconds=float(getattr(settings, "travel_poll_seconds", 0.1)),
        )

    # ---- helpers ----

    def _begin_visit(self) -> None:
        self._visit_index = self.registry.current_index
        self._visit_started = self.registry.current.work_timer.elapsed

    def visit_elapsed(self) -> float:
        if self._visit_index != self.registry.current_index:
            return 0.0
        return self.registry.current.work_timer.elapsed - self._visit_started

    def _refresh_eligibility(self) -> None:
        """
        Bench active tasks whose level requirement fails, and bring benched
        tasks back once the player levels up. The current task is left alone;
        the outgoing flag of the switch decides its fate.
        """
        registry = self.registry
        for i, task in enumerate(registry):
            if i == registry.current_index:
                continue
            doable = task.can_do(self.game)
            if task.is_active and not doable:
                registry.set_active(i, False)
                self._benched.add(i)
            elif i in self._benched and doable:
                registry.set_active(i, True)
                self._benched.discard(i)

    def _result(self, ok: bool) -> StepResult:
        status = StepStatus.SWITCHED if ok else StepStatus.STUCK
        return StepResult(status, self.registry.current_index, self.registry.last_outcome)

    # ---- public API ----

    def advance(self, keep_previous_active: bool = True) -> bool:
        """Pause the current task and rotate using the configured mode."""
        registry = self.registry
        registry.current.work_timer.pause()
        self._refresh_eligibility()

        if self.mode == "random":
            ok = registry.random_next(keep_previous_active)
        else:
            ok = registry.next(keep_previous_active)

        if ok:
            self._begin_visit()
        else:
            logger.warning("Rotation could not advance (%s)", registry.last_outcome.value)
        return ok

    def step(self) -> StepResult:
        registry = self.registry
        index = registry.current_index
        task = registry.current
        if self._visit_index != index:
            self._begin_visit()

        if not task.is_active or not task.can_do(self.game):
            logger.info("Dropping task %d (%s): inactive or not doable", index, task.name)
            if task.is_active:
                self._benched.add(index)
            return self._result(self.advance(keep_previous_active=False))

        budget = self.task_time_budget_seconds
        if budget > 0 and self.visit_elapsed() >= budget and registry.count_active() > 1:
            logger.info("Task %d (%s) used its %.0fs budget; rotating", index, task.name, budget)
            return self._result(self.advance(keep_previous_active=True))

        if not task.is_in_area(self.game):
            task.work_timer.pause()
            arrived = task.travel_to(
                self.game,
                timeout_seconds=self.travel_timeout_seconds,
                poll_seconds=self.travel_poll_seconds,
                clock=self._clock,
                sleep=self._sleep,
            )
            if arrived:
                return StepResult(StepStatus.TRAVELLED, index)
            logger.warning("Travel to task %d (%s) failed; dropping it", index, task.name)
            return self._result(self.advance(keep_previous_active=False))

        task.work_timer.resume()
        return StepResult(StepStatus.WORKING, index)

    def stop_work(self) -> None:
        self.registry.current.work_timer.pause()


def run_rotation(
    runner: RotationRunner,
    stop: threading.Event,
    *,
    interval_seconds: float = 1.0,
    lock: threading.Lock | None = None,
) -> None:
    """
    Step the rotation every interval_seconds until stop is set.

    Stops early when the rotation is stuck with nothing active left.
    """
    sleep_s = max(0.1, float(interval_seconds))
    while not stop.is_set():
        if lock is not None:
            with lock:
                result = runner.step()
        else:
            result = runner.step()

        logger.debug("Rotation step: %s task=%d", result.status.value, result.task_index)

        if result.status == StepStatus.STUCK and runner.registry.count_active() == 0:
            logger.warning("All tasks are inactive; stopping rotation.")
            break

        stop.wait(sleep_s)

    runner.stop_work()

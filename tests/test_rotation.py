# tests/test_rotation.py

from __future__ import annotations

import threading

import pytest

from rune_rotation.core.geometry import Box, Point
from rune_rotation.tasks.rotation import RotationRunner, StepStatus, run_rotation
from rune_rotation.tasks.task_registry import SwitchOutcome, TaskRegistry

from .fakes import FakeClock, FakeGame, make_spec

AREA_A = Box(10, 10, 20, 20)
AREA_B = Box(30, 30, 40, 40)
AREA_C = Box(50, 50, 60, 60)


def _registry(game: FakeGame, clock: FakeClock) -> TaskRegistry:
    reg = TaskRegistry(game, clock=clock)
    reg.setup([
        make_spec("a", location=AREA_A, path=(Point(15, 15),)),
        make_spec("b", location=AREA_B, path=(Point(35, 35),)),
        make_spec("c", location=AREA_C, path=(Point(55, 55),), required_level=60),
    ])
    return reg


def _runner(reg: TaskRegistry, game: FakeGame, clock: FakeClock, **kwargs) -> RotationRunner:
    kwargs.setdefault("task_time_budget_seconds", 60.0)
    return RotationRunner(
        reg,
        game,
        travel_timeout_seconds=0.5,
        travel_poll_seconds=0.1,
        clock=clock,
        sleep=clock.sleep,
        **kwargs,
    )


def test_step_travels_then_works(game: FakeGame, clock: FakeClock) -> None:
    reg = _registry(game, clock)
    runner = _runner(reg, game, clock)

    first = runner.step()
    assert first.status == StepStatus.TRAVELLED
    assert game.position == Point(15, 15)

    second = runner.step()
    assert second.status == StepStatus.WORKING
    assert reg.current.work_timer.running

    clock.advance(10)
    assert reg.current.work_timer.elapsed == 10.0


def test_step_rotates_after_budget_and_keeps_task_active(game: FakeGame, clock: FakeClock) -> None:
    reg = _registry(game, clock)
    runner = _runner(reg, game, clock, task_time_budget_seconds=30.0)

    runner.step()  # travel
    runner.step()  # start working
    clock.advance(31)

    result = runner.step()
    assert result.status == StepStatus.SWITCHED
    assert result.outcome == SwitchOutcome.SWITCHED
    assert reg.current_index == 1
    assert reg[0].is_active
    assert not reg[0].work_timer.running
    assert reg[0].work_timer.elapsed == 31.0


def test_travel_failure_drops_task(game: FakeGame, clock: FakeClock) -> None:
    game.walk_ok = False
    game.blind_walk_moves = False
    reg = _registry(game, clock)
    runner = _runner(reg, game, clock)

    result = runner.step()
    assert result.status == StepStatus.SWITCHED
    assert reg[0].is_active is False
    assert reg.current_index == 1


def test_ineligible_tasks_are_benched_and_return_after_level_up(game: FakeGame, clock: FakeClock) -> None:
    reg = _registry(game, clock)
    runner = _runner(reg, game, clock, task_time_budget_seconds=5.0)

    runner.step()
    runner.step()
    clock.advance(6)
    runner.step()  # a -> b, task c (level 60) gets benched
    assert reg.current_index == 1
    assert reg[2].is_active is False

    runner.step()
    runner.step()
    clock.advance(6)
    runner.step()  # b -> a, c still benched
    assert reg.current_index == 0

    game.level = 60
    runner.step()
    runner.step()
    clock.advance(6)
    runner.step()  # a -> b, c is back in the rotation
    assert reg[2].is_active is True
    assert reg.current_index == 1

    runner.step()
    runner.step()
    clock.advance(6)
    runner.step()
    assert reg.current_index == 2


def test_undoable_current_task_is_dropped_and_recovers(game: FakeGame, clock: FakeClock) -> None:
    reg = _registry(game, clock)
    runner = _runner(reg, game, clock)
    assert reg.switch_to(1) is True

    game.levels["mining"] = 0
    result = runner.step()
    assert result.status == StepStatus.STUCK
    assert result.outcome == SwitchOutcome.ALL_INACTIVE
    assert reg.count_active() == 0
    assert reg.current_index == 1

    # back to level 50: a returns, c (level 60) stays benched
    game.levels.clear()
    result = runner.step()
    assert result.status == StepStatus.SWITCHED
    assert reg.current_index == 0
    assert reg.active_indexes() == [0]


def test_random_mode_rotates(game: FakeGame, clock: FakeClock) -> None:
    reg = _registry(game, clock)
    game.level = 99
    runner = _runner(reg, game, clock, mode="random", task_time_budget_seconds=1.0)

    runner.step()
    runner.step()
    clock.advance(2)
    result = runner.step()
    assert result.status == StepStatus.SWITCHED
    assert reg.current_index != 0


def test_unknown_mode_is_rejected(game: FakeGame, clock: FakeClock) -> None:
    with pytest.raises(ValueError):
        _runner(_registry(game, clock), game, clock, mode="sideways")


def test_run_rotation_stops_when_everything_is_inactive(game: FakeGame, clock: FakeClock) -> None:
    reg = _registry(game, clock)
    for i in range(len(reg)):
        reg.set_active(i, False)
    runner = _runner(reg, game, clock)

    stop = threading.Event()
    run_rotation(runner, stop, interval_seconds=0.1)

    assert not stop.is_set()
    assert not reg.current.work_timer.running


def test_run_rotation_honours_stop_event(game: FakeGame, clock: FakeClock) -> None:
    reg = _registry(game, clock)
    runner = _runner(reg, game, clock)

    stop = threading.Event()
    stop.set()
    run_rotation(runner, stop, interval_seconds=0.1, lock=threading.Lock())

    assert game.calls == []

# tests/test_task_models.py

from __future__ import annotations

import pytest

from rune_rotation.core.geometry import Box, Point
from rune_rotation.tasks.task_models import Skill, Task, TeleportAnchor
from rune_rotation.tasks.work_timer import WorkTimer

from .fakes import FakeClock, FakeGame, make_spec

ANCHOR = TeleportAnchor("varrock", Box(100, 100, 110, 110))


def _travel(task: Task, game: FakeGame, clock: FakeClock, timeout: float = 1.0) -> bool:
    return task.travel_to(
        game,
        timeout_seconds=timeout,
        poll_seconds=0.1,
        clock=clock,
        sleep=clock.sleep,
    )


def test_can_do_compares_level_with_requirement() -> None:
    game = FakeGame(level=50)
    assert Task(make_spec("easy", required_level=1)).can_do(game) is True
    assert Task(make_spec("exact", required_level=50)).can_do(game) is True
    assert Task(make_spec("hard", required_level=99)).can_do(game) is False


def test_can_do_uses_the_task_skill() -> None:
    game = FakeGame(level=1, levels={"fishing": 40})
    assert Task(make_spec("fish", skill=Skill.FISHING, required_level=30)).can_do(game)
    assert not Task(make_spec("ore", skill=Skill.MINING, required_level=30)).can_do(game)


def test_is_in_area() -> None:
    task = Task(make_spec("t", location=Box(10, 10, 20, 20)))
    assert task.is_in_area(FakeGame(position=Point(10, 20)))
    assert not task.is_in_area(FakeGame(position=Point(21, 15)))


def test_travel_is_noop_when_already_in_area(clock: FakeClock) -> None:
    game = FakeGame(position=Point(15, 15))
    task = Task(make_spec("t", teleport_anchor=ANCHOR))
    assert _travel(task, game, clock) is True
    assert game.calls == []


def test_travel_teleports_then_walks(clock: FakeClock) -> None:
    game = FakeGame(arrival_after=2)
    task = Task(make_spec("t", teleport_anchor=ANCHOR))

    assert _travel(task, game, clock) is True
    assert game.calls == [
        ("teleport_to", "varrock"),
        ("walk_path", (Point(5, 5), Point(15, 15))),
    ]
    assert game.arrival_polls == 3
    assert clock.sleeps == [0.1, 0.1]


def test_travel_walks_even_if_arrival_never_confirmed(clock: FakeClock) -> None:
    game = FakeGame(arrival_after=None)
    task = Task(make_spec("t", teleport_anchor=ANCHOR))

    assert _travel(task, game, clock, timeout=1.0) is True
    assert ("walk_path", (Point(5, 5), Point(15, 15))) in game.calls
    # the poll is bounded by the timeout
    assert game.arrival_polls >= 10
    assert sum(clock.sleeps) == pytest.approx(1.0, abs=0.11)


def test_travel_without_anchor_skips_teleport(clock: FakeClock) -> None:
    game = FakeGame()
    task = Task(make_spec("t"))

    assert _travel(task, game, clock) is True
    assert [c[0] for c in game.calls] == ["walk_path"]
    assert game.arrival_polls == 0


def test_travel_falls_back_to_blind_walk(clock: FakeClock) -> None:
    game = FakeGame(walk_ok=False)
    task = Task(make_spec("t"))

    assert _travel(task, game, clock) is True
    assert game.calls[-1] == ("blind_walk_to", Point(15, 15))


def test_travel_reports_failure_after_fallback(clock: FakeClock) -> None:
    game = FakeGame(walk_ok=False, blind_walk_moves=False)
    task = Task(make_spec("t"))

    assert _travel(task, game, clock) is False
    assert [c[0] for c in game.calls] == ["walk_path", "blind_walk_to"]


def test_describe_lists_all_fields() -> None:
    task = Task(make_spec("Varrock mine", required_level=15, teleport_anchor=ANCHOR, membership_required=True))
    task.work_timer.name = "task-0"
    text = task.describe()
    assert "Varrock mine" in text
    assert "mining (level 15+)" in text
    assert "Members only: yes" in text
    assert "varrock" in text
    assert "2 waypoint(s)" in text
    assert "task-0" in text


def test_skill_parse() -> None:
    assert Skill.parse(" Mining ") is Skill.MINING
    with pytest.raises(ValueError):
        Skill.parse("basket weaving")


def test_work_timer_accumulates_only_while_running(clock: FakeClock) -> None:
    timer = WorkTimer("t", clock=clock)
    timer.start()
    timer.pause()
    assert timer.elapsed == 0.0

    clock.advance(5)
    assert timer.elapsed == 0.0

    timer.resume()
    clock.advance(3)
    assert timer.elapsed == 3.0
    assert timer.running

    timer.pause()
    clock.advance(10)
    timer.resume()
    clock.advance(2)
    timer.pause()
    assert timer.elapsed == 5.0

    timer.start()
    assert timer.elapsed == 0.0


def test_work_timer_resume_before_start_starts_it(clock: FakeClock) -> None:
    timer = WorkTimer(clock=clock)
    assert not timer.started
    timer.resume()
    clock.advance(1)
    assert timer.started
    assert timer.elapsed == 1.0

    timer.reset()
    assert not timer.started
    assert timer.elapsed == 0.0

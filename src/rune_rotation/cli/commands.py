# src/rune_rotation/cli/commands.py

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable
from typing import cast

from ..core.state import AppState
from ..game.offline import OfflineGameClient
from ..tasks.task_api import format_task_table

CommandEmitter = Callable[[str], None]
CommandHandler2 = Callable[[AppState, list[str]], str]
CommandHandler3 = Callable[[AppState, list[str], CommandEmitter | None], str]
CommandHandler = CommandHandler2 | CommandHandler3

logger = logging.getLogger(__name__)

DROP_WORDS = ("drop", "off", "false", "no")


class CommandRegistry:
    """Simple slash-command registry used by the console connector (/help, /next, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(
        self,
        state: AppState,
        line: str,
        emit: CommandEmitter | None = None,
    ) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            nparams = len(inspect.signature(handler).parameters)
        except (TypeError, ValueError):
            nparams = 3

        if nparams >= 3:
            h3 = cast(CommandHandler3, handler)
            return h3(state, args, emit)

        h2 = cast(CommandHandler2, handler)
        return h2(state, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


def _parse_index(state: AppState, args: list[str]) -> int | None:
    if not args:
        return None
    try:
        index = int(args[0])
    except ValueError:
        return None
    if not 0 <= index < len(state.registry):
        return None
    return index


def _keep_flag(args: list[str]) -> bool:
    return not any(a.lower() in DROP_WORDS for a in args)


def _switch_reply(state: AppState, ok: bool) -> str:
    reg = state.registry
    if ok:
        return f"Now on task {reg.current_index}: {reg.current.name}"
    return f"Switch failed ({reg.last_outcome.value}); still on task {reg.current_index}: {reg.current.name}"


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_status(state: AppState, args: list[str]) -> str:
    reg = state.registry
    s = state.settings
    runner = state.runner
    return (
        "Status:\n"
        f"  Current: {reg.current_index} ({reg.current.name})\n"
        f"  Active tasks: {reg.count_active()}/{len(reg)}\n"
        f"  Mode: {runner.mode}\n"
        f"  Visit time: {runner.visit_elapsed():.0f}s / budget {runner.task_time_budget_seconds:.0f}s\n"
        f"  Members: {'yes' if getattr(s, 'members', False) else 'no'}\n"
        f"  Last switch: {reg.last_outcome.value}"
    )


def cmd_tasks(state: AppState, args: list[str]) -> str:
    return format_task_table(state.registry)


def cmd_dump(state: AppState, args: list[str]) -> str:
    """
    /dump      -> fields of the current task
    /dump N    -> fields of task N
    """
    index = state.registry.current_index if not args else _parse_index(state, args)
    if index is None:
        return "Usage: /dump [index]"
    state.registry.log_task(index)
    return state.registry[index].describe()


def cmd_switch(state: AppState, args: list[str]) -> str:
    """
    /switch N         -> switch to task N, keep the current task active
    /switch N drop    -> switch to task N and deactivate the current task
    """
    index = _parse_index(state, args)
    if index is None:
        return "Usage: /switch <index> [drop]"
    state.runner.stop_work()
    return _switch_reply(state, state.registry.switch_to(index, _keep_flag(args[1:])))


def cmd_next(state: AppState, args: list[str]) -> str:
    state.runner.stop_work()
    return _switch_reply(state, state.registry.next(_keep_flag(args)))


def cmd_random(state: AppState, args: list[str]) -> str:
    state.runner.stop_work()
    return _switch_reply(state, state.registry.random_next(_keep_flag(args)))


def cmd_enable(state: AppState, args: list[str]) -> str:
    index = _parse_index(state, args)
    if index is None:
        return "Usage: /enable <index>"
    state.registry.set_active(index, True)
    return f"Task {index} enabled."


def cmd_disable(state: AppState, args: list[str]) -> str:
    index = _parse_index(state, args)
    if index is None:
        return "Usage: /disable <index>"
    state.registry.set_active(index, False)
    return f"Task {index} disabled."


def cmd_step(state: AppState, args: list[str]) -> str:
    """
    /step      -> run one rotation step
    /step N    -> run N steps
    """
    try:
        count = max(1, int(args[0])) if args else 1
    except ValueError:
        return "Usage: /step [count]"

    lines = []
    for _ in range(count):
        result = state.runner.step()
        task = state.registry[result.task_index]
        line = f"{result.status.value}: task {result.task_index} ({task.name})"
        if result.outcome is not None:
            line += f" [{result.outcome.value}]"
        lines.append(line)
    return "\n".join(lines)


def cmd_travel(
    state: AppState,
    args: list[str],
    emit: CommandEmitter | None = None,
) -> str:
    task = state.registry.current
    if emit is not None:
        emit(f"Travelling to {task.name}...")
    s = state.settings
    ok = task.travel_to(
        state.game,
        timeout_seconds=float(getattr(s, "travel_timeout_seconds", 15.0)),
        poll_seconds=float(getattr(s, "travel_poll_seconds", 0.1)),
    )
    return f"Arrived at {task.name}." if ok else f"Could not reach {task.name}."


def cmd_work(state: AppState, args: list[str]) -> str:
    """
    /work on   -> resume the current task's work timer
    /work off  -> pause it
    """
    timer = state.registry.current.work_timer
    if not args:
        return f"{timer.name}: {timer.elapsed:.1f}s ({'running' if timer.running else 'paused'})"
    arg = args[0].lower()
    if arg in ("on", "1", "true", "yes"):
        timer.resume()
        return f"{timer.name} running."
    if arg in ("off", "0", "false", "no"):
        timer.pause()
        return f"{timer.name} paused at {timer.elapsed:.1f}s."
    return "Usage: /work on | /work off"


def cmd_level(state: AppState, args: list[str]) -> str:
    """
    /level <skill> <n>  -> set a skill level (offline game only)
    """
    game = state.game
    if not isinstance(game, OfflineGameClient):
        return "Skill levels can only be changed in the offline game."
    if len(args) != 2:
        return "Usage: /level <skill> <level>"
    try:
        level = int(args[1])
    except ValueError:
        return "Usage: /level <skill> <level>"
    game.set_skill_level(args[0].lower(), level)
    return f"{args[0].lower()} is now level {level}."


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("status", cmd_status, help_text="Show the current task and rotation state.")
registry.register("tasks", cmd_tasks, help_text="List all tasks.", aliases=["ls"])
registry.register("dump", cmd_dump, help_text="Show every field of a task: /dump [index].")
registry.register("switch", cmd_switch, help_text="Switch task: /switch <index> [drop].")
registry.register("next", cmd_next, help_text="Advance to the next active task: /next [drop].")
registry.register("random", cmd_random, help_text="Advance to a random active task: /random [drop].")
registry.register("enable", cmd_enable, help_text="Reactivate a task: /enable <index>.")
registry.register("disable", cmd_disable, help_text="Deactivate a task: /disable <index>.")
registry.register("step", cmd_step, help_text="Run rotation steps: /step [count].")
registry.register("travel", cmd_travel, help_text="Travel to the current task's area.")
registry.register("work", cmd_work, help_text="Work timer: /work on | /work off.")
registry.register("level", cmd_level, help_text="Offline game: /level <skill> <level>.")

# src/todo_cli/cli/commands.py

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from dataclasses import dataclass, field

from ..core.state import AppState
from ..errors import InvalidInput
from ..tasks.task_ops import DoneOutcome, add_task, edit_task, mark_done, remove_task

CommandHandler = Callable[[AppState, list[str]], str]

logger = logging.getLogger(__name__)

# Plain ASCII digits with an optional sign; int() alone also takes "1_0", " 5", "٣".
_ID_RE = re.compile(r"[+-]?[0-9]+")


@dataclass(slots=True)
class Command:
    name: str
    handler: CommandHandler
    help_text: str
    usage: str
    aliases: list[str] = field(default_factory=list)


class CommandRegistry:
    """Simple command registry used by the CLI entry point (add, list, do, ...)."""

    def __init__(self) -> None:
        self._commands: dict[str, Command] = {}
        self._by_name: dict[str, Command] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        usage: str | None = None,
        aliases: list[str] | None = None,
    ) -> None:
        cmd = Command(
            name=name.lower(),
            handler=handler,
            help_text=help_text,
            usage=usage or name.lower(),
            aliases=[a.lower() for a in aliases or []],
        )
        self._commands[cmd.name] = cmd
        self._by_name[cmd.name] = cmd
        for alias in cmd.aliases:
            self._by_name[alias] = cmd

    def get(self, name: str) -> Command | None:
        return self._by_name.get(name.lower())

    def handle(self, state: AppState, name: str, args: list[str]) -> str | None:
        """
        Run command `name` with `args`.
        Returns the text to print, or None if the command is unknown.

        InvalidInput raised without a usage hint gets the command's usage attached.
        """
        cmd = self.get(name)
        if cmd is None:
            return None

        logger.debug("Dispatching command=%s args=%s", cmd.name, args)
        try:
            return cmd.handler(state, args)
        except InvalidInput as exc:
            if exc.usage is None:
                exc.usage = f"{_prog(state)} {cmd.usage}"
            raise

    def build_help(self, prog: str = "todo") -> str:
        rows = []
        for cmd in self._commands.values():
            text = cmd.help_text
            if cmd.aliases:
                text += f" (alias: {', '.join(cmd.aliases)})"
            rows.append((cmd.usage, text))

        width = max((len(u) for u, _ in rows), default=0)
        lines = [f"Usage: {prog} <command> [args]", "Commands:"]
        for usage, text in rows:
            lines.append(f"  {usage.ljust(width)}  {text}")
        return "\n".join(lines)


registry = CommandRegistry()


def _prog(state: AppState) -> str:
    return str(getattr(state.settings, "app_name", "todo") or "todo")


def _parse_id(args: list[str]) -> int:
    if not args:
        raise InvalidInput("missing task id")
    raw = args[0]
    if not _ID_RE.fullmatch(raw):
        raise InvalidInput(f"invalid task id: {raw!r}")
    return int(raw)


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help(_prog(state))


def cmd_add(state: AppState, args: list[str]) -> str:
    if not args:
        raise InvalidInput("missing task title")

    store = state.task_store
    tasks = store.load()
    tasks, task = add_task(tasks, " ".join(args), floor_id=store.last_id)
    store.save(tasks)
    return f"Added {task.id}: {task.title}"


def cmd_list(state: AppState, args: list[str]) -> str:
    tasks = state.task_store.load()
    if not tasks:
        return "No tasks."

    lines: list[str] = []
    for t in tasks:
        check = "x" if t.done else " "
        lines.append(f"{t.id}) [{check}] {t.title}")
        if t.completed_at is not None:
            lines.append(f"    completed: {t.completed_at.astimezone().strftime('%Y-%m-%d %H:%M')}")
    return "\n".join(lines)


def cmd_do(state: AppState, args: list[str]) -> str:
    task_id = _parse_id(args)

    store = state.task_store
    tasks, outcome = mark_done(store.load(), task_id)
    if outcome is DoneOutcome.ALREADY_DONE:
        return "Already completed."

    store.save(tasks)
    return f"Marked {task_id} done"


def cmd_remove(state: AppState, args: list[str]) -> str:
    task_id = _parse_id(args)

    store = state.task_store
    tasks, _removed = remove_task(store.load(), task_id)
    store.save(tasks)
    return f"Removed {task_id}"


def cmd_edit(state: AppState, args: list[str]) -> str:
    task_id = _parse_id(args)
    if len(args) < 2:
        raise InvalidInput("missing new title")

    store = state.task_store
    tasks, _task = edit_task(store.load(), task_id, " ".join(args[1:]))
    store.save(tasks)
    return f"Updated {task_id}"


def cmd_clear(state: AppState, args: list[str]) -> str:
    state.task_store.clear()
    return "All tasks cleared."


registry.register("add", cmd_add, help_text="Add a task", usage="add <title>")
registry.register("list", cmd_list, help_text="List tasks", aliases=["ls"])
registry.register(
    "do", cmd_do, help_text="Mark task done", usage="do <id>", aliases=["complete"]
)
registry.register(
    "rm", cmd_remove, help_text="Remove task", usage="rm <id>", aliases=["remove"]
)
registry.register("edit", cmd_edit, help_text="Edit task title", usage="edit <id> <title>")
registry.register("clear", cmd_clear, help_text="Remove all tasks")
registry.register("help", cmd_help, help_text="Show this help", aliases=["-h", "--help"])

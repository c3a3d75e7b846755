# tests/fakes.py

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from todo_cli.tasks.task_models import Task


class FakeTaskRepo:
    """
    In-memory TaskRepo used for command tests.

    Records every save so tests can assert that read-only or failed
    commands never write.
    """

    def __init__(self, tasks: list[Task] | None = None, last_id: int = 0) -> None:
        self.tasks: list[Task] = list(tasks or [])
        self.saves: list[list[Task]] = []
        self.cleared = 0
        self._last_id = last_id

    @property
    def path(self) -> Path:
        return Path("memory://tasks.json")

    @property
    def last_id(self) -> int:
        return self._last_id

    def exists(self) -> bool:
        return bool(self.tasks) or bool(self.saves)

    def load(self) -> list[Task]:
        return list(self.tasks)

    def save(self, tasks: Iterable[Task]) -> None:
        self.tasks = list(tasks)
        self.saves.append(list(self.tasks))
        self._last_id = max([self._last_id, *(t.id for t in self.tasks)])

    def clear(self) -> None:
        self.tasks = []
        self.cleared += 1
        self._last_id = 0

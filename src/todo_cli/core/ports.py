# src/todo_cli/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the command layer.

Commands depend on a Protocol instead of the concrete JSON store,
which keeps storage swappable and makes testing easier.
"""

from collections.abc import Iterable
from pathlib import Path
from typing import Protocol

from ..tasks.task_models import Task


class TaskRepo(Protocol):
    """Whole-collection task storage: read all, write all, or drop it."""

    @property
    def path(self) -> Path: ...

    @property
    def last_id(self) -> int: ...

    def exists(self) -> bool: ...
    def load(self) -> list[Task]: ...
    def save(self, tasks: Iterable[Task]) -> None: ...
    def clear(self) -> None: ...

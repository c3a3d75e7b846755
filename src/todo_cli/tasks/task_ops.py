# src/todo_cli/tasks/task_ops.py

"""
Pure operations over an in-memory task list.

None of these functions touch storage or mutate the list they receive:
each returns a new list together with whatever the caller needs to report.
Failures are raised as NotFound / InvalidInput.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import replace
from datetime import datetime
from enum import StrEnum

from ..errors import InvalidInput, NotFound
from .task_models import Task

logger = logging.getLogger(__name__)


class DoneOutcome(StrEnum):
    COMPLETED = "completed"
    ALREADY_DONE = "already_done"


def _now() -> datetime:
    return datetime.now().astimezone()


def _clean_title(title: str) -> str:
    cleaned = (title or "").strip()
    if not cleaned:
        raise InvalidInput("task title must not be empty")
    return cleaned


def next_id(tasks: Sequence[Task], floor_id: int = 0) -> int:
    """1 + the largest id in use or ever handed out (floor_id)."""
    highest = max((t.id for t in tasks), default=0)
    return max(highest, floor_id) + 1


def find_index(tasks: Sequence[Task], task_id: int) -> int:
    for i, t in enumerate(tasks):
        if t.id == task_id:
            return i
    return -1


def _require_index(tasks: Sequence[Task], task_id: int) -> int:
    i = find_index(tasks, task_id)
    if i == -1:
        raise NotFound(task_id)
    return i


def add_task(
    tasks: Sequence[Task],
    title: str,
    *,
    now: datetime | None = None,
    floor_id: int = 0,
) -> tuple[list[Task], Task]:
    cleaned = _clean_title(title)
    if now is None:
        now = _now()

    task = Task(id=next_id(tasks, floor_id), title=cleaned, created_at=now)
    logger.debug("Task added id=%s", task.id)
    return [*tasks, task], task


def mark_done(
    tasks: Sequence[Task],
    task_id: int,
    *,
    now: datetime | None = None,
) -> tuple[list[Task], DoneOutcome]:
    """
    Move a task PENDING -> DONE.

    A task that is already done is left as is (completed_at keeps its
    original value) and ALREADY_DONE is returned instead of an error.
    """
    i = _require_index(tasks, task_id)
    current = tasks[i]
    if current.done:
        return list(tasks), DoneOutcome.ALREADY_DONE

    if now is None:
        now = _now()

    out = list(tasks)
    out[i] = replace(current, done=True, completed_at=now)
    logger.debug("Task completed id=%s", task_id)
    return out, DoneOutcome.COMPLETED


def edit_task(tasks: Sequence[Task], task_id: int, new_title: str) -> tuple[list[Task], Task]:
    i = _require_index(tasks, task_id)
    cleaned = _clean_title(new_title)

    out = list(tasks)
    out[i] = replace(tasks[i], title=cleaned)
    logger.debug("Task retitled id=%s", task_id)
    return out, out[i]


def remove_task(tasks: Sequence[Task], task_id: int) -> tuple[list[Task], Task]:
    i = _require_index(tasks, task_id)
    removed = tasks[i]
    out = [*tasks[:i], *tasks[i + 1 :]]
    logger.debug("Task removed id=%s", task_id)
    return out, removed

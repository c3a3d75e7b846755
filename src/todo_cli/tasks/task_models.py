# src/todo_cli/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum
from typing import Any


class TaskStatus(StrEnum):
    """
    Task lifecycle status.

    Notes:
    - derived from Task.done, never stored on disk
    - PENDING -> DONE is the only transition; DONE is terminal
    """

    PENDING = "pending"
    DONE = "done"


@dataclass(frozen=True, slots=True)
class Task:
    id: int
    title: str
    created_at: datetime
    done: bool = False
    completed_at: datetime | None = None

    @property
    def status(self) -> TaskStatus:
        return TaskStatus.DONE if self.done else TaskStatus.PENDING

    def to_record(self) -> dict[str, Any]:
        """JSON record; completed_at is omitted while unset."""
        rec: dict[str, Any] = {
            "id": self.id,
            "title": self.title,
            "done": self.done,
            "created_at": self.created_at.isoformat(),
        }
        if self.completed_at is not None:
            rec["completed_at"] = self.completed_at.isoformat()
        return rec

    @classmethod
    def from_record(cls, rec: Any) -> Task:
        """
        Build a Task from a decoded JSON record.

        Raises ValueError/TypeError/KeyError on malformed records; the store
        turns those into CorruptedStore.
        """
        if not isinstance(rec, dict):
            raise TypeError(f"task record must be an object, got {type(rec).__name__}")

        task_id = rec["id"]
        # bool is an int subclass; reject it explicitly.
        if not isinstance(task_id, int) or isinstance(task_id, bool):
            raise TypeError(f"task id must be an integer, got {task_id!r}")

        title = rec["title"]
        if not isinstance(title, str):
            raise TypeError(f"task title must be a string, got {title!r}")

        done = rec.get("done", False)
        if not isinstance(done, bool):
            raise TypeError(f"task done flag must be a boolean, got {done!r}")

        raw_completed = rec.get("completed_at")
        # done and completed_at travel together: PENDING has no completion
        # time, DONE always has one.
        if done != (raw_completed is not None):
            raise ValueError(
                f"task {task_id}: done={done} does not match completed_at={raw_completed!r}"
            )

        return cls(
            id=task_id,
            title=title,
            done=done,
            created_at=_parse_ts(rec["created_at"]),
            completed_at=_parse_ts(raw_completed) if raw_completed is not None else None,
        )


def _parse_ts(raw: Any) -> datetime:
    if not isinstance(raw, str):
        raise TypeError(f"timestamp must be a string, got {raw!r}")
    return datetime.fromisoformat(raw)

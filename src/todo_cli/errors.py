# src/todo_cli/errors.py

"""Typed exceptions for every failure mode of the task CLI.

Invariants:
- Every error has a stable ``code`` string.
- ``fatal`` errors abort the current command and surface at the CLI boundary
  as a single ``Error: ...`` line with exit status 1.
- ``CorruptedStore`` is never fatal: the store recovers from it internally.
"""

from __future__ import annotations


class TodoError(Exception):
    """Base exception for all task CLI errors."""

    code = "todo_error"
    fatal = True

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class StorageUnavailable(TodoError):
    """Storage location cannot be determined or created."""

    code = "storage_unavailable"


class StorageIO(TodoError):
    """Read, write or rename of the store failed."""

    code = "storage_io"


class CorruptedStore(TodoError):
    """Store content could not be decoded into tasks."""

    code = "corrupted_store"
    fatal = False


class NotFound(TodoError):
    code = "not_found"

    def __init__(self, task_id: int) -> None:
        super().__init__(f"task {task_id} not found")
        self.task_id = task_id


class InvalidInput(TodoError):
    """Bad user input: empty title, missing or unparseable id."""

    code = "invalid_input"

    def __init__(self, message: str, *, usage: str | None = None) -> None:
        super().__init__(message)
        self.usage = usage

# src/todo_cli/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- resolves the task file location (override or ~/.todo/tasks.json),
- wires the concrete TaskStore into AppState.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.state import AppState
from ..tasks.task_store import TaskStore, resolve_store_path

logger = logging.getLogger(__name__)


def create_initial_state(*, settings=None, home=None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings (and home) injectable makes the app easier to test and
    avoids hidden global config reads. If settings is None, falls back to
    get_settings().

    Raises StorageUnavailable when the default location cannot be prepared.
    """
    if settings is None:
        settings = get_settings()

    path = resolve_store_path(getattr(settings, "tasks_file", None), home=home)
    logger.debug("Using task file %s", path)

    return AppState(settings=settings, task_store=TaskStore(path))

# tests/conftest.py

from __future__ import annotations

import logging
from datetime import datetime, timezone
from pathlib import Path
from types import SimpleNamespace

import pytest

from todo_cli.core.state import AppState
from todo_cli.tasks.task_store import TaskStore


@pytest.fixture(autouse=True)
def _restore_root_logging():
    """main() reconfigures the root logger; undo that after every test."""
    root = logging.getLogger()
    level = root.level
    yield
    for h in list(root.handlers):
        if (h.get_name() or "").startswith("todo_cli."):
            root.removeHandler(h)
            h.close()
    root.setLevel(level)
    logging.captureWarnings(False)


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the CLI.

    We intentionally use a SimpleNamespace rather than Settings.from_env(),
    to keep unit tests isolated from the developer's environment.
    """
    return SimpleNamespace(
        app_name="todo",
        log_level="WARNING",
        log_file=None,
        tasks_file=tmp_path / "tasks.json",
    )


@pytest.fixture()
def store(settings: SimpleNamespace) -> TaskStore:
    return TaskStore(settings.tasks_file)


@pytest.fixture()
def state(settings: SimpleNamespace, store: TaskStore) -> AppState:
    # Real JSON store: its on-disk behavior is part of what we test.
    return AppState(settings=settings, task_store=store)


@pytest.fixture()
def t0() -> datetime:
    return datetime(2024, 1, 2, 15, 4, 5, tzinfo=timezone.utc)

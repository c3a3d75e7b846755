# src/todo_cli/core/state.py

from __future__ import annotations

from dataclasses import dataclass

from .ports import TaskRepo


@dataclass
class AppState:
    # Settings stay on the state so commands can read app_name etc.
    settings: object

    task_store: TaskRepo

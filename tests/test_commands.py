# tests/test_commands.py

from __future__ import annotations

import pytest

from todo_cli.cli.commands import CommandRegistry, registry
from todo_cli.core.state import AppState
from todo_cli.errors import InvalidInput, NotFound
from todo_cli.tasks.task_ops import add_task, mark_done

from .fakes import FakeTaskRepo


def test_command_registry_routes_names_and_aliases(state) -> None:
    reg = CommandRegistry()
    called: list[list[str]] = []

    def handler(state, args):
        called.append(args)
        return "ok"

    reg.register("rm", handler, "Remove", usage="rm <id>", aliases=["remove"])

    assert reg.handle(state, "rm", ["1"]) == "ok"
    assert reg.handle(state, "REMOVE", ["2"]) == "ok"
    assert called == [["1"], ["2"]]


def test_command_registry_unknown(state) -> None:
    reg = CommandRegistry()
    assert reg.get("nope") is None
    assert reg.handle(state, "nope", []) is None


def test_invalid_input_gets_usage_hint(state) -> None:
    with pytest.raises(InvalidInput) as exc_info:
        registry.handle(state, "do", ["abc"])
    assert exc_info.value.usage == "todo do <id>"
    assert "abc" in str(exc_info.value)


def test_help_lists_every_command(state) -> None:
    text = registry.handle(state, "help", []) or ""

    assert text.startswith("Usage: todo <command> [args]")
    for usage in ("add <title>", "list", "do <id>", "rm <id>", "edit <id> <title>", "clear"):
        assert usage in text
    assert "complete" in text


def test_scenario_add_done_remove_add(state) -> None:
    store = state.task_store

    assert registry.handle(state, "add", ["Buy", "milk"]) == "Added 1: Buy milk"
    (task,) = store.load()
    assert (task.id, task.title, task.done) == (1, "Buy milk", False)

    assert registry.handle(state, "do", ["1"]) == "Marked 1 done"
    (task,) = store.load()
    assert task.done is True
    assert task.completed_at is not None
    completed_at = task.completed_at

    assert registry.handle(state, "complete", ["1"]) == "Already completed."
    (task,) = store.load()
    assert task.completed_at == completed_at

    assert registry.handle(state, "rm", ["1"]) == "Removed 1"
    assert store.load() == []

    assert registry.handle(state, "add", ["X"]) == "Added 2: X"


def test_edit_unknown_id_leaves_file_untouched(state) -> None:
    registry.handle(state, "add", ["first"])
    before = state.task_store.path.read_bytes()

    with pytest.raises(NotFound):
        registry.handle(state, "edit", ["5", "new", "title"])

    assert state.task_store.path.read_bytes() == before


def test_edit_updates_title(state) -> None:
    registry.handle(state, "add", ["first"])

    assert registry.handle(state, "edit", ["1", "better", "title"]) == "Updated 1"
    assert state.task_store.load()[0].title == "better title"


@pytest.mark.parametrize(
    ("name", "args"),
    [
        ("add", []),
        ("do", []),
        ("rm", ["x"]),
        ("edit", ["1"]),
        ("edit", []),
    ],
)
def test_bad_arguments_are_invalid_input(state, name: str, args: list[str]) -> None:
    with pytest.raises(InvalidInput):
        registry.handle(state, name, args)


@pytest.mark.parametrize("raw", ["1_0", " 5", "5 ", "٣", "1.0", "+", "0x1", ""])
def test_task_id_must_be_plain_digits(state, raw: str) -> None:
    state.task_store.save(add_task([], "a")[0])

    with pytest.raises(InvalidInput, match="invalid task id"):
        registry.handle(state, "do", [raw])
    assert state.task_store.load()[0].done is False


@pytest.mark.parametrize("raw", ["1", "+1", "01"])
def test_signed_and_zero_padded_ids_are_accepted(state, raw: str) -> None:
    state.task_store.save(add_task([], "a")[0])

    assert registry.handle(state, "do", [raw]) == "Marked 1 done"


def test_list_output(settings, t0) -> None:
    tasks, _ = add_task([], "Buy milk", now=t0)
    tasks, _ = add_task(tasks, "Walk dog", now=t0)
    tasks, _ = mark_done(tasks, 1, now=t0)
    state = AppState(settings=settings, task_store=FakeTaskRepo(tasks))

    out = registry.handle(state, "list", []) or ""
    lines = out.splitlines()

    assert lines[0] == "1) [x] Buy milk"
    assert lines[1] == f"    completed: {t0.astimezone().strftime('%Y-%m-%d %H:%M')}"
    assert lines[2] == "2) [ ] Walk dog"


def test_list_empty(settings) -> None:
    state = AppState(settings=settings, task_store=FakeTaskRepo())
    assert registry.handle(state, "ls", []) == "No tasks."


def test_read_only_and_noop_commands_do_not_save(settings, t0) -> None:
    tasks, _ = add_task([], "a", now=t0)
    tasks, _ = mark_done(tasks, 1, now=t0)
    repo = FakeTaskRepo(tasks)
    state = AppState(settings=settings, task_store=repo)

    registry.handle(state, "list", [])
    registry.handle(state, "do", ["1"])
    with pytest.raises(NotFound):
        registry.handle(state, "rm", ["9"])

    assert repo.saves == []


def test_add_respects_high_water_mark(settings) -> None:
    repo = FakeTaskRepo(last_id=41)
    state = AppState(settings=settings, task_store=repo)

    assert registry.handle(state, "add", ["next"]) == "Added 42: next"


def test_clear(state) -> None:
    registry.handle(state, "add", ["a"])

    assert registry.handle(state, "clear", []) == "All tasks cleared."
    assert not state.task_store.exists()
    assert registry.handle(state, "clear", []) == "All tasks cleared."
    assert registry.handle(state, "add", ["b"]) == "Added 1: b"

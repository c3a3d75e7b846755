# src/todo_cli/tasks/task_store.py

from __future__ import annotations

import contextlib
import json
import logging
import os
import time
from collections.abc import Iterable
from pathlib import Path

from ..errors import CorruptedStore, StorageIO, StorageUnavailable
from .task_models import Task

logger = logging.getLogger(__name__)

DEFAULT_DIR_NAME = ".todo"
DEFAULT_FILE_NAME = "tasks.json"


def resolve_store_path(override: str | Path | None, *, home: Path | None = None) -> Path:
    """
    Decide where the task file lives.

    - override set and non-empty -> used verbatim, nothing is created
    - otherwise <home>/.todo/tasks.json, creating <home>/.todo when missing
    """
    if override is not None and str(override) != "":
        return Path(override)

    if home is None:
        try:
            home = Path.home()
        except (RuntimeError, KeyError) as exc:
            raise StorageUnavailable(f"cannot determine home directory: {exc}") from exc

    directory = home / DEFAULT_DIR_NAME
    try:
        directory.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise StorageUnavailable(f"cannot create storage directory {directory}: {exc}") from exc
    return directory / DEFAULT_FILE_NAME


class TaskStore:
    """
    JSON file task store.

    The whole collection is one pretty-printed JSON array, read and written
    as a unit:
    - load(): missing file -> [], corrupted file -> backup + []
    - save(): write <path>.tmp, fsync, then os.replace() over the target

    A sidecar <path>.meta.json remembers the highest id ever handed out so
    removed ids are not reused.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)
        self._meta_path = self._path.with_name(self._path.name + ".meta.json")
        self._last_id = 0
        logger.debug("TaskStore ready path=%s", self._path)

    @property
    def path(self) -> Path:
        return self._path

    @property
    def last_id(self) -> int:
        """Highest id known to have been assigned (0 if unknown)."""
        return self._last_id

    def exists(self) -> bool:
        return self._path.exists()

    # ---- low-level helpers ----

    @staticmethod
    def _encode(tasks: Iterable[Task]) -> str:
        return json.dumps([t.to_record() for t in tasks], ensure_ascii=False, indent=2) + "\n"

    @staticmethod
    def _decode(raw: bytes) -> list[Task]:
        try:
            data = json.loads(raw.decode("utf-8"))
            if not isinstance(data, list):
                raise TypeError(f"expected a JSON array, got {type(data).__name__}")
            tasks = [Task.from_record(rec) for rec in data]
        except (ValueError, TypeError, KeyError, RecursionError) as exc:
            # UnicodeDecodeError and JSONDecodeError are both ValueError;
            # deeply nested arrays exhaust the decoder's recursion limit.
            raise CorruptedStore(f"cannot decode tasks: {exc}") from exc

        seen: set[int] = set()
        for t in tasks:
            if t.id in seen:
                raise CorruptedStore(f"duplicate task id {t.id}")
            seen.add(t.id)
        return tasks

    def _backup_corrupted(self, raw: bytes) -> Path:
        backup = self._path.with_name(f"{self._path.name}.broken.{int(time.time())}")
        try:
            backup.write_bytes(raw)
        except OSError:
            logger.debug("Backup of corrupted store failed path=%s", backup, exc_info=True)
        return backup

    def _read_last_id(self) -> int:
        try:
            data = json.loads(self._meta_path.read_text("utf-8"))
            last_id = data["last_id"]
            if not isinstance(last_id, int) or isinstance(last_id, bool):
                raise TypeError(f"last_id must be an integer, got {last_id!r}")
            return max(0, last_id)
        except FileNotFoundError:
            return 0
        except (OSError, ValueError, TypeError, KeyError):
            logger.debug("Ignoring unreadable meta file %s", self._meta_path, exc_info=True)
            return 0

    def _write_atomic(self, target: Path, payload: str) -> None:
        tmp = target.with_name(target.name + ".tmp")
        try:
            with open(tmp, "w", encoding="utf-8") as f:
                f.write(payload)
                f.flush()
                os.fsync(f.fileno())
        except OSError as exc:
            with contextlib.suppress(OSError):
                tmp.unlink()
            raise StorageIO(f"cannot write {tmp}: {exc}") from exc

        try:
            os.replace(tmp, target)
        except OSError as exc:
            # The swap did not happen: target is untouched, tmp is left behind.
            raise StorageIO(f"cannot replace {target}: {exc}") from exc

    # ---- public API ----

    def load(self) -> list[Task]:
        """
        Read the whole collection.

        Never raises on malformed content: the raw bytes are copied to
        <path>.broken.<unix-ts> and an empty list is returned.
        """
        self._last_id = self._read_last_id()
        try:
            raw = self._path.read_bytes()
        except FileNotFoundError:
            return []
        except OSError as exc:
            raise StorageIO(f"cannot read {self._path}: {exc}") from exc

        try:
            tasks = self._decode(raw)
        except CorruptedStore as exc:
            backup = self._backup_corrupted(raw)
            logger.warning(
                "Tasks file corrupted. Backed up to %s and starting with empty list.", backup
            )
            logger.debug("Corruption detail: %s", exc)
            return []

        self._last_id = max(self._last_id, max((t.id for t in tasks), default=0))
        logger.debug("Loaded %d tasks from %s", len(tasks), self._path)
        return tasks

    def save(self, tasks: Iterable[Task]) -> None:
        tasks = list(tasks)
        last_id = max(self._last_id, max((t.id for t in tasks), default=0))

        # Meta goes first: a high-water mark ahead of the task file is harmless,
        # one behind it would let ids be reused.
        self._write_atomic(self._meta_path, json.dumps({"last_id": last_id}) + "\n")
        self._write_atomic(self._path, self._encode(tasks))
        self._last_id = last_id
        logger.debug("Saved %d tasks to %s", len(tasks), self._path)

    def clear(self) -> None:
        """Delete the store (and its meta sidecar). Missing files are fine."""
        for p in (self._path, self._meta_path):
            try:
                p.unlink(missing_ok=True)
            except OSError as exc:
                raise StorageIO(f"cannot remove {p}: {exc}") from exc
        self._last_id = 0
        logger.info("Task store cleared path=%s", self._path)

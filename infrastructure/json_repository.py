"""Whole-file JSON persistence for the task list.

The file is a pretty-printed array of objects with keys id/title/description/
completed. Writes go through a temp file in the same directory followed by
os.replace, so a crash mid-write leaves the previous file intact.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Union

from application.ports import TaskStore
from core import CorruptStorage, IoFailure, TaskList

logger = logging.getLogger("rtasks.store")


def load(path: Union[str, Path]) -> TaskList:
    """Read the task list stored at ``path``.

    Missing file -> empty list. Unreadable file -> IoFailure.
    Malformed content -> CorruptStorage (caller decides how to recover).
    """
    path = Path(path)
    if not path.exists():
        logger.debug("No task file at %s, starting empty", path)
        return TaskList()
    try:
        raw = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise CorruptStorage(path, f"not UTF-8 text: {exc}") from exc
    except OSError as exc:
        raise IoFailure(path, exc.strerror or str(exc)) from exc
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise CorruptStorage(path, f"invalid JSON: {exc}") from exc
    if not isinstance(data, list):
        raise CorruptStorage(path, "expected a JSON array of tasks")
    if not all(isinstance(item, dict) for item in data):
        raise CorruptStorage(path, "every task entry must be an object")
    try:
        tasks = TaskList.from_records(data)
    except ValueError as exc:
        raise CorruptStorage(path, str(exc)) from exc
    logger.debug("Loaded %d tasks from %s", len(tasks), path)
    return tasks


def save(path: Union[str, Path], tasks: TaskList) -> None:
    """Overwrite ``path`` with the full task list (write-to-temp-then-rename)."""
    path = Path(path)
    payload = json.dumps(tasks.to_records(), ensure_ascii=False, indent=2) + "\n"
    tmp_path: Path | None = None
    try:
        with tempfile.NamedTemporaryFile(
            mode="w",
            encoding="utf-8",
            delete=False,
            dir=str(path.parent),
            prefix=f".{path.name}.",
            suffix=".tmp",
        ) as tmp:
            tmp_path = Path(tmp.name)
            tmp.write(payload)
            tmp.flush()
            os.fsync(tmp.fileno())
        os.replace(str(tmp_path), str(path))
    except OSError as exc:
        raise IoFailure(path, exc.strerror or str(exc)) from exc
    finally:
        if tmp_path and tmp_path.exists():
            try:
                tmp_path.unlink()
            except OSError:
                logger.debug("Could not remove temp file %s", tmp_path, exc_info=True)
    logger.debug("Saved %d tasks to %s", len(tasks), path)


class JsonTaskRepository(TaskStore):
    """TaskStore bound to a single JSON file."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def load(self) -> TaskList:
        return load(self.path)

    def save(self, tasks: TaskList) -> None:
        save(self.path, tasks)

    def exists(self) -> bool:
        return self.path.exists()


__all__ = ["JsonTaskRepository", "load", "save"]

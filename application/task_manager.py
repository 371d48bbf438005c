"""Application-level task service: storage access with the recovery policy."""

from __future__ import annotations

import logging
from typing import Optional, Tuple

from application.ports import TaskStore
from core import CorruptStorage, IoFailure, Task, TaskList

logger = logging.getLogger("rtasks.store")


class TaskManager:
    """Wraps a TaskStore.

    - corrupt storage is replaced by an empty list, with a warning kept in
      ``load_warning`` for the interface to show
    - save failures are reported as (ok, message) instead of raising
    """

    def __init__(self, store: TaskStore):
        self.store = store
        self.load_warning: str = ""
        self.last_save_error: str = ""

    @property
    def path(self):
        return self.store.path

    def open(self) -> TaskList:
        """Load the list; IoFailure propagates, CorruptStorage does not."""
        self.load_warning = ""
        try:
            return self.store.load()
        except CorruptStorage as exc:
            self.load_warning = f"Task file is corrupt ({exc.reason}); starting with an empty list"
            logger.warning("Corrupt task file %s: %s", exc.path, exc.reason)
            return TaskList()

    def persist(self, tasks: TaskList) -> Tuple[bool, str]:
        try:
            self.store.save(tasks)
        except IoFailure as exc:
            self.last_save_error = f"Could not save tasks: {exc.reason}"
            logger.error("Save to %s failed: %s", exc.path, exc.reason)
            return False, self.last_save_error
        self.last_save_error = ""
        return True, ""

    def add_task(self, tasks: TaskList, title: str, description: str = "") -> Tuple[Task, Optional[str]]:
        """Append a task and persist; InvalidInput propagates before any change."""
        task = tasks.add(title, description)
        logger.info("Task %s added", task.id)
        ok, error = self.persist(tasks)
        return task, (None if ok else error)


__all__ = ["TaskManager"]

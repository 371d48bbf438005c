from pathlib import Path

import pytest

import config
from application.task_manager import TaskManager
from core import IoFailure, Task, TaskList


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Never read or write the real ~/.rtasks_config.yaml."""
    cfg = tmp_path / "rtasks_config.yaml"
    monkeypatch.setattr(config, "USER_CONFIG_PATH", cfg)
    return cfg


class MemoryStore:
    """TaskStore kept in memory; ``fail_saves`` simulates a read-only disk."""

    def __init__(self, tasks=None, path=Path("/tmp/rtasks-test/tasks.json")):
        self.path = path
        self.records = [t.to_dict() for t in (tasks or [])]
        self.saved = False
        self.fail_saves = False
        self.save_calls = 0

    def load(self) -> TaskList:
        return TaskList.from_records(self.records)

    def save(self, tasks: TaskList) -> None:
        self.save_calls += 1
        if self.fail_saves:
            raise IoFailure(self.path, "Read-only file system")
        self.records = tasks.to_records()
        self.saved = True

    def exists(self) -> bool:
        return self.saved or bool(self.records)


@pytest.fixture
def make_store():
    def _make(*titles, **kwargs):
        tasks = [Task(id=i, title=t) for i, t in enumerate(titles, start=1)]
        return MemoryStore(tasks, **kwargs)

    return _make


@pytest.fixture
def make_manager(make_store):
    def _make(*titles):
        return TaskManager(make_store(*titles))

    return _make

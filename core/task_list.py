"""Ordered in-memory task list with identifier allocation."""

from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional

from .errors import InvalidInput
from .task import Task, normalize_title


class TaskList:
    """Insertion-ordered list of tasks.

    Identifiers come from a monotonic counter seeded with ``max(id) + 1`` on
    load, so an id freed by a delete is not handed out again while the
    process runs.
    """

    def __init__(self, tasks: Optional[Iterable[Task]] = None):
        self._tasks: List[Task] = []
        self._next_id: int = 1
        for task in tasks or ():
            self._append_existing(task)

    # -------------------- loading --------------------
    def _append_existing(self, task: Task) -> None:
        if any(t.id == task.id for t in self._tasks):
            raise ValueError(f"duplicate task id: {task.id}")
        self._tasks.append(task)
        if task.id >= self._next_id:
            self._next_id = task.id + 1

    @classmethod
    def from_records(cls, records: Iterable[Mapping[str, Any]]) -> "TaskList":
        return cls(Task.from_dict(raw) for raw in records)

    def to_records(self) -> List[Dict[str, Any]]:
        return [task.to_dict() for task in self._tasks]

    # -------------------- queries --------------------
    def __len__(self) -> int:
        return len(self._tasks)

    def __iter__(self) -> Iterator[Task]:
        return iter(self._tasks)

    def __getitem__(self, index: int) -> Task:
        return self._tasks[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TaskList):
            return NotImplemented
        return self._tasks == other._tasks

    def __repr__(self) -> str:  # pragma: no cover - convenience only
        return f"TaskList({self._tasks!r})"

    @property
    def next_id(self) -> int:
        return self._next_id

    def ids(self) -> List[int]:
        return [t.id for t in self._tasks]

    def get(self, task_id: int) -> Optional[Task]:
        for task in self._tasks:
            if task.id == task_id:
                return task
        return None

    def index_of(self, task_id: int) -> Optional[int]:
        for idx, task in enumerate(self._tasks):
            if task.id == task_id:
                return idx
        return None

    # -------------------- mutations --------------------
    def add(self, title: str, description: str = "") -> Task:
        task = Task(id=self._next_id, title=normalize_title(title), description=description or "")
        self._next_id += 1
        self._tasks.append(task)
        return task

    def remove_at(self, index: int) -> Task:
        return self._tasks.pop(index)

    def toggle_at(self, index: int) -> Task:
        task = self._tasks[index]
        task.completed = not task.completed
        return task

    def set_title(self, task_id: int, title: str) -> Task:
        task = self._require(task_id)
        task.title = normalize_title(title)
        return task

    def set_description(self, task_id: int, description: str) -> Task:
        task = self._require(task_id)
        task.description = description or ""
        return task

    def _require(self, task_id: int) -> Task:
        task = self.get(task_id)
        if task is None:
            raise InvalidInput("id", f"task {task_id} not found")
        return task


__all__ = ["TaskList"]

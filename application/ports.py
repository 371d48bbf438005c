from pathlib import Path
from typing import Protocol

from core import TaskList


class TaskStore(Protocol):
    path: Path

    def load(self) -> TaskList:
        ...

    def save(self, tasks: TaskList) -> None:
        ...

    def exists(self) -> bool:
        ...

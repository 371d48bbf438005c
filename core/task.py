from dataclasses import dataclass
from typing import Any, Dict, Mapping

from .errors import InvalidInput

TASK_FIELDS = ("id", "title", "description", "completed")


@dataclass
class Task:
    """A single to-do item.

    Fields:
        id: Integer identifier, unique within the list and never reused in a session.
        title: Non-empty display text.
        description: Optional free text (may be empty).
        completed: Completion flag toggled from the editor.
    """

    id: int
    title: str
    description: str = ""
    completed: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "completed": self.completed,
        }

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "Task":
        """Build a Task from a persisted record.

        Raises ValueError when the record cannot be trusted; the store turns
        that into CorruptStorage.
        """
        tid = raw.get("id")
        # bool is an int subclass; `true` is not an identifier
        if not isinstance(tid, int) or isinstance(tid, bool):
            raise ValueError(f"invalid id: {tid!r}")
        title = raw.get("title")
        if not isinstance(title, str):
            raise ValueError(f"task {tid}: title must be a string")
        description = raw.get("description", "")
        if description is None:
            description = ""
        if not isinstance(description, str):
            raise ValueError(f"task {tid}: description must be a string")
        completed = raw.get("completed", False)
        if not isinstance(completed, bool):
            raise ValueError(f"task {tid}: completed must be a boolean")
        return cls(id=tid, title=title, description=description, completed=completed)


def normalize_title(value: str) -> str:
    """Strip a title and reject it when nothing is left."""
    title = (value or "").strip()
    if not title:
        raise InvalidInput("title", "title must not be empty")
    return title


__all__ = ["Task", "TASK_FIELDS", "normalize_title"]

from .errors import CorruptStorage, InvalidInput, IoFailure, RtasksError
from .task import TASK_FIELDS, Task, normalize_title
from .task_list import TaskList

__all__ = [
    "Task",
    "TaskList",
    "TASK_FIELDS",
    "normalize_title",
    # Errors
    "RtasksError",
    "CorruptStorage",
    "IoFailure",
    "InvalidInput",
]

from .editor import Editor, Key, KeyEvent
from .ports import TaskStore
from .task_manager import TaskManager

__all__ = ["Editor", "Key", "KeyEvent", "TaskStore", "TaskManager"]

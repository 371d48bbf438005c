"""Interactive editor state machine.

State is (mode, task list, selection cursor, notice). The interface feeds
logical key events into ``Editor.handle``; every event is processed to
completion, including the save it triggers, before the next one arrives.

Modes are a small tagged union: Normal carries nothing, text-entry modes
carry their own buffer, buffer cursor and (where relevant) the target task id.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional, Type, Union

from application.task_manager import TaskManager
from core import InvalidInput, Task, TaskList

logger = logging.getLogger("rtasks.editor")


class Key(Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    HOME = "home"
    END = "end"
    TOGGLE = "toggle"
    ADD = "add"
    EDIT_TITLE = "edit_title"
    EDIT_DESCRIPTION = "edit_description"
    DELETE = "delete"
    QUIT = "quit"
    CONFIRM = "confirm"
    CANCEL = "cancel"
    CHAR = "char"
    BACKSPACE = "backspace"
    DELETE_CHAR = "delete_char"
    INTERRUPT = "interrupt"


@dataclass(frozen=True)
class KeyEvent:
    key: Key
    char: str = ""


def _clean_input(data: str) -> str:
    text = data.replace("\r\n", " ").replace("\n", " ").replace("\t", " ")
    return "".join(ch for ch in text if ch.isprintable())


# -------------------- modes --------------------
@dataclass(frozen=True)
class Normal:
    pass


@dataclass(frozen=True)
class TextEntry:
    """Common buffer behaviour; concrete modes below only add their target."""

    text: str = ""
    cursor: int = 0

    def insert(self, data: str) -> "TextEntry":
        chunk = _clean_input(data)
        if not chunk:
            return self
        text = self.text[: self.cursor] + chunk + self.text[self.cursor :]
        return replace(self, text=text, cursor=self.cursor + len(chunk))

    def backspace(self) -> "TextEntry":
        if self.cursor <= 0:
            return self
        text = self.text[: self.cursor - 1] + self.text[self.cursor :]
        return replace(self, text=text, cursor=self.cursor - 1)

    def delete_forward(self) -> "TextEntry":
        if self.cursor >= len(self.text):
            return self
        return replace(self, text=self.text[: self.cursor] + self.text[self.cursor + 1 :])

    def move(self, delta: int) -> "TextEntry":
        return replace(self, cursor=max(0, min(self.cursor + delta, len(self.text))))

    def move_to(self, position: int) -> "TextEntry":
        return replace(self, cursor=max(0, min(position, len(self.text))))


@dataclass(frozen=True)
class AddTitle(TextEntry):
    pass


@dataclass(frozen=True)
class AddDescription(TextEntry):
    task_id: int = 0


@dataclass(frozen=True)
class EditTitle(TextEntry):
    task_id: int = 0


@dataclass(frozen=True)
class EditDescription(TextEntry):
    task_id: int = 0


Mode = Union[Normal, AddTitle, AddDescription, EditTitle, EditDescription]


def prefilled(mode_cls: Type[TextEntry], task: Task, value: str) -> TextEntry:
    return mode_cls(text=value, cursor=len(value), task_id=task.id)


# -------------------- editor --------------------
class Editor:
    def __init__(self, tasks: TaskList, manager: TaskManager, *, load_failed: bool = False):
        self.tasks = tasks
        self.manager = manager
        # the file on disk was not read; it must not be replaced until the user changes something
        self.load_failed = load_failed
        self.changed = False
        self.mode: Mode = Normal()
        self.selected: Optional[int] = 0 if len(tasks) else None
        self.running: bool = True
        self.unsaved: bool = False
        self.notice: str = ""
        self.notice_is_error: bool = False

    # ---- queries ----
    @property
    def is_text_entry(self) -> bool:
        return isinstance(self.mode, TextEntry)

    @property
    def selected_task(self) -> Optional[Task]:
        if self.selected is None:
            return None
        return self.tasks[self.selected]

    @property
    def mode_name(self) -> str:
        return type(self.mode).__name__

    def take_notice(self) -> tuple[str, bool]:
        message, is_error = self.notice, self.notice_is_error
        self.notice = ""
        self.notice_is_error = False
        return message, is_error

    # ---- helpers ----
    def _set_notice(self, message: str, error: bool = False) -> None:
        self.notice = message
        self.notice_is_error = error

    def _clamp(self) -> None:
        total = len(self.tasks)
        if total == 0:
            self.selected = None
            return
        current = self.selected if self.selected is not None else 0
        self.selected = max(0, min(current, total - 1))

    def _select_task(self, task_id: int) -> None:
        idx = self.tasks.index_of(task_id)
        if idx is not None:
            self.selected = idx
        self._clamp()

    def _persist(self) -> bool:
        self.changed = True
        return self._save()

    def _save(self) -> bool:
        ok, error = self.manager.persist(self.tasks)
        self.unsaved = not ok
        if not ok:
            self._set_notice(error, error=True)
        return ok

    def _to_normal(self) -> None:
        self.mode = Normal()
        self._clamp()

    # ---- dispatch ----
    def handle(self, event: KeyEvent) -> None:
        if not self.running:
            return
        if event.key is Key.INTERRUPT:
            self._quit()
            return
        mode = self.mode
        if isinstance(mode, TextEntry):
            self._handle_text(mode, event)
        else:
            self._handle_normal(event)
        self._clamp()

    def _handle_normal(self, event: KeyEvent) -> None:
        key = event.key
        if key is Key.UP:
            self._move(-1)
        elif key is Key.DOWN:
            self._move(1)
        elif key is Key.TOGGLE:
            self._toggle()
        elif key is Key.ADD:
            self.mode = AddTitle()
        elif key is Key.EDIT_TITLE:
            task = self.selected_task
            if task is not None:
                self.mode = prefilled(EditTitle, task, task.title)
        elif key is Key.EDIT_DESCRIPTION:
            task = self.selected_task
            if task is not None:
                self.mode = prefilled(EditDescription, task, task.description)
        elif key is Key.DELETE:
            self._delete()
        elif key is Key.QUIT:
            self._quit()

    def _move(self, delta: int) -> None:
        if self.selected is None:
            return
        self.selected = max(0, min(self.selected + delta, len(self.tasks) - 1))

    def _toggle(self) -> None:
        if self.selected is None:
            return
        task = self.tasks.toggle_at(self.selected)
        logger.debug("Task %s completed=%s", task.id, task.completed)
        self._persist()

    def _delete(self) -> None:
        if self.selected is None:
            return
        task = self.tasks.remove_at(self.selected)
        logger.info("Task %s deleted", task.id)
        self._clamp()
        if self._persist():
            self._set_notice(f"Deleted task {task.id}")

    def _quit(self) -> None:
        # Uncommitted text is dropped; the task list itself is already consistent.
        self.mode = Normal()
        if self.load_failed and not self.changed:
            logger.warning("Task file was not loaded; leaving it untouched on exit")
        else:
            self._save()
        self.running = False

    # ---- text entry ----
    def _handle_text(self, mode: TextEntry, event: KeyEvent) -> None:
        key = event.key
        if key is Key.CHAR:
            self.mode = mode.insert(event.char)
        elif key is Key.BACKSPACE:
            self.mode = mode.backspace()
        elif key is Key.DELETE_CHAR:
            self.mode = mode.delete_forward()
        elif key is Key.LEFT:
            self.mode = mode.move(-1)
        elif key is Key.RIGHT:
            self.mode = mode.move(1)
        elif key is Key.HOME:
            self.mode = mode.move_to(0)
        elif key is Key.END:
            self.mode = mode.move_to(len(mode.text))
        elif key is Key.CONFIRM:
            self._confirm(mode)
        elif key is Key.CANCEL:
            self._cancel(mode)

    def _confirm(self, mode: TextEntry) -> None:
        if isinstance(mode, AddTitle):
            try:
                task = self.tasks.add(mode.text)
            except InvalidInput:
                # empty title on add behaves like Esc
                self._to_normal()
                return
            logger.info("Task %s added", task.id)
            self._select_task(task.id)
            self.mode = AddDescription(task_id=task.id)
        elif isinstance(mode, AddDescription):
            if self.tasks.get(mode.task_id) is not None:
                self.tasks.set_description(mode.task_id, mode.text)
            self._finish_add(mode.task_id)
        elif isinstance(mode, EditTitle):
            try:
                self.tasks.set_title(mode.task_id, mode.text)
            except InvalidInput as exc:
                self._set_notice(exc.message.capitalize(), error=True)
                self._to_normal()
                return
            self._persist()
            self._to_normal()
        elif isinstance(mode, EditDescription):
            if self.tasks.get(mode.task_id) is not None:
                self.tasks.set_description(mode.task_id, mode.text)
                self._persist()
            self._to_normal()

    def _cancel(self, mode: TextEntry) -> None:
        if isinstance(mode, AddDescription):
            # the task already exists; keep it with an empty description
            self._finish_add(mode.task_id)
            return
        self._to_normal()

    def _finish_add(self, task_id: int) -> None:
        self._persist()
        self.mode = Normal()
        self._select_task(task_id)


__all__ = [
    "Editor",
    "Key",
    "KeyEvent",
    "Mode",
    "Normal",
    "TextEntry",
    "AddTitle",
    "AddDescription",
    "EditTitle",
    "EditDescription",
]

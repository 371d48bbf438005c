"""One-shot commands: add and list."""

import logging
import sys
from dataclasses import dataclass
from typing import Callable

from application.task_manager import TaskManager
from core import InvalidInput, IoFailure, Task, TaskList

logger = logging.getLogger("rtasks.cli")

TaskManagerFactory = Callable[[], TaskManager]
Translate = Callable[..., str]


@dataclass
class CliDeps:
    manager_factory: TaskManagerFactory
    translate: Translate


def format_task_line(task: Task) -> str:
    status = "[x]" if task.completed else "[ ]"
    desc = f" - {task.description}" if task.description else ""
    return f"{status} {task.id}. {task.title}{desc}"


def _open(manager: TaskManager) -> TaskList:
    tasks = manager.open()
    if manager.load_warning:
        print(f"warning: {manager.load_warning}", file=sys.stderr)
    return tasks


def cmd_add(args, deps: CliDeps) -> int:
    manager = deps.manager_factory()
    try:
        tasks = _open(manager)
    except IoFailure as exc:
        logger.error("Cannot read %s: %s", exc.path, exc.reason)
        print(f"error: {exc}", file=sys.stderr)
        return 1
    try:
        task, error = manager.add_task(tasks, args.add, args.description or "")
    except InvalidInput as exc:
        print(f"error: {exc.message}", file=sys.stderr)
        return 2
    if error:
        print(f"error: {error}", file=sys.stderr)
        return 1
    print(deps.translate("CLI_ADDED", title=task.title, id=task.id))
    return 0


def cmd_list(args, deps: CliDeps) -> int:
    manager = deps.manager_factory()
    try:
        tasks = _open(manager)
    except IoFailure as exc:
        logger.error("Cannot read %s: %s", exc.path, exc.reason)
        print(f"error: {exc}", file=sys.stderr)
        return 1
    if not len(tasks):
        print(deps.translate("CLI_NO_TASKS"))
        return 0
    print(deps.translate("CLI_HEADER"))
    for task in tasks:
        print(format_task_line(task))
    return 0


__all__ = ["CliDeps", "cmd_add", "cmd_list", "format_task_line"]

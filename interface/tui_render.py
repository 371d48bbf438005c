"""Formatted-text builders for the task editor screen."""

import time
from typing import List, Tuple

from prompt_toolkit.formatted_text import FormattedText
from wcwidth import wcswidth

from application.editor import TextEntry
from interface.constants import APP_TITLE

# prompt_toolkit scrolls the window so that this fragment stays visible
CURSOR_MARK = ("[SetCursorPosition]", "")


def display_width(text: str) -> int:
    width = wcswidth(text)
    return width if width >= 0 else len(text)


def pad_display(text: str, width: int) -> str:
    return text + " " * max(0, width - display_width(text))


def render_header_text(tui) -> FormattedText:
    tasks = tui.editor.tasks
    done = sum(1 for t in tasks if t.completed)
    counts = tui._t("HEADER_COUNTS", total=len(tasks), done=done)
    right = f"{counts} "
    if tui.editor.unsaved:
        right = f"[{tui._t('UNSAVED')}] {right}"
    width = tui.get_terminal_width()
    left = APP_TITLE
    gap = max(1, width - display_width(left) - display_width(right))
    return FormattedText([("class:header", left + " " * gap + right)])


def _input_fragments(mode: TextEntry) -> List[Tuple[str, str]]:
    text, cursor = mode.text, mode.cursor
    before, after = text[:cursor], text[cursor:]
    under = after[:1] or " "
    return [
        ("class:input", "> " + before),
        CURSOR_MARK,
        ("class:input.cursor", under),
        ("class:input", after[1:]),
    ]


def render_task_lines(tui) -> List[Tuple[str, str]]:
    editor = tui.editor
    parts: List[Tuple[str, str]] = []
    if not len(editor.tasks):
        parts.append(("class:text.dim", tui._t("EMPTY_LIST")))
        return parts
    highlight = not editor.is_text_entry
    for index, task in enumerate(editor.tasks):
        if index:
            parts.append(("", "\n"))
        selected = highlight and index == editor.selected
        mark = "[X]" if task.completed else "[ ]"
        if selected:
            base = "class:selected"
            parts.append(CURSOR_MARK)
        elif task.completed:
            base = "class:task.done"
        else:
            base = "class:text"
        parts.append((base, f"{mark} "))
        parts.append((base if selected else "class:task.id", f"{task.id} "))
        parts.append((base, task.title))
        if task.description:
            desc_style = base if selected else "class:text.dim"
            parts.append((desc_style, f" - {task.description}"))
    return parts


def render_body_text(tui) -> FormattedText:
    editor = tui.editor
    parts: List[Tuple[str, str]] = []
    mode = editor.mode
    if isinstance(mode, TextEntry):
        parts.append(("class:prompt", tui._t(f"PROMPT_{editor.mode_name}")))
        parts.append(("", "\n"))
        parts.extend(_input_fragments(mode))
        parts.append(("", "\n\n"))
    else:
        parts.append(("", "\n"))
    parts.extend(render_task_lines(tui))
    return FormattedText(parts)


def render_footer_text(tui) -> FormattedText:
    width = tui.get_terminal_width()
    message = getattr(tui, "status_message", "")
    if message and time.time() < getattr(tui, "status_message_expires", 0):
        style = "class:notice.error" if getattr(tui, "status_is_error", False) else "class:notice"
        return FormattedText([(f"class:footer {style}", pad_display(f" {message}", width))])
    if message:
        tui.status_message = ""
    hint = tui._t("NAV_EDIT_HINT") if tui.editor.is_text_entry else tui._t("NAV_HINT")
    return FormattedText([("class:footer", pad_display(f" {hint}", width))])


__all__ = [
    "render_header_text",
    "render_body_text",
    "render_footer_text",
    "render_task_lines",
    "display_width",
]

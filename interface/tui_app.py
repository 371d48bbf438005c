#!/usr/bin/env python3
"""TUI application - TaskTrackerTUI class and cmd_tui command."""

import logging
import os
import sys
import time
from typing import Optional

from prompt_toolkit.application import Application
from prompt_toolkit.filters import Condition
from prompt_toolkit.key_binding import KeyBindings
from prompt_toolkit.keys import Keys
from prompt_toolkit.layout import HSplit, Layout, Window
from prompt_toolkit.layout.controls import FormattedTextControl
from prompt_toolkit.styles import Style

from application.editor import Editor, Key, KeyEvent
from application.task_manager import TaskManager
from core import IoFailure, TaskList
from interface.i18n import translate
from interface.tui_render import render_body_text, render_footer_text, render_header_text
from interface.tui_themes import DEFAULT_THEME, build_style

logger = logging.getLogger("rtasks.editor")

# Esc must not wait for a possible ANSI sequence (prompt_toolkit default is 0.5s)
ESCAPE_TIMEOUT = 0.05


class TaskTrackerTUI:
    @staticmethod
    def get_theme_palette(theme: str):
        from .tui_themes import get_theme_palette as _get_theme_palette
        return _get_theme_palette(theme)

    @classmethod
    def build_style(cls, theme: str) -> Style:
        return build_style(theme)

    def __init__(
        self,
        manager: TaskManager,
        theme: str = DEFAULT_THEME,
        *,
        lang: Optional[str] = None,
        input=None,
        output=None,
    ):
        self.manager = manager
        self.language = lang
        self.theme_name = theme
        self.status_message: str = ""
        self.status_message_expires: float = 0.0
        self.status_is_error: bool = False

        load_failed = False
        try:
            tasks = manager.open()
            load_error = manager.load_warning
        except IoFailure as exc:
            logger.error("Cannot read %s: %s", exc.path, exc.reason)
            tasks = TaskList()
            load_error = f"Could not read tasks: {exc.reason}"
            load_failed = True
        self.editor = Editor(tasks, manager, load_failed=load_failed)
        if load_error:
            self.set_status_message(load_error, ttl=8, error=True)

        self.style = self.build_style(theme)

        kb = KeyBindings()
        kb.timeout = 0
        text_entry = Condition(lambda: self.editor.is_text_entry)
        normal_mode = ~text_entry

        def bind(*keys, key: Key, filter=normal_mode, eager: bool = False) -> None:
            for name in keys:
                kb.add(name, filter=filter, eager=eager)(lambda event, _key=key: self.dispatch(KeyEvent(_key)))

        # Normal mode: list navigation and commands
        bind("up", "k", key=Key.UP)
        bind("down", "j", key=Key.DOWN)
        bind("space", key=Key.TOGGLE)
        bind("a", "A", key=Key.ADD)
        bind("e", "E", key=Key.EDIT_TITLE)
        bind("d", "D", key=Key.EDIT_DESCRIPTION)
        bind("delete", "x", key=Key.DELETE)
        bind("q", "Q", key=Key.QUIT)

        # Text entry: buffer editing, Enter/Esc
        bind("enter", key=Key.CONFIRM, filter=text_entry)
        bind("escape", key=Key.CANCEL, filter=text_entry, eager=True)
        bind("backspace", key=Key.BACKSPACE, filter=text_entry)
        bind("delete", key=Key.DELETE_CHAR, filter=text_entry)
        bind("left", key=Key.LEFT, filter=text_entry)
        bind("right", key=Key.RIGHT, filter=text_entry)
        bind("home", "c-a", key=Key.HOME, filter=text_entry)
        bind("end", "c-e", key=Key.END, filter=text_entry)

        @kb.add(Keys.Any, filter=text_entry)
        @kb.add(Keys.BracketedPaste, filter=text_entry)
        def _(event):
            """Printable input goes into the buffer at its cursor."""
            # unbound special keys (arrows, F-keys) arrive as escape sequences
            if event.data.startswith("\x1b"):
                return
            self.dispatch(KeyEvent(Key.CHAR, event.data))

        @kb.add("c-c")
        def _(event):
            """Ctrl+C - сохранить и выйти из любого режима"""
            self.dispatch(KeyEvent(Key.INTERRUPT))

        self.key_bindings = kb

        self.header = Window(content=FormattedTextControl(self.get_header_text), height=1, always_hide_cursor=True)
        self.main_window = Window(
            content=FormattedTextControl(self.get_body_text),
            always_hide_cursor=True,
            wrap_lines=False,
        )
        self.footer = Window(content=FormattedTextControl(self.get_footer_text), height=1, always_hide_cursor=True)
        root = HSplit([self.header, self.main_window, self.footer])

        self.app = Application(
            layout=Layout(root),
            key_bindings=kb,
            style=self.style,
            full_screen=True,
            mouse_support=False,
            refresh_interval=1.0,
            input=input,
            output=output,
        )
        self.app.ttimeoutlen = ESCAPE_TIMEOUT

    @staticmethod
    def get_terminal_width() -> int:
        """Get current terminal width, default to 100 if unavailable."""
        try:
            return os.get_terminal_size().columns
        except (AttributeError, ValueError, OSError):
            return 100

    def _t(self, key: str, **kwargs) -> str:
        return translate(key, lang=self.language, **kwargs)

    def force_render(self) -> None:
        app = getattr(self, "app", None)
        if app:
            app.invalidate()

    def set_status_message(self, message: str, ttl: float = 4.0, error: bool = False) -> None:
        self.status_message = message
        self.status_message_expires = time.time() + ttl
        self.status_is_error = error

    def dispatch(self, event: KeyEvent) -> None:
        """Feed one logical key event to the editor and reflect the outcome."""
        self.editor.handle(event)
        message, is_error = self.editor.take_notice()
        if message:
            self.set_status_message(message, ttl=6 if is_error else 3, error=is_error)
        if not self.editor.running:
            if self.app.is_running:
                self.app.exit()
            return
        self.force_render()

    def get_header_text(self):
        return render_header_text(self)

    def get_body_text(self):
        return render_body_text(self)

    def get_footer_text(self):
        return render_footer_text(self)

    def run(self) -> None:
        self.app.run()


def _has_terminal() -> bool:
    try:
        return sys.stdin.isatty() and sys.stdout.isatty()
    except (AttributeError, ValueError):
        return False


def cmd_tui(args, manager: TaskManager) -> int:
    lang = getattr(args, "lang", None)
    if not _has_terminal():
        print(translate("NO_TERMINAL", lang=lang, error="stdin/stdout is not a tty"), file=sys.stderr)
        return 1

    if not manager.store.exists():
        print(translate("FIRST_RUN", lang=lang, path=manager.path), file=sys.stderr)
        try:
            input(translate("FIRST_RUN_CONTINUE", lang=lang))
        except EOFError:
            pass
        except KeyboardInterrupt:
            print(file=sys.stderr)
            return 130

    try:
        tui = TaskTrackerTUI(manager, theme=getattr(args, "theme", DEFAULT_THEME), lang=lang)
        tui.run()
    except OSError as exc:
        logger.error("Interactive session failed: %s", exc)
        print(translate("NO_TERMINAL", lang=lang, error=exc), file=sys.stderr)
        return 1

    if tui.editor.unsaved:
        error = manager.last_save_error or "unknown error"
        print(translate("SAVE_FAILED_ON_EXIT", lang=lang, error=error), file=sys.stderr)
        return 1
    print(translate("GOODBYE", lang=lang))
    return 0


__all__ = ["TaskTrackerTUI", "cmd_tui"]

"""Editor transition table, buffer editing and persistence behaviour."""

import random

import pytest

from application.editor import (
    AddDescription,
    AddTitle,
    EditDescription,
    EditTitle,
    Editor,
    Key,
    KeyEvent,
    Normal,
    TextEntry,
    prefilled,
)
from application.task_manager import TaskManager
from core import Task, TaskList


def _editor(store) -> Editor:
    manager = TaskManager(store)
    return Editor(manager.open(), manager)


def _type(editor: Editor, text: str) -> None:
    for ch in text:
        editor.handle(KeyEvent(Key.CHAR, ch))


def _press(editor: Editor, *keys: Key) -> None:
    for key in keys:
        editor.handle(KeyEvent(key))


def _assert_cursor_valid(editor: Editor) -> None:
    if len(editor.tasks) == 0:
        assert editor.selected is None
    else:
        assert 0 <= editor.selected < len(editor.tasks)


class TestNormalMode:
    def test_initial_selection(self, make_store):
        assert _editor(make_store()).selected is None
        assert _editor(make_store("a", "b")).selected == 0

    def test_up_down_clamped(self, make_store):
        editor = _editor(make_store("a", "b", "c"))
        _press(editor, Key.UP)
        assert editor.selected == 0
        _press(editor, Key.DOWN, Key.DOWN, Key.DOWN, Key.DOWN)
        assert editor.selected == 2
        _press(editor, Key.UP)
        assert editor.selected == 1

    def test_navigation_on_empty_list_is_noop(self, make_store):
        editor = _editor(make_store())
        _press(editor, Key.UP, Key.DOWN, Key.TOGGLE, Key.DELETE, Key.EDIT_TITLE, Key.EDIT_DESCRIPTION)
        assert isinstance(editor.mode, Normal)
        assert editor.selected is None

    def test_toggle_persists(self, make_store):
        store = make_store("a")
        editor = _editor(store)
        _press(editor, Key.TOGGLE)
        assert store.records[0]["completed"] is True

    def test_add_enters_empty_add_title(self, make_store):
        editor = _editor(make_store("a"))
        _press(editor, Key.ADD)
        assert editor.mode == AddTitle()

    def test_edit_modes_prefilled(self, make_store):
        store = make_store("a")
        store.records[0]["description"] = "desc"
        editor = _editor(store)
        _press(editor, Key.EDIT_TITLE)
        assert editor.mode == EditTitle(text="a", cursor=1, task_id=1)
        _press(editor, Key.CANCEL, Key.EDIT_DESCRIPTION)
        assert editor.mode == EditDescription(text="desc", cursor=4, task_id=1)

    def test_delete_last_reclamps(self, make_store):
        store = make_store("a", "b")
        editor = _editor(store)
        _press(editor, Key.DOWN, Key.DELETE)
        assert editor.selected == 0
        assert [r["title"] for r in store.records] == ["a"]
        assert editor.take_notice() == ("Deleted task 2", False)
        _press(editor, Key.DELETE)
        assert editor.selected is None
        assert store.records == []

    def test_quit_persists_and_stops(self, make_store):
        store = make_store("a")
        editor = _editor(store)
        _press(editor, Key.QUIT)
        assert editor.running is False
        assert store.save_calls == 1
        _press(editor, Key.ADD)
        assert isinstance(editor.mode, Normal)

    def test_text_keys_ignored_in_normal_mode(self, make_store):
        editor = _editor(make_store("a"))
        editor.handle(KeyEvent(Key.CHAR, "z"))
        _press(editor, Key.CONFIRM, Key.CANCEL, Key.BACKSPACE)
        assert isinstance(editor.mode, Normal)
        assert editor.tasks[0].title == "a"


class TestAddFlow:
    def test_add_title_then_description(self, make_store):
        store = make_store("existing")
        editor = _editor(store)
        _press(editor, Key.ADD)
        _type(editor, "Buy milk")
        _press(editor, Key.CONFIRM)
        assert editor.mode == AddDescription(task_id=2)
        assert editor.selected == 1
        _type(editor, "2%")
        _press(editor, Key.CONFIRM)
        assert isinstance(editor.mode, Normal)
        assert editor.selected == 1
        assert store.records[-1] == {"id": 2, "title": "Buy milk", "description": "2%", "completed": False}

    def test_empty_title_confirm_acts_like_cancel(self, make_store):
        store = make_store()
        editor = _editor(store)
        _press(editor, Key.ADD)
        _type(editor, "   ")
        _press(editor, Key.CONFIRM)
        assert isinstance(editor.mode, Normal)
        assert len(editor.tasks) == 0
        assert store.save_calls == 0

    def test_cancel_add_title_creates_nothing(self, make_store):
        editor = _editor(make_store())
        _press(editor, Key.ADD)
        _type(editor, "draft")
        _press(editor, Key.CANCEL)
        assert isinstance(editor.mode, Normal)
        assert len(editor.tasks) == 0

    def test_cancel_description_keeps_task(self, make_store):
        store = make_store("a")
        editor = _editor(store)
        _press(editor, Key.ADD)
        _type(editor, "b")
        _press(editor, Key.CONFIRM)
        _type(editor, "ignored")
        _press(editor, Key.CANCEL)
        assert isinstance(editor.mode, Normal)
        assert editor.selected == 1
        assert store.records[-1]["title"] == "b"
        assert store.records[-1]["description"] == ""

    def test_title_is_stripped(self, make_store):
        editor = _editor(make_store())
        _press(editor, Key.ADD)
        _type(editor, "  spaced  ")
        _press(editor, Key.CONFIRM, Key.CONFIRM)
        assert editor.tasks[0].title == "spaced"


class TestEditFlow:
    def test_edit_title_overwrites(self, make_store):
        store = make_store("old")
        editor = _editor(store)
        _press(editor, Key.EDIT_TITLE, Key.BACKSPACE, Key.BACKSPACE, Key.BACKSPACE)
        _type(editor, "new")
        _press(editor, Key.CONFIRM)
        assert store.records[0]["title"] == "new"
        assert isinstance(editor.mode, Normal)

    def test_edit_title_empty_is_rejected_with_notice(self, make_store):
        store = make_store("keep")
        editor = _editor(store)
        _press(editor, Key.EDIT_TITLE, Key.HOME)
        for _ in range(4):
            _press(editor, Key.DELETE_CHAR)
        assert editor.mode.text == ""
        _press(editor, Key.CONFIRM)
        assert isinstance(editor.mode, Normal)
        assert editor.tasks[0].title == "keep"
        assert store.save_calls == 0
        message, is_error = editor.take_notice()
        assert message == "Title must not be empty"
        assert is_error is True

    def test_edit_title_cancel_discards(self, make_store):
        editor = _editor(make_store("keep"))
        _press(editor, Key.EDIT_TITLE)
        _type(editor, "xxx")
        _press(editor, Key.CANCEL)
        assert editor.tasks[0].title == "keep"

    def test_edit_description_allows_empty(self, make_store):
        store = make_store("a")
        store.records[0]["description"] = "d"
        editor = _editor(store)
        _press(editor, Key.EDIT_DESCRIPTION, Key.BACKSPACE, Key.CONFIRM)
        assert store.records[0]["description"] == ""

    def test_edit_description_cancel_discards(self, make_store):
        store = make_store("a")
        editor = _editor(store)
        _press(editor, Key.EDIT_DESCRIPTION)
        _type(editor, "draft")
        _press(editor, Key.CANCEL)
        assert editor.tasks[0].description == ""
        assert store.save_calls == 0

    def test_edit_targets_selected_task(self, make_store):
        editor = _editor(make_store("a", "b"))
        _press(editor, Key.DOWN, Key.EDIT_TITLE, Key.END)
        _type(editor, "2")
        _press(editor, Key.CONFIRM)
        assert [t.title for t in editor.tasks] == ["a", "b2"]


class TestBufferEditing:
    def test_insert_at_cursor(self):
        mode = AddTitle().insert("ac").move(-1).insert("b")
        assert (mode.text, mode.cursor) == ("abc", 2)

    def test_backspace_and_delete(self):
        mode = AddTitle(text="abc", cursor=1)
        assert mode.backspace() == AddTitle(text="bc", cursor=0)
        assert mode.delete_forward() == AddTitle(text="ac", cursor=1)
        assert AddTitle(text="abc", cursor=0).backspace().text == "abc"
        assert AddTitle(text="abc", cursor=3).delete_forward().text == "abc"

    def test_cursor_movement_clamped(self):
        mode = TextEntry(text="abc", cursor=1)
        assert mode.move(-5).cursor == 0
        assert mode.move(5).cursor == 3
        assert mode.move_to(99).cursor == 3

    def test_control_characters_ignored(self):
        mode = AddTitle().insert("a\x1bb\x07")
        assert mode.text == "ab"
        assert AddTitle().insert("one\ntwo").text == "one two"

    def test_subclass_preserves_target(self):
        mode = EditTitle(text="x", cursor=1, task_id=5).insert("y")
        assert isinstance(mode, EditTitle)
        assert mode.task_id == 5


class TestInterruptAndFailures:
    def test_interrupt_from_text_mode_discards_buffer(self, make_store):
        store = make_store("a")
        editor = _editor(store)
        _press(editor, Key.EDIT_TITLE)
        _type(editor, "zzz")
        _press(editor, Key.INTERRUPT)
        assert editor.running is False
        assert isinstance(editor.mode, Normal)
        assert store.records[0]["title"] == "a"
        assert store.save_calls == 1

    def test_failed_save_keeps_state_and_marks_unsaved(self, make_store):
        store = make_store("a")
        store.fail_saves = True
        editor = _editor(store)
        _press(editor, Key.TOGGLE)
        assert editor.tasks[0].completed is True
        assert editor.unsaved is True
        message, is_error = editor.take_notice()
        assert "Could not save" in message and is_error

        store.fail_saves = False
        _press(editor, Key.TOGGLE)
        assert editor.unsaved is False
        assert editor.take_notice() == ("", False)

    def test_failed_delete_has_no_success_notice(self, make_store):
        store = make_store("a")
        store.fail_saves = True
        editor = _editor(store)
        _press(editor, Key.DELETE)
        message, is_error = editor.take_notice()
        assert is_error is True
        assert not message.startswith("Deleted")


def test_random_sequences_keep_ids_unique_and_cursor_valid(make_store):
    rng = random.Random(1234)
    editor = _editor(make_store("a", "b", "c"))
    keys = [
        Key.UP, Key.DOWN, Key.TOGGLE, Key.ADD, Key.EDIT_TITLE, Key.EDIT_DESCRIPTION,
        Key.DELETE, Key.CONFIRM, Key.CANCEL, Key.CHAR, Key.BACKSPACE, Key.LEFT, Key.HOME,
    ]
    seen_ids = set(editor.tasks.ids())
    for _ in range(2000):
        key = rng.choice(keys)
        editor.handle(KeyEvent(key, rng.choice("xy ") if key is Key.CHAR else ""))
        ids = editor.tasks.ids()
        assert len(ids) == len(set(ids))
        new_ids = set(ids) - seen_ids
        # deleted ids are never handed out again
        assert all(i >= max(seen_ids, default=0) for i in new_ids)
        seen_ids |= new_ids
        _assert_cursor_valid(editor)
        if isinstance(editor.mode, TextEntry):
            assert 0 <= editor.mode.cursor <= len(editor.mode.text)


@pytest.mark.parametrize("key", [Key.TOGGLE, Key.DELETE])
def test_mode_name_matches_class(make_store, key):
    editor = _editor(make_store("a"))
    _press(editor, key)
    assert editor.mode_name == "Normal"
    _press(editor, Key.ADD)
    assert editor.mode_name == "AddTitle"


class TestUnreadableStore:
    def test_quit_without_changes_does_not_save(self, make_store):
        store = make_store()
        editor = Editor(TaskList(), TaskManager(store), load_failed=True)
        _press(editor, Key.QUIT)
        assert editor.running is False
        assert store.save_calls == 0

    def test_interrupt_without_changes_does_not_save(self, make_store):
        store = make_store()
        editor = Editor(TaskList(), TaskManager(store), load_failed=True)
        _press(editor, Key.ADD)
        _type(editor, "draft")
        _press(editor, Key.INTERRUPT)
        assert store.save_calls == 0

    def test_explicit_change_is_saved(self, make_store):
        store = make_store()
        editor = Editor(TaskList(), TaskManager(store), load_failed=True)
        _press(editor, Key.ADD)
        _type(editor, "new")
        _press(editor, Key.CONFIRM, Key.CONFIRM, Key.QUIT)
        assert [r["title"] for r in store.records] == ["new"]
        assert store.save_calls == 2


def test_text_handler_receives_current_mode(make_store):
    editor = _editor(make_store("a"))
    _press(editor, Key.EDIT_TITLE, Key.END)
    _type(editor, "b")
    assert editor.mode == EditTitle(text="ab", cursor=2, task_id=1)


@pytest.mark.parametrize("mode_cls", [EditTitle, EditDescription])
def test_prefilled_places_cursor_at_end(mode_cls):
    mode = prefilled(mode_cls, Task(id=9, title="t"), "hello")
    assert isinstance(mode, mode_cls)
    assert (mode.text, mode.cursor, mode.task_id) == ("hello", 5, 9)

"""Interface-level constants and the UI language pack."""

APP_NAME = "RTasks"
APP_TITLE = " RTasks - Terminal Task Manager"

LANG_PACK = {
    "en": {
        "HEADER_COUNTS": "{total} tasks · {done} done",
        "EMPTY_LIST": "No tasks yet. Press 'A' to add your first task!",
        "PROMPT_AddTitle": "Adding new task. Type title and press Enter (Esc to cancel):",
        "PROMPT_AddDescription": "Adding description. Type description and press Enter (Esc to skip):",
        "PROMPT_EditTitle": "Editing task title. Type new title and press Enter (Esc to cancel):",
        "PROMPT_EditDescription": "Editing description. Type new description and press Enter (Esc to cancel):",
        "NAV_HINT": "↑↓ Navigate | Space: Toggle | A: Add | E: Edit | D: Edit Desc | Del: Delete | Q: Quit",
        "NAV_EDIT_HINT": "Enter: confirm | Esc: cancel | ←→ move | Backspace: delete",
        "UNSAVED": "unsaved",
        "STATUS_SAVED": "Saved",
        "FIRST_RUN": "RTasks data will be stored at: {path}",
        "FIRST_RUN_CONTINUE": "Press Enter to continue...",
        "MIGRATED": "Migrated tasks from {old} to {new}",
        "GOODBYE": "Thanks for using RTasks!",
        "SAVE_FAILED_ON_EXIT": "Tasks could not be saved before exit: {error}",
        "NO_TERMINAL": "rtasks: interactive mode needs a terminal ({error})",
        "CLI_ADDED": "Task added: {title} (#{id})",
        "CLI_NO_TASKS": "No tasks found.",
        "CLI_HEADER": "Your tasks:",
    },
    "ru": {
        "HEADER_COUNTS": "задач: {total} · готово: {done}",
        "EMPTY_LIST": "Задач пока нет. Нажмите 'A', чтобы добавить первую!",
        "PROMPT_AddTitle": "Новая задача. Введите заголовок и нажмите Enter (Esc — отмена):",
        "PROMPT_AddDescription": "Описание. Введите текст и нажмите Enter (Esc — пропустить):",
        "PROMPT_EditTitle": "Редактирование заголовка. Enter — сохранить, Esc — отмена:",
        "PROMPT_EditDescription": "Редактирование описания. Enter — сохранить, Esc — отмена:",
        "NAV_HINT": "↑↓ Навигация | Space: Готово | A: Добавить | E: Заголовок | D: Описание | Del: Удалить | Q: Выход",
        "NAV_EDIT_HINT": "Enter: сохранить | Esc: отмена | ←→ курсор | Backspace: удалить",
        "UNSAVED": "не сохранено",
        "STATUS_SAVED": "Сохранено",
        "GOODBYE": "Спасибо, что пользуетесь RTasks!",
        "CLI_HEADER": "Ваши задачи:",
        "CLI_NO_TASKS": "Задач нет.",
    },
}

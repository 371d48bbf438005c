"""TUI themes and styling."""

from typing import Dict

from prompt_toolkit.styles import Style


THEMES: Dict[str, Dict[str, str]] = {
    "dark": {
        "": "#d7dfe6",
        "header": "bg:#476eae #ffffff bold",
        "footer": "bg:#1f3a66 #ffffff",
        "prompt": "#e5c07b",
        "input": "#9ad974",
        "text": "#d7dfe6",
        "text.dim": "#7a7f85",
        "task.done": "#6d717a",
        "task.id": "#97a0a9",
        "selected": "bg:#d7dfe6 #1c1c1c",
        "notice": "#9ad974",
        "notice.error": "#ff6b6b bold",
        "input.cursor": "reverse",
    },
    "light": {
        "": "#1c1c1c",
        "header": "bg:#2f5aa0 #ffffff bold",
        "footer": "bg:#c9d6ea #1c1c1c",
        "prompt": "#8a5a00",
        "input": "#1f7a1f",
        "text": "#1c1c1c",
        "text.dim": "#6d717a",
        "task.done": "#9aa0a6",
        "task.id": "#4b525a",
        "selected": "bg:#1c1c1c #f5f5f5",
        "notice": "#1f7a1f",
        "notice.error": "#c62828 bold",
        "input.cursor": "reverse",
    },
}

DEFAULT_THEME = "dark"


def get_theme_palette(theme: str) -> Dict[str, str]:
    """Get theme palette, falling back to default if theme not found."""
    base = THEMES.get(theme)
    if not base:
        base = THEMES[DEFAULT_THEME]
    return dict(base)


def build_style(theme: str) -> Style:
    """Build Style object from theme name."""
    palette = get_theme_palette(theme)
    return Style.from_dict(palette)

from __future__ import annotations

import logging
import yaml
from pathlib import Path
from typing import Dict, Any

USER_CONFIG_PATH = Path.home() / ".rtasks_config.yaml"

_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def _load_config() -> Dict[str, Any]:
    if not USER_CONFIG_PATH.exists():
        return {}
    try:
        data = yaml.safe_load(USER_CONFIG_PATH.read_text(encoding="utf-8")) or {}
    except (OSError, yaml.YAMLError) as exc:
        logging.getLogger("rtasks.config").warning("Ignoring unreadable config %s: %s", USER_CONFIG_PATH, exc)
        return {}
    return data if isinstance(data, dict) else {}


def _save_config(data: Dict[str, Any]) -> None:
    if not data:
        if USER_CONFIG_PATH.exists():
            USER_CONFIG_PATH.unlink()
        return
    USER_CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
    USER_CONFIG_PATH.write_text(yaml.safe_dump(data, allow_unicode=True), encoding="utf-8")


def _set_value(key: str, value: str) -> None:
    data = _load_config()
    value = (value or "").strip()
    if value:
        data[key] = value
    else:
        data.pop(key, None)
    _save_config(data)


def get_user_theme() -> str:
    return str(_load_config().get("theme", "") or "").strip()


def set_user_theme(value: str) -> None:
    _set_value("theme", value)


def get_user_lang() -> str:
    return str(_load_config().get("lang", "") or "").strip()


def set_user_lang(value: str) -> None:
    _set_value("lang", value)


def get_log_level() -> int:
    name = str(_load_config().get("log_level", "") or "INFO").strip().upper()
    if name not in _LOG_LEVELS:
        name = "INFO"
    return getattr(logging, name)

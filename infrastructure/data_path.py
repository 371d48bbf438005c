"""Storage path resolution and legacy ./tasks.json migration."""

from __future__ import annotations

import logging
import os
import shutil
from pathlib import Path
from typing import Optional

logger = logging.getLogger("rtasks.store")

APP_DIRNAME = "rtasks"
DATA_FILENAME = "tasks.json"
LOG_FILENAME = "rtasks.log"


def _home_dir() -> Optional[Path]:
    home = os.environ.get("HOME")
    if home:
        return Path(home)
    try:
        return Path.home()
    except (KeyError, RuntimeError):
        return None


def data_dir_for(home: Path) -> Path:
    return home / ".local" / "share" / APP_DIRNAME


def resolve_path(home: Optional[Path] = None, cwd: Optional[Path] = None) -> Path:
    """Pick the task file location.

    Priority:
    1. ~/.local/share/rtasks/tasks.json (directory created on demand).
    2. ./tasks.json in the working directory when the home directory is
       unknown or the data directory cannot be created.
    """
    base = Path(cwd) if cwd is not None else Path.cwd()
    fallback = base / DATA_FILENAME
    home = home if home is not None else _home_dir()
    if home is None:
        logger.warning("Home directory unknown, using %s", fallback)
        return fallback
    data_dir = data_dir_for(Path(home))
    try:
        data_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        logger.warning("Cannot create %s (%s), using %s", data_dir, exc, fallback)
        return fallback
    return data_dir / DATA_FILENAME


def migrate_legacy_file(target: Path, cwd: Optional[Path] = None) -> Optional[Path]:
    """Move ./tasks.json into ``target`` when only the legacy file exists.

    Returns the legacy path when a migration happened, otherwise None.
    Failures are logged and leave the legacy file where it was.
    """
    base = Path(cwd) if cwd is not None else Path.cwd()
    legacy = base / DATA_FILENAME
    target = Path(target)
    if not legacy.is_file() or target.exists():
        return None
    try:
        if legacy.resolve() == target.resolve():
            return None
        shutil.copyfile(legacy, target)
    except OSError as exc:
        logger.warning("Legacy migration from %s failed: %s", legacy, exc)
        return None
    try:
        legacy.unlink()
    except OSError as exc:
        logger.warning("Migrated %s but could not remove it: %s", legacy, exc)
    logger.info("Migrated tasks from %s to %s", legacy, target)
    return legacy


def log_path_for(data_file: Path) -> Path:
    return Path(data_file).parent / LOG_FILENAME


__all__ = ["resolve_path", "migrate_legacy_file", "data_dir_for", "log_path_for", "DATA_FILENAME"]

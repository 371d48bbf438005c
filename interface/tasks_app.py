#!/usr/bin/env python3
"""
rtasks - terminal task manager (CLI + interactive editor).

One JSON file holds every task; see infrastructure.data_path for where it lives.
"""

import argparse
import functools
import logging
import sys
from importlib.metadata import PackageNotFoundError, version as pkg_version
from pathlib import Path
from typing import List, Optional

from application.task_manager import TaskManager
from config import get_log_level, get_user_theme
from infrastructure.data_path import log_path_for, migrate_legacy_file, resolve_path
from infrastructure.json_repository import JsonTaskRepository
from interface.cli_commands import CliDeps, cmd_add, cmd_list
from interface.cli_parser import build_parser as build_cli_parser, validate_args
from interface.i18n import translate
from interface.logging_setup import buffer_early_records, setup_logging
from interface.tui_app import cmd_tui
from interface.tui_themes import DEFAULT_THEME, THEMES

logger = logging.getLogger("rtasks.cli")


def _version() -> str:
    try:
        return pkg_version("rtasks")
    except PackageNotFoundError:
        return "0.1.0"


def build_parser() -> argparse.ArgumentParser:
    """Build CLI argument parser."""
    return build_cli_parser(themes=THEMES, default_theme=DEFAULT_THEME, version=_version())


def _resolve_theme(args: argparse.Namespace) -> str:
    theme = args.theme or get_user_theme()
    return theme if theme in THEMES else DEFAULT_THEME


def prepare_storage(cwd: Optional[Path] = None) -> Path:
    """Resolve the data file, configure logging next to it, migrate ./tasks.json."""
    with buffer_early_records() as early:
        path = resolve_path(cwd=cwd)
    setup_logging(log_path_for(path), get_log_level(), early=early)
    migrated = migrate_legacy_file(path, cwd=cwd)
    if migrated:
        print(translate("MIGRATED", old=migrated, new=path), file=sys.stderr)
    return path


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    validate_args(parser, args)
    args.theme = _resolve_theme(args)

    path = prepare_storage()
    logger.info("Using task file %s", path)
    manager_factory = functools.partial(TaskManager, JsonTaskRepository(path))
    deps = CliDeps(manager_factory=manager_factory, translate=functools.partial(translate, lang=args.lang))

    if args.add is not None:
        return cmd_add(args, deps)
    if args.list:
        return cmd_list(args, deps)
    return cmd_tui(args, manager_factory())


if __name__ == "__main__":
    sys.exit(main())

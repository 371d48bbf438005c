"""CLI parser construction for rtasks."""

import argparse
from typing import Any, Mapping


def build_parser(themes: Mapping[str, Any], default_theme: str, version: str) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rtasks",
        description="Terminal Task Manager. Without options starts the interactive editor.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("-a", "--add", metavar="TASK", help="Add a new task and exit")
    parser.add_argument(
        "-d",
        "--description",
        metavar="DESCRIPTION",
        help="Description for the task (used with -a)",
    )
    parser.add_argument("-l", "--list", action="store_true", help="List all tasks and exit")
    parser.add_argument("--theme", choices=list(themes.keys()), default=None, help=f"color palette for the editor (default: {default_theme})")
    parser.add_argument("--lang", choices=["en", "ru"], default=None, help="interface language")
    parser.add_argument("--version", action="version", version=f"%(prog)s {version}")
    return parser


def validate_args(parser: argparse.ArgumentParser, args: argparse.Namespace) -> None:
    """Reject invalid option combinations (exits with status 2 via parser.error)."""
    if args.description is not None and args.add is None:
        parser.error("-d/--description requires -a/--add")
    if args.add is not None and args.list:
        parser.error("-a/--add and -l/--list cannot be combined")
    if args.add is not None and not args.add.strip():
        parser.error("task title must not be empty")

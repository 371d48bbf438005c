from .data_path import log_path_for, migrate_legacy_file, resolve_path
from .json_repository import JsonTaskRepository

__all__ = ["JsonTaskRepository", "resolve_path", "migrate_legacy_file", "log_path_for"]

"""Error taxonomy shared by the store, the editor and the CLI."""

from pathlib import Path
from typing import Union


class RtasksError(Exception):
    """Base class for all rtasks failures."""


class CorruptStorage(RtasksError):
    """Persisted file exists but does not contain a valid task list."""

    def __init__(self, path: Union[str, Path], reason: str):
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"{self.path}: {reason}")


class IoFailure(RtasksError):
    """Storage could not be read or written (permissions, disk full, missing dir)."""

    def __init__(self, path: Union[str, Path], reason: str):
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"{self.path}: {reason}")


class InvalidInput(RtasksError):
    """User input rejected before any state change (e.g. empty title)."""

    def __init__(self, field: str, message: str):
        self.field = field
        self.message = message
        super().__init__(f"{field}: {message}")


__all__ = ["RtasksError", "CorruptStorage", "IoFailure", "InvalidInput"]

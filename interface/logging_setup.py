"""Logging configuration.

The interactive editor owns the terminal, so records go to a file next to
the task data instead of stderr.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from logging.handlers import MemoryHandler
from pathlib import Path
from typing import Iterator, Optional

_LOGGER_NAMES = ("rtasks", "py.warnings")


@contextmanager
def buffer_early_records(capacity: int = 200) -> Iterator[MemoryHandler]:
    """Hold ``rtasks`` records emitted before the log file is known.

    Pass the yielded handler to ``setup_logging(early=...)`` to replay them.
    """
    logger = logging.getLogger("rtasks")
    # never flush on level; only setup_logging decides where records end up
    buffer = MemoryHandler(capacity, flushLevel=logging.CRITICAL + 1)
    logger.addHandler(buffer)
    try:
        yield buffer
    finally:
        logger.removeHandler(buffer)


def setup_logging(
    log_file: Optional[Path],
    level: int = logging.INFO,
    early: Optional[MemoryHandler] = None,
) -> None:
    """Attach a single file handler to the ``rtasks`` and ``py.warnings`` loggers.

    Call once at startup. When the log file cannot be opened, logging is
    disabled for the session rather than breaking startup.
    """
    for name in _LOGGER_NAMES:
        logger = logging.getLogger(name)
        for old in list(logger.handlers):
            logger.removeHandler(old)
            old.close()

    handler: logging.Handler
    if log_file is None:
        handler = logging.NullHandler()
    else:
        try:
            Path(log_file).parent.mkdir(parents=True, exist_ok=True)
            handler = logging.FileHandler(str(log_file), encoding="utf-8")
        except OSError:
            handler = logging.NullHandler()
    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )

    root = logging.getLogger("rtasks")
    root.setLevel(level)
    for name in _LOGGER_NAMES:
        logger = logging.getLogger(name)
        logger.propagate = False
        logger.addHandler(handler)

    if early is not None:
        early.setTarget(handler)
        early.close()

    # Route warnings.warn(...) into logging as 'py.warnings'
    logging.captureWarnings(True)

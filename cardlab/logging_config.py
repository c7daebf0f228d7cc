"""
Logging setup for the command line.

Library modules only create loggers; handlers are configured here, once,
by the entry point. Calling setup_logging() again updates the existing
handlers instead of adding duplicates.

Environment overrides:
    CARDLAB_LOG_LEVEL=DEBUG|INFO|WARNING|ERROR
    CARDLAB_LOG_FILE=path/to/file.log
"""

from __future__ import annotations

import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path

_FILE_HANDLER_NAME = "cardlab_file"
_CONSOLE_HANDLER_NAME = "cardlab_console"


def _parse_level(level: str | int) -> int:
    if isinstance(level, int):
        return level

    level_str = (level or "").strip().upper()
    if not level_str:
        return logging.WARNING

    return logging._nameToLevel.get(level_str, logging.WARNING)


def setup_logging(
    *,
    level: str | int | None = None,
    log_file: str | Path | None = None,
    max_bytes: int = 2 * 1024 * 1024,
    backup_count: int = 3,
) -> logging.Logger:
    """
    Configure the root logger.

    Console output goes to stderr so it never mixes with command output.
    A file handler is added only when a log file is given (argument or
    CARDLAB_LOG_FILE). Explicit arguments win over the environment.
    """
    if level is None:
        level = os.environ.get("CARDLAB_LOG_LEVEL", "WARNING")
    if log_file is None:
        log_file = os.environ.get("CARDLAB_LOG_FILE") or None

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)  # let handlers filter

    fmt = logging.Formatter(
        fmt="%(asctime)s %(levelname)-8s %(name)s:%(lineno)d | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    existing_by_name = {getattr(h, "name", ""): h for h in root.handlers}

    console_handler = existing_by_name.get(_CONSOLE_HANDLER_NAME)
    if console_handler is None:
        console_handler = logging.StreamHandler()
        console_handler.name = _CONSOLE_HANDLER_NAME
        root.addHandler(console_handler)
    console_handler.setFormatter(fmt)
    console_handler.setLevel(_parse_level(level))

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = existing_by_name.get(_FILE_HANDLER_NAME)
        if file_handler is None:
            file_handler = RotatingFileHandler(
                str(log_path),
                maxBytes=max_bytes,
                backupCount=backup_count,
                encoding="utf-8",
            )
            file_handler.name = _FILE_HANDLER_NAME
            root.addHandler(file_handler)
        file_handler.setFormatter(fmt)
        file_handler.setLevel(logging.DEBUG)

    logging.getLogger(__name__).debug(
        "Logging initialized | level=%s file=%s", level, log_file or "-"
    )
    return root

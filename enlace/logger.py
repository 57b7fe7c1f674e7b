"""Loggers that write to a file and, optionally, to the console."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

DELIMITER = "#" * 71
FILE_OPENED = "Apertura de archivo: "
_FORMAT = "[%(levelname)s] %(asctime)s %(name)s/(%(process)d:%(thread)d): %(message)s"
_DATE_FORMAT = "%H:%M:%S"


def create_logger(
    path: str | Path = "tp.log",
    name: str = "client",
    console: bool = True,
    level: int = logging.INFO,
) -> logging.Logger:
    """Return a fresh logger appending to ``path`` and, if asked, to stdout."""
    log = logging.Logger(name, level)
    formatter = logging.Formatter(_FORMAT, _DATE_FORMAT)
    handlers: list[logging.Handler] = [logging.FileHandler(path, encoding="utf-8")]
    if console:
        handlers.append(logging.StreamHandler(sys.stdout))
    for handler in handlers:
        handler.setFormatter(formatter)
        log.addHandler(handler)
    return log


def open_log(path: str | Path, label: str) -> logging.Logger:
    """Create a console-echoing logger and mark the start of a session in it."""
    log = create_logger(path, label, True, logging.INFO)
    log.info("%s", DELIMITER)
    log.info("%s%s", FILE_OPENED, path)
    return log
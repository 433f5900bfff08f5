# === FILE: async_spider/logger.py ===
"""Logging for **AsyncSpider**.

The project writes through one named logger, :data:`logger`::

    from async_spider.logger import logger
    logger.info("Crawl started")

stdout belongs to the crawl result (one message per line), so console log
records always go to *stderr*. A rotating log file can be added with
:func:`configure`, which the CLI calls once from its ``--log-*`` options.
"""
from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Final, List, Union

DEFAULT_FORMAT: Final[str] = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOGGER_NAME: Final[str] = "AsyncSpider"

#: rotating file: 5 MiB per file, three backups
_MAX_BYTES: Final[int] = 5 * 1024 * 1024
_BACKUPS: Final[int] = 3

_LevelT = Union[int, str]

logger: logging.Logger = logging.getLogger(LOGGER_NAME)


def _handlers(log_file: str | Path | None) -> List[logging.Handler]:
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file is not None:
        handlers.append(
            RotatingFileHandler(str(log_file), maxBytes=_MAX_BYTES, backupCount=_BACKUPS, encoding="utf-8")
        )
    return handlers


def configure(
    *,
    level: _LevelT = "WARNING",
    log_file: str | Path | None = None,
    log_format: str = DEFAULT_FORMAT,
) -> logging.Logger:
    """Attach fresh handlers to :data:`logger` and set its level.

    Earlier handlers are closed first, so calling this again (tests, repeated
    CLI invocations) rebinds the console handler to the current ``sys.stderr``.
    """
    for old in list(logger.handlers):
        logger.removeHandler(old)
        old.close()

    formatter = logging.Formatter(log_format)
    for handler in _handlers(log_file):
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.setLevel(level)
    logger.propagate = False
    return logger


def init_logging(level: _LevelT = "WARNING", log_file: str | Path | None = None) -> logging.Logger:
    """CLI shortcut for :func:`configure` with the default format."""
    return configure(level=level, log_file=log_file)


__all__ = ["logger", "configure", "init_logging", "LOGGER_NAME", "DEFAULT_FORMAT"]

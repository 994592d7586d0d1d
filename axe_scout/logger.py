# === FILE: axe_scout/logger.py ===
"""Logging for **AxeScout**.

Everything logs through one named logger::

    from axe_scout.logger import logger
    logger.warning("%s (%s) %s", rule, impact, selectors)

Violation lines from the scanner go to the console as the audit runs; the
CLI may add a rotating log file with ``--log-file``.
"""
from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Final, List, Optional, Union

LOGGER_NAME: Final[str] = "AxeScout"
DEFAULT_FORMAT: Final[str] = "%(asctime)s %(levelname)s %(message)s"

# rotation of --log-file
MAX_LOG_BYTES: Final[int] = 2 * 1024 * 1024
LOG_BACKUPS: Final[int] = 5


def _handlers(log_file: Optional[Union[str, Path]]) -> List[logging.Handler]:
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file is not None:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(
            RotatingFileHandler(path, maxBytes=MAX_LOG_BYTES, backupCount=LOG_BACKUPS, encoding="utf-8")
        )
    return handlers


def configure(
    *,
    level: Union[int, str] = "INFO",
    log_file: Optional[Union[str, Path]] = None,
    log_format: str = DEFAULT_FORMAT,
) -> logging.Logger:
    """Replace the handlers of the AxeScout logger.

    The logger does not propagate, so pytest's ``caplog`` must attach to it
    directly.
    """
    project_logger = logging.getLogger(LOGGER_NAME)
    project_logger.setLevel(level.upper() if isinstance(level, str) else level)

    for old in list(project_logger.handlers):
        project_logger.removeHandler(old)
        old.close()

    formatter = logging.Formatter(log_format)
    for handler in _handlers(log_file):
        handler.setFormatter(formatter)
        project_logger.addHandler(handler)

    project_logger.propagate = False
    return project_logger


def init_logging(
    level: Union[int, str] = "INFO",
    log_file: Optional[Union[str, Path]] = None,
    log_format: str = DEFAULT_FORMAT,
) -> logging.Logger:
    """Entry used by the CLI group before any command runs."""
    return configure(level=level, log_file=log_file, log_format=log_format)


logger: logging.Logger = init_logging()

__all__ = ["logger", "configure", "init_logging", "LOGGER_NAME"]

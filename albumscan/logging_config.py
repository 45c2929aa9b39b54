"""Logging for albumscan: a rotating file in the data directory plus a rich console."""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme

LOG_FILE_NAME = "albumscan.log"

# Libraries that are noisy below WARNING
_QUIET_LOGGERS = ("PIL", "sqlalchemy.engine", "alembic.runtime.migration")

_handlers: list[logging.Handler] = []


def setup_logging(log_dir: Optional[Path] = None, log_level: str = "INFO") -> None:
    """Attach the console handler, and the file handler when log_dir is given.

    Calling it again is a no-op, so every CLI command can call it.
    """
    if _handlers:
        return

    console_handler = RichHandler(
        console=Console(theme=Theme({"logging.level.info": "bold cyan"}), stderr=True),
        rich_tracebacks=True,
        show_time=False,
        show_path=False,
    )
    console_handler.setLevel(getattr(logging, log_level.upper(), logging.INFO))
    _handlers.append(console_handler)

    if log_dir is not None:
        log_dir.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_dir / LOG_FILE_NAME,
            maxBytes=10 * 1024 * 1024,
            backupCount=5,
            encoding="utf-8",
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s - %(levelname)-8s - %(name)s - %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        _handlers.append(file_handler)

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    for handler in _handlers:
        root_logger.addHandler(handler)

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    # alembic's fileConfig would otherwise install its own stderr handler
    alembic_logger = logging.getLogger("alembic")
    alembic_logger.handlers = []
    alembic_logger.propagate = True


def log_notification(notification) -> None:
    """Notifier subscriber that writes positive notifications to the log.

    Negative ones are skipped: ``Notifier.scanner_error`` logs them already.
    """
    if notification.negative:
        return
    logging.getLogger("albumscan.notifications").info(
        f"{notification.header}: {notification.content}"
    )


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)

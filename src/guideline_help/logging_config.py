"""Logging configuration with a console handler and an optional rotating file."""
from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path


def setup_logging(
    console_level: int = logging.INFO,
    log_file: str | Path | None = None,
    file_level: int = logging.DEBUG,
) -> None:
    """Configure root logging for the help engine and its console.

    Console output is brief; the optional file handler is detailed and rotates
    at 10MB keeping five backups.

    Args:
        console_level: Console logging level.
        log_file: Path of the detailed log file, or None for console only.
        file_level: File logging level.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(min(console_level, file_level) if log_file else console_level)
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(console_level)
    console_handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    root_logger.addHandler(console_handler)

    if log_file is not None:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_path,
            mode="a",
            maxBytes=10 * 1024 * 1024,
            backupCount=5,
            encoding="utf-8",
        )
        file_handler.setLevel(file_level)
        file_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        root_logger.addHandler(file_handler)

    logging.getLogger(__name__).debug(
        "Logging configured: console=%s, file=%s",
        logging.getLevelName(console_level),
        log_file or "-",
    )

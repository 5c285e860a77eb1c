"""Logging configuration for AirSense."""

import logging
from datetime import datetime
from pathlib import Path

from airsense.config import LOG_DIR, LOG_LEVEL

FORMATTER = logging.Formatter(
    "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    datefmt="%H:%M:%S",
)

# Libraries that log every request, query or frame at INFO
NOISY_LOGGERS = ("aiohttp", "aiosqlite", "uvicorn.access", "sqlalchemy.engine")

# Marks handlers installed by setup_logging so a second call replaces them
_HANDLER_TAG = "_airsense_handler"


def log_file_path(log_dir: str | Path | None = None) -> Path:
    """Today's log file, e.g. logs/airsense-2026-01-29.log."""
    directory = Path(log_dir or LOG_DIR)
    return directory / f"airsense-{datetime.now().strftime('%Y-%m-%d')}.log"


def setup_logging(log_dir: str | Path | None = None) -> Path:
    """Log to a dated file and the console. Safe to call more than once."""
    log_file = log_file_path(log_dir)
    log_file.parent.mkdir(parents=True, exist_ok=True)

    root_logger = logging.getLogger()
    for handler in [h for h in root_logger.handlers if getattr(h, _HANDLER_TAG, False)]:
        root_logger.removeHandler(handler)
        handler.close()

    for handler in (logging.FileHandler(log_file), logging.StreamHandler()):
        handler.setFormatter(FORMATTER)
        handler.setLevel(logging.INFO)
        setattr(handler, _HANDLER_TAG, True)
        root_logger.addHandler(handler)

    root_logger.setLevel(getattr(logging, LOG_LEVEL.upper(), logging.INFO))

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    logging.getLogger("airsense").setLevel(logging.INFO)

    logging.info(f"Logging initialized - file: {log_file}")
    return log_file

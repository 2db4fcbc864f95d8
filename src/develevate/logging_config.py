"""Logging configuration."""

import logging
import logging.handlers

from .config import Settings


def setup_logging(settings: Settings) -> None:
    """Send log records to a rotating file.

    The terminal belongs to the TUI, so nothing is written to the console.
    """
    log_file = settings.log_file
    log_file.parent.mkdir(parents=True, exist_ok=True)

    root_logger = logging.getLogger()
    root_logger.setLevel(settings.logging.level)

    formatter = logging.Formatter(settings.logging.format)

    file_handler = logging.handlers.RotatingFileHandler(
        log_file,
        maxBytes=10 * 1024 * 1024,  # 10MB
        backupCount=5,
        encoding="utf-8",
    )
    file_handler.setFormatter(formatter)
    root_logger.addHandler(file_handler)

    logging.getLogger("asyncio").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)

    logging.info("Logging configured, writing to %s", log_file)

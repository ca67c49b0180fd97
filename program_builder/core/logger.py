"""Loguru sinks for the training program builder."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import TYPE_CHECKING

from loguru import logger

if TYPE_CHECKING:
    from program_builder.config.settings import Settings

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}"


def setup_logger(config: Settings) -> None:
    """Replace loguru's default sink with the configured ones.

    Console output always goes to stderr. A rotating file sink is added when
    ``config.log_file`` is set; its parent directory is created on demand.
    """
    logger.remove()
    logger.add(sys.stderr, format=CONSOLE_FORMAT, level=config.log_level, colorize=True)

    if config.log_file:
        log_path = Path(config.log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_path,
            format=FILE_FORMAT,
            level=config.log_level,
            rotation=config.log_rotation,
            retention=config.log_retention,
            compression="zip",
        )
        logger.info(f"[LOGGING] Writing logs to {log_path}")

    logger.info(f"[LOGGING] Level set to {config.log_level}")

"""Logging setup for the PALMS scorer and dashboard CLI."""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Mapping, Optional

ROOT_LOGGER = 'palms'

# Loggers whose warnings repeat what an upload summary line already prints
UPLOAD_DETAIL_LOGGERS = {
    'palms.uploader': logging.ERROR,
    'palms.accumulator': logging.ERROR,
}

FILE_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s'
CONSOLE_FORMAT = '%(levelname)s [%(name)s] %(message)s'


def setup_logging(
    log_dir: Optional[Path] = None,
    level: int = logging.INFO,
    log_to_file: bool = True,
    log_to_console: bool = True,
    levels: Optional[Mapping[str, int]] = None,
) -> logging.Logger:
    """
    Configure the ``palms`` logger tree.

    Console output goes to stderr so stdout carries only the dashboard's
    status lines and leaderboards. Calling this again replaces (and closes)
    the handlers from the previous call.

    Args:
        log_dir: Directory for log files (default: ./logs)
        level: Level for the ``palms`` logger
        log_to_file: Write a timestamped palms_*.log file
        log_to_console: Write to stderr
        levels: Per-logger overrides, e.g. UPLOAD_DETAIL_LOGGERS

    Returns:
        The configured ``palms`` logger
    """
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(level)

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    if log_to_file:
        log_dir = Path(log_dir) if log_dir is not None else Path('logs')
        log_dir.mkdir(parents=True, exist_ok=True)
        log_file = log_dir / f'palms_{datetime.now().strftime("%Y%m%d_%H%M%S")}.log'
        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt='%Y-%m-%d %H:%M:%S'))
        logger.addHandler(file_handler)

    if log_to_console:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
        logger.addHandler(console_handler)

    for name, module_level in (levels or {}).items():
        logging.getLogger(name).setLevel(module_level)

    return logger


def get_logger(name: str = ROOT_LOGGER) -> logging.Logger:
    """Get a logger inside the ``palms`` tree ('cli' -> 'palms.cli')."""
    if name != ROOT_LOGGER and not name.startswith(f'{ROOT_LOGGER}.'):
        name = f'{ROOT_LOGGER}.{name}'
    return logging.getLogger(name)

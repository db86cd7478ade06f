"""
Logging utilities for the chart tools

Provides file-based logging while keeping console output clean. The
library modules only log through logging.getLogger(__name__); handlers are
attached here, by the application.
"""

import logging
import os
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional, Union


LOG_FORMAT = '%(asctime)s [%(levelname)s] %(name)s: %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def setup_logger(name: str, log_file: Path, level=logging.INFO) -> logging.Logger:
    """
    Set up a logger with a file handler

    Args:
        name: Logger name (e.g., 'seba_chart')
        log_file: Path to log file
        level: Logging level (default: INFO)

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Avoid duplicate handlers if logger already exists
    if logger.handlers:
        return logger

    log_file.parent.mkdir(parents=True, exist_ok=True)

    file_handler = logging.FileHandler(log_file, encoding='utf-8')
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    logger.addHandler(file_handler)

    return logger


def log_exception(logger: logging.Logger, message: str, exc: Exception):
    """
    Log an exception with full traceback to file

    Args:
        logger: Logger instance
        message: User-friendly error message
        exc: Exception object
    """
    logger.error(f"{message}: {exc}", exc_info=True)


def get_default_log_file() -> Path:
    """Default log location for the chart tools"""
    if sys.platform == 'win32':
        appdata = Path(os.environ.get('APPDATA', Path.home() / 'AppData' / 'Roaming'))
        log_dir = appdata / 'SebaChart'
    else:
        log_dir = Path.home() / '.config' / 'SebaChart'

    return log_dir / 'chart.log'


def get_chart_logger(log_file: Optional[Path] = None,
                     level: Union[int, str] = logging.INFO,
                     max_size_mb: int = 10) -> logging.Logger:
    """Get the package logger, writing to log_file or the default location"""
    if log_file is None:
        log_file = get_default_log_file()

    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    try:
        rotate_log_if_needed(log_file, max_size_mb)
        return setup_logger('seba_chart', log_file, level)
    except OSError:
        # Fallback to current directory
        return setup_logger('seba_chart', Path('chart.log'), level)


def rotate_log_if_needed(log_file: Path, max_size_mb: int = 10):
    """
    Rotate log file if it exceeds max size

    Args:
        log_file: Path to log file
        max_size_mb: Maximum size in megabytes before rotation
    """
    if not log_file.exists():
        return

    max_bytes = max_size_mb * 1024 * 1024
    if log_file.stat().st_size > max_bytes:
        backup_name = f"{log_file.stem}_{datetime.now().strftime('%Y%m%d_%H%M%S')}.log"
        log_file.rename(log_file.parent / backup_name)

        # Keep only last 5 backups
        backups = sorted(log_file.parent.glob(f"{log_file.stem}_*.log"))
        for old_backup in backups[:-5]:
            old_backup.unlink()

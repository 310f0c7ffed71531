"""
Logging utility module.

This module provides consistent logging configuration across the application,
including an optional file handler and convenience functions for logging
with context.
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Create logger
logger = logging.getLogger("app")


def setup_file_logging(log_dir: str = "logs") -> Path:
    """
    Set up file logging in addition to console logging.

    Args:
        log_dir: Directory to store log files

    Returns:
        Path of the log file that was attached
    """
    # Create log directory if it doesn't exist
    log_path = Path(log_dir)
    log_path.mkdir(parents=True, exist_ok=True)

    # One file per day
    timestamp = datetime.now().strftime("%Y%m%d")
    log_file = log_path / f"app_{timestamp}.log"

    for handler in logger.handlers:
        if isinstance(handler, logging.FileHandler) and Path(handler.baseFilename) == log_file.absolute():
            return log_file

    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(file_handler)
    return log_file


def log_error(error: Exception, context: Optional[str] = None):
    """
    Log an error with optional context.

    Args:
        error: Exception to log
        context: Optional context about where/why the error occurred
    """
    if context:
        logger.error(f"{context}: {str(error)}")
    else:
        logger.error(str(error))

    # Log full stack trace at debug level
    logger.debug("Stack trace:", exc_info=error)


def log_warning(message: str, context: Optional[str] = None):
    """
    Log a warning with optional context.

    Args:
        message: Warning message
        context: Optional context about the warning
    """
    if context:
        logger.warning(f"{context}: {message}")
    else:
        logger.warning(message)

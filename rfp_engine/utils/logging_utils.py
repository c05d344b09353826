# ## File: rfp_engine/utils/logging_utils.py
# Version: 1.1.0
# Date: 2026-10-12
# Purpose: Centralized logging configuration for the store modules.
#          - CHANGE (v1.1.0): Default level now follows RFP_LOG_LEVEL so the
#            embedding application can quieten the store without code changes.

import logging
import os
import sys
from pathlib import Path
from typing import Optional

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def resolve_log_level(value: Optional[str] = None) -> int:
    """
    Translate a level name (e.g. "debug") into a logging level.

    Falls back to INFO for unknown names.
    """
    name = (value or os.getenv("RFP_LOG_LEVEL") or "INFO").strip().upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.INFO


def setup_logging(
    name: str,
    level: Optional[int] = None,
    log_file: Optional[str] = None,
    format_string: Optional[str] = None
) -> logging.Logger:
    """
    Set up standardized logging configuration.

    Args:
        name: Logger name (usually __name__)
        level: Logging level (default: from RFP_LOG_LEVEL, else INFO)
        log_file: Optional log file path
        format_string: Custom format string

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    # Avoid duplicate handlers
    if logger.handlers:
        return logger

    if level is None:
        level = resolve_log_level()
    logger.setLevel(level)

    formatter = logging.Formatter(format_string or DEFAULT_FORMAT)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        try:
            log_path = Path(log_file)
            log_path.parent.mkdir(parents=True, exist_ok=True)

            file_handler = logging.FileHandler(log_file)
            file_handler.setLevel(level)
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)
        except (OSError, PermissionError) as e:
            logger.warning(f"Could not create file handler for {log_file}: {e}")

    return logger


def get_logger(name: str, log_file: Optional[str] = None) -> logging.Logger:
    """Get a standardized logger instance."""
    return setup_logging(name, log_file=log_file)


"""
Logging configuration module.
Configures the root logger from environment variables.
"""

import logging
import os
import sys

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging():
    """
    Configure logging based on environment variables.

    Environment variables:
        LOG_LEVEL: level name such as DEBUG, INFO, WARNING (default INFO)
        LOG_FILE: Optional file path for log output

    Does nothing if the root logger already has handlers.
    """
    if logging.getLogger().handlers:
        return

    log_level = logging.getLevelName(os.environ.get("LOG_LEVEL", "INFO").upper())
    if not isinstance(log_level, int):
        log_level = logging.INFO

    log_file = os.environ.get("LOG_FILE")
    if log_file:
        handler = logging.FileHandler(log_file, mode="a")
    else:
        handler = logging.StreamHandler(sys.stderr)

    logging.basicConfig(
        level=log_level,
        format=LOG_FORMAT,
        datefmt=DATE_FORMAT,
        handlers=[handler],
    )

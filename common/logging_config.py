"""Logging configuration for the application."""

import logging
import os
import sys


def setup_logging(level: str = None):
    """Configure the root logger with a console handler."""
    root_logger = logging.getLogger()
    root_logger.setLevel((level or os.getenv("LOG_LEVEL", "INFO")).upper())

    if not root_logger.handlers:
        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(formatter)
        root_logger.addHandler(console_handler)

    # pymongo logs every heartbeat and command at DEBUG
    logging.getLogger("pymongo").setLevel(logging.WARNING)

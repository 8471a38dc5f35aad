"""
Shared helpers for onboarding command-line scripts.
"""

import functools
import logging
import os
import sys
from typing import Optional

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


def handle_keyboard_interrupt(exit_message="Script interrupted by user"):
    """Decorator to handle KeyboardInterrupt and exit gracefully."""

    def decorator(func):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except KeyboardInterrupt:
                logger.info(f"\n{exit_message}")
                sys.exit(0)

        return wrapper

    return decorator


def add_logging_arguments(parser, default_log_file: str) -> None:
    parser.add_argument(
        "--log",
        nargs="?",
        const=default_log_file,
        help=f"Enable logging to file (default: {default_log_file})",
    )
    parser.add_argument(
        "--log-level",
        choices=LOG_LEVELS,
        default=None,
        help="Logging level (default: LOG_LEVEL env var or INFO)",
    )


def setup_logging(log_level: Optional[str] = None, log_path: Optional[str] = None) -> None:
    """
    Configure root logging to stdout and, optionally, a log file.

    Args:
        log_level: Level name; falls back to the LOG_LEVEL env var, then INFO
        log_path: Optional file to log to in addition to stdout
    """
    level_name = (log_level or os.getenv("LOG_LEVEL", "INFO")).upper()
    level = getattr(logging, level_name, logging.INFO)

    handlers = [logging.StreamHandler(sys.stdout)]
    if log_path:
        log_dir = os.path.dirname(log_path)
        if log_dir and not os.path.exists(log_dir):
            os.makedirs(log_dir)
        handlers.insert(0, logging.FileHandler(log_path))

    logging.basicConfig(level=level, format=LOG_FORMAT, handlers=handlers)
    if log_path:
        logger.info(f"Logging to file: {log_path}")

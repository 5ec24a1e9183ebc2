"""
Scheme Search Agent — Logging Configuration
Structured console logging shared by the API and the scraper.
"""

import logging
import sys


def setup_logger(name: str = "scheme-agent", level: str = "INFO") -> logging.Logger:
    """Create a configured logger with console output."""
    logger = logging.getLogger(name)

    if not logger.handlers:
        logger.setLevel(level)

        handler = logging.StreamHandler(sys.stdout)
        handler.setLevel(level)

        formatter = logging.Formatter(
            "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger


def set_log_level(level: str) -> None:
    """Apply a configured level to the shared logger and its handlers."""
    logger.setLevel(level)
    for handler in logger.handlers:
        handler.setLevel(level)


# Global logger instance
logger = setup_logger()

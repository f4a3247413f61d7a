"""
Logging setup for the command-line tools.

Library modules only create module loggers; handlers are attached here,
once, on the 'unitcatalog' logger.
"""

import logging
import sys

LOGGER_NAME = "unitcatalog"


def setup_logger(level: str = "WARNING") -> logging.Logger:
    """
    Configure the package logger with a console handler on stderr.

    Args:
        level: "DEBUG", "INFO", "WARNING", "ERROR" or "CRITICAL"

    Returns:
        The configured 'unitcatalog' logger
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(getattr(logging, level.upper(), logging.WARNING))

    # Prevent duplicate handlers if called more than once
    if logger.handlers:
        for handler in logger.handlers:
            handler.setLevel(logger.level)
        return logger

    formatter = logging.Formatter(
        "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(logger.level)
    handler.setFormatter(formatter)
    logger.addHandler(handler)

    logger.debug("Logger initialized")
    return logger

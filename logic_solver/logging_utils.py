"""Shared logger setup for the logic_solver package."""

# logging_utils.py
# Every module logs through the same named logger so that the CLI and API
# can raise or lower the verbosity in one place.

from __future__ import annotations

import logging

LOGGER_NAME = "logic_solver"


def get_logger() -> logging.Logger:
    """
    Return the package logger.

    A stream handler printing INFO and above is attached the first time this
    is called; later calls return the already configured logger.
    """
    logger = logging.getLogger(LOGGER_NAME)

    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter(
            "%(asctime)s [%(levelname)s] [%(name)s] %(message)s"
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        logger.setLevel(logging.INFO)

    return logger


def set_level(level: str | int) -> logging.Logger:
    logger = get_logger()
    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        if not isinstance(resolved, int):
            raise ValueError(f"Unknown log level: {level}")
        level = resolved
    logger.setLevel(level)
    return logger

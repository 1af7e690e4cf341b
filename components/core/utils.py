"""Shared utility functions for the household budget service."""

import logging
from datetime import datetime, timezone

import colorlog

LOGGER_NAMESPACE = "household-budget"


def get_logger(name: str) -> logging.Logger:
    """Get a logger with a colorized format for the project."""
    logger = logging.getLogger(f"{LOGGER_NAMESPACE}.{name}" if name else LOGGER_NAMESPACE)
    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = colorlog.ColoredFormatter(
            "%(log_color)s%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
            log_colors={
                "DEBUG": "cyan",
                "INFO": "green",
                "WARNING": "yellow",
                "ERROR": "red",
                "CRITICAL": "bold_red",
            },
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    logger.propagate = False
    return logger


def setup_logging(level: str = "INFO") -> None:
    """Apply the configured level to every project logger."""
    root = logging.getLogger(LOGGER_NAMESPACE)
    root.setLevel(level.upper())
    for name, logger in logging.Logger.manager.loggerDict.items():
        if name.startswith(f"{LOGGER_NAMESPACE}.") and isinstance(logger, logging.Logger):
            logger.setLevel(level.upper())


def utcnow() -> datetime:
    """Current UTC time, timezone-aware."""
    return datetime.now(timezone.utc)

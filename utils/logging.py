"""Central logging configuration.

Usage:
    from utils.logging import get_logger, init_logging
    init_logging("INFO")  # once at app start (create_app does this)
    logger = get_logger(__name__)
    logger.info("Saved pain point %s", doc_id)

Output goes to stderr so the hosting platform collects it:
    timestamp | level | module | message
"""
from __future__ import annotations

import logging

_INITIALIZED = False
LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"


def init_logging(level: str | int = "INFO") -> None:
    """Initialize logging once. Safe to call multiple times.

    Args:
        level: Root level name ("DEBUG", "INFO", ...) or numeric level.
            Unknown names fall back to INFO.
    """
    global _INITIALIZED
    if _INITIALIZED:
        return

    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    root = logging.getLogger()
    root.setLevel(level)

    handler = logging.StreamHandler()
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    root.addHandler(handler)

    # Suppress noisy third-party loggers
    for noisy in ("openai", "httpx", "httpcore", "urllib3", "google"):
        logging.getLogger(noisy).setLevel(logging.WARNING)

    _INITIALIZED = True


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance for the given module name."""
    return logging.getLogger(name)


__all__ = ["init_logging", "get_logger"]

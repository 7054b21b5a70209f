"""Centralized logger configuration.

Usage:
    from timetrack_tui.logging_utils import get_logger
    logger = get_logger(__name__)
"""

from __future__ import annotations

import logging

from .config import settings

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logging(level: str | None = None) -> None:
    level_name = (level or settings.log_level).upper()
    logging.basicConfig(level=getattr(logging, level_name, logging.WARNING), format=LOG_FORMAT)


def get_logger(name: str) -> logging.Logger:
    if not logging.getLogger().handlers:
        setup_logging()
    return logging.getLogger(name)


__all__ = ["get_logger", "setup_logging"]

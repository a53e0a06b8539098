"""Настройка логирования пакета `rotator`.

Настраивается только логгер `rotator`; корневой логгер не трогаем.
"""
from __future__ import annotations

import logging
import sys
from typing import IO, Optional

LOGGER_NAME = "rotator"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: str = "WARNING", stream: Optional[IO[str]] = None) -> logging.Logger:
    """Настраивает логгер `rotator`; повторный вызов только меняет уровень."""
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level.upper())
    logger.propagate = False

    if not any(getattr(h, "_rotator_handler", False) for h in logger.handlers):
        handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._rotator_handler = True  # type: ignore[attr-defined]
        logger.addHandler(handler)
    return logger

"""Logging utilities for Recipe Explorer."""

from __future__ import annotations

import logging
import sys

from loguru import logger as loguru_logger


def setup_logging(enable_loguru: bool = True, level: int = logging.INFO) -> None:
    """Configure application-wide logging.

    Args:
        enable_loguru: When True, bridge stdlib logging records to loguru.
        level: Minimum level for both stdlib logging and the loguru sink.
    """
    logging.basicConfig(level=level, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")

    if enable_loguru:
        loguru_logger.remove()
        loguru_logger.add(sys.stderr, level=logging.getLevelName(level))
        _bridge_standard_logging(loguru_logger)


def _bridge_standard_logging(logger: "loguru.Logger") -> None:
    """Redirect stdlib logging messages to loguru."""
    class LoguruHandler(logging.Handler):
        def emit(self, record: logging.LogRecord) -> None:
            try:
                level = logger.level(record.levelname).name
            except ValueError:
                level = record.levelno
            logger.opt(depth=6, exception=record.exc_info).bind(name=record.name).log(level, record.getMessage())

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(LoguruHandler())

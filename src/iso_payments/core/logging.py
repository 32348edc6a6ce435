"""
Loguru configuration for the payments core.

configure_logger() replaces loguru's default handler with one driven by
Settings, and intercept_standard_logging() routes stdlib ``logging`` records
from third-party libraries through loguru.
"""

import logging
import sys

from loguru import logger

from iso_payments.config import Settings, get_settings

__all__ = ["InterceptHandler", "configure_logger", "intercept_standard_logging", "logger"]


def configure_logger(settings: Settings | None = None) -> None:
    """
    Configures loguru with application settings.

    Args:
        settings: Settings to use; defaults to get_settings()
    """
    settings = settings or get_settings()

    logger.remove()
    logger.add(
        sink=sys.stderr,
        level=settings.log_level,
        format=settings.log_format,
        colorize=None,
        serialize=False,
        backtrace=False,
        diagnose=False,
        enqueue=settings.logger_enqueue,
    )


class InterceptHandler(logging.Handler):
    """Handler to redirect standard logging records to loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        logger.opt(depth=6, exception=record.exc_info).log(level, record.getMessage())


def intercept_standard_logging() -> None:
    """Send every stdlib logging record through loguru."""
    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)

"""
Centralized logging configuration.
"""

import os
import sys
from typing import Optional

from loguru import logger

_is_configured = False

LOG_FORMAT = (
    "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level:<8} | "
    "{name}:{function}:{line} - {message}"
)


def configure_logging(level: Optional[str] = None):
    """Configure Loguru once with the standard format."""
    global _is_configured
    log_level = (level or os.getenv("LOG_LEVEL", "INFO")).upper()

    # Re-adding the sink lets callers change the level at runtime
    logger.remove()
    logger.add(
        sys.stderr,
        level=log_level,
        format=LOG_FORMAT,
        backtrace=False,
        diagnose=False,
    )

    _is_configured = True


def is_configured() -> bool:
    return _is_configured

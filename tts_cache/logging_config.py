import os
import sys

from loguru import logger

_logging_configured = False


def setup_logging(level=None):
    """Configure the global loguru logger with a single stderr sink.

    Level defaults to TTS_CACHE_LOG_LEVEL, then INFO. Only the first call
    has any effect.
    """
    global _logging_configured
    if _logging_configured:
        return
    _logging_configured = True

    logger.remove()
    logger.add(
        sys.stderr,
        level=level or os.getenv("TTS_CACHE_LOG_LEVEL", "INFO").upper(),
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>",
        colorize=True,
    )

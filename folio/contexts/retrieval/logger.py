"""
Retrieval context logger.

Provides logging interface for the retrieval context with automatic [fetch] prefix.
"""

from loguru import logger

CONTEXT_PREFIX = "[fetch]"


def _log_info(message: str) -> None:
    """Log info message with [fetch] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [fetch] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [fetch] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


def _log_exception(error: BaseException, message: str) -> None:
    """Log error message with [fetch] prefix and the traceback of error."""
    logger.opt(exception=error).error(f"{CONTEXT_PREFIX} {message}")

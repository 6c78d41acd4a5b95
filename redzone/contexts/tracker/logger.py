"""
Tracker context logger.

Provides logging interface for tracker context with automatic [store] prefix.
All tracker modules should import from this module, not from loguru directly.
"""

from loguru import logger

CONTEXT_PREFIX = "[store]"


def _log_info(message: str) -> None:
    """Log info message with [store] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [store] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [store] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")

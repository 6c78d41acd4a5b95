"""
Persistence context logger.

Provides logging interface for persistence context with automatic [persist] prefix.
All persistence modules should import from this module, not from loguru directly.
"""

from loguru import logger

CONTEXT_PREFIX = "[persist]"


def _log_warning(message: str) -> None:
    """Log warning message with [persist] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [persist] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")

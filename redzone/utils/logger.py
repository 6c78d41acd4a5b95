"""
Generic logger setup utilities.

Provides reusable loguru configuration with provenance tracking.
Context-specific wrappers should be defined in contexts/{context}/logger.py.
"""

import sys
from pathlib import Path

from loguru import logger

# Default level colors for console output
LEVEL_COLORS = {
    "WARNING": "<yellow>",
    "ERROR": "<red>",
    "CRITICAL": "<bold><red>",
}

CONSOLE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | <level>{level: <7}</level> | <level>{message}</level>"


def _console_sink(message) -> None:
    # Resolve sys.stderr per message so redirected streams are honored
    sys.stderr.write(message)


def setup_console_logger(level: str = "WARNING") -> None:
    """
    Configure loguru for console-only output (no log file).

    Args:
        level: Minimum level shown on stderr
    """
    logger.remove()
    logger.add(_console_sink, format=CONSOLE_FORMAT, level=level, colorize=False)


def setup_logger(
    context_name: str,
    log_dir: Path,
    extra_provenance: dict = None,
    level_colors: dict = {},
) -> Path:
    """
    Configure loguru for a session with provenance tracking.

    Sets up dual output (file + console). The console sink writes to stderr so
    command output on stdout stays clean.

    Args:
        context_name: Session identifier (e.g., "cli", "store")
        log_dir: Directory for this logging session
        extra_provenance: Additional key-value pairs for provenance header
        level_colors: Override default level colors (e.g., {"INFO": "<cyan>"})

    Returns:
        Path to log file

    Example:
        from redzone.utils.logger import setup_logger

        log_file = setup_logger(
            context_name="cli",
            log_dir=Path("outs/logs"),
            extra_provenance={"Store backend": "json"}
        )
    """
    log_dir.mkdir(exist_ok=True, parents=True)
    log_file = log_dir / f"{context_name}.log"

    # Remove default logger
    logger.remove()

    colors = {**LEVEL_COLORS, **level_colors}
    for level_name, color in colors.items():
        logger.level(level_name, color=color)

    # File handler captures everything
    logger.add(
        log_file, format="{time:YYYY-MM-DD HH:mm:ss} | {level: <7} | {message}", level="DEBUG"
    )

    # Console handler only shows warnings and above
    logger.add(_console_sink, format=CONSOLE_FORMAT, level="WARNING", colorize=True)

    log_provenance(extra_provenance)

    return log_file


def log_provenance(extra_context: dict = None) -> None:
    """
    Log execution provenance to current logger.

    Logs standard context (script, command, working directory, Python version)
    plus any additional context provided.
    """
    logger.debug("=" * 80)
    logger.debug(f"Script: {sys.argv[0]}")
    logger.debug(f"Command: {' '.join(sys.argv)}")
    logger.debug(f"Working directory: {Path.cwd()}")
    logger.debug(f"Python: {sys.version.split()[0]}")

    if extra_context:
        for key, value in extra_context.items():
            logger.debug(f"{key}: {value}")

    logger.debug("=" * 80)

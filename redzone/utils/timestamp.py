"""Timestamp utilities."""

import time
from datetime import datetime, timezone


def now_ms() -> int:
    """Current wall-clock time in integer milliseconds since the epoch."""
    return int(time.time() * 1000)


def today() -> str:
    """
    Current calendar date as YYYY-MM-DD.

    Uses the UTC date with no local timezone adjustment, so an entry logged late
    in the evening may carry the next day's date.

    Examples:
        today()
        # "2025-11-13"
    """
    return datetime.now(timezone.utc).date().isoformat()

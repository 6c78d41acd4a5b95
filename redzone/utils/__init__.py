"""
Shared utilities for REDZONE.

Common functionality used across contexts:
- Logger setup
- Configuration loading
- Timestamps
"""

from redzone.utils.config import load_defaults
from redzone.utils.timestamp import now_ms, today

__all__ = ["load_defaults", "now_ms", "today"]

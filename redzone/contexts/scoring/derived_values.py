"""
Derived values shown next to the profile and school list.

Neither value is stored: the fit score is snapshotted onto a School by the entity
store at creation time, and the completion percentage is recomputed on read.
"""

import math
import re
from typing import Optional

GPA_SCALE = 4.0
NEUTRAL_FIT_SCORE = 50

# Number of completion units: eight scalar fields plus "has any achievement"
COMPLETION_UNITS = 9

# Leading decimal number, optionally signed, with optional exponent
LEADING_FLOAT = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")
LEADING_INFINITY = re.compile(r"^\s*([+-]?)Infinity")


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def parse_leading_float(text: str) -> Optional[float]:
    """
    Parse the numeric prefix of a string, ignoring anything after it.

    Returns None when the string does not start with a number.

    Examples:
        >>> parse_leading_float("3.6 weighted")
        3.6
        >>> parse_leading_float("  .5")
        0.5
        >>> parse_leading_float("GPA 3.6") is None
        True
    """
    match = LEADING_FLOAT.match(text)
    if match:
        return float(match.group(1))

    match = LEADING_INFINITY.match(text)
    if match:
        return -math.inf if match.group(1) == "-" else math.inf

    return None


def compute_fit_score(gpa: str) -> int:
    """
    Score how well the athlete's academics fit a school, from 0 to 100.

    Assumes a 4.0 GPA scale: the GPA is mapped linearly onto 0-100, clamped,
    and rounded (halves round up). A GPA with no leading number scores a neutral 50.

    Examples:
        >>> compute_fit_score("4.0")
        100
        >>> compute_fit_score("3.0")
        75
        >>> compute_fit_score("5.0")
        100
        >>> compute_fit_score("not-a-number")
        50
    """
    gpa_value = parse_leading_float(gpa)
    if gpa_value is None:
        return NEUTRAL_FIT_SCORE

    scaled = gpa_value / GPA_SCALE * 100
    return _round_half_up(min(100.0, max(0.0, scaled)))


def compute_profile_completion(profile) -> int:
    """
    Percent of the profile that has been filled in, from 0 to 100.

    Each non-empty scalar field counts as one unit; having at least one achievement
    counts as one more, however many there are.

    Args:
        profile: Profile instance

    Returns:
        Completion percentage rounded to the nearest integer
    """
    filled = sum(1 for value in profile.scalar_values() if value)
    if profile.achievements:
        filled += 1
    return _round_half_up(filled / COMPLETION_UNITS * 100)

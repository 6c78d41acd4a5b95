"""
Scoring Context

Responsibilities:
- Computes a school fit score from the athlete's GPA
- Computes the profile completion percentage

Owns: Pure derived-value functions
Never: Stores results or touches persistence
"""

from redzone.contexts.scoring.derived_values import (
    compute_fit_score,
    compute_profile_completion,
    parse_leading_float,
)

__all__ = [
    "compute_fit_score",
    "compute_profile_completion",
    "parse_leading_float",
]

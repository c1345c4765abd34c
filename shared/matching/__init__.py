"""
Shared Matching

Base class and expression helpers for lane-matching atoms.
"""

from .base import (
    MatchAtom,
    city_state_matches,
    in_date_range,
    in_range,
    state_matches,
    zip_matches,
    zip_truncations,
)

__all__ = [
    "MatchAtom",
    "city_state_matches",
    "in_date_range",
    "in_range",
    "state_matches",
    "zip_matches",
    "zip_truncations",
]

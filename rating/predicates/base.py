"""
Predicate Base

Re-exports the shared match atom base and expression helpers for the
rating atoms.
"""

from shared.matching import (
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

"""
State to City, State (S_CS)

No mileage fallback: mileage-band lanes are never matched through this atom.
"""

import polars as pl

from .base import MatchAtom, city_state_matches, state_matches
from .. import precedence as prec


class S_CS(MatchAtom):
    """Origin state AND destination city/state."""

    # Identity
    name = "S_CS"

    # Precedence
    categories = (prec.STATE_TO_CITY_STATE,)

    # Requirements
    origin_fields = frozenset({"state"})
    destination_fields = frozenset({"city", "state"})

    @classmethod
    def conditions(cls, route) -> pl.Expr:
        return (
            state_matches("origin", route.origin.state)
            & city_state_matches("destination", route.destination.city, route.destination.state)
        )

"""
City, State to State (CS_S)

No mileage fallback: mileage-band lanes are never matched through this atom.
"""

import polars as pl

from .base import MatchAtom, city_state_matches, state_matches
from .. import precedence as prec


class CS_S(MatchAtom):
    """Origin city/state AND destination state."""

    # Identity
    name = "CS_S"

    # Precedence
    categories = (prec.CITY_STATE_TO_STATE,)

    # Requirements
    origin_fields = frozenset({"city", "state"})
    destination_fields = frozenset({"state"})

    @classmethod
    def conditions(cls, route) -> pl.Expr:
        return (
            city_state_matches("origin", route.origin.city, route.origin.state)
            & state_matches("destination", route.destination.state)
        )

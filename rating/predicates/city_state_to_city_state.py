"""
City, State to City, State (CS_CS)

Most specific geographic lane: both ends named by city and state.
"""

import polars as pl

from .base import MatchAtom, city_state_matches
from .. import precedence as prec


class CS_CS(MatchAtom):
    """Origin city/state AND destination city/state."""

    # Identity
    name = "CS_CS"

    # Precedence
    categories = (prec.CITY_STATE_TO_CITY_STATE, prec.MILEAGE)

    # Requirements
    origin_fields = frozenset({"city", "state"})
    destination_fields = frozenset({"city", "state"})

    @classmethod
    def conditions(cls, route) -> pl.Expr:
        return (
            city_state_matches("origin", route.origin.city, route.origin.state)
            & city_state_matches("destination", route.destination.city, route.destination.state)
        )

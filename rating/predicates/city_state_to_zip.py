"""
City, State to Zip(3) (CS_Z)
"""

import polars as pl

from .base import MatchAtom, city_state_matches, zip_matches
from .. import precedence as prec


class CS_Z(MatchAtom):
    """Origin city/state AND destination 3-digit zip range."""

    # Identity
    name = "CS_Z"

    # Precedence
    categories = (prec.CITY_STATE_TO_ZIP3, prec.MILEAGE)

    # Requirements
    origin_fields = frozenset({"city", "state"})
    destination_fields = frozenset({"zip_code"})

    @classmethod
    def conditions(cls, route) -> pl.Expr:
        return (
            city_state_matches("origin", route.origin.city, route.origin.state)
            & zip_matches("destination", route.destination.zip_code, lengths=(3,))
        )

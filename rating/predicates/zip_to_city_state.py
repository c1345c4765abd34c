"""
Zip(3) to City, State (Z_CS)
"""

import polars as pl

from .base import MatchAtom, city_state_matches, zip_matches
from .. import precedence as prec


class Z_CS(MatchAtom):
    """Origin 3-digit zip range AND destination city/state."""

    # Identity
    name = "Z_CS"

    # Precedence
    categories = (prec.ZIP3_TO_CITY_STATE, prec.MILEAGE)

    # Requirements
    origin_fields = frozenset({"zip_code"})
    destination_fields = frozenset({"city", "state"})

    @classmethod
    def conditions(cls, route) -> pl.Expr:
        return (
            zip_matches("origin", route.origin.zip_code, lengths=(3,))
            & city_state_matches("destination", route.destination.city, route.destination.state)
        )

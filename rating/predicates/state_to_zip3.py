"""
State to Zip(3) (S_Z3)
"""

import polars as pl

from .base import MatchAtom, state_matches, zip_matches
from .. import precedence as prec


class S_Z3(MatchAtom):
    """Origin state AND destination 3-digit zip range."""

    # Identity
    name = "S_Z3"

    # Precedence
    categories = (prec.STATE_TO_ZIP3, prec.MILEAGE)

    # Requirements
    origin_fields = frozenset({"state"})
    destination_fields = frozenset({"zip_code"})

    @classmethod
    def conditions(cls, route) -> pl.Expr:
        return (
            state_matches("origin", route.origin.state)
            & zip_matches("destination", route.destination.zip_code, lengths=(3,))
        )

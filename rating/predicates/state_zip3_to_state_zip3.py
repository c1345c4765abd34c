"""
State, Zip(3) to State, Zip(3) (SZ_SZ)
"""

import polars as pl

from .base import MatchAtom, state_matches, zip_matches
from .. import precedence as prec


class SZ_SZ(MatchAtom):
    """Origin state and 3-digit zip AND destination state and 3-digit zip."""

    # Identity
    name = "SZ_SZ"

    # Precedence
    categories = (prec.STATE_ZIP3_TO_STATE_ZIP3, prec.MILEAGE)

    # Requirements
    origin_fields = frozenset({"state", "zip_code"})
    destination_fields = frozenset({"state", "zip_code"})

    @classmethod
    def conditions(cls, route) -> pl.Expr:
        return (
            state_matches("origin", route.origin.state)
            & zip_matches("origin", route.origin.zip_code, lengths=(3,))
            & state_matches("destination", route.destination.state)
            & zip_matches("destination", route.destination.zip_code, lengths=(3,))
        )

"""
Zip(3) to State (Z3_S)
"""

import polars as pl

from .base import MatchAtom, state_matches, zip_matches
from .. import precedence as prec


class Z3_S(MatchAtom):
    """Origin 3-digit zip range AND destination state."""

    # Identity
    name = "Z3_S"

    # Precedence
    categories = (prec.ZIP3_TO_STATE, prec.MILEAGE)

    # Requirements
    origin_fields = frozenset({"zip_code"})
    destination_fields = frozenset({"state"})

    @classmethod
    def conditions(cls, route) -> pl.Expr:
        return (
            zip_matches("origin", route.origin.zip_code, lengths=(3,))
            & state_matches("destination", route.destination.state)
        )

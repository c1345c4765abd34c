"""
State to Zip(5) (S_Z5)

Only composed when the destination zip has at least 5 characters. Lanes of
this shape are stored under the "ST TO ZIP(6)" category.
"""

import polars as pl

from .base import MatchAtom, state_matches, zip_matches
from .. import precedence as prec


class S_Z5(MatchAtom):
    """Origin state AND destination 5-digit zip range."""

    # Identity
    name = "S_Z5"

    # Precedence
    categories = (prec.STATE_TO_ZIP6, prec.MILEAGE)

    # Requirements
    origin_fields = frozenset({"state"})
    destination_fields = frozenset({"zip_code"})

    @classmethod
    def conditions(cls, route) -> pl.Expr:
        return (
            state_matches("origin", route.origin.state)
            & zip_matches("destination", route.destination.zip_code, lengths=(5,))
        )

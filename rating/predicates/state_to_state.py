"""
State to State (S_S)

Least specific geographic lane. Every code that supplies a state on both
sides composes it.
"""

import polars as pl

from .base import MatchAtom, state_matches
from .. import precedence as prec


class S_S(MatchAtom):
    """Origin state AND destination state."""

    # Identity
    name = "S_S"

    # Precedence
    categories = (prec.STATE_TO_STATE, prec.MILEAGE)

    # Requirements
    origin_fields = frozenset({"state"})
    destination_fields = frozenset({"state"})

    @classmethod
    def conditions(cls, route) -> pl.Expr:
        return (
            state_matches("origin", route.origin.state)
            & state_matches("destination", route.destination.state)
        )

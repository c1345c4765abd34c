"""
Zip to Zip (Z_Z)

Both ends matched on zip ranges. Each side is tried at every truncation its
zip supports: 6-digit postal codes at 6, 5 and 3 characters, 5-digit zips at
5 and 3, anything shorter as given.
"""

import polars as pl

from .base import MatchAtom, zip_matches
from .. import precedence as prec


class Z_Z(MatchAtom):
    """Origin zip range AND destination zip range, at any supported truncation."""

    # Identity
    name = "Z_Z"

    # Precedence
    categories = (prec.ZIP6_TO_ZIP6, prec.ZIP6_TO_ZIP3, prec.ZIP3_TO_ZIP6, prec.MILEAGE)

    # Requirements
    origin_fields = frozenset({"zip_code"})
    destination_fields = frozenset({"zip_code"})

    @classmethod
    def conditions(cls, route) -> pl.Expr:
        return (
            zip_matches("origin", route.origin.zip_code)
            & zip_matches("destination", route.destination.zip_code)
        )

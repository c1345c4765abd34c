"""
Match Atom Base Class

Shared base class for geographic lane-matching atoms.
"""

from abc import ABC
from datetime import date

import polars as pl


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================

def zip_truncations(zip_code: str) -> list[str]:
    """
    Zip prefixes a lane zip range is tested against.

    6-digit postal codes are tried at 6, 5 and 3 characters, 5-digit zips at
    5 and 3, anything shorter only as given.

    Args:
        zip_code: Route zip / postal code

    Returns:
        Prefixes, longest first
    """
    if len(zip_code) == 6:
        return [zip_code, zip_code[:5], zip_code[:3]]
    if len(zip_code) == 5:
        return [zip_code, zip_code[:3]]
    return [zip_code]


def in_range(lower_col: str, upper_col: str, value) -> pl.Expr:
    """
    Check if a value falls within a lane's [lower, upper] column pair.

    Strings compare lexically, so a 3-digit prefix matches a lane whose range
    is stored at 3 digits.

    Args:
        lower_col: Column holding the inclusive lower bound
        upper_col: Column holding the inclusive upper bound
        value: Literal value or expression to test

    Returns:
        Polars expression evaluating to True if lower <= value <= upper
    """
    value = value if isinstance(value, pl.Expr) else pl.lit(value)
    return (pl.col(lower_col) <= value) & (pl.col(upper_col) >= value)


def zip_matches(side: str, zip_code: str, lengths: tuple[int, ...] | None = None) -> pl.Expr:
    """
    Check a route zip against a lane side's zip range.

    Args:
        side: "origin" or "destination"
        zip_code: Route zip / postal code
        lengths: Truncate to these lengths; None uses zip_truncations()

    Returns:
        OR of range checks, one per truncation
    """
    if lengths is None:
        prefixes = zip_truncations(zip_code)
    else:
        prefixes = [zip_code[:n] for n in lengths]

    expr = pl.lit(False)
    for prefix in prefixes:
        expr = expr | in_range(f"{side}_zip_from", f"{side}_zip_to", prefix)
    return expr


def city_state_matches(side: str, city: str, state: str) -> pl.Expr:
    """Lane side city AND state equal the route's."""
    return (pl.col(f"{side}_city") == city) & (pl.col(f"{side}_state") == state)


def state_matches(side: str, state: str) -> pl.Expr:
    """Lane side state equals the route's."""
    return pl.col(f"{side}_state") == state


def in_date_range(ship_date: date, from_col: str = "effective_from", to_col: str = "effective_to") -> pl.Expr:
    """Lane is effective on ship_date (inclusive on both ends)."""
    return in_range(from_col, to_col, pl.lit(ship_date, dtype=pl.Date))


# =============================================================================
# BASE CLASS
# =============================================================================

class MatchAtom(ABC):
    """
    Base class for all match atoms.

    An atom is one geographic shape a lane can be defined at (city/state to
    zip, state to state, ...). It contributes one OR-branch to the lane query.

    Attributes:
        IDENTITY
            name            - Short code (e.g., "CS_CS", "S_Z3")

        PRECEDENCE
            categories      - Precedence category names a lane must carry for
                              this atom to match it

        REQUIREMENTS
            origin_fields      - Route fields the atom reads on the origin side
            destination_fields - Route fields the atom reads on the destination side
    """

    # -------------------------------------------------------------------------
    # IDENTITY
    # -------------------------------------------------------------------------
    name: str

    # -------------------------------------------------------------------------
    # PRECEDENCE
    # -------------------------------------------------------------------------
    categories: tuple[str, ...] = ()

    # -------------------------------------------------------------------------
    # REQUIREMENTS
    # -------------------------------------------------------------------------
    origin_fields: frozenset[str] = frozenset()
    destination_fields: frozenset[str] = frozenset()

    # -------------------------------------------------------------------------
    # METHODS
    # -------------------------------------------------------------------------

    @classmethod
    def conditions(cls, route) -> pl.Expr:
        """
        Polars expression for the geographic part of the match.

        Override in every atom.
        """
        raise NotImplementedError(f"{cls.__name__} must define conditions()")

    @classmethod
    def precedence_condition(cls, ranks: list[int]) -> pl.Expr:
        """Lane precedence is one of the atom's category ranks."""
        return pl.col("precedence").is_in(ranks)

    @classmethod
    def clause(cls, route, ranks: list[int]) -> pl.Expr:
        """Full OR-branch: geography AND precedence category."""
        return cls.conditions(route) & cls.precedence_condition(ranks)

"""
Predicate Composer

Expands a granularity code into the lane filter for one request: the OR of
the selected atoms' clauses (each carrying its precedence categories),
AND the lane-level constraints every match must satisfy.

The result is a polars expression evaluated against the lane frame built by
lanes.query_lanes(), which carries a per-carrier "miles" column and the
carrier's "status".
"""

import logging
from typing import NamedTuple

import polars as pl

from .data.reference import INACTIVE_STATUS, ROUTING_ERROR_MESSAGE
from .errors import ClassificationError
from .models import RouteSpec
from .precedence import PrecedenceTable
from .predicates import MatchAtom, get_atoms
from .predicates.base import in_date_range, in_range


logger = logging.getLogger(__name__)


class Composition(NamedTuple):
    """Compiled lane filter for one request, or the reason there is none."""
    code: str
    atoms: list[type[MatchAtom]]
    expr: pl.Expr | None
    error: str | None = None

    def raise_for_error(self) -> None:
        """Raise ClassificationError if the code could not be composed."""
        if self.error is not None:
            raise ClassificationError(f"{self.code}: {self.error}")


# =============================================================================
# LANE-LEVEL CONSTRAINTS
# =============================================================================

def mode_matches(mode: str) -> pl.Expr:
    return pl.col("mode") == mode


def miles_in_band() -> pl.Expr:
    """Miles fall in the lane's band, or the lane declares no band (0 - 0)."""
    unrestricted = (pl.col("miles_from") == 0) & (pl.col("miles_to") == 0)
    return in_range("miles_from", "miles_to", pl.col("miles")) | unrestricted


def countries_match(route: RouteSpec) -> pl.Expr:
    return (
        (pl.col("origin_country") == route.origin.country)
        & (pl.col("destination_country") == route.destination.country)
    )


def carrier_active() -> pl.Expr:
    """Carrier profile is not inactive. A missing status never matches."""
    return pl.col("status").is_not_null() & (pl.col("status") != INACTIVE_STATUS)


def lane_constraints(route: RouteSpec) -> pl.Expr:
    """Constraints shared by every atom."""
    return (
        mode_matches(route.mode)
        & in_date_range(route.ship_date)
        & miles_in_band()
        & countries_match(route)
        & carrier_active()
    )


# =============================================================================
# COMPOSER
# =============================================================================

def atom_clauses(route: RouteSpec, atoms: list[type[MatchAtom]], precedences: PrecedenceTable) -> list[pl.Expr]:
    """One clause per atom, geography AND the atom's precedence ranks."""
    return [atom.clause(route, precedences.ranks_for(atom.categories)) for atom in atoms]


def compose_predicate(route: RouteSpec, code: str, precedences: PrecedenceTable) -> Composition:
    """
    Compile the lane filter for a classified route.

    Args:
        route: Route being quoted
        code: Granularity code from classify_route()
        precedences: Precedence table snapshot

    Returns:
        Composition. For an unmapped code, expr is None and error carries
        ROUTING_ERROR_MESSAGE; nothing is raised.

    Raises:
        ClassificationError: If an atom's category is missing from the precedence table
    """
    atoms = get_atoms(code, route.destination.zip_code)
    if atoms is None:
        logger.warning("No predicate mapping for granularity code %s", code)
        return Composition(code=code, atoms=[], expr=None, error=ROUTING_ERROR_MESSAGE)

    geography = pl.lit(False)
    for clause in atom_clauses(route, atoms, precedences):
        geography = geography | clause

    logger.debug("Composed %s from atoms %s", code, [a.name for a in atoms])
    return Composition(
        code=code,
        atoms=atoms,
        expr=geography & lane_constraints(route),
    )

"""
STD Quote Calculator

Route in, quote table out. Each request runs as one ordered pipeline over
an immutable reference snapshot:

    classify -> compose -> miles -> query -> project -> rank -> build quotes

REQUEST
-------
    RouteSpec with origin/destination (city, state, zip, country), ship_date,
    mode, optional mileage overrides and stop-off count.

RESPONSE
--------
    QuoteTable with one Quote per carrier, ascending by base. Requests that
    cannot be rated (no predicate mapping, no miles) come back with an empty
    quote list and a message rather than raising.

USAGE
-----
    from rating import quote_route
    from rating.data import load_reference

    reference = load_reference()
    table = quote_route(route, reference, mileage_lookup=my_mileage_service)
"""

import logging
from typing import Optional

import polars as pl

from .charges import build_quote
from .classify import classify_route
from .compose import compose_predicate
from .data import ReferenceData
from .data.reference import ACCURACY, MILES_WARNING_MESSAGE
from .lanes import query_lanes
from .miles import MileageLookup, resolve_miles
from .models import QuoteTable, RouteSpec
from .project import project_candidates
from .rank import rank_candidates
from .version import VERSION


logger = logging.getLogger(__name__)


# =============================================================================
# MAIN ENTRY POINT
# =============================================================================

def quote_route(
    route: RouteSpec,
    reference: ReferenceData,
    mileage_lookup: Optional[MileageLookup] = None,
    accuracy: int = ACCURACY,
) -> QuoteTable:
    """
    Quote a route against every matching carrier lane.

    Args:
        route: Route to quote
        reference: Reference snapshot from load_reference() / load_reference_csv()
        mileage_lookup: Mileage service for point-to-point routes, optional
        accuracy: Decimal places for money rounding

    Returns:
        QuoteTable

    Raises:
        ValidationError: If either side of the route has no city, state or zip
        ClassificationError: If a composed atom's category is missing from the precedence table
        RoutingUpstreamError: If the mileage service fails
    """
    code = classify_route(route)

    composition = compose_predicate(route, code, reference.precedences)
    if composition.error is not None:
        return QuoteTable(granularity_code=code, quotes=[], message=composition.error, version=VERSION)

    miles = resolve_miles(route, code, mileage_lookup)
    if miles is None:
        return QuoteTable(granularity_code=code, quotes=[], message=MILES_WARNING_MESSAGE, version=VERSION)

    ranked = rate_candidates(route, reference, composition, miles, accuracy)
    quotes = [build_quote(row, route.stop_offs) for row in ranked.iter_rows(named=True)]

    logger.info("Quoted %s %s: %d carrier(s)", code, route.mode, len(quotes))
    return QuoteTable(granularity_code=code, quotes=quotes, version=VERSION)


def rate_candidates(route, reference, composition, miles, accuracy: int = ACCURACY) -> pl.DataFrame:
    """
    Query, project and rank lanes for a composed request.

    Returns the ranked frame (one row per carrier) for callers that want
    the tabular form instead of Quote records.
    """
    candidates = query_lanes(reference, composition, miles)
    candidates = project_candidates(candidates, reference, route.ship_date)
    return rank_candidates(candidates, route.stop_offs, accuracy)

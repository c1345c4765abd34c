"""
Mileage Resolution

Routed miles for a request under both bases (household goods, practical).
Only point-to-point granularity codes are sent to the mileage service; the
rest rely on user-supplied miles.
"""

import logging
from typing import Callable, Optional

from .data.reference import POINT_TO_POINT_CODES
from .errors import RoutingUpstreamError
from .models import RouteSpec, RoutedMiles


logger = logging.getLogger(__name__)


# route -> (household goods miles, practical miles)
MileageLookup = Callable[[RouteSpec], tuple[float, float]]


def _lookup(route: RouteSpec, mileage_lookup: MileageLookup) -> RoutedMiles:
    """Call the mileage service, raising RoutingUpstreamError on any failure."""
    try:
        reply = mileage_lookup(route)
    except RoutingUpstreamError:
        raise
    except Exception as e:
        raise RoutingUpstreamError(f"Mileage lookup failed: {e}") from e

    try:
        household_goods, practical = reply
        return RoutedMiles(float(household_goods), float(practical))
    except (TypeError, ValueError) as e:
        raise RoutingUpstreamError(f"Mileage lookup returned an invalid reply: {reply!r}") from e


def resolve_miles(
    route: RouteSpec,
    code: str,
    mileage_lookup: Optional[MileageLookup] = None,
) -> RoutedMiles | None:
    """
    Resolve the miles a request is rated on.

    Stop-offs are added to both figures, then any non-zero user override is
    added to its figure.

    Args:
        route: Route being quoted
        code: Granularity code from classify_route()
        mileage_lookup: Mileage service, consulted for point-to-point codes

    Returns:
        RoutedMiles, or None if no override was given and both figures
        are 0 (caller answers with MILES_WARNING_MESSAGE)

    Raises:
        RoutingUpstreamError: If the mileage service fails
    """
    routed = RoutedMiles(0.0, 0.0)
    if code in POINT_TO_POINT_CODES:
        if mileage_lookup is None:
            logger.debug("No mileage lookup configured, %s rated on user miles", code)
        else:
            routed = _lookup(route, mileage_lookup)
            logger.debug("Routed miles for %s: %s", code, routed)

    household_goods = routed.household_goods + route.stop_offs
    practical = routed.practical + route.stop_offs

    if route.household_goods_miles or route.practical_miles:
        household_goods += route.household_goods_miles
        practical += route.practical_miles
    elif household_goods == 0 and practical == 0:
        return None

    return RoutedMiles(household_goods, practical)

"""
Specificity Classifier

Derives the granularity code of a route: which of city, state and zip were
supplied on each side. "CSZ_S" = city, state and zip at origin, state only at
destination.
"""

import logging

from .errors import ValidationError
from .models import Location, RouteSpec


logger = logging.getLogger(__name__)


def side_code(location: Location) -> str:
    """'C', 'S', 'Z' for each populated field, in that fixed order."""
    code = ""
    if location.city:
        code += "C"
    if location.state:
        code += "S"
    if location.zip_code:
        code += "Z"
    return code


def classify_route(route: RouteSpec) -> str:
    """
    Classify a route by the geographic fields it supplies.

    Raises:
        ValidationError: If either side supplies none of city, state, zip
    """
    origin = side_code(route.origin)
    destination = side_code(route.destination)

    if not origin:
        raise ValidationError("Origin must supply at least one of city, state or zip")
    if not destination:
        raise ValidationError("Destination must supply at least one of city, state or zip")

    code = f"{origin}_{destination}"
    logger.debug("Classified route as %s", code)
    return code

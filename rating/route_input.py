"""
Route Input

Builds a RouteSpec from loosely typed request fields. Free text is scrubbed
to letters, digits and - . , space *; numeric fields that do not parse
become 0.
"""

import math
import re
from datetime import date, datetime
from typing import Any, Mapping

from .errors import ValidationError
from .models import Location, RouteSpec, ShipmentLine


_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9\-., *]")


def clean_text(value: Any) -> str:
    """Strip unexpected characters and surrounding whitespace."""
    if value is None:
        return ""
    return _UNSAFE_CHARS.sub("", str(value)).strip()


def clean_int(value: Any) -> int:
    """Integer value, 0 if it does not parse."""
    try:
        return int(float(clean_text(value)))
    except (ValueError, OverflowError):
        return 0


def clean_float(value: Any) -> float:
    """Float value, 0.0 if it does not parse or is not finite."""
    try:
        number = float(clean_text(value))
    except ValueError:
        return 0.0
    return number if math.isfinite(number) else 0.0


def parse_ship_date(value: Any) -> date:
    """
    Ship date from a date, YYYY-MM-DD or YYYYMMDD.

    Raises:
        ValidationError: If the value is not a date in either format
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    text = clean_text(value)
    for fmt in ("%Y-%m-%d", "%Y%m%d"):
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    raise ValidationError(f"Invalid ship date: {value!r}")


def _location(fields: Mapping[str, Any], prefix: str) -> Location:
    return Location(
        city=clean_text(fields.get(f"{prefix}_city")),
        state=clean_text(fields.get(f"{prefix}_state")),
        zip_code=clean_text(fields.get(f"{prefix}_zip")),
        country=clean_text(fields.get(f"{prefix}_country")) or "USA",
    )


def route_from_dict(fields: Mapping[str, Any]) -> RouteSpec:
    """
    Build a RouteSpec from request fields.

    Expected keys: origin_city, origin_state, origin_zip, origin_country,
    destination_* likewise, ship_date, mode, and optionally customer_code,
    household_goods_miles, practical_miles, stop_offs and shipment_lines
    (a list of mappings with freight_class, weight, charge, discount).

    Raises:
        ValidationError: If the ship date is invalid
    """
    lines = tuple(
        ShipmentLine(
            freight_class=clean_float(line.get("freight_class")),
            weight=clean_float(line.get("weight")),
            charge=clean_float(line.get("charge")),
            discount=clean_float(line.get("discount")),
        )
        for line in fields.get("shipment_lines") or ()
    )

    return RouteSpec(
        origin=_location(fields, "origin"),
        destination=_location(fields, "destination"),
        ship_date=parse_ship_date(fields.get("ship_date")),
        mode=clean_text(fields.get("mode")),
        customer_code=clean_text(fields.get("customer_code")),
        household_goods_miles=clean_int(fields.get("household_goods_miles")),
        practical_miles=clean_int(fields.get("practical_miles")),
        stop_offs=clean_int(fields.get("stop_offs")),
        shipment_lines=lines,
    )

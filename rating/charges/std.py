"""
STD Quote Builder

Turns a ranked candidate row into a Quote. Figures that cannot be shown as
numbers become user-facing sentinels instead of raising.
"""

import math

from ..models import Contact, Quote, Sentinel


def _number_or(value, sentinel: Sentinel) -> float | Sentinel:
    """The value as a float, or the sentinel if missing, non-numeric, NaN or 0."""
    try:
        number = float(value)
    except (TypeError, ValueError):
        return sentinel
    if math.isnan(number) or number == 0.0:
        return sentinel
    return number


def build_quote(row: dict, stop_offs: int = 0) -> Quote:
    """
    Build a Quote from one ranked candidate row.

    Sentinels:
        base 0 / missing         -> MILEAGE_NOT_FOUND
        fuel_charge 0            -> FUEL_INCLUDED
        total 0 / missing        -> RATE_ERROR
        miles 0 / missing        -> MILEAGE_NOT_FOUND
        rate_per_mile 0          -> FLAT

    error comes from the ranker's "error" column, which is decided on the
    unrounded base. Rows without that column are flagged when base or miles
    is a sentinel.
    """
    base = _number_or(row.get("base"), Sentinel.MILEAGE_NOT_FOUND)
    miles = _number_or(row.get("miles"), Sentinel.MILEAGE_NOT_FOUND)
    if not isinstance(miles, Sentinel):
        miles = int(miles)

    error = row.get("error")
    if error is None:
        error = isinstance(base, Sentinel) or isinstance(miles, Sentinel)
    elif not error and isinstance(base, Sentinel):
        # usable base that rounded to zero
        base = 0.0

    return Quote(
        carrier_code=row["carrier_code"],
        name=row.get("name") or "",
        is_customer=bool(row.get("is_customer")),
        contact=Contact(
            name=row.get("contact_name") or "",
            phone=row.get("contact_phone") or "",
            email=row.get("contact_email") or "",
        ),
        base=base,
        fuel_charge=_number_or(row.get("fuel_charge"), Sentinel.FUEL_INCLUDED),
        total=_number_or(row.get("total"), Sentinel.RATE_ERROR),
        miles=miles,
        rate_per_mile=_number_or(row.get("rate_per_mile"), Sentinel.FLAT),
        comments=(row.get("note") or "").strip(),
        stop_offs=stop_offs,
        error=bool(error),
    )

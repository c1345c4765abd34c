"""
Rating Data Model

Request, result and profile records passed between pipeline stages.
Lane records themselves stay in polars frames (see columns.py).
"""

from datetime import date
from enum import Enum
from typing import NamedTuple


# =============================================================================
# REQUEST
# =============================================================================

class Location(NamedTuple):
    """One end of a route. Empty strings mean "not supplied"."""
    city: str = ""
    state: str = ""
    zip_code: str = ""
    country: str = "USA"


class ShipmentLine(NamedTuple):
    """One LTL shipment line."""
    freight_class: float
    weight: float
    charge: float
    discount: float = 0.0           # Line-level discount percent (carrier side only)


class RouteSpec(NamedTuple):
    """A partially specified shipment route to be quoted."""
    origin: Location
    destination: Location
    ship_date: date
    mode: str
    customer_code: str = ""
    household_goods_miles: int = 0  # User override, added to routed HHG miles
    practical_miles: int = 0        # User override, added to routed practical miles
    stop_offs: int = 0
    shipment_lines: tuple[ShipmentLine, ...] = ()


class RoutedMiles(NamedTuple):
    """Miles for a route under both mileage bases."""
    household_goods: float
    practical: float


# =============================================================================
# RESULTS
# =============================================================================

class Sentinel(str, Enum):
    """User-facing placeholder shown instead of a number on a Quote."""
    MILEAGE_NOT_FOUND = "Mileage Not Found!"
    FUEL_INCLUDED = "INCLUDED"
    RATE_ERROR = "ERROR!"
    FLAT = "FLAT"


class Contact(NamedTuple):
    """Dispatch contact for a carrier/customer."""
    name: str = ""
    phone: str = ""
    email: str = ""


class Quote(NamedTuple):
    """
    Per-carrier STD quote.

    Money and mileage fields hold either a number or a Sentinel. error is True
    when base or miles could not be computed.
    """
    carrier_code: str
    name: str
    is_customer: bool
    contact: Contact
    base: float | Sentinel
    fuel_charge: float | Sentinel
    total: float | Sentinel
    miles: int | Sentinel
    rate_per_mile: float | Sentinel
    comments: str
    stop_offs: int
    error: bool


class QuoteTable(NamedTuple):
    """Response for one quotation request."""
    granularity_code: str
    quotes: list[Quote]
    message: str | None = None
    version: str = ""


# =============================================================================
# LTL
# =============================================================================

class LTLDiscountProfile(NamedTuple):
    """Carrier/customer LTL discount terms for one matched LTL lane."""
    carrier_code: str
    name: str
    discount: float                         # Percent, e.g. 65.0
    minimum_charge: float
    fuel_percent: float                     # Fraction of gross, e.g. 0.25
    class_range: tuple[float, float]
    fak_range: tuple[float, float] | None   # No discount strictly inside this band
    use_fak: bool = False
    conditions: str = ""
    contact: Contact = Contact()


class LineCharge(NamedTuple):
    """One shipment line after discount treatment."""
    freight_class: float
    charge: float
    discounted: bool


class LTLCarrierCharge(NamedTuple):
    """Buy-side LTL figures."""
    base: float
    gross: float
    fuel_charge: float
    discount_total: float
    total: float
    lines: list[LineCharge]


class LTLCustomerSell(NamedTuple):
    """Sell-side LTL figures."""
    total_charge: float
    total_weight: float
    gross: float
    discount_total: float
    fuel_charge: float
    total: float


class LTLQuote(NamedTuple):
    """A matched LTL profile and its priced charge."""
    profile: LTLDiscountProfile
    charge: LTLCarrierCharge | LTLCustomerSell

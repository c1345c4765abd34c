"""
LTL Quote Calculator

Matches LTL discount lanes for a shipment and prices them.

    quote_ltl()               - carrier costs, one quote per matching carrier lane
    sell_ltl()                - customer charge from the customer's own lane
    customer_ltl_readiness()  - can this customer be LTL-quoted at all

LANE MATCHING
-------------
    - ship date within the lane's effective range
    - origin/destination state satisfies the lane's state list:
      comma-separated codes, *INTER (states differ) or *INTRA (same state)
    - 5-digit origin/destination zips inside the lane's zip ranges
      (skipped for a side with no zip)
    - total shipment weight inside the lane's weight range
    - the lane's code has a FAK row and a carrier directory entry
"""

import logging
from datetime import date
from typing import NamedTuple

import polars as pl

from .charges import calculate_carrier_charge, calculate_customer_sell
from .data import ReferenceData
from .data.reference import (
    ACCURACY,
    DEFAULT_FUEL_TABLE,
    INACTIVE_STATUS,
    LTL_DEFAULT_FUEL_TABLE,
    LTL_FUEL_MODE,
)
from .models import Contact, LTLDiscountProfile, LTLQuote, RouteSpec
from .predicates.base import in_date_range, in_range
from .project import fuel_brackets, fuel_price_for


logger = logging.getLogger(__name__)

INTERSTATE = "*INTER"
INTRASTATE = "*INTRA"


class LTLReadiness(NamedTuple):
    valid: bool
    reason: str = ""


# =============================================================================
# LANE MATCHING
# =============================================================================

def states_match(col: str, state: str, route: RouteSpec) -> pl.Expr:
    """Route state satisfies a lane state list column."""
    listed = (
        pl.col(col)
        .str.split(",")
        .list.eval(pl.element().str.strip_chars())
        .list.contains(state)
    )
    same_state = route.origin.state == route.destination.state
    return (
        pl.when(pl.col(col) == INTERSTATE).then(pl.lit(not same_state))
        .when(pl.col(col) == INTRASTATE).then(pl.lit(same_state))
        .otherwise(listed)
    )


def zips_match(side: str, zip_code: str) -> pl.Expr:
    """5-digit route zip inside the lane side's zip range; True without a zip."""
    if not zip_code:
        return pl.lit(True)
    return in_range(f"{side}_zip_from", f"{side}_zip_to", zip_code[:5])


def ltl_lane_conditions(route: RouteSpec) -> pl.Expr:
    """Date, states, zips and weight conditions for one shipment."""
    total_weight = sum(float(line.weight) for line in route.shipment_lines)
    return (
        in_date_range(route.ship_date)
        & states_match("origin_states", route.origin.state, route)
        & states_match("destination_states", route.destination.state, route)
        & zips_match("origin", route.origin.zip_code)
        & zips_match("destination", route.destination.zip_code)
        & in_range("weight_from", "weight_to", total_weight)
    )


def match_ltl_lanes(reference: ReferenceData, route: RouteSpec) -> pl.DataFrame:
    """
    LTL lanes matching a shipment, joined with FAK range and carrier directory.

    Lanes of inactive carriers are dropped.
    """
    fak = reference.fak_ranges.unique(subset="carrier_code", keep="first", maintain_order=True)
    carriers = reference.carriers.unique(subset="carrier_code", keep="first", maintain_order=True)

    return (
        reference.ltl_lanes.lazy()
        .filter(ltl_lane_conditions(route))
        .join(fak.lazy(), on="carrier_code", how="inner")
        .join(carriers.lazy(), on="carrier_code", how="inner")
        .filter(pl.col("status") != INACTIVE_STATUS)
        .sort("record_number")
        .collect()
    )


# =============================================================================
# FUEL
# =============================================================================

def ltl_fuel_percent(
    reference: ReferenceData,
    carrier_code: str,
    lane_fuel_table: str,
    price: float | None,
) -> float:
    """
    Fuel percentage for an LTL lane.

    Table: rate profile table if set; else the lane's table unless it is
    *DEF, in which case CFSC. Mode is always LTL. No bracket means 0.
    """
    profile = reference.rate_profiles.filter(pl.col("carrier_code") == carrier_code)
    profile_table = profile["fuel_table"][0] if profile.height else ""

    if profile_table:
        table_name = profile_table
    elif lane_fuel_table and lane_fuel_table != DEFAULT_FUEL_TABLE:
        table_name = lane_fuel_table
    else:
        table_name = LTL_DEFAULT_FUEL_TABLE

    bracket = fuel_brackets(reference.fuel_tables, price).filter(
        (pl.col("table_name") == table_name) & (pl.col("mode") == LTL_FUEL_MODE)
    )
    if bracket.is_empty():
        logger.debug("No LTL fuel bracket for %s (table %s)", carrier_code, table_name)
        return 0.0
    return float(bracket["percent"][0])


# =============================================================================
# PROFILES
# =============================================================================

def build_profile(row: dict, fuel_percent: float) -> LTLDiscountProfile:
    """Discount profile from a matched lane row."""
    use_fak = bool(row.get("use_fak"))
    return LTLDiscountProfile(
        carrier_code=row["carrier_code"],
        name=row.get("name") or "",
        discount=float(row.get("discount") or 0.0),
        minimum_charge=float(row.get("minimum_charge") or 0.0),
        fuel_percent=fuel_percent,
        class_range=(float(row.get("class_from") or 0.0), float(row.get("class_to") or 0.0)),
        fak_range=(float(row["fak_from"]), float(row["fak_to"])) if use_fak else None,
        use_fak=use_fak,
        conditions=(row.get("conditions") or "").strip(),
        contact=Contact(
            name=row.get("contact_name") or "",
            phone=row.get("contact_phone") or "",
            email=row.get("contact_email") or "",
        ),
    )


def _profiles(reference: ReferenceData, lanes: pl.DataFrame, ship_date: date) -> list[LTLDiscountProfile]:
    price = fuel_price_for(reference.fuel_prices, ship_date)
    return [
        build_profile(row, ltl_fuel_percent(reference, row["carrier_code"], row["fuel_table"], price))
        for row in lanes.iter_rows(named=True)
    ]


# =============================================================================
# MAIN ENTRY POINTS
# =============================================================================

def quote_ltl(route: RouteSpec, reference: ReferenceData, accuracy: int = ACCURACY) -> list[LTLQuote]:
    """
    Carrier LTL costs for a shipment.

    Carrier lanes offered to the route's customer (or to any customer) are
    priced with the carrier calculator; one quote per lane, ascending by
    total.
    """
    lanes = match_ltl_lanes(reference, route).filter(
        ~pl.col("is_customer").fill_null(False)
        & pl.col("for_customer").is_in(["", route.customer_code])
    )

    quotes = [
        LTLQuote(profile, calculate_carrier_charge(profile, list(route.shipment_lines), accuracy))
        for profile in _profiles(reference, lanes, route.ship_date)
    ]
    quotes.sort(key=lambda q: q.charge.total)

    logger.info("LTL quoted %d carrier lane(s) for %s", len(quotes), route.customer_code or "*ALL")
    return quotes


def sell_ltl(route: RouteSpec, reference: ReferenceData, accuracy: int = ACCURACY) -> LTLQuote | None:
    """
    Customer LTL charge for a shipment.

    Uses the first matching lane owned by the route's customer.

    Returns:
        LTLQuote, or None if the customer has no matching lane
    """
    if not route.customer_code:
        return None

    lanes = match_ltl_lanes(reference, route).filter(pl.col("carrier_code") == route.customer_code)
    profiles = _profiles(reference, lanes.head(1), route.ship_date)
    if not profiles:
        return None

    profile = profiles[0]
    return LTLQuote(profile, calculate_customer_sell(profile, list(route.shipment_lines), accuracy))


def customer_ltl_readiness(reference: ReferenceData, code: str) -> LTLReadiness:
    """Whether a customer can be LTL-quoted, with the reason if not."""
    customer = reference.carriers.filter(
        (pl.col("carrier_code") == code)
        & pl.col("is_customer").fill_null(False)
        & (pl.col("status") != INACTIVE_STATUS)
    )
    if customer.is_empty():
        return LTLReadiness(False, "INVALID CUSTOMER CODE")

    if not customer["is_ltl"].fill_null(False)[0]:
        return LTLReadiness(False, "CUSTOMER NOT FLAGGED FOR LTL")

    if reference.ltl_lanes.filter(pl.col("carrier_code") == code).is_empty():
        return LTLReadiness(False, "NO LTL LANES FOR THIS CUSTOMER")

    if reference.fak_ranges.filter(pl.col("carrier_code") == code).is_empty():
        return LTLReadiness(False, "NO FAK RANGE SET FOR THIS CUSTOMER")

    return LTLReadiness(True)

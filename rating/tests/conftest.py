"""
Shared fixtures: in-memory reference frames, no database.

STD scenario (Chicago, IL -> Dallas, TX, mode V, shipped 2026-06-15):
    AAAA  CS_CS flat 2000 (rank 1) and S_S 1.50/mi (rank 12)
    BBBB  S_S 2.00/mi, min 500, practical miles basis
    CCCC  S_S, carrier inactive
    DDDD  S_S, mode R
    EEEE  S_S, expired 2025-12-31
    FFFF  S_S 2.50/mi, fuel included, no rate profile

Fuel price 3.50 on the ship date -> *DEF/V bracket 10% of base.
"""

from datetime import date

import polars as pl
import pytest

from rating.columns import (
    CARRIER_SCHEMA,
    FAK_SCHEMA,
    FUEL_PRICE_SCHEMA,
    FUEL_TABLE_SCHEMA,
    LTL_LANE_SCHEMA,
    RATE_PROFILE_SCHEMA,
    STD_LANE_SCHEMA,
    conform,
)
from rating.data import ReferenceData
from rating.models import Location, RouteSpec, ShipmentLine
from rating.precedence import PrecedenceTable


SHIP_DATE = date(2026, 6, 15)

RANKS = {
    "CITY,ST TO CITY,ST": 1,
    "ZIP(6) TO ZIP(6)": 2,
    "ZIP(6) TO ZIP(3)": 3,
    "ZIP(3) TO ZIP(6)": 4,
    "ZIP(3) TO CITY,ST": 5,
    "CITY,ST TO ZIP(3)": 6,
    "CITY,ST TO ST": 7,
    "ST TO CITY,ST": 8,
    "ST TO ZIP(6)": 9,
    "ST TO ZIP(3)": 10,
    "ZIP(3) TO ST": 11,
    "ST TO ST": 12,
    "ST,ZIP(3) TO ST,ZIP(3)": 13,
    "MILEAGE": 90,
}

LANE_DEFAULTS = {
    "record_number": 0,
    "precedence": 12,
    "mode": "V",
    "carrier_code": "",
    "effective_from": date(2026, 1, 1),
    "effective_to": date(2026, 12, 31),
    "origin_country": "USA",
    "origin_state": "",
    "origin_city": "",
    "origin_zip_from": "",
    "origin_zip_to": "",
    "destination_country": "USA",
    "destination_state": "",
    "destination_city": "",
    "destination_zip_from": "",
    "destination_zip_to": "",
    "flat_rate": 0.0,
    "rate_per_mile": 0.0,
    "minimum_charge": 0.0,
    "fuel_included": False,
    "fuel_table": "",
    "miles_from": 0,
    "miles_to": 0,
    "note": "",
}

LTL_LANE_DEFAULTS = {
    "record_number": 0,
    "carrier_code": "",
    "for_customer": "",
    "fuel_table": "",
    "origin_states": "IL",
    "destination_states": "TX",
    "origin_zip_from": "0",
    "origin_zip_to": "99999",
    "destination_zip_from": "0",
    "destination_zip_to": "99999",
    "discount": 0.0,
    "minimum_charge": 0.0,
    "class_from": 50.0,
    "class_to": 500.0,
    "weight_from": 0.0,
    "weight_to": 10000.0,
    "conditions": "",
    "effective_from": date(2026, 1, 1),
    "effective_to": date(2026, 12, 31),
}

CARRIER_DEFAULTS = {
    "carrier_code": "",
    "name": "",
    "is_customer": False,
    "is_ltl": False,
    "status": "A",
    "contact_name": "",
    "contact_phone": "",
    "contact_email": "",
}


def build_frame(rows: list[dict], defaults: dict, schema: dict, name: str) -> pl.DataFrame:
    """Frame from partial rows, missing fields taken from defaults."""
    data = [{**defaults, **row} for row in rows]
    return conform(pl.DataFrame(data, schema=schema), schema, name)


# =============================================================================
# FACTORIES
# =============================================================================

@pytest.fixture
def make_lanes():
    """Factory: STD lane frame from partial rows."""
    def _make(rows):
        rows = [{"record_number": i + 1, **row} for i, row in enumerate(rows)]
        return build_frame(rows, LANE_DEFAULTS, STD_LANE_SCHEMA, "lanes")
    return _make


@pytest.fixture
def make_route():
    """Factory: RouteSpec with Chicago -> Dallas defaults."""
    def _make(
        origin=("Chicago", "IL", "60601"),
        destination=("Dallas", "TX", "75201"),
        **kwargs,
    ):
        fields = {"ship_date": SHIP_DATE, "mode": "V", **kwargs}
        return RouteSpec(
            origin=Location(*origin),
            destination=Location(*destination),
            **fields,
        )
    return _make


# =============================================================================
# REFERENCE FRAMES
# =============================================================================

@pytest.fixture
def precedences():
    return PrecedenceTable(RANKS)


@pytest.fixture
def std_lanes(make_lanes):
    chicago_dallas = {
        "origin_city": "Chicago", "origin_state": "IL",
        "destination_city": "Dallas", "destination_state": "TX",
    }
    il_tx = {"origin_state": "IL", "destination_state": "TX"}
    return make_lanes([
        {"carrier_code": "AAAA", "precedence": 1, "flat_rate": 2000.0, "note": " Team service ", **chicago_dallas},
        {"carrier_code": "AAAA", "precedence": 12, "rate_per_mile": 1.5, **il_tx},
        {"carrier_code": "BBBB", "precedence": 12, "rate_per_mile": 2.0, "minimum_charge": 500.0, **il_tx},
        {"carrier_code": "CCCC", "precedence": 12, "rate_per_mile": 1.0, **il_tx},
        {"carrier_code": "DDDD", "precedence": 12, "rate_per_mile": 1.0, "mode": "R", **il_tx},
        {"carrier_code": "EEEE", "precedence": 12, "rate_per_mile": 1.0,
         "effective_from": date(2025, 1, 1), "effective_to": date(2025, 12, 31), **il_tx},
        {"carrier_code": "FFFF", "precedence": 12, "rate_per_mile": 2.5, "fuel_included": True, **il_tx},
    ])


@pytest.fixture
def rate_profiles():
    return build_frame(
        [
            {"carrier_code": "AAAA", "mileage_basis": "", "fuel_table": ""},
            {"carrier_code": "BBBB", "mileage_basis": "PM", "fuel_table": ""},
        ],
        {}, RATE_PROFILE_SCHEMA, "rate_profiles",
    )


@pytest.fixture
def carriers():
    rows = [
        {"carrier_code": "AAAA", "name": "Alpha Freight", "contact_name": "Dana Ops",
         "contact_phone": "312-555-0100 ext: 12", "contact_email": "dispatch@alpha.example"},
        {"carrier_code": "BBBB", "name": "Bravo Lines"},
        {"carrier_code": "CCCC", "name": "Charlie Transport", "status": "I"},
        {"carrier_code": "DDDD", "name": "Delta Reefer"},
        {"carrier_code": "EEEE", "name": "Echo Haul"},
        {"carrier_code": "FFFF", "name": "Foxtrot Carriers"},
        # LTL
        {"carrier_code": "LTLA", "name": "LTL Alpha", "is_ltl": True},
        {"carrier_code": "LTLB", "name": "LTL Bravo", "is_ltl": True},
        {"carrier_code": "ACME", "name": "Acme Shipping", "is_customer": True, "is_ltl": True},
        {"carrier_code": "BETA", "name": "Beta Goods", "is_customer": True, "is_ltl": False},
        {"carrier_code": "GAMMA", "name": "Gamma Supply", "is_customer": True, "is_ltl": True},
        {"carrier_code": "DELTA", "name": "Delta Foods", "is_customer": True, "is_ltl": True},
    ]
    return build_frame(rows, CARRIER_DEFAULTS, CARRIER_SCHEMA, "carriers")


@pytest.fixture
def fuel_tables():
    defaults = {"per_mile": 0.0, "percent": 0.0}
    rows = [
        {"table_name": "*DEF", "mode": "V", "low_amount": 3.0, "high_amount": 3.999, "percent": 0.10},
        {"table_name": "*DEF", "mode": "V", "low_amount": 4.0, "high_amount": 4.999, "percent": 0.20},
        {"table_name": "PMT", "mode": "V", "low_amount": 3.0, "high_amount": 3.999, "per_mile": 0.5},
        {"table_name": "CFSC", "mode": "LTL", "low_amount": 3.0, "high_amount": 3.999, "percent": 0.25},
        {"table_name": "XYZ", "mode": "LTL", "low_amount": 3.0, "high_amount": 3.999, "percent": 0.30},
    ]
    return build_frame(rows, defaults, FUEL_TABLE_SCHEMA, "fuel_tables")


@pytest.fixture
def fuel_prices():
    rows = [
        {"begin_date": date(2026, 6, 1), "end_date": date(2026, 6, 30), "price": 3.5},
        {"begin_date": date(2026, 5, 1), "end_date": date(2026, 5, 31), "price": 4.5},
    ]
    return build_frame(rows, {}, FUEL_PRICE_SCHEMA, "fuel_prices")


@pytest.fixture
def ltl_lanes():
    rows = [
        {"record_number": 1, "carrier_code": "LTLA", "discount": 60.0, "minimum_charge": 100.0,
         "fuel_table": "*DEF"},
        {"record_number": 2, "carrier_code": "LTLB", "for_customer": "ACME", "discount": 50.0,
         "minimum_charge": 150.0, "fuel_table": "XYZ",
         "origin_states": "*INTER", "destination_states": "*INTER"},
        {"record_number": 3, "carrier_code": "LTLB", "for_customer": "OTHER", "discount": 70.0},
        {"record_number": 4, "carrier_code": "ACME", "discount": 40.0,
         "origin_states": "IL, WI", "destination_states": "TX", "conditions": " Liftgate extra "},
        {"record_number": 5, "carrier_code": "LTLA", "discount": 80.0,
         "origin_states": "*INTRA", "destination_states": "*INTRA"},
        {"record_number": 6, "carrier_code": "DELTA", "discount": 30.0,
         "origin_states": "NY", "destination_states": "NY"},
    ]
    return build_frame(rows, LTL_LANE_DEFAULTS, LTL_LANE_SCHEMA, "ltl_lanes")


@pytest.fixture
def fak_ranges():
    rows = [
        {"carrier_code": "LTLA", "use_fak": False, "fak_from": 0.0, "fak_to": 0.0},
        {"carrier_code": "LTLB", "use_fak": True, "fak_from": 60.0, "fak_to": 100.0},
        {"carrier_code": "ACME", "use_fak": False, "fak_from": 0.0, "fak_to": 0.0},
    ]
    return build_frame(rows, {}, FAK_SCHEMA, "fak_ranges")


@pytest.fixture
def reference(precedences, std_lanes, rate_profiles, carriers, fuel_tables, fuel_prices, ltl_lanes, fak_ranges):
    return ReferenceData(
        precedences=precedences,
        lanes=std_lanes,
        rate_profiles=rate_profiles,
        carriers=carriers,
        fuel_tables=fuel_tables,
        fuel_prices=fuel_prices,
        ltl_lanes=ltl_lanes,
        fak_ranges=fak_ranges,
    )


@pytest.fixture
def ltl_route(make_route):
    """IL -> TX, one class 70 line of 500 lb / $800."""
    return make_route(
        mode="LTL",
        customer_code="ACME",
        shipment_lines=(ShipmentLine(freight_class=70.0, weight=500.0, charge=800.0),),
    )

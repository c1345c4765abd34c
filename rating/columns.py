"""
Column Schema Definitions

Documents the columns of every reference frame and of the candidate frame
built per request, and provides validation utilities.
"""

import polars as pl


# =============================================================================
# PRECEDENCE TABLE
# =============================================================================

PRECEDENCE_SCHEMA = {
    "rank": pl.Int64,               # Lower = more specific
    "category": pl.Utf8,            # e.g. "CITY,ST TO CITY,ST"
}


# =============================================================================
# STD LANES
# =============================================================================

STD_LANE_SCHEMA = {
    "record_number": pl.Int64,      # Physical record locator
    "precedence": pl.Int64,         # Rank of the lane's specificity category
    "mode": pl.Utf8,                # Transport mode (REF, TLD, ...)
    "carrier_code": pl.Utf8,
    "effective_from": pl.Date,
    "effective_to": pl.Date,

    "origin_country": pl.Utf8,
    "origin_state": pl.Utf8,
    "origin_city": pl.Utf8,
    "origin_zip_from": pl.Utf8,     # Zip range bounds compare as strings
    "origin_zip_to": pl.Utf8,
    "destination_country": pl.Utf8,
    "destination_state": pl.Utf8,
    "destination_city": pl.Utf8,
    "destination_zip_from": pl.Utf8,
    "destination_zip_to": pl.Utf8,

    "flat_rate": pl.Float64,        # Non-zero = flat lane
    "rate_per_mile": pl.Float64,
    "minimum_charge": pl.Float64,
    "fuel_included": pl.Boolean,
    "fuel_table": pl.Utf8,          # Blank = use *DEF
    "miles_from": pl.Int64,         # Both 0 = no mileage restriction
    "miles_to": pl.Int64,
    "note": pl.Utf8,
}

STD_LANE_COLS = list(STD_LANE_SCHEMA)

STD_LANE_STRING_COLS = [c for c, t in STD_LANE_SCHEMA.items() if t == pl.Utf8]


# =============================================================================
# CARRIER REFERENCE
# =============================================================================

RATE_PROFILE_SCHEMA = {
    "carrier_code": pl.Utf8,
    "mileage_basis": pl.Utf8,       # "PM" = practical, anything else = household goods
    "fuel_table": pl.Utf8,          # Overrides the lane's table when set
}

CARRIER_SCHEMA = {
    "carrier_code": pl.Utf8,
    "name": pl.Utf8,
    "is_customer": pl.Boolean,
    "is_ltl": pl.Boolean,
    "status": pl.Utf8,              # "I" = inactive
    "contact_name": pl.Utf8,        # Primary DISPATCH/CS contact
    "contact_phone": pl.Utf8,
    "contact_email": pl.Utf8,
}


# =============================================================================
# FUEL
# =============================================================================

FUEL_TABLE_SCHEMA = {
    "table_name": pl.Utf8,
    "mode": pl.Utf8,
    "low_amount": pl.Float64,       # Fuel price bracket, inclusive
    "high_amount": pl.Float64,
    "per_mile": pl.Float64,         # Used when percent is 0
    "percent": pl.Float64,          # Fraction of base
}

FUEL_PRICE_SCHEMA = {
    "begin_date": pl.Date,
    "end_date": pl.Date,
    "price": pl.Float64,
}


# =============================================================================
# LTL
# =============================================================================

LTL_LANE_SCHEMA = {
    "record_number": pl.Int64,
    "carrier_code": pl.Utf8,
    "for_customer": pl.Utf8,        # Customer the discount applies to, blank = any
    "fuel_table": pl.Utf8,
    "origin_states": pl.Utf8,       # Comma-separated codes, *INTER or *INTRA
    "destination_states": pl.Utf8,
    "origin_zip_from": pl.Utf8,
    "origin_zip_to": pl.Utf8,
    "destination_zip_from": pl.Utf8,
    "destination_zip_to": pl.Utf8,
    "discount": pl.Float64,         # Percent
    "minimum_charge": pl.Float64,
    "class_from": pl.Float64,
    "class_to": pl.Float64,
    "weight_from": pl.Float64,
    "weight_to": pl.Float64,
    "conditions": pl.Utf8,
    "effective_from": pl.Date,
    "effective_to": pl.Date,
}

FAK_SCHEMA = {
    "carrier_code": pl.Utf8,
    "use_fak": pl.Boolean,
    "fak_from": pl.Float64,
    "fak_to": pl.Float64,
}


# =============================================================================
# CANDIDATE COLUMNS (added per request by lanes / project)
# =============================================================================

CANDIDATE_COLS = [
    "name",                 # Carrier/customer name
    "is_customer",
    "contact_name",
    "contact_phone",
    "contact_email",
    "mileage_basis",        # From rate profile
    "profile_fuel_table",   # From rate profile
    "miles",                # Routed miles under the carrier's basis
    "base",                 # Flat rate or max(rpm x miles, minimum)
    "fuel_charge",          # 0 when included or no bracket
    "total",                # base + fuel_charge
]


# =============================================================================
# VALIDATION
# =============================================================================

def validate_columns(df: pl.DataFrame, schema: dict, frame_name: str) -> None:
    """
    Check a reference frame carries every column of its schema.

    Raises:
        ValueError: Listing the missing columns
    """
    missing = [c for c in schema if c not in df.columns]
    if missing:
        raise ValueError(f"{frame_name} is missing columns: " + ", ".join(missing))


def conform(df: pl.DataFrame, schema: dict, frame_name: str) -> pl.DataFrame:
    """
    Validate, then select and cast a frame to its schema.

    String columns are stripped and nulls become "", so blank and missing
    fields compare the same way.
    """
    validate_columns(df, schema, frame_name)
    return df.select([
        pl.col(c).cast(t).str.strip_chars().fill_null("") if t == pl.Utf8 else pl.col(c).cast(t)
        for c, t in schema.items()
    ])

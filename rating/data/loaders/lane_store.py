"""
Load Lane Store Reference Data

Pulls precedences, lanes, carrier profiles and fuel data from the Redshift
lane store. Dates are stored as YYYYMMDD integers and converted to pl.Date.
"""

import logging
from pathlib import Path
from typing import Optional

import polars as pl

from shared.database import pull_data
from ...columns import (
    CARRIER_SCHEMA,
    FAK_SCHEMA,
    FUEL_PRICE_SCHEMA,
    FUEL_TABLE_SCHEMA,
    LTL_LANE_SCHEMA,
    PRECEDENCE_SCHEMA,
    RATE_PROFILE_SCHEMA,
    STD_LANE_SCHEMA,
    conform,
)
from ...errors import PersistenceError


logger = logging.getLogger(__name__)

SQL_DIR = Path(__file__).parent / "sql"


# =============================================================================
# HELPERS
# =============================================================================

def _pull(sql_name: str, params: Optional[list] = None, **fmt) -> pl.DataFrame:
    """Run one SQL file, re-raising driver failures as PersistenceError."""
    query = (SQL_DIR / f"{sql_name}.sql").read_text()
    if fmt:
        query = query.format(**fmt)

    try:
        df = pull_data(query, params)
    except RuntimeError as e:
        raise PersistenceError(f"Failed to load {sql_name}: {e}") from e

    logger.debug("Loaded %d %s row(s)", df.height, sql_name)
    return df


def parse_yyyymmdd(df: pl.DataFrame, cols: list[str]) -> pl.DataFrame:
    """Convert YYYYMMDD integer (or string) columns to pl.Date."""
    return df.with_columns([
        pl.col(c).cast(pl.Utf8).str.strip_chars().str.strptime(pl.Date, "%Y%m%d", strict=False)
        for c in cols
        if df.schema.get(c) != pl.Date
    ])


# =============================================================================
# LOADERS
# =============================================================================

def load_precedences() -> pl.DataFrame:
    """Precedence categories and ranks."""
    return conform(_pull("precedences"), PRECEDENCE_SCHEMA, "precedences")


def load_std_lanes(
    mode: Optional[str] = None,
    conditions: Optional[list[str]] = None,
    params: Optional[list] = None,
    limit: Optional[int] = None
) -> pl.DataFrame:
    """
    STD lanes.

    Args:
        mode: Only lanes of this transport mode, optional
        conditions: Extra SQL conditions (ANDed) with %s placeholders, optional
        params: Values for the placeholders in conditions, in order
        limit: Max rows to return, optional

    Returns:
        DataFrame conforming to STD_LANE_SCHEMA
    """
    conditions = list(conditions or [])
    params = list(params or [])
    if mode:
        conditions.append("mode = %s")
        params.append(mode)

    where_clause = ""
    if conditions:
        where_clause = "where " + "\n  and ".join(conditions)

    limit_clause = ""
    if limit:
        limit_clause = f"limit {int(limit)}"

    df = _pull("std_lanes", params or None, where_clause=where_clause, limit_clause=limit_clause)
    df = parse_yyyymmdd(df, ["effective_from", "effective_to"])
    return conform(df, STD_LANE_SCHEMA, "std_lanes")


def load_rate_profiles() -> pl.DataFrame:
    """Active rate profiles (mileage basis and fuel table per carrier)."""
    return conform(_pull("rate_profiles"), RATE_PROFILE_SCHEMA, "rate_profiles")


def load_carriers() -> pl.DataFrame:
    """Carrier directory: name, customer/LTL flags, status, dispatch contact."""
    return conform(_pull("carriers"), CARRIER_SCHEMA, "carriers")


def load_fuel_tables() -> pl.DataFrame:
    """Fuel surcharge brackets per table and mode."""
    return conform(_pull("fuel_tables"), FUEL_TABLE_SCHEMA, "fuel_tables")


def load_fuel_prices() -> pl.DataFrame:
    """Fuel price history, most recent first."""
    df = parse_yyyymmdd(_pull("fuel_prices"), ["begin_date", "end_date"])
    return conform(df, FUEL_PRICE_SCHEMA, "fuel_prices")


def load_ltl_lanes() -> pl.DataFrame:
    """LTL discount lanes."""
    df = parse_yyyymmdd(_pull("ltl_lanes"), ["effective_from", "effective_to"])
    return conform(df, LTL_LANE_SCHEMA, "ltl_lanes")


def load_fak_ranges() -> pl.DataFrame:
    """FAK class ranges per carrier/customer."""
    return conform(_pull("fak_ranges"), FAK_SCHEMA, "fak_ranges")


def load_postal_states() -> dict[str, str]:
    """
    3-digit zip prefix -> state code.

    Used by the LTL lane builder to resolve the state of a zip range.
    """
    df = _pull("postal_states")
    mapping: dict[str, str] = {}
    for state_code, zip_code in df.select("state_code", "zip_code").iter_rows():
        mapping.setdefault(str(zip_code)[:3], state_code)
    return mapping

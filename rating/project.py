"""
Rate/Fuel Projector

Adds base, fuel and total charges to candidate lanes.

REQUIRED INPUT COLUMNS:
    - Lane columns (see columns.STD_LANE_SCHEMA)
    - mileage_basis, profile_fuel_table (from rate profile join)
    - miles (routed miles under the carrier's basis)

OUTPUT COLUMNS ADDED:
    - fuel_table_name, base, fuel_charge, total

USAGE:
    candidates = query_lanes(reference, composition, miles)
    candidates = project_candidates(candidates, reference, route.ship_date)
"""

import logging
from datetime import date

import polars as pl

from .data import ReferenceData
from .data.reference import DEFAULT_FUEL_TABLE


logger = logging.getLogger(__name__)


# =============================================================================
# FUEL PRICE & BRACKETS
# =============================================================================

def fuel_price_for(fuel_prices: pl.DataFrame, ship_date: date) -> float | None:
    """
    Fuel price in effect on a ship date.

    The most recent price row (by end date) applies to any date on or after
    its begin date, including dates past its end. Earlier dates use the row
    whose begin/end range covers the date.

    Returns:
        Price, or None if no row applies
    """
    if fuel_prices.is_empty():
        return None

    latest = fuel_prices.sort("end_date", descending=True, nulls_last=True).row(0, named=True)
    if latest["begin_date"] is not None and latest["begin_date"] <= ship_date:
        return latest["price"]

    covering = fuel_prices.filter(
        (pl.col("begin_date") <= ship_date) & (pl.col("end_date") >= ship_date)
    )
    if covering.is_empty():
        return None
    return covering["price"][0]


def fuel_brackets(fuel_tables: pl.DataFrame, price: float | None) -> pl.DataFrame:
    """
    The bracket covering a fuel price, one row per (table_name, mode).

    Where brackets overlap, the one with the lowest low_amount wins.
    """
    if price is None:
        return fuel_tables.clear()

    return (
        fuel_tables
        .filter((pl.col("low_amount") <= price) & (pl.col("high_amount") >= price))
        .sort("low_amount", maintain_order=True)
        .unique(subset=["table_name", "mode"], keep="first", maintain_order=True)
    )


def fuel_table_name() -> pl.Expr:
    """Rate profile table if set, else the lane's table, else *DEF."""
    return (
        pl.when(pl.col("profile_fuel_table") != "")
        .then(pl.col("profile_fuel_table"))
        .when(pl.col("fuel_table") != "")
        .then(pl.col("fuel_table"))
        .otherwise(pl.lit(DEFAULT_FUEL_TABLE))
        .alias("fuel_table_name")
    )


# =============================================================================
# PROJECTION
# =============================================================================

def project_candidates(df: pl.DataFrame, reference: ReferenceData, ship_date: date) -> pl.DataFrame:
    """
    Project charges onto candidate lanes.

    Args:
        df: Candidate lanes from query_lanes()
        reference: Reference snapshot (fuel tables and prices)
        ship_date: Request ship date (selects the fuel price)

    Returns:
        DataFrame with base, fuel_charge and total columns
    """
    price = fuel_price_for(reference.fuel_prices, ship_date)
    logger.debug("Fuel price for %s: %s", ship_date, price)

    df = _apply_base(df)
    df = _apply_fuel(df, fuel_brackets(reference.fuel_tables, price))
    df = _calculate_total(df)
    return df


def _apply_base(df: pl.DataFrame) -> pl.DataFrame:
    """Flat rate when the lane has one, else max(rate x miles, minimum charge)."""
    mileage_rate = pl.max_horizontal(
        pl.col("rate_per_mile") * pl.col("miles"),
        pl.col("minimum_charge"),
    )
    return df.with_columns(
        pl.when(pl.col("flat_rate") != 0)
        .then(pl.col("flat_rate"))
        .otherwise(mileage_rate)
        .cast(pl.Float64)
        .alias("base")
    )


def _apply_fuel(df: pl.DataFrame, brackets: pl.DataFrame) -> pl.DataFrame:
    """
    Fuel charge from the bracket for the lane's fuel table and mode.

    A bracket with percent 0 charges per mile; otherwise it charges a share
    of base. Fuel-included lanes and lanes without a bracket pay 0.
    """
    bracket_cols = brackets.select(
        pl.col("table_name").alias("fuel_table_name"),
        "mode",
        pl.col("per_mile").alias("_fuel_per_mile"),
        pl.col("percent").alias("_fuel_percent"),
    )

    df = (
        df.with_row_index("_row_id")
        .with_columns(fuel_table_name())
        .join(bracket_cols, on=["fuel_table_name", "mode"], how="left")
        .sort("_row_id")
        .drop("_row_id")
    )

    amount = (
        pl.when(pl.col("_fuel_percent") == 0)
        .then(pl.col("miles") * pl.col("_fuel_per_mile"))
        .otherwise(pl.col("base") * pl.col("_fuel_percent"))
    )

    return df.with_columns(
        pl.when(pl.col("fuel_included").fill_null(False) | pl.col("_fuel_percent").is_null())
        .then(pl.lit(0.0))
        .otherwise(amount)
        .alias("fuel_charge")
    ).drop("_fuel_per_mile", "_fuel_percent")


def _calculate_total(df: pl.DataFrame) -> pl.DataFrame:
    """Total = base + fuel."""
    return df.with_columns(
        (pl.col("base") + pl.col("fuel_charge")).alias("total")
    )

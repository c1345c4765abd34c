"""
Deduplicator & Ranker

Collapses projected candidates to one row per carrier, layers stop-off cost
onto the survivors, rounds money and sorts by base.

Processing order:
    1. dedupe          - first (most specific) row per carrier wins
    2. stop-offs       - amortized stop-off cost onto base, total and fuel
    3. flag            - raw base or miles missing or zero
    4. round           - base, fuel_charge, total at the configured accuracy
    5. sort            - ascending by rounded base
"""

import polars as pl

from shared.rounding import round_half_up_expr
from .data.reference import ACCURACY


def rank_candidates(df: pl.DataFrame, stop_offs: int = 0, accuracy: int = ACCURACY) -> pl.DataFrame:
    """
    Rank projected candidates.

    Args:
        df: Candidates from project_candidates(), sorted by precedence
        stop_offs: Stop-off count for the request
        accuracy: Decimal places for money rounding

    Returns:
        One row per carrier, sorted ascending by rounded base, with an
        "error" column flagging rows whose base or miles is unusable
    """
    df = dedupe_carriers(df)
    df = _apply_stop_offs(df, stop_offs)
    df = _flag_errors(df)
    df = _round_money(df, accuracy)
    return _sort_by_base(df)


def dedupe_carriers(df: pl.DataFrame) -> pl.DataFrame:
    """
    Keep the first row per carrier in precedence order.

    The sort is stable, so equal-precedence rows keep their incoming order.
    """
    return (
        df.sort("precedence", maintain_order=True)
        .unique(subset="carrier_code", keep="first", maintain_order=True)
    )


def _apply_stop_offs(df: pl.DataFrame, stop_offs: int) -> pl.DataFrame:
    """
    Layer stop-off cost onto each row.

    Lanes without a rate per mile use an implied rate of
    base / (miles - stop_offs), floored at 0. Each stop is billed as a drop
    and a pickup, so total rises by twice the stop-off cost; base rises by it
    once. Fuel rises by one mile's worth, per request rather than per stop.
    """
    if stop_offs <= 0:
        return df

    chargeable_miles = pl.col("miles") - stop_offs
    implied_rate = (
        pl.when(chargeable_miles != 0)
        .then(pl.col("base") / chargeable_miles)
        .otherwise(pl.lit(0.0))
        .clip(lower_bound=0.0)
    )
    rate = (
        pl.when(pl.col("rate_per_mile") == 0)
        .then(implied_rate)
        .otherwise(pl.col("rate_per_mile"))
    )
    fuel_increase = (
        pl.when(pl.col("miles") != 0)
        .then(pl.col("fuel_charge") / pl.col("miles"))
        .otherwise(pl.lit(0.0))
    )

    df = df.with_columns((rate * stop_offs).alias("stop_off_cost"))
    return df.with_columns(
        (pl.col("base") + pl.col("stop_off_cost")).alias("base"),
        (pl.col("total") + pl.col("stop_off_cost") * 2).alias("total"),
        (pl.col("fuel_charge") + fuel_increase).alias("fuel_charge"),
    )


def _round_money(df: pl.DataFrame, accuracy: int) -> pl.DataFrame:
    """Round half-up; non-numeric values become 0."""
    return df.with_columns([
        round_half_up_expr(c, accuracy).fill_null(0.0).alias(c)
        for c in ("base", "fuel_charge", "total")
    ])


def _flag_errors(df: pl.DataFrame) -> pl.DataFrame:
    """Raw (unrounded) base or miles missing or zero."""
    base = pl.col("base").fill_nan(None)
    miles = pl.col("miles").fill_nan(None)
    return df.with_columns(
        (base.is_null() | (base == 0) | miles.is_null() | (miles == 0)).alias("error")
    )


def _sort_by_base(df: pl.DataFrame) -> pl.DataFrame:
    """Ascending by rounded base; error-flagged rows keep their place."""
    return df.sort("base", maintain_order=True)

"""
Lane Repository

Evaluates a composed lane filter against the reference snapshot and returns
candidate rows ordered by ascending precedence rank.
"""

import logging

import polars as pl

from .compose import Composition
from .data import ReferenceData
from .data.reference import PRACTICAL_MILES_FLAG
from .models import RoutedMiles


logger = logging.getLogger(__name__)


def miles_for_basis(miles: RoutedMiles) -> pl.Expr:
    """Practical miles for "PM" rate profiles, household goods miles otherwise."""
    return (
        pl.when(pl.col("mileage_basis") == PRACTICAL_MILES_FLAG)
        .then(pl.lit(float(miles.practical)))
        .otherwise(pl.lit(float(miles.household_goods)))
        .alias("miles")
    )


def lane_frame(reference: ReferenceData) -> pl.LazyFrame:
    """
    STD lanes joined with rate profile and carrier directory.

    Lanes whose carrier has no directory entry drop out here; a carrier
    without a rate profile keeps a blank mileage basis and fuel table.
    """
    profiles = (
        reference.rate_profiles.lazy()
        .unique(subset="carrier_code", keep="first", maintain_order=True)
        .rename({"fuel_table": "profile_fuel_table"})
    )
    carriers = (
        reference.carriers.lazy()
        .unique(subset="carrier_code", keep="first", maintain_order=True)
    )

    return (
        reference.lanes.lazy()
        .with_row_index("_row_id")
        .join(profiles, on="carrier_code", how="left")
        .join(carriers, on="carrier_code", how="inner")
        .with_columns(
            pl.col("mileage_basis").fill_null(""),
            pl.col("profile_fuel_table").fill_null(""),
        )
    )


def query_lanes(reference: ReferenceData, composition: Composition, miles: RoutedMiles) -> pl.DataFrame:
    """
    Candidate lanes for one request.

    Args:
        reference: Reference snapshot
        composition: Composed lane filter (must carry an expression)
        miles: Routed miles under both bases

    Returns:
        Matching lanes with a "miles" column, sorted by precedence
        (stable, so ties keep lane store order)
    """
    composition.raise_for_error()

    candidates = (
        lane_frame(reference)
        .with_columns(miles_for_basis(miles))
        .filter(composition.expr)
        .sort(["precedence", "_row_id"])
        .drop("_row_id")
        .collect()
    )
    logger.debug("%d candidate lane(s) for %s", candidates.height, composition.code)
    return candidates

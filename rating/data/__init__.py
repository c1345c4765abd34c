"""
Rating Data

Reference snapshot for the quoting pipeline.

Structure:
    - reference/: Static configuration (settings, fuel fallbacks, table names)
    - loaders/: Lane store loaders (Redshift)

The snapshot is built once at startup and passed into every request.
Refreshing it means building a new one (process restart in production).
"""

import logging
from pathlib import Path
from typing import NamedTuple

import polars as pl

from ..columns import (
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
from ..precedence import PrecedenceTable
from .loaders import (
    load_carriers,
    load_fak_ranges,
    load_fuel_prices,
    load_fuel_tables,
    load_ltl_lanes,
    load_precedences,
    load_rate_profiles,
    load_std_lanes,
)


logger = logging.getLogger(__name__)


class ReferenceData(NamedTuple):
    """Immutable reference snapshot."""
    precedences: PrecedenceTable
    lanes: pl.DataFrame
    rate_profiles: pl.DataFrame
    carriers: pl.DataFrame
    fuel_tables: pl.DataFrame
    fuel_prices: pl.DataFrame
    ltl_lanes: pl.DataFrame
    fak_ranges: pl.DataFrame


def load_reference(mode: str | None = None) -> ReferenceData:
    """
    Build the reference snapshot from the lane store.

    Args:
        mode: Only load STD lanes of this mode, optional

    Raises:
        PersistenceError: If the lane store cannot be read
    """
    reference = ReferenceData(
        precedences=PrecedenceTable.from_frame(load_precedences()),
        lanes=load_std_lanes(mode),
        rate_profiles=load_rate_profiles(),
        carriers=load_carriers(),
        fuel_tables=load_fuel_tables(),
        fuel_prices=load_fuel_prices(),
        ltl_lanes=load_ltl_lanes(),
        fak_ranges=load_fak_ranges(),
    )
    logger.info(
        "Loaded reference: %d precedence(s), %d STD lane(s), %d LTL lane(s), %d carrier(s)",
        len(reference.precedences), reference.lanes.height,
        reference.ltl_lanes.height, reference.carriers.height,
    )
    return reference


# =============================================================================
# CSV SNAPSHOTS
# =============================================================================

CSV_FILES = {
    "precedences": PRECEDENCE_SCHEMA,
    "lanes": STD_LANE_SCHEMA,
    "rate_profiles": RATE_PROFILE_SCHEMA,
    "carriers": CARRIER_SCHEMA,
    "fuel_tables": FUEL_TABLE_SCHEMA,
    "fuel_prices": FUEL_PRICE_SCHEMA,
    "ltl_lanes": LTL_LANE_SCHEMA,
    "fak_ranges": FAK_SCHEMA,
}

# LTL files may be absent from STD-only snapshots
OPTIONAL_CSV_FILES = {"ltl_lanes", "fak_ranges"}


def _read_csv(path: Path, schema: dict, frame_name: str) -> pl.DataFrame:
    """Read one snapshot file. Dates are ISO (YYYY-MM-DD)."""
    overrides = {c: pl.Utf8 for c, t in schema.items() if t in (pl.Utf8, pl.Date)}
    df = pl.read_csv(path, schema_overrides=overrides)

    dates = [c for c, t in schema.items() if t == pl.Date and c in df.columns]
    df = df.with_columns([pl.col(c).str.to_date("%Y-%m-%d") for c in dates])
    return conform(df, schema, frame_name)


def load_reference_csv(directory: str | Path) -> ReferenceData:
    """
    Build the reference snapshot from CSV files.

    Expects one file per frame named after the ReferenceData field
    (lanes.csv, carriers.csv, ...). ltl_lanes.csv and fak_ranges.csv are
    optional.

    Raises:
        FileNotFoundError: If a required file is missing
        ValueError: If a file is missing schema columns
    """
    directory = Path(directory)
    frames = {}

    for name, schema in CSV_FILES.items():
        path = directory / f"{name}.csv"
        if not path.exists():
            if name in OPTIONAL_CSV_FILES:
                frames[name] = pl.DataFrame(schema=schema)
                continue
            raise FileNotFoundError(f"Reference file not found: {path}")
        frames[name] = _read_csv(path, schema, name)

    precedences = PrecedenceTable.from_frame(frames.pop("precedences"))
    return ReferenceData(precedences=precedences, **frames)


__all__ = [
    "ReferenceData",
    "load_reference",
    "load_reference_csv",
]

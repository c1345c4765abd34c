"""
Lane Builder

Expands lane builder entries into lane records and writes them to the lane
store. Every record is inserted by its own statement on its own connection,
so one bad record never aborts the rest of the batch: the result is a
per-record list of None (inserted) or the exception.

STD entries:
    Builder settings (precedence type, mode, carrier, dates, countries) are
    combined with each entry's origin/destination/rate data. For the mileage
    precedence type every origin mileage point is crossed with every
    destination mileage point.

LTL entries:
    State lists and zip ranges are expanded into origin x destination
    combinations. Zip range states come from a 3-digit prefix -> state map.
    A combination that already exists is skipped by the insert itself.
"""

import logging
from datetime import date
from itertools import product
from typing import NamedTuple, Optional, Sequence

from shared.database import execute_inserts
from ..data.loaders import load_postal_states
from ..data.reference import MAX_INSERT_WORKERS, MILEAGE_LANE_TYPE
from ..data.reference.tables import LTL_LANES, STD_LANES
from ..errors import ValidationError


logger = logging.getLogger(__name__)


# =============================================================================
# ENTRY TYPES
# =============================================================================

class LanePoint(NamedTuple):
    """One end of an STD lane. Single zips have zip_from == zip_to."""
    state: str = ""
    city: str = ""
    zip_from: str = ""
    zip_to: str = ""


class StdBuilderSettings(NamedTuple):
    """Settings shared by every lane in one STD builder batch."""
    precedence_type: int
    mode: str
    carrier_code: str
    effective_from: date
    effective_to: date
    origin_country: str = "USA"
    destination_country: str = "USA"


class StdEntry(NamedTuple):
    origin: LanePoint
    destination: LanePoint
    flat_rate: float = 0.0
    rate_per_mile: float = 0.0
    minimum_charge: float = 0.0
    fuel_included: bool = False
    fuel_table: str = ""
    note: str = ""
    miles_from: int = 0
    miles_to: int = 0


class ZipRange(NamedTuple):
    zip_from: str
    zip_to: str
    state: str = ""


class LtlEntry(NamedTuple):
    """
    One LTL builder submission.

    from_states / to_states: list of state codes, or a single label
    (*INTER, *INTRA, or one state code).
    """
    carrier_code: str
    from_states: Sequence[str] | str
    to_states: Sequence[str] | str
    discount: float
    minimum_charge: float
    class_range: tuple[float, float]
    weight_range: tuple[float, float]
    effective_from: date
    effective_to: date
    for_customer: str = ""
    fuel_table: str = ""
    conditions: str = ""
    origin_zips: Sequence[ZipRange] = ()
    destination_zips: Sequence[ZipRange] = ()


# Full zip range for state-only LTL combinations
ALL_ZIPS = ("0", "99999")


# =============================================================================
# HELPERS
# =============================================================================

def yyyymmdd(value: date) -> int:
    """Date as the lane store's YYYYMMDD integer."""
    return int(value.strftime("%Y%m%d"))


def overlay(point: LanePoint, over: LanePoint) -> LanePoint:
    """Fields set on over replace those on point."""
    return LanePoint(*(o or p for p, o in zip(point, over)))


# =============================================================================
# STD
# =============================================================================

def expand_std_entries(
    settings: StdBuilderSettings,
    entries: Sequence[StdEntry],
    mileage_points: Sequence[LanePoint] = (),
) -> list[dict]:
    """
    Lane records for an STD builder batch.

    Raises:
        ValidationError: If a mileage batch has no mileage points
    """
    if settings.precedence_type == MILEAGE_LANE_TYPE and not mileage_points:
        raise ValidationError("Mileage lanes require at least one mileage point")

    records = []
    for entry in entries:
        if settings.precedence_type == MILEAGE_LANE_TYPE:
            pairs = [
                (overlay(entry.origin, o), overlay(entry.destination, d))
                for o, d in product(mileage_points, repeat=2)
            ]
        else:
            pairs = [(entry.origin, entry.destination)]

        for origin, destination in pairs:
            records.append({
                "precedence": settings.precedence_type,
                "mode": settings.mode,
                "carrier_code": settings.carrier_code,
                "effective_from": yyyymmdd(settings.effective_from),
                "effective_to": yyyymmdd(settings.effective_to),
                "origin_country": settings.origin_country,
                "origin_state": origin.state,
                "origin_city": origin.city,
                "origin_zip_from": origin.zip_from,
                "origin_zip_to": origin.zip_to,
                "destination_country": settings.destination_country,
                "destination_state": destination.state,
                "destination_city": destination.city,
                "destination_zip_from": destination.zip_from,
                "destination_zip_to": destination.zip_to,
                "flat_rate": entry.flat_rate,
                "rate_per_mile": entry.rate_per_mile,
                "minimum_charge": entry.minimum_charge,
                "fuel_included": "Y" if entry.fuel_included else "N",
                "fuel_table": entry.fuel_table,
                "note": entry.note,
                "miles_from": entry.miles_from,
                "miles_to": entry.miles_to,
            })
    return records


def std_insert_statement(record: dict) -> tuple[str, list]:
    """Parameterized INSERT for one STD lane record."""
    columns = list(record)
    placeholders = ", ".join(["%s"] * len(columns))
    query = f"INSERT INTO {STD_LANES} ({', '.join(columns)}) VALUES ({placeholders})"
    return query, [record[c] for c in columns]


# =============================================================================
# LTL
# =============================================================================

def _side_ranges(
    states: Sequence[str] | str,
    zips: Sequence[ZipRange],
    postal_states: dict[str, str],
) -> list[ZipRange]:
    """Zip ranges with resolved states, or one full-range item per state."""
    if zips:
        return [
            ZipRange(z.zip_from, z.zip_to, z.state or postal_states.get(str(z.zip_from)[:3], ""))
            for z in zips
        ]
    if isinstance(states, str):
        states = [states]
    return [ZipRange(ALL_ZIPS[0], ALL_ZIPS[1], s) for s in states]


def expand_ltl_entry(entry: LtlEntry, postal_states: Optional[dict[str, str]] = None) -> list[dict]:
    """
    LTL lane records for one builder submission.

    Raises:
        ValidationError: If either state list is missing
    """
    if not entry.from_states:
        raise ValidationError("From states must be provided (*INTER, *INTRA, or comma separated codes)")
    if not entry.to_states:
        raise ValidationError("To states must be provided (*INTER, *INTRA, or comma separated codes)")

    postal_states = postal_states or {}
    origins = _side_ranges(entry.from_states, entry.origin_zips, postal_states)
    destinations = _side_ranges(entry.to_states, entry.destination_zips, postal_states)

    return [
        {
            "carrier_code": entry.carrier_code,
            "for_customer": entry.for_customer,
            "fuel_table": entry.fuel_table,
            "origin_states": origin.state,
            "destination_states": destination.state,
            "origin_zip_from": origin.zip_from,
            "origin_zip_to": origin.zip_to,
            "destination_zip_from": destination.zip_from,
            "destination_zip_to": destination.zip_to,
            "discount": entry.discount,
            "minimum_charge": entry.minimum_charge,
            "class_from": entry.class_range[0],
            "class_to": entry.class_range[1],
            "weight_from": entry.weight_range[0],
            "weight_to": entry.weight_range[1],
            "conditions": entry.conditions,
            "effective_from": yyyymmdd(entry.effective_from),
            "effective_to": yyyymmdd(entry.effective_to),
        }
        for origin, destination in product(origins, destinations)
    ]


# Columns that identify an LTL lane for the duplicate check
LTL_IDENTITY_COLS = [
    "carrier_code", "for_customer", "fuel_table",
    "origin_states", "destination_states",
    "origin_zip_from", "origin_zip_to", "destination_zip_from", "destination_zip_to",
    "class_from", "class_to", "weight_from", "weight_to",
    "effective_from", "effective_to",
]


def ltl_insert_statement(record: dict) -> tuple[str, list]:
    """Parameterized INSERT for one LTL lane record, skipped if an identical lane exists."""
    columns = list(record)
    placeholders = ", ".join(["%s"] * len(columns))
    identity = " AND ".join(f"{c} = %s" for c in LTL_IDENTITY_COLS)
    query = (
        f"INSERT INTO {LTL_LANES} ({', '.join(columns)}) "
        f"SELECT {placeholders} "
        f"WHERE NOT EXISTS (SELECT 1 FROM {LTL_LANES} WHERE {identity})"
    )
    params = [record[c] for c in columns] + [record[c] for c in LTL_IDENTITY_COLS]
    return query, params


# =============================================================================
# INSERTS
# =============================================================================

def insert_lanes(
    statements: list[tuple[str, list]],
    max_workers: int = MAX_INSERT_WORKERS,
    verbose: bool = True
) -> list[Optional[Exception]]:
    """
    Insert lane records concurrently, one connection per worker.

    Returns:
        One entry per statement, in input order - None on success,
        the exception on failure
    """
    results = execute_inserts(statements, max_workers=max_workers, verbose=verbose)
    failed = sum(1 for r in results if r is not None)
    if failed:
        logger.warning("%d of %d lane insert(s) failed", failed, len(results))
    return results


def build_std_lanes(
    settings: StdBuilderSettings,
    entries: Sequence[StdEntry],
    mileage_points: Sequence[LanePoint] = (),
    max_workers: int = MAX_INSERT_WORKERS,
    verbose: bool = True
) -> list[Optional[Exception]]:
    """Expand and insert an STD builder batch."""
    records = expand_std_entries(settings, entries, mileage_points)
    return insert_lanes([std_insert_statement(r) for r in records], max_workers, verbose)


def build_ltl_lanes(
    entry: LtlEntry,
    postal_states: Optional[dict[str, str]] = None,
    max_workers: int = MAX_INSERT_WORKERS,
    verbose: bool = True
) -> list[Optional[Exception]]:
    """
    Expand and insert one LTL builder submission.

    The zip prefix -> state map is loaded from the lane store when the
    submission has zip ranges and none is given.
    """
    if postal_states is None and (entry.origin_zips or entry.destination_zips):
        postal_states = load_postal_states()
    records = expand_ltl_entry(entry, postal_states)
    return insert_lanes([ltl_insert_statement(r) for r in records], max_workers, verbose)

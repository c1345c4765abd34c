"""
Lane Maintenance

Search, update and delete STD lane records, addressed by record number
(the lane store's physical record locator).
"""

import logging
from datetime import date
from typing import Any, NamedTuple, Optional

import polars as pl

from shared.database import execute_query
from ..columns import STD_LANE_COLS
from ..data.loaders import load_std_lanes
from ..data.reference import SEARCH_LIMIT
from ..data.reference.tables import STD_LANES
from ..errors import PersistenceError, ValidationError
from .build_lanes import yyyymmdd


logger = logging.getLogger(__name__)


# Columns a lane update may set
EDITABLE_COLS = [c for c in STD_LANE_COLS if c != "record_number"]


class SearchCriteria(NamedTuple):
    """Lane search filters. Empty / None fields are ignored."""
    carrier_code: str = ""
    mode: str = ""
    precedence: Optional[int] = None
    origin_state: str = ""
    origin_city: str = ""
    origin_zip: str = ""
    destination_state: str = ""
    destination_city: str = ""
    destination_zip: str = ""
    effective_on: Optional[date] = None


def _search_conditions(criteria: SearchCriteria) -> tuple[list[str], list]:
    conditions = []
    params: list = []

    for col in ("carrier_code", "mode", "origin_state", "origin_city",
                "destination_state", "destination_city"):
        value = getattr(criteria, col)
        if value:
            conditions.append(f"trim({col}) = %s")
            params.append(value)

    if criteria.precedence is not None:
        conditions.append("precedence = %s")
        params.append(criteria.precedence)

    for side in ("origin", "destination"):
        zip_code = getattr(criteria, f"{side}_zip")
        if zip_code:
            conditions.append(f"trim({side}_zip_from) <= %s and trim({side}_zip_to) >= %s")
            params.extend([zip_code, zip_code])

    if criteria.effective_on is not None:
        conditions.append("effective_from <= %s and effective_to >= %s")
        params.extend([yyyymmdd(criteria.effective_on)] * 2)

    return conditions, params


def search_lanes(criteria: SearchCriteria, limit: int = SEARCH_LIMIT) -> pl.DataFrame:
    """
    STD lanes matching the search criteria.

    Raises:
        PersistenceError: If the lane store cannot be read
    """
    conditions, params = _search_conditions(criteria)
    df = load_std_lanes(conditions=conditions, params=params, limit=limit)
    logger.debug("Lane search returned %d row(s)", df.height)
    return df


def _store_value(col: str, value: Any) -> Any:
    """Lane field value as stored: dates as YYYYMMDD, fuel_included as Y/N."""
    if isinstance(value, date):
        return yyyymmdd(value)
    if col == "fuel_included":
        return "Y" if value else "N"
    return value


def update_lane(record_number: int, lane: dict) -> None:
    """
    Overwrite fields of one STD lane.

    Args:
        record_number: Record locator of the lane
        lane: Column -> new value, any of EDITABLE_COLS

    Raises:
        ValidationError: If lane is empty or names a column that cannot be set
        PersistenceError: If the update fails
    """
    unknown = [c for c in lane if c not in EDITABLE_COLS]
    if unknown:
        raise ValidationError(f"Cannot update lane column(s): {unknown}")
    if not lane:
        raise ValidationError("No lane fields to update")

    assignments = ", ".join(f"{c} = %s" for c in lane)
    params = [_store_value(c, v) for c, v in lane.items()] + [record_number]

    try:
        execute_query(f"UPDATE {STD_LANES} SET {assignments} WHERE record_number = %s", params)
    except RuntimeError as e:
        raise PersistenceError(f"Failed to update lane {record_number}: {e}") from e

    logger.info("Updated lane %s (%s)", record_number, ", ".join(lane))


def delete_lane(record_number: int) -> None:
    """
    Delete one STD lane.

    Raises:
        PersistenceError: If the delete fails
    """
    try:
        execute_query(f"DELETE FROM {STD_LANES} WHERE record_number = %s", [record_number])
    except RuntimeError as e:
        raise PersistenceError(f"Failed to delete lane {record_number}: {e}") from e

    logger.info("Deleted lane %s", record_number)

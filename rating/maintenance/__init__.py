"""
Lane Maintenance

Lane builder (bulk insert with per-record isolation) and search / update /
delete of individual lanes by record number.
"""

from .build_lanes import (
    LanePoint,
    StdBuilderSettings,
    StdEntry,
    ZipRange,
    LtlEntry,
    expand_std_entries,
    expand_ltl_entry,
    std_insert_statement,
    ltl_insert_statement,
    insert_lanes,
    build_std_lanes,
    build_ltl_lanes,
)
from .lanes import SearchCriteria, search_lanes, update_lane, delete_lane

__all__ = [
    "LanePoint",
    "StdBuilderSettings",
    "StdEntry",
    "ZipRange",
    "LtlEntry",
    "expand_std_entries",
    "expand_ltl_entry",
    "std_insert_statement",
    "ltl_insert_statement",
    "insert_lanes",
    "build_std_lanes",
    "build_ltl_lanes",
    "SearchCriteria",
    "search_lanes",
    "update_lane",
    "delete_lane",
]

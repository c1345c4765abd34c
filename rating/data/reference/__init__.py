"""
Rating Reference Configuration

Static configuration: settings, fuel fallbacks, lane store table names.
"""

from .settings import (
    ACCURACY,
    POINT_TO_POINT_CODES,
    MILEAGE_LANE_TYPE,
    ROUTING_ERROR_MESSAGE,
    MILES_WARNING_MESSAGE,
    MAX_INSERT_WORKERS,
    SEARCH_LIMIT,
)
from .fuel import (
    DEFAULT_FUEL_TABLE,
    LTL_DEFAULT_FUEL_TABLE,
    LTL_FUEL_MODE,
    PRACTICAL_MILES_FLAG,
    INACTIVE_STATUS,
)

__all__ = [
    "ACCURACY",
    "POINT_TO_POINT_CODES",
    "MILEAGE_LANE_TYPE",
    "ROUTING_ERROR_MESSAGE",
    "MILES_WARNING_MESSAGE",
    "MAX_INSERT_WORKERS",
    "SEARCH_LIMIT",
    "DEFAULT_FUEL_TABLE",
    "LTL_DEFAULT_FUEL_TABLE",
    "LTL_FUEL_MODE",
    "PRACTICAL_MILES_FLAG",
    "INACTIVE_STATUS",
]

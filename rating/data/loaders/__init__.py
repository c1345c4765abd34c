"""
Data Loaders

Reference data loaders for the Redshift lane store.
"""

from .lane_store import (
    load_precedences,
    load_std_lanes,
    load_rate_profiles,
    load_carriers,
    load_fuel_tables,
    load_fuel_prices,
    load_ltl_lanes,
    load_fak_ranges,
    load_postal_states,
    parse_yyyymmdd,
)

__all__ = [
    "load_precedences",
    "load_std_lanes",
    "load_rate_profiles",
    "load_carriers",
    "load_fuel_tables",
    "load_fuel_prices",
    "load_ltl_lanes",
    "load_fak_ranges",
    "load_postal_states",
    "parse_yyyymmdd",
]

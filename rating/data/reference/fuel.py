"""
Fuel Surcharge Configuration

Fuel tables are maintained in the lane store (one bracket per row, keyed by
table name and mode). These constants name the fallbacks.
"""

DEFAULT_FUEL_TABLE = "*DEF"         # STD lanes with no table on lane or rate profile
LTL_DEFAULT_FUEL_TABLE = "CFSC"     # LTL lanes whose table is *DEF
LTL_FUEL_MODE = "LTL"

PRACTICAL_MILES_FLAG = "PM"         # Rate profile mileage basis: practical miles
INACTIVE_STATUS = "I"               # Carrier profile status excluded from quoting

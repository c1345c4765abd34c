"""
Rating Settings

Engine-wide configuration constants.
"""

# Money rounding: decimal places (values below 1 fall back to this)
ACCURACY = 2

# Granularity codes precise enough to ask the mileage service for routed miles.
# Every other code relies on user-supplied miles.
POINT_TO_POINT_CODES = frozenset({"CSZ_CSZ", "CS_CSZ", "CSZ_CS", "CS_CS", "Z_Z"})

# Precedence type used by the lane builder for mileage-band lanes
MILEAGE_LANE_TYPE = 90

# Returned instead of a quote table when a granularity code has no atom mapping
ROUTING_ERROR_MESSAGE = (
    "Unable to determine a routing type for the supplied origin and destination. "
    "Please provide city and state, state, or zip code for both ends of the route."
)

# Returned when neither routed nor user-supplied miles are available
MILES_WARNING_MESSAGE = (
    "If you are not requesting a City, ST to City, ST route you may wish to include miles."
)

# Lane maintenance
MAX_INSERT_WORKERS = 8
SEARCH_LIMIT = 500

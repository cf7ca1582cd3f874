"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

EARTH_RADIUS_M = 6_371_000.0
DEFAULT_GEOFENCE_RADIUS_M = 100.0

DEFAULT_SESSION_TTL_HOURS = 24
SESSION_COOKIE_NAME = "ems_session"

PASSWORD_MIN_LENGTH = 6
DEFAULT_CURRENCY = "INR"

"""Internal constants shared across the library."""

APP_NAME = "gliderol"
MANUFACTURER = "Gliderol"
USER_AGENT = "gliderol/1 CFNetwork/1496.0.7 Darwin/23.5.0"

#: Seconds a door is assumed to take to travel between open and closed.
DEFAULT_SETTLE_DURATION: float = 15.0

#: Upper bound on a single vendor request (connect + read).
DEFAULT_REQUEST_TIMEOUT: float = 30.0

DEFAULT_STATE_FILE = "files/states.txt"

"""Internal constants shared across the library."""

BASE_URL = "https://api-v3.mbta.com"
USER_AGENT = "transitmap/0 (+aiohttp)"
JSONAPI_CONTENT_TYPE = "application/vnd.api+json"

DEFAULT_POLL_INTERVAL_MS = 5000
DEFAULT_REQUEST_TIMEOUT = 10.0

ROUTES_ENDPOINT = "/routes"
STOPS_ENDPOINT = "/stops"
VEHICLES_ENDPOINT = "/vehicles"

# Native map projection (spherical Web Mercator) and provider datum.
SOURCE_CRS = "EPSG:4326"
MAP_CRS = "EPSG:3857"

# Initial view over downtown Boston, already in EPSG:3857 metres.
DEFAULT_CENTER: tuple[float, float] = (-7910361.335273651, 5215196.272155075)
DEFAULT_ZOOM = 15
MIN_ZOOM = 10
MAX_ZOOM = 40

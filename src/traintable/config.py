"""Configuration for traintable.

Values are module constants; a few can be overridden from the environment.
"""

import logging
import os
from typing import Optional

logger = logging.getLogger(__name__)

# Caltrain GTFS static feed
DEFAULT_GTFS_URL = "https://data.trilliumtransit.com/gtfs/caltrain-ca-us/caltrain-ca-us.zip"

GTFS_URL_ENV = "TRAINTABLE_GTFS_URL"
HTTP_TIMEOUT_ENV = "TRAINTABLE_HTTP_TIMEOUT"

# Table names inside the feed archive
ROUTES_TABLE = "routes.txt"
STOPS_TABLE = "stops.txt"
STOP_TIMES_TABLE = "stop_times.txt"
CALENDAR_TABLE = "calendar.txt"
TRIPS_TABLE = "trips.txt"

# Agency name appended to every stop name in the feed
AGENCY_SUFFIX = " Caltrain"


def get_feed_url() -> str:
    """Return the feed URL, honouring the TRAINTABLE_GTFS_URL override."""
    return os.environ.get(GTFS_URL_ENV) or DEFAULT_GTFS_URL


def get_http_timeout() -> Optional[float]:
    """
    Return the HTTP timeout in seconds for feed downloads.

    No timeout is applied unless TRAINTABLE_HTTP_TIMEOUT is set to a positive
    number.
    """
    raw = os.environ.get(HTTP_TIMEOUT_ENV)
    if not raw:
        return None
    try:
        timeout = float(raw)
    except ValueError:
        logger.warning(f"Ignoring invalid {HTTP_TIMEOUT_ENV}={raw!r}")
        return None
    return timeout if timeout > 0 else None

# starbot/horizons.py
"""JPL Horizons observer-table queries for planets and minor bodies."""

import logging

import requests

from starbot.models import FeedUnavailableError
from starbot.timeframe import to_julian_date

logger = logging.getLogger(__name__)

HORIZONS_API = "https://ssd.jpl.nasa.gov/api/horizons.api"


def build_horizons_params(body_id, observer):
    """Query parameters for a one-minute observer table at the scan instant."""
    jd = to_julian_date(observer.when)
    return {
        "format": "json",
        "COMMAND": f"'{body_id}'",
        "OBJ_DATA": "NO",
        "MAKE_EPHEM": "YES",
        "EPHEM_TYPE": "OBSERVER",
        "CENTER": "coord@399",
        "COORD_TYPE": "GEODETIC",
        # Horizons wants east longitude, latitude, altitude in km
        "SITE_COORD": f"'{observer.longitude},{observer.latitude},{observer.altitude_m / 1000}'",
        "START_TIME": f"JD{jd:.6f}",
        "STOP_TIME": f"JD{jd + 0.001:.6f}",
        "STEP_SIZE": "1m",
        "QUANTITIES": "'1,4'",  # astrometric RA/Dec, apparent Az/El
        "REF_SYSTEM": "ICRF",
        "CAL_FORMAT": "CAL",
        "TIME_DIGITS": "MINUTES",
        "ANG_FORMAT": "DEG",
        "APPARENT": "AIRLESS",
        "RANGE_UNITS": "AU",
        "SUPPRESS_RANGE_RATE": "YES",
        "SKIP_DAYLT": "NO",
        "EXTRA_PREC": "NO",
        "CSV_FORMAT": "YES",
    }


def fetch_ephemeris_text(body_id, observer, base_url=HORIZONS_API, timeout=8):
    """Return the raw ephemeris text (the ``result`` field) for one body.

    Raises FeedUnavailableError on network errors, non-2xx responses,
    malformed JSON, or an API-level error message.
    """
    params = build_horizons_params(body_id, observer)
    logger.debug(f"Querying Horizons for body {body_id}")
    try:
        resp = requests.get(base_url, params=params, timeout=timeout)
        resp.raise_for_status()
        data = resp.json()
    except (requests.exceptions.RequestException, ValueError) as e:
        raise FeedUnavailableError(f"Horizons request failed for {body_id!r}: {e}") from e

    if "error" in data:
        raise FeedUnavailableError(f"Horizons error for {body_id!r}: {data['error']}")
    result = data.get("result")
    if not result:
        raise FeedUnavailableError(f"Horizons returned no result for {body_id!r}")
    return result

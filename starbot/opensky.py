# starbot/opensky.py
"""OpenSky Network state vectors around the observer."""

import logging

import requests

from starbot.models import FeedUnavailableError

logger = logging.getLogger(__name__)

OPENSKY_API = "https://opensky-network.org/api/states/all"

# ~200 km either side of the observer
BOX_HALF_WIDTH_DEG = 2.0


def bounding_box(latitude, longitude, half_width=BOX_HALF_WIDTH_DEG):
    """lamin/lamax/lomin/lomax query params, clamped to valid ranges."""
    return {
        "lamin": max(-90.0, latitude - half_width),
        "lamax": min(90.0, latitude + half_width),
        "lomin": max(-180.0, longitude - half_width),
        "lomax": min(180.0, longitude + half_width),
    }


def fetch_state_vectors(observer, base_url=OPENSKY_API, timeout=8):
    """Return the raw ``states`` array (list of positional lists), possibly empty."""
    params = bounding_box(observer.latitude, observer.longitude)
    try:
        resp = requests.get(base_url, params=params, timeout=timeout)
        resp.raise_for_status()
        data = resp.json()
    except (requests.exceptions.RequestException, ValueError) as e:
        raise FeedUnavailableError(f"OpenSky request failed: {e}") from e

    states = (data or {}).get("states") or []
    if not states:
        logger.info("No airplanes found in the area")
    else:
        logger.debug(f"Found {len(states)} airplanes in the area")
    return states

# starbot/celestrak.py
"""CelesTrak TLE sets and look angles from skyfield's SGP4 propagator.

Orbit propagation is delegated to skyfield; this module only turns its
topocentric output into LookAngles records for the normalizer.
"""

import logging
from functools import lru_cache

import requests
from skyfield.api import EarthSatellite, load, wgs84

from starbot.models import FeedUnavailableError, LookAngles

logger = logging.getLogger(__name__)

CELESTRAK_API = "https://celestrak.org/NORAD/elements/gp.php"


@lru_cache(maxsize=1)
def _timescale():
    return load.timescale()


def parse_tle_text(tle_text):
    """Split three-line TLE text into (name, line1, line2) tuples.

    Blocks with a blank name or element lines that do not start with
    '1 ' / '2 ' are skipped.
    """
    lines = [ln.rstrip() for ln in (tle_text or "").splitlines() if ln.strip()]
    triples = []
    i = 0
    while i + 2 < len(lines):
        name, line1, line2 = lines[i].strip(), lines[i + 1].strip(), lines[i + 2].strip()
        if name and line1.startswith("1 ") and line2.startswith("2 "):
            triples.append((name, line1, line2))
            i += 3
        else:
            i += 1
    return triples


def fetch_tle_group(group, base_url=CELESTRAK_API, timeout=8):
    """Raw TLE text for a CelesTrak GP group."""
    try:
        resp = requests.get(base_url, params={"GROUP": group, "FORMAT": "TLE"}, timeout=timeout)
        resp.raise_for_status()
    except requests.exceptions.RequestException as e:
        raise FeedUnavailableError(f"CelesTrak request failed for group {group!r}: {e}") from e
    return resp.text


def look_angles_for_tles(triples, observer, group=None):
    """Propagate every TLE to the scan instant and return its look angles.

    Satellites whose elements fail to load or propagate are skipped.
    """
    ts = _timescale()
    t = ts.from_datetime(observer.when)
    site = wgs84.latlon(observer.latitude, observer.longitude, elevation_m=observer.altitude_m)

    looks = []
    for name, line1, line2 in triples:
        try:
            sat = EarthSatellite(line1, line2, name, ts)
            alt, az, distance = (sat - site).at(t).altaz()
            looks.append(LookAngles(
                name=name,
                azimuth_deg=float(az.degrees),
                elevation_deg=float(alt.degrees),
                range_km=float(distance.km),
                group=group,
            ))
        except Exception as e:
            logger.debug(f"Skipping satellite {name}: {e}")
    return looks

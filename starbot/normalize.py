# starbot/normalize.py
"""Adapters from raw feed records to CelestialTarget objects.

Every adapter is a pure function of its inputs and fails soft: a malformed
record yields None (or is skipped) instead of raising, so one bad row never
takes its siblings down with it.
"""

import logging
import math
import re
from typing import Iterable, List, Optional, Sequence

from starbot.catalog import describe_minor_body
from starbot.coords import (
    equatorial_to_horizontal,
    haversine_km,
    horizontal_to_equatorial,
    initial_bearing_deg,
    normalize_degrees,
    normalize_hours,
)
from starbot.models import (
    Airplane,
    LookAngles,
    MinorBody,
    Observer,
    Planet,
    Satellite,
    Star,
)

logger = logging.getLogger(__name__)

EPHEMERIS_START = "$$SOE"
EPHEMERIS_END = "$$EOE"

MIN_AIRPLANE_ALTITUDE_M = 1000
MAX_AIRPLANE_ALTITUDE_M = 15000

_TOKEN_SPLIT = re.compile(r"[,\s]+")


def _finite(*values) -> bool:
    return all(v is not None and math.isfinite(v) for v in values)


def _to_float(token):
    try:
        return float(token)
    except (TypeError, ValueError):
        return None


# ── Ephemeris text (planets, minor bodies) ─────────────────────────────────

def parse_ephemeris_text(text):
    """Pull RA/Dec (and Az/El when present) from Horizons observer-table text.

    Best-effort: scans the rows between ``$$SOE`` and ``$$EOE`` and uses the
    first one that parses. Tokens are split on commas and whitespace; after
    the date and time tokens, non-numeric flag columns (daylight / moon
    markers) are dropped. Token 2 is RA in degrees, token 3 is Dec, and with
    six or more tokens, tokens 4 and 5 are azimuth and elevation.

    Returns a dict with ``ra`` (hours), ``dec``, ``azimuth`` and ``altitude``
    (None when absent), or None when no row parses.
    """
    if not text or EPHEMERIS_START not in text:
        return None

    in_data = False
    for line in text.splitlines():
        if EPHEMERIS_START in line:
            in_data = True
            continue
        if EPHEMERIS_END in line:
            break
        if not in_data or not line.strip():
            continue

        raw = [t for t in _TOKEN_SPLIT.split(line.strip()) if t]
        if len(raw) < 4:
            continue
        numbers = [_to_float(t) for t in raw[2:]]
        tokens = raw[:2] + [n for n in numbers if n is not None]
        if len(tokens) < 4:
            continue

        ra_deg, dec = tokens[2], tokens[3]
        if not _finite(ra_deg, dec) or not -90 <= dec <= 90:
            continue

        azimuth = altitude = None
        if len(tokens) >= 6 and _finite(tokens[4], tokens[5]):
            azimuth, altitude = tokens[4], tokens[5]
        return {
            "ra": normalize_hours(ra_deg / 15),
            "dec": dec,
            "azimuth": normalize_degrees(azimuth) if azimuth is not None else None,
            "altitude": altitude,
        }
    return None


def _fill_horizontal(parsed, observer):
    """Alt/Az from the row, or derived from RA/Dec when the row lacks them."""
    if parsed["altitude"] is not None and parsed["azimuth"] is not None:
        return parsed["altitude"], parsed["azimuth"]
    return equatorial_to_horizontal(parsed["ra"], parsed["dec"], observer)


def planet_from_ephemeris(name, text, observer: Observer, horizons_id=None) -> Optional[Planet]:
    parsed = parse_ephemeris_text(text)
    if parsed is None:
        logger.debug(f"No usable ephemeris row for {name}")
        return None
    altitude, azimuth = _fill_horizontal(parsed, observer)
    return Planet(
        name=name,
        ra_hours=parsed["ra"],
        dec_degrees=parsed["dec"],
        altitude_deg=altitude,
        azimuth_deg=azimuth,
        horizons_id=horizons_id,
    )


def minor_body_from_ephemeris(name, text, observer: Observer, body_type="Asteroid",
                              horizons_id=None) -> Optional[MinorBody]:
    parsed = parse_ephemeris_text(text)
    if parsed is None:
        logger.debug(f"No usable ephemeris row for {name}")
        return None
    altitude, azimuth = _fill_horizontal(parsed, observer)
    return MinorBody(
        name=name,
        ra_hours=parsed["ra"],
        dec_degrees=parsed["dec"],
        altitude_deg=altitude,
        azimuth_deg=azimuth,
        body_type=body_type,
        description=describe_minor_body(body_type),
        live=True,
        horizons_id=horizons_id,
    )


def fallback_minor_bodies(entries: Iterable[dict]) -> List[MinorBody]:
    """Static reference entries: no RA/Dec, ``live=False``."""
    bodies = []
    for entry in entries:
        extras = {k: v for k, v in entry.items()
                  if k not in ("name", "type", "description", "distance_au")}
        bodies.append(MinorBody(
            name=entry["name"],
            body_type=entry.get("type", "Asteroid"),
            description=entry.get("description") or describe_minor_body(entry.get("type")),
            live=False,
            distance_au=entry.get("distance_au"),
            extras=extras,
        ))
    return bodies


# ── Satellites ─────────────────────────────────────────────────────────────

def satellite_from_look_angles(look: LookAngles, observer: Observer) -> Optional[Satellite]:
    """Satellite above the horizon with RA/Dec derived from its look angles."""
    if not _finite(look.azimuth_deg, look.elevation_deg):
        return None
    if look.elevation_deg <= 0:
        return None

    azimuth = normalize_degrees(look.azimuth_deg)
    ra, dec = horizontal_to_equatorial(look.elevation_deg, azimuth, observer)
    return Satellite(
        name=look.name,
        ra_hours=ra,
        dec_degrees=dec,
        altitude_deg=look.elevation_deg,
        azimuth_deg=azimuth,
        range_km=round(look.range_km) if _finite(look.range_km) else None,
        group=look.group,
    )


# ── Aircraft ───────────────────────────────────────────────────────────────

# OpenSky state vector positions
_ICAO24, _CALLSIGN, _COUNTRY, _LAST_CONTACT = 0, 1, 2, 4
_LON, _LAT, _BARO_ALT, _ON_GROUND, _VELOCITY, _TRUE_TRACK, _GEO_ALT = 5, 6, 7, 8, 9, 10, 13


def _field(state: Sequence, index):
    return state[index] if len(state) > index else None


def airplane_from_state_vector(state: Sequence, observer: Observer,
                               min_altitude_m=MIN_AIRPLANE_ALTITUDE_M,
                               max_altitude_m=MAX_AIRPLANE_ALTITUDE_M) -> Optional[Airplane]:
    """Aircraft above the observer's horizon, or None.

    Skips records without a position or without any altitude, aircraft
    outside the cruising band, and aircraft at or below the horizon.
    """
    if not state:
        return None

    lon = _to_float(_field(state, _LON))
    lat = _to_float(_field(state, _LAT))
    baro_alt = _to_float(_field(state, _BARO_ALT))
    geo_alt = _to_float(_field(state, _GEO_ALT))

    if lon is None or lat is None or (baro_alt is None and geo_alt is None):
        return None
    plane_alt = geo_alt if geo_alt is not None else baro_alt
    if not _finite(lat, lon, plane_alt):
        return None

    if plane_alt < min_altitude_m or plane_alt > max_altitude_m:
        return None

    distance_km = haversine_km(observer.latitude, observer.longitude, lat, lon)
    bearing = initial_bearing_deg(observer.latitude, observer.longitude, lat, lon)
    elevation = math.degrees(math.atan2(plane_alt - observer.altitude_m, distance_km * 1000))
    if elevation <= 0:
        return None

    ra, dec = horizontal_to_equatorial(elevation, bearing, observer)

    icao24 = str(_field(state, _ICAO24) or "").strip().upper()
    callsign = str(_field(state, _CALLSIGN) or "").strip() or "Unknown"
    name = f"Flight {callsign}" if callsign != "Unknown" else f"Aircraft {icao24}"
    velocity = _to_float(_field(state, _VELOCITY))
    heading = _to_float(_field(state, _TRUE_TRACK))

    return Airplane(
        name=name,
        ra_hours=ra,
        dec_degrees=dec,
        altitude_deg=elevation,
        azimuth_deg=bearing,
        callsign=callsign,
        icao24=icao24,
        country=_field(state, _COUNTRY),
        latitude=lat,
        longitude=lon,
        plane_altitude_m=round(plane_alt),
        ground_distance_km=round(distance_km, 1),
        velocity_kmh=round(velocity * 3.6) if velocity else 0,
        heading_deg=round(heading) if heading else 0,
        on_ground=bool(_field(state, _ON_GROUND)),
        last_contact=_field(state, _LAST_CONTACT),
    )


def airplanes_from_states(states, observer: Observer, **band) -> List[Airplane]:
    airplanes = []
    for state in states or []:
        plane = airplane_from_state_vector(state, observer, **band)
        if plane is not None:
            airplanes.append(plane)
    logger.debug(f"Kept {len(airplanes)} of {len(states or [])} aircraft state vectors")
    return airplanes


# ── Stars ──────────────────────────────────────────────────────────────────

def stars_from_catalog(catalog, observer: Observer) -> List[Star]:
    """Catalog rows (name, ra_h, dec, mag, constellation, spectral) with Alt/Az."""
    stars = []
    for name, ra, dec, mag, constellation, spectral_type in catalog:
        if not _finite(ra, dec):
            continue
        ra = normalize_hours(ra)
        altitude, azimuth = equatorial_to_horizontal(ra, dec, observer)
        stars.append(Star(
            name=name,
            ra_hours=ra,
            dec_degrees=dec,
            altitude_deg=altitude,
            azimuth_deg=azimuth,
            magnitude=mag,
            constellation=constellation,
            spectral_type=spectral_type,
        ))
    return stars

# starbot/coords.py
"""Spherical-astronomy transforms between equatorial and horizontal frames."""

import math
from datetime import datetime
from typing import Optional, Tuple

from starbot.models import Observer
from starbot.timeframe import local_sidereal_time_hours

EARTH_RADIUS_KM = 6371.0


def normalize_hours(hours: float) -> float:
    """Wrap an hour angle / RA into [0, 24)."""
    hours = hours % 24
    if hours < 0:
        hours += 24
    # -1e-17 % 24 evaluates to 24.0
    return 0.0 if hours >= 24 else hours


def normalize_degrees(deg: float) -> float:
    """Wrap an azimuth into [0, 360)."""
    deg = deg % 360
    if deg < 0:
        deg += 360
    return 0.0 if deg >= 360 else deg


def azimuth_to_compass(az):
    directions = ['N', 'NNE', 'NE', 'ENE', 'E', 'ESE', 'SE', 'SSE',
                  'S', 'SSW', 'SW', 'WSW', 'W', 'WNW', 'NW', 'NNW']
    ix = int((az + 11.25) / 22.5) % 16
    return directions[ix]


def angular_distance_deg(ra1_hours: float, dec1_deg: float, ra2_hours: float, dec2_deg: float) -> float:
    """Great-circle separation in degrees [0, 180] between two RA/Dec points.

    Haversine form, which stays accurate for the small separations the zenith
    ranking cares about.
    """
    ra1 = math.radians(ra1_hours * 15)
    dec1 = math.radians(dec1_deg)
    ra2 = math.radians(ra2_hours * 15)
    dec2 = math.radians(dec2_deg)

    d_ra = ra2 - ra1
    d_dec = dec2 - dec1

    a = math.sin(d_dec / 2) ** 2 + math.cos(dec1) * math.cos(dec2) * math.sin(d_ra / 2) ** 2
    a = min(1.0, max(0.0, a))
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return math.degrees(c)


def horizontal_to_equatorial(altitude_deg: float, azimuth_deg: float, observer: Observer,
                             date: Optional[datetime] = None) -> Tuple[float, float]:
    """Alt/Az (azimuth from North through East) → (RA hours, Dec degrees)."""
    when = date or observer.when
    lst = local_sidereal_time_hours(when, observer.longitude)

    alt = math.radians(altitude_deg)
    az = math.radians(azimuth_deg)
    lat = math.radians(observer.latitude)

    sin_dec = math.sin(alt) * math.sin(lat) + math.cos(alt) * math.cos(lat) * math.cos(az)
    dec = math.asin(max(-1.0, min(1.0, sin_dec)))

    ha = math.atan2(
        -math.cos(alt) * math.cos(lat) * math.sin(az),
        math.sin(alt) - math.sin(lat) * math.sin(dec),
    )

    ra = normalize_hours(lst - math.degrees(ha) / 15)
    return ra, math.degrees(dec)


def equatorial_to_horizontal(ra_hours: float, dec_deg: float, observer: Observer,
                             date: Optional[datetime] = None) -> Tuple[float, float]:
    """(RA hours, Dec degrees) → (altitude, azimuth) in degrees, azimuth in [0, 360).

    At the zenith and the poles the azimuth is undefined; atan2(0, 0) gives 0.
    """
    when = date or observer.when
    lst = local_sidereal_time_hours(when, observer.longitude)

    ha = math.radians((lst - ra_hours) * 15)
    dec = math.radians(dec_deg)
    lat = math.radians(observer.latitude)

    sin_alt = math.sin(dec) * math.sin(lat) + math.cos(dec) * math.cos(lat) * math.cos(ha)
    alt = math.asin(max(-1.0, min(1.0, sin_alt)))

    az = math.atan2(
        -math.cos(dec) * math.cos(lat) * math.sin(ha),
        math.sin(dec) - math.sin(lat) * math.sin(alt),
    )
    return math.degrees(alt), normalize_degrees(math.degrees(az))


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Ground distance in km between two geographic points."""
    d_lat = math.radians(lat2 - lat1)
    d_lon = math.radians(lon2 - lon1)
    a = (math.sin(d_lat / 2) ** 2
         + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lon / 2) ** 2)
    a = min(1.0, max(0.0, a))
    return EARTH_RADIUS_KM * 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))


def initial_bearing_deg(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Initial great-circle bearing from point 1 to point 2, [0, 360) from North."""
    d_lon = math.radians(lon2 - lon1)
    lat1_r = math.radians(lat1)
    lat2_r = math.radians(lat2)

    y = math.sin(d_lon) * math.cos(lat2_r)
    x = math.cos(lat1_r) * math.sin(lat2_r) - math.sin(lat1_r) * math.cos(lat2_r) * math.cos(d_lon)
    return normalize_degrees(math.degrees(math.atan2(y, x)))

# starbot/models.py
"""Observer, zenith frame and the normalized sky-object types.

Every feed is normalized into one of the CelestialTarget subclasses below.
They share the equatorial/horizontal position fields, and each subclass fixes
its ``kind`` tag and carries its own payload.
"""

import math
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Tuple

import pytz


PLANET = "planet"
STAR = "star"
SATELLITE = "satellite"
AIRPLANE = "airplane"
MINOR_BODY = "minorBody"

TARGET_KINDS = (PLANET, STAR, SATELLITE, AIRPLANE, MINOR_BODY)


class InvalidObserverError(ValueError):
    """Observer position is NaN or out of range; the scan must not start."""


class FeedUnavailableError(RuntimeError):
    """A feed could not be fetched (network error, non-2xx, timeout, bad payload)."""


@dataclass(frozen=True)
class Observer:
    latitude: float  # degrees, north positive
    longitude: float  # degrees, east positive
    altitude_m: float = 0.0
    timestamp_utc: Optional[datetime] = None

    @property
    def when(self) -> datetime:
        """Scan instant as a tz-aware UTC datetime (naive means UTC)."""
        ts = self.timestamp_utc or datetime.now(pytz.utc)
        if ts.tzinfo is None:
            return pytz.utc.localize(ts)
        return ts.astimezone(pytz.utc)


def validate_observer(observer: Observer) -> Observer:
    """Reject NaN or out-of-range coordinates before any scan work starts."""
    try:
        lat = float(observer.latitude)
        lon = float(observer.longitude)
        alt = float(observer.altitude_m)
    except (TypeError, ValueError) as e:
        raise InvalidObserverError(f"Observer coordinates are not numeric: {e}")

    if not (math.isfinite(lat) and math.isfinite(lon) and math.isfinite(alt)):
        raise InvalidObserverError("Observer coordinates must be finite numbers.")
    if lat < -90 or lat > 90:
        raise InvalidObserverError(f"Latitude must be between -90 and 90 degrees, got {lat}.")
    if lon < -180 or lon > 180:
        raise InvalidObserverError(f"Longitude must be between -180 and 180 degrees, got {lon}.")
    if alt < 0:
        raise InvalidObserverError(f"Altitude must be >= 0 meters, got {alt}.")
    return observer


@dataclass(frozen=True)
class ZenithFrame:
    ra_hours: float  # equals LST
    dec_degrees: float  # equals observer latitude
    lst_hours: float
    julian_date: float


@dataclass(frozen=True)
class LookAngles:
    """Satellite position as seen by the observer, from an orbit propagator."""

    name: str
    azimuth_deg: float
    elevation_deg: float
    range_km: float
    group: Optional[str] = None


@dataclass
class CelestialTarget:
    """Common shape of every normalized sky object.

    ``distance_from_zenith`` is attached in place by the ranking engine.
    """

    name: str
    ra_hours: Optional[float] = None
    dec_degrees: Optional[float] = None
    altitude_deg: Optional[float] = None
    azimuth_deg: Optional[float] = None
    magnitude: Optional[float] = None
    distance_from_zenith: Optional[float] = None

    kind = "unknown"

    def angular_position(self) -> Optional[Tuple[float, float]]:
        """(ra_hours, dec_degrees), or None while the position is unknown."""
        if self.ra_hours is None or self.dec_degrees is None:
            return None
        return self.ra_hours, self.dec_degrees

    @property
    def has_position(self) -> bool:
        return self.angular_position() is not None

    @property
    def is_above_horizon(self) -> bool:
        return self.altitude_deg is not None and self.altitude_deg > 0


@dataclass
class Planet(CelestialTarget):
    horizons_id: Optional[str] = None

    kind = PLANET


@dataclass
class Star(CelestialTarget):
    constellation: Optional[str] = None
    spectral_type: Optional[str] = None

    kind = STAR


@dataclass
class Satellite(CelestialTarget):
    range_km: Optional[float] = None
    group: Optional[str] = None

    kind = SATELLITE


@dataclass
class Airplane(CelestialTarget):
    callsign: str = "Unknown"
    icao24: str = ""
    country: Optional[str] = None
    latitude: Optional[float] = None  # aircraft ground position
    longitude: Optional[float] = None
    plane_altitude_m: Optional[float] = None
    ground_distance_km: Optional[float] = None
    velocity_kmh: int = 0
    heading_deg: int = 0
    on_ground: bool = False
    last_contact: Optional[int] = None
    origin: Optional[str] = None
    destination: Optional[str] = None
    airline: Optional[str] = None
    flight_number: Optional[str] = None

    kind = AIRPLANE

    @property
    def has_route(self) -> bool:
        return bool(self.origin and self.destination)


@dataclass
class MinorBody(CelestialTarget):
    body_type: str = "Asteroid"
    description: str = ""
    live: bool = True  # False for static reference entries without a position
    horizons_id: Optional[str] = None
    distance_au: Optional[float] = None
    extras: dict = field(default_factory=dict)

    kind = MINOR_BODY

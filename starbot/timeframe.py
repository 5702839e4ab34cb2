# starbot/timeframe.py
"""Julian Date and sidereal time, computed without network access."""

from datetime import datetime, timedelta

import pytz

from starbot.models import Observer, ZenithFrame

UNIX_EPOCH_JD = 2440587.5
J2000_JD = 2451545.0
_UNIX_EPOCH = datetime(1970, 1, 1, tzinfo=pytz.utc)


def to_julian_date(date: datetime, utc_offset_minutes: float = 0) -> float:
    """Julian Date of ``date``.

    A tz-aware datetime is converted to UTC and ``utc_offset_minutes`` is
    ignored. A naive datetime is taken as local wall-clock time at
    ``utc_offset_minutes`` east of UTC (0 means the naive value is UTC).
    The process-local timezone is never consulted.
    """
    if date.tzinfo is None:
        utc = pytz.utc.localize(date) - timedelta(minutes=utc_offset_minutes)
    else:
        utc = date.astimezone(pytz.utc)
    unix_days = (utc - _UNIX_EPOCH).total_seconds() / 86400.0
    return unix_days + UNIX_EPOCH_JD


def greenwich_mean_sidereal_time_hours(date: datetime, utc_offset_minutes: float = 0) -> float:
    """GMST in hours [0, 24) from the 4-term polynomial in centuries since J2000."""
    jd = to_julian_date(date, utc_offset_minutes)
    d = jd - J2000_JD
    t = d / 36525.0

    gmst = 280.46061837 + 360.98564736629 * d + 0.000387933 * t * t - (t * t * t) / 38710000.0
    gmst = gmst % 360
    if gmst < 0:
        gmst += 360
    return gmst / 15.0


def local_sidereal_time_hours(date: datetime, longitude_east: float, utc_offset_minutes: float = 0) -> float:
    """LST in hours [0, 24) for a longitude in degrees (east positive)."""
    lst = greenwich_mean_sidereal_time_hours(date, utc_offset_minutes) + longitude_east / 15.0
    lst = lst % 24
    if lst < 0:
        lst += 24
    return lst


def zenith_frame(observer: Observer) -> ZenithFrame:
    """Equatorial coordinates of the point straight overhead.

    RA at the zenith is the LST and Dec is the observer latitude. This treats
    the Earth as a sphere and ignores refraction and geodetic-vs-geocentric
    latitude, which is good to a fraction of a degree.
    """
    when = observer.when
    lst = local_sidereal_time_hours(when, observer.longitude)
    return ZenithFrame(
        ra_hours=lst,
        dec_degrees=observer.latitude,
        lst_hours=lst,
        julian_date=to_julian_date(when),
    )

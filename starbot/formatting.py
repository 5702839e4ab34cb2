# starbot/formatting.py
"""Display strings for RA, Dec and LST."""

from astropy import units as u
from astropy.coordinates import Angle


def format_ra(ra_hours):
    """'06h 45m 09s' style right ascension."""
    if ra_hours is None:
        return "–"
    return Angle(ra_hours, unit=u.hourangle).to_string(
        unit=u.hour, sep=('h ', 'm ', 's'), precision=0, pad=True)


def format_dec(dec_degrees):
    """'+12° 52\\' 08"' style declination, always signed."""
    if dec_degrees is None:
        return "–"
    return Angle(dec_degrees, unit=u.deg).to_string(
        unit=u.deg, sep=('° ', "' ", '"'), precision=0, alwayssign=True, pad=True)


def format_lst(lst_hours):
    return format_ra(lst_hours)


def format_degrees(value, digits=1):
    if value is None:
        return "–"
    return f"{value:.{digits}f}°"

# starbot/aggregate.py
"""Final scan result assembled from the ranked categories, without I/O.

Display helpers (DataFrame export, CSV sanitising) live here too so the
presentation layer never has to reach into the ranking code.
"""

from dataclasses import asdict, dataclass, field
from typing import List

import pandas as pd

from starbot.coords import azimuth_to_compass
from starbot.formatting import format_dec, format_lst, format_ra
from starbot.models import CelestialTarget, ZenithFrame
from starbot.ranking import RankedTargets


@dataclass
class ScanResult:
    frame: ZenithFrame
    zenith_objects: List[CelestialTarget] = field(default_factory=list)
    nearby_objects: List[CelestialTarget] = field(default_factory=list)
    satellites: list = field(default_factory=list)
    airplanes: list = field(default_factory=list)
    planets: list = field(default_factory=list)
    stars: list = field(default_factory=list)
    celestial_bodies: list = field(default_factory=list)
    zenith_ra: str = ""
    zenith_dec: str = ""
    lst: str = ""

    def counts(self):
        return {
            "zenith": len(self.zenith_objects),
            "nearby": len(self.nearby_objects),
            "satellites": len(self.satellites),
            "airplanes": len(self.airplanes),
            "planets": len(self.planets),
            "stars": len(self.stars),
            "celestial_bodies": len(self.celestial_bodies),
        }

    def as_dict(self):
        """Plain-dict form keyed the way the display layer expects."""
        def _targets(items):
            return [dict(asdict(t), kind=t.kind) for t in items]

        return {
            "zenithObjects": _targets(self.zenith_objects),
            "nearbyObjects": _targets(self.nearby_objects),
            "satellites": _targets(self.satellites),
            "airplanes": _targets(self.airplanes),
            "planets": _targets(self.planets),
            "stars": _targets(self.stars),
            "celestialBodies": _targets(self.celestial_bodies),
            "zenith": {
                "ra": self.frame.ra_hours,
                "dec": self.frame.dec_degrees,
                "lst": self.frame.lst_hours,
                "jd": self.frame.julian_date,
                "raFormatted": self.zenith_ra,
                "decFormatted": self.zenith_dec,
                "lstFormatted": self.lst,
            },
        }


def aggregate_results(frame: ZenithFrame, ranked: RankedTargets) -> ScanResult:
    """Merge the ranked categories and the zenith frame into one ScanResult."""
    return ScanResult(
        frame=frame,
        zenith_objects=list(ranked.zenith),
        nearby_objects=list(ranked.nearby),
        satellites=list(ranked.satellites),
        airplanes=list(ranked.airplanes),
        planets=list(ranked.planets),
        stars=list(ranked.stars),
        celestial_bodies=list(ranked.minor_bodies),
        zenith_ra=format_ra(frame.ra_hours),
        zenith_dec=format_dec(frame.dec_degrees),
        lst=format_lst(frame.lst_hours),
    )


# ── Tabular export ─────────────────────────────────────────────────────────

_TABLE_COLUMNS = ["Name", "Kind", "RA", "Dec", "Altitude (°)", "Azimuth (°)",
                  "Direction", "Zenith Dist (°)", "Magnitude"]


def targets_to_dataframe(targets) -> pd.DataFrame:
    """One row per target with formatted coordinates, in the given order."""
    rows = []
    for t in targets:
        rows.append({
            "Name": t.name,
            "Kind": t.kind,
            "RA": format_ra(t.ra_hours),
            "Dec": format_dec(t.dec_degrees),
            "Altitude (°)": round(t.altitude_deg, 2) if t.altitude_deg is not None else None,
            "Azimuth (°)": round(t.azimuth_deg, 2) if t.azimuth_deg is not None else None,
            "Direction": azimuth_to_compass(t.azimuth_deg) if t.azimuth_deg is not None else "",
            "Zenith Dist (°)": (round(t.distance_from_zenith, 2)
                                if t.distance_from_zenith is not None else None),
            "Magnitude": t.magnitude,
        })
    return pd.DataFrame(rows, columns=_TABLE_COLUMNS)


# Filled only by format_ra / format_dec, whose signed output is not a formula
COORDINATE_COLUMNS = ("RA", "Dec")


def sanitize_csv_df(df: pd.DataFrame, skip_columns=COORDINATE_COLUMNS) -> pd.DataFrame:
    """Escape leading formula characters in string columns for safe CSV export.

    Columns in ``skip_columns`` are written as-is.
    """
    _FORMULA_PREFIXES = ('=', '+', '-', '@')
    df_safe = df.copy()
    for col in df_safe.select_dtypes(include=['object', 'string']).columns:
        if col in skip_columns:
            continue
        df_safe[col] = df_safe[col].apply(
            lambda x: f"'{x}" if isinstance(x, str) and x and x[0] in _FORMULA_PREFIXES else x
        )
    return df_safe

# starbot/ranking.py
"""Zenith ranking: distance from zenith, zenith/nearby partition, per-kind caps.

All functions are pure over their input lists except ``attach_zenith_distances``,
which writes ``distance_from_zenith`` onto the targets in place.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from starbot.catalog import FALLBACK_MINOR_BODIES
from starbot.config import ScanConfig
from starbot.coords import angular_distance_deg
from starbot.models import CelestialTarget, MinorBody, ZenithFrame
from starbot.normalize import fallback_minor_bodies

logger = logging.getLogger(__name__)

ZENITH_TOLERANCE_DEG = 5.0
NEARBY_TOLERANCE_DEG = 10.0
MAX_SATELLITES = 7
MAX_PER_CONSTELLATION = 3
MAX_MINOR_BODIES = 5


@dataclass
class RankedTargets:
    zenith: List[CelestialTarget] = field(default_factory=list)
    nearby: List[CelestialTarget] = field(default_factory=list)
    satellites: list = field(default_factory=list)
    airplanes: list = field(default_factory=list)
    planets: list = field(default_factory=list)
    stars: list = field(default_factory=list)
    minor_bodies: list = field(default_factory=list)


def attach_zenith_distances(targets: Sequence[CelestialTarget], frame: ZenithFrame):
    """Set ``distance_from_zenith`` on every target that has RA/Dec (None otherwise)."""
    for target in targets:
        position = target.angular_position()
        if position is None:
            target.distance_from_zenith = None
            continue
        ra, dec = position
        target.distance_from_zenith = angular_distance_deg(frame.ra_hours, frame.dec_degrees, ra, dec)
    return targets


def _rankable(target):
    return (target.has_position
            and target.is_above_horizon
            and target.distance_from_zenith is not None)


def sort_by_zenith_distance(targets):
    """Closest to zenith first. Stable, so ties keep their input order."""
    return sorted(targets, key=lambda t: t.distance_from_zenith)


def partition_by_zenith_distance(targets, zenith_tolerance=ZENITH_TOLERANCE_DEG,
                                 nearby_tolerance=NEARBY_TOLERANCE_DEG):
    """Split eligible targets into (zenith, nearby), each sorted ascending.

    zenith: d <= zenith_tolerance; nearby: zenith_tolerance < d <= nearby_tolerance.
    Targets without a position, below the horizon, or farther out are left out.
    """
    zenith, nearby = [], []
    for target in targets:
        if not _rankable(target):
            continue
        d = target.distance_from_zenith
        if d <= zenith_tolerance:
            zenith.append(target)
        elif d <= nearby_tolerance:
            nearby.append(target)
    return sort_by_zenith_distance(zenith), sort_by_zenith_distance(nearby)


def cap_by_zenith_distance(targets, limit: Optional[int]):
    """Above-horizon targets sorted by zenith distance, truncated to ``limit``."""
    ranked = sort_by_zenith_distance([t for t in targets if _rankable(t)])
    return ranked if limit is None else ranked[:limit]


def _constellation_of(name, constellations):
    lowered = (name or "").lower()
    for group in constellations:
        if group.lower() in lowered:
            return group.lower()
    return None


def select_diverse_satellites(satellites, max_total=MAX_SATELLITES,
                              max_per_constellation=MAX_PER_CONSTELLATION,
                              constellations=("starlink",)):
    """Closest satellites to zenith, with no more than ``max_per_constellation``
    from any one named constellation and at most ``max_total`` overall.

    Once a constellation is full its remaining members are skipped while other
    satellites are still considered.
    """
    selected = []
    counts = {}
    for sat in sort_by_zenith_distance([s for s in satellites if _rankable(s)]):
        if len(selected) >= max_total:
            break
        group = _constellation_of(sat.name, constellations)
        if group is not None:
            if counts.get(group, 0) >= max_per_constellation:
                continue
            counts[group] = counts.get(group, 0) + 1
        selected.append(sat)

    logger.debug(f"Filtered satellites: {len(selected)} ({counts})")
    return selected


def select_minor_bodies(bodies, limit=MAX_MINOR_BODIES, fallback=None) -> List[MinorBody]:
    """Closest live minor bodies above the horizon; the static reference list
    (``live=False``, no position) when none qualify."""
    ranked = cap_by_zenith_distance(bodies, limit)
    if ranked:
        return ranked
    logger.info("No celestial bodies above horizon, using fallback list")
    entries = FALLBACK_MINOR_BODIES if fallback is None else fallback
    return fallback_minor_bodies(entries)[:limit]


def rank_targets(frame: ZenithFrame, planets=(), airplanes=(), satellites=(), stars=(),
                 minor_bodies=(), config=None) -> RankedTargets:
    """Run the full ranking over the normalized feed lists.

    Every category is handled independently; an empty list for one feed
    (because it failed or timed out) only empties that category.
    """
    config = config or ScanConfig()
    planets, airplanes, satellites = list(planets), list(airplanes), list(satellites)
    stars, minor_bodies = list(stars), list(minor_bodies)

    everything = planets + airplanes + satellites + stars + minor_bodies
    attach_zenith_distances(everything, frame)

    zenith, nearby = partition_by_zenith_distance(
        everything, config.zenith_tolerance_deg, config.nearby_tolerance_deg,
    )

    return RankedTargets(
        zenith=zenith,
        nearby=nearby,
        satellites=select_diverse_satellites(
            satellites, config.max_satellites, config.max_per_constellation, config.constellations,
        ),
        airplanes=cap_by_zenith_distance(airplanes, config.max_airplanes),
        planets=cap_by_zenith_distance(planets, config.max_planets),
        stars=cap_by_zenith_distance(stars, config.max_stars),
        minor_bodies=select_minor_bodies(minor_bodies, config.max_minor_bodies),
    )

# starbot/scan.py
"""One zenith scan: parallel feed fetches, ranking, route enrichment, result.

Every external call is an independent leaf task with its own worker thread,
so all of them start at once. The scan waits for them up to
``feed_timeout_s``; a leaf that fails or is still running at the deadline
only empties its own category.
"""

import logging
import time
from concurrent.futures import ThreadPoolExecutor, wait
from dataclasses import replace

from starbot import celestrak, horizons, opensky, routes
from starbot.aggregate import ScanResult, aggregate_results
from starbot.cache import TTLCache, feed_cache_key
from starbot.catalog import BRIGHT_STARS, MINOR_BODIES, SOLAR_SYSTEM_BODIES
from starbot.config import ScanConfig, aviationstack_key
from starbot.models import FeedUnavailableError, Observer, validate_observer
from starbot.normalize import (
    airplanes_from_states,
    minor_body_from_ephemeris,
    planet_from_ephemeris,
    satellite_from_look_angles,
    stars_from_catalog,
)
from starbot.ranking import rank_targets
from starbot.timeframe import zenith_frame

logger = logging.getLogger(__name__)

PLANETS = "planets"
MINOR_BODIES_FEED = "minor_bodies"
SATELLITES = "satellites"
AIRPLANES = "airplanes"


class SkyScanner:
    """Runs scans for observers and owns the feed cache between them.

    ``route_key`` defaults to the AVIATIONSTACK_KEY environment variable;
    pass an empty string to turn route lookups off.
    """

    def __init__(self, config: ScanConfig = None, cache: TTLCache = None,
                 route_key=None, clock=time.monotonic):
        self.config = config or ScanConfig()
        self.cache = cache if cache is not None else TTLCache(self.config.cache_ttl_s, clock=clock)
        self.route_key = aviationstack_key() if route_key is None else route_key

    def clear_cache(self):
        """Drop cached feed data so the next scan fetches everything again."""
        self.cache.clear()
        logger.info("Feed cache cleared")

    # ── Cache helper ───────────────────────────────────────────────────────

    def _cached(self, key, fetch):
        """Raw feed payload for ``key``, fetched on a miss.

        Only immutable payloads (response text, state-vector tuples) are
        stored. Targets are rebuilt from them on every scan.
        """
        hit = self.cache.get(key)
        if hit is not None:
            logger.debug(f"Cache hit: {key[0]}")
            return hit
        value = fetch()
        self.cache.set(key, value)
        return value

    def _key(self, feed, observer):
        return feed_cache_key(feed, observer, bucket_seconds=self.config.cache_ttl_s)

    # ── Leaf tasks ─────────────────────────────────────────────────────────

    def _ephemeris_text(self, body, observer):
        return self._cached(
            self._key(f"horizons:{body['id']}", observer),
            lambda: horizons.fetch_ephemeris_text(
                body["id"], observer, timeout=self.config.request_timeout_s),
        )

    def _planet_task(self, body, observer):
        text = self._ephemeris_text(body, observer)
        planet = planet_from_ephemeris(body["name"], text, observer, horizons_id=body["id"])
        if planet is None:
            raise FeedUnavailableError(f"Unparseable ephemeris for {body['name']}")
        return [planet]

    def _minor_body_task(self, body, observer):
        text = self._ephemeris_text(body, observer)
        minor = minor_body_from_ephemeris(
            body["name"], text, observer, body_type=body.get("type", "Asteroid"),
            horizons_id=body["id"])
        if minor is None:
            raise FeedUnavailableError(f"Unparseable ephemeris for {body['name']}")
        return [minor]

    def _satellite_task(self, group, observer):
        tle_text = self._cached(
            self._key(f"celestrak:{group}", observer),
            lambda: celestrak.fetch_tle_group(group, timeout=self.config.request_timeout_s),
        )
        # Cached elements are still propagated to this scan's instant
        triples = celestrak.parse_tle_text(tle_text)
        looks = celestrak.look_angles_for_tles(triples, observer, group=group)
        logger.debug(f"CelesTrak group {group}: {len(triples)} element sets")
        sats = [satellite_from_look_angles(look, observer) for look in looks]
        return [s for s in sats if s is not None]

    def _airplane_task(self, observer):
        states = self._cached(
            self._key("opensky", observer),
            lambda: tuple(tuple(s) for s in opensky.fetch_state_vectors(
                observer, timeout=self.config.request_timeout_s) if s),
        )
        return airplanes_from_states(
            states, observer,
            min_altitude_m=self.config.min_airplane_altitude_m,
            max_altitude_m=self.config.max_airplane_altitude_m,
        )

    # ── Fan-out ────────────────────────────────────────────────────────────

    def _leaf_jobs(self, observer):
        jobs = []
        for body in SOLAR_SYSTEM_BODIES:
            jobs.append((PLANETS, body["name"], self._planet_task, (body, observer)))
        for body in MINOR_BODIES:
            jobs.append((MINOR_BODIES_FEED, body["name"], self._minor_body_task, (body, observer)))
        for group in self.config.satellite_groups:
            jobs.append((SATELLITES, group, self._satellite_task, (group, observer)))
        jobs.append((AIRPLANES, "opensky", self._airplane_task, (observer,)))
        return jobs

    def fetch_feeds(self, observer: Observer):
        """Run every leaf fetch concurrently; returns {category: [targets]}.

        Failed and timed-out leaves contribute nothing; the rest of their
        category and every other category are kept.
        """
        results = {PLANETS: [], MINOR_BODIES_FEED: [], SATELLITES: [], AIRPLANES: []}
        jobs = self._leaf_jobs(observer)

        # One thread per leaf: none of them waits in the queue behind another
        executor = ThreadPoolExecutor(max_workers=len(jobs))
        try:
            futures = {executor.submit(fn, *args): (category, label)
                       for category, label, fn, args in jobs}
            done, not_done = wait(futures, timeout=self.config.feed_timeout_s)

            for future in not_done:
                category, label = futures[future]
                future.cancel()
                logger.warning(f"{category} feed {label} timed out after {self.config.feed_timeout_s}s")

            # Submission order keeps planet/minor-body lists in catalog order
            for future, (category, label) in futures.items():
                if future not in done:
                    continue
                error = future.exception()
                if error is None:
                    results[category].extend(future.result())
                elif isinstance(error, FeedUnavailableError):
                    logger.warning(f"{category} feed {label} unavailable: {error}")
                else:
                    logger.error(f"{category} feed {label} failed: {error!r}")
        finally:
            executor.shutdown(wait=False, cancel_futures=True)

        results[SATELLITES] = _dedupe_by_name(results[SATELLITES])
        logger.info(
            "Feeds: " + ", ".join(f"{k}={len(v)}" for k, v in results.items())
        )
        return results

    # ── Route enrichment ───────────────────────────────────────────────────

    def _route_task(self, callsign):
        key = ("route", callsign)
        cached = self.cache.get(key)
        if cached is not None:
            return cached
        route = routes.lookup_route(callsign, self.route_key, timeout=self.config.request_timeout_s)
        if route:
            self.cache.set(key, route)
        return route

    def enrich_routes(self, airplanes):
        """Attach origin/destination to each airplane whose lookup finishes in time.

        Airplanes are updated in place; unresolved ones keep their base data.
        """
        if not self.route_key or not self.config.enrich_routes:
            return airplanes
        candidates = [p for p in airplanes if p.callsign and p.callsign != "Unknown"]
        if not candidates:
            return airplanes

        executor = ThreadPoolExecutor(max_workers=max(1, min(len(candidates), self.config.max_workers)))
        try:
            futures = {executor.submit(self._route_task, p.callsign): p for p in candidates}
            done, not_done = wait(futures, timeout=self.config.route_timeout_s)
            if not_done:
                logger.warning(f"{len(not_done)} route lookups did not finish in time")
            for future in done:
                plane = futures[future]
                error = future.exception()
                if error is not None:
                    logger.warning(f"Route lookup for {plane.callsign} failed: {error!r}")
                    continue
                routes.apply_route(plane, future.result())
        finally:
            executor.shutdown(wait=False, cancel_futures=True)

        enriched = sum(1 for p in airplanes if p.has_route)
        logger.info(f"Enhanced {enriched}/{len(airplanes)} airplanes with route data")
        return airplanes

    # ── Scan ───────────────────────────────────────────────────────────────

    def scan(self, observer: Observer) -> ScanResult:
        """Full zenith scan for one observer.

        Raises InvalidObserverError before any network call when the
        observer's coordinates are out of range. An observer without a
        timestamp is pinned to "now" once, so every leaf sees one instant.
        """
        validate_observer(observer)
        observer = replace(observer, timestamp_utc=observer.when)
        frame = zenith_frame(observer)
        logger.info(
            f"Scanning zenith for ({observer.latitude:.4f}, {observer.longitude:.4f}) "
            f"RA={frame.ra_hours:.4f}h Dec={frame.dec_degrees:.4f}°"
        )

        stars = stars_from_catalog(BRIGHT_STARS, observer)
        feeds = self.fetch_feeds(observer)

        ranked = rank_targets(
            frame,
            planets=feeds[PLANETS],
            airplanes=feeds[AIRPLANES],
            satellites=feeds[SATELLITES],
            stars=stars,
            minor_bodies=feeds[MINOR_BODIES_FEED],
            config=self.config,
        )
        self.enrich_routes(ranked.airplanes)

        result = aggregate_results(frame, ranked)
        logger.info(f"Scan complete: {result.counts()}")
        return result


def _dedupe_by_name(targets):
    seen = set()
    unique = []
    for target in targets:
        if target.name in seen:
            continue
        seen.add(target.name)
        unique.append(target)
    return unique


def scan_zenith(observer: Observer, config: ScanConfig = None) -> ScanResult:
    """One-off scan with a fresh scanner."""
    return SkyScanner(config).scan(observer)

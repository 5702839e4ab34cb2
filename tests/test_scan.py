import logging
import threading
import time
from datetime import datetime, timedelta
from unittest.mock import patch

import pytest
import pytz

from starbot.config import ScanConfig
from starbot.models import FeedUnavailableError, InvalidObserverError, LookAngles, Observer
from starbot.scan import SkyScanner
from starbot.timeframe import local_sidereal_time_hours, to_julian_date

WHEN = datetime(2024, 3, 20, 16, 0, 0, tzinfo=pytz.utc)
OBSERVER = Observer(12.8688, 77.6513, 920, WHEN)
LST = local_sidereal_time_hours(WHEN, OBSERVER.longitude)


def _ephemeris(ra_deg, dec, az, alt):
    return f"$$SOE\n 2024-Mar-20 16:00, , , {ra_deg:.5f}, {dec:.5f}, {az:.5f}, {alt:.5f},\n$$EOE\n"


def fake_ephemeris(body_id, observer, **kwargs):
    """Sun 2 degrees from the zenith, everything else below the horizon."""
    if body_id == "10":
        return _ephemeris(LST * 15, OBSERVER.latitude + 2, 0.0, 88.0)
    return _ephemeris((LST * 15 + 180) % 360, -OBSERVER.latitude, 0.0, -60.0)


def fake_states(observer, **kwargs):
    return [["800abc", "IGO6021 ", "India", 0, 0, 77.6513, 12.9688, 7900.0,
             False, 230.0, 45.0, 0.0, None, 8000.0, None, False, 0]]


def fake_tles(group, **kwargs):
    return f"# elements for {group}\n"


def fake_looks(triples, observer, group=None):
    return [
        LookAngles("ISS (ZARYA)", 0.0, 89.5, 420.0, group),
        LookAngles("NOAA 15", 200.0, -10.0, 3000.0, group),
    ]


@pytest.fixture
def scanner():
    config = ScanConfig(satellite_groups=["stations"], feed_timeout_s=5, route_timeout_s=5)
    return SkyScanner(config, route_key="")


@pytest.fixture
def feeds():
    """(ephemeris, tle fetch, look angles, opensky) mocks."""
    with patch("starbot.horizons.fetch_ephemeris_text", side_effect=fake_ephemeris) as eph, \
         patch("starbot.celestrak.fetch_tle_group", side_effect=fake_tles) as tles, \
         patch("starbot.celestrak.look_angles_for_tles", side_effect=fake_looks) as looks, \
         patch("starbot.opensky.fetch_state_vectors", side_effect=fake_states) as sky:
        yield eph, tles, looks, sky


def test_scan_end_to_end(scanner, feeds):
    result = scanner.scan(OBSERVER)

    zenith_names = [t.name for t in result.zenith_objects]
    assert "Sun" in zenith_names
    assert "ISS (ZARYA)" in zenith_names
    sun = next(t for t in result.zenith_objects if t.name == "Sun")
    assert sun.distance_from_zenith == pytest.approx(2.0, abs=1e-6)
    assert [p.name for p in result.planets] == ["Sun"]
    assert [s.name for s in result.satellites] == ["ISS (ZARYA)"]
    assert [a.name for a in result.airplanes] == ["Flight IGO6021"]
    assert len(result.stars) <= 15
    assert all(s.altitude_deg > 0 for s in result.stars)
    # all minor bodies are below the horizon -> reference list
    assert result.celestial_bodies and not any(b.live for b in result.celestial_bodies)
    assert result.zenith_ra == result.lst


def test_scan_zenith_list_sorted(scanner, feeds):
    result = scanner.scan(OBSERVER)
    distances = [t.distance_from_zenith for t in result.zenith_objects]
    assert distances == sorted(distances)
    assert all(d <= 5.0 for d in distances)
    assert all(5.0 < t.distance_from_zenith <= 10.0 for t in result.nearby_objects)


def test_failed_feed_only_empties_its_category(scanner, feeds, caplog):
    sky = feeds[3]
    sky.side_effect = FeedUnavailableError("OpenSky request failed: 503")
    with caplog.at_level(logging.WARNING, logger="starbot.scan"):
        result = scanner.scan(OBSERVER)
    assert result.airplanes == []
    assert [p.name for p in result.planets] == ["Sun"]
    assert [s.name for s in result.satellites] == ["ISS (ZARYA)"]
    assert "unavailable" in caplog.text


def test_unexpected_error_in_leaf_is_contained(scanner, feeds):
    looks = feeds[2]
    looks.side_effect = RuntimeError("boom")
    result = scanner.scan(OBSERVER)
    assert result.satellites == []
    assert [p.name for p in result.planets] == ["Sun"]


def test_slow_feed_times_out(feeds, caplog):
    tles = feeds[1]
    release = threading.Event()

    def slow(group, **kwargs):
        release.wait(5)
        return fake_tles(group)

    tles.side_effect = slow
    scanner = SkyScanner(ScanConfig(satellite_groups=["stations"], feed_timeout_s=0.5), route_key="")
    try:
        with caplog.at_level(logging.WARNING, logger="starbot.scan"):
            result = scanner.scan(OBSERVER)
    finally:
        release.set()
    assert result.satellites == []
    assert [a.name for a in result.airplanes] == ["Flight IGO6021"]
    assert "timed out" in caplog.text


def test_more_leaves_than_workers_all_start_at_once(feeds, caplog):
    """26 leaves with max_workers=2: each leaf still gets the full deadline."""
    eph, tles, _, sky = feeds

    def delayed(fake):
        def run(*args, **kwargs):
            time.sleep(0.4)
            return fake(*args, **kwargs)
        return run

    eph.side_effect = delayed(fake_ephemeris)
    tles.side_effect = delayed(fake_tles)
    sky.side_effect = delayed(fake_states)

    scanner = SkyScanner(ScanConfig(max_workers=2, feed_timeout_s=1.5), route_key="")
    with caplog.at_level(logging.WARNING, logger="starbot.scan"):
        feeds_by_kind = scanner.fetch_feeds(OBSERVER)

    assert len(feeds_by_kind["planets"]) == 9
    assert len(feeds_by_kind["minor_bodies"]) == 10
    assert tles.call_count == len(ScanConfig().satellite_groups)
    # the same ISS pass comes back from every group and is kept once
    assert [s.name for s in feeds_by_kind["satellites"]] == ["ISS (ZARYA)"]
    assert len(feeds_by_kind["airplanes"]) == 1
    assert "timed out" not in caplog.text


def test_scan_uses_one_instant_for_every_leaf(scanner, feeds):
    eph = feeds[0]
    seen = []

    def recording(body_id, observer, **kwargs):
        seen.append(to_julian_date(observer.when))
        return fake_ephemeris(body_id, observer)

    eph.side_effect = recording
    result = scanner.scan(Observer(12.8688, 77.6513, 920))

    assert len(seen) == 19
    assert set(seen) == {result.frame.julian_date}


def test_cached_feeds_give_each_scan_its_own_targets(scanner, feeds):
    eph = feeds[0]
    first = scanner.scan(OBSERVER)
    sun_first = next(t for t in first.zenith_objects if t.name == "Sun")
    distance_before = sun_first.distance_from_zenith
    calls = eph.call_count

    # Same cache bucket, different zenith
    later = Observer(12.8688, 77.6513, 920, WHEN + timedelta(minutes=4))
    second = scanner.scan(later)
    sun_second = next(t for t in second.planets if t.name == "Sun")

    assert eph.call_count == calls
    assert sun_second is not sun_first
    assert sun_first.distance_from_zenith == distance_before
    assert sun_second.distance_from_zenith != pytest.approx(distance_before)


def test_invalid_observer_rejected_before_fetching(scanner, feeds):
    eph, tles, _, sky = feeds
    with pytest.raises(InvalidObserverError):
        scanner.scan(Observer(95.0, 0.0, 0, WHEN))
    with pytest.raises(InvalidObserverError):
        scanner.scan(Observer(float("nan"), 0.0, 0, WHEN))
    with pytest.raises(InvalidObserverError):
        scanner.scan(Observer(0.0, 0.0, -5, WHEN))
    eph.assert_not_called()
    tles.assert_not_called()
    sky.assert_not_called()


def test_second_scan_served_from_cache(scanner, feeds):
    eph, tles, _, sky = feeds
    scanner.scan(OBSERVER)
    calls = (eph.call_count, tles.call_count, sky.call_count)
    scanner.scan(OBSERVER)
    assert (eph.call_count, tles.call_count, sky.call_count) == calls

    scanner.clear_cache()
    scanner.scan(OBSERVER)
    assert sky.call_count == calls[2] + 1


def test_routes_enrich_airplanes(feeds):
    route = {"origin": "BLR", "destination": "DEL", "airline": "IndiGo", "flight_number": "6E6021"}
    scanner = SkyScanner(ScanConfig(satellite_groups=["stations"]), route_key="key")
    with patch("starbot.routes.lookup_route", return_value=route) as lookup:
        result = scanner.scan(OBSERVER)
    plane = result.airplanes[0]
    assert plane.origin == "BLR" and plane.destination == "DEL"
    assert lookup.call_args.args[:2] == ("IGO6021", "key")


def test_route_failure_keeps_base_data(feeds):
    scanner = SkyScanner(ScanConfig(satellite_groups=["stations"]), route_key="key")
    with patch("starbot.routes.lookup_route", side_effect=RuntimeError("down")):
        result = scanner.scan(OBSERVER)
    plane = result.airplanes[0]
    assert plane.callsign == "IGO6021"
    assert plane.has_route is False


def test_no_route_key_skips_lookups(scanner, feeds):
    with patch("starbot.routes.lookup_route") as lookup:
        scanner.scan(OBSERVER)
    lookup.assert_not_called()

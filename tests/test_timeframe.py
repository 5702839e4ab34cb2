from datetime import datetime, timedelta

import pytest
import pytz
from astropy.time import Time
from astropy.utils import iers

from starbot.models import Observer
from starbot.timeframe import (
    J2000_JD,
    greenwich_mean_sidereal_time_hours,
    local_sidereal_time_hours,
    to_julian_date,
    zenith_frame,
)

J2000 = datetime(2000, 1, 1, 12, 0, 0, tzinfo=pytz.utc)


def test_julian_date_of_j2000_epoch():
    assert to_julian_date(J2000) == pytest.approx(J2000_JD, abs=1e-9)


def test_julian_date_unix_epoch():
    assert to_julian_date(datetime(1970, 1, 1, tzinfo=pytz.utc)) == pytest.approx(2440587.5)


def test_julian_date_naive_uses_offset():
    """Naive 17:30 at UTC+05:30 is 12:00 UTC."""
    naive = datetime(2000, 1, 1, 17, 30, 0)
    assert to_julian_date(naive, utc_offset_minutes=330) == pytest.approx(J2000_JD, abs=1e-9)


def test_julian_date_naive_without_offset_is_utc():
    assert to_julian_date(datetime(2000, 1, 1, 12, 0, 0)) == pytest.approx(J2000_JD, abs=1e-9)


def test_julian_date_aware_ignores_offset():
    ist = pytz.timezone("Asia/Kolkata").localize(datetime(2000, 1, 1, 17, 30, 0))
    assert to_julian_date(ist, utc_offset_minutes=-300) == pytest.approx(J2000_JD, abs=1e-9)


def test_julian_date_matches_astropy():
    when = datetime(2024, 6, 21, 18, 45, 30, tzinfo=pytz.utc)
    assert to_julian_date(when) == pytest.approx(Time(when).jd, abs=1e-8)


def test_gmst_at_j2000():
    assert greenwich_mean_sidereal_time_hours(J2000) == pytest.approx(280.46061837 / 15, abs=1e-6)


def test_gmst_close_to_astropy():
    iers.conf.auto_download = False
    when = datetime(2020, 3, 15, 3, 20, 0, tzinfo=pytz.utc)
    expected = Time(when, scale="utc").sidereal_time("mean", "greenwich").hour
    got = greenwich_mean_sidereal_time_hours(when)
    diff = abs(got - expected) % 24
    assert min(diff, 24 - diff) < 1e-3


def test_lst_advances_one_sidereal_excess_per_day():
    when = datetime(2023, 10, 1, 0, 0, 0, tzinfo=pytz.utc)
    lst0 = local_sidereal_time_hours(when, 77.6513)
    lst1 = local_sidereal_time_hours(when + timedelta(seconds=86400), 77.6513)
    assert (lst1 - lst0) % 24 == pytest.approx(0.0657098, abs=1e-5)


@pytest.mark.parametrize("lon", [-180.0, -77.0, 0.0, 77.6513, 180.0])
def test_lst_in_range(lon):
    lst = local_sidereal_time_hours(datetime(2031, 12, 31, 23, 59, 59, tzinfo=pytz.utc), lon)
    assert 0 <= lst < 24


def test_lst_is_gmst_plus_longitude():
    when = datetime(2022, 1, 1, tzinfo=pytz.utc)
    gmst = greenwich_mean_sidereal_time_hours(when)
    assert local_sidereal_time_hours(when, 30.0) == pytest.approx((gmst + 2.0) % 24)


def test_zenith_frame_is_lst_and_latitude():
    when = datetime(2024, 1, 1, 18, 0, 0, tzinfo=pytz.utc)
    observer = Observer(12.8688, 77.6513, 920, when)
    frame = zenith_frame(observer)
    assert frame.dec_degrees == 12.8688
    assert frame.ra_hours == pytest.approx(local_sidereal_time_hours(when, 77.6513))
    assert frame.lst_hours == frame.ra_hours
    assert frame.julian_date == pytest.approx(to_julian_date(when))


def test_zenith_frame_naive_timestamp_treated_as_utc():
    aware = Observer(0, 0, 0, datetime(2024, 1, 1, tzinfo=pytz.utc))
    naive = Observer(0, 0, 0, datetime(2024, 1, 1))
    assert zenith_frame(aware) == zenith_frame(naive)

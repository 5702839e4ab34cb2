import pandas as pd

from starbot.aggregate import (
    ScanResult,
    aggregate_results,
    sanitize_csv_df,
    targets_to_dataframe,
)
from starbot.formatting import format_dec
from starbot.models import Airplane, MinorBody, Planet, Star, ZenithFrame
from starbot.ranking import RankedTargets

FRAME = ZenithFrame(ra_hours=6.5, dec_degrees=12.5, lst_hours=6.5, julian_date=2460390.0)


def _ranked():
    sun = Planet(name="Sun", ra_hours=6.5, dec_degrees=14.0, altitude_deg=88.0,
                 azimuth_deg=90.0, distance_from_zenith=1.5)
    vega = Star(name="Vega", ra_hours=6.5, dec_degrees=20.0, altitude_deg=82.0,
                azimuth_deg=0.0, magnitude=0.03, distance_from_zenith=7.5)
    plane = Airplane(name="Flight IGO6021", callsign="IGO6021", altitude_deg=30.0)
    ceres = MinorBody(name="Ceres", body_type="Dwarf Planet", live=False)
    return RankedTargets(zenith=[sun], nearby=[vega], planets=[sun], stars=[vega],
                         airplanes=[plane], minor_bodies=[ceres])


def test_aggregate_results_copies_categories():
    ranked = _ranked()
    result = aggregate_results(FRAME, ranked)
    assert isinstance(result, ScanResult)
    assert [t.name for t in result.zenith_objects] == ["Sun"]
    assert [t.name for t in result.nearby_objects] == ["Vega"]
    assert [t.name for t in result.celestial_bodies] == ["Ceres"]
    assert result.satellites == []
    assert result.frame is FRAME
    # lists are copies, targets are shared
    assert result.zenith_objects is not ranked.zenith
    assert result.zenith_objects[0] is ranked.zenith[0]


def test_aggregate_results_formats_zenith():
    result = aggregate_results(FRAME, _ranked())
    assert result.zenith_ra == "06h 30m 00s"
    assert result.zenith_dec == "+12° 30' 00\""
    assert result.lst == result.zenith_ra


def test_counts_and_dict_shape():
    result = aggregate_results(FRAME, _ranked())
    assert result.counts() == {"zenith": 1, "nearby": 1, "satellites": 0, "airplanes": 1,
                               "planets": 1, "stars": 1, "celestial_bodies": 1}
    data = result.as_dict()
    assert set(data) == {"zenithObjects", "nearbyObjects", "satellites", "airplanes",
                         "planets", "stars", "celestialBodies", "zenith"}
    assert data["zenithObjects"][0]["kind"] == "planet"
    assert data["zenithObjects"][0]["distance_from_zenith"] == 1.5
    assert data["celestialBodies"][0]["live"] is False
    assert data["zenith"]["raFormatted"] == "06h 30m 00s"


def test_empty_result():
    result = aggregate_results(FRAME, RankedTargets())
    assert all(v == 0 for v in result.counts().values())


def test_targets_to_dataframe():
    ranked = _ranked()
    df = targets_to_dataframe(ranked.zenith + ranked.nearby + ranked.minor_bodies)
    assert list(df["Name"]) == ["Sun", "Vega", "Ceres"]
    assert df.loc[0, "Direction"] == "E"
    assert df.loc[0, "RA"] == "06h 30m 00s"
    assert df.loc[2, "RA"] == "–"
    assert df.loc[2, "Direction"] == ""


def test_targets_to_dataframe_empty_has_columns():
    df = targets_to_dataframe([])
    assert df.empty
    assert "Zenith Dist (°)" in df.columns


def test_sanitize_csv_df_keeps_signed_coordinates():
    star = Star(name="-Bad Name", ra_hours=6.5, dec_degrees=-16.5, altitude_deg=40.0, azimuth_deg=0.0)
    north = Star(name="Vega", ra_hours=18.6, dec_degrees=38.8, altitude_deg=40.0, azimuth_deg=0.0)
    safe = sanitize_csv_df(targets_to_dataframe([star, north]))
    assert list(safe["Dec"]) == ["-16° 30' 00\"", format_dec(38.8)]
    assert safe.loc[1, "Dec"].startswith("+")
    assert safe.loc[0, "Name"] == "'-Bad Name"


def test_sanitize_csv_df_skip_columns_override():
    df = pd.DataFrame({"Dec": ["+12° 30' 00\""]})
    assert sanitize_csv_df(df, skip_columns=())["Dec"][0] == "'+12° 30' 00\""


def test_sanitize_csv_df_escapes_formulas():
    df = pd.DataFrame({"Name": ["=HYPERLINK()", "Vega", "-cmd", "@x"], "Magnitude": [1.0, 0.03, -1.2, 2.0]})
    safe = sanitize_csv_df(df)
    assert list(safe["Name"]) == ["'=HYPERLINK()", "Vega", "'-cmd", "'@x"]
    assert list(safe["Magnitude"]) == [1.0, 0.03, -1.2, 2.0]
    assert df.loc[0, "Name"] == "=HYPERLINK()"

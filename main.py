import argparse
import logging
import sys
from datetime import datetime

import pandas as pd
import pytz

from starbot.aggregate import sanitize_csv_df, targets_to_dataframe
from starbot.catalog import fallback_fact
from starbot.config import DEFAULT_CONFIG_FILE, load_scan_config
from starbot.models import InvalidObserverError, Observer
from starbot.scan import SkyScanner

# Bangalore
DEFAULT_LATITUDE = 12.8688
DEFAULT_LONGITUDE = 77.6513
DEFAULT_ALTITUDE_M = 920


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="List what is overhead right now.")
    parser.add_argument("--lat", type=float, default=DEFAULT_LATITUDE, help="latitude, degrees north")
    parser.add_argument("--lon", type=float, default=DEFAULT_LONGITUDE, help="longitude, degrees east")
    parser.add_argument("--alt", type=float, default=DEFAULT_ALTITUDE_M, help="altitude above sea level, m")
    parser.add_argument("--time", default=None,
                        help="UTC scan time, ISO 8601 (default: now)")
    parser.add_argument("--config", default=DEFAULT_CONFIG_FILE, help="scan config YAML")
    parser.add_argument("--csv", default=None, help="write the zenith + nearby lists to this CSV file")
    parser.add_argument("--verbose", "-v", action="store_true")
    return parser.parse_args(argv)


def _parse_time(value):
    if not value:
        return None
    when = datetime.fromisoformat(value)
    if when.tzinfo is None:
        when = pytz.utc.localize(when)
    return when


def _print_table(title, targets):
    print(f"\n{title} ({len(targets)})")
    if not targets:
        print("  (none)")
        return
    print(targets_to_dataframe(targets).to_string(index=False))


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = load_scan_config(args.config)
    observer = Observer(args.lat, args.lon, args.alt, _parse_time(args.time))

    try:
        result = SkyScanner(config).scan(observer)
    except InvalidObserverError as e:
        print(f"❌ {e}")
        return 2

    print(f"\n{'='*70}")
    print(f"  ZENITH  RA {result.zenith_ra}   Dec {result.zenith_dec}   LST {result.lst}")
    print(f"{'='*70}")

    _print_table("At zenith", result.zenith_objects)
    if result.zenith_objects:
        closest = result.zenith_objects[0]
        print(f"\n💡 {closest.name}: {fallback_fact(closest)}")
    _print_table("Nearby", result.nearby_objects)
    _print_table("Planets", result.planets)
    _print_table("Stars", result.stars)
    _print_table("Satellites", result.satellites)
    _print_table("Celestial bodies", [b for b in result.celestial_bodies if b.live])

    print(f"\nAirplanes ({len(result.airplanes)})")
    for plane in result.airplanes:
        route = f"{plane.origin} → {plane.destination}" if plane.has_route else "route unknown"
        print(f"  {plane.name:<20} {plane.plane_altitude_m:>7.0f} m  "
              f"{plane.ground_distance_km:>6.1f} km  {route}")

    reference = [b for b in result.celestial_bodies if not b.live]
    if reference:
        print("\nNo minor bodies above the horizon. Reference list:")
        for body in reference:
            print(f"  {body.name:<12} {body.body_type:<14} {body.description}")

    if args.csv:
        df = pd.concat([targets_to_dataframe(result.zenith_objects),
                        targets_to_dataframe(result.nearby_objects)], ignore_index=True)
        sanitize_csv_df(df).to_csv(args.csv, index=False)
        print(f"\nSaved {len(df)} rows to {args.csv}")
    return 0


if __name__ == "__main__":
    sys.exit(main())

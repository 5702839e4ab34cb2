# starbot/config.py
"""Scan configuration from YAML. A missing file or missing keys fall back to defaults."""

import os
from dataclasses import dataclass, field, fields
from typing import List

import yaml

from starbot.catalog import SATELLITE_GROUPS

DEFAULT_CONFIG_FILE = "scan_config.yaml"


@dataclass
class ScanConfig:
    zenith_tolerance_deg: float = 5.0
    nearby_tolerance_deg: float = 10.0

    max_satellites: int = 7
    max_per_constellation: int = 3
    constellations: List[str] = field(default_factory=lambda: ["starlink"])
    max_airplanes: int = 20
    max_planets: int = 15
    max_stars: int = 15
    max_minor_bodies: int = 5

    min_airplane_altitude_m: float = 1000
    max_airplane_altitude_m: float = 15000

    satellite_groups: List[str] = field(default_factory=lambda: list(SATELLITE_GROUPS))

    request_timeout_s: float = 8.0
    feed_timeout_s: float = 10.0
    route_timeout_s: float = 10.0
    cache_ttl_s: float = 300.0
    max_workers: int = 16

    enrich_routes: bool = True


def read_scan_config(path):
    """Load scan config YAML → dict with every default key present."""
    if path and os.path.exists(path):
        with open(path, "r") as f:
            data = yaml.safe_load(f) or {}
    else:
        data = {}
    defaults = ScanConfig()
    for f_ in fields(ScanConfig):
        # an empty YAML key ("constellations:") loads as None
        if data.get(f_.name) is None:
            data[f_.name] = getattr(defaults, f_.name)
    return data


def load_scan_config(path=DEFAULT_CONFIG_FILE):
    """ScanConfig from YAML. Unknown keys are ignored."""
    data = read_scan_config(path)
    known = {f_.name for f_ in fields(ScanConfig)}
    config = ScanConfig(**{k: v for k, v in data.items() if k in known})
    if config.nearby_tolerance_deg < config.zenith_tolerance_deg:
        raise ValueError(
            f"nearby_tolerance_deg ({config.nearby_tolerance_deg}) must be >= "
            f"zenith_tolerance_deg ({config.zenith_tolerance_deg})"
        )
    return config


def aviationstack_key():
    """AviationStack access key from the environment, or None."""
    return os.environ.get("AVIATIONSTACK_KEY") or None

# starbot/routes.py
"""Flight-route lookup for airplane callsigns via AviationStack."""

import logging
import re

import requests

from starbot.catalog import AIRLINE_ICAO_TO_IATA

logger = logging.getLogger(__name__)

AVIATIONSTACK_API = "http://api.aviationstack.com/v1/flights"

_CALLSIGN_RE = re.compile(r"^([A-Z]{2,3})(\d+)([A-Z])?$")


def extract_iata_from_callsign(callsign):
    """'IGO6021' -> '6E6021' for airlines in the ICAO->IATA map, else None."""
    match = _CALLSIGN_RE.match((callsign or "").strip().upper())
    if not match:
        return None
    iata = AIRLINE_ICAO_TO_IATA.get(match.group(1))
    if not iata:
        return None
    return iata + match.group(2)


def _query_route(params, access_key, base_url, timeout):
    resp = requests.get(base_url, params={"access_key": access_key, **params}, timeout=timeout)
    resp.raise_for_status()
    flights = resp.json().get("data") or []
    if not flights:
        return None
    flight = flights[0]
    dep = flight.get("departure") or {}
    arr = flight.get("arrival") or {}
    if not (dep.get("iata") and arr.get("iata")):
        return None
    return {
        "origin": dep["iata"],
        "destination": arr["iata"],
        "origin_name": dep.get("airport"),
        "destination_name": arr.get("airport"),
        "airline": (flight.get("airline") or {}).get("name"),
        "flight_number": (flight.get("flight") or {}).get("iata"),
    }


def lookup_route(callsign, access_key, base_url=AVIATIONSTACK_API, timeout=8):
    """Route dict for a callsign, or None when unknown or on any failure.

    Tries the callsign as an ICAO flight code first, then as an IATA flight
    number derived from the airline prefix.
    """
    callsign = (callsign or "").strip()
    if not callsign or callsign == "Unknown" or not access_key:
        return None

    attempts = [{"flight_icao": callsign}]
    iata = extract_iata_from_callsign(callsign)
    if iata:
        attempts.append({"flight_iata": iata})

    for params in attempts:
        try:
            route = _query_route(params, access_key, base_url, timeout)
        except (requests.exceptions.RequestException, ValueError, KeyError, AttributeError) as e:
            logger.warning(f"Route lookup {params} failed: {e}")
            continue
        if route:
            logger.debug(f"Route found for {callsign}: {route['origin']} -> {route['destination']}")
            return route

    logger.debug(f"No route data available for {callsign}")
    return None


def apply_route(airplane, route):
    """Copy route fields onto an Airplane in place. Returns the airplane."""
    if route:
        airplane.origin = route.get("origin")
        airplane.destination = route.get("destination")
        airplane.airline = route.get("airline")
        airplane.flight_number = route.get("flight_number")
    return airplane

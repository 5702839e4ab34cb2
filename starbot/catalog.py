# starbot/catalog.py
"""Static reference data: bright stars, Horizons body IDs, minor-body fallbacks, facts."""

import random

from starbot.models import AIRPLANE, MINOR_BODY, PLANET, SATELLITE

# (name, ra_hours, dec_deg, magnitude, constellation, spectral_type), J2000
BRIGHT_STARS = [
    ("Sirius", 6.7525, -16.7161, -1.46, "Canis Major", "A1V"),
    ("Canopus", 6.3992, -52.6956, -0.74, "Carina", "A9II"),
    ("Alpha Centauri A", 14.6599, -60.8350, -0.27, "Centaurus", "G2V"),
    ("Arcturus", 14.2610, 19.1825, -0.05, "Boötes", "K1.5III"),
    ("Vega", 18.6156, 38.7836, 0.03, "Lyra", "A0V"),
    ("Capella", 5.2781, 45.9980, 0.08, "Auriga", "G5III"),
    ("Rigel", 5.2423, -8.2017, 0.13, "Orion", "B8Ia"),
    ("Procyon", 7.6553, 5.2247, 0.34, "Canis Minor", "F5IV"),
    ("Achernar", 1.6285, -57.2367, 0.46, "Eridanus", "B3Vpe"),
    ("Betelgeuse", 5.9195, 7.4070, 0.50, "Orion", "M2Iab"),
    ("Hadar", 14.0637, -60.3730, 0.61, "Centaurus", "B1III"),
    ("Altair", 19.8464, 8.8683, 0.76, "Aquila", "A7V"),
    ("Acrux", 12.4433, -63.0990, 0.77, "Crux", "B0.5IV"),
    ("Aldebaran", 4.5987, 16.5093, 0.85, "Taurus", "K5III"),
    ("Spica", 13.4199, -11.1613, 0.98, "Virgo", "B1V"),
    ("Antares", 16.4901, -26.4320, 1.06, "Scorpius", "M1Ib"),
    ("Pollux", 7.7553, 28.0262, 1.14, "Gemini", "K0III"),
    ("Fomalhaut", 22.9608, -29.6222, 1.16, "Piscis Austrinus", "A3V"),
    ("Deneb", 20.6906, 45.2803, 1.25, "Cygnus", "A2Ia"),
    ("Mimosa", 12.7953, -59.6889, 1.25, "Crux", "B0.5III"),
    ("Regulus", 10.1395, 11.9672, 1.35, "Leo", "B7V"),
    ("Adhara", 6.9771, -28.9720, 1.50, "Canis Major", "B2II"),
    ("Castor", 7.5766, 31.8883, 1.58, "Gemini", "A1V"),
    ("Gacrux", 12.5194, -57.1131, 1.63, "Crux", "M3.5III"),
    ("Bellatrix", 5.4188, 6.3497, 1.64, "Orion", "B2III"),
    ("Shaula", 17.5603, -37.1038, 1.63, "Scorpius", "B1.5IV"),
    ("Elnath", 5.4381, 28.6075, 1.65, "Taurus", "B7III"),
    ("Miaplacidus", 9.2200, -69.7172, 1.68, "Carina", "A1III"),
    ("Alnilam", 5.6036, -1.2019, 1.69, "Orion", "B0Ia"),
    ("Regor", 8.1583, -47.3367, 1.74, "Vela", "WC8"),
    ("Alnair", 22.1372, -46.9611, 1.74, "Grus", "B7IV"),
    ("Alioth", 12.9004, 55.9598, 1.76, "Ursa Major", "A0p"),
    ("Alnitak", 5.6794, -1.9425, 1.77, "Orion", "O9Ib"),
    ("Dubhe", 11.0621, 61.7509, 1.79, "Ursa Major", "K0III"),
    ("Mirfak", 3.4054, 49.8612, 1.79, "Perseus", "F5Ib"),
    ("Wezen", 7.1397, -26.3932, 1.84, "Canis Major", "F8Ia"),
    ("Sargas", 17.6223, -42.9978, 1.87, "Scorpius", "F1II"),
    ("Kaus Australis", 18.4028, -34.3846, 1.85, "Sagittarius", "B9.5III"),
    ("Avior", 8.3753, -59.5097, 1.86, "Carina", "K3II"),
    ("Alkaid", 13.7923, 49.3133, 1.86, "Ursa Major", "B3V"),
    ("Menkalinan", 5.9925, 44.9475, 1.90, "Auriga", "A2IV"),
    ("Atria", 16.8110, -69.0278, 1.92, "Triangulum Australe", "K2IIb-IIIa"),
    ("Alhena", 6.6283, 16.3994, 1.93, "Gemini", "A0IV"),
    ("Peacock", 20.4274, -56.7350, 1.94, "Pavo", "B2IV"),
    ("Alsephina", 2.0970, -51.5164, 1.95, "Hydrus", "A1V"),
    ("Polaris", 2.5301, 89.2641, 1.98, "Ursa Minor", "F7Ib"),
    ("Mirzam", 6.3783, -17.9559, 2.00, "Canis Major", "B1II-III"),
    ("Alphard", 9.4597, -8.6586, 2.00, "Hydra", "K3II-III"),
    ("Hamal", 2.1196, 23.4624, 2.00, "Aries", "K2III"),
    ("Nunki", 18.9210, -26.2967, 2.02, "Sagittarius", "B2.5V"),
    ("Diphda", 0.7265, -17.9867, 2.04, "Cetus", "K0III"),
    ("Mizar", 13.3988, 54.9254, 2.04, "Ursa Major", "A2V"),
    ("Kochab", 14.8451, 74.1555, 2.08, "Ursa Minor", "K4III"),
    ("Saiph", 5.7959, -9.6697, 2.09, "Orion", "B0.5Ia"),
    ("Alpheratz", 0.1398, 29.0905, 2.06, "Andromeda", "A0p"),
    ("Rasalhague", 17.5822, 12.5600, 2.08, "Ophiuchus", "A5III"),
    ("Algol", 3.1362, 40.9557, 2.12, "Perseus", "B8V"),
    ("Denebola", 11.8177, 14.5721, 2.14, "Leo", "A3V"),
    ("Schedar", 0.6751, 56.5373, 2.23, "Cassiopeia", "K0III"),
    ("Naos", 8.0596, -40.0031, 2.25, "Puppis", "O5Ia"),
    ("Izar", 14.7499, 27.0742, 2.37, "Boötes", "K0II-III"),
    ("Enif", 21.7364, 9.8750, 2.39, "Pegasus", "K2Ib"),
    ("Scheat", 23.0628, 28.0828, 2.42, "Pegasus", "M2.5II-III"),
    ("Sabik", 17.1730, -15.7249, 2.43, "Ophiuchus", "A2.5IV"),
    ("Phecda", 11.8971, 53.6948, 2.44, "Ursa Major", "A0V"),
    ("Alderamin", 21.3099, 62.5855, 2.44, "Cepheus", "A7IV-V"),
    ("Aludra", 7.4014, -29.3031, 2.45, "Canis Major", "B5Ia"),
    ("Markab", 23.0794, 15.2053, 2.49, "Pegasus", "B9III"),
    ("Menkar", 3.0379, 4.0897, 2.53, "Cetus", "M1.5III"),
    ("Zubenelgenubi", 14.8479, -16.0417, 2.75, "Libra", "A3IV"),
    ("Acrab", 16.8359, -19.8058, 2.56, "Scorpius", "B0.5V"),
    ("Ankaa", 0.4381, -42.3061, 2.39, "Phoenix", "K0III"),
    ("Merak", 11.0307, 56.3824, 2.37, "Ursa Major", "A1V"),
    ("Eltanin", 17.9434, 51.4889, 2.23, "Draco", "K5III"),
    ("Caph", 0.1527, 59.1497, 2.27, "Cassiopeia", "F2III-IV"),
    ("Gienah", 12.2634, -17.5419, 2.59, "Corvus", "B8III"),
    ("Muhlifain", 12.6947, -48.9596, 2.69, "Centaurus", "A2IV"),
    ("Aspidiske", 9.2850, -59.2754, 2.76, "Carina", "A8Ib"),
    ("Dschubba", 16.0059, -22.6217, 2.29, "Scorpius", "B0.3IV"),
    ("Kaus Media", 18.3493, -29.8281, 2.70, "Sagittarius", "K2III"),
    ("Algieba", 10.3328, 19.8415, 2.61, "Leo", "K0III"),
    ("Zosma", 11.2358, 20.5236, 2.56, "Leo", "A4V"),
    ("Thuban", 14.0733, 64.3756, 3.65, "Draco", "A0III"),
    ("Alphecca", 15.5781, 26.7147, 2.23, "Corona Borealis", "A0V"),
    ("Unukalhai", 15.7378, 6.4256, 2.63, "Serpens", "K2III"),
    ("Rasalgethi", 17.2446, 14.3903, 3.48, "Hercules", "M5Ib-II"),
    ("Albireo", 19.5125, 27.9597, 3.18, "Cygnus", "K3II"),
    ("Tarazed", 19.7709, 10.6133, 2.72, "Aquila", "K3II"),
    ("Sadalmelik", 22.0964, -0.3199, 2.96, "Aquarius", "G2Ib"),
    ("Sadalsuud", 21.5256, -5.5711, 2.87, "Aquarius", "G0Ib"),
]

# Horizons COMMAND values for the major bodies
SOLAR_SYSTEM_BODIES = [
    {"id": "10", "name": "Sun"},
    {"id": "301", "name": "Moon"},
    {"id": "199", "name": "Mercury"},
    {"id": "299", "name": "Venus"},
    {"id": "499", "name": "Mars"},
    {"id": "599", "name": "Jupiter"},
    {"id": "699", "name": "Saturn"},
    {"id": "799", "name": "Uranus"},
    {"id": "899", "name": "Neptune"},
]

# Small bodies use the "<number>;" form so Horizons resolves them as asteroids
# rather than major-body IDs. Pluto keeps its major-body ID.
MINOR_BODIES = [
    {"id": "1;", "name": "Ceres", "type": "Dwarf Planet"},
    {"id": "999", "name": "Pluto", "type": "Dwarf Planet"},
    {"id": "136199;", "name": "Eris", "type": "Dwarf Planet"},
    {"id": "136472;", "name": "Makemake", "type": "Dwarf Planet"},
    {"id": "136108;", "name": "Haumea", "type": "Dwarf Planet"},
    {"id": "4;", "name": "Vesta", "type": "Asteroid"},
    {"id": "2;", "name": "Pallas", "type": "Asteroid"},
    {"id": "10;", "name": "Hygiea", "type": "Asteroid"},
    {"id": "704;", "name": "Interamnia", "type": "Asteroid"},
    {"id": "52;", "name": "Europa (Asteroid)", "type": "Asteroid"},
]

# Shown when no minor body resolves above the horizon. No positions: these
# are reference entries, not observations.
FALLBACK_MINOR_BODIES = [
    {
        "name": "Ceres",
        "type": "Dwarf Planet",
        "distance_au": 2.77,
        "description": "Largest object in the asteroid belt between Mars and Jupiter",
        "mean_radius_km": 473,
        "discovery_year": 1801,
        "moons": 0,
    },
    {
        "name": "Pluto",
        "type": "Dwarf Planet",
        "distance_au": 39.48,
        "description": "Dwarf planet in the Kuiper Belt, formerly the 9th planet",
        "mean_radius_km": 1188,
        "discovery_year": 1930,
        "moons": 5,
    },
    {
        "name": "Eris",
        "type": "Dwarf Planet",
        "distance_au": 67.7,
        "description": "Most massive dwarf planet, discovery led to Pluto's reclassification",
        "mean_radius_km": 1163,
        "discovery_year": 2005,
        "moons": 1,
    },
    {
        "name": "Makemake",
        "type": "Dwarf Planet",
        "distance_au": 45.8,
        "description": "Trans-Neptunian dwarf planet named after Easter Island deity",
        "mean_radius_km": 715,
        "discovery_year": 2005,
        "moons": 1,
    },
    {
        "name": "Haumea",
        "type": "Dwarf Planet",
        "distance_au": 43.3,
        "description": "Unusually elongated dwarf planet with rings and two moons",
        "mean_radius_km": 816,
        "discovery_year": 2004,
        "moons": 2,
    },
]

# CelesTrak GP groups
SATELLITE_GROUPS = ["stations", "visual", "starlink", "iridium-NEXT", "galileo", "gps-ops"]

# Airline ICAO designator -> IATA code, for turning transponder callsigns
# into flight numbers that the route API understands.
AIRLINE_ICAO_TO_IATA = {
    "IGO": "6E",  # IndiGo
    "AIC": "AI",  # Air India
    "UAL": "UA",
    "DAL": "DL",
    "SWA": "WN",
    "AAL": "AA",
    "AFR": "AF",
    "BAW": "BA",
    "DLH": "LH",
    "KLM": "KL",
    "UAE": "EK",
    "QTR": "QR",
    "SIA": "SQ",
    "JAL": "JL",
    "ANA": "NH",
}


def describe_minor_body(body_type):
    """One-line description for a minor body type."""
    if body_type == "Dwarf Planet":
        return "Dwarf planet in the solar system"
    if body_type == "Asteroid":
        return "Asteroid"
    if body_type == "Comet":
        return "Icy body with characteristic tail when near the Sun"
    return "Interesting celestial object"

# Canned facts shown for a target, keyed by kind
FALLBACK_FACTS = {
    SATELLITE: [
        "This satellite orbits Earth multiple times per day, traveling at speeds over 27,000 km/h.",
        "Satellites like this help us with GPS navigation, weather forecasting, and global communications.",
        "This satellite is one of thousands orbiting Earth, forming a network in the sky above us.",
    ],
    AIRPLANE: [
        "This aircraft is cruising at high altitude, connecting people and places across the globe.",
    ],
    PLANET: [
        "{name} is one of the fascinating objects in our solar system, with unique characteristics.",
    ],
    MINOR_BODY: [
        "{name} is one of the fascinating objects in our solar system, with unique characteristics.",
    ],
}
DEFAULT_FACT = "An interesting celestial object worth learning more about!"


def fallback_fact(target, choice=random.choice):
    """One canned fact for ``target``; ``choice`` picks among several."""
    facts = FALLBACK_FACTS.get(target.kind)
    if not facts:
        return DEFAULT_FACT
    return choice(facts).format(name=target.name)

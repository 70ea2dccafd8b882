"""Deterministic display names for galaxies and bodies."""
from __future__ import annotations

from typing import Tuple

from universe.generation.seeding import derive_seed

CATALOG_PREFIXES: Tuple[str, ...] = ("NGC", "UGC", "ESO", "MCG", "CGCG", "IC", "PGC", "Mrk", "Arp")

CONSTELLATIONS: Tuple[str, ...] = (
    "Andromeda", "Antlia", "Apus", "Aquarius", "Aquila", "Ara", "Aries", "Auriga",
    "Bootes", "Caelum", "Camelopardalis", "Cancer", "Canes Venatici", "Canis Major", "Canis Minor",
    "Capricornus", "Carina", "Cassiopeia", "Centaurus", "Cepheus", "Cetus", "Chamaeleon",
    "Circinus", "Columba", "Coma Berenices", "Corona Australis", "Corona Borealis", "Corvus",
    "Crater", "Crux", "Cygnus", "Delphinus", "Dorado", "Draco", "Equuleus", "Eridanus",
    "Fornax", "Gemini", "Grus", "Hercules", "Horologium", "Hydra", "Hydrus", "Indus",
    "Lacerta", "Leo", "Leo Minor", "Lepus", "Libra", "Lupus", "Lynx", "Lyra",
    "Mensa", "Microscopium", "Monoceros", "Musca", "Norma", "Octans", "Ophiuchus", "Orion",
    "Pavo", "Pegasus", "Perseus", "Phoenix", "Pictor", "Pisces", "Piscis Austrinus",
    "Puppis", "Pyxis", "Reticulum", "Sagitta", "Sagittarius", "Scorpius", "Sculptor",
    "Scutum", "Serpens", "Sextans", "Taurus", "Telescopium", "Triangulum", "Triangulum Australe",
    "Tucana", "Ursa Major", "Ursa Minor", "Vela", "Virgo", "Volans", "Vulpecula",
)

STAR_PREFIXES: Tuple[str, ...] = (
    "Kepler", "TRAPPIST", "Gliese", "Ross", "Wolf", "Luyten", "Lacaille",
    "Groombridge", "Lalande", "Struve", "HD", "HIP", "LHS", "WISE", "EPIC",
    "TOI", "KOI", "K2", "WASP", "HAT", "XO", "CoRoT", "OGLE", "MOA",
)


def _name_hash(identifier: str) -> int:
    return derive_seed(0, identifier)


def _declination(value: int) -> str:
    dec = value % 180 - 90
    sign = "+" if dec >= 0 else "-"
    return f"{sign}{abs(dec):02d}"


def _orbit_letter(orbit_index: int) -> str:
    if orbit_index < 25:
        return chr(ord("b") + orbit_index)
    return str(orbit_index + 1)


def galaxy_name(galaxy_id: str) -> str:
    """Catalog, constellation or coordinate style name for ``galaxy_id``."""

    value = _name_hash(galaxy_id)
    style = value % 3
    if style == 0:
        catalog = CATALOG_PREFIXES[value % len(CATALOG_PREFIXES)]
        suffix = ("", "A", "B", "C")[value % 4]
        return f"{catalog} {100 + value % 9000}{suffix}"
    if style == 1:
        constellation = CONSTELLATIONS[value % len(CONSTELLATIONS)]
        return f"{chr(65 + value % 26)} {constellation}"
    return f"J{value % 24:02d}{_declination(value)}-{value % 1000:03d}"


def body_name(body_seed: int, orbit_index: int) -> str:
    value = _name_hash(f"planet_{body_seed}")
    style = value % 3
    letter = _orbit_letter(orbit_index)
    if style == 0:
        prefix = STAR_PREFIXES[value % len(STAR_PREFIXES)]
        return f"{prefix}-{10 + value % 9990} {letter}"
    if style == 1:
        sector = chr(65 + value % 26)
        subsector = chr(65 + (value >> 8) % 26)
        return f"{100 + value % 900}-{sector}{subsector}-{orbit_index + 1}"
    return f"J{value % 24:02d}{value % 60:02d}{_declination(value)}.{letter}"


__all__ = ["galaxy_name", "body_name"]

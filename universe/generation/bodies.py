"""Deterministic synthesis of a single celestial body."""
from __future__ import annotations

import json
import math
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple, Union

from universe.config.tables import (
    BodyType,
    ConfigurationTables,
    LayerBand,
    RingSizeRange,
)
from universe.engine.logger import GenerationLogger, resolve_channel
from universe.generation.naming import body_name
from universe.generation.seeding import HierarchicalPath, SeededStream, body_identifier
from universe.generation.selection import select_category


Vector3 = Tuple[float, float, float]

ORIGIN: Vector3 = (0.0, 0.0, 0.0)
RING_AXIS: Vector3 = (0.0, 1.0, 0.0)


def orbital_period(radius: float) -> float:
    """Period in days from orbital radius, ``period ∝ radius ** 1.5``."""

    return (radius / 100.0) ** 1.5 * 365.0


@dataclass(frozen=True)
class SphereSize:
    radius: float

    def to_dict(self) -> Dict[str, float]:
        return {"radius": self.radius}


@dataclass(frozen=True)
class RingSize:
    major_radius: float
    minor_radius: float

    def to_dict(self) -> Dict[str, float]:
        return {"major_radius": self.major_radius, "minor_radius": self.minor_radius}


BodySize = Union[SphereSize, RingSize]


def body_size_from_dict(data: Dict[str, Any]) -> BodySize:
    if "major_radius" in data:
        return RingSize(major_radius=float(data["major_radius"]), minor_radius=float(data["minor_radius"]))
    return SphereSize(radius=float(data["radius"]))


@dataclass(frozen=True)
class SphereGravity:
    radius: float
    center: Vector3 = ORIGIN

    def to_dict(self) -> Dict[str, Any]:
        return {"type": "point", "params": {"center": list(self.center), "radius": self.radius}}


@dataclass(frozen=True)
class RingworldGravity:
    major_radius: float
    minor_radius: float
    center: Vector3 = ORIGIN
    axis: Vector3 = RING_AXIS

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": "ring",
            "params": {
                "center": list(self.center),
                "major_radius": self.major_radius,
                "minor_radius": self.minor_radius,
                "axis": list(self.axis),
            },
        }


GravityShape = Union[SphereGravity, RingworldGravity]


def gravity_shape_from_dict(data: Dict[str, Any]) -> GravityShape:
    params = data.get("params", {})
    center = tuple(float(v) for v in params.get("center", ORIGIN))
    if data.get("type") == "ring":
        return RingworldGravity(
            major_radius=float(params["major_radius"]),
            minor_radius=float(params["minor_radius"]),
            center=center,
            axis=tuple(float(v) for v in params.get("axis", RING_AXIS)),
        )
    return SphereGravity(radius=float(params["radius"]), center=center)


@dataclass(frozen=True)
class OrbitalParameters:
    radius: float
    period: float
    inclination: float
    eccentricity: float
    phase: float

    def to_dict(self) -> Dict[str, float]:
        return {
            "radius": self.radius,
            "period": self.period,
            "inclination": self.inclination,
            "eccentricity": self.eccentricity,
            "phase": self.phase,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "OrbitalParameters":
        return cls(
            radius=float(data["radius"]),
            period=float(data["period"]),
            inclination=float(data["inclination"]),
            eccentricity=float(data["eccentricity"]),
            phase=float(data["phase"]),
        )


@dataclass
class BodyParams:
    """Everything downstream synthesis needs to build one body.

    ``generated`` and ``generated_chunks`` belong to the terrain consumer;
    generation only initialises them.
    """

    seed: int
    body_type: BodyType
    size: BodySize
    orbital: OrbitalParameters
    biome_distribution: Dict[str, float]
    layers: Tuple[LayerBand, ...]
    gravity_shape: GravityShape
    terrain_min_height: float
    terrain_max_height: float
    water_level: float
    galaxy_index: int
    system_index: int
    body_index: int
    name: str = ""
    generated: bool = False
    generated_chunks: int = 0

    @property
    def path(self) -> HierarchicalPath:
        return HierarchicalPath(self.galaxy_index, self.system_index, self.body_index)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "seed": self.seed,
            "name": self.name,
            "body_type": self.body_type.value,
            "size": self.size.to_dict(),
            "orbital": self.orbital.to_dict(),
            "biome_distribution": dict(self.biome_distribution),
            "layers": [band.to_dict() for band in self.layers],
            "gravity_shape": self.gravity_shape.to_dict(),
            "terrain_min_height": self.terrain_min_height,
            "terrain_max_height": self.terrain_max_height,
            "water_level": self.water_level,
            "galaxy_index": self.galaxy_index,
            "system_index": self.system_index,
            "body_index": self.body_index,
            "generated": self.generated,
            "generated_chunks": self.generated_chunks,
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BodyParams":
        return cls(
            seed=int(data["seed"]),
            name=str(data.get("name", "")),
            body_type=BodyType.parse(data["body_type"]),
            size=body_size_from_dict(data["size"]),
            orbital=OrbitalParameters.from_dict(data["orbital"]),
            biome_distribution={str(k): float(v) for k, v in data["biome_distribution"].items()},
            layers=tuple(LayerBand.from_dict(band) for band in data.get("layers", [])),
            gravity_shape=gravity_shape_from_dict(data["gravity_shape"]),
            terrain_min_height=float(data["terrain_min_height"]),
            terrain_max_height=float(data["terrain_max_height"]),
            water_level=float(data["water_level"]),
            galaxy_index=int(data["galaxy_index"]),
            system_index=int(data["system_index"]),
            body_index=int(data["body_index"]),
            generated=bool(data.get("generated", False)),
            generated_chunks=int(data.get("generated_chunks", 0)),
        )


# (biome, base weight, random spread); a spread of None is a constant weight.
BiomeFormula = Tuple[Tuple[str, float, Optional[float]], ...]

BIOME_FORMULAS: Dict[BodyType, BiomeFormula] = {
    BodyType.TERRESTRIAL: (
        ("grassland", 20.0, 10.0),
        ("forest", 15.0, 10.0),
        ("ocean", 20.0, 15.0),
        ("desert", 10.0, 10.0),
        ("mountains", 10.0, 5.0),
        ("ice", 5.0, 5.0),
    ),
    BodyType.GAS_GIANT: (("atmosphere", 100.0, None),),
    BodyType.RINGWORLD: (
        ("grassland", 25.0, 10.0),
        ("forest", 20.0, 10.0),
        ("ocean", 15.0, 10.0),
        ("desert", 15.0, 10.0),
        ("mountains", 15.0, 5.0),
    ),
    BodyType.ICE_PLANET: (
        ("ice", 60.0, 20.0),
        ("mountains", 20.0, 10.0),
        ("ocean", 10.0, 10.0),
    ),
    BodyType.LAVA_PLANET: (
        ("lava", 50.0, 20.0),
        ("volcanic", 30.0, 10.0),
        ("mountains", 10.0, 10.0),
    ),
    BodyType.BARREN: (
        ("desert", 50.0, 20.0),
        ("mountains", 30.0, 15.0),
        ("void", 10.0, 10.0),
    ),
}


class BodyParameterSynthesizer:
    """Produce :class:`BodyParams` from a master seed and an index path.

    All steps draw from one stream in a fixed order; changing the order
    changes every value derived for a given seed.
    """

    BASE_ORBIT_RADIUS = 150.0
    ORBIT_SLOT_SPACING = 100.0
    ORBIT_VARIATION = 50.0
    INCLINATION_SPREAD = 10.0
    MAX_ECCENTRICITY = 0.1

    def __init__(self, tables: ConfigurationTables, logger: Optional[GenerationLogger] = None) -> None:
        self.tables = tables
        self._log = resolve_channel(logger, "bodies")

    def synthesize(self, path: HierarchicalPath, master_seed: int) -> BodyParams:
        seed = path.body_seed(master_seed)
        stream = SeededStream(seed)

        body_type = self._select_body_type(stream)
        size = self._generate_size(body_type, stream)
        orbital = self._generate_orbit(path.body_index, stream)
        biomes = self._generate_biomes(body_type, stream)
        layers = self.tables.layer_template(body_type)
        gravity_shape = self._gravity_shape(size)
        defaults = self.tables.body_defaults

        self._log.debug(
            "Synthesised %s body %s (seed %d, orbit %.1f)",
            body_type.value,
            body_identifier(path.galaxy_index, path.system_index, path.body_index),
            seed,
            orbital.radius,
        )
        return BodyParams(
            seed=seed,
            body_type=body_type,
            size=size,
            orbital=orbital,
            biome_distribution=biomes,
            layers=layers,
            gravity_shape=gravity_shape,
            terrain_min_height=defaults.terrain_min_height,
            terrain_max_height=defaults.terrain_max_height,
            water_level=defaults.water_level_for(body_type),
            galaxy_index=path.galaxy_index,
            system_index=path.system_index,
            body_index=path.body_index,
            name=body_name(seed, path.body_index),
        )

    def _select_body_type(self, stream: SeededStream) -> BodyType:
        return select_category(self.tables.probability_items(), stream.next(), BodyType.TERRESTRIAL)

    def _generate_size(self, body_type: BodyType, stream: SeededStream) -> BodySize:
        size_range = self.tables.size_range(body_type)
        if isinstance(size_range, RingSizeRange):
            major = size_range.major_radius.sample(stream.next())
            minor = size_range.minor_radius.sample(stream.next())
            return RingSize(major_radius=major, minor_radius=minor)
        return SphereSize(radius=size_range.radius.sample(stream.next()))

    def _generate_orbit(self, body_index: int, stream: SeededStream) -> OrbitalParameters:
        # Loose per-slot seeding; the spacing pass enforces real separation.
        base_radius = self.BASE_ORBIT_RADIUS + body_index * self.ORBIT_SLOT_SPACING
        radius = base_radius + (stream.next() - 0.5) * self.ORBIT_VARIATION
        return OrbitalParameters(
            radius=radius,
            period=orbital_period(radius),
            inclination=(stream.next() - 0.5) * self.INCLINATION_SPREAD,
            eccentricity=stream.next() * self.MAX_ECCENTRICITY,
            phase=stream.next() * 2.0 * math.pi,
        )

    def _generate_biomes(self, body_type: BodyType, stream: SeededStream) -> Dict[str, float]:
        formula = BIOME_FORMULAS.get(body_type, BIOME_FORMULAS[BodyType.TERRESTRIAL])
        distribution: Dict[str, float] = {}
        for biome, base, spread in formula:
            distribution[biome] = base if spread is None else base + stream.next() * spread
        return distribution

    def _gravity_shape(self, size: BodySize) -> GravityShape:
        if isinstance(size, RingSize):
            return RingworldGravity(major_radius=size.major_radius, minor_radius=size.minor_radius)
        return SphereGravity(radius=size.radius)


def synthesize_body(
    path: HierarchicalPath,
    master_seed: int,
    tables: ConfigurationTables,
    logger: Optional[GenerationLogger] = None,
) -> BodyParams:
    return BodyParameterSynthesizer(tables, logger).synthesize(path, master_seed)


__all__ = [
    "BIOME_FORMULAS",
    "BodyParameterSynthesizer",
    "BodyParams",
    "BodySize",
    "GravityShape",
    "OrbitalParameters",
    "RingSize",
    "RingworldGravity",
    "SphereGravity",
    "SphereSize",
    "orbital_period",
    "synthesize_body",
]

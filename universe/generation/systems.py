"""Star system assembly: body count, bodies, spacing repair, star and placement."""
from __future__ import annotations

import json
import math
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from pygame.math import Vector3

from universe.config.tables import ConfigurationTables
from universe.engine.logger import GenerationLogger, resolve_channel
from universe.generation.bodies import BodyParameterSynthesizer, BodyParams
from universe.generation.seeding import HierarchicalPath, SeededStream
from universe.generation.selection import select_category
from universe.generation.spacing import SpacingValidator, gravity_radius


@dataclass(frozen=True)
class StarDescriptor:
    type: str
    temperature: float

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type, "temperature": self.temperature}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "StarDescriptor":
        return cls(type=str(data["type"]), temperature=float(data["temperature"]))


# Star classes with their selection weights, in selection order.
STAR_TYPES: Tuple[Tuple[StarDescriptor, float], ...] = (
    (StarDescriptor("yellow", 5778.0), 0.35),
    (StarDescriptor("red", 3500.0), 0.30),
    (StarDescriptor("orange", 4500.0), 0.20),
    (StarDescriptor("white", 8000.0), 0.10),
    (StarDescriptor("blue", 15000.0), 0.05),
)
DEFAULT_STAR = STAR_TYPES[0][0]


Coordinates = Tuple[float, float, float]


def coordinates_to_dict(coordinates: Coordinates) -> Dict[str, float]:
    x, y, z = coordinates
    return {"x": x, "y": y, "z": z}


def coordinates_from_dict(data: Dict[str, Any]) -> Coordinates:
    return (float(data["x"]), float(data["y"]), float(data["z"]))


@dataclass(frozen=True)
class SystemConfig:
    """Generated star system.

    Compared by value but not hashable, since ``bodies`` holds mutable
    :class:`BodyParams`. The placement is stored as a plain tuple;
    ``position`` hands out a fresh ``Vector3`` on every access.
    """

    seed: int
    galaxy_index: int
    system_index: int
    star: StarDescriptor
    capture_radius: float
    bodies: Tuple[BodyParams, ...]
    coordinates: Coordinates
    tables_fingerprint: str = ""

    __hash__ = None

    @property
    def position(self) -> Vector3:
        return Vector3(self.coordinates)

    @property
    def farthest_body(self) -> Optional[BodyParams]:
        return self.bodies[-1] if self.bodies else None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "seed": self.seed,
            "galaxy_index": self.galaxy_index,
            "system_index": self.system_index,
            "star": self.star.to_dict(),
            "capture_radius": self.capture_radius,
            "bodies": [body.to_dict() for body in self.bodies],
            "position": coordinates_to_dict(self.coordinates),
            "tables_fingerprint": self.tables_fingerprint,
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SystemConfig":
        return cls(
            seed=int(data["seed"]),
            galaxy_index=int(data["galaxy_index"]),
            system_index=int(data["system_index"]),
            star=StarDescriptor.from_dict(data["star"]),
            capture_radius=float(data["capture_radius"]),
            bodies=tuple(BodyParams.from_dict(body) for body in data.get("bodies", [])),
            coordinates=coordinates_from_dict(data["position"]),
            tables_fingerprint=str(data.get("tables_fingerprint", "")),
        )

    @classmethod
    def from_json(cls, payload: str) -> "SystemConfig":
        return cls.from_dict(json.loads(payload))


class SystemAssembler:
    """Generate a complete :class:`SystemConfig` for one system index."""

    POSITION_FLATTENING = 0.1

    def __init__(self, tables: ConfigurationTables, logger: Optional[GenerationLogger] = None) -> None:
        self.tables = tables
        self._log = resolve_channel(logger, "systems")
        self._synthesizer = BodyParameterSynthesizer(tables, logger)
        self._validator = SpacingValidator(tables.collision, logger)

    def generate(self, master_seed: int, galaxy_index: int, system_index: int) -> SystemConfig:
        system_path = HierarchicalPath(galaxy_index, system_index)
        seed = system_path.system_seed(master_seed)
        stream = SeededStream(seed)

        counts = self.tables.supercluster.bodies_per_system
        body_count = int(math.floor(counts.sample(stream.next())))
        bodies = [
            self._synthesizer.synthesize(HierarchicalPath(galaxy_index, system_index, index), master_seed)
            for index in range(body_count)
        ]
        validated = self._validator.validate(bodies)
        capture_radius = self._capture_radius(validated)
        star = select_category(STAR_TYPES, stream.next(), DEFAULT_STAR)

        spacing = self.tables.supercluster.galaxy_spacing
        coordinates = (
            (stream.next() - 0.5) * spacing,
            (stream.next() - 0.5) * spacing * self.POSITION_FLATTENING,
            (stream.next() - 0.5) * spacing,
        )
        self._log.debug(
            "System %d/%d: %d bodies, %s star, capture radius %.1f",
            galaxy_index,
            system_index,
            len(validated),
            star.type,
            capture_radius,
        )
        return SystemConfig(
            seed=seed,
            galaxy_index=galaxy_index,
            system_index=system_index,
            star=star,
            capture_radius=capture_radius,
            bodies=validated,
            coordinates=coordinates,
            tables_fingerprint=self.tables.fingerprint(),
        )

    def _capture_radius(self, bodies: Tuple[BodyParams, ...]) -> float:
        if not bodies:
            return 0.0
        farthest = bodies[-1]
        collision = self.tables.collision
        return (farthest.orbital.radius + gravity_radius(farthest, collision)) * collision.system_capture_multiplier


def generate_system(
    master_seed: int,
    galaxy_index: int,
    system_index: int,
    tables: ConfigurationTables,
    logger: Optional[GenerationLogger] = None,
) -> SystemConfig:
    return SystemAssembler(tables, logger).generate(master_seed, galaxy_index, system_index)


__all__ = [
    "DEFAULT_STAR",
    "STAR_TYPES",
    "StarDescriptor",
    "SystemAssembler",
    "SystemConfig",
    "generate_system",
]

"""Galaxy-level descriptors within the supercluster."""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Dict, Optional

from pygame.math import Vector3

from universe.config.tables import ConfigurationTables
from universe.engine.logger import GenerationLogger, resolve_channel
from universe.generation.naming import galaxy_name
from universe.generation.seeding import SeededStream, derive_seed, galaxy_identifier
from universe.generation.systems import Coordinates, coordinates_from_dict, coordinates_to_dict


@dataclass(frozen=True)
class GalaxyDescriptor:
    seed: int
    galaxy_index: int
    name: str
    system_count: int
    coordinates: Coordinates

    @property
    def position(self) -> Vector3:
        return Vector3(self.coordinates)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "seed": self.seed,
            "galaxy_index": self.galaxy_index,
            "name": self.name,
            "system_count": self.system_count,
            "position": coordinates_to_dict(self.coordinates),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GalaxyDescriptor":
        return cls(
            seed=int(data["seed"]),
            galaxy_index=int(data["galaxy_index"]),
            name=str(data["name"]),
            system_count=int(data["system_count"]),
            coordinates=coordinates_from_dict(data["position"]),
        )


class GalaxyAssembler:
    POSITION_FLATTENING = 0.1

    def __init__(self, tables: ConfigurationTables, logger: Optional[GenerationLogger] = None) -> None:
        self.tables = tables
        self._log = resolve_channel(logger, "galaxies")

    def generate(self, master_seed: int, galaxy_index: int) -> GalaxyDescriptor:
        settings = self.tables.supercluster
        if not 0 <= galaxy_index < settings.galaxy_count:
            raise IndexError(f"galaxy index {galaxy_index} outside supercluster of {settings.galaxy_count}")
        seed = derive_seed(master_seed, galaxy_identifier(galaxy_index))
        stream = SeededStream(seed)
        system_count = int(math.floor(settings.systems_per_galaxy.sample(stream.next())))
        radius = settings.supercluster_radius
        coordinates = (
            (stream.next() - 0.5) * radius,
            (stream.next() - 0.5) * radius * self.POSITION_FLATTENING,
            (stream.next() - 0.5) * radius,
        )
        name = galaxy_name(f"galaxy_{seed}")
        self._log.debug("Galaxy %d (%s): %d systems", galaxy_index, name, system_count)
        return GalaxyDescriptor(
            seed=seed,
            galaxy_index=galaxy_index,
            name=name,
            system_count=system_count,
            coordinates=coordinates,
        )


def generate_galaxy(
    master_seed: int,
    galaxy_index: int,
    tables: ConfigurationTables,
    logger: Optional[GenerationLogger] = None,
) -> GalaxyDescriptor:
    return GalaxyAssembler(tables, logger).generate(master_seed, galaxy_index)


__all__ = ["GalaxyAssembler", "GalaxyDescriptor", "generate_galaxy"]

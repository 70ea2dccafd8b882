"""Facade binding a master seed to a configuration snapshot."""
from __future__ import annotations

import json
import random
from typing import Any, Dict, Iterator, Optional

from universe.config.tables import ConfigurationTables
from universe.engine.logger import GenerationLogger
from universe.generation.bodies import BodyParameterSynthesizer, BodyParams
from universe.generation.galaxies import GalaxyAssembler, GalaxyDescriptor
from universe.generation.seeding import HierarchicalPath, INT32_MAX
from universe.generation.systems import SystemAssembler, SystemConfig


class Universe:
    """Lazy, stateless access to every generated galaxy, system and body.

    Nothing is cached: each call recomputes from ``(master_seed, path,
    tables)``, so independent instances built from the same inputs agree.
    """

    def __init__(
        self,
        master_seed: int,
        tables: Optional[ConfigurationTables] = None,
        logger: Optional[GenerationLogger] = None,
    ) -> None:
        self.master_seed = master_seed
        self.tables = tables or ConfigurationTables.default()
        self._logger = logger
        self._galaxies = GalaxyAssembler(self.tables, logger)
        self._systems = SystemAssembler(self.tables, logger)
        self._bodies = BodyParameterSynthesizer(self.tables, logger)

    def galaxy(self, galaxy_index: int) -> GalaxyDescriptor:
        return self._galaxies.generate(self.master_seed, galaxy_index)

    def galaxies(self) -> Iterator[GalaxyDescriptor]:
        for index in range(self.tables.supercluster.galaxy_count):
            yield self.galaxy(index)

    def system(self, galaxy_index: int, system_index: int) -> SystemConfig:
        galaxy = self.galaxy(galaxy_index)
        if not 0 <= system_index < galaxy.system_count:
            raise IndexError(f"system index {system_index} outside galaxy {galaxy_index} of {galaxy.system_count}")
        return self._systems.generate(self.master_seed, galaxy_index, system_index)

    def body(self, galaxy_index: int, system_index: int, body_index: int) -> BodyParams:
        """Raw synthesised body, before the system's spacing repair."""

        return self._bodies.synthesize(HierarchicalPath(galaxy_index, system_index, body_index), self.master_seed)

    def with_tables(self, tables: ConfigurationTables) -> "Universe":
        return Universe(self.master_seed, tables, self._logger)

    def randomize_seed(self, rng: Optional[random.Random] = None) -> "Universe":
        """New universe with a fresh master seed; every derived body changes."""

        rng = rng or random.Random()
        return Universe(rng.randrange(INT32_MAX), self.tables, self._logger)

    def to_dict(self) -> Dict[str, Any]:
        return {"master_seed": self.master_seed, "tables": self.tables.to_dict()}

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2)

    @classmethod
    def from_dict(cls, data: Dict[str, Any], logger: Optional[GenerationLogger] = None) -> "Universe":
        return cls(int(data["master_seed"]), ConfigurationTables.from_dict(data.get("tables", {})), logger)


__all__ = ["Universe"]

"""Configuration tables read by the generators.

A :class:`ConfigurationTables` instance is an immutable snapshot. Edits go
through the ``with_*`` methods, which validate the result and return a new
snapshot with a bumped ``version``; generation never sees a half-applied
edit. Treat the mapping fields as read-only.
"""
from __future__ import annotations

import dataclasses
import hashlib
import json
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, Iterable, List, Mapping, Tuple, Union

PROBABILITY_TOLERANCE = 1e-9


class ConfigurationError(ValueError):
    """Raised when a table edit would break a configuration invariant."""


class BodyType(str, Enum):
    TERRESTRIAL = "terrestrial"
    GAS_GIANT = "gasGiant"
    RINGWORLD = "ringworld"
    ICE_PLANET = "icePlanet"
    LAVA_PLANET = "lavaPlanet"
    BARREN = "barren"

    @classmethod
    def parse(cls, label: Union[str, "BodyType"]) -> "BodyType":
        try:
            return cls(label)
        except ValueError:
            return cls.TERRESTRIAL


class LayerMode(str, Enum):
    UNIFORM = "uniform"
    SIMPLE = "simple"
    FULL = "full"


@dataclass(frozen=True)
class ValueRange:
    min: float
    max: float

    def sample(self, draw: float) -> float:
        return self.min + draw * (self.max - self.min)

    def to_dict(self) -> Dict[str, float]:
        return {"min": self.min, "max": self.max}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], cast: Callable[[Any], Any] = float) -> "ValueRange":
        return cls(min=cast(data["min"]), max=cast(data["max"]))


@dataclass(frozen=True)
class SphereSizeRange:
    radius: ValueRange

    def to_dict(self) -> Dict[str, Any]:
        return self.radius.to_dict()


@dataclass(frozen=True)
class RingSizeRange:
    major_radius: ValueRange
    minor_radius: ValueRange

    def to_dict(self) -> Dict[str, Any]:
        return {
            "major_radius": self.major_radius.to_dict(),
            "minor_radius": self.minor_radius.to_dict(),
        }


SizeRange = Union[SphereSizeRange, RingSizeRange]


def size_range_from_dict(data: Mapping[str, Any]) -> SizeRange:
    if "major_radius" in data:
        return RingSizeRange(
            major_radius=ValueRange.from_dict(data["major_radius"]),
            minor_radius=ValueRange.from_dict(data["minor_radius"]),
        )
    return SphereSizeRange(radius=ValueRange.from_dict(data))


@dataclass(frozen=True)
class LayerBand:
    """A depth band of a body, as a fraction of its radius."""

    name: str
    depth_range: Tuple[float, float]
    material: Union[int, str]
    mode: LayerMode

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "depth_range": list(self.depth_range),
            "material": self.material,
            "mode": self.mode.value,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "LayerBand":
        start, end = data["depth_range"]
        return cls(
            name=str(data["name"]),
            depth_range=(float(start), float(end)),
            material=data["material"],
            mode=LayerMode(data.get("mode", LayerMode.UNIFORM.value)),
        )


PLANETARY_LAYERS: Tuple[LayerBand, ...] = (
    LayerBand("inner_core", (0.0, 0.2), 7, LayerMode.UNIFORM),
    LayerBand("outer_core", (0.2, 0.4), 6, LayerMode.UNIFORM),
    LayerBand("mantle", (0.4, 0.85), 1, LayerMode.SIMPLE),
    LayerBand("crust", (0.85, 1.0), "biome", LayerMode.FULL),
)

RINGWORLD_LAYERS: Tuple[LayerBand, ...] = (
    LayerBand("structural_core", (0.0, 0.5), 7, LayerMode.UNIFORM),
    LayerBand("foundation", (0.5, 0.85), 1, LayerMode.SIMPLE),
    LayerBand("surface", (0.85, 1.0), "biome", LayerMode.FULL),
)


@dataclass(frozen=True)
class SuperclusterSettings:
    name: str = "Laniakea"
    galaxy_count: int = 10
    systems_per_galaxy: ValueRange = ValueRange(50, 200)
    bodies_per_system: ValueRange = ValueRange(2, 12)
    supercluster_radius: float = 100000.0
    galaxy_spacing: float = 8000.0
    system_spacing: float = 500.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "galaxy_count": self.galaxy_count,
            "systems_per_galaxy": self.systems_per_galaxy.to_dict(),
            "bodies_per_system": self.bodies_per_system.to_dict(),
            "supercluster_radius": self.supercluster_radius,
            "galaxy_spacing": self.galaxy_spacing,
            "system_spacing": self.system_spacing,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SuperclusterSettings":
        defaults = cls()
        return cls(
            name=str(data.get("name", defaults.name)),
            galaxy_count=int(data.get("galaxy_count", defaults.galaxy_count)),
            systems_per_galaxy=ValueRange.from_dict(
                data.get("systems_per_galaxy", defaults.systems_per_galaxy.to_dict()), int
            ),
            bodies_per_system=ValueRange.from_dict(
                data.get("bodies_per_system", defaults.bodies_per_system.to_dict()), int
            ),
            supercluster_radius=float(data.get("supercluster_radius", defaults.supercluster_radius)),
            galaxy_spacing=float(data.get("galaxy_spacing", defaults.galaxy_spacing)),
            system_spacing=float(data.get("system_spacing", defaults.system_spacing)),
        )


@dataclass(frozen=True)
class CollisionSettings:
    orbital_spacing_multiplier: float = 2.5
    gravity_radius_multiplier: float = 0.6
    system_capture_multiplier: float = 1.15

    def to_dict(self) -> Dict[str, float]:
        return dataclasses.asdict(self)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "CollisionSettings":
        defaults = cls()
        return cls(**{f.name: float(data.get(f.name, getattr(defaults, f.name))) for f in dataclasses.fields(cls)})


@dataclass(frozen=True)
class GenerationZones:
    """Streaming radii in chunks. Passed through untouched to the streaming layer."""

    pre_generation_radius: int = 64
    active_radius: int = 32
    core_only_radius: int = 128
    unload_radius: int = 256

    def to_dict(self) -> Dict[str, int]:
        return dataclasses.asdict(self)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "GenerationZones":
        defaults = cls()
        return cls(**{f.name: int(data.get(f.name, getattr(defaults, f.name))) for f in dataclasses.fields(cls)})


def _default_water_overrides() -> Dict[BodyType, float]:
    return {BodyType.ICE_PLANET: 120.0, BodyType.LAVA_PLANET: 0.0}


@dataclass(frozen=True)
class BodyDefaults:
    terrain_min_height: float = -15.0
    terrain_max_height: float = 50.0
    # Percentage of the body radius.
    water_level: float = 100.0
    water_level_overrides: Dict[BodyType, float] = field(default_factory=_default_water_overrides)

    def water_level_for(self, body_type: BodyType) -> float:
        return self.water_level_overrides.get(body_type, self.water_level)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "terrain_min_height": self.terrain_min_height,
            "terrain_max_height": self.terrain_max_height,
            "water_level": self.water_level,
            "water_level_overrides": {
                body_type.value: level for body_type, level in self.water_level_overrides.items()
            },
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "BodyDefaults":
        defaults = cls()
        overrides = data.get("water_level_overrides")
        return cls(
            terrain_min_height=float(data.get("terrain_min_height", defaults.terrain_min_height)),
            terrain_max_height=float(data.get("terrain_max_height", defaults.terrain_max_height)),
            water_level=float(data.get("water_level", defaults.water_level)),
            water_level_overrides=(
                {BodyType(label): float(level) for label, level in overrides.items()}
                if overrides is not None
                else defaults.water_level_overrides
            ),
        )


def _default_probabilities() -> Dict[BodyType, float]:
    return {
        BodyType.TERRESTRIAL: 0.45,
        BodyType.GAS_GIANT: 0.15,
        BodyType.RINGWORLD: 0.05,
        BodyType.ICE_PLANET: 0.15,
        BodyType.LAVA_PLANET: 0.10,
        BodyType.BARREN: 0.10,
    }


def _default_size_ranges() -> Dict[BodyType, SizeRange]:
    return {
        BodyType.TERRESTRIAL: SphereSizeRange(ValueRange(80.0, 200.0)),
        BodyType.GAS_GIANT: SphereSizeRange(ValueRange(300.0, 800.0)),
        BodyType.RINGWORLD: RingSizeRange(ValueRange(300.0, 600.0), ValueRange(60.0, 150.0)),
        BodyType.ICE_PLANET: SphereSizeRange(ValueRange(60.0, 180.0)),
        BodyType.LAVA_PLANET: SphereSizeRange(ValueRange(50.0, 150.0)),
        BodyType.BARREN: SphereSizeRange(ValueRange(30.0, 100.0)),
    }


def _default_layer_templates() -> Dict[BodyType, Tuple[LayerBand, ...]]:
    templates = {body_type: PLANETARY_LAYERS for body_type in BodyType}
    # Gas giants are impostor-only.
    templates[BodyType.GAS_GIANT] = ()
    templates[BodyType.RINGWORLD] = RINGWORLD_LAYERS
    return templates


@dataclass(frozen=True)
class ConfigurationTables:
    """Versioned snapshot of every table the generators read."""

    version: int = 1
    supercluster: SuperclusterSettings = field(default_factory=SuperclusterSettings)
    body_type_probabilities: Dict[BodyType, float] = field(default_factory=_default_probabilities)
    size_ranges: Dict[BodyType, SizeRange] = field(default_factory=_default_size_ranges)
    layer_templates: Dict[BodyType, Tuple[LayerBand, ...]] = field(default_factory=_default_layer_templates)
    collision: CollisionSettings = field(default_factory=CollisionSettings)
    generation_zones: GenerationZones = field(default_factory=GenerationZones)
    body_defaults: BodyDefaults = field(default_factory=BodyDefaults)

    def __post_init__(self) -> None:
        self.validate()

    @classmethod
    def default(cls) -> "ConfigurationTables":
        return cls()

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def probability_items(self) -> List[Tuple[BodyType, float]]:
        """Body-type weights in the fixed declaration order of :class:`BodyType`."""

        return [
            (body_type, self.body_type_probabilities[body_type])
            for body_type in BodyType
            if body_type in self.body_type_probabilities
        ]

    def size_range(self, body_type: BodyType) -> SizeRange:
        return self.size_ranges.get(body_type, self.size_ranges[BodyType.TERRESTRIAL])

    def layer_template(self, body_type: BodyType) -> Tuple[LayerBand, ...]:
        if body_type is BodyType.GAS_GIANT:
            return ()
        return self.layer_templates.get(body_type, self.layer_templates.get(BodyType.TERRESTRIAL, PLANETARY_LAYERS))

    def fingerprint(self) -> str:
        data = self.to_dict()
        data.pop("version", None)
        payload = json.dumps(data, sort_keys=True, separators=(",", ":"))
        return hashlib.sha256(payload.encode("utf-8")).hexdigest()

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------
    def validate(self) -> None:
        self._validate_probabilities()
        self._validate_size_ranges()
        self._validate_layers()
        self._validate_supercluster()
        for name, value in self.collision.to_dict().items():
            if not value > 0.0:
                raise ConfigurationError(f"collision.{name} must be positive, got {value}")
        zones = self.generation_zones
        for name, value in zones.to_dict().items():
            if value < 0:
                raise ConfigurationError(f"generation_zones.{name} must be non-negative, got {value}")
        defaults = self.body_defaults
        if defaults.terrain_min_height > defaults.terrain_max_height:
            raise ConfigurationError(
                f"terrain_min_height {defaults.terrain_min_height} exceeds "
                f"terrain_max_height {defaults.terrain_max_height}"
            )

    def _validate_probabilities(self) -> None:
        missing = [body_type.value for body_type in BodyType if body_type not in self.body_type_probabilities]
        if missing:
            raise ConfigurationError(f"body type probabilities missing for: {', '.join(missing)}")
        for body_type, weight in self.body_type_probabilities.items():
            if not 0.0 <= weight <= 1.0:
                raise ConfigurationError(f"probability for {body_type.value} must be within [0, 1], got {weight}")
        total = math.fsum(self.body_type_probabilities.values())
        if abs(total - 1.0) > PROBABILITY_TOLERANCE:
            raise ConfigurationError(f"body type probabilities must sum to 1.0, got {total!r}")

    def _validate_size_ranges(self) -> None:
        for body_type in BodyType:
            size_range = self.size_ranges.get(body_type)
            if size_range is None:
                raise ConfigurationError(f"no size range configured for {body_type.value}")
            expects_ring = body_type is BodyType.RINGWORLD
            if expects_ring != isinstance(size_range, RingSizeRange):
                shape = "major/minor radius" if expects_ring else "single radius"
                raise ConfigurationError(f"{body_type.value} needs a {shape} size range")
            if isinstance(size_range, RingSizeRange):
                ranges = {"major_radius": size_range.major_radius, "minor_radius": size_range.minor_radius}
            else:
                ranges = {"radius": size_range.radius}
            for label, value_range in ranges.items():
                _check_range(f"{body_type.value}.{label}", value_range)
                if value_range.min <= 0.0:
                    raise ConfigurationError(f"{body_type.value}.{label} must be positive, got {value_range.min}")

    def _validate_layers(self) -> None:
        if self.layer_templates.get(BodyType.GAS_GIANT):
            raise ConfigurationError("gasGiant bodies are impostor-only and cannot carry layers")
        for body_type, bands in self.layer_templates.items():
            for band in bands:
                start, end = band.depth_range
                if not 0.0 <= start < end <= 1.0:
                    raise ConfigurationError(
                        f"layer {band.name!r} of {body_type.value} has invalid depth range {band.depth_range}"
                    )

    def _validate_supercluster(self) -> None:
        settings = self.supercluster
        if settings.galaxy_count < 1:
            raise ConfigurationError(f"galaxy_count must be at least 1, got {settings.galaxy_count}")
        for label, value_range in (
            ("systems_per_galaxy", settings.systems_per_galaxy),
            ("bodies_per_system", settings.bodies_per_system),
        ):
            _check_range(label, value_range)
            if value_range.min < 1:
                raise ConfigurationError(f"{label} minimum must be at least 1, got {value_range.min}")
        for label in ("supercluster_radius", "galaxy_spacing", "system_spacing"):
            if getattr(settings, label) < 0.0:
                raise ConfigurationError(f"{label} must be non-negative")

    # ------------------------------------------------------------------
    # Edits
    # ------------------------------------------------------------------
    def _edit(self, **changes: Any) -> "ConfigurationTables":
        return dataclasses.replace(self, version=self.version + 1, **changes)

    def with_body_probability(self, body_type: Union[str, BodyType], weight: float) -> "ConfigurationTables":
        """Set one weight and renormalise the whole table to sum to 1.0."""

        body_type = _known_body_type(body_type)
        if not 0.0 <= weight <= 1.0:
            raise ConfigurationError(f"probability for {body_type.value} must be within [0, 1], got {weight}")
        weights = dict(self.body_type_probabilities)
        weights[body_type] = float(weight)
        total = math.fsum(weights.values())
        if total <= 0.0:
            raise ConfigurationError("body type probabilities cannot all be zero")
        normalised = {key: value / total for key, value in weights.items()}
        return self._edit(body_type_probabilities=normalised)

    def with_size_range(self, body_type: Union[str, BodyType], size_range: SizeRange) -> "ConfigurationTables":
        ranges = dict(self.size_ranges)
        ranges[_known_body_type(body_type)] = size_range
        return self._edit(size_ranges=ranges)

    def with_layer_template(
        self, body_type: Union[str, BodyType], bands: Iterable[LayerBand]
    ) -> "ConfigurationTables":
        templates = dict(self.layer_templates)
        templates[_known_body_type(body_type)] = tuple(bands)
        return self._edit(layer_templates=templates)

    def with_collision(self, **changes: float) -> "ConfigurationTables":
        return self._edit(collision=_replace_section("collision", self.collision, changes))

    def with_generation_zones(self, **changes: int) -> "ConfigurationTables":
        return self._edit(generation_zones=_replace_section("generation_zones", self.generation_zones, changes))

    def with_supercluster(self, **changes: Any) -> "ConfigurationTables":
        return self._edit(supercluster=_replace_section("supercluster", self.supercluster, changes))

    def with_body_defaults(self, **changes: Any) -> "ConfigurationTables":
        return self._edit(body_defaults=_replace_section("body_defaults", self.body_defaults, changes))

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------
    def to_dict(self) -> Dict[str, Any]:
        return {
            "version": self.version,
            "supercluster": self.supercluster.to_dict(),
            "body_type_probabilities": {
                body_type.value: weight for body_type, weight in self.probability_items()
            },
            "size_ranges": {
                body_type.value: size_range.to_dict() for body_type, size_range in self.size_ranges.items()
            },
            "layer_templates": {
                body_type.value: [band.to_dict() for band in bands]
                for body_type, bands in self.layer_templates.items()
            },
            "collision": self.collision.to_dict(),
            "generation_zones": self.generation_zones.to_dict(),
            "body_defaults": self.body_defaults.to_dict(),
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ConfigurationTables":
        defaults = cls()
        try:
            probabilities = data.get("body_type_probabilities")
            size_ranges = data.get("size_ranges")
            layer_templates = data.get("layer_templates")
            return cls(
                version=int(data.get("version", 1)),
                supercluster=SuperclusterSettings.from_dict(data.get("supercluster", {})),
                body_type_probabilities=(
                    {BodyType(label): float(weight) for label, weight in probabilities.items()}
                    if probabilities is not None
                    else defaults.body_type_probabilities
                ),
                size_ranges=(
                    {BodyType(label): size_range_from_dict(entry) for label, entry in size_ranges.items()}
                    if size_ranges is not None
                    else defaults.size_ranges
                ),
                layer_templates=(
                    {
                        BodyType(label): tuple(LayerBand.from_dict(band) for band in bands)
                        for label, bands in layer_templates.items()
                    }
                    if layer_templates is not None
                    else defaults.layer_templates
                ),
                collision=CollisionSettings.from_dict(data.get("collision", {})),
                generation_zones=GenerationZones.from_dict(data.get("generation_zones", {})),
                body_defaults=BodyDefaults.from_dict(data.get("body_defaults", {})),
            )
        except ConfigurationError:
            raise
        except (KeyError, TypeError, ValueError) as exc:
            raise ConfigurationError(f"malformed configuration tables: {exc}") from exc


def _known_body_type(label: Union[str, BodyType]) -> BodyType:
    try:
        return BodyType(label)
    except ValueError:
        raise ConfigurationError(f"unknown body type {label!r}") from None


def _replace_section(section: str, current: Any, changes: Mapping[str, Any]) -> Any:
    known = {f.name for f in dataclasses.fields(current)}
    unknown = sorted(set(changes) - known)
    if unknown:
        raise ConfigurationError(f"unknown {section} setting(s): {', '.join(unknown)}")
    return dataclasses.replace(current, **changes)


def _check_range(label: str, value_range: ValueRange) -> None:
    if value_range.min > value_range.max:
        raise ConfigurationError(f"{label} range has min {value_range.min} greater than max {value_range.max}")


__all__ = [
    "BodyDefaults",
    "BodyType",
    "CollisionSettings",
    "ConfigurationError",
    "ConfigurationTables",
    "GenerationZones",
    "LayerBand",
    "LayerMode",
    "PLANETARY_LAYERS",
    "RINGWORLD_LAYERS",
    "RingSizeRange",
    "SizeRange",
    "SphereSizeRange",
    "SuperclusterSettings",
    "ValueRange",
    "size_range_from_dict",
]

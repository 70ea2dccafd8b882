"""Body parameter synthesis against recorded stream values."""
from __future__ import annotations

import json
import logging
import math

import pytest

from universe.config.tables import (
    BodyType,
    ConfigurationTables,
    PLANETARY_LAYERS,
    RINGWORLD_LAYERS,
)
from universe.engine.logger import GenerationLogger, LoggerConfig
from universe.generation.bodies import (
    BIOME_FORMULAS,
    BodyParameterSynthesizer,
    BodyParams,
    RingSize,
    RingworldGravity,
    SphereGravity,
    SphereSize,
    orbital_period,
    synthesize_body,
)
from universe.generation.naming import body_name
from universe.generation.seeding import HierarchicalPath

GOLDEN_SEED = 1171143228
# States 1..9 of the stream seeded with GOLDEN_SEED.
GOLDEN_STATES = [
    1425359813,
    1450316058,
    1675846731,
    1835187752,
    1676367681,
    1024468198,
    1526856231,
    993629396,
    852829821,
]


def _draw(index: int) -> float:
    return GOLDEN_STATES[index - 1] / 2**31


def _quiet_logger() -> GenerationLogger:
    return GenerationLogger(LoggerConfig(level=logging.CRITICAL, channels={"bodies": False}))


def _forced(body_type: BodyType) -> ConfigurationTables:
    weights = {candidate: 0.0 for candidate in BodyType}
    weights[body_type] = 1.0
    return ConfigurationTables(body_type_probabilities=weights)


def test_golden_body_matches_recorded_stream() -> None:
    body = synthesize_body(HierarchicalPath(0, 0, 0), 1000, ConfigurationTables.default(), _quiet_logger())

    assert body.seed == GOLDEN_SEED
    assert body.body_type is BodyType.ICE_PLANET
    assert isinstance(body.size, SphereSize)
    assert body.size.radius == pytest.approx(60.0 + _draw(2) * 120.0)

    radius = 150.0 + (_draw(3) - 0.5) * 50.0
    assert body.orbital.radius == pytest.approx(radius)
    assert body.orbital.period == pytest.approx((radius / 100.0) ** 1.5 * 365.0)
    assert body.orbital.inclination == pytest.approx((_draw(4) - 0.5) * 10.0)
    assert body.orbital.eccentricity == pytest.approx(_draw(5) * 0.1)
    assert body.orbital.phase == pytest.approx(_draw(6) * 2.0 * math.pi)

    assert list(body.biome_distribution) == ["ice", "mountains", "ocean"]
    assert body.biome_distribution["ice"] == pytest.approx(60.0 + _draw(7) * 20.0)
    assert body.biome_distribution["mountains"] == pytest.approx(20.0 + _draw(8) * 10.0)
    assert body.biome_distribution["ocean"] == pytest.approx(10.0 + _draw(9) * 10.0)

    assert body.water_level == 120.0
    assert body.terrain_min_height == -15.0
    assert body.terrain_max_height == 50.0
    assert body.layers == PLANETARY_LAYERS
    assert body.gravity_shape == SphereGravity(radius=body.size.radius)
    assert body.name == body_name(GOLDEN_SEED, 0)
    assert not body.generated
    assert body.generated_chunks == 0
    assert body.path == HierarchicalPath(0, 0, 0)


def test_ringworld_draws_major_then_minor_radius() -> None:
    body = synthesize_body(HierarchicalPath(0, 0, 0), 1000, _forced(BodyType.RINGWORLD))

    assert body.body_type is BodyType.RINGWORLD
    assert isinstance(body.size, RingSize)
    assert body.size.major_radius == pytest.approx(300.0 + _draw(2) * 300.0)
    assert body.size.minor_radius == pytest.approx(60.0 + _draw(3) * 90.0)
    assert body.gravity_shape == RingworldGravity(
        major_radius=body.size.major_radius,
        minor_radius=body.size.minor_radius,
    )
    assert body.gravity_shape.axis == (0.0, 1.0, 0.0)
    assert body.layers == RINGWORLD_LAYERS
    # The extra size draw shifts the orbit onto the fourth draw.
    assert body.orbital.radius == pytest.approx(150.0 + (_draw(4) - 0.5) * 50.0)
    assert sorted(body.biome_distribution) == ["desert", "forest", "grassland", "mountains", "ocean"]


def test_gas_giant_is_impostor_only() -> None:
    body = synthesize_body(HierarchicalPath(0, 0, 0), 1000, _forced(BodyType.GAS_GIANT))

    assert body.body_type is BodyType.GAS_GIANT
    assert body.size.radius == pytest.approx(300.0 + _draw(2) * 500.0)
    assert body.layers == ()
    assert body.biome_distribution == {"atmosphere": 100.0}
    assert body.water_level == 100.0


@pytest.mark.parametrize(
    "body_type, expected",
    [
        (BodyType.TERRESTRIAL, 100.0),
        (BodyType.ICE_PLANET, 120.0),
        (BodyType.LAVA_PLANET, 0.0),
        (BodyType.BARREN, 100.0),
    ],
)
def test_water_level_by_type(body_type: BodyType, expected: float) -> None:
    body = synthesize_body(HierarchicalPath(1, 2, 3), 77, _forced(body_type))
    assert body.water_level == expected


@pytest.mark.parametrize("body_type", list(BodyType))
def test_biome_weights_stay_within_formula_bounds(body_type: BodyType) -> None:
    tables = _forced(body_type)
    synthesizer = BodyParameterSynthesizer(tables)
    for body_index in range(12):
        body = synthesizer.synthesize(HierarchicalPath(0, 5, body_index), 2024)
        formula = BIOME_FORMULAS[body_type]
        assert list(body.biome_distribution) == [biome for biome, _, _ in formula]
        for biome, base, spread in formula:
            weight = body.biome_distribution[biome]
            if spread is None:
                assert weight == base
            else:
                assert base <= weight < base + spread


def test_sizes_stay_within_configured_ranges() -> None:
    tables = ConfigurationTables.default()
    synthesizer = BodyParameterSynthesizer(tables)
    for body_index in range(40):
        body = synthesizer.synthesize(HierarchicalPath(3, 9, body_index), 555)
        size_range = tables.size_range(body.body_type)
        if isinstance(body.size, RingSize):
            assert size_range.major_radius.min <= body.size.major_radius < size_range.major_radius.max
            assert size_range.minor_radius.min <= body.size.minor_radius < size_range.minor_radius.max
        else:
            assert size_range.radius.min <= body.size.radius < size_range.radius.max


def test_orbit_seeding_follows_slot_index() -> None:
    synthesizer = BodyParameterSynthesizer(ConfigurationTables.default())
    for body_index in range(10):
        body = synthesizer.synthesize(HierarchicalPath(0, 0, body_index), 1000)
        base = 150.0 + body_index * 100.0
        assert base - 25.0 <= body.orbital.radius < base + 25.0
        assert -5.0 <= body.orbital.inclination < 5.0
        assert 0.0 <= body.orbital.eccentricity < 0.1
        assert 0.0 <= body.orbital.phase < 2.0 * math.pi


def test_synthesis_is_deterministic_across_instances() -> None:
    path = HierarchicalPath(4, 17, 6)
    first = BodyParameterSynthesizer(ConfigurationTables.default()).synthesize(path, 31337)
    second = BodyParameterSynthesizer(ConfigurationTables.default()).synthesize(path, 31337)
    assert first == second


def test_master_seed_changes_body() -> None:
    path = HierarchicalPath(0, 0, 0)
    tables = ConfigurationTables.default()
    assert synthesize_body(path, 1000, tables).seed != synthesize_body(path, 1001, tables).seed


def test_body_round_trips_through_json() -> None:
    for body_type in (BodyType.ICE_PLANET, BodyType.RINGWORLD, BodyType.GAS_GIANT):
        body = synthesize_body(HierarchicalPath(2, 3, 1), 9, _forced(body_type))
        restored = BodyParams.from_dict(json.loads(body.to_json()))
        assert restored == body


def test_gravity_shape_serialisation_tags() -> None:
    assert SphereGravity(radius=10.0).to_dict() == {
        "type": "point",
        "params": {"center": [0.0, 0.0, 0.0], "radius": 10.0},
    }
    ring = RingworldGravity(major_radius=400.0, minor_radius=100.0).to_dict()
    assert ring["type"] == "ring"
    assert ring["params"]["axis"] == [0.0, 1.0, 0.0]


def test_orbital_period_reference_point() -> None:
    assert orbital_period(100.0) == pytest.approx(365.0)
    assert orbital_period(400.0) == pytest.approx(365.0 * 8.0)

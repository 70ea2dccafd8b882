from universe.config.tables import BodyType, ConfigurationTables
from universe.generation.seeding import SeededStream, derive_seed
from universe.generation.selection import select_category


DEFAULT_TABLE = [
    ("terrestrial", 0.45),
    ("gasGiant", 0.15),
    ("ringworld", 0.05),
    ("icePlanet", 0.15),
    ("lavaPlanet", 0.10),
    ("barren", 0.10),
]


def test_first_label_reaching_draw_wins():
    assert select_category(DEFAULT_TABLE, 0.0, "terrestrial") == "terrestrial"
    assert select_category(DEFAULT_TABLE, 0.45, "terrestrial") == "terrestrial"
    assert select_category(DEFAULT_TABLE, 0.5, "terrestrial") == "gasGiant"
    assert select_category(DEFAULT_TABLE, 0.62, "terrestrial") == "ringworld"
    assert select_category(DEFAULT_TABLE, 0.95, "terrestrial") == "barren"


def test_rounding_shortfall_uses_fallback():
    short = [("a", 0.3), ("b", 0.3), ("c", 0.3999999)]
    assert select_category(short, 0.99999999, "fallback") == "fallback"


def test_mapping_input_keeps_insertion_order():
    weights = {"x": 0.5, "y": 0.5}
    assert select_category(weights, 0.25, "z") == "x"
    assert select_category(weights, 0.75, "z") == "y"


def test_golden_seed_selects_ice_planet():
    seed = derive_seed(1000, "galaxy_0_system_0_body_0")
    stream = SeededStream(seed)
    draw = stream.next()
    assert stream.state == 1425359813
    assert select_category(DEFAULT_TABLE, draw, "terrestrial") == "icePlanet"

    tables = ConfigurationTables.default()
    assert select_category(tables.probability_items(), draw, BodyType.TERRESTRIAL) is BodyType.ICE_PLANET

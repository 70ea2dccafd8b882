"""Preview entry point: print a sample generated system."""
from __future__ import annotations

import sys
from pathlib import Path
from typing import List, Optional

from universe.config.settings import load_settings
from universe.engine.logger import init_logger
from universe.generation.world import Universe


SETTINGS_PATH = Path("settings.json")


def describe_system(universe: Universe, galaxy_index: int, system_index: int) -> List[str]:
    galaxy = universe.galaxy(galaxy_index)
    system = universe.system(galaxy_index, system_index)
    lines = [
        f"Sample system (galaxy {galaxy_index} '{galaxy.name}', system {system_index})",
        f"Star type: {system.star.type} ({system.star.temperature:.0f}K)",
        f"Capture radius: {round(system.capture_radius)} units",
        f"Bodies: {len(system.bodies)}",
    ]
    for body in system.bodies:
        size = body.size.to_dict()
        if "major_radius" in size:
            size_text = f"Major: {round(size['major_radius'])}, Minor: {round(size['minor_radius'])}"
        else:
            size_text = f"Radius: {round(size['radius'])}"
        lines.append(
            f"  {body.name:<20} {body.body_type.value:<11} "
            f"Orbit: {round(body.orbital.radius)} | {size_text} | Seed: {body.seed}"
        )
    return lines


def main(argv: Optional[List[str]] = None) -> None:
    argv = sys.argv[1:] if argv is None else argv
    settings = load_settings(SETTINGS_PATH)
    logger = init_logger(SETTINGS_PATH)
    universe = Universe(settings.master_seed, settings.tables, logger)
    galaxy_index = int(argv[0]) if len(argv) > 0 else 0
    system_index = int(argv[1]) if len(argv) > 1 else 0
    for line in describe_system(universe, galaxy_index, system_index):
        print(line)


if __name__ == "__main__":
    main()

"""Deterministic generation of galaxies, systems and bodies."""

from .bodies import BodyParameterSynthesizer, BodyParams, synthesize_body
from .galaxies import GalaxyAssembler, GalaxyDescriptor, generate_galaxy
from .seeding import HierarchicalPath, SeededStream, derive_seed
from .selection import select_category
from .spacing import SpacingValidator, gravity_radius, min_spacing, validate_orbital_spacing
from .systems import SystemAssembler, SystemConfig, generate_system
from .world import Universe

__all__ = [
    "BodyParameterSynthesizer",
    "BodyParams",
    "GalaxyAssembler",
    "GalaxyDescriptor",
    "HierarchicalPath",
    "SeededStream",
    "SpacingValidator",
    "SystemAssembler",
    "SystemConfig",
    "Universe",
    "derive_seed",
    "generate_galaxy",
    "generate_system",
    "gravity_radius",
    "min_spacing",
    "select_category",
    "synthesize_body",
    "validate_orbital_spacing",
]

"""Configuration tables and settings loading."""

from .settings import Settings, load_settings, save_settings
from .tables import BodyType, ConfigurationError, ConfigurationTables

__all__ = [
    "BodyType",
    "ConfigurationError",
    "ConfigurationTables",
    "Settings",
    "load_settings",
    "save_settings",
]

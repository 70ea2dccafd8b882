"""Loading of ``settings.json`` for universe generation."""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

from universe.config.tables import ConfigurationTables
from universe.engine.logger import LoggerConfig, default_channel

SETTINGS_PATH = Path("settings.json")
DEFAULT_MASTER_SEED = 1000


@dataclass
class Settings:
    master_seed: int = DEFAULT_MASTER_SEED
    logger_config: LoggerConfig = field(default_factory=lambda: LoggerConfig.from_dict({}))
    tables: ConfigurationTables = field(default_factory=ConfigurationTables.default)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Settings":
        return cls(
            master_seed=int(data.get("masterSeed", DEFAULT_MASTER_SEED)),
            logger_config=LoggerConfig.from_dict(data),
            tables=ConfigurationTables.from_dict(data.get("generation", {})),
        )

    def to_dict(self) -> Dict[str, Any]:
        level_name = logging.getLevelName(self.logger_config.level)
        return {
            "masterSeed": self.master_seed,
            "logLevel": level_name,
            "logChannels": dict(self.logger_config.channels or {}),
            "generation": self.tables.to_dict(),
        }


def load_settings(settings_path: Optional[Path] = None) -> Settings:
    """Read settings, falling back to defaults when the file is absent or unreadable.

    A readable file whose tables break an invariant raises
    :class:`~universe.config.tables.ConfigurationError`.
    """

    settings_path = settings_path or SETTINGS_PATH
    log = default_channel("config")
    if not settings_path.exists():
        log.info("No settings at %s; using defaults", settings_path)
        return Settings()
    try:
        data = json.loads(settings_path.read_text())
    except json.JSONDecodeError:
        log.warning("Could not decode %s; using defaults", settings_path)
        return Settings()
    if not isinstance(data, dict):
        log.warning("Settings in %s are not an object; using defaults", settings_path)
        return Settings()
    return Settings.from_dict(data)


def save_settings(settings: Settings, settings_path: Optional[Path] = None) -> Path:
    settings_path = settings_path or SETTINGS_PATH
    settings_path.write_text(json.dumps(settings.to_dict(), indent=2))
    return settings_path


__all__ = ["Settings", "load_settings", "save_settings", "SETTINGS_PATH"]

"""Generation logging with per-channel toggles.

Each generator logs through one channel (``bodies``, ``spacing``,
``systems``, ``galaxies`` or ``config``). A channel is a standard
``logging`` logger named ``universe.<channel>`` plus an on/off switch read
from ``settings.json``, so a noisy stage can be silenced without touching
the global level.
"""
from __future__ import annotations

import json
import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, Mapping, Optional

DEFAULT_CHANNELS = {
    "bodies": False,
    "spacing": True,
    "systems": True,
    "galaxies": True,
    "config": True,
}

ROOT_LOGGER = "universe"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def _channel_logger_name(channel: str) -> str:
    return f"{ROOT_LOGGER}.{channel}"


@dataclass
class LoggerConfig:
    level: int = logging.INFO
    channels: Dict[str, bool] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "LoggerConfig":
        """Read the camelCase ``logLevel`` / ``logChannels`` settings keys.

        Unknown level names fall back to INFO; channels missing from the
        settings keep their defaults.
        """

        level = getattr(logging, str(data.get("logLevel", "INFO")).upper(), logging.INFO)
        if not isinstance(level, int):
            level = logging.INFO
        channels = dict(DEFAULT_CHANNELS)
        channels.update(data.get("logChannels", {}))
        return cls(level=level, channels=channels)

    @classmethod
    def from_settings(cls, settings_path: Path) -> "LoggerConfig":
        data: Any = {}
        if settings_path.exists():
            try:
                data = json.loads(settings_path.read_text())
            except json.JSONDecodeError:
                data = {}
        return cls.from_dict(data if isinstance(data, dict) else {})


class ChannelLogger:
    """A named channel that drops records while switched off."""

    def __init__(self, name: str, enabled: bool) -> None:
        self.name = name
        self.enabled = enabled
        self._logger = logging.getLogger(_channel_logger_name(name))

    def log(self, level: int, msg: str, *args: Any) -> None:
        if self.enabled:
            self._logger.log(level, msg, *args)

    def debug(self, msg: str, *args: Any) -> None:
        self.log(logging.DEBUG, msg, *args)

    def info(self, msg: str, *args: Any) -> None:
        self.log(logging.INFO, msg, *args)

    def warning(self, msg: str, *args: Any) -> None:
        self.log(logging.WARNING, msg, *args)


class GenerationLogger:
    """Registry of channels handed to the generators."""

    def __init__(self, config: LoggerConfig) -> None:
        logging.basicConfig(level=config.level, format=LOG_FORMAT, stream=sys.stdout)
        self._channels: Dict[str, ChannelLogger] = {
            name: ChannelLogger(name, enabled) for name, enabled in (config.channels or {}).items()
        }

    def channel(self, name: str) -> ChannelLogger:
        # Channels absent from the settings stay silent until enabled.
        return self._channels.setdefault(name, ChannelLogger(name, False))

    def set_enabled(self, name: str, enabled: bool) -> None:
        self.channel(name).enabled = enabled

    def channels(self) -> Iterable[str]:
        return self._channels.keys()


def default_channel(name: str) -> ChannelLogger:
    """Channel for generators built without a :class:`GenerationLogger`.

    Uses the default enablement and leaves ``logging`` configuration to the
    caller.
    """

    return ChannelLogger(name, DEFAULT_CHANNELS.get(name, False))


def resolve_channel(logger: Optional[GenerationLogger], name: str) -> ChannelLogger:
    return default_channel(name) if logger is None else logger.channel(name)


def init_logger(settings_path: Optional[Path] = None) -> GenerationLogger:
    return GenerationLogger(LoggerConfig.from_settings(settings_path or Path("settings.json")))


__all__ = [
    "DEFAULT_CHANNELS",
    "ChannelLogger",
    "GenerationLogger",
    "LoggerConfig",
    "default_channel",
    "init_logger",
    "resolve_channel",
]

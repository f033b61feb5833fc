"""User settings stored as one line of text."""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields, replace
from pathlib import Path

__all__ = ["DEFAULT_PATH", "Settings", "load_settings", "save_settings"]

DEFAULT_PATH = "config"

log = logging.getLogger(__name__)


@dataclass
class Settings:
    """Persistent OSD settings."""

    battery_capacity: int = 4000
    low_voltage_threshold: float = 3.1
    cpu_fan_threshold: int = 55
    brightness: int = 100
    volume: int = 100
    dark_mode: int = 0

    def normalised(self) -> "Settings":
        """Return a copy with out-of-range values replaced and levels in steps of ten."""
        if self.brightness > 100 or self.brightness < 1:
            brightness = 1
        else:
            brightness = self.brightness // 10 * 10
        if self.volume > 100 or self.volume < 0:
            volume = 100
        else:
            volume = self.volume // 10 * 10
        threshold = self.low_voltage_threshold
        if threshold < 2.8:
            threshold = 3.0
        return replace(
            self,
            brightness=brightness,
            volume=volume,
            low_voltage_threshold=threshold,
        )


def _parse(line: str) -> Settings:
    settings = Settings()
    values = {}
    for field, token in zip(fields(Settings), line.split()):
        converter = float if field.name == "low_voltage_threshold" else int
        try:
            values[field.name] = converter(token)
        except ValueError:
            break
    return replace(settings, **values)


def load_settings(path: str | Path = DEFAULT_PATH) -> Settings:
    """Read settings, normalise them and write the normalised values back.

    A missing file gives the defaults and is left uncreated.
    """
    path = Path(path)
    try:
        with path.open() as handle:
            line = handle.readline()
    except FileNotFoundError:
        log.warning("Failed to load config file, using defaults")
        return Settings()
    settings = _parse(line).normalised()
    save_settings(settings, path)
    log.debug("Loaded settings: %s", settings)
    return settings


def save_settings(settings: Settings, path: str | Path = DEFAULT_PATH) -> None:
    """Write settings as a single space-separated line."""
    line = (
        f"{settings.battery_capacity} {settings.low_voltage_threshold:f} "
        f"{settings.cpu_fan_threshold} {settings.brightness} "
        f"{settings.volume} {settings.dark_mode}"
    )
    Path(path).write_text(line)
"""
Configuration for the grouping tools.

Defaults match a node-sonos-http-api instance on the local machine. A TOML
file can override them::

    base_url = "http://192.168.1.10:5005"
    track_uri = "spotify:track:1wFFFzJ5EsKbBWZriAcubN"

    [timing]
    join_settle = 3.0
    verify_timeout = 10.0

    [[presets]]
    rooms = ["Vardagsrum", "Sovrum"]

The environment variable SONOS_API_BASE_URL wins over the file, and
SONOS_GROUP_CONFIG names the file when no path is given.
"""

from __future__ import annotations

import logging
import os
import tomllib
from dataclasses import dataclass, field, fields
from pathlib import Path

from .models import DesiredTopology

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://127.0.0.1:5005"
BASE_URL_ENV = "SONOS_API_BASE_URL"
CONFIG_ENV = "SONOS_GROUP_CONFIG"


@dataclass
class Timing:
    """Settle delays in seconds."""

    dissolve_settle: float = 1.0
    join_settle: float = 2.0
    resume_settle: float = 3.0
    queue_settle: float = 1.0
    # Optional polling after formation; None keeps the fixed delays only
    verify_timeout: float | None = None
    poll_interval: float = 0.5


@dataclass
class Settings:
    """Loaded configuration."""

    base_url: str = DEFAULT_BASE_URL
    request_timeout: float = 10.0
    timing: Timing = field(default_factory=Timing)
    presets: list[DesiredTopology] = field(default_factory=list)
    track_uri: str | None = None


def _parse_timing(data: dict) -> Timing:
    known = {f.name for f in fields(Timing)}
    unknown = set(data) - known
    if unknown:
        raise ValueError(f"Unknown timing keys: {', '.join(sorted(unknown))}")
    values = {}
    for key, value in data.items():
        if value is not None and (not isinstance(value, (int, float)) or value < 0):
            raise ValueError(f"timing.{key} must be a non-negative number")
        values[key] = float(value) if value is not None else None
    return Timing(**values)


def _parse_presets(items: list) -> list[DesiredTopology]:
    presets = []
    for index, item in enumerate(items, start=1):
        rooms = item.get("rooms") if isinstance(item, dict) else item
        if not rooms or not all(isinstance(room, str) and room for room in rooms):
            raise ValueError(f"Preset {index} needs a non-empty list of room names")
        presets.append(DesiredTopology.from_names(rooms))
    return presets


def parse_settings(data: dict) -> Settings:
    """Build Settings from an already decoded TOML document."""
    settings = Settings()
    if "base_url" in data:
        settings.base_url = str(data["base_url"])
    if "request_timeout" in data:
        value = data["request_timeout"]
        if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
            raise ValueError("request_timeout must be a positive number")
        settings.request_timeout = float(value)
    if "track_uri" in data:
        settings.track_uri = str(data["track_uri"])
    if "timing" in data:
        settings.timing = _parse_timing(data["timing"])
    if "presets" in data:
        settings.presets = _parse_presets(data["presets"])
    return settings


def load_settings(path: str | Path | None = None) -> Settings:
    """
    Load settings from a TOML file and the environment.

    Args:
        path: Config file. Falls back to $SONOS_GROUP_CONFIG, then defaults.

    Raises:
        ValueError: The file holds invalid values or presets.
    """
    path = path or os.environ.get(CONFIG_ENV)
    data = {}
    if path:
        path = Path(path)
        with path.open("rb") as f:
            data = tomllib.load(f)
        logger.info("Loaded configuration from %s", path)

    settings = parse_settings(data)

    env_url = os.environ.get(BASE_URL_ENV)
    if env_url:
        settings.base_url = env_url
    return settings

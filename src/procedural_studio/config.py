"""
Settings - User-level configuration for Procedural Studio.

Settings are stored as JSON in ~/.config/procedural_studio/settings.json.
The PROCEDURAL_STUDIO_LOG_LEVEL environment variable overrides the
configured log level.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


SETTINGS_PATH = Path.home() / ".config" / "procedural_studio" / "settings.json"
LOG_LEVEL_ENV = "PROCEDURAL_STUDIO_LOG_LEVEL"


@dataclass
class StudioSettings:
    """
    Application settings.

    Attributes:
        default_size: Size of generator images in new nodes
        demo_seed: Seed of the noise node in the demo graph
        log_level: Logging level name
    """
    default_size: int = 256
    demo_seed: int = 0
    log_level: str = "WARNING"

    def to_dict(self) -> dict[str, Any]:
        """Convert settings to dictionary for serialization."""
        return {
            "default_size": self.default_size,
            "demo_seed": self.demo_seed,
            "log_level": self.log_level,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> StudioSettings:
        """Create settings from dictionary."""
        return cls(
            default_size=int(data.get("default_size", 256)),
            demo_seed=int(data.get("demo_seed", 0)),
            log_level=str(data.get("log_level", "WARNING")).upper(),
        )


def load_settings(path: Path | None = None) -> StudioSettings:
    """
    Load settings from file, falling back to defaults.

    A missing file yields defaults; an unreadable one is logged and
    ignored.
    """
    path = path or SETTINGS_PATH
    settings = StudioSettings()

    if path.exists():
        try:
            with open(path) as f:
                settings = StudioSettings.from_dict(json.load(f))
        except (OSError, ValueError, TypeError) as e:
            logger.warning("Failed to load settings from %s: %s", path, e)

    env_level = os.environ.get(LOG_LEVEL_ENV)
    if env_level:
        settings.log_level = env_level.upper()
    return settings


def save_settings(settings: StudioSettings, path: Path | None = None) -> Path:
    """Save settings to file, creating the directory if needed."""
    path = path or SETTINGS_PATH
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        json.dump(settings.to_dict(), f, indent=2)
    return path


def configure_logging(level: str | int = "WARNING") -> None:
    """Set up a basic stderr handler for command line use."""
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

"""Load and save the persisted settings file."""

import json
from dataclasses import asdict
from enum import Enum
from pathlib import Path

from waypoint_engine.paths import settings_path
from waypoint_engine.settings.model import DEFAULT_SETTINGS, Settings
from waypoint_engine.settings.validator import coerce_settings


def settings_to_dict(settings: Settings) -> dict:
    """Return a JSON-ready mapping of a Settings record."""
    data = asdict(settings)
    for key, value in data.items():
        if isinstance(value, Enum):
            data[key] = value.value
        elif isinstance(value, tuple):
            data[key] = list(value)
    return data


def load_settings(path: Path | str | None = None) -> Settings:
    """Load settings from disk, merged over the defaults.

    Args:
        path: Path to the settings file. Defaults to the vault's settings file.

    Returns:
        Validated Settings. Missing file yields the defaults.
    """
    file_path = Path(path) if path else settings_path()
    if not file_path.is_file():
        return DEFAULT_SETTINGS
    with open(file_path) as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"Settings file at {file_path} is not a JSON object")
    return coerce_settings(data)


def save_settings(settings: Settings, path: Path | str | None = None) -> None:
    """Write settings back to disk with consistent formatting.

    Args:
        settings: Settings to write.
        path: Path to write to. Defaults to the vault's settings file.
    """
    file_path = Path(path) if path else settings_path()
    file_path.parent.mkdir(parents=True, exist_ok=True)
    with open(file_path, "w") as f:
        json.dump(settings_to_dict(settings), f, indent=2)
        f.write("\n")

"""Vault path resolution.

Resolves the vault root and the settings location. Uses environment
variables when available, falls back to conventional defaults.

Environment variables:
    WAYPOINT_VAULT_DIR: vault root (default: current working directory)
    WAYPOINT_SETTINGS_PATH: settings file (default: <vault>/.waypoint/settings.json)
"""

from __future__ import annotations

import os
from pathlib import Path

SETTINGS_DIRNAME = ".waypoint"
SETTINGS_FILENAME = "settings.json"


def vault_root() -> Path:
    """Return the vault root directory."""
    return Path(os.environ.get("WAYPOINT_VAULT_DIR", str(Path.cwd())))


def settings_path(vault: Path | str | None = None) -> Path:
    """Return the path to the persisted settings file."""
    env = os.environ.get("WAYPOINT_SETTINGS_PATH")
    if env:
        return Path(env)
    root = Path(vault) if vault else vault_root()
    return root / SETTINGS_DIRNAME / SETTINGS_FILENAME

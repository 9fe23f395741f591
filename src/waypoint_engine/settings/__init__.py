"""Settings module: model, validation, persistence, and the live store."""

from waypoint_engine.settings.loader import load_settings, save_settings
from waypoint_engine.settings.model import DEFAULT_SETTINGS, FolderNoteType, Settings
from waypoint_engine.settings.store import SettingsStore

__all__ = [
    "DEFAULT_SETTINGS",
    "FolderNoteType",
    "Settings",
    "SettingsStore",
    "load_settings",
    "save_settings",
]

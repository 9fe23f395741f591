"""Own the current settings value and apply validated updates."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from waypoint_engine.settings.loader import load_settings, save_settings, settings_to_dict
from waypoint_engine.settings.model import Settings
from waypoint_engine.settings.validator import coerce_settings


class SettingsStore:
    """Holds the active Settings and persists every change.

    Readers take a snapshot with ``store.current`` at the start of an
    operation; an update replaces the whole value, so a running render
    never sees a half-applied change.
    """

    def __init__(self, settings: Settings, path: Path | str | None = None):
        self._settings = settings
        self.path = Path(path) if path else None

    @classmethod
    def open(cls, path: Path | str) -> SettingsStore:
        return cls(load_settings(path), path)

    @property
    def current(self) -> Settings:
        return self._settings

    def update(self, **changes: Any) -> tuple[bool, str]:
        """Apply field changes, validate, swap in, and persist.

        Invalid values fall back to their defaults (see coerce_settings).

        Returns:
            (success, message) tuple.
        """
        unknown = set(changes) - set(Settings.__dataclass_fields__)
        if unknown:
            return False, f"Unknown setting(s): {', '.join(sorted(unknown))}"

        old = self._settings
        new = coerce_settings(changes, base=old)
        self._settings = new
        if self.path is not None:
            save_settings(new, self.path)

        old_data = settings_to_dict(old)
        new_data = settings_to_dict(new)
        diffs = [
            f"{key}: {old_data[key]!r} -> {new_data[key]!r}"
            for key in new_data
            if old_data[key] != new_data[key]
        ]
        if not diffs:
            return True, "No settings changed"
        return True, "; ".join(diffs)

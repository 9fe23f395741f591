"""Shared test fixtures for waypoint-engine."""

from pathlib import Path

import pytest

from waypoint_engine.engine import WaypointEngine
from waypoint_engine.settings.model import Settings
from waypoint_engine.settings.store import SettingsStore
from waypoint_engine.vault.local import LocalVault


def write_tree(root: Path, files: dict[str, str]) -> None:
    """Create files under ``root``; keys ending in "/" create empty folders."""
    for rel, content in files.items():
        target = root / rel
        if rel.endswith("/"):
            target.mkdir(parents=True, exist_ok=True)
            continue
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content)


@pytest.fixture
def make_vault(tmp_path):
    def _make(files: dict[str, str]) -> LocalVault:
        write_tree(tmp_path, files)
        return LocalVault(tmp_path)

    return _make


@pytest.fixture
def make_engine(make_vault):
    def _make(files: dict[str, str], settings: Settings | None = None) -> WaypointEngine:
        vault = make_vault(files)
        return WaypointEngine(vault, SettingsStore(settings or Settings()), debounce_seconds=0.05)

    return _make

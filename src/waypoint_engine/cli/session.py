"""Shared CLI helpers: resolve the vault and build an engine for it."""

from __future__ import annotations

import argparse
import logging
import os
from pathlib import Path

from waypoint_engine.engine import WaypointEngine
from waypoint_engine.paths import settings_path
from waypoint_engine.settings.store import SettingsStore
from waypoint_engine.vault.local import LocalVault


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)-7s %(name)s: %(message)s",
    )


def resolve_vault(args: argparse.Namespace) -> Path:
    """Resolve vault path from args or environment."""
    raw = getattr(args, "vault", None)
    if raw:
        return Path(raw).expanduser().resolve()
    env = os.environ.get("WAYPOINT_VAULT_DIR")
    if env:
        return Path(env).expanduser().resolve()
    return Path.cwd()


def open_store(args: argparse.Namespace) -> SettingsStore:
    return SettingsStore.open(settings_path(resolve_vault(args)))


def open_engine(args: argparse.Namespace) -> WaypointEngine:
    return WaypointEngine(LocalVault(resolve_vault(args)), open_store(args))


def vault_relpath(engine: WaypointEngine, raw: str) -> str | None:
    """Vault-relative path for a CLI argument, or None if outside the vault."""
    path = Path(raw).expanduser()
    if not path.is_absolute():
        path = Path.cwd() / path
    try:
        return engine.vault.relpath(path)
    except ValueError:
        return None

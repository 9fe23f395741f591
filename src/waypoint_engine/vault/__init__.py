"""Vault module: node views and the local-directory host adapter."""

from waypoint_engine.vault.local import LocalVault
from waypoint_engine.vault.nodes import Document, Folder, Node

__all__ = ["Document", "Folder", "LocalVault", "Node"]

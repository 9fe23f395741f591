"""Walk up the folder chain refreshing every enclosing marked note.

Each step searches upward from a folder for the nearest folder note that
carries a Waypoint or Landmark (bare token or block), regenerates it, and
resumes the search from that note's folder. The walk ends at the root.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Awaitable, Callable

from waypoint_engine.folder_notes import folder_note_for
from waypoint_engine.markers import MarkerKind
from waypoint_engine.settings.model import Settings
from waypoint_engine.vault.local import LocalVault
from waypoint_engine.vault.nodes import Document, Folder, Node

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AncestorWaypoint:
    """A marked folder note found during the walk."""

    kind: MarkerKind
    note: Document
    folder: Folder


Regenerate = Callable[[AncestorWaypoint], Awaitable[object]]


def marker_kind_in(text: str, settings: Settings) -> MarkerKind | None:
    """Marker kind present in ``text``; Waypoint wins over Landmark."""
    for kind in MarkerKind:
        if kind.begin in text or settings.flag_for(kind) in text:
            return kind
    return None


def _start_folder(vault: LocalVault, node: Node, include_self: bool) -> Folder | None:
    match node:
        case Folder() if include_self:
            return node
        case _:
            return vault.parent_of(node)


async def locate_ancestor_waypoint(
    vault: LocalVault,
    node: Node,
    include_self: bool,
    settings: Settings,
) -> AncestorWaypoint | None:
    """Find the nearest marked folder note at or above ``node``.

    Args:
        vault: Vault to search.
        node: Starting node.
        include_self: Consider ``node`` itself when it is a folder.
        settings: Settings snapshot.

    Returns:
        The match, or None when the root is reached without one.
    """
    folder = _start_folder(vault, node, include_self)
    while folder is not None:
        note = folder_note_for(vault, folder, settings)
        if note is not None:
            kind = marker_kind_in(await vault.peek(note), settings)
            if kind is not None:
                logger.debug("Found %s in %s", kind.value, note.path)
                return AncestorWaypoint(kind, note, folder)
        folder = vault.parent_of(folder)
    return None


async def propagate(
    vault: LocalVault,
    node: Node,
    include_self: bool,
    settings: Settings,
    regenerate: Regenerate,
) -> list[AncestorWaypoint]:
    """Regenerate every marked ancestor of ``node``, innermost first.

    Returns:
        The regenerated notes in the order they were processed.
    """
    updated: list[AncestorWaypoint] = []
    current, include = node, include_self
    while True:
        found = await locate_ancestor_waypoint(vault, current, include, settings)
        if found is None:
            break
        await regenerate(found)
        updated.append(found)
        current, include = found.folder, False
    if not updated:
        logger.debug("No marked ancestor above %s", node.path or "<root>")
    return updated

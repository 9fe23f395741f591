"""Wire scanning, rendering, patching, and propagation together.

The engine is the entry point for host events:

    modified(note)        -> detect_flags
    created/deleted/moved -> ChangeCoalescer -> update_ancestors per folder

Each operation takes one settings snapshot from the store when it starts.
"""

from __future__ import annotations

import logging

from waypoint_engine.coalescer import ChangeCoalescer
from waypoint_engine.folder_notes import represented_folder
from waypoint_engine.markers import MarkerKind
from waypoint_engine.patcher import patch_document
from waypoint_engine.propagation import AncestorWaypoint, propagate
from waypoint_engine.scanner import (
    Placement,
    check_placement,
    error_line,
    find_flag,
    replace_line,
)
from waypoint_engine.settings.model import Settings
from waypoint_engine.settings.store import SettingsStore
from waypoint_engine.tree.renderer import TreeRenderer
from waypoint_engine.vault.local import LocalVault
from waypoint_engine.vault.nodes import Document, Folder, Node

logger = logging.getLogger(__name__)


class WaypointEngine:
    def __init__(
        self,
        vault: LocalVault,
        store: SettingsStore,
        debounce_seconds: float | None = None,
    ):
        self.vault = vault
        self.store = store
        delay = store.current.debounce_seconds if debounce_seconds is None else debounce_seconds
        self.coalescer = ChangeCoalescer(self._flush_folders, delay)

    @property
    def settings(self) -> Settings:
        return self.store.current

    async def render_folder(self, folder: Folder, settings: Settings | None = None) -> str:
        """Tree text for ``folder``'s block."""
        return await TreeRenderer(self.vault, settings or self.settings).render_block(folder)

    async def update_waypoint(
        self,
        note: Document,
        kind: MarkerKind,
        folder: Folder | None = None,
        settings: Settings | None = None,
    ) -> str:
        """Regenerate the block in ``note``.

        Returns:
            "updated", "unchanged", or "missing".
        """
        settings = settings or self.settings
        folder = folder or represented_folder(self.vault, note, settings)
        if folder is None:
            logger.error("%s is not a folder note; cannot update its %s", note.path, kind.value)
            return "missing"
        logger.debug("Updating %s in %s", kind.value, note.path)
        tree = await self.render_folder(folder, settings)
        return await patch_document(self.vault, note, tree, kind, settings)

    async def update_ancestors(
        self,
        node: Node,
        include_self: bool,
        settings: Settings | None = None,
    ) -> list[AncestorWaypoint]:
        """Refresh every marked note at or above ``node``."""
        settings = settings or self.settings

        async def regenerate(found: AncestorWaypoint) -> str:
            return await self.update_waypoint(found.note, found.kind, found.folder, settings)

        return await propagate(self.vault, node, include_self, settings, regenerate)

    async def detect_flags(self, doc: Document) -> str:
        """Act on the first trigger token in ``doc``.

        Returns:
            "none" (no token), "generated", or "rejected" (error line written).
        """
        if not doc.is_markdown:
            return "none"
        settings = self.settings
        hit = find_flag(await self.vault.cached_read(doc), settings)
        if hit is None:
            logger.debug("No flags in %s", doc.path)
            return "none"

        check = check_placement(self.vault, doc, settings)
        if check.placement is Placement.FOLDER_NOTE:
            logger.info("Found %s flag in %s", hit.kind.value, doc.path)
            await self.update_waypoint(doc, hit.kind, check.folder, settings)
            await self.update_ancestors(check.folder, include_self=False, settings=settings)
            return "generated"

        logger.info("Rejecting %s flag in %s (%s)", hit.kind.value, doc.path, check.placement.value)
        text = await self.vault.read(doc)
        current = find_flag(text, settings)
        if current is None:
            return "none"
        message = error_line(current.kind, check.placement, doc, settings)
        await self.vault.modify(doc, replace_line(text, current.line, message))
        return "rejected"

    # ── Host events ────────────────────────────────────────────────

    def on_created(self, node: Node) -> None:
        self.coalescer.created(node)

    def on_deleted(self, path: str) -> None:
        self.coalescer.deleted(path)

    def on_renamed(self, node: Node, old_path: str) -> None:
        self.coalescer.renamed(node, old_path)

    async def on_modified(self, doc: Document) -> None:
        try:
            await self.detect_flags(doc)
        except (OSError, UnicodeDecodeError) as e:
            logger.error("Failed to scan %s: %s", doc.path, e)

    async def _flush_folders(self, paths: list[str]) -> None:
        settings = self.settings
        for path in paths:
            try:
                await self.update_ancestors(Folder(path), include_self=True, settings=settings)
            except (OSError, UnicodeDecodeError) as e:
                logger.error("Failed to refresh ancestors of %s: %s", path or "<root>", e)

    async def flush(self) -> list[str]:
        """Process pending folder changes immediately."""
        return await self.coalescer.drain()

    async def aclose(self) -> None:
        await self.coalescer.aclose()

"""Render a folder as a nested markdown bullet list.

Folders that carry their own Waypoint block are linked but not expanded:
their subtree belongs to their own block. Landmark notes are linked and
expanded, so an ancestor's tree continues past them.
"""

from __future__ import annotations

import asyncio
import logging
import posixpath
import re
from urllib.parse import quote

from waypoint_engine.folder_notes import folder_note_for, without_folder_notes
from waypoint_engine.markers import MarkerKind
from waypoint_engine.settings.model import Settings
from waypoint_engine.tree.ordering import sort_children
from waypoint_engine.vault.local import LocalVault
from waypoint_engine.vault.nodes import Document, Folder, Node

logger = logging.getLogger(__name__)


def encoded_uri(root: Folder, doc: Document) -> str:
    """Percent-encoded link to ``doc`` relative to the rendering root."""
    rel = posixpath.relpath(doc.path, root.path or ".")
    return "./" + quote(rel, safe="/")


class TreeRenderer:
    """Renders folder trees under one settings snapshot."""

    def __init__(self, vault: LocalVault, settings: Settings):
        self.vault = vault
        self.settings = settings
        self._ignore = [re.compile(p) for p in settings.ignore_paths]

    def is_ignored(self, path: str) -> bool:
        return any(p.search(path) for p in self._ignore)

    async def render(
        self,
        root: Folder,
        node: Node,
        depth: int = 0,
        top: bool = False,
    ) -> str | None:
        """Render ``node`` as bullet lines at ``depth``.

        Args:
            root: Folder the block is rendered for; path links are relative to it.
            node: Document or folder to render.
            depth: Indentation level of the node's own line.
            top: True for the folder the block belongs to.

        Returns:
            Rendered text, or None when the node is not shown. A top folder
            with nothing to show renders as an empty string.
        """
        if self.is_ignored(node.path):
            return None
        match node:
            case Document():
                return await self._render_document(root, node, depth)
            case Folder():
                return await self._render_folder(root, node, depth, top)

    async def render_block(self, folder: Folder) -> str:
        """Tree text for the block that belongs to ``folder``."""
        logger.debug("Rendering tree for %s", folder.path or "<root>")
        return await self.render(folder, folder, 0, top=True) or ""

    def _bullet(self, depth: int) -> str:
        return self.settings.indent(depth) + "-"

    async def _title(self, doc: Document) -> str | None:
        if not self.settings.use_front_matter_title or not doc.is_markdown:
            return None
        title = (await self.vault.front_matter(doc)).get("title")
        if isinstance(title, str) and title.strip():
            return title.strip()
        return None

    def _link(self, root: Folder, doc: Document, target: str, title: str | None) -> str:
        if self.settings.use_wiki_links:
            return f"[[{target}|{title}]]" if title else f"[[{target}]]"
        return f"[{title or target}]({encoded_uri(root, doc)})"

    async def _render_document(self, root: Folder, doc: Document, depth: int) -> str | None:
        if doc.is_markdown:
            title = await self._title(doc)
            return f"{self._bullet(depth)} {self._link(root, doc, doc.basename, title)}"
        if self.settings.show_non_markdown_files:
            return f"{self._bullet(depth)} {self._link(root, doc, doc.name, None)}"
        return None

    async def _stops_at(self, note: Document) -> bool:
        """True if the tree should link to ``note`` without expanding it."""
        if self.settings.stop_scan_at_folder_notes:
            return True
        content = await self.vault.peek(note)
        return MarkerKind.WAYPOINT.begin in content or self.settings.waypoint_flag in content

    async def _render_folder(self, root: Folder, folder: Folder, depth: int, top: bool) -> str:
        settings = self.settings
        text = ""
        if not top or settings.show_enclosing_note:
            note = folder_note_for(self.vault, folder, settings)
            if note is not None:
                title = await self._title(note)
                text = f"{self._bullet(depth)} **{self._link(root, note, note.basename, title)}**"
                if not top and await self._stops_at(note):
                    return text
            else:
                text = f"{self._bullet(depth)} **{folder.name}**"

        children = [
            c for c in await self.vault.list_children(folder)
            if not self.is_ignored(c.path)
        ]
        if not settings.show_folder_notes:
            children = without_folder_notes(folder, children, settings)
        if not children:
            return text

        children = await sort_children(self.vault, children, settings)
        child_depth = depth if top and not settings.show_enclosing_note else depth + 1
        rendered = await asyncio.gather(
            *(self.render(root, child, child_depth) for child in children)
        )
        body = "\n".join(r for r in rendered if r)
        if not body:
            return text
        return f"{text}\n{body}" if text else body

"""Local-directory vault: directory listings and document text access.

Blocking filesystem calls run in worker threads so a render can fan out
over a folder's children without stalling the event loop.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from waypoint_engine.vault.frontmatter import parse_front_matter
from waypoint_engine.vault.nodes import Document, Folder, Node, join_path, parent_path

logger = logging.getLogger(__name__)


def is_hidden(path: str) -> bool:
    """True for paths with any dot-prefixed component."""
    return any(part.startswith(".") for part in path.split("/") if part)


class LocalVault:
    """A vault rooted at a directory on disk."""

    def __init__(self, root: Path | str):
        self.root = Path(root).resolve()
        self._cache: dict[str, tuple[tuple[int, int], str]] = {}

    # ── Path arithmetic ────────────────────────────────────────────

    def abspath(self, node: Node | str) -> Path:
        path = node if isinstance(node, str) else node.path
        return self.root / path if path else self.root

    def relpath(self, path: Path | str) -> str:
        """Vault-relative POSIX path for an absolute or relative path."""
        p = Path(path)
        if p.is_absolute():
            p = p.resolve().relative_to(self.root)
        rel = p.as_posix()
        return "" if rel == "." else rel

    def root_folder(self) -> Folder:
        return Folder("")

    def get_node(self, path: str) -> Node | None:
        """Look up the entry at a vault-relative path."""
        full = self.abspath(path)
        if full.is_dir():
            return Folder(path)
        if full.is_file():
            return Document(path)
        return None

    def get_folder(self, path: str) -> Folder | None:
        return Folder(path) if self.abspath(path).is_dir() else None

    def get_document(self, path: str) -> Document | None:
        return Document(path) if self.abspath(path).is_file() else None

    def parent_of(self, node: Node | str) -> Folder | None:
        """Parent folder of a node or path; None for the root itself."""
        path = node if isinstance(node, str) else node.path
        if not path:
            return None
        return Folder(parent_path(path))

    # ── Listings ───────────────────────────────────────────────────

    def _list(self, folder: Folder) -> list[Node]:
        children: list[Node] = []
        for entry in self.abspath(folder).iterdir():
            if entry.name.startswith("."):
                continue
            child_path = join_path(folder.path, entry.name)
            if entry.is_dir():
                children.append(Folder(child_path))
            elif entry.is_file():
                children.append(Document(child_path))
        return children

    async def list_children(self, folder: Folder) -> list[Node]:
        """Unordered children of a folder; a vanished folder has none."""
        try:
            return await asyncio.to_thread(self._list, folder)
        except FileNotFoundError:
            return []

    # ── Document text ──────────────────────────────────────────────

    def _cached_read(self, doc: Document) -> str:
        full = self.abspath(doc)
        stat = full.stat()
        key = (stat.st_mtime_ns, stat.st_size)
        hit = self._cache.get(doc.path)
        if hit is not None and hit[0] == key:
            return hit[1]
        text = full.read_text(encoding="utf-8")
        self._cache[doc.path] = (key, text)
        return text

    async def cached_read(self, doc: Document) -> str:
        """Fast read for display; may serve a cached copy."""
        return await asyncio.to_thread(self._cached_read, doc)

    async def peek(self, doc: Document) -> str:
        """Cached text for marker checks; an undecodable note reads as empty."""
        try:
            return await self.cached_read(doc)
        except UnicodeDecodeError as e:
            logger.warning("Skipping %s: not valid UTF-8 (%s)", doc.path, e.reason)
            return ""

    async def read(self, doc: Document) -> str:
        """Authoritative read for mutation."""
        return await asyncio.to_thread(self.abspath(doc).read_text, encoding="utf-8")

    def _modify(self, doc: Document, text: str) -> None:
        full = self.abspath(doc)
        full.write_text(text, encoding="utf-8")
        self._cache.pop(doc.path, None)

    async def modify(self, doc: Document, text: str) -> None:
        """Replace a document's full text."""
        await asyncio.to_thread(self._modify, doc, text)
        logger.debug("Wrote %s", doc.path)

    async def front_matter(self, doc: Document) -> dict:
        """Front matter of a markdown document; empty for other files."""
        if not doc.is_markdown:
            return {}
        try:
            text = await self.cached_read(doc)
        except (FileNotFoundError, UnicodeDecodeError):
            return {}
        return parse_front_matter(text, doc.path)

"""Sibling ordering: explicit priority first, then natural name order."""

from __future__ import annotations

import asyncio
import re
import unicodedata

from waypoint_engine.folder_notes import folder_note_for
from waypoint_engine.settings.model import Settings
from waypoint_engine.vault.local import LocalVault
from waypoint_engine.vault.nodes import Document, Folder, Node

_DIGITS = re.compile(r"([0-9]+)")


def natural_key(name: str) -> tuple:
    """Case- and accent-insensitive key that compares digit runs numerically.

    ``Ch2`` sorts before ``Ch10``; digits sort before letters at the same
    position.
    """
    decomposed = unicodedata.normalize("NFKD", name)
    folded = "".join(c for c in decomposed if not unicodedata.combining(c)).casefold()
    parts = _DIGITS.split(folded)
    key = []
    for i, part in enumerate(parts):
        if i % 2:
            key.append((0, int(part), ""))
        else:
            key.append((1, 0, part))
    return tuple(key)


def parse_priority(value: object) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


async def child_priority(vault: LocalVault, node: Node, settings: Settings) -> int | None:
    """Priority annotation of a document, or of a folder's note."""
    match node:
        case Document():
            doc = node
        case Folder():
            doc = folder_note_for(vault, node, settings)
    if doc is None:
        return None
    meta = await vault.front_matter(doc)
    return parse_priority(meta.get(settings.priority_key))


async def sort_children(vault: LocalVault, children: list[Node], settings: Settings) -> list[Node]:
    """Order siblings for display.

    Annotated children come first in ascending priority; ties and
    unannotated children fall back to natural name order.
    """
    priorities = await asyncio.gather(
        *(child_priority(vault, child, settings) for child in children)
    )

    def key(pair: tuple[Node, int | None]) -> tuple:
        node, priority = pair
        rank = (0, priority) if priority is not None else (1, 0)
        return rank, natural_key(node.name), node.name

    return [node for node, _ in sorted(zip(children, priorities), key=key)]

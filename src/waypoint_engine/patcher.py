"""Splice a rendered tree into a note in place of its trigger or old block.

Only the first trigger token or begin sentinel is considered. Text
outside the replaced line range is preserved byte for byte.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from waypoint_engine.errors import AnchorNotFoundError
from waypoint_engine.markers import MarkerKind, strip_quote
from waypoint_engine.settings.model import Settings
from waypoint_engine.vault.local import LocalVault
from waypoint_engine.vault.nodes import Document

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Anchor:
    """Line range of a trigger token or an existing block."""

    start: int
    end: int
    fresh: bool
    quoted: bool


def find_anchor(lines: list[str], kind: MarkerKind, settings: Settings) -> Anchor | None:
    """Locate the first anchor for ``kind`` in ``lines``.

    A bare trigger token, or a begin sentinel of either kind, opens the
    anchor. The range extends to the matching end sentinel; without one it
    covers the opening line only.
    """
    flag = settings.flag_for(kind)
    begins = {k.begin: k for k in MarkerKind}
    for i, line in enumerate(lines):
        content, quoted = strip_quote(line)
        if content == flag:
            return Anchor(i, i, fresh=True, quoted=quoted)
        if content in begins:
            end_sentinel = begins[content].end
            for j in range(i + 1, len(lines)):
                if strip_quote(lines[j])[0] == end_sentinel:
                    return Anchor(i, j, fresh=False, quoted=quoted)
            return Anchor(i, i, fresh=False, quoted=quoted)
    return None


def build_block(tree: str, kind: MarkerKind, quoted: bool = False, fresh: bool = False) -> str:
    """Wrap a rendered tree in its boundary sentinels.

    Inside a quote block every line is re-quoted; a first-time block also
    gets a callout header.
    """
    block = f"{kind.begin}\n{tree}\n\n{kind.end}"
    if not quoted:
        return block
    lines = [f"> {line}" if line else ">" for line in block.split("\n")]
    if fresh:
        lines.insert(0, f"> {kind.callout}")
    return "\n".join(lines)


def splice_block(text: str, tree: str, kind: MarkerKind, settings: Settings) -> str:
    """Return ``text`` with its anchor replaced by a fresh block.

    Raises:
        AnchorNotFoundError: If the text has no trigger token or begin sentinel.
    """
    lines = text.split("\n")
    anchor = find_anchor(lines, kind, settings)
    if anchor is None:
        raise AnchorNotFoundError(f"No {kind.value} trigger or block found")
    block = build_block(tree, kind, quoted=anchor.quoted, fresh=anchor.fresh)
    lines[anchor.start:anchor.end + 1] = [block]
    return "\n".join(lines)


async def patch_document(
    vault: LocalVault,
    doc: Document,
    tree: str,
    kind: MarkerKind,
    settings: Settings,
) -> str:
    """Write ``tree`` into ``doc``'s block.

    Returns:
        "updated", "unchanged", or "missing" (no anchor; nothing written).
    """
    text = await vault.read(doc)
    try:
        new_text = splice_block(text, tree, kind, settings)
    except AnchorNotFoundError as e:
        logger.error("%s while trying to update %s", e, doc.path)
        return "missing"
    if new_text == text:
        return "unchanged"
    await vault.modify(doc, new_text)
    return "updated"

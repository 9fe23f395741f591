"""Detect trigger tokens in a note and validate where they were placed."""

from __future__ import annotations

import enum
from dataclasses import dataclass

from waypoint_engine.folder_notes import folder_note_path, represented_folder
from waypoint_engine.markers import MarkerKind, strip_quote
from waypoint_engine.settings.model import FolderNoteType, Settings
from waypoint_engine.vault.local import LocalVault
from waypoint_engine.vault.nodes import Document, Folder


@dataclass(frozen=True)
class FlagHit:
    line: int
    kind: MarkerKind


def find_flag(text: str, settings: Settings) -> FlagHit | None:
    """First line holding a bare trigger token of either kind."""
    flags = {settings.flag_for(kind): kind for kind in MarkerKind}
    for i, line in enumerate(text.split("\n")):
        content, _ = strip_quote(line)
        if content in flags:
            return FlagHit(i, flags[content])
    return None


class Placement(enum.Enum):
    FOLDER_NOTE = "folder_note"
    ROOT = "root"
    MISMATCH = "mismatch"


@dataclass(frozen=True)
class PlacementCheck:
    placement: Placement
    folder: Folder | None = None


def check_placement(vault: LocalVault, doc: Document, settings: Settings) -> PlacementCheck:
    """Decide whether ``doc`` may hold a generated block.

    A folder note is accepted. A note sitting directly in the vault root is
    rejected outright; any other note is rejected as a naming mismatch.
    """
    folder = represented_folder(vault, doc, settings)
    if folder is not None:
        return PlacementCheck(Placement.FOLDER_NOTE, folder)
    parent = vault.parent_of(doc)
    if parent is None or parent.is_root:
        return PlacementCheck(Placement.ROOT)
    return PlacementCheck(Placement.MISMATCH)


def error_line(kind: MarkerKind, placement: Placement, doc: Document, settings: Settings) -> str:
    """Comment line that replaces a misplaced trigger token."""
    name = kind.value
    if placement is Placement.ROOT:
        return (
            f"%% Error: Cannot create a {name} in the root folder of the vault. "
            f"Move this note into a folder and name it after that folder. %%"
        )
    if settings.folder_note_type is FolderNoteType.INSIDE_FOLDER:
        parent = Folder(doc.parent_path)
        expected = folder_note_path(parent, settings)
        return (
            f"%% Error: Cannot create a {name} in \"{doc.name}\" because it is not "
            f"the folder note of \"{parent.name}\". Use \"{expected}\" instead. %%"
        )
    return (
        f"%% Error: Cannot create a {name} in \"{doc.name}\" because no folder named "
        f"\"{doc.basename}\" sits next to it. %%"
    )


def replace_line(text: str, index: int, new_line: str) -> str:
    """Swap line ``index`` for ``new_line``, keeping its leading quote markers."""
    lines = text.split("\n")
    old = lines[index]
    content, quoted = strip_quote(old)
    prefix = old[:old.rindex(content)] if quoted and content else ""
    lines[index] = prefix + new_line
    return "\n".join(lines)

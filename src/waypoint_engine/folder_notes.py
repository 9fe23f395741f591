"""Folder note binding by path arithmetic.

Inside convention:  ``A/B/B.md`` represents folder ``A/B``.
Outside convention: ``A/B.md`` represents folder ``A/B``.
The vault root never has a folder note.
"""

from __future__ import annotations

from waypoint_engine.settings.model import FolderNoteType, Settings
from waypoint_engine.vault.local import LocalVault
from waypoint_engine.vault.nodes import Document, Folder, Node, join_path


def folder_note_path(folder: Folder, settings: Settings) -> str | None:
    """Vault path where the folder's note would live, or None for the root."""
    if folder.is_root:
        return None
    filename = f"{folder.name}.md"
    if settings.folder_note_type is FolderNoteType.INSIDE_FOLDER:
        return join_path(folder.path, filename)
    return join_path(folder.parent_path or "", filename)


def folder_note_for(vault: LocalVault, folder: Folder, settings: Settings) -> Document | None:
    """The folder's note if it exists on disk."""
    path = folder_note_path(folder, settings)
    if path is None:
        return None
    return vault.get_document(path)


def represented_folder(vault: LocalVault, doc: Document, settings: Settings) -> Folder | None:
    """The folder a document is the note of, if any."""
    if not doc.is_markdown:
        return None
    if settings.folder_note_type is FolderNoteType.INSIDE_FOLDER:
        parent = vault.parent_of(doc)
        if parent is None or parent.is_root or parent.name != doc.basename:
            return None
        return parent
    return vault.get_folder(join_path(doc.parent_path, doc.basename))


def without_folder_notes(folder: Folder, children: list[Node], settings: Settings) -> list[Node]:
    """Drop notes already represented by a folder line in this listing.

    Inside convention: the listed folder's own note. Outside convention:
    the notes of sibling subfolders.
    """
    if settings.folder_note_type is FolderNoteType.INSIDE_FOLDER:
        own = folder_note_path(folder, settings)
        return [c for c in children if not (isinstance(c, Document) and c.path == own)]

    folder_names = {c.name for c in children if isinstance(c, Folder)}
    return [
        c for c in children
        if not (isinstance(c, Document) and c.is_markdown and c.basename in folder_names)
    ]

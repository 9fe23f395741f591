"""Read-only views of vault entries.

A node is either a Document or a Folder. Paths are vault-relative POSIX
strings; the vault root is the Folder whose path is the empty string.
"""

from __future__ import annotations

import posixpath
from dataclasses import dataclass
from typing import Union

MARKDOWN_EXTENSION = "md"


def parent_path(path: str) -> str:
    """Parent of a vault-relative path (root for top-level entries)."""
    return posixpath.dirname(path.rstrip("/"))


def join_path(folder_path: str, name: str) -> str:
    return f"{folder_path}/{name}" if folder_path else name


@dataclass(frozen=True)
class Document:
    path: str

    @property
    def name(self) -> str:
        return posixpath.basename(self.path)

    @property
    def basename(self) -> str:
        stem, dot, _ = self.name.rpartition(".")
        return stem if dot and stem else self.name

    @property
    def extension(self) -> str:
        stem, dot, ext = self.name.rpartition(".")
        return ext.lower() if dot and stem else ""

    @property
    def is_markdown(self) -> bool:
        return self.extension == MARKDOWN_EXTENSION

    @property
    def parent_path(self) -> str:
        return parent_path(self.path)


@dataclass(frozen=True)
class Folder:
    path: str

    @property
    def name(self) -> str:
        return posixpath.basename(self.path)

    @property
    def is_root(self) -> bool:
        return self.path == ""

    @property
    def parent_path(self) -> str | None:
        if self.is_root:
            return None
        return parent_path(self.path)


Node = Union[Document, Folder]

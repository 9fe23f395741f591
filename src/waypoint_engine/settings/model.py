"""Settings record and its defaults."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from waypoint_engine.markers import MarkerKind


class FolderNoteType(Enum):
    INSIDE_FOLDER = "INSIDE_FOLDER"
    OUTSIDE_FOLDER = "OUTSIDE_FOLDER"


@dataclass(frozen=True)
class Settings:
    """Installation-wide configuration.

    Instances are immutable; updates go through SettingsStore, which swaps
    in a new value and persists it.
    """

    waypoint_flag: str = "%% Waypoint %%"
    landmark_flag: str = "%% Landmark %%"
    folder_note_type: FolderNoteType = FolderNoteType.INSIDE_FOLDER
    stop_scan_at_folder_notes: bool = False
    show_folder_notes: bool = False
    show_non_markdown_files: bool = False
    show_enclosing_note: bool = False
    use_wiki_links: bool = True
    use_front_matter_title: bool = False
    use_spaces: bool = False
    num_spaces: int = 2
    ignore_paths: tuple[str, ...] = field(default_factory=lambda: ("_attachments",))
    priority_key: str = "waypointPriority"
    debounce_seconds: float = 2.0

    def flag_for(self, kind: MarkerKind) -> str:
        if kind is MarkerKind.WAYPOINT:
            return self.waypoint_flag
        return self.landmark_flag

    def indent(self, level: int) -> str:
        unit = " " * self.num_spaces if self.use_spaces else "\t"
        return unit * level


DEFAULT_SETTINGS = Settings()

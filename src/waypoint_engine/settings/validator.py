"""Validate and coerce raw settings data into a Settings record.

Invalid trigger tokens revert to their defaults; the rejection is logged
and the rest of the record is kept.
"""

from __future__ import annotations

import logging
import re
from typing import Any

from waypoint_engine.errors import SettingsValidationError
from waypoint_engine.markers import SENTINELS
from waypoint_engine.settings.model import DEFAULT_SETTINGS, FolderNoteType, Settings

logger = logging.getLogger(__name__)

BOOL_FIELDS = {
    "stop_scan_at_folder_notes",
    "show_folder_notes",
    "show_non_markdown_files",
    "show_enclosing_note",
    "use_wiki_links",
    "use_front_matter_title",
    "use_spaces",
}

# Keys written by the original note-taking plugin's data file
CAMEL_ALIASES = {
    "waypointFlag": "waypoint_flag",
    "landmarkFlag": "landmark_flag",
    "folderNoteType": "folder_note_type",
    "stopScanAtFolderNotes": "stop_scan_at_folder_notes",
    "showFolderNotes": "show_folder_notes",
    "showNonMarkdownFiles": "show_non_markdown_files",
    "showEnclosingNote": "show_enclosing_note",
    "useWikiLinks": "use_wiki_links",
    "useFrontMatterTitle": "use_front_matter_title",
    "useSpaces": "use_spaces",
    "numSpaces": "num_spaces",
    "ignorePaths": "ignore_paths",
    "waypointPriorityKey": "priority_key",
}


def check_trigger_token(field: str, value: Any) -> str:
    """Check a trigger token's shape.

    Args:
        field: Settings field name, for the error message.
        value: Candidate token.

    Returns:
        The stripped token.

    Raises:
        SettingsValidationError: If the token is empty or a reserved sentinel.
    """
    if not isinstance(value, str) or not value.strip():
        raise SettingsValidationError(field, value, "must be a non-empty string")
    token = value.strip()
    if token in SENTINELS:
        raise SettingsValidationError(field, value, "is a reserved boundary sentinel")
    return token


def _as_bool(field: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.lower() in ("true", "false", "yes", "no", "1", "0"):
        return value.lower() in ("true", "yes", "1")
    raise SettingsValidationError(field, value, "must be a boolean")


def _as_folder_note_type(value: Any) -> FolderNoteType:
    if isinstance(value, FolderNoteType):
        return value
    try:
        return FolderNoteType(str(value).upper())
    except ValueError:
        raise SettingsValidationError(
            "folder_note_type", value,
            f"must be one of {', '.join(t.value for t in FolderNoteType)}",
        ) from None


def _as_ignore_paths(value: Any) -> tuple[str, ...]:
    if isinstance(value, str):
        value = [line for line in value.splitlines() if line.strip()]
    if not isinstance(value, (list, tuple)):
        raise SettingsValidationError("ignore_paths", value, "must be a list of patterns")
    patterns = []
    for pattern in value:
        try:
            re.compile(pattern)
        except (re.error, TypeError) as e:
            logger.warning("Dropping invalid ignore pattern %r: %s", pattern, e)
            continue
        patterns.append(pattern)
    return tuple(patterns)


def normalize_keys(data: dict[str, Any]) -> dict[str, Any]:
    """Map camelCase keys onto field names and drop unknown keys."""
    known = set(Settings.__dataclass_fields__)
    out: dict[str, Any] = {}
    for key, value in data.items():
        name = CAMEL_ALIASES.get(key, key)
        if name in known:
            out[name] = value
        else:
            logger.debug("Ignoring unknown settings key %r", key)
    return out


def _separate_tokens(values: dict[str, Any], base: Settings) -> None:
    """Keep the Waypoint and Landmark tokens distinct.

    On a collision the changed field gives way (Landmark first) and keeps
    its previous value. Defaults for both apply if that still collides.
    """
    token = values["waypoint_flag"]
    if token != values["landmark_flag"]:
        return
    name = "landmark_flag" if token != base.landmark_flag else "waypoint_flag"
    e = SettingsValidationError(name, token, "is already used by the other marker")
    logger.warning("%s; keeping previous value", e)
    values[name] = getattr(base, name)
    if values["waypoint_flag"] == values["landmark_flag"]:
        values["waypoint_flag"] = DEFAULT_SETTINGS.waypoint_flag
        values["landmark_flag"] = DEFAULT_SETTINGS.landmark_flag


def coerce_settings(data: dict[str, Any], base: Settings = DEFAULT_SETTINGS) -> Settings:
    """Merge raw values over ``base`` and return a validated Settings.

    A field that fails validation falls back to its default and is logged;
    it never blocks the rest of the record.
    """
    merged: dict[str, Any] = {
        name: getattr(base, name) for name in Settings.__dataclass_fields__
    }
    merged.update(normalize_keys(data))
    values: dict[str, Any] = {}

    for name in ("waypoint_flag", "landmark_flag"):
        try:
            values[name] = check_trigger_token(name, merged[name])
        except SettingsValidationError as e:
            logger.warning("%s; reverting to default", e)
            values[name] = getattr(DEFAULT_SETTINGS, name)
    _separate_tokens(values, base)

    for name in BOOL_FIELDS:
        try:
            values[name] = _as_bool(name, merged[name])
        except SettingsValidationError as e:
            logger.warning("%s; reverting to default", e)
            values[name] = getattr(DEFAULT_SETTINGS, name)

    try:
        values["folder_note_type"] = _as_folder_note_type(merged["folder_note_type"])
    except SettingsValidationError as e:
        logger.warning("%s; reverting to default", e)
        values["folder_note_type"] = DEFAULT_SETTINGS.folder_note_type

    try:
        values["num_spaces"] = max(1, int(merged["num_spaces"]))
    except (TypeError, ValueError):
        logger.warning("Invalid num_spaces %r; reverting to default", merged["num_spaces"])
        values["num_spaces"] = DEFAULT_SETTINGS.num_spaces

    try:
        values["debounce_seconds"] = max(0.0, float(merged["debounce_seconds"]))
    except (TypeError, ValueError):
        logger.warning(
            "Invalid debounce_seconds %r; reverting to default", merged["debounce_seconds"],
        )
        values["debounce_seconds"] = DEFAULT_SETTINGS.debounce_seconds

    try:
        values["ignore_paths"] = _as_ignore_paths(merged["ignore_paths"])
    except SettingsValidationError as e:
        logger.warning("%s; reverting to default", e)
        values["ignore_paths"] = DEFAULT_SETTINGS.ignore_paths

    key = merged["priority_key"]
    values["priority_key"] = key.strip() if isinstance(key, str) and key.strip() else (
        DEFAULT_SETTINGS.priority_key
    )

    return Settings(**values)

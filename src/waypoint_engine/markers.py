"""Marker kinds and their fixed boundary sentinels.

A Waypoint (primary) block stops an ancestor's tree at its folder. A
Landmark (secondary) block renders independently but lets an ancestor's
tree continue past it.
"""

from __future__ import annotations

from enum import Enum


class MarkerKind(Enum):
    WAYPOINT = "Waypoint"
    LANDMARK = "Landmark"

    @property
    def begin(self) -> str:
        return f"%% Begin {self.value} %%"

    @property
    def end(self) -> str:
        return f"%% End {self.value} %%"

    @property
    def callout(self) -> str:
        return f"[!{self.value.lower()}]"


SENTINELS = frozenset(
    s for kind in MarkerKind for s in (kind.begin, kind.end)
)

QUOTE_PREFIX = ">"


def strip_quote(line: str) -> tuple[str, bool]:
    """Trim a line and peel off any leading quote markers.

    Returns:
        (content, quoted) tuple.
    """
    trimmed = line.strip()
    quoted = False
    while trimmed.startswith(QUOTE_PREFIX):
        quoted = True
        trimmed = trimmed[len(QUOTE_PREFIX):].strip()
    return trimmed, quoted

"""Parse YAML front matter from markdown text."""

from __future__ import annotations

import logging

import yaml

logger = logging.getLogger(__name__)

DELIMITER = "---"


def parse_front_matter(text: str, source: str = "<text>") -> dict:
    """Return the leading ``---`` YAML block of ``text`` as a mapping.

    Text without front matter, or with front matter that is not a YAML
    mapping, yields an empty dict.
    """
    lines = text.split("\n")
    if not lines or lines[0].strip() != DELIMITER:
        return {}
    for i in range(1, len(lines)):
        if lines[i].strip() == DELIMITER:
            block = "\n".join(lines[1:i])
            break
    else:
        return {}

    try:
        data = yaml.safe_load(block)
    except yaml.YAMLError as e:
        logger.warning("Malformed front matter in %s: %s", source, e)
        return {}
    if not isinstance(data, dict):
        return {}
    return data

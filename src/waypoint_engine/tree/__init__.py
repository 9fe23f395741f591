"""Tree rendering: sibling ordering and the bullet-list renderer."""

from waypoint_engine.tree.ordering import natural_key, sort_children
from waypoint_engine.tree.renderer import TreeRenderer, encoded_uri

__all__ = ["TreeRenderer", "encoded_uri", "natural_key", "sort_children"]

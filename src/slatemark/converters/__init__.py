"""Slate raw document → MDAST converters."""

from .nodes import convert_node
from .slate_to_mdast import slate_to_mdast
from .tables import MARK_MAP, TYPE_MAP, SourceType
from .text_nodes import convert_text_node, create_text_nodes, wrap_text_with_marks

__all__ = [
    "MARK_MAP",
    "SourceType",
    "TYPE_MAP",
    "convert_node",
    "convert_text_node",
    "create_text_nodes",
    "slate_to_mdast",
    "wrap_text_with_marks",
]

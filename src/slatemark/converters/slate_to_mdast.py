"""Convert a Slate raw document to an MDAST tree.

Pure function: slate_to_mdast(raw, shortcode_plugins=...) -> mdast

The walk is post-order: children are converted first, then the node itself.
One Slate node can turn into several MDAST siblings (a text leaf with line
breaks or several ranges), so every step returns a list and each node's
converted children are flattened by one level before the node is converted.
"""

from __future__ import annotations

from typing import Iterable, List, Optional

from slatemark.converters.nodes import convert_node, is_text_node
from slatemark.converters.tables import ROOT_TYPE
from slatemark.converters.text_nodes import convert_text_node
from slatemark.models import ShortcodeRegistry, SourceNode, TargetNode
from slatemark.utils.logging import ContextKeys, get_converter_logger

logger = get_converter_logger()


def _flatten_one_level(groups: Iterable[List[TargetNode]]) -> List[TargetNode]:
    """Join per-child result lists into one list of siblings, in order."""
    return [node for group in groups for node in group]


def _transform(
    node: SourceNode,
    shortcode_plugins: Optional[ShortcodeRegistry],
) -> List[TargetNode]:
    if is_text_node(node):
        return convert_text_node(node)

    children = _flatten_one_level(
        _transform(child, shortcode_plugins) for child in node.get("nodes") or []
    )
    return [convert_node(node, children, shortcode_plugins)]


def _count_nodes(node: SourceNode) -> int:
    return 1 + sum(_count_nodes(child) for child in node.get("nodes") or [])


def slate_to_mdast(
    raw: SourceNode,
    *,
    shortcode_plugins: Optional[ShortcodeRegistry] = None,
) -> TargetNode:
    """Convert a Slate raw document to an MDAST root node.

    Args:
        raw: Slate raw document. Its own ``type`` is ignored; the document is
            always converted as the root.
        shortcode_plugins: Registry used to regenerate shortcode blocks.

    Returns:
        The MDAST ``root`` node.

    Raises:
        ConversionError: the document cannot be converted. Nothing is
            returned for a partially converted tree.
    """
    # Slate raw documents usually have no top-level type; never touch the caller's dict
    document: SourceNode = {**raw, "type": ROOT_TYPE}

    with logger.operation_context(
        "slate_to_mdast",
        **{ContextKeys.NODE_TYPE: raw.get("type")},
    ) as op_logger:
        op_logger.debug(
            "Converting Slate document",
            lazy_context=lambda: {ContextKeys.NODE_COUNT: _count_nodes(document)},
        )
        # The root is always a block, whatever else the raw document claims to be
        children = _flatten_one_level(
            _transform(child, shortcode_plugins) for child in document.get("nodes") or []
        )
        mdast = convert_node(document, children, shortcode_plugins)
    return mdast

"""Convert non-leaf Slate nodes to MDAST nodes.

Each converter receives the Slate node, its children already converted to
MDAST, and the shortcode registry. Dispatch goes through ``_CONVERTERS``,
which holds one entry per ``SourceType``; anything outside that set fails.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Mapping, Optional

from slatemark.converters.builder import u
from slatemark.converters.tables import HEADING_DEPTHS, LEAF_KIND, TEXT_NODE_TYPE, TYPE_MAP, SourceType
from slatemark.models import ShortcodeRegistry, SourceNode, TargetNode
from slatemark.utils.errors import (
    MissingRequiredChildError,
    PluginNotFoundError,
    UnrecognizedNodeTypeError,
)

NodeConverter = Callable[[SourceNode, List[TargetNode], Optional[ShortcodeRegistry]], TargetNode]


def is_text_node(node: SourceNode) -> bool:
    """Slate leaves are marked ``kind: text`` (``object: text`` in later releases)."""
    return node.get("kind") == LEAF_KIND or node.get("object") == LEAF_KIND


def _data(node: SourceNode) -> Mapping[str, Any]:
    return node.get("data") or {}


def _convert_container(
    node: SourceNode,
    children: List[TargetNode],
    shortcode_plugins: Optional[ShortcodeRegistry],
) -> TargetNode:
    """Types that only need a type and children."""
    return u(TYPE_MAP[node["type"]], content=children)


def _convert_shortcode(
    node: SourceNode,
    children: List[TargetNode],
    shortcode_plugins: Optional[ShortcodeRegistry],
) -> TargetNode:
    """Regenerate the shortcode markdown through its plugin.

    The ``shortcode`` data property names the registered plugin and
    ``shortcodeData`` holds what that plugin produced when the block was
    created. The regenerated text goes into an ``html`` node so the
    serializer does not escape it, and the node is always alone in its own
    paragraph.
    """
    data = node.get("data") or {}
    name = data.get("shortcode")
    plugin = shortcode_plugins.get(name) if shortcode_plugins is not None and name else None
    if plugin is None:
        raise PluginNotFoundError(name, available=_registered_names(shortcode_plugins))

    text = plugin.to_block(data.get("shortcodeData"))
    return u("paragraph", {"data": data}, [u(TEXT_NODE_TYPE, content=text)])


def _registered_names(shortcode_plugins: Optional[ShortcodeRegistry]) -> List[str]:
    names = getattr(shortcode_plugins, "names", None)
    return list(names()) if callable(names) else []


def _convert_heading(
    node: SourceNode,
    children: List[TargetNode],
    shortcode_plugins: Optional[ShortcodeRegistry],
) -> TargetNode:
    """Derive the depth from the type name, e.g. heading-two -> 2."""
    node_type = node["type"]
    depth = HEADING_DEPTHS[node_type.split("-", 1)[1]]
    return u(TYPE_MAP[node_type], {"depth": depth}, children)


def _code_text(node: SourceNode) -> str:
    nodes = node.get("nodes") or []
    child = nodes[0] if len(nodes) == 1 else None
    if child is None or not is_text_node(child):
        raise MissingRequiredChildError(
            "Code block must contain exactly one text node",
            node_type=node["type"],
            child_count=len(nodes),
        )

    if "text" in child:
        return child["text"]
    if "ranges" in child:
        # Marks have no meaning inside a code block
        return "".join(r.get("text", "") for r in child["ranges"])

    raise MissingRequiredChildError(
        "Code block text node has no text",
        node_type=node["type"],
        child_count=len(nodes),
    )


def _convert_code(
    node: SourceNode,
    children: List[TargetNode],
    shortcode_plugins: Optional[ShortcodeRegistry],
) -> TargetNode:
    """Code blocks keep their raw text as the node value, never as children."""
    lang = _data(node).get("lang")
    return u(TYPE_MAP[node["type"]], {"lang": lang}, _code_text(node))


def _convert_list(
    node: SourceNode,
    children: List[TargetNode],
    shortcode_plugins: Optional[ShortcodeRegistry],
) -> TargetNode:
    node_type = node["type"]
    props = {
        "ordered": node_type == SourceType.NUMBERED_LIST.value,
        "start": _data(node).get("start") or 1,
    }
    return u(TYPE_MAP[node_type], props, children)


def _convert_thematic_break(
    node: SourceNode,
    children: List[TargetNode],
    shortcode_plugins: Optional[ShortcodeRegistry],
) -> TargetNode:
    return u(TYPE_MAP[node["type"]])


def _convert_link(
    node: SourceNode,
    children: List[TargetNode],
    shortcode_plugins: Optional[ShortcodeRegistry],
) -> TargetNode:
    data = _data(node)
    props = {"url": data.get("url"), "title": data.get("title")}
    return u(TYPE_MAP[node["type"]], props, children)


def _convert_image(
    node: SourceNode,
    children: List[TargetNode],
    shortcode_plugins: Optional[ShortcodeRegistry],
) -> TargetNode:
    """MDAST images are void: url, title and alt text only."""
    data = _data(node)
    props = {"url": data.get("url"), "title": data.get("title"), "alt": data.get("alt")}
    return u(TYPE_MAP[node["type"]], props)


_CONVERTERS: Dict[SourceType, NodeConverter] = {
    SourceType.ROOT: _convert_container,
    SourceType.PARAGRAPH: _convert_container,
    SourceType.QUOTE: _convert_container,
    SourceType.LIST_ITEM: _convert_container,
    SourceType.TABLE: _convert_container,
    SourceType.TABLE_ROW: _convert_container,
    SourceType.TABLE_CELL: _convert_container,
    SourceType.SHORTCODE: _convert_shortcode,
    SourceType.HEADING_ONE: _convert_heading,
    SourceType.HEADING_TWO: _convert_heading,
    SourceType.HEADING_THREE: _convert_heading,
    SourceType.HEADING_FOUR: _convert_heading,
    SourceType.HEADING_FIVE: _convert_heading,
    SourceType.HEADING_SIX: _convert_heading,
    SourceType.CODE: _convert_code,
    SourceType.NUMBERED_LIST: _convert_list,
    SourceType.BULLETED_LIST: _convert_list,
    SourceType.THEMATIC_BREAK: _convert_thematic_break,
    SourceType.LINK: _convert_link,
    SourceType.IMAGE: _convert_image,
}


def parse_source_type(node: SourceNode) -> SourceType:
    node_type = node.get("type")
    try:
        return SourceType(node_type)
    except ValueError:
        raise UnrecognizedNodeTypeError(node_type) from None


def convert_node(
    node: SourceNode,
    children: List[TargetNode],
    shortcode_plugins: Optional[ShortcodeRegistry] = None,
) -> TargetNode:
    """Convert a single non-leaf Slate node, given its converted children.

    Raises:
        UnrecognizedNodeTypeError: ``node["type"]`` is not a supported type.
        PluginNotFoundError: a shortcode names an unregistered plugin.
        MissingRequiredChildError: a code block has no single text child.
    """
    source_type = parse_source_type(node)
    return _CONVERTERS[source_type](node, children, shortcode_plugins)

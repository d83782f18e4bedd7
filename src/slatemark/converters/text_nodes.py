"""Convert Slate text leaves to MDAST inline nodes.

A Slate text leaf either carries a bare ``text`` string or a list of
``ranges``, each with its own marks. MDAST expresses marks as nesting, so
every range becomes one or more nested nodes:

    {"kind": "text", "ranges": [{"text": "hi", "marks": [{"type": "bold"}]}]}

becomes

    [{"type": "strong", "children": [{"type": "html", "value": "hi"}]}]

Line breaks inside the text split the leaf into sibling nodes separated by
``break`` nodes, so a single leaf may produce any number of MDAST nodes.
"""

from __future__ import annotations

from typing import List, Sequence, Tuple

from slatemark.converters.builder import u
from slatemark.converters.tables import (
    BREAK_TYPE,
    INLINE_CODE_TYPE,
    MARK_MAP,
    TEXT_NODE_TYPE,
)
from slatemark.models import Mark, SourceNode, TargetNode, TextRange
from slatemark.utils.errors import UnmappedMarkTypeError


def create_text_nodes(text: str, node_type: str = TEXT_NODE_TYPE) -> List[TargetNode]:
    """Split ``text`` at newlines into leaves of ``node_type`` joined by breaks.

    ``"a\\nb"`` yields ``[leaf("a"), break, leaf("b")]``; there is never a
    trailing break.
    """
    nodes: List[TargetNode] = []
    for index, segment in enumerate(text.split("\n")):
        if index:
            nodes.append(u(BREAK_TYPE))
        nodes.append(u(node_type, content=segment))
    return nodes


def wrap_text_with_marks(text_node: TargetNode, mark_types: Sequence[str]) -> TargetNode:
    """Nest ``text_node`` inside one new node per entry of ``mark_types``.

    The first mark type wraps the text node directly and the last one ends up
    outermost. An empty ``mark_types`` returns ``text_node`` itself.
    """
    wrapped = text_node
    for mark_type in mark_types:
        wrapped = u(mark_type, content=[wrapped])
    return wrapped


def map_mark_types(marks: Sequence[Mark]) -> List[str]:
    """Translate Slate marks to MDAST node types, keeping their order."""
    mark_types: List[str] = []
    for mark in marks:
        mark_type = mark.get("type")
        if mark_type not in MARK_MAP:
            raise UnmappedMarkTypeError(mark_type)
        mark_types.append(MARK_MAP[mark_type])
    return mark_types


def process_code_mark(mark_types: Sequence[str]) -> Tuple[List[str], str]:
    """Pull inline code out of the wrapper list.

    MDAST inline code holds a single value and cannot contain other nodes,
    though it can sit inside ``strong`` or ``emphasis``. A code mark therefore
    changes the leaf type instead of adding a wrapper.
    """
    if INLINE_CODE_TYPE in mark_types:
        return [t for t in mark_types if t != INLINE_CODE_TYPE], INLINE_CODE_TYPE
    return list(mark_types), TEXT_NODE_TYPE


def convert_range(text_range: TextRange) -> List[TargetNode]:
    mark_types = map_mark_types(text_range.get("marks") or [])
    wrapper_types, leaf_type = process_code_mark(mark_types)

    # First mark outermost: feed the wrappers innermost-first
    wrapper_types.reverse()

    text_nodes = create_text_nodes(text_range.get("text", ""), leaf_type)
    return [wrap_text_with_marks(node, wrapper_types) for node in text_nodes]


def convert_text_node(node: SourceNode) -> List[TargetNode]:
    """Convert one Slate text leaf into a flat list of MDAST nodes."""
    ranges = node.get("ranges")
    if ranges is None:
        return create_text_nodes(node.get("text") or "")

    nodes: List[TargetNode] = []
    for text_range in ranges:
        nodes.extend(convert_range(text_range))
    return nodes

"""Small unist-style node factory used by the MDAST converters."""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Union

from slatemark.models import TargetNode


def u(
    node_type: str,
    props: Optional[Dict[str, Any]] = None,
    content: Union[List[TargetNode], str, None] = None,
) -> TargetNode:
    """Build an MDAST node.

    ``content`` becomes ``children`` when it is a list and ``value`` when it
    is a string. Properties whose value is None are left out so absent
    attributes stay absent in the serialized tree.
    """
    node: Dict[str, Any] = {"type": node_type}
    if props:
        node.update({key: value for key, value in props.items() if value is not None})
    if isinstance(content, list):
        node["children"] = content
    elif content is not None:
        node["value"] = content
    return node  # type: ignore[return-value]

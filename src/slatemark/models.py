"""
Typed shapes for the Slate raw document and the MDAST tree.

Both trees stay plain JSON-compatible dictionaries at runtime; these
declarations only document which keys the converters read and write.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Protocol, TypedDict

JsonDict = Dict[str, Any]


class Mark(TypedDict):
    """Inline decoration on a text range, e.g. ``{"type": "bold"}``."""

    type: str


class TextRange(TypedDict, total=False):
    """A run of text sharing one set of marks."""

    text: str
    marks: List[Mark]


class SourceNode(TypedDict, total=False):
    """A Slate raw node. Leaves have ``kind`` (or ``object``) set to ``"text"``."""

    kind: str
    object: str
    type: str
    nodes: List["SourceNode"]
    data: JsonDict
    text: str
    ranges: List[TextRange]


class TargetNode(TypedDict, total=False):
    """An MDAST node."""

    type: str
    children: List["TargetNode"]
    value: str
    depth: int
    ordered: bool
    start: int
    url: str
    title: str
    alt: str
    lang: str
    data: JsonDict


class ShortcodePlugin(Protocol):
    """Regenerates literal markdown shortcode text from stored plugin data."""

    def to_block(self, data: Any) -> str:
        ...


class ShortcodeRegistry(Protocol):
    """Looks up shortcode plugins by name."""

    def get(self, name: str) -> Optional[ShortcodePlugin]:
        ...

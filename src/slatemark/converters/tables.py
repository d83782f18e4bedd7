"""Lookup tables shared by the Slate → MDAST converters.

All tables are read-only views created at import time.
"""

from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import Mapping


class SourceType(str, Enum):
    """Every non-leaf Slate node type the converter accepts."""

    ROOT = "root"
    PARAGRAPH = "paragraph"
    HEADING_ONE = "heading-one"
    HEADING_TWO = "heading-two"
    HEADING_THREE = "heading-three"
    HEADING_FOUR = "heading-four"
    HEADING_FIVE = "heading-five"
    HEADING_SIX = "heading-six"
    QUOTE = "quote"
    CODE = "code"
    NUMBERED_LIST = "numbered-list"
    BULLETED_LIST = "bulleted-list"
    LIST_ITEM = "list-item"
    TABLE = "table"
    TABLE_ROW = "table-row"
    TABLE_CELL = "table-cell"
    THEMATIC_BREAK = "thematic-break"
    LINK = "link"
    IMAGE = "image"
    SHORTCODE = "shortcode"


# Slate node type -> MDAST node type
TYPE_MAP: Mapping[str, str] = MappingProxyType(
    {
        "root": "root",
        "paragraph": "paragraph",
        "heading-one": "heading",
        "heading-two": "heading",
        "heading-three": "heading",
        "heading-four": "heading",
        "heading-five": "heading",
        "heading-six": "heading",
        "quote": "blockquote",
        "code": "code",
        "numbered-list": "list",
        "bulleted-list": "list",
        "list-item": "listItem",
        "table": "table",
        "table-row": "tableRow",
        "table-cell": "tableCell",
        "thematic-break": "thematicBreak",
        "link": "link",
        "image": "image",
    }
)

# Slate mark type -> MDAST node type
MARK_MAP: Mapping[str, str] = MappingProxyType(
    {
        "bold": "strong",
        "italic": "emphasis",
        "strikethrough": "delete",
        "code": "inlineCode",
    }
)

# "heading-three" -> 3
HEADING_DEPTHS: Mapping[str, int] = MappingProxyType(
    {"one": 1, "two": 2, "three": 3, "four": 4, "five": 5, "six": 6}
)

ROOT_TYPE = "root"
LEAF_KIND = "text"

# Raw text is emitted as "html" so remark-stringify writes it verbatim
TEXT_NODE_TYPE = "html"
INLINE_CODE_TYPE = MARK_MAP["code"]
BREAK_TYPE = "break"

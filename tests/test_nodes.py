"""Tests for per-type Slate node → MDAST conversion."""

from __future__ import annotations

import pytest

from slatemark.converters.nodes import _CONVERTERS, convert_node, is_text_node
from slatemark.converters.tables import TYPE_MAP, SourceType
from slatemark.registry import PluginRegistry
from slatemark.utils.errors import (
    ErrorCategory,
    MissingRequiredChildError,
    PluginNotFoundError,
    UnrecognizedNodeTypeError,
)

CHILDREN = [{"type": "html", "value": "a"}, {"type": "html", "value": "b"}]


# ---------------------------------------------------------------------------
# Dispatch
# ---------------------------------------------------------------------------

def test_every_source_type_has_a_converter() -> None:
    assert set(_CONVERTERS) == set(SourceType)


def test_every_mapped_type_is_a_source_type() -> None:
    assert set(TYPE_MAP) <= {t.value for t in SourceType}


@pytest.mark.parametrize("node_type", ["video", "heading-seven", "", None])
def test_unknown_type_fails(node_type) -> None:
    with pytest.raises(UnrecognizedNodeTypeError) as exc_info:
        convert_node({"type": node_type}, [])
    assert exc_info.value.context["node_type"] == str(node_type)


def test_is_text_node_accepts_kind_and_object() -> None:
    assert is_text_node({"kind": "text"})
    assert is_text_node({"object": "text"})
    assert not is_text_node({"kind": "block", "type": "paragraph"})


# ---------------------------------------------------------------------------
# Containers
# ---------------------------------------------------------------------------

@pytest.mark.parametrize(
    "node_type",
    ["root", "paragraph", "quote", "list-item", "table", "table-row", "table-cell"],
)
def test_container_types_pass_children_through(node_type) -> None:
    node = convert_node({"type": node_type}, list(CHILDREN))
    assert node == {"type": TYPE_MAP[node_type], "children": CHILDREN}


def test_quote_maps_to_blockquote() -> None:
    assert convert_node({"type": "quote"}, [])["type"] == "blockquote"


# ---------------------------------------------------------------------------
# Headings
# ---------------------------------------------------------------------------

@pytest.mark.parametrize(
    "node_type, depth",
    [
        ("heading-one", 1),
        ("heading-two", 2),
        ("heading-three", 3),
        ("heading-four", 4),
        ("heading-five", 5),
        ("heading-six", 6),
    ],
)
def test_heading_depth(node_type, depth) -> None:
    node = convert_node({"type": node_type}, list(CHILDREN))
    assert node == {"type": "heading", "depth": depth, "children": CHILDREN}


# ---------------------------------------------------------------------------
# Code blocks
# ---------------------------------------------------------------------------

def test_code_with_lang() -> None:
    source = {
        "type": "code",
        "data": {"lang": "python"},
        "nodes": [{"kind": "text", "text": "print(1)"}],
    }
    assert convert_node(source, []) == {"type": "code", "lang": "python", "value": "print(1)"}


def test_code_without_lang_has_no_lang_key() -> None:
    source = {"type": "code", "nodes": [{"kind": "text", "text": "x = 1"}]}
    node = convert_node(source, [{"type": "html", "value": "x = 1"}])
    assert node == {"type": "code", "value": "x = 1"}
    assert "children" not in node


def test_code_joins_range_text() -> None:
    source = {
        "type": "code",
        "nodes": [
            {
                "kind": "text",
                "ranges": [{"text": "a = "}, {"text": "1", "marks": [{"type": "bold"}]}],
            }
        ],
    }
    assert convert_node(source, [])["value"] == "a = 1"


@pytest.mark.parametrize(
    "nodes",
    [
        [],
        [{"type": "paragraph", "nodes": []}],
        [{"kind": "text", "text": "a"}, {"kind": "text", "text": "b"}],
        [{"kind": "text"}],
    ],
)
def test_code_missing_text_child_fails(nodes) -> None:
    with pytest.raises(MissingRequiredChildError) as exc_info:
        convert_node({"type": "code", "nodes": nodes}, [])
    assert exc_info.value.context["child_count"] == len(nodes)


# ---------------------------------------------------------------------------
# Lists
# ---------------------------------------------------------------------------

def test_numbered_list_defaults_start() -> None:
    node = convert_node({"type": "numbered-list"}, list(CHILDREN))
    assert node == {"type": "list", "ordered": True, "start": 1, "children": CHILDREN}


def test_numbered_list_keeps_start() -> None:
    node = convert_node({"type": "numbered-list", "data": {"start": 4}}, [])
    assert node["start"] == 4


def test_zero_start_falls_back_to_one() -> None:
    node = convert_node({"type": "numbered-list", "data": {"start": 0}}, [])
    assert node["start"] == 1


def test_bulleted_list_is_unordered() -> None:
    node = convert_node({"type": "bulleted-list"}, [])
    assert node["ordered"] is False
    assert node["start"] == 1


# ---------------------------------------------------------------------------
# Thematic breaks, links and images
# ---------------------------------------------------------------------------

def test_thematic_break_has_no_children_or_value() -> None:
    node = convert_node({"type": "thematic-break"}, list(CHILDREN))
    assert node == {"type": "thematicBreak"}


def test_link_properties() -> None:
    node = convert_node(
        {"type": "link", "data": {"url": "https://example.com", "title": "Ex"}},
        list(CHILDREN),
    )
    assert node == {
        "type": "link",
        "url": "https://example.com",
        "title": "Ex",
        "children": CHILDREN,
    }


def test_link_without_data() -> None:
    assert convert_node({"type": "link"}, []) == {"type": "link", "children": []}


def test_image_is_void() -> None:
    node = convert_node(
        {"type": "image", "data": {"url": "/cat.png", "alt": "A cat"}},
        [{"type": "html", "value": ""}],
    )
    assert node == {"type": "image", "url": "/cat.png", "alt": "A cat"}


# ---------------------------------------------------------------------------
# Shortcodes
# ---------------------------------------------------------------------------

def test_shortcode_uses_plugin(registry, youtube_plugin) -> None:
    data = {"shortcode": "youtube", "shortcodeData": {"id": "abc"}}
    node = convert_node({"type": "shortcode", "data": data}, [], registry)

    assert node == {
        "type": "paragraph",
        "data": data,
        "children": [{"type": "html", "value": '{{< youtube id="abc" >}}'}],
    }
    assert youtube_plugin.calls == [{"id": "abc"}]


def test_shortcode_unknown_plugin(registry) -> None:
    data = {"shortcode": "vimeo", "shortcodeData": {}}
    with pytest.raises(PluginNotFoundError) as exc_info:
        convert_node({"type": "shortcode", "data": data}, [], registry)

    error = exc_info.value
    assert error.plugin_name == "vimeo"
    assert error.context["available_plugins"] == ["youtube"]
    assert error.category == ErrorCategory.CONFIGURATION


def test_shortcode_without_registry() -> None:
    with pytest.raises(PluginNotFoundError):
        convert_node({"type": "shortcode", "data": {"shortcode": "youtube"}}, [])


def test_shortcode_registry_can_be_any_get_object(youtube_plugin) -> None:
    plugins = {"youtube": youtube_plugin}
    node = convert_node(
        {"type": "shortcode", "data": {"shortcode": "youtube", "shortcodeData": {}}},
        [],
        plugins,
    )
    assert node["children"][0]["value"] == "{{< youtube  >}}"


def test_shortcode_registry_object_without_names() -> None:
    class Empty:
        def get(self, name):
            return None

    with pytest.raises(PluginNotFoundError) as exc_info:
        convert_node({"type": "shortcode", "data": {"shortcode": "x"}}, [], Empty())
    assert exc_info.value.context["available_plugins"] == []


def test_plugin_registry_names(registry) -> None:
    assert isinstance(registry, PluginRegistry)
    assert registry.names() == ["youtube"]

"""Unit tests for core/nodes.py"""

import pytest

from sitepub.core.models import StagedNode
from sitepub.core.nodes import alias_node_id, on_create_node, search_content


def _create(graph, item):
    node, _ = graph.create_node(StagedNode.model_validate(item))
    return node


def test_tags_field_for_tagged_types(graph):
    """Multi-vocabulary types get the ids of field_tags as fields.tags."""
    assert graph.get("page-1").fields["tags"] == ["tag-1"]
    assert graph.get("article-1").fields["tags"] == ["tag-1"]


def test_program_has_no_tags_field(graph):
    assert "tags" not in graph.get("program-1").fields


def test_page_types_get_alias_link_and_content(graph):
    page = graph.get("page-1")
    assert page.fields["alias"] == alias_node_id("d-10")
    assert page.fields["content"] == "<p>About the college.</p>"


def test_untyped_nodes_get_no_fields(graph):
    assert graph.get("tag-1").fields == {}
    assert graph.get("menu-1").fields == {}


def test_on_create_node_returns_written_fields(empty_graph):
    node = _create(empty_graph, {"id": "c-1", "type": "node__course", "drupal_id": "d-c", "title": "Chemistry"})
    assert on_create_node(empty_graph, node) == ["tags"]
    assert node.fields["tags"] == []


def test_markdown_body_rendered_locally(graph):
    assert graph.get("landing-1").fields["content"] == "<h1>Discover</h1>\n"


@pytest.mark.parametrize("data,expected", [
    ({"body": {"processed": "<p>x</p>"}}, "<p>x</p>"),
    ({"description": {"processed": "<p>term</p>"}}, "<p>term</p>"),
    ({"body": None, "description": {"processed": "<p>term</p>"}}, "<p>term</p>"),
    ({"body": {"value": "plain", "format": "plain_text"}}, "plain"),
    ({}, ""),
])
def test_search_content(data, expected):
    assert search_content(data) == expected


def test_alias_node_id_is_stable():
    assert alias_node_id("d-10") == alias_node_id("d-10")
    assert alias_node_id("d-10") != alias_node_id("d-11")

"""Node enrichment: derived tags, alias links, and search content"""

from typing import Any

from markdown_it import MarkdownIt

from sitepub.core.types import handler_for
from sitepub.core.utils.hashing import create_node_id
from sitepub.crud.graph import ContentGraph, link_ids
from sitepub.crud.models import Node


def alias_node_id(drupal_id: str) -> str:
    """Graph id of the PathAlias record owned by a node."""
    return create_node_id(f"alias-{drupal_id}")


def _make_parser(preset: str) -> MarkdownIt:
    return MarkdownIt(preset, options_update={"linkify": False})


def _processed(text_field: Any, parser_config: str) -> str:
    """Rendered HTML of a formatted text field; markdown values are rendered locally."""
    if not isinstance(text_field, dict):
        return ""
    if text_field.get("processed"):
        return text_field["processed"]
    if text_field.get("format") == "markdown" and text_field.get("value"):
        return _make_parser(parser_config).render(text_field["value"])
    return text_field.get("value") or ""


def search_content(data: dict[str, Any], parser_config: str = "commonmark") -> str:
    """Text indexed for search: the body, else a taxonomy description, else empty."""
    if data.get("body") is not None:
        return _processed(data["body"], parser_config)
    if data.get("description") is not None:
        return _processed(data["description"], parser_config)
    return ""


def on_create_node(graph: ContentGraph, node: Node, parser_config: str = "commonmark") -> list[str]:
    """Write derived fields for a freshly created node. Returns the field names set."""
    handler = handler_for(node.type)
    if handler is None:
        return []

    written = []
    if handler.tags:
        graph.create_node_field(node, "tags", link_ids((node.relationships or {}).get("field_tags")))
        written.append("tags")
    if handler.page is not None:
        graph.create_node_field(node, "alias", alias_node_id(node.drupal_id or node.id))
        graph.create_node_field(node, "content", search_content(node.data or {}, parser_config))
        written.extend(["alias", "content"])
    return written

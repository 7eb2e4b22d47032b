"""Export: page files with YAML frontmatter and the route manifest"""

import json
from pathlib import Path
from typing import Any, Optional

import yaml

from sitepub.core.events import event_summary, select_events
from sitepub.core.models import Event, PageRoute
from sitepub.core.pages import BuildError
from sitepub.crud.graph import ContentGraph
from sitepub.crud.models import Node


DEFAULT_EVENTS_TITLE = "Upcoming Events"


def page_path(output_dir: Path, route: PageRoute) -> Path:
    """output_dir/<alias>/index.html"""
    return output_dir / route.path.strip("/") / "index.html"


def page_tags(graph: ContentGraph, node: Node) -> list[str]:
    """Names of the taxonomy terms in field_tags."""
    return [t.title for t in graph.resolve(node, "field_tags") if t.title]


def page_events(graph: ContentGraph, node: Node, events: list[Event], limit: int = 4) -> Optional[dict[str, Any]]:
    """Events block for a node with an events widget; None when there is no widget or no match."""
    widget = graph.resolve_one(node, "field_events_widget")
    if widget is None:
        return None
    categories = [c.title for c in graph.resolve(widget, "field_event_category") if c.title]
    shown = select_events(events, categories, bool(widget.data.get("field_match_categories")), limit)
    if not shown:
        return None
    return {
        "title": widget.data.get("field_title") or DEFAULT_EVENTS_TITLE,
        "items": [event_summary(e) for e in shown],
    }


def build_page(route: PageRoute, node: Node, tags: list[str], events: Optional[dict] = None) -> str:
    """Return the node body with a YAML frontmatter block prepended."""
    fm: dict[str, Any] = {
        "title": node.title,
        "alias": route.path,
        "template": route.template,
        "context": route.context,
        "nid": node.internal_id,
        "tags": tags,
    }
    if events:
        fm["events"] = events
    header = yaml.dump(fm, default_flow_style=False, allow_unicode=True, sort_keys=False)
    body = (node.fields or {}).get("content") or ""
    return f"---\n{header}---\n\n{body.lstrip()}"


def write_page(
    graph: ContentGraph,
    route: PageRoute,
    node: Node,
    output_dir: Path,
    events: list[Event] = (),
    event_limit: int = 4,
    ) -> Path:
    """Write one page file and return its path.

    Raises BuildError when the route would place the file outside output_dir.
    """
    dest = page_path(output_dir, route)
    if not dest.resolve().is_relative_to(output_dir.resolve()):
        raise BuildError(f"Route {route.path} resolves outside {output_dir}")
    dest.parent.mkdir(parents=True, exist_ok=True)
    content = build_page(route, node, page_tags(graph, node), page_events(graph, node, list(events), event_limit))
    dest.write_text(content, encoding="utf-8")
    return dest


def write_routes(routes: list[PageRoute], path: Path) -> Path:
    """Write the JSON manifest of every emitted route."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        json.dumps([r.model_dump() for r in routes], indent=2, ensure_ascii=False),
        encoding="utf-8",
    )
    return path

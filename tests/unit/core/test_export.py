"""Unit tests for core/export.py"""

import json

import pytest
import yaml

from sitepub.config import Settings
from sitepub.core.events import EVENT_TYPE, event_from_node
from sitepub.core.export import build_page, page_events, page_path, page_tags, write_page, write_routes
from sitepub.core.models import PageRoute
from sitepub.core.pages import BuildError, create_pages


def _frontmatter(text):
    _, header, body = text.split("---\n", 2)
    return yaml.safe_load(header), body


def _events(graph):
    return [event_from_node(n) for n in graph.all_of_type(EVENT_TYPE)]


def test_page_path(tmp_path):
    route = PageRoute(path="/programs/biomedical-science", template="program-page", context={})
    assert page_path(tmp_path, route) == tmp_path / "programs" / "biomedical-science" / "index.html"


def test_page_tags_resolve_names(graph):
    assert page_tags(graph, graph.get("page-1")) == ["Research"]
    assert page_tags(graph, graph.get("program-1")) == []


def test_page_events_for_widget(graph):
    block = page_events(graph, graph.get("landing-1"), _events(graph))
    assert block["title"] == "Research Events"
    assert [e["title"] for e in block["items"]] == ["Open House"]


def test_page_events_without_widget(graph):
    assert page_events(graph, graph.get("page-1"), _events(graph)) is None


def test_build_page_frontmatter(graph):
    route = PageRoute(path="/about-us", template="basic-page", context={"id": "page-1"})
    fm, body = _frontmatter(build_page(route, graph.get("page-1"), ["Research"]))
    assert fm == {
        "title": "About Us",
        "alias": "/about-us",
        "template": "basic-page",
        "context": {"id": "page-1"},
        "nid": 10,
        "tags": ["Research"],
    }
    assert body.strip() == "<p>About the college.</p>"


def test_write_page(graph, tmp_path):
    build = create_pages(graph, Settings())
    route, node = next((r, n) for r, n in build.pages if n.id == "landing-1")
    dest = write_page(graph, route, node, tmp_path, _events(graph))
    assert dest == tmp_path / "topics" / "research-and-innovation" / "index.html"
    fm, body = _frontmatter(dest.read_text())
    assert fm["events"]["items"][0]["url"] == "https://events.example.edu/open-house"
    assert "<h1>Discover</h1>" in body


def test_write_page_refuses_paths_outside_output(graph, tmp_path):
    out = tmp_path / "public"
    route = PageRoute(path="/../../escaped", template="basic-page", context={"id": "page-1"})
    with pytest.raises(BuildError, match="outside"):
        write_page(graph, route, graph.get("page-1"), out)
    assert not (tmp_path.parent / "escaped").exists()


def test_write_routes(tmp_path):
    routes = [PageRoute(path="/about-us", template="basic-page", context={"id": "page-1"})]
    path = write_routes(routes, tmp_path / "routes.json")
    assert json.loads(path.read_text()) == [
        {"path": "/about-us", "template": "basic-page", "context": {"id": "page-1"}},
    ]

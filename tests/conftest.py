"""Root test configuration: shared content graph fixtures and artifact cleanup"""

import json
import shutil
from pathlib import Path

import pytest
from sqlalchemy import create_engine
from sqlmodel import Session, SQLModel

from sitepub.core.models import StagedNode
from sitepub.core.nodes import on_create_node
from sitepub.core.schema import type_defs
from sitepub.crud.graph import ContentGraph
import sitepub.crud.models  # noqa: F401


_PROJECT_ROOT = Path(__file__).parent.parent

_CLEANUP_FILES = ["sitepub.db", "test.db"]
_CLEANUP_DIRS = [".sitepub"]


SAMPLE_NODES = [
    {"id": "tag-1", "type": "taxonomy_term__tags", "drupal_id": "t-1", "drupal_internal__tid": 1, "name": "Research"},
    {"id": "acronym-1", "type": "taxonomy_term__programs", "drupal_id": "t-2", "drupal_internal__tid": 2, "name": "BIOM"},
    {"id": "ecat-1", "type": "taxonomy_term__event_category", "drupal_id": "t-3", "drupal_internal__tid": 3, "name": "Research"},
    {
        "id": "page-1", "type": "node__page", "drupal_id": "d-10", "drupal_internal__nid": 10,
        "title": "About Us", "body": {"processed": "<p>About the college.</p>", "format": "basic_html"},
        "relationships": {"field_tags": ["tag-1"]},
    },
    {
        "id": "article-1", "type": "node__article", "drupal_id": "d-11", "drupal_internal__nid": 11,
        "title": "Café Opening", "body": {"processed": "<p>Coffee.</p>"},
        "path": {"alias": "/news/2024/cafe"},
        "relationships": {"field_tags": [{"id": "tag-1"}]},
    },
    {
        "id": "program-1", "type": "node__program", "drupal_id": "d-12", "drupal_internal__nid": 12,
        "title": "Biomedical Science",
        "relationships": {"field_program_acronym": "acronym-1"},
    },
    {
        "id": "landing-1", "type": "node__landing_page", "drupal_id": "d-13", "drupal_internal__nid": 13,
        "title": "Research & Innovation", "body": {"value": "# Discover", "format": "markdown"},
        "relationships": {"field_events_widget": "widget-1"},
    },
    {
        "id": "widget-1", "type": "paragraph__events_widget", "drupal_id": "p-1",
        "field_title": "Research Events", "field_match_categories": False,
        "relationships": {"field_event_category": ["ecat-1"]},
    },
    {
        "id": "event-1", "type": "wp_event", "title": "Open House", "url": "https://events.example.edu/open-house",
        "startDate": "2099-05-01T10:00:00", "endDate": "2099-05-01T14:30:00", "isPast": False,
        "eventsCategories": ["Research"],
    },
    {
        "id": "event-2", "type": "wp_event", "title": "Past Lecture", "url": "https://events.example.edu/lecture",
        "startDate": "2001-01-01T09:00:00", "isPast": True, "eventsCategories": ["Research"],
    },
    {
        "id": "menu-1", "type": "menu_items", "title": "About", "menu_name": "main", "weight": 0,
        "url": "/node/10", "route": {"parameters": {"node": "10"}},
    },
    {
        "id": "menu-2", "type": "menu_items", "title": "Programs", "menu_name": "main", "weight": 0,
        "parent": "menu-1", "url": "/node/12", "route": {"parameters": {"node": "12"}},
    },
    {
        "id": "menu-3", "type": "menu_items", "title": "Library", "menu_name": "main", "weight": 1,
        "parent": "menu-1", "url": "https://library.example.edu",
    },
]


@pytest.fixture(scope="session", autouse=True)
def cleanup_artifacts():
    """Remove DB files and staging directories created during the test session."""
    yield
    for name in _CLEANUP_FILES:
        p = _PROJECT_ROOT / name
        if p.exists():
            p.unlink()
    for name in _CLEANUP_DIRS:
        p = _PROJECT_ROOT / name
        if p.exists():
            shutil.rmtree(p)


@pytest.fixture(name="engine")
def engine_fixture():
    """In-memory SQLite engine with all tables created."""
    engine = create_engine("sqlite://", connect_args={"check_same_thread": False})
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)


@pytest.fixture(name="session")
def session_fixture(engine):
    with Session(engine) as s:
        yield s


@pytest.fixture(name="empty_graph")
def empty_graph_fixture(session):
    graph = ContentGraph(session)
    graph.create_types(type_defs())
    return graph


@pytest.fixture(name="graph")
def graph_fixture(empty_graph):
    """Schema-checked graph loaded with SAMPLE_NODES and their derived fields."""
    for item in SAMPLE_NODES:
        node, _ = empty_graph.create_node(StagedNode.model_validate(item))
        on_create_node(empty_graph, node)
    return empty_graph


@pytest.fixture(name="staging_dir")
def staging_dir_fixture(tmp_path):
    """Staging directory holding SAMPLE_NODES as two JSON dumps."""
    staging = tmp_path / ".sitepub" / "staging"
    staging.mkdir(parents=True)
    terms = [n for n in SAMPLE_NODES if n["type"].startswith("taxonomy_term__")]
    rest = [n for n in SAMPLE_NODES if not n["type"].startswith("taxonomy_term__")]
    (staging / "10-taxonomy.json").write_text(json.dumps(terms))
    (staging / "20-content.json").write_text(json.dumps(rest))
    return staging

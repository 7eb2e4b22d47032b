"""Pipeline step functions: ingest staged CMS dumps and build the site"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path

from pydantic import ValidationError
from sqlalchemy.engine import Engine
from sqlmodel import Session

from sitepub.config import Settings
from sitepub.core.events import EVENT_TYPE, event_from_node
from sitepub.core.export import write_page, write_routes
from sitepub.core.menus import MENU_TYPE, build_menu_trees, menu_entry_from_node, write_sitemaps
from sitepub.core.models import StagedNode
from sitepub.core.nodes import on_create_node
from sitepub.core.pages import create_pages
from sitepub.core.schema import type_defs
from sitepub.crud.graph import ContentGraph


logger = logging.getLogger(__name__)


@dataclass
class BuildReport:
    pages:      list[tuple[str, Path]] = field(default_factory=list)    # (alias, page file)
    routes:     Path = None
    alias_file: Path = None
    sitemaps:   list[Path] = field(default_factory=list)
    collisions: dict[str, list[int]] = field(default_factory=dict)


def _read_staged(path: Path) -> list[StagedNode]:
    """Staged files hold one node object or a list of them."""
    raw = json.loads(path.read_text(encoding="utf-8"))
    items = raw if isinstance(raw, list) else [raw]
    return [StagedNode.model_validate(item) for item in items]


def run_ingest(
    engine: Engine,
    staging_dir: Path,
    parser_config: str = "commonmark",
    ) -> tuple[dict[str, int], list[tuple[str, str]]]:
    """Load staged node JSON into the content graph and derive node fields.

    Returns (counts, changes) where changes is a list of (status, node label) for
    created/updated nodes. Returns ({}, []) when staging_dir is empty.
    """
    files = sorted(staging_dir.glob("*.json")) if staging_dir.exists() else []
    if not files:
        return {}, []

    counts = {"created": 0, "updated": 0, "unchanged": 0}
    changes = []
    with Session(engine) as session:
        graph = ContentGraph(session)
        graph.create_types(type_defs())
        for f in files:
            try:
                staged_nodes = _read_staged(f)
                for staged in staged_nodes:
                    node, status = graph.create_node(staged)
                    if status != "unchanged":
                        on_create_node(graph, node, parser_config)
                        changes.append((status, f"{node.type}: {node.title or node.id}"))
                    counts[status] += 1
            except (ValueError, ValidationError) as e:
                raise RuntimeError(f"Failed to ingest {f}: {e}") from e
        session.commit()
    logger.info("Ingested %d file(s): %s", len(files), counts)
    return counts, changes


def run_build(engine: Engine, settings: Settings) -> BuildReport:
    """Emit pages, the route manifest, the alias table, and menu sitemaps.

    Raises BuildError before any file is written when a content query fails;
    the alias records are only committed once every output is on disk.
    """
    output_dir = Path(settings.output_dir)
    report = BuildReport()
    with Session(engine) as session:
        graph = ContentGraph(session)
        graph.create_types(type_defs())
        build = create_pages(graph, settings)

        events = [e for e in (event_from_node(n) for n in graph.all_of_type(EVENT_TYPE)) if e is not None]
        for route, node in build.pages:
            dest = write_page(graph, route, node, output_dir, events, settings.event_limit)
            report.pages.append((route.path, dest))

        report.routes = write_routes(build.routes, output_dir / settings.routes_file)
        report.alias_file = build.registry.dump(output_dir / settings.alias_file)

        trees = build_menu_trees([menu_entry_from_node(n) for n in graph.all_of_type(MENU_TYPE)])
        report.sitemaps = write_sitemaps(trees, build.registry, output_dir / settings.sitemap_dir)
        report.collisions = build.registry.collisions()
        session.commit()
    return report

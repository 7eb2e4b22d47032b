"""Page emission: alias every page-type node, record its alias, and schedule its route"""

import logging
from dataclasses import dataclass, field

from sitepub.config import Settings
from sitepub.core.aliases import AliasRegistry, InvalidAliasError, build_alias
from sitepub.core.models import PageRoute
from sitepub.core.nodes import alias_node_id
from sitepub.core.types import ContentType, PageSpec, page_types
from sitepub.core.utils.slug import slugify
from sitepub.crud.graph import ContentGraph
from sitepub.crud.models import Node


logger = logging.getLogger(__name__)

ALIAS_TYPE = "PathAlias"


class BuildError(RuntimeError):
    """The build cannot go on; nothing is emitted."""


@dataclass
class BuildResult:
    pages:    list[tuple[PageRoute, Node]] = field(default_factory=list)
    registry: AliasRegistry = field(default_factory=AliasRegistry)

    @property
    def routes(self) -> list[PageRoute]:
        return [route for route, _ in self.pages]


def _cms_alias(node: Node) -> str | None:
    path = (node.data or {}).get("path")
    return path.get("alias") if isinstance(path, dict) else None


def _alias_title(node: Node) -> str:
    """Title to slug; a title that slugs to nothing falls back to the internal id."""
    if slugify(node.title):
        return node.title
    fallback = str(node.internal_id if node.internal_id is not None else node.drupal_id or node.id)
    logger.warning("%s %s has no sluggable title %r; aliasing it as %s", node.type, node.id, node.title, fallback)
    return fallback


def _context_id(graph: ContentGraph, node: Node, spec: PageSpec) -> str:
    if spec.context_from is None:
        return node.id
    target = graph.resolve_one(node, spec.context_from)
    if target is None:
        raise BuildError(f"{node.type} '{node.title}' has no {spec.context_from} to build its page context from")
    return target.id


def create_node_alias(graph: ContentGraph, node: Node, alias: str) -> Node:
    """Register a PathAlias record for a node so queries can join against it."""
    alias_id = alias_node_id(node.drupal_id or node.id)
    return graph.create_record(alias_id, ALIAS_TYPE, {"key": alias_id, "value": alias})


def process_page(
    graph: ContentGraph,
    node: Node,
    spec: PageSpec,
    registry: AliasRegistry,
    use_cms_aliases: bool = False,
    ) -> PageRoute:
    """Alias one node, record the alias, and return its page route."""
    try:
        alias = build_alias(_alias_title(node), spec.prefix, _cms_alias(node) if use_cms_aliases else None)
    except InvalidAliasError as e:
        raise BuildError(f"Cannot alias {node.type} {node.id}: {e}") from e
    if node.internal_id is not None:
        registry.register(node.internal_id, alias)
    else:
        logger.warning("%s %s has no internal id; alias %s not added to the lookup table", node.type, node.id, alias)
    create_node_alias(graph, node, alias)
    return PageRoute(path=alias, template=spec.template, context={"id": _context_id(graph, node, spec)})


def create_pages(graph: ContentGraph, settings: Settings) -> BuildResult:
    """Query every page type, then emit one route per node.

    All queries run before anything is written: a single failed query raises
    BuildError and leaves the graph and the registry untouched.
    """
    pending: list[tuple[ContentType, PageSpec, list[Node]]] = []
    for content_type, spec in page_types():
        result = graph.query(content_type.value)
        if result.errors:
            raise BuildError(f"Loading pages for {content_type.value} failed: {'; '.join(result.errors)}")
        pending.append((content_type, spec, result.data))

    build = BuildResult(registry=AliasRegistry(strict=settings.strict_aliases))
    for content_type, spec, nodes in pending:
        for node in nodes:
            route = process_page(graph, node, spec, build.registry, settings.use_cms_aliases)
            build.pages.append((route, node))
        logger.info("Emitted %d %s page(s)", len(nodes), content_type.value)
    return build

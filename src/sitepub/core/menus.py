"""Menu trees: link menu items to their parents, resolve node targets to aliases, write sitemaps"""

import logging
from pathlib import Path
from typing import Any, Iterator, Optional

import yaml

from sitepub.core.aliases import AliasRegistry
from sitepub.core.models import MenuEntry
from sitepub.core.utils.slug import slugify
from sitepub.crud.models import Node


logger = logging.getLogger(__name__)

MENU_TYPE = "menu_items"


def _route_target(data: dict[str, Any]) -> Optional[int]:
    """Internal node id from route.parameters.node, if the item routes to a content node."""
    params = ((data.get("route") or {}).get("parameters") or {})
    try:
        return int(params["node"])
    except (KeyError, TypeError, ValueError):
        return None


def menu_entry_from_node(node: Node) -> MenuEntry:
    data = node.data or {}
    return MenuEntry(
        id=node.id,
        title=node.title or "",
        menu_name=data.get("menu_name") or "main",
        url=data.get("url"),
        target=_route_target(data),
        weight=int(data.get("weight") or 0),
        parent=node.parent,
    )


def build_menu_trees(entries: list[MenuEntry]) -> dict[str, list[MenuEntry]]:
    """Link entries to their parents and return the root entries of each menu.

    Siblings are ordered by weight, then title. An entry whose parent is missing
    is promoted to a root.
    """
    by_id = {e.id: e for e in entries}
    for e in entries:
        e.children = []
    roots: dict[str, list[MenuEntry]] = {}

    for e in sorted(entries, key=lambda e: (e.weight, e.title)):
        parent = by_id.get(e.parent) if e.parent else None
        if parent is not None:
            parent.children.append(e)
            continue
        if e.parent:
            logger.warning("Menu item '%s' points at missing parent %s; treating it as a root", e.title, e.parent)
        roots.setdefault(e.menu_name, []).append(e)
    return roots


def iter_depth_first(entry: MenuEntry) -> Iterator[MenuEntry]:
    """Yield an entry and then its descendants, in pre-order."""
    yield entry
    for child in entry.children:
        yield from iter_depth_first(child)


def resolve_url(entry: MenuEntry, registry: AliasRegistry) -> Optional[str]:
    """Alias of the routed content node, else the entry's raw url."""
    if entry.target is not None:
        alias = registry.lookup(entry.target)
        if alias is not None:
            return alias
        logger.debug("No alias for node %s in menu item '%s'; keeping %s", entry.target, entry.title, entry.url)
    return entry.url


def flatten_menu(entry: MenuEntry, registry: AliasRegistry) -> dict[str, Any]:
    """Convert an entry and its subtree to plain nested dicts."""
    out: dict[str, Any] = {"title": entry.title, "url": resolve_url(entry, registry)}
    if entry.children:
        out["children"] = [flatten_menu(child, registry) for child in entry.children]
    return out


def write_sitemaps(trees: dict[str, list[MenuEntry]], registry: AliasRegistry, out_dir: Path) -> list[Path]:
    """Write one sitemap-<menu>.yaml per menu. Returns the written paths.

    Menus whose names slug alike get a numeric suffix, in menu name order.
    """
    out_dir.mkdir(parents=True, exist_ok=True)
    written = []
    used: set[str] = set()
    for menu_name, roots in sorted(trees.items()):
        stem = slugify(menu_name) or "menu"
        name, n = stem, 1
        while name in used:
            n += 1
            name = f"{stem}-{n}"
        if name != stem:
            logger.warning("Menu '%s' shares the sitemap name %s; writing it as sitemap-%s.yaml", menu_name, stem, name)
        used.add(name)
        path = out_dir / f"sitemap-{name}.yaml"
        tree = [flatten_menu(root, registry) for root in roots]
        path.write_text(
            yaml.safe_dump(tree, default_flow_style=False, allow_unicode=True, sort_keys=False),
            encoding="utf-8",
        )
        written.append(path)
    return written

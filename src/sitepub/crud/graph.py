"""Content graph: node storage, derived fields, typed queries, and link resolution"""

import logging
from datetime import datetime
from typing import Any, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from sitepub.core.models import QueryResult, StagedNode
from sitepub.core.schema import SchemaError, node_types
from sitepub.core.utils.hashing import content_digest, create_node_id
from sitepub.crud.models import Node


logger = logging.getLogger(__name__)


def link_ids(value: Any) -> list[str]:
    """Normalize a relationship value (id, list of ids, or objects with an id) to a list of ids."""
    if value is None:
        return []
    if isinstance(value, (str, dict)):
        value = [value]
    ids = []
    for item in value:
        if isinstance(item, dict):
            item = item.get("id")
        if item:
            ids.append(str(item))
    return ids


class ContentGraph:
    """Typed node store over an open session.

    Until create_types() is called any type tag is accepted; afterwards only
    types declared as implementing Node may be stored or queried.
    """

    def __init__(self, session: Session):
        self.session = session
        self.types: Optional[set[str]] = None

    def create_types(self, sdl: str) -> set[str]:
        """Register the node types declared in an SDL block."""
        self.types = node_types(sdl)
        return self.types

    def _check_type(self, type_tag: str) -> None:
        if self.types is not None and type_tag not in self.types:
            raise SchemaError(f"Type '{type_tag}' is not declared in the schema")

    # --- writes ---

    def create_node(self, staged: StagedNode) -> tuple[Node, str]:
        """Insert or update a node from its staged form. Returns (node, status).

        Status is 'created', 'updated' or 'unchanged'; derived fields are kept
        when the node content did not change.
        """
        self._check_type(staged.type)
        node_id = staged.id or create_node_id(f"{staged.type}-{staged.drupal_id}")
        digest = content_digest(staged.model_dump())
        existing = self.session.get(Node, node_id)

        if existing is not None and existing.content_digest == digest:
            return existing, "unchanged"

        node = existing or Node(id=node_id, type=staged.type, content_digest=digest)
        node.type = staged.type
        node.drupal_id = staged.drupal_id
        node.internal_id = staged.internal_id
        node.title = staged.label
        node.parent = staged.parent
        node.data = staged.attributes
        node.relationships = dict(staged.relationships)
        node.fields = {}
        node.content_digest = digest
        node.updated_at = datetime.now()
        self.session.add(node)
        self.session.flush()
        return node, "updated" if existing is not None else "created"

    def create_record(self, node_id: str, type_tag: str, data: dict[str, Any]) -> Node:
        """Store a derived record (e.g. a PathAlias) whose id is chosen by the caller."""
        self._check_type(type_tag)
        node = self.session.get(Node, node_id) or Node(id=node_id, type=type_tag, content_digest="")
        node.type = type_tag
        node.data = dict(data)
        node.content_digest = content_digest(data)
        node.updated_at = datetime.now()
        self.session.add(node)
        self.session.flush()
        return node

    def create_node_field(self, node: Node, name: str, value: Any) -> None:
        """Attach a derived field to node.fields."""
        # reassign so the JSON column is flagged dirty
        node.fields = {**(node.fields or {}), name: value}
        self.session.add(node)

    # --- reads ---

    def get(self, node_id: Optional[str]) -> Optional[Node]:
        if not node_id:
            return None
        return self.session.get(Node, node_id)

    def all_of_type(self, type_tag: str) -> list[Node]:
        stmt = select(Node).where(Node.type == type_tag).order_by(Node.internal_id, Node.title, Node.id)
        return list(self.session.exec(stmt).all())

    def query(self, type_tag: str) -> QueryResult:
        """Fetch every node of a type, reporting failures as errors rather than raising."""
        if self.types is not None and type_tag not in self.types:
            return QueryResult(errors=[f"Cannot query unknown type '{type_tag}'"])
        try:
            return QueryResult(data=self.all_of_type(type_tag))
        except SQLAlchemyError as e:
            logger.error("Query for %s failed: %s", type_tag, e)
            return QueryResult(errors=[str(e)])

    def resolve(self, node: Node, relationship: str) -> list[Node]:
        """Follow a relationship link; ids that do not resolve are skipped."""
        targets = []
        for target_id in link_ids((node.relationships or {}).get(relationship)):
            target = self.get(target_id)
            if target is None:
                logger.debug("Dangling %s link from %s -> %s", relationship, node.id, target_id)
                continue
            targets.append(target)
        return targets

    def resolve_one(self, node: Node, relationship: str) -> Optional[Node]:
        targets = self.resolve(node, relationship)
        return targets[0] if targets else None

    def alias_for(self, node: Node) -> Optional[str]:
        """Return the path registered for a node through its fields.alias link, if any."""
        record = self.get((node.fields or {}).get("alias"))
        return record.data.get("value") if record is not None else None

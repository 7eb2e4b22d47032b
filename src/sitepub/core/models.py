"""Intermediate data models for ingest, page emission, and menus"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, model_validator


class StagedNode(BaseModel):
    """Public staging contract: one CMS entity as dumped by the sync job.

    Unknown attributes (body, description, path, route, startDate, ...) are kept
    and stored verbatim as node data.
    """
    model_config = ConfigDict(extra="allow")

    id: Optional[str] = None
    type: str
    drupal_id: Optional[str] = None
    drupal_internal__nid: Optional[int] = None
    drupal_internal__tid: Optional[int] = None
    title: Optional[str] = None
    name: Optional[str] = None      # taxonomy terms and media carry a name instead of a title
    parent: Optional[str] = None
    relationships: dict[str, Any] = {}

    @model_validator(mode="after")
    def require_identity(self) -> "StagedNode":
        # the graph id derives from one of these
        if not self.id and not self.drupal_id:
            raise ValueError(f"{self.type} '{self.label}' has neither an id nor a drupal_id")
        return self

    @property
    def internal_id(self) -> Optional[int]:
        if self.drupal_internal__nid is not None:
            return self.drupal_internal__nid
        return self.drupal_internal__tid

    @property
    def label(self) -> Optional[str]:
        return self.title if self.title is not None else self.name

    @property
    def attributes(self) -> dict[str, Any]:
        return dict(self.model_extra or {})


class PageRoute(BaseModel):
    """A page scheduled for rendering: where, with which template, and what to re-query."""
    path: str
    template: str
    context: dict[str, Any]


@dataclass
class QueryResult:
    """Result of a graph query; a non-empty errors list means the query failed."""
    data: list = field(default_factory=list)
    errors: list[str] = field(default_factory=list)


@dataclass
class MenuEntry:
    """A navigation entry linked into its menu tree."""
    id:        str
    title:     str
    menu_name: str
    url:       Optional[str] = None
    target:    Optional[int] = None     # internal id of the routed content node
    weight:    int = 0
    parent:    Optional[str] = None
    children:  list["MenuEntry"] = field(default_factory=list)


@dataclass
class Event:
    """An upcoming (or past) WordPress event."""
    id:         str
    title:      str
    url:        Optional[str]
    start:      datetime
    end:        Optional[datetime]
    is_past:    bool
    categories: list[str]

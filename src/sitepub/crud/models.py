"""Database table definitions for the content graph"""

from datetime import datetime
from typing import Any, Dict, Optional

from sqlalchemy import JSON, Column, DateTime, String, Text
from sqlmodel import Field, SQLModel


class Node(SQLModel, table=True):
    """A content graph node: a CMS entity, a menu item, an event, or a derived record"""
    __tablename__ = "nodes"
    id: str = Field(..., primary_key=True)
    type: str = Field(..., index=True, nullable=False, description="Graph type tag, e.g. node__page")
    drupal_id: Optional[str] = Field(default=None, index=True)
    internal_id: Optional[int] = Field(default=None, index=True, description="drupal_internal__nid / __tid")
    title: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))
    parent: Optional[str] = Field(default=None, index=True, description="Parent node id (menu items)")
    data: Dict[str, Any] = Field(default_factory=dict, sa_column=Column(JSON, nullable=False))
    relationships: Dict[str, Any] = Field(default_factory=dict, sa_column=Column(JSON, nullable=False))
    fields: Dict[str, Any] = Field(default_factory=dict, sa_column=Column(JSON, nullable=False))
    content_digest: str = Field(..., sa_column=Column(String(64), nullable=False))
    updated_at: datetime = Field(default_factory=datetime.now, sa_column=Column(DateTime(timezone=False), nullable=False))

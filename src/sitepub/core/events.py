"""Upcoming WordPress events matched against Drupal event categories"""

import logging
from datetime import datetime, timezone
from typing import Any, Optional

from sitepub.core.models import Event
from sitepub.crud.models import Node


logger = logging.getLogger(__name__)

EVENT_TYPE = "wp_event"


def _parse_date(value: Any) -> Optional[datetime]:
    """Parse an ISO date to a naive datetime; offset-aware values are converted to UTC first."""
    if value is None:
        return None
    if not isinstance(value, datetime):
        text = str(value).strip()
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        try:
            value = datetime.fromisoformat(text)
        except ValueError:
            return None
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def _category_names(value: Any) -> list[str]:
    """Category names from a list of strings or of {'name': ...} objects."""
    if isinstance(value, dict):
        value = value.get("nodes", [])
    names = []
    for item in value or []:
        name = item.get("name") if isinstance(item, dict) else item
        if name:
            names.append(str(name))
    return names


def event_from_node(node: Node) -> Optional[Event]:
    """Build an Event from a wp_event node; None when it has no usable start date."""
    data = node.data or {}
    start = _parse_date(data.get("startDate"))
    if start is None:
        logger.warning("Skipping event %s: unreadable startDate %r", node.id, data.get("startDate"))
        return None
    return Event(
        id=node.id,
        title=node.title or "",
        url=data.get("url"),
        start=start,
        end=_parse_date(data.get("endDate")),
        is_past=bool(data.get("isPast", False)),
        categories=_category_names(data.get("eventsCategories")),
    )


def select_events(
    events: list[Event],
    categories: list[str],
    match_all: bool = False,
    limit: int = 4,
    ) -> list[Event]:
    """Upcoming events for a set of categories, soonest first.

    With match_all an event's category list must equal the given list exactly;
    otherwise one shared category is enough. limit=0 returns every match.
    """
    upcoming = sorted((e for e in events if not e.is_past), key=lambda e: e.start)
    if match_all:
        matched = [e for e in upcoming if e.categories == categories]
    else:
        wanted = set(categories)
        matched = [e for e in upcoming if wanted.intersection(e.categories)]
    return matched[:limit] if limit else matched


def event_summary(event: Event) -> dict[str, Any]:
    """Serializable view of an event for page frontmatter."""
    return {
        "title": event.title,
        "url": event.url,
        "month": event.start.strftime("%b"),
        "day": event.start.day,
        "start": event.start.strftime("%I:%M %p").lstrip("0"),
        "end": event.end.strftime("%I:%M %p").lstrip("0") if event.end else None,
    }

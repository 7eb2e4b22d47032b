"""Content types that receive derived fields or pages, keyed by graph type tag"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class ContentType(str, Enum):
    """Graph type tags handled by node enrichment and page emission"""
    media_image    = "media__image"
    article        = "node__article"
    call_to_action = "node__call_to_action"
    career         = "node__career"
    course         = "node__course"
    employer       = "node__employer"
    landing_page   = "node__landing_page"
    page           = "node__page"
    program        = "node__program"
    testimonial    = "node__testimonial"


@dataclass(frozen=True)
class PageSpec:
    """How a content type becomes a page."""
    template: str
    prefix: str = ""
    context_from: Optional[str] = None  # relationship holding the context id; None = the node itself


@dataclass(frozen=True)
class TypeHandler:
    tags: bool = False                  # copy field_tags ids into fields.tags
    page: Optional[PageSpec] = None


HANDLERS: dict[ContentType, TypeHandler] = {
    ContentType.media_image:    TypeHandler(tags=True),
    ContentType.article:        TypeHandler(tags=True, page=PageSpec("article-page", prefix="news")),
    ContentType.call_to_action: TypeHandler(tags=True),
    ContentType.career:         TypeHandler(tags=True),
    ContentType.course:         TypeHandler(tags=True),
    ContentType.employer:       TypeHandler(tags=True),
    ContentType.landing_page:   TypeHandler(tags=True, page=PageSpec("landing-page", prefix="topics")),
    ContentType.page:           TypeHandler(tags=True, page=PageSpec("basic-page")),
    ContentType.program:        TypeHandler(page=PageSpec("program-page", prefix="programs",
                                                          context_from="field_program_acronym")),
    ContentType.testimonial:    TypeHandler(tags=True),
}


def handler_for(type_tag: str) -> Optional[TypeHandler]:
    """Return the handler record for a type tag, or None for types with no derived behaviour."""
    try:
        return HANDLERS[ContentType(type_tag)]
    except ValueError:
        return None


def page_types() -> list[tuple[ContentType, PageSpec]]:
    """Content types that emit pages, in declaration order."""
    return [(t, h.page) for t, h in HANDLERS.items() if h.page is not None]

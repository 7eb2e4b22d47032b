"""Content digests and deterministic node ids"""

import hashlib
import json
from typing import Any
from uuid import NAMESPACE_URL, uuid5


NODE_ID_NAMESPACE = uuid5(NAMESPACE_URL, "sitepub:node")


def sha256(content: str) -> str:
    """Return hex-encoded SHA-256 hash of content (64 chars, matches String(64) column)."""
    return hashlib.sha256(content.encode("utf-8")).hexdigest()


def content_digest(data: Any) -> str:
    """Digest of a JSON-serializable value; key order does not affect the result."""
    return sha256(json.dumps(data, sort_keys=True, default=str, ensure_ascii=False))


def create_node_id(seed: str) -> str:
    """Stable graph id for a seed string, e.g. 'alias-<drupal_id>'."""
    return str(uuid5(NODE_ID_NAMESPACE, seed))

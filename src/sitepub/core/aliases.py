"""Path alias construction and the per-build alias registry"""

import logging
from pathlib import Path
from typing import Optional

import yaml

from sitepub.core.utils.slug import slugify


logger = logging.getLogger(__name__)


class DuplicateAliasError(ValueError):
    """Raised when an identifier is registered twice in one build."""


class AliasCollisionError(ValueError):
    """Raised in strict mode when two identifiers resolve to the same path."""


class InvalidAliasError(ValueError):
    """Raised when an alias would not name a page directory under the site root."""


def build_alias(title: str, prefix: str = "", cms_alias: Optional[str] = None) -> str:
    """Return '/{prefix}/{slug}' for a title, or pass through an alias resolved by the CMS.

    >>> build_alias("Biomedical Science", "programs")
    '/programs/biomedical-science'
    >>> build_alias("Ignored", "news", cms_alias="news/2024/open-house/")
    '/news/2024/open-house'

    Raises InvalidAliasError when the title slugs to nothing or the CMS alias
    holds '.' or '..' segments.
    """
    if cms_alias and cms_alias.strip("/ "):
        alias = cms_alias.strip("/ ")
        if any(part in (".", "..") for part in alias.split("/")):
            raise InvalidAliasError(f"CMS alias {cms_alias!r} leaves the site root")
        return "/" + alias
    slug = slugify(title)
    if not slug:
        raise InvalidAliasError(f"Title {title!r} has no characters usable in a path")
    alias = "/" + slug
    if prefix:
        alias = "/" + slugify(prefix) + alias
    return alias


class AliasRegistry:
    """Identifier -> alias mapping accumulated during a single page-emission pass.

    Keys are CMS internal ids. A key may be registered once; paths shared by
    two keys are reported, or rejected when strict.
    """

    def __init__(self, strict: bool = False):
        self.strict = strict
        self._aliases: dict[int, str] = {}
        self._owners: dict[str, int] = {}

    def register(self, key: int, alias: str) -> None:
        if key in self._aliases:
            raise DuplicateAliasError(f"Alias already registered for {key}: {self._aliases[key]}")
        owner = self._owners.get(alias)
        if owner is not None:
            msg = f"Path {alias} is claimed by both {owner} and {key}"
            if self.strict:
                raise AliasCollisionError(msg)
            logger.warning(msg)
        else:
            self._owners[alias] = key
        self._aliases[key] = alias

    def lookup(self, key) -> Optional[str]:
        """Alias for a key; string keys (as found in menu routes) are accepted."""
        try:
            return self._aliases.get(int(key))
        except (TypeError, ValueError):
            return None

    def collisions(self) -> dict[str, list[int]]:
        """Paths claimed by more than one key."""
        by_path: dict[str, list[int]] = {}
        for key, alias in self._aliases.items():
            by_path.setdefault(alias, []).append(key)
        return {path: keys for path, keys in by_path.items() if len(keys) > 1}

    def as_dict(self) -> dict[int, str]:
        return dict(self._aliases)

    def __contains__(self, key) -> bool:
        return self.lookup(key) is not None

    def __len__(self) -> int:
        return len(self._aliases)

    def dump(self, path: Path) -> Path:
        """Write the whole mapping as YAML, replacing any previous file."""
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(
            yaml.safe_dump(self.as_dict(), default_flow_style=False, allow_unicode=True, sort_keys=True),
            encoding="utf-8",
        )
        return path

    @classmethod
    def load(cls, path: Path, strict: bool = False) -> "AliasRegistry":
        try:
            data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid alias file {path}: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"Invalid alias file {path}: expected a mapping, got {type(data).__name__}")
        registry = cls(strict=strict)
        for key, alias in data.items():
            registry.register(int(key), alias)
        return registry

"""Application configuration: settings schema and config.yaml loader"""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field


CONFIG_FILE = "config.yaml"


class Settings(BaseModel):
    app_name:     str = "sitepub"
    db_url:       str = "sqlite:///sitepub.db"
    staging_dir:  str = Field(default=".sitepub/staging", description="Directory of staged CMS node dumps (JSON)")
    output_dir:   str = Field(default="public",           description="Directory for emitted page files")
    alias_file:   str = Field(default="aliases.yaml",     description="Alias lookup table, relative to output_dir")
    sitemap_dir:  str = Field(default="sitemaps",         description="Per-menu sitemap directory, relative to output_dir")
    routes_file:  str = Field(default="routes.json",      description="Page route manifest, relative to output_dir")
    use_cms_aliases: bool = Field(default=False, description="Pass through CMS path aliases instead of slugging titles")
    strict_aliases:  bool = Field(default=False, description="Fail the build when two nodes resolve to the same path")
    event_limit:  int = Field(default=4, ge=0, description="Max upcoming events listed on a page; 0 = unlimited")
    parser_config: str = Field(default="commonmark", description="MarkdownIt preset for markdown-formatted bodies")
    log_level:    str = Field(default="WARNING", pattern="^(DEBUG|INFO|WARNING|ERROR)$")


def load_config(overrides: dict[str, Any] = None) -> Settings:
    """Load Settings from config.yaml, then SITEPUB_<FIELD> env vars, then non-None CLI overrides."""
    data: dict[str, Any] = {}
    if Path(CONFIG_FILE).exists():
        try:
            data = yaml.safe_load(Path(CONFIG_FILE).read_text()) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid {CONFIG_FILE}: {e}") from e

    for name in Settings.model_fields:
        if val := os.getenv(f"SITEPUB_{name.upper()}"):
            data[name] = val

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    return Settings(**data)

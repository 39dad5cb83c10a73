"""Application configuration: settings schema and config.yaml loader"""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field

from mdblog.logging import get_logger


CONFIG_FILE = "config.yaml"
ENV_PREFIX = "MDBLOG_"

logger = get_logger("config")


class Settings(BaseModel):
    app_name:       str = "mdblog"
    content_dir:    str = Field(default=".",         description="Root directory holding the content documents")
    output_dir:     str = Field(default="_site",     description="Directory for rendered HTML pages")
    layouts_dir:    str = Field(default="_layouts",  description="Template overrides, relative to content_dir")
    default_layout: str = Field(default="post",      description="Layout used when a document names none")
    parser_config:  str = Field(default="gfm-like",  description="MarkdownIt parser preset name")
    site_title:     str = Field(default="Blog",      description="Title shown on the index page")
    include_drafts: bool = Field(default=False,      description="Render and list documents with published: false")
    exclude:        list[str] = Field(default_factory=lambda: ["README.md", "_includes"], description="File or directory names never treated as content")


def _env_value(name: str, raw: str) -> Any:
    """Split comma-separated env values for list fields; pydantic coerces the rest."""
    if name == "exclude":
        return [part.strip() for part in raw.split(",") if part.strip()]
    return raw


def load_config(overrides: dict[str, Any] = None, config_file: Path = None) -> Settings:
    """Load Settings from config.yaml, then MDBLOG_<FIELD> env vars, then non-None CLI overrides."""
    path = Path(config_file or CONFIG_FILE)
    data: dict[str, Any] = {}
    if path.exists():
        try:
            data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid {path.name}: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"Invalid {path.name}: expected a mapping, got {type(data).__name__}")
        logger.debug("Loaded %d setting(s) from %s", len(data), path)

    for name in Settings.model_fields:
        if val := os.getenv(f"{ENV_PREFIX}{name.upper()}"):
            data[name] = _env_value(name, val)
            logger.debug("Setting %s from environment", name)

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    return Settings(**data)

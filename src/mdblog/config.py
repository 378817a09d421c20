"""Run configuration: settings schema and config.yaml loader"""

import os
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, Field


CONFIG_FILE = "config.yaml"


class Settings(BaseModel):
    site_url:         str = Field(default="https://example.com", description="Absolute site root, no trailing slash")
    site_title:       str = Field(default="My Blog",             description="Feed channel title")
    site_description: str = Field(default="Notes and writing",   description="Feed channel description")
    default_author:   str = Field(default="Site Author",         description="Author and publisher name for structured data")
    default_image:    str = Field(default="/favicon.ico",        description="Fallback preview image and publisher logo")

    posts_dir:     str = Field(default="posts",  description="Source directory for blog posts")
    pages_dir:     str = Field(default="pages",  description="Source directory for standalone pages")
    public_dir:    str = Field(default="public", description="Static assets copied verbatim into the build root")
    templates_dir: str = Field(default="templates", description="Site templates; searched before the bundled ones")
    build_dir:     str = Field(default="build",  description="Output directory, cleared on every build")

    db_url:     str = "sqlite:///posts.db"
    seo_db_url: str = "sqlite:///seo.db"

    parser_config: str  = Field(default="gfm-like", description="MarkdownIt parser preset name")
    unsafe_html:   bool = Field(default=False, description="Pass raw HTML through in posts")
    root_page:     str  = Field(default="index.md", description="Page file that embeds the latest posts")
    latest_limit:  int  = Field(default=10, ge=1, description="Number of posts on the root page")

    link_check_workers: int = Field(default=1, ge=1, description="Parallel link checks; 1 = sequential")
    link_check_timeout: Optional[float] = Field(default=None, gt=0, description="Seconds per link check; unset = no timeout")
    log_level: str = Field(default="INFO", pattern="^(DEBUG|INFO|WARNING|ERROR)$")

    @property
    def base_url(self) -> str:
        return self.site_url.rstrip("/")


def load_config(overrides: dict[str, Any] = None) -> Settings:
    """Load Settings from config.yaml, then MDBLOG_<FIELD> env vars, then non-None CLI overrides."""
    data: dict[str, Any] = {}
    if Path(CONFIG_FILE).exists():
        try:
            data = yaml.safe_load(Path(CONFIG_FILE).read_text()) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid {CONFIG_FILE}: {e}") from e

    for name in Settings.model_fields:
        if val := os.getenv(f"MDBLOG_{name.upper()}"):
            data[name] = val

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    return Settings(**data)

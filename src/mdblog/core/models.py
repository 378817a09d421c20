"""Intermediate data models for the split, transform and render steps"""

import datetime as dt
from dataclasses import dataclass
from typing import Any, NamedTuple

from jinja2 import Environment
from pydantic import BaseModel, field_validator
from sqlmodel import Session

from mdblog.config import Settings


class FrontMatter(BaseModel):
    """Canonical header fields of a source document; unknown keys are ignored."""
    template:    str = ""
    title:       str = ""
    description: str = ""
    slug:        str = ""
    author:      str = ""
    date:        str = ""           # YYYY-MM-DD
    tags:        list[str] = []     # order and duplicates preserved

    @field_validator("date", mode="before")
    @classmethod
    def _date_to_str(cls, value: Any) -> Any:
        # YAML loads unquoted 2023-05-15 as a date object
        if isinstance(value, (dt.date, dt.datetime)):
            return value.isoformat()
        return "" if value is None else value

    @field_validator("template", "title", "description", "slug", "author", mode="before")
    @classmethod
    def _scalar_to_str(cls, value: Any) -> Any:
        if value is None:
            return ""
        if isinstance(value, (int, float)):
            return str(value)
        return value

    @field_validator("tags", mode="before")
    @classmethod
    def _tags_to_list(cls, value: Any) -> Any:
        if value is None:
            return []
        if isinstance(value, list):
            return [str(t) if isinstance(t, (int, float)) else t for t in value]
        return value


@dataclass
class SourceDoc:
    """A source file split into its header and markdown body."""
    name:   str
    header: FrontMatter
    body:   str


@dataclass
class TransformedContent:
    """Rendered post HTML plus what was extracted from it."""
    html:     str
    headings: list[str]     # h2 text nodes in document order
    image:    str           # first <img> src, "" if none


class TocItem(NamedTuple):
    text: str
    id:   str


class TagCount(NamedTuple):
    tag:   str
    count: int


class FeedItem(BaseModel):
    title:       str
    link:        str
    description: str
    pub_date:    dt.date


@dataclass
class BuildContext:
    """Everything a build step needs; constructed once per run and passed down."""
    settings: Settings
    session:  Session
    env:      Environment

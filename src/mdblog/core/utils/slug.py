"""Slug generation for post paths and heading anchor IDs"""

import logging
import re
from datetime import datetime


logger = logging.getLogger(__name__)

DATE_FORMAT = '%Y-%m-%d'
DATE_RE = re.compile(r'\d{4}-\d{2}-\d{2}')


def slugify(text: str) -> str:
    """Lowercase, keep [a-z0-9], collapse space/hyphen/underscore runs to one hyphen."""
    text = re.sub(r'[^a-z0-9 _-]', '', text.lower())
    text = re.sub(r'[ _-]+', '-', text)
    return text.strip('-')


def make_unique_id(text: str, counts: dict[str, int]) -> str:
    """Return slugify(text), suffixed -1, -2, ... on repeats tracked in counts.

    Only repeats of the same base are counted, so a heading whose own slug
    equals an earlier suffixed id ("A", "A", "A-1") still collides.
    """
    base = slugify(text)
    seen = counts.get(base, 0)
    counts[base] = seen + 1
    return f"{base}-{seen}" if seen else base


def unique_ids(headings: list[str]) -> list[str]:
    """Anchor IDs for a post's headings, in order, with a fresh duplicate counter."""
    counts: dict[str, int] = {}
    return [make_unique_id(h, counts) for h in headings]


def generate_slug(date_str: str, slug_field: str) -> str:
    """Return 'YYYY/MM/DD/<slug_field>' for a YYYY-MM-DD date, or '' if it does not parse."""
    try:
        if not DATE_RE.fullmatch(date_str):
            raise ValueError(f"does not match {DATE_FORMAT}")
        parsed = datetime.strptime(date_str, DATE_FORMAT)
    except (TypeError, ValueError) as e:
        logger.warning(f"error parsing date {date_str!r}: {e}")
        return ''
    return f"{parsed.year:04d}/{parsed.month:02d}/{parsed.day:02d}/{slug_field}"

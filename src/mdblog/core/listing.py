"""Chronological post index and tag-frequency index"""

from collections import Counter
from pathlib import Path

from mdblog.core.models import BuildContext, TagCount
from mdblog.core.render import emit
from mdblog.crud.posts import list_posts, list_tag_sets


def count_tags(tag_sets: list[list[str]]) -> list[TagCount]:
    """Count every (post, tag) pair and sort by count, highest first.

    Order among tags with equal counts is unspecified.
    """
    counts = Counter(tag for tags in tag_sets for tag in tags)
    return sorted((TagCount(tag, n) for tag, n in counts.items()), key=lambda t: t.count, reverse=True)


def render_post_index(ctx: BuildContext) -> Path | None:
    """Write build/posts/index.html listing all posts newest first."""
    out = Path(ctx.settings.build_dir) / "posts" / "index.html"
    return emit(ctx, "posts.html", {"title": "Blog", "posts": list_posts(ctx.session)}, out)


def render_tag_index(ctx: BuildContext) -> Path | None:
    """Write build/tag/index.html with per-tag post counts."""
    out = Path(ctx.settings.build_dir) / "tag" / "index.html"
    tags = count_tags(list_tag_sets(ctx.session))
    return emit(ctx, "tags.html", {"title": "Tags", "tags": tags}, out)

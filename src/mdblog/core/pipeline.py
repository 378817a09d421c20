"""Build orchestration: ingest posts, render every output, write feed and assets"""

import logging
import shutil
from dataclasses import dataclass, field
from pathlib import Path

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from mdblog.config import Settings
from mdblog.core.feed import feed_item, write_feed
from mdblog.core.listing import render_post_index, render_tag_index
from mdblog.core.models import BuildContext, FeedItem, SourceDoc
from mdblog.core.pages import build_pages
from mdblog.core.parse import HeaderParseError, SourceDecodeError, discover_files, read_document
from mdblog.core.render import make_env, render_posts
from mdblog.core.transform import transform_post
from mdblog.core.utils.slug import generate_slug
from mdblog.crud.database import reset_store
from mdblog.crud.models import Post
from mdblog.crud.posts import insert_post


logger = logging.getLogger(__name__)


class BuildError(RuntimeError):
    """A setup failure that stops the whole build."""


@dataclass
class BuildResult:
    ingested: int = 0
    skipped:  int = 0
    pages:    list[Path] = field(default_factory=list)


def prepare_build_dir(build_dir: Path) -> None:
    """Remove and recreate the output root."""
    try:
        if build_dir.exists():
            shutil.rmtree(build_dir)
        build_dir.mkdir(parents=True)
    except OSError as e:
        raise BuildError(f"cannot recreate build directory {build_dir}: {e}") from e


def make_post(doc: SourceDoc, settings: Settings) -> Post | None:
    """Transform a split source into a Post, or None (logged) if it cannot be published."""
    fm = doc.header
    slug = generate_slug(fm.date, fm.slug)
    if not slug:
        logger.error(f"invalid publish date {fm.date!r} for file {doc.name}; skipping")
        return None
    try:
        content = transform_post(doc.body, settings)
    except Exception as e:
        logger.error(f"error converting markdown to HTML for file {doc.name}: {e}")
        return None
    return Post(
        title=fm.title,
        content=content.html,
        pub_date=fm.date,
        headings=content.headings,
        slug=slug,
        tags=list(fm.tags),
        description=fm.description,
        author=fm.author,
        template=fm.template,
        image=content.image,
    )


def ingest_posts(session: Session, settings: Settings) -> tuple[list[FeedItem], int]:
    """Load every post source into the store. Returns (feed items, skipped count)."""
    posts_dir = Path(settings.posts_dir)
    if not posts_dir.is_dir():
        logger.warning(f"posts directory {posts_dir} not found; no posts ingested")
        return [], 0

    items: list[FeedItem] = []
    skipped = 0
    for path in discover_files(posts_dir):
        try:
            doc = read_document(path)
        except (HeaderParseError, SourceDecodeError) as e:
            logger.error(f"error parsing front matter for file {path}: {e}")
            skipped += 1
            continue
        except OSError as e:
            logger.error(f"error reading file {path}: {e}")
            skipped += 1
            continue

        post = make_post(doc, settings)
        if post is None or insert_post(session, post, source=str(path)) is None:
            skipped += 1
            continue
        items.append(feed_item(post, settings))
        logger.info(f"Processed file {path.name}")
    return items, skipped


def copy_assets(public_dir: Path, build_dir: Path) -> None:
    if not public_dir.is_dir():
        logger.info(f"no static assets at {public_dir}")
        return
    try:
        shutil.copytree(public_dir, build_dir, dirs_exist_ok=True)
    except (OSError, shutil.Error) as e:
        raise BuildError(f"failed to copy {public_dir} to {build_dir}: {e}") from e
    logger.info(f"Successfully copied {public_dir} to {build_dir}")


def run_build(settings: Settings) -> BuildResult:
    """Full rebuild: fresh output dir and store, then every renderer in turn."""
    build_dir = Path(settings.build_dir)
    prepare_build_dir(build_dir)
    logger.info("Build directory has been successfully recreated.")

    try:
        engine = reset_store(settings.db_url)
    except (OSError, SQLAlchemyError) as e:
        raise BuildError(f"error initializing database: {e}") from e

    result = BuildResult()
    try:
        with Session(engine) as session:
            items, result.skipped = ingest_posts(session, settings)
            result.ingested = len(items)

            ctx = BuildContext(settings=settings, session=session, env=make_env(settings))
            result.pages.extend(render_posts(ctx))
            result.pages.extend(build_pages(ctx))
            for out in (render_post_index(ctx), render_tag_index(ctx)):
                if out is not None:
                    result.pages.append(out)

        try:
            result.pages.append(write_feed(items, settings))
        except OSError as e:
            raise BuildError(f"error writing RSS file: {e}") from e
        copy_assets(Path(settings.public_dir), build_dir)
    finally:
        engine.dispose()
    return result

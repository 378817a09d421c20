"""Standalone page builder; the root page additionally lists the latest posts"""

import logging
from pathlib import Path

from markupsafe import Markup
from sqlalchemy.exc import SQLAlchemyError

from mdblog.core.models import BuildContext
from mdblog.core.parse import HeaderParseError, SourceDecodeError, discover_files, read_document
from mdblog.core.render import emit
from mdblog.core.transform import transform_page
from mdblog.crud.posts import latest_posts


logger = logging.getLogger(__name__)

DEFAULT_PAGE_TEMPLATE = "page"


def page_output_path(build_dir: Path, source: Path, root_page: str) -> Path:
    """build/<stem>.html for the root page, build/<stem>/index.html for the rest."""
    if source.name == root_page:
        return build_dir / f"{source.stem}.html"
    return build_dir / source.stem / "index.html"


def build_pages(ctx: BuildContext) -> list[Path]:
    """Render every page under pages_dir. Per-file failures are logged and skipped."""
    settings = ctx.settings
    pages_dir = Path(settings.pages_dir)
    if not pages_dir.is_dir():
        logger.warning(f"pages directory {pages_dir} not found; no pages built")
        return []

    build_dir = Path(settings.build_dir)
    written = []
    for path in discover_files(pages_dir):
        try:
            doc = read_document(path)
        except (HeaderParseError, SourceDecodeError) as e:
            logger.error(f"error parsing front matter for file {path}: {e}")
            continue
        except OSError as e:
            logger.error(f"error reading file {path}: {e}")
            continue

        try:
            html = transform_page(doc.body, settings)
        except Exception as e:
            logger.error(f"error converting markdown for file {path}: {e}")
            continue

        latest = []
        if path.name == settings.root_page:
            try:
                latest = latest_posts(ctx.session, settings.latest_limit)
            except SQLAlchemyError as e:
                logger.error(f"error retrieving latest posts for file {path}: {e}")
                continue
        template = f"{doc.header.template or DEFAULT_PAGE_TEMPLATE}.html"
        out = emit(ctx, template, {
            "page": doc.header,
            "title": doc.header.title,
            "description": doc.header.description,
            "content": Markup(html),
            "latest": latest,
        }, page_output_path(build_dir, path, settings.root_page))
        if out is not None:
            logger.info(f"Processed page {path.name}, output {out}")
            written.append(out)
    return written

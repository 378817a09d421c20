"""CLI command implementations"""

import logging
from pathlib import Path
from typing import Annotated, Optional

import typer

from mdblog.config import Settings, load_config
from mdblog.core.parse import HeaderParseError, SourceDecodeError, read_document
from mdblog.core.pipeline import BuildError, run_build
from mdblog.core.render import build_toc
from mdblog.core.transform import transform_post
from mdblog.seo.audit import AuditError, audit_site


LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None) -> Settings:
    """Load config with standard CLI error handling, then configure logging."""
    try:
        settings = load_config(overrides=overrides)
    except ValueError as e:
        _fail(str(e))
    logging.basicConfig(level=settings.log_level, format=LOG_FORMAT, force=True)
    return settings


def build_cmd(
    posts: Annotated[Optional[str], typer.Option("--posts-dir", help="Post sources directory")] = None,
    pages: Annotated[Optional[str], typer.Option("--pages-dir", help="Page sources directory")] = None,
    public: Annotated[Optional[str], typer.Option("--public-dir", help="Static assets directory")] = None,
    out: Annotated[Optional[str], typer.Option("--build-dir", help="Output directory (cleared first)")] = None,
    site_url: Annotated[Optional[str], typer.Option("--site-url", help="Absolute site root URL")] = None,
    db_url: Annotated[Optional[str], typer.Option("--db-url", help="Post store database URL")] = None,
    unsafe: Annotated[Optional[bool], typer.Option("--unsafe-html/--safe-html", help="Pass raw HTML through in posts")] = None,
    ):
    """Rebuild the whole site: posts, pages, listings, feed and assets."""
    settings = _settings(overrides={
        "posts_dir": posts, "pages_dir": pages, "public_dir": public, "build_dir": out,
        "site_url": site_url, "db_url": db_url, "unsafe_html": unsafe,
    })
    try:
        result = run_build(settings)
    except BuildError as e:
        _fail("Build failed", e)
    typer.echo(
        f"Build complete - "
        f"{result.ingested} post(s) ingested, "
        f"{result.skipped} skipped, "
        f"{len(result.pages)} file(s) written to {settings.build_dir}/"
    )


def audit_cmd(
    out: Annotated[Optional[str], typer.Option("--build-dir", help="Rendered site to crawl")] = None,
    seo_db_url: Annotated[Optional[str], typer.Option("--seo-db-url", help="Audit store database URL")] = None,
    workers: Annotated[Optional[int], typer.Option("--workers", help="Parallel link checks")] = None,
    timeout: Annotated[Optional[float], typer.Option("--timeout", help="Seconds per link check")] = None,
    ):
    """Crawl the build output and record titles, descriptions and valid outbound links."""
    settings = _settings(overrides={
        "build_dir": out, "seo_db_url": seo_db_url,
        "link_check_workers": workers, "link_check_timeout": timeout,
    })
    try:
        written = audit_site(settings)
    except AuditError as e:
        _fail("Audit failed", e)
    typer.echo(f"Audit complete - {written} page(s) recorded in {settings.seo_db_url}")


def toc_cmd(
    path: Annotated[Path, typer.Argument(help="Post source file")],
    ):
    """Print the table of contents (anchor id and heading) of one post."""
    settings = _settings()
    try:
        doc = read_document(path)
    except (HeaderParseError, SourceDecodeError, OSError) as e:
        _fail(f"Cannot read {path}", e)
    content = transform_post(doc.body, settings)
    if not content.headings:
        typer.echo("No headings found.")
        return
    for item in build_toc(content.headings):
        typer.echo(f"  #{item.id}  {item.text}")

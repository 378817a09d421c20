"""Template environment and per-post page rendering"""

import logging
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, TemplateError, select_autoescape
from markupsafe import Markup

from mdblog.config import Settings
from mdblog.core.models import BuildContext, TocItem
from mdblog.core.structured_data import build_json_ld, json_ld_script
from mdblog.core.utils.slug import unique_ids
from mdblog.crud.posts import list_posts


logger = logging.getLogger(__name__)

DEFAULT_POST_TEMPLATE = "post"
BUNDLED_TEMPLATES = Path(__file__).resolve().parent.parent / "templates"


def make_env(settings: Settings) -> Environment:
    """Jinja environment searching the site's templates dir before the bundled templates."""
    return Environment(
        loader=FileSystemLoader([settings.templates_dir, BUNDLED_TEMPLATES]),
        autoescape=select_autoescape(["html", "xml"]),
        trim_blocks=True,
        lstrip_blocks=True,
    )


def render_template(env: Environment, name: str, data: dict[str, Any]) -> str:
    return env.get_template(name).render(**data)


def write_page(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


def emit(ctx: BuildContext, template: str, data: dict[str, Any], path: Path) -> Path | None:
    """Render template to path. Directory, write and template errors are logged and yield None."""
    try:
        html = render_template(ctx.env, template, {"site": ctx.settings, **data})
        return write_page(path, html)
    except TemplateError as e:
        logger.error(f"error executing template {template} for file {path}: {e}")
    except OSError as e:
        logger.error(f"error writing output file {path}: {e}")
    return None


def build_toc(headings: list[str]) -> list[TocItem]:
    """TOC entries whose ids match those add_heading_ids embeds for the same headings."""
    return [TocItem(text=h, id=i) for h, i in zip(headings, unique_ids(headings))]


def post_output_path(build_dir: Path, slug: str) -> Path:
    return build_dir / slug / "index.html"


def render_posts(ctx: BuildContext) -> list[Path]:
    """Write build/<slug>/index.html for every stored post. Returns the written paths."""
    build_dir = Path(ctx.settings.build_dir)
    written = []
    for post in list_posts(ctx.session):
        json_ld = build_json_ld(post, ctx.settings)
        logger.debug(f"JSON-LD for {post.title!r}: {json_ld}")
        template = f"{post.template or DEFAULT_POST_TEMPLATE}.html"
        out = emit(ctx, template, {
            "post": post,
            "title": post.title,
            "description": post.description,
            "content": Markup(post.content),
            "toc": build_toc(post.headings),
            "json_ld": json_ld_script(json_ld),
        }, post_output_path(build_dir, post.slug))
        if out is not None:
            written.append(out)
    return written

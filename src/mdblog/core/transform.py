"""Markdown rendering and HTML post-processing for posts and pages"""

import re
from urllib.parse import urlparse

from bs4 import BeautifulSoup, Comment, NavigableString
from markdown_it import MarkdownIt

from mdblog.config import Settings
from mdblog.core.models import TransformedContent
from mdblog.core.utils.slug import unique_ids


H2_OPEN_RE = re.compile(r'<h2>')
LAZY_MARKER = 'loading="lazy"'


def _make_parser(preset: str, allow_html: bool) -> MarkdownIt:
    """Build a MarkdownIt instance for the given preset name."""
    return MarkdownIt(preset, options_update={"linkify": False, "html": allow_html})


def render_markdown(body: str, allow_html: bool = False, preset: str = 'gfm-like') -> str:
    """Convert a markdown body to HTML. Raw HTML is passed through only when allow_html."""
    return _make_parser(preset, allow_html).render(body)


def extract_headings(html: str) -> list[str]:
    """Return the direct text-node children of every <h2>, in document order.

    Text inside nested inline elements (e.g. <em>) is not collected.
    """
    soup = BeautifulSoup(html, 'html.parser')
    headings = []
    for h2 in soup.find_all('h2'):
        for child in h2.children:
            if isinstance(child, NavigableString) and not isinstance(child, Comment):
                headings.append(str(child))
    return headings


def add_heading_ids(html: str, headings: list[str]) -> str:
    """Give the Nth bare <h2> the Nth unique id; surplus tags are left as-is."""
    ids = iter(unique_ids(headings))

    def _replace(match: re.Match) -> str:
        anchor = next(ids, None)
        return match.group(0) if anchor is None else f'<h2 id="{anchor}">'

    return H2_OPEN_RE.sub(_replace, html)


def add_lazy_loading(html: str) -> str:
    """Add loading="lazy" to every <img>. Applying it twice doubles the marker."""
    return html.replace('<img ', f'<img {LAZY_MARKER} ')


def extract_first_image(html: str) -> str:
    """Return the src of the first <img> that has one, else ''."""
    img = BeautifulSoup(html, 'html.parser').find('img', src=True)
    return img['src'] if img else ''


def preview_image(src: str, settings: Settings) -> str:
    """Absolute preview image URL, falling back to the site default image."""
    if not src:
        src = settings.default_image
    if urlparse(src).scheme:
        return src
    return f"{settings.base_url}/{src.lstrip('/')}"


def transform_post(body: str, settings: Settings) -> TransformedContent:
    """Render a post body and extract headings, anchor ids and the preview image."""
    html = render_markdown(body, allow_html=settings.unsafe_html, preset=settings.parser_config)
    headings = extract_headings(html)
    html = add_heading_ids(html, headings)
    html = add_lazy_loading(html)
    return TransformedContent(html=html, headings=headings, image=extract_first_image(html))


def transform_page(body: str, settings: Settings) -> str:
    """Render a standalone page body; pages are trusted, so raw HTML passes through."""
    html = render_markdown(body, allow_html=True, preset=settings.parser_config)
    return add_lazy_loading(html)

"""Unit tests for core/transform.py"""

import re

import pytest

from mdblog.core.render import build_toc
from mdblog.core.transform import (
    LAZY_MARKER,
    add_heading_ids,
    add_lazy_loading,
    extract_first_image,
    extract_headings,
    preview_image,
    render_markdown,
    transform_page,
    transform_post,
)


# --- headings ---

def test_extract_headings_only_h2():
    html = "<h1>H1</h1><h2>First</h2><p>text</p><h3>H3</h3><h2>Second</h2>"
    assert extract_headings(html) == ["First", "Second"]


def test_extract_headings_none():
    assert extract_headings("<h1>Title</h1><h3>Sub</h3>") == []
    assert extract_headings("") == []


def test_extract_headings_skips_nested_inline_text():
    """Only direct text nodes are collected; emphasised words are dropped."""
    assert extract_headings("<h2>Hello <em>big</em> world</h2>") == ["Hello ", " world"]


def test_extract_headings_unescapes_entities():
    assert extract_headings("<h2>Q&amp;A</h2>") == ["Q&A"]


def test_add_heading_ids():
    html = "<h2>Introduction</h2><p>text</p><h2>Conclusion</h2>"
    result = add_heading_ids(html, ["Introduction", "Conclusion"])
    assert '<h2 id="introduction">Introduction</h2>' in result
    assert '<h2 id="conclusion">Conclusion</h2>' in result


def test_add_heading_ids_duplicates():
    result = add_heading_ids("<h2>Section</h2><h2>Section</h2>", ["Section", "Section"])
    assert result == '<h2 id="section">Section</h2><h2 id="section-1">Section</h2>'


def test_add_heading_ids_surplus_tags_untouched():
    result = add_heading_ids("<h2>A</h2><h2></h2>", ["A"])
    assert result == '<h2 id="a">A</h2><h2></h2>'


def test_add_heading_ids_no_headings():
    html = "<p>Just a paragraph</p>"
    assert add_heading_ids(html, []) == html


def test_toc_matches_embedded_ids():
    """TOC ids equal the ids written into the HTML for the same heading list."""
    headings = ["Intro", "Setup", "Intro", "Setup & Run", "Intro"]
    html = "".join(f"<h2>{h}</h2><p>x</p>" for h in headings)
    embedded = re.findall(r'<h2 id="([^"]*)">', add_heading_ids(html, headings))
    assert [item.id for item in build_toc(headings)] == embedded
    assert embedded == ["intro", "setup", "intro-1", "setup-run", "intro-2"]


# --- images ---

def test_add_lazy_loading_single():
    html = '<img src="photo.jpg" alt="photo">'
    assert add_lazy_loading(html) == '<img loading="lazy" src="photo.jpg" alt="photo">'


@pytest.mark.parametrize("n", [0, 1, 3, 7])
def test_add_lazy_loading_counts(n):
    html = "<p>x</p>" + "".join(f'<img src="{i}.jpg">' for i in range(n))
    assert add_lazy_loading(html).count(LAZY_MARKER) == n


def test_add_lazy_loading_not_idempotent():
    """A second pass adds a second marker to every image."""
    html = '<img src="a.jpg"><img src="b.jpg">'
    assert add_lazy_loading(add_lazy_loading(html)).count(LAZY_MARKER) == 4


def test_extract_first_image():
    html = '<p>text</p><img src="/a.jpg"><img src="/b.jpg">'
    assert extract_first_image(html) == "/a.jpg"


def test_extract_first_image_none():
    assert extract_first_image("<p>No images here</p>") == ""


def test_extract_first_image_skips_img_without_src():
    assert extract_first_image('<img alt="x"><img src="/b.jpg">') == "/b.jpg"


def test_preview_image(settings):
    assert preview_image("/img/a.jpg", settings) == "https://blog.example.org/img/a.jpg"
    assert preview_image("https://cdn.example.net/a.jpg", settings) == "https://cdn.example.net/a.jpg"
    assert preview_image("", settings) == "https://blog.example.org/favicon.ico"


# --- markdown ---

def test_render_markdown_escapes_raw_html_by_default():
    html = render_markdown('<div class="x">hi</div>\n')
    assert '<div class="x">' not in html


def test_render_markdown_allows_raw_html():
    html = render_markdown('<div class="x">hi</div>\n', allow_html=True)
    assert '<div class="x">hi</div>' in html


def test_transform_post(sample_post, settings):
    body = sample_post.split("---\n", 2)[2]
    content = transform_post(body, settings)
    assert content.headings == ["Getting Started", "Summary", "Summary"]
    assert '<h2 id="getting-started">' in content.html
    assert '<h2 id="summary">' in content.html
    assert '<h2 id="summary-1">' in content.html
    assert content.html.count(LAZY_MARKER) == 1
    assert content.image == "/images/cover.jpg"


def test_transform_post_unsafe_html_opt_in(settings):
    settings.unsafe_html = True
    content = transform_post('<span class="raw">x</span>\n', settings)
    assert '<span class="raw">x</span>' in content.html


def test_transform_page_keeps_raw_html(settings):
    html = transform_page('<section id="hero">Hi</section>\n\n![a](/a.png)\n', settings)
    assert '<section id="hero">Hi</section>' in html
    assert html.count(LAZY_MARKER) == 1
